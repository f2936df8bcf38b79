"""Tests for the calibration state machine."""

import unittest

from tourguide.filters import CalibrationController, Phase, SensorState


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_controller(**kwargs):
    clock = FakeClock()
    state = SensorState()
    ctrl = CalibrationController(state, clock=clock, **kwargs)
    return ctrl, state, clock


# ==================================================================
# SESSION LIFECYCLE
# ==================================================================

class TestCalibrationLifecycle(unittest.TestCase):

    def test_starts_idle(self):
        ctrl, state, _ = make_controller()
        self.assertEqual(state.phase, Phase.IDLE)
        self.assertFalse(ctrl.is_calibrating)
        self.assertFalse(ctrl.add_sample(10.0))

    def test_calibrate_enters_collecting(self):
        ctrl, state, _ = make_controller()
        ctrl.calibrate()
        self.assertEqual(state.phase, Phase.COLLECTING)
        self.assertTrue(ctrl.is_calibrating)
        self.assertNotEqual(ctrl.message, "")
        self.assertEqual(ctrl.sample_count, 0)
        self.assertEqual(ctrl.deadline, 10.0)

    def test_completes_after_exactly_n_samples(self):
        ctrl, state, _ = make_controller(num_samples=50)
        ctrl.calibrate()
        for i in range(49):
            self.assertTrue(ctrl.add_sample(3.0 * i))
        self.assertTrue(ctrl.is_calibrating)

        self.assertTrue(ctrl.add_sample(3.0 * 49))
        self.assertEqual(state.phase, Phase.STEADY_STATE)
        self.assertEqual(ctrl.sample_count, 50)
        self.assertTrue(state.calibrated_once)
        self.assertEqual(ctrl.message, "")
        # 0, 3, ..., 147 is symmetric about 73.5
        self.assertAlmostEqual(state.calibration_offset, 73.5, places=6)

    def test_count_never_exceeds_limit(self):
        ctrl, _, _ = make_controller(num_samples=5)
        ctrl.calibrate()
        for i in range(20):
            ctrl.add_sample(10.0 * i)
        self.assertEqual(ctrl.sample_count, 5)

    def test_timeout_completes_session(self):
        ctrl, state, clock = make_controller()
        ctrl.calibrate()
        ctrl.add_sample(10.0)
        ctrl.add_sample(20.0)

        clock.now = 9.99
        self.assertFalse(ctrl.poll())
        clock.now = 10.0
        self.assertTrue(ctrl.poll())
        self.assertEqual(state.phase, Phase.STEADY_STATE)
        self.assertAlmostEqual(state.calibration_offset, 15.0, places=9)
        self.assertIsNone(ctrl.deadline)

    def test_sample_after_deadline_completes_and_is_not_kept(self):
        ctrl, state, _ = make_controller()
        ctrl.calibrate(now=0.0)
        ctrl.add_sample(40.0, now=1.0)
        self.assertFalse(ctrl.add_sample(80.0, now=10.5))
        self.assertEqual(state.phase, Phase.STEADY_STATE)
        self.assertEqual(ctrl.sample_count, 1)
        self.assertAlmostEqual(state.calibration_offset, 40.0)

    def test_empty_session_gives_zero_offset(self):
        ctrl, state, _ = make_controller()
        state.calibration_offset = 33.0
        ctrl.calibrate()
        ctrl.finish_calibration()
        self.assertEqual(state.calibration_offset, 0.0)

    def test_recalibrate_mid_session_restarts(self):
        ctrl, state, clock = make_controller()
        ctrl.calibrate()
        ctrl.add_sample(10.0)
        clock.now = 8.0
        ctrl.calibrate()
        self.assertEqual(ctrl.sample_count, 0)
        self.assertIsNone(ctrl.last_angle)

        clock.now = 12.0
        self.assertFalse(ctrl.poll())
        self.assertTrue(ctrl.is_calibrating)
        clock.now = 18.0
        self.assertTrue(ctrl.poll())

    def test_recalibrate_after_completion(self):
        ctrl, state, _ = make_controller(num_samples=2)
        ctrl.calibrate()
        ctrl.add_sample(10.0)
        ctrl.add_sample(20.0)
        self.assertEqual(state.phase, Phase.STEADY_STATE)
        ctrl.calibrate()
        self.assertEqual(state.phase, Phase.COLLECTING)
        # previous offset survives until the new session completes
        self.assertAlmostEqual(state.calibration_offset, 15.0)

    def test_on_complete_receives_offset(self):
        results = []
        ctrl, _, _ = make_controller(num_samples=2, on_complete=results.append)
        ctrl.calibrate()
        ctrl.add_sample(100.0)
        ctrl.add_sample(110.0)
        self.assertEqual(len(results), 1)
        self.assertAlmostEqual(results[0], 105.0)


# ==================================================================
# SAMPLE GATING
# ==================================================================

class TestCalibrationGating(unittest.TestCase):

    def test_movement_threshold(self):
        """Two consecutive samples within 2 deg are never both kept."""
        ctrl, _, _ = make_controller()
        ctrl.calibrate()
        self.assertTrue(ctrl.add_sample(100.0))
        self.assertFalse(ctrl.add_sample(101.5))
        self.assertFalse(ctrl.add_sample(102.0))
        self.assertTrue(ctrl.add_sample(102.5))
        self.assertEqual(ctrl.samples, [100.0, 102.5])

    def test_movement_threshold_across_north(self):
        ctrl, _, _ = make_controller()
        ctrl.calibrate()
        ctrl.add_sample(359.0)
        self.assertFalse(ctrl.add_sample(1.0))
        self.assertTrue(ctrl.add_sample(3.0))

    def test_stationary_phone_yields_one_sample(self):
        ctrl, _, _ = make_controller()
        ctrl.calibrate()
        for _ in range(100):
            ctrl.add_sample(45.0)
        self.assertEqual(ctrl.sample_count, 1)

    def test_tilted_samples_are_dropped(self):
        ctrl, state, _ = make_controller()
        ctrl.calibrate()
        state.tilted = True
        self.assertFalse(ctrl.add_sample(10.0))
        state.tilted = False
        self.assertTrue(ctrl.add_sample(10.0))

    def test_samples_are_normalized(self):
        ctrl, _, _ = make_controller()
        ctrl.calibrate()
        ctrl.add_sample(370.0)
        self.assertEqual(ctrl.samples, [10.0])


# ==================================================================
# FINISH / IDEMPOTENCE
# ==================================================================

class TestFinishCalibration(unittest.TestCase):

    def test_finish_twice_keeps_offset(self):
        ctrl, state, _ = make_controller()
        ctrl.calibrate()
        ctrl.add_sample(20.0)
        ctrl.add_sample(30.0)
        ctrl.finish_calibration()
        first = state.calibration_offset

        ctrl.finish_calibration()
        self.assertEqual(state.calibration_offset, first)
        self.assertEqual(state.phase, Phase.STEADY_STATE)

    def test_finish_from_idle_is_noop(self):
        ctrl, state, _ = make_controller()
        ctrl.finish_calibration()
        self.assertEqual(state.phase, Phase.IDLE)
        self.assertFalse(state.calibrated_once)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            CalibrationController(num_samples=0)
        with self.assertRaises(ValueError):
            CalibrationController(timeout_s=0.0)
        with self.assertRaises(ValueError):
            CalibrationController(movement_threshold_deg=-1.0)


if __name__ == "__main__":
    unittest.main()
