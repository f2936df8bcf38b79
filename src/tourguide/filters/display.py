"""Display-only smoothing of the true heading for compass rendering."""

from ..config import DISPLAY_ALPHA, DISPLAY_TICK_S
from ..util.angles import normalize_angle, shortest_arc


class DisplaySmoother:
    """
    Fixed-tick exponential follower of the target heading.

    Purely cosmetic: the address search always uses the filtered heading,
    never ``angle``.
    """
    def __init__(self, alpha: float = DISPLAY_ALPHA, tick_s: float = DISPLAY_TICK_S, initial_deg: float = 0.0):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        if tick_s <= 0.0:
            raise ValueError(f"tick_s must be positive, got {tick_s}")
        self.alpha = alpha
        self.tick_s = tick_s
        self.angle = normalize_angle(initial_deg)
        self.target = self.angle
        self._carry_s = 0.0

    def set_target(self, angle_deg: float):
        self.target = normalize_angle(angle_deg)

    def tick(self) -> float:
        diff = shortest_arc(self.target, self.angle)
        self.angle = normalize_angle(self.angle + diff * self.alpha)
        return self.angle

    def advance(self, elapsed_s: float) -> int:
        """Run as many whole ticks as fit in the elapsed time (remainder carried over)."""
        if elapsed_s < 0.0:
            raise ValueError(f"elapsed_s must be >= 0, got {elapsed_s}")
        self._carry_s += elapsed_s
        # small epsilon so 0.1 s is two ticks, not one plus float error
        n = int((self._carry_s + 1e-9) // self.tick_s)
        self._carry_s = max(self._carry_s - n * self.tick_s, 0.0)
        for _ in range(n):
            self.tick()
        return n
