"""Deterministic pseudo-random generator shared by every player in a time window."""

import time
from dataclasses import dataclass, field

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

SEED_WINDOW_MS = 300_000


def current_millis() -> int:
    return int(time.time() * 1000)


def time_seed(now_ms: int | None = None, window_ms: int = SEED_WINDOW_MS) -> int:
    """
    Derive a seed from wall-clock time quantized to a fixed window.

    Every caller inside the same window gets the same seed, so everyone
    plays the same board.

    Args:
        now_ms (int | None): Current Unix time in milliseconds. Defaults to the clock.
        window_ms (int): Window length in milliseconds (5 minutes by default).

    Returns:
        int: floor(now_ms / window_ms).

    Examples:
        >>> time_seed(0)
        0
        >>> time_seed(299_999)
        0
        >>> time_seed(300_000)
        1
    """
    if window_ms <= 0:
        raise ValueError("window_ms must be positive")
    if now_ms is None:
        now_ms = current_millis()
    return now_ms // window_ms


def seconds_until_next_window(now_ms: int | None = None, window_ms: int = SEED_WINDOW_MS) -> int:
    """Return how many whole seconds remain before time_seed() changes."""
    if now_ms is None:
        now_ms = current_millis()
    return (window_ms - now_ms % window_ms + 999) // 1000


@dataclass
class SeededRandom:
    """
    Linear-congruential generator with a Math.random-like interface.

    seed' = (seed * 9301 + 49297) mod 233280, value = seed' / 233280.
    Output is a pure function of the starting seed and the number of draws.
    """

    seed: int = 0
    _state: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.set_seed(self.seed)

    def set_seed(self, value: int) -> None:
        """Reset the generator so the next draw starts a fresh stream."""
        if value < 0:
            raise ValueError("seed must be non-negative")
        self.seed = value
        self._state = value

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def randint(self, n: int) -> int:
        """Return a random integer in [0, n)."""
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        return int(self.random() * n)

    def choice(self, items):
        """Pick one element of a non-empty sequence."""
        return items[self.randint(len(items))]
