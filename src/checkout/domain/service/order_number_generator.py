"""Human-facing order numbers.

Numbers are derived from wall-clock milliseconds (``ORD1718000000000``).
They are expected, not guaranteed, to be unique; the regenerated form
appends a random 0-999 suffix and is only used after a collision.
"""

from __future__ import annotations

import random
import time
from typing import Callable

ORDER_NUMBER_PREFIX = "ORD"


class OrderNumberGenerator:

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.Random()

    def generate(self) -> str:
        return f"{ORDER_NUMBER_PREFIX}{self._millis()}"

    def regenerate(self) -> str:
        return f"{ORDER_NUMBER_PREFIX}{self._millis()}-{self._rng.randint(0, 999)}"

    def _millis(self) -> int:
        return int(self._clock() * 1000)
