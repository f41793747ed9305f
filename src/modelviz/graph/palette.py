"""Deterministic color selection for clusters."""

import random
from collections.abc import Sequence

from ..config import DEFAULT_PALETTE


class ColorPalette:
    """Hands out colors from a fixed palette.

    Without a seed colors come round-robin; with a seed they are drawn from
    a private ``random.Random`` so the same seed gives the same sequence.
    """

    def __init__(self, colors: Sequence[str] | None = None, seed: int | None = None):
        self.colors = list(DEFAULT_PALETTE if colors is None else colors)
        if not self.colors:
            raise ValueError("palette must contain at least one color")
        self.seed = seed
        self.reset()

    def reset(self) -> None:
        self._index = 0
        self._random = random.Random(self.seed) if self.seed is not None else None

    def next_color(self) -> str:
        if self._random is not None:
            return self._random.choice(self.colors)
        color = self.colors[self._index % len(self.colors)]
        self._index += 1
        return color
