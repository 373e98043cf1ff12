import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from match import Match


class FixedRng:
    """Stands in for the random module with fixed draws."""

    def __init__(self, value=0.0, coin=0.75):
        self.value = value
        self.coin = coin

    def uniform(self, a, b):
        return max(a, min(b, self.value))

    def random(self):
        return self.coin


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def match():
    m = Match(960, 540, difficulty="hard", rng=random.Random(1234))
    m.set_difficulty("hard")
    return m
