import pytest

from courtpairing.models import Player


class NoShuffle:
    """Leaves tie groups in candidate order."""

    def shuffle(self, x):
        pass


class ReverseShuffle:
    """Reverses every tie group; records what it was asked to shuffle."""

    def __init__(self):
        self.calls = []

    def shuffle(self, x):
        self.calls.append(list(x))
        x.reverse()


@pytest.fixture
def no_shuffle():
    return NoShuffle()


@pytest.fixture
def reverse_shuffle():
    return ReverseShuffle()


@pytest.fixture
def make_players():
    def _make(count, genders=None, prefix="p"):
        genders = genders or ["X"] * count
        return [
            Player(
                id=f"{prefix}{i + 1}",
                gender=genders[i],
                display_name=f"Player {i + 1}",
            )
            for i in range(count)
        ]

    return _make
