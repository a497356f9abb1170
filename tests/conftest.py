"""
Pytest configuration for Qz.

Provides a deterministic text measurer and seeded randomness so layouts and
draws are reproducible without a QApplication.
"""
import os
from typing import List, Tuple

import numpy as np
import pytest

from qz.model.bank import WordBank
from qz.model.entries import Entry
from qz.model.errors import InvariantViolation
from qz.model.layout import TileLayout
from qz.controller.session import QuizSession


class FakeMeasurer:
    """8 px per character and 16 px tall at 12 pt, scaling with the point size."""

    def __init__(self) -> None:
        self.calls = 0

    def measure(self, text: str, point_size: float) -> Tuple[int, int]:
        self.calls += 1
        return len(text) * round(point_size * 2 / 3), round(point_size * 4 / 3)


def write_bank(path, lines: List[str]) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return str(path)


@pytest.fixture
def measurer() -> FakeMeasurer:
    return FakeMeasurer()


@pytest.fixture
def layout(measurer) -> TileLayout:
    return TileLayout(measurer=measurer, rng=np.random.default_rng(1234))


@pytest.fixture
def make_bank(layout):
    def _make(group_size: int = 16, on_change=None) -> WordBank:
        return WordBank(layout, group_size=group_size, on_change=on_change)
    return _make


@pytest.fixture
def bank(make_bank) -> WordBank:
    return make_bank()


@pytest.fixture
def animals() -> List[Entry]:
    return [Entry("cat", "feline"), Entry("dog", "canine")]


@pytest.fixture
def vocabulary() -> List[Entry]:
    return [Entry(f"word{i:02d}", f"meaning {i}") for i in range(10)]


@pytest.fixture
def session(make_bank, tmp_path) -> QuizSession:
    state_path = os.path.join(str(tmp_path), "state", "Qz.state")
    return QuizSession(make_bank(group_size=2), state_path=state_path)


def align_meaning_with(meaning, word) -> None:
    """Drag ``meaning`` onto the row of ``word`` the way a user would."""
    meaning.move_by(0, word.rect.y - meaning.rect.y)


def word_named(bank: WordBank, text: str):
    return next(w for w in bank.words if w.text == text)


def check_pair_symmetry(tiles) -> None:
    """Raise if any tile is paired with a partner that does not point back."""
    for tile in tiles:
        if tile.pair is not None and tile.pair.pair is not tile:
            raise InvariantViolation(f"{tile!r} is paired one-way with {tile.pair!r}")
