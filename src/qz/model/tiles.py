"""
Tiles & Pairing
===============
Word and meaning tiles, the symmetric pairing link between them, and the
duplicate-text groups used to decide whether a word is matched.

Classes:
    Rect: Integer tile rectangle in canvas coordinates.
    Tile: Base class holding text, rectangle and pairing link.
    Word: A tile with an assigned meaning; right-aligned in its column.
    Meaning: A draggable tile.
    PairingBand: Vertical tolerance used by the pairing test.
    DuplicateGroups: Meanings grouped by identical text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, TypeVar

from qz.model.errors import InvariantViolation

T = TypeVar("T", bound="Tile")


@dataclass
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


class Tile:
    def __init__(self, text: str) -> None:
        self.text = text
        self.rect = Rect()
        self._pair: Optional[Tile] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r}, y={self.rect.y})"

    @property
    def pair(self) -> Optional[Tile]:
        return self._pair

    @property
    def correct(self) -> bool:
        return self._pair is not None

    def set_x(self, margin: int) -> None:
        """Place the tile horizontally against the column margin."""
        self.rect.x = margin

    def set_size(self, width: int, height: int) -> None:
        self.rect.width = width
        self.rect.height = height

    def pair_with(self, other: Optional[Tile]) -> Optional[Tile]:
        """
        Link this tile and ``other`` symmetrically.

        Both tiles drop their previous partners first, so every tile has at
        most one partner. ``None`` just unpairs this tile.
        """
        if other is self:
            raise InvariantViolation(f"{self!r} cannot be paired with itself")

        if self._pair is not None:
            self._pair._pair = None
        self._pair = other

        if other is not None:
            if other._pair is not None:
                other._pair._pair = None
            other._pair = self

        return other


class Meaning(Tile):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        # Set once the user has dragged the tile; untouched tiles never match.
        self.moved = False

    def move_by(self, dx: int, dy: int) -> None:
        self.rect.x += dx
        self.rect.y += dy
        self.moved = True


class Word(Tile):
    def __init__(self, text: str, meaning: Meaning) -> None:
        super().__init__(text)
        self.meaning = meaning

    def set_x(self, margin: int) -> None:
        self.rect.x = margin - self.rect.width


@dataclass(frozen=True)
class PairingBand:
    """
    A meaning matches a word when its vertical centre lies strictly inside
    (word_y - above, word_y + below).
    """
    above: float
    below: float

    @classmethod
    def from_line_height(cls, line_height: int) -> PairingBand:
        # Biased upward: 25 px above and 15 px below on a 40 px line.
        return cls(above=line_height * 5 / 8, below=line_height * 3 / 8)

    def contains(self, word: Word, meaning: Meaning) -> bool:
        word_y = word.rect.center_y
        return word_y - self.above < meaning.rect.center_y < word_y + self.below


class DuplicateGroups:
    """Meanings keyed by text, in insertion order."""

    def __init__(self) -> None:
        self._groups: Dict[str, List[Meaning]] = {}

    def __len__(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def __contains__(self, meaning: Meaning) -> bool:
        return any(m is meaning for m in self._groups.get(meaning.text, ()))

    def add(self, meaning: Meaning) -> None:
        self._groups.setdefault(meaning.text, []).append(meaning)

    def remove(self, meaning: Meaning) -> None:
        group = self._groups.get(meaning.text)
        if not group:
            raise InvariantViolation(f"no duplicate group for {meaning.text!r}")

        for i, member in enumerate(group):
            if member is meaning:
                del group[i]
                break
        else:
            raise InvariantViolation(f"{meaning!r} is not registered in its duplicate group")

        if not group:
            del self._groups[meaning.text]

    def members(self, text: str) -> List[Meaning]:
        return list(self._groups.get(text, ()))

    def clear(self) -> None:
        self._groups.clear()

    def find_match(self, word: Word, band: PairingBand) -> Optional[Meaning]:
        """
        The meaning that currently satisfies ``word``, if any.

        Every member of the word's duplicate group is a candidate, the word's
        own meaning first. A candidate must have been moved, sit inside the
        band, and not already be claimed by a different word.
        """
        if word.meaning not in self:
            raise InvariantViolation(f"{word!r} refers to an unregistered meaning")

        group = self._groups[word.meaning.text]
        candidates = [word.meaning] + [m for m in group if m is not word.meaning]
        for meaning in candidates:
            if not meaning.moved:
                continue
            if meaning.pair is not None and meaning.pair is not word:
                continue
            if band.contains(word, meaning):
                return meaning
        return None


def find_container(tiles: Sequence[T], x: int, y: int, skip_correct: bool = False) -> Optional[T]:
    """First tile whose rectangle holds the point."""
    for tile in tiles:
        if tile.rect.contains(x, y) and not (skip_correct and tile.correct):
            return tile
    return None
