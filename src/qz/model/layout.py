"""
Tile Layout Engine
==================
Measures tiles through an injected TextMeasurer and stacks them into the word
and meaning columns.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, Sequence, Tuple

import numpy as np

from qz.config import DEFAULT_POINT_SIZE, LINE_HEIGHT_FACTOR, TOP_MARGIN, COLUMN_GAP
from qz.model.tiles import Tile, PairingBand

logger = logging.getLogger(__name__)


class LayoutMode(Enum):
    ORDERED = "ordered"
    SHUFFLED = "shuffled"
    ALIGNED = "aligned"


class TextMeasurer(Protocol):
    def measure(self, text: str, point_size: float) -> Tuple[int, int]:
        """Return the (width, height) in pixels of ``text`` drawn at ``point_size``."""
        ...


class TileLayout:
    def __init__(
        self,
        measurer: TextMeasurer,
        rng: np.random.Generator,
        point_size: float = DEFAULT_POINT_SIZE,
    ) -> None:
        self.measurer = measurer
        self.rng = rng
        self.point_size = point_size
        self.content_height: int = 0

    @property
    def line_height(self) -> int:
        return int(abs(self.point_size)) * LINE_HEIGHT_FACTOR

    @property
    def band(self) -> PairingBand:
        return PairingBand.from_line_height(self.line_height)

    def adjust_point_size(self, delta: float) -> None:
        self.point_size = max(1.0, self.point_size + delta)
        logger.debug(f"Point size {self.point_size}, line height {self.line_height}")

    def measure(self, tile: Tile) -> None:
        width, height = self.measurer.measure(tile.text, self.point_size)
        tile.set_size(int(width), int(height))

    def right_edge(self, tiles: Sequence[Tile]) -> int:
        """Widest tile in the column; 0 for an empty column."""
        return max((tile.rect.width for tile in tiles), default=0)

    def arrange(self, tiles: Sequence[Tile], mode: LayoutMode, margin: int) -> None:
        """
        Stack ``tiles`` top to bottom at the current line height.

        Only positions change; the order of the ``tiles`` list itself is kept
        so callers can still tell which tile was added last.
        """
        if not tiles:
            return

        if mode is LayoutMode.SHUFFLED:
            order = [tiles[i] for i in self.rng.permutation(len(tiles))]
        elif mode is LayoutMode.ALIGNED:
            for tile in tiles:
                self.measure(tile)
            order = sorted(tiles, key=lambda t: t.rect.y)
        else:
            order = sorted(tiles, key=lambda t: t.text)

        y = TOP_MARGIN
        for tile in order:
            tile.set_x(margin)
            tile.rect.y = y
            y += self.line_height

        last = order[-1]
        height = self.line_height * (len(order) - 1) + 2 * TOP_MARGIN + last.rect.height
        self.content_height = max(self.content_height, height)

    def arrange_columns(
        self,
        words: Sequence[Tile],
        word_mode: LayoutMode,
        meanings: Sequence[Tile],
        meaning_mode: LayoutMode,
    ) -> None:
        """Lay out both columns around the word column's right edge."""
        self.content_height = 0
        if word_mode is LayoutMode.ALIGNED:
            # Widths change with the font, so measure before taking the edge.
            for tile in words:
                self.measure(tile)
        edge = self.right_edge(words)
        self.arrange(words, word_mode, edge + COLUMN_GAP)
        self.arrange(meanings, meaning_mode, edge + 2 * COLUMN_GAP)
