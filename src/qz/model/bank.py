"""
Word Bank (State Machine)
=========================
Owns the reserve of unused entries and the working set of word/meaning tiles
currently on the canvas.

Why is this file needed?
------------------------
1. State Management: Drawing groups from the reserve, growing and shrinking
   the working set, and retiring completed groups all happen here.
2. Scoring: ``check`` decides which words are correctly paired and keeps the
   ``correct`` / ``remaining`` counters the view displays.
3. Decoupling: It has no knowledge of Qt. Text measurement, randomness and
   change notification are injected.

States:
    Loaded: the reserve or the working set is non-empty.
    Finished: both are empty.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from qz.config import DEFAULT_GROUP_SIZE
from qz.model.entries import Entry
from qz.model.io import BankIO
from qz.model.layout import LayoutMode, TileLayout
from qz.model.errors import ParseError
from qz.model.tiles import DuplicateGroups, Meaning, Word

logger = logging.getLogger(__name__)


class WordBank:
    def __init__(
        self,
        layout: TileLayout,
        group_size: int = DEFAULT_GROUP_SIZE,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.layout = layout
        self.group_size = group_size
        self.on_change = on_change

        self.word_mode: LayoutMode = LayoutMode.ORDERED
        self.meaning_mode: LayoutMode = LayoutMode.SHUFFLED

        self.words: List[Word] = []
        self.meanings: List[Meaning] = []
        self.correct: int = 0
        self.remaining: int = 0

        self._reserve: List[Entry] = []
        self._duplicates = DuplicateGroups()

    # --- PROPERTIES ---

    @property
    def reserve_size(self) -> int:
        return len(self._reserve)

    @property
    def reserve(self) -> List[Entry]:
        return list(self._reserve)

    @property
    def finished(self) -> bool:
        return not self._reserve and not self.words

    @property
    def duplicates(self) -> DuplicateGroups:
        return self._duplicates

    # --- LOADING ---

    def fill(self, entries: Iterable[Entry]) -> None:
        """Replace the reserve, discard the working set and draw a fresh group."""
        new_reserve = list(entries)
        if not new_reserve:
            raise ParseError("word bank contains no word/meaning pairs")

        self._reserve = new_reserve
        self.clear()
        logger.info(f"Word bank filled with {len(new_reserve)} entries.")
        self.draw_group(self.group_size)

    def fill_from_file(self, filepath: str, strict: bool = False) -> None:
        # Parse everything before touching state so a bad file changes nothing.
        self.fill(BankIO.load_entries(filepath, strict=strict))

    def clear(self) -> None:
        for word in self.words:
            word.pair_with(None)
        self.words.clear()
        self.meanings.clear()
        self._duplicates.clear()

    # --- WORKING SET ---

    def draw_group(self, count: int) -> int:
        """
        Move up to ``count`` random entries from the reserve into the working set.

        Returns:
            How many entries were drawn; fewer than ``count`` once the reserve runs dry.
        """
        drawn = 0
        while drawn < count and self._reserve:
            index = int(self.layout.rng.integers(len(self._reserve)))
            self._add_entry(self._reserve.pop(index))
            drawn += 1

        logger.debug(f"Drew {drawn} entries, {len(self._reserve)} left in reserve.")
        if drawn:
            self.relayout()
        return drawn

    def add_one(self) -> bool:
        if not self._reserve:
            return False
        self.group_size = len(self.words) + 1
        self.draw_group(1)
        return True

    def remove_last(self) -> bool:
        """Return the most recently drawn word to the reserve."""
        if len(self.words) <= 1:
            return False

        word = self.words.pop()
        if not word.correct:
            self._reserve.append(Entry(word.text, word.meaning.text))

        word.pair_with(None)
        word.meaning.pair_with(None)
        self._duplicates.remove(word.meaning)
        self.meanings.remove(word.meaning)

        self.group_size = len(self.words)
        logger.debug(f"Removed {word!r}, group size now {self.group_size}.")
        self.relayout()
        return True

    def _add_entry(self, entry: Entry) -> None:
        meaning = Meaning(entry.meaning)
        word = Word(entry.word, meaning)
        self.layout.measure(meaning)
        self.layout.measure(word)

        self._duplicates.add(meaning)
        self.meanings.append(meaning)
        self.words.append(word)

    # --- LAYOUT ---

    def relayout(self) -> None:
        self.layout.arrange_columns(self.words, self.word_mode, self.meanings, self.meaning_mode)
        self.check()

    def align(self) -> None:
        """Re-measure and restack both columns without moving tiles between rows."""
        self.layout.arrange_columns(self.words, LayoutMode.ALIGNED, self.meanings, LayoutMode.ALIGNED)
        self.notify()

    # --- SCORING ---

    def check(self) -> int:
        """
        Recompute which words are correctly paired.

        Returns:
            The number of incorrect words in the working set.
        """
        # Drop last round's links so a meaning dragged away from one word
        # to another is free to be claimed again.
        for word in self.words:
            word.pair_with(None)

        band = self.layout.band
        wrong = 0
        for word in self.words:
            match = self._duplicates.find_match(word, band)
            word.pair_with(match)
            if match is None:
                wrong += 1

        self.correct = len(self.words) - wrong
        self.remaining = wrong + len(self._reserve)
        self.notify()
        return wrong

    def advance_group(self) -> bool:
        """Retire a fully solved group and draw the next one."""
        if self.check() != 0:
            return False

        logger.info(f"Group of {len(self.words)} completed, {len(self._reserve)} entries left.")
        self.clear()
        if self.draw_group(self.group_size) == 0:
            self.correct = 0
            self.remaining = 0
            self.layout.content_height = 0
            self.notify()
        return True

    # --- PERSISTENCE ---

    def entries_to_save(self) -> List[Entry]:
        """Reserve entries followed by every unsolved pair on the canvas."""
        self.check()
        unsolved = [Entry(word.text, word.meaning.text) for word in self.words if not word.correct]
        return list(self._reserve) + unsolved

    def dump(self, filepath: str) -> None:
        BankIO.save_entries(filepath, self.entries_to_save())

    def notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
