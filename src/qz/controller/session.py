"""
Quiz Session (Controller)
=========================
Translates abstract UI commands into word bank operations.

Why is this file needed?
------------------------
1. Commands: Menu items, keys and mouse gestures map onto the methods here,
   so the Qt layer stays thin glue.
2. Presentation flags: hide/show meanings, auto-check, correctness display
   and the "check, then check again to advance" step live here, not in the
   bank.
3. Persistence: It decides on startup which word list to load and on
   shutdown whether to keep or delete the session file.
"""
from __future__ import annotations

import logging
from typing import Optional

from qz.config import (
    AUTOSCROLL_STEP, AUTOSCROLL_BOTTOM_ZONE, AUTOSCROLL_TOP_ZONE
)
from qz.model.bank import WordBank
from qz.model.errors import BankIOError, ParseError
from qz.model.io import BankIO
from qz.model.layout import LayoutMode
from qz.model.tiles import Meaning, find_container

logger = logging.getLogger(__name__)


def autoscroll_step(pointer_y: int, viewport_height: int) -> int:
    """Scroll offset to apply while dragging with the pointer at ``pointer_y``."""
    if pointer_y + AUTOSCROLL_BOTTOM_ZONE > viewport_height:
        return AUTOSCROLL_STEP
    if pointer_y - AUTOSCROLL_TOP_ZONE < 0:
        return -AUTOSCROLL_STEP
    return 0


def _toggle(mode: LayoutMode) -> LayoutMode:
    return LayoutMode.SHUFFLED if mode is LayoutMode.ORDERED else LayoutMode.ORDERED


class QuizSession:
    def __init__(self, bank: WordBank, state_path: str) -> None:
        self.bank = bank
        self.state_path = state_path

        self.hide_meanings: bool = False
        self.auto_check: bool = False
        self.show_correct: bool = True
        self.keep_session: bool = True

        # Set after a check finds the group complete; the next check advances.
        self.proceed: bool = False
        self.moving: Optional[Meaning] = None

    @property
    def expose_correctness(self) -> bool:
        return self.show_correct or self.proceed

    # --- CHECKING ---

    def check(self) -> int:
        return self.bank.check()

    def advance(self) -> bool:
        self.proceed = False
        return self.bank.advance_group()

    def check_or_advance(self) -> None:
        """Check the group; on a second call after a clean check, move on."""
        self.drop()
        if self.proceed:
            self.bank.advance_group()
            self.proceed = False
        elif self.bank.check() == 0:
            self.proceed = True
        self.bank.notify()

    # --- GROUP SIZE ---

    def add_one(self) -> bool:
        return self.bank.add_one()

    def remove_last(self) -> bool:
        self.drop()
        return self.bank.remove_last()

    def change_group_size(self, delta: int) -> None:
        if delta < 0:
            self.remove_last()
        elif delta > 0:
            self.add_one()

    # --- LAYOUT ---

    def relayout(self) -> None:
        self.proceed = False
        self.bank.relayout()

    def shuffle(self) -> None:
        self.relayout()

    def toggle_order_words(self) -> None:
        self.bank.word_mode = _toggle(self.bank.word_mode)
        self.relayout()

    def toggle_order_meanings(self) -> None:
        self.bank.meaning_mode = _toggle(self.bank.meaning_mode)
        self.relayout()

    def adjust_font_size(self, delta: float) -> None:
        self.bank.layout.adjust_point_size(delta)
        self.bank.align()

    # --- FLAGS ---

    def toggle_hide_meanings(self) -> None:
        self.hide_meanings = not self.hide_meanings
        self.bank.notify()

    def toggle_auto_check(self) -> None:
        self.auto_check = not self.auto_check

    def toggle_show_correctness(self) -> None:
        self.show_correct = not self.show_correct
        self.bank.notify()

    def status_text(self) -> str:
        if self.show_correct:
            return f"{self.bank.correct}/{self.bank.remaining}"
        return str(self.bank.correct + self.bank.remaining)

    # --- DRAGGING ---

    def begin_drag(self, x: int, y: int) -> Optional[Meaning]:
        if self.hide_meanings:
            return None
        self.moving = find_container(self.bank.meanings, x, y, skip_correct=self.expose_correctness)
        return self.moving

    def drag_by(self, dx: int, dy: int) -> None:
        if self.moving is not None:
            self.moving.move_by(dx, dy)

    def drop(self) -> None:
        self.moving = None

    def end_drag(self) -> None:
        if self.moving is None:
            return
        self.drop()
        if self.auto_check:
            self.check_or_advance()

    # --- FILES ---

    def load_file(self, filepath: str, strict: bool = False) -> None:
        self.bank.fill_from_file(filepath, strict=strict)
        self.proceed = False

    def load_previous_session(self) -> None:
        self.load_file(self.state_path)

    def load_default_set(self) -> None:
        self.bank.fill(BankIO.load_default_entries())
        self.proceed = False

    def save_remaining(self, filepath: str) -> None:
        self.bank.dump(filepath)

    def save_session_now(self) -> None:
        self.bank.dump(self.state_path)

    # --- LIFECYCLE ---

    def start(self) -> None:
        """Resume the saved session if there is one, else load the embedded list."""
        try:
            self.load_previous_session()
            logger.info(f"Resumed session from: {self.state_path}")
            return
        except (BankIOError, ParseError) as e:
            logger.info(f"No usable saved session ({e}), loading embedded word list.")
        self.load_default_set()

    def quit_keep_session(self) -> None:
        self.keep_session = True

    def quit_discard_session(self) -> None:
        self.keep_session = False

    def shutdown(self) -> None:
        if not self.keep_session:
            logger.info("Session discarded on exit.")
            return
        self.bank.check()
        if self.bank.remaining == 0:
            BankIO.delete_session(self.state_path)
        else:
            self.save_session_now()
