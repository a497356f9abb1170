"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the score label and the
tile canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects menu actions (File -> Load, Settings -> Relayout, ...)
   to the QuizSession commands and reports file errors to the user.
3. Shutdown: It persists or discards the session when the window closes.
"""
import logging
from typing import Callable

from PySide6.QtWidgets import QMainWindow, QFileDialog, QMessageBox, QLabel, QMenu
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence

from qz.config import VISIBLE_APP_NAME, BANK_FILE_FILTER
from qz.controller.session import QuizSession
from qz.model.errors import BankIOError, ParseError
from qz.view.canvas import CanvasView, QtTextMeasurer

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, session: QuizSession, measurer: QtTextMeasurer) -> None:
        super().__init__()
        self.session: QuizSession = session
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(500, 625)

        # --- CANVAS ---
        self.view = CanvasView(session, measurer, self)
        self.canvas = self.view.canvas
        self.setCentralWidget(self.view)
        self.canvas.changed.connect(self.refresh)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SCORE ---
        self.count_label = QLabel()
        self.count_label.setContentsMargins(0, 0, 8, 0)
        self.menuBar().setCornerWidget(self.count_label, Qt.TopRightCorner)

        # Model -> View notifications
        self.session.bank.on_change = self.refresh

    def _create_actions(self) -> None:
        s = self.session

        # File Actions
        self.act_load = self._action("Load Words...", self.on_load_file, "Ctrl+O")
        self.act_load_session = self._action(
            "Load Previous Session", lambda: self._file_command(s.load_previous_session))
        self.act_load_default = self._action(
            "Load Embedded Words", lambda: self._file_command(s.load_default_set))
        self.act_save = self._action("Save Remaining...", self.on_save_file, "Ctrl+S")
        self.act_save_session = self._action(
            "Save Session Now", lambda: self._file_command(s.save_session_now))
        self.act_quit_keep = self._action("Quit, Saving Session", self.on_quit_keep, "Ctrl+Q")
        self.act_quit_discard = self._action("Quit, Discarding Session", self.on_quit_discard, "Ctrl+Shift+Q")

        # Settings Actions
        self.act_fewer = self._action("Fewer Words", s.remove_last)
        self.act_fewer.setToolTip("Shift+ScrollDown")
        self.act_more = self._action("More Words", s.add_one)
        self.act_more.setToolTip("Shift+ScrollUp")
        self.act_smaller = self._action("Smaller Font", lambda: s.adjust_font_size(-1))
        self.act_smaller.setToolTip("Ctrl+ScrollDown")
        self.act_larger = self._action("Larger Font", lambda: s.adjust_font_size(1))
        self.act_larger.setToolTip("Ctrl+ScrollUp")

        self.act_auto_check = self._toggle("Check Automatically", s.toggle_auto_check, s.auto_check)
        self.act_shuffle_words = self._toggle("Shuffle Words", s.toggle_order_words, False)
        self.act_shuffle_meanings = self._toggle("Shuffle Meanings", s.toggle_order_meanings, True)
        self.act_hide_meanings = self._toggle("Hide Meanings", s.toggle_hide_meanings, s.hide_meanings, "Ctrl+D")
        self.act_hide_correct = self._toggle("Hide Correctness", s.toggle_show_correctness, not s.show_correct)
        self.act_relayout = self._action("Relayout", s.relayout, "Ctrl+R")

        self.act_check = QAction("Check/Advance", self)
        self.act_check.setToolTip("Or press space to check/advance")
        self.act_check.triggered.connect(self.canvas.check_or_advance)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_load)
        file_menu.addAction(self.act_load_session)
        file_menu.addAction(self.act_load_default)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addAction(self.act_save_session)
        file_menu.addSeparator()
        file_menu.addAction(self.act_quit_keep)
        file_menu.addAction(self.act_quit_discard)

        settings_menu: QMenu = menu_bar.addMenu("&Settings")
        settings_menu.setToolTipsVisible(True)
        settings_menu.addAction(self.act_fewer)
        settings_menu.addAction(self.act_more)
        settings_menu.addSeparator()
        settings_menu.addAction(self.act_smaller)
        settings_menu.addAction(self.act_larger)
        settings_menu.addSeparator()
        settings_menu.addAction(self.act_auto_check)
        settings_menu.addAction(self.act_shuffle_words)
        settings_menu.addAction(self.act_shuffle_meanings)
        settings_menu.addAction(self.act_hide_meanings)
        settings_menu.addAction(self.act_hide_correct)
        settings_menu.addSeparator()
        settings_menu.addAction(self.act_relayout)

        menu_bar.addAction(self.act_check)

    # --- HELPER METHODS ---

    def _action(self, text: str, slot: Callable, shortcut: str = "") -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(lambda _checked=False: self._run(slot))
        return action

    def _toggle(self, text: str, slot: Callable, checked: bool, shortcut: str = "") -> QAction:
        action = self._action(text, slot, shortcut)
        action.setCheckable(True)
        action.setChecked(checked)
        return action

    def _run(self, slot: Callable) -> None:
        slot()
        self.refresh()

    def _file_command(self, command: Callable, *args) -> bool:
        """Run a load/save command, reporting I/O and parse errors to the user."""
        try:
            command(*args)
        except (BankIOError, ParseError) as e:
            logger.exception(f"File command failed: {e}")
            QMessageBox.critical(self, "Error", f"Error reading or writing word bank:\n{e}")
            return False
        return True

    def refresh(self) -> None:
        """Slot called whenever the word bank or the session flags change."""
        self.count_label.setText(self.session.status_text())
        self.canvas.refresh()

    def fit_to_content(self) -> None:
        height = self.session.bank.layout.content_height + self.menuBar().height() + 36
        self.resize(self.width(), max(self.height(), height))

    # --- FILE SLOTS ---

    def on_load_file(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(self, "Load Words", "", BANK_FILE_FILTER)
        if fname:
            self._file_command(self.session.load_file, fname)

    def on_save_file(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(self, "Save Remaining", "", BANK_FILE_FILTER)
        if fname:
            self._file_command(self.session.save_remaining, fname)

    def on_quit_keep(self) -> None:
        self.session.quit_keep_session()
        self.close()

    def on_quit_discard(self) -> None:
        self.session.quit_discard_session()
        self.close()

    def closeEvent(self, event, /) -> None:
        """Persist or discard the session before the window goes away."""
        self._file_command(self.session.shutdown)
        event.accept()
