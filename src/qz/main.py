"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the text measurer, the layout engine and the Word Bank (Model).
2. Wraps the bank in a QuizSession (Controller).
3. Instantiates the Main Window (View), passing the session in.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys

import numpy as np
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

from qz.config import ORG_NAME, APP_NAME, VISIBLE_APP_NAME, get_state_file_path
from qz.controller.session import QuizSession
from qz.logging_config import setup_logging
from qz.model.bank import WordBank
from qz.model.layout import TileLayout
from qz.view.canvas import QtTextMeasurer
from qz.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # Set QZ_LOG_LEVEL=DEBUG to see draw and pairing details
    setup_logging()

    # 2. Create the Qt Application; names must be set before resolving paths
    QCoreApplication.setOrganizationName(ORG_NAME)
    QCoreApplication.setApplicationName(APP_NAME)
    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    # 3. Initialize the Model and Controller
    measurer = QtTextMeasurer()
    layout = TileLayout(measurer=measurer, rng=np.random.default_rng())
    bank = WordBank(layout)
    session = QuizSession(bank, state_path=get_state_file_path())

    # 4. Initialize the Main Window, passing the session
    window = MainWindow(session, measurer)
    session.start()
    window.refresh()
    window.fit_to_content()
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
