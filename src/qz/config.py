"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: Layout metrics and defaults live in one place instead of being
   scattered through the model and the view.
2. Deployment: It resolves the per-user session file through Qt's standard
   paths, so the state lands in the platform's application data folder.

Exports:
    DEFAULT_GROUP_SIZE (int): Words shown per group on a fresh start.
    STATE_FILE_NAME (str): File name of the saved session.
    get_state_file_path(): Absolute path of the saved session.
"""
import os

ORG_NAME = "qz"
APP_NAME = "Qz"
VISIBLE_APP_NAME = "Qz"

# Word bank
DEFAULT_GROUP_SIZE: int = 16
STATE_FILE_NAME: str = "Qz.state"
BANK_FILE_FILTER: str = "Tab Separated Values (*.tsv *.txt);;All Files (*)"

# Layout metrics (pixels, except the point size)
DEFAULT_POINT_SIZE: float = 12.0  # 36 px lines; the pairing band is 22.5 px above, 13.5 below
LINE_HEIGHT_FACTOR: int = 3
TOP_MARGIN: int = 5
COLUMN_GAP: int = 5

# Drag auto-scroll
AUTOSCROLL_INTERVAL_MS: int = 50
AUTOSCROLL_STEP: int = 20
AUTOSCROLL_BOTTOM_ZONE: int = 30
AUTOSCROLL_TOP_ZONE: int = 40
KEY_SCROLL_STEP: int = 25


def get_state_file_path() -> str:
    """
    Absolute path of the session file in the per-user data directory.

    QCoreApplication's organisation and application names must be set first,
    otherwise Qt falls back to a generic location.
    """
    from PySide6.QtCore import QStandardPaths

    data_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if not data_dir:
        data_dir = os.path.join(os.path.expanduser("~"), "." + ORG_NAME)
    return os.path.join(data_dir, STATE_FILE_NAME)
