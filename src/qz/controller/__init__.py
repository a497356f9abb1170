"""
The CONTROLLER layer maps UI commands onto the model. It is plain Python so it
can be driven from tests without a QApplication.
"""
