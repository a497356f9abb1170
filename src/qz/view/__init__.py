"""
The VIEW layer contains the Qt widgets. It reads from the QuizSession and
forwards user input to it; it holds no game state of its own.
"""
