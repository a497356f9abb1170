"""
The MODEL layer contains pure data structures and game logic.
It has NO knowledge of the GUI (Qt).
It deals with the word bank, tile layout, pairing and I/O.
"""
