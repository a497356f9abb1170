"""Qz: drag meanings onto words until the word bank runs dry."""
