"""
Plot functions and data series as text charts in the terminal.

Charts are drawn on a dot-matrix canvas of Unicode braille characters, with each
character covering 2 x 4 pixels.
"""

__version__ = "1.0.0"
