"""
Data sources that can be plotted on a chart: continuous functions, and series of
points drawn as scatter plots, lines, steps, or bars.
"""
from ._shape import *
