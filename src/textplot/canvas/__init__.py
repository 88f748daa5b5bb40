"""
Dot-matrix canvases rendering pixels as text.
"""
from ._canvas import *
