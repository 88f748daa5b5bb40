"""
Linear mapping between a value domain and a pixel range.
"""
from ._scale import *
