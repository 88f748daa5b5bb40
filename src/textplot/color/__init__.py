"""
Colors for colored chart output.
"""
from ._rgb import *
