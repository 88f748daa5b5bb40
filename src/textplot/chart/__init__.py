"""
Charts plotting one or more shapes as text, with axes and tick labels.
"""
from ._chart import *
from ._style import *
