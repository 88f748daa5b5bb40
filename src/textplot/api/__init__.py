"""
Basic tools for API development: export tracking, docstring inheritance, and
run-time validation of arguments.
"""
from ._alltracker import *
from ._api import *
from ._decorators import *
