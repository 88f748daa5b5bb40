"""
Helpers preparing data for plotting.
"""
from ._util import *
