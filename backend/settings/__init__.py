"""
Settings Module

Central configuration, constants and logging setup for the export service.
"""

from . import configs
from . import constants

__all__ = ['configs', 'constants']
