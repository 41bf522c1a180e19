"""Logging package for TimeTrees."""

from timetrees.logger.base_logger import AlgorithmLogger
from timetrees.logger.tree_logger import TreeLogger

# Package-wide singleton, enabled by the command line or the test suite
tt_logger = TreeLogger("TimeTrees")
tt_logger.disabled = True

__all__ = [
    "AlgorithmLogger",
    "TreeLogger",
    "tt_logger",
]
