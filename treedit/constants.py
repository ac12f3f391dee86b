"""
Global constants used throughout the package
"""

# Value of a tree distance cell that has not been computed yet.
# Costs are non-negative, so no computed distance can take it.
UNSET = -1

# Arena reference of the empty edit script
EMPTY_SCRIPT = -1

LOG_FORMAT = "%(levelname)s | %(message)s"

# Largest accepted elementary cost, and largest accepted sum of all removal
# and insertion costs. Every candidate of a forest cell then stays within
# 2**62, inside the int64 tables.
MAX_COST = 2**61
