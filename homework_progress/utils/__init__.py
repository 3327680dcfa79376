# File: utils/__init__.py
"""Pure Python utilities for the homework progress engine.

Submodules:
    - dt_utils: Timezone handling, day arithmetic, grouping keys, parsing
    - math_utils: Round-half-up percentages and progress ratios

Usage:
    from . import dt_utils
    from .math_utils import calculate_rate
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
