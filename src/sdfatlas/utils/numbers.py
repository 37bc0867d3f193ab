"""Number helpers shared by the shape builder and descriptor writers."""

import math
from typing import Any


def js_round(value: float) -> int:
    """Round half up, the way pixel sizes have always been computed.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); pixel
    dimensions must round ``x.5`` up so sizes match existing atlases.
    """
    return math.floor(value + 0.5)


def round_number(value: float, decimals: int) -> float:
    """Round a number to a fixed number of decimals, half up."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Shortest text form of a number: ``12`` for integral values."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def round_all_values(tree: Any, decimals: int) -> Any:
    """Round every float of a nested dict/list structure.

    Returns a new structure; ints, strings and other leaves are kept as is.

    Args:
        tree: Nested dicts, lists and tuples
        decimals: Number of decimals to keep

    Returns:
        Structure of the same shape with rounded floats
    """
    if isinstance(tree, dict):
        return {key: round_all_values(value, decimals) for key, value in tree.items()}
    if isinstance(tree, (list, tuple)):
        return type(tree)(round_all_values(value, decimals) for value in tree)
    if isinstance(tree, float):
        return round_number(tree, decimals)
    return tree
