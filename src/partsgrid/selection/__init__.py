"""Selection 模块：复合键与选择状态"""

from .engine import PartQuery, SelectionState
from .keys import PartKey, make_key

__all__ = [
    "PartKey",
    "PartQuery",
    "SelectionState",
    "make_key",
]
