"""partsgrid：维修配件矩阵与选择状态"""

from .matrix import PartsMatrix, build_parts_matrix
from .schemas import (
    TOR,
    CategorizedPart,
    Category,
    CategorySelection,
    DividedParts,
    Part,
    PartSelectionChanged,
    RepairType,
)
from .selection import PartKey, SelectionState
from .table import PartsTable

__all__ = [
    "TOR",
    "CategorizedPart",
    "Category",
    "CategorySelection",
    "DividedParts",
    "Part",
    "PartKey",
    "PartSelectionChanged",
    "PartsMatrix",
    "PartsTable",
    "RepairType",
    "SelectionState",
    "build_parts_matrix",
]
