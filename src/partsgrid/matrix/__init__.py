"""Matrix 模块：维修类型 × 类别 索引"""

from .builder import PartsMatrix, build_parts_matrix, order_tor_columns

__all__ = [
    "PartsMatrix",
    "build_parts_matrix",
    "order_tor_columns",
]
