"""
配件矩阵构建模块 - Parts Matrix Builder Module

把类别列表转换为 维修类型 × 类别 的二维索引，供表格逐格展示。
Turn a list of categories into a repair-type × category index for tabular display.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..schemas import Category, CategoryTitle, DividedParts, Part, PartsCells, TorTitle

logger = logging.getLogger(__name__)


class PartsMatrix(BaseModel):
    """矩阵及其辅助的 id -> 标题 索引"""

    cells: PartsCells = Field(default_factory=dict)
    tor_columns: List[str] = Field(default_factory=list)
    categories_by_id: Dict[str, CategoryTitle] = Field(default_factory=dict)
    tors_by_id: Dict[str, TorTitle] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def cell(self, tor_id: str, category_id: str) -> Optional[DividedParts[Part]]:
        return self.cells.get(tor_id, {}).get(category_id)

    def category_title(self, category_id: str) -> str:
        entry = self.categories_by_id.get(category_id)
        return entry.title if entry else ""

    def tor_title(self, tor_id: str) -> str:
        entry = self.tors_by_id.get(tor_id)
        return entry.title if entry else ""


def _mark_excluded(parts: Iterable[Part]) -> List[Part]:
    # 返回副本，不修改调用方的对象
    return [p.model_copy(update={"is_excluded": True}) for p in parts]


def order_tor_columns(cells: PartsCells) -> List[str]:
    """
    维修类型列排序 - Order repair-type columns

    覆盖类别越多的维修类型越靠前；数量相同时保持出现顺序（sorted 是稳定排序）。
    Repair types present in more categories come first; ties keep encounter order.
    """
    return sorted(cells, key=lambda tor_id: len(cells[tor_id]), reverse=True)


def build_parts_matrix(categories: Optional[Iterable[Category]]) -> PartsMatrix:
    """
    构建配件矩阵 - Build Parts Matrix

    参数 Parameters:
        categories: 有序的类别列表，None 视为空列表
                    Ordered categories; None is treated as empty

    返回 Returns:
        PartsMatrix，cells[tor_id][category_id] 为该格的 included/excluded 配件
        PartsMatrix whose cells[tor_id][category_id] holds the included/excluded parts
    """
    matrix = PartsMatrix()
    if categories is None:
        return matrix

    for category in categories:
        if category.repair_types is None:
            logger.warning("[MATRIX] category %s has no repair types, skipped", category.category_id)
            continue

        matrix.categories_by_id[category.category_id] = CategoryTitle(
            category_id=category.category_id,
            title=category.title,
        )

        for tor in category.repair_types:
            matrix.tors_by_id[tor.tor_id] = TorTitle(tor_id=tor.tor_id, title=tor.title)

            row = matrix.cells.setdefault(tor.tor_id, {})
            row[category.category_id] = DividedParts[Part](
                included=list(tor.parts_included),
                excluded=_mark_excluded(tor.parts_excluded),
            )

    matrix.tor_columns = order_tor_columns(matrix.cells)
    logger.debug(
        "[MATRIX] built %d columns over %d categories",
        len(matrix.tor_columns),
        len(matrix.categories_by_id),
    )
    return matrix
