"""目录与报价数据加载"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from ..schemas import CategorizedPart, Category

logger = logging.getLogger(__name__)


def _read_items(path: Path, envelope_key: str) -> List[Any]:
    if not path.exists():
        logger.debug("[DATA] %s not found, using empty list", path)
        return []
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        if envelope_key not in raw:
            raise ValueError(f"{path} has no '{envelope_key}' list.")
        raw = raw[envelope_key] or []
    return raw


def load_categories(path: Path) -> List[Category]:
    """
    加载类别目录 - Load category catalog

    支持 JSON 数组或 {"categories": [...]} 两种格式；文件不存在时返回空列表，
    对象中缺少 "categories" 时抛出 ValueError。
    Accepts a JSON array or a {"categories": [...]} envelope; a missing file yields [],
    an object without the "categories" key raises ValueError.
    """
    return [Category.model_validate(item) for item in _read_items(path, "categories")]


def load_prices(path: Path) -> List[CategorizedPart]:
    return [CategorizedPart.model_validate(item) for item in _read_items(path, "parts")]
