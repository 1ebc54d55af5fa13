"""Data 模块：目录与报价数据加载"""

from .catalog import load_categories, load_prices

__all__ = [
    "load_categories",
    "load_prices",
]
