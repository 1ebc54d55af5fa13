"""
选择状态引擎 - Selection State Engine

维护两个登记表：
- selected: 用户勾选的配件（含数量）
- checked:  已查询价格/库存的配件

Maintains the selected-parts and checked-parts registries. Every public method
is a synchronous, in-memory transition; nothing here raises for well-typed input.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from ..schemas import CategorizedPart, Category, DividedParts, Part
from .keys import PartKey, make_key

logger = logging.getLogger(__name__)


class PartQuery(NamedTuple):
    is_selected: bool
    is_checked: bool
    checked_part: Optional[CategorizedPart]


def _price_only_keys() -> Set[str]:
    names = set(CategorizedPart.model_fields) - set(Part.model_fields)
    aliases = {CategorizedPart.model_fields[n].alias for n in names}
    return names | {a for a in aliases if a}


# 目录配件上的同名附加字段不进入 selected，报价只来自 checked
_PRICE_ONLY_KEYS = _price_only_keys()


def _categorize(part: Part, category_id: str, tor_id: str, qty: int) -> CategorizedPart:
    data = {k: v for k, v in part.model_dump().items() if k not in _PRICE_ONLY_KEYS}
    data.update(category_id=category_id, tor_id=tor_id, qty=qty)
    return CategorizedPart.model_validate(data)


class SelectionState:
    def __init__(self, key_prefix: str = "parts"):
        self.key_prefix = key_prefix
        self.selected: Dict[PartKey, CategorizedPart] = {}
        self.checked: Dict[PartKey, CategorizedPart] = {}

    def key_for(self, category_id: str, tor_id: str, part: Part) -> PartKey:
        return make_key(self.key_prefix, category_id, tor_id, part)

    # === 状态转换 ===

    def reset(self) -> None:
        """类别数据变化时调用：旧的键与配件可能已不再对应"""
        self.selected = {}
        self.clear_checked()

    def clear_checked(self) -> None:
        self.checked = {}

    def toggle_parts(
        self,
        parts: Iterable[Part],
        category_id: str,
        tor_id: str,
        checked: bool,
    ) -> None:
        """
        勾选/取消一组配件 - Toggle a list of parts

        勾选时沿用该键之前的数量，否则为 1；取消时直接删除（重复删除无副作用）。
        On select, keep the previous quantity under the same key or start at 1;
        on deselect, drop the entry (removing an absent key is a no-op).
        """
        for part in parts:
            key = self.key_for(category_id, tor_id, part)
            if checked:
                previous = self.selected.get(key)
                qty = previous.qty if previous is not None else 1
                self.selected[key] = _categorize(part, category_id, tor_id, qty)
            else:
                self.selected.pop(key, None)

    def toggle_category(self, category: Category, checked: bool) -> None:
        for tor in category.repair_types or []:
            self.toggle_parts(tor.all_parts(), category.category_id, tor.tor_id, checked)
        logger.debug(
            "[SELECTION] category %s bulk %s, %d selected",
            category.category_id,
            "selected" if checked else "cleared",
            len(self.selected),
        )

    def set_quantity(self, qty: int) -> None:
        # 数量变化后旧报价失效
        self.clear_checked()
        self.selected = {
            key: part.model_copy(update={"qty": qty})
            for key, part in self.selected.items()
        }
        logger.debug("[SELECTION] qty=%s applied to %d parts", qty, len(self.selected))

    def overlay_prices(self, priced_parts: Iterable[CategorizedPart]) -> None:
        checked: Dict[PartKey, CategorizedPart] = {}
        for part in priced_parts:
            checked[self.key_for(part.category_id, part.tor_id, part)] = part
        self.checked = checked
        logger.debug("[SELECTION] price overlay with %d parts", len(checked))

    # === 查询 ===

    def is_selected(self, category: Category, tor_id: str, part: Part) -> bool:
        return self.key_for(category.category_id, tor_id, part) in self.selected

    def is_checked(self, category: Category, tor_id: str, part: Part) -> bool:
        return self.key_for(category.category_id, tor_id, part) in self.checked

    def get_checked_part(
        self, category: Category, tor_id: str, part: Part
    ) -> Optional[CategorizedPart]:
        return self.checked.get(self.key_for(category.category_id, tor_id, part))

    def query(self, category: Category, tor_id: str, part: Part) -> PartQuery:
        checked_part = self.get_checked_part(category, tor_id, part)
        return PartQuery(
            is_selected=self.is_selected(category, tor_id, part),
            is_checked=checked_part is not None,
            checked_part=checked_part,
        )

    def is_category_fully_selected(self, category: Category) -> bool:
        return all(
            self.key_for(category.category_id, tor.tor_id, part) in self.selected
            for tor in category.repair_types or []
            for part in tor.all_parts()
        )

    def selected_parts(self) -> List[CategorizedPart]:
        return list(self.selected.values())

    def checked_parts(self) -> List[CategorizedPart]:
        return list(self.checked.values())

    @property
    def selected_count(self) -> int:
        return len(self.selected)

    def assemble_details_payload(
        self,
        category: Category,
        tor_id: str,
        checked_part: Optional[CategorizedPart],
        parts: DividedParts[Part],
    ) -> DividedParts[Optional[CategorizedPart]]:
        """
        组装详情对话框数据 - Assemble details payload

        included 配件配对其报价结果；excluded 配件同样配对，但数量固定为 1。
        未报价的配件对应 None，由调用方处理。
        ``checked_part`` is the inspected cell's priced part; it is carried by the
        caller into the dialog data and does not affect the pairing.
        """
        included = [self.get_checked_part(category, tor_id, p) for p in parts.included]
        excluded = []
        for p in parts.excluded:
            priced = self.get_checked_part(category, tor_id, p)
            excluded.append(priced.model_copy(update={"qty": 1}) if priced is not None else None)
        return DividedParts[Optional[CategorizedPart]](included=included, excluded=excluded)
