from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from .config import Settings, load_settings
from .matrix import PartsMatrix, build_parts_matrix
from .schemas import (
    CategorizedPart,
    Category,
    CategorySelection,
    CategoryTitle,
    CheckedPartsDetailsData,
    Customer,
    DialogOptions,
    DividedParts,
    Part,
    PartSelectionChanged,
    TorTitle,
    WarehouseDetails,
)
from .selection import SelectionState

logger = logging.getLogger(__name__)

SelectionListener = Callable[[PartSelectionChanged], None]


class DetailsDialog(Protocol):
    def open(self, data: CheckedPartsDetailsData, options: DialogOptions) -> Any: ...


class PartsTable:
    """
    配件表格协调器 - Parts table coordinator

    接收三类输入变化（类别数据、报价、类别全选），按固定顺序驱动矩阵重建与选择状态，
    并在单个配件勾选变化时向订阅者发出事件。
    Routes the three inbound changes (catalog, prices, category selection) in a
    fixed order and emits a PartSelectionChanged event on every part toggle.
    """

    def __init__(
        self,
        key_prefix: str | None = None,
        customer: Customer | None = None,
        warehouse: WarehouseDetails | None = None,
        dialog: DetailsDialog | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or load_settings()
        self.customer = customer
        self.warehouse = warehouse
        self.dialog = dialog
        self.state = SelectionState(key_prefix=key_prefix or self.settings.key_prefix)
        self.matrix = PartsMatrix()
        self.categories: List[Category] = []
        self._listeners: List[SelectionListener] = []

    # === 输入变化 ===

    def apply_changes(
        self,
        categories: Optional[List[Category]] = None,
        parts_prices: Optional[List[CategorizedPart]] = None,
        category_selection: Optional[CategorySelection] = None,
    ) -> None:
        """None 表示该输入未变化；顺序固定为 类别 -> 报价 -> 类别全选"""
        if categories is not None:
            self.set_categories(categories)
        if parts_prices is not None:
            self.set_parts_prices(parts_prices)
        if category_selection is not None:
            self.set_category_selection(category_selection)

    def set_categories(self, categories: List[Category]) -> None:
        self.state.reset()
        self.categories = list(categories)
        self.matrix = build_parts_matrix(self.categories)
        logger.debug("[TABLE] catalog replaced, %d categories", len(self.categories))

    def set_parts_prices(self, parts_prices: List[CategorizedPart]) -> None:
        self.state.overlay_prices(parts_prices)

    def set_category_selection(self, selection: CategorySelection) -> None:
        self.state.toggle_category(selection.category, selection.checked)

    # === 事件 ===

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SelectionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def on_part_selection_changed(
        self,
        checked: bool,
        category: Category,
        tor_id: str,
        part: Part,
        all_parts_for_tor: DividedParts[Part] | None = None,
    ) -> PartSelectionChanged:
        parts = all_parts_for_tor.all_parts() if all_parts_for_tor is not None else []
        self.state.toggle_parts([part, *parts], category.category_id, tor_id, checked)

        event = PartSelectionChanged(
            part=part,
            checked=checked,
            category=category,
            category_checked=self.state.is_category_fully_selected(category),
        )
        for listener in list(self._listeners):
            listener(event)
        return event

    def qty_changed(self, qty: int) -> None:
        self.state.set_quantity(qty)

    # === 详情 ===

    def show_details(
        self,
        category: Category,
        tor_id: str,
        checked_part: CategorizedPart | None,
        parts: DividedParts[Part],
    ) -> CheckedPartsDetailsData:
        if self.dialog is None:
            raise ValueError("show_details requires a details dialog.")
        if self.customer is None or self.warehouse is None:
            raise ValueError("show_details requires customer and warehouse context.")

        data = CheckedPartsDetailsData(
            parts_with_info=self.state.assemble_details_payload(category, tor_id, checked_part, parts),
            currency=self.customer.currency,
            warehouse=self.warehouse.warehouse,
            category=category,
            tor=self.matrix.tors_by_id.get(tor_id),
            checked_part=checked_part,
        )
        # 对话框关闭结果不在此处使用
        self.dialog.open(data, self.settings.dialog_options())
        return data

    # === 查询 ===

    def is_selected(self, category: Category, tor_id: str, part: Part) -> bool:
        return self.state.is_selected(category, tor_id, part)

    def is_checked(self, category: Category, tor_id: str, part: Part) -> bool:
        return self.state.is_checked(category, tor_id, part)

    def get_checked_part(
        self, category: Category, tor_id: str, part: Part
    ) -> CategorizedPart | None:
        return self.state.get_checked_part(category, tor_id, part)

    def cell(self, tor_id: str, category_id: str) -> DividedParts[Part] | None:
        return self.matrix.cell(tor_id, category_id)

    @property
    def tor_columns(self) -> List[str]:
        return self.matrix.tor_columns

    @property
    def categories_by_id(self) -> Dict[str, CategoryTitle]:
        return self.matrix.categories_by_id

    @property
    def tors_by_id(self) -> Dict[str, TorTitle]:
        return self.matrix.tors_by_id
