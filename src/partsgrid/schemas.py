from __future__ import annotations

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


T = TypeVar("T")


class Part(BaseModel):
    """维修配件 - Repairable part

    partNumber + sOS 在同一 (类别, 维修类型) 内唯一标识一个可选单元。
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    part_number: str = Field(alias="partNumber")
    s_os: Optional[str] = Field(default=None, alias="sOS")
    is_excluded: bool = Field(default=False, alias="isExcluded")
    qty: Optional[int] = None
    description: str = ""


class CategorizedPart(Part):
    """带归属（类别 + 维修类型）的配件，价格/库存字段来自报价结果"""

    category_id: str = Field(alias="categoryId")
    tor_id: str = Field(alias="torId")
    qty: int = 1

    # 报价字段，未报价时为空
    price: Optional[float] = None
    currency: Optional[str] = None
    available_qty: Optional[int] = Field(default=None, alias="availableQty")
    availability: Optional[str] = None
    lead_time_days: Optional[int] = Field(default=None, alias="leadTimeDays")


class RepairType(BaseModel):
    """维修类型 (TOR, Type Of Repair)"""

    model_config = ConfigDict(populate_by_name=True)

    tor_id: str = Field(alias="torId")
    title: str = ""
    parts_included: List[Part] = Field(default_factory=list, alias="partsIncluded")
    parts_excluded: List[Part] = Field(default_factory=list, alias="partsExcluded")

    @field_validator("parts_included", "parts_excluded", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    def all_parts(self) -> List[Part]:
        return [*self.parts_included, *self.parts_excluded]


# Alias matching the domain glossary
TOR = RepairType


class Category(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_id: str = Field(alias="categoryId")
    title: str = ""
    # None = malformed upstream record; skipped by the matrix builder
    repair_types: Optional[List[RepairType]] = Field(default=None, alias="repairTypes")


class CategoryTitle(BaseModel):
    category_id: str
    title: str = ""


class TorTitle(BaseModel):
    tor_id: str
    title: str = ""


class DividedParts(BaseModel, Generic[T]):
    included: List[T] = Field(default_factory=list)
    excluded: List[T] = Field(default_factory=list)

    def all_parts(self) -> List[T]:
        return [*self.included, *self.excluded]


class CategorySelection(BaseModel):
    """类别级全选/全不选命令"""

    checked: bool
    category: Category


class PartSelectionChanged(BaseModel):
    part: Part
    checked: bool
    category: Category
    category_checked: bool


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer_id: str = ""
    name: str = ""
    currency: str = "USD"


class WarehouseDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    warehouse: str
    address: str = ""


class DialogOptions(BaseModel):
    disable_close: bool = True
    min_width: str = "400px"
    panel_class: str = "edit-dialog"


class CheckedPartsDetailsData(BaseModel):
    parts_with_info: DividedParts[Optional[CategorizedPart]]
    currency: str
    warehouse: str
    category: Category
    tor: Optional[TorTitle] = None
    checked_part: Optional[CategorizedPart] = None


PartsCells = Dict[str, Dict[str, DividedParts[Part]]]
