from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..schemas import Part


@dataclass(frozen=True)
class PartKey:
    """复合键：同一 (类别, 维修类型, 料号, sOS) 无论出现在 included 还是 excluded 都是同一个键"""

    prefix: str
    category_id: str
    tor_id: str
    part_number: str
    s_os: Optional[str]

    def __str__(self) -> str:
        return f"{self.prefix}_{self.category_id}_{self.tor_id}_{self.part_number}_{self.s_os}"


def make_key(prefix: str, category_id: str, tor_id: str, part: Part) -> PartKey:
    return PartKey(prefix, category_id, tor_id, part.part_number, part.s_os)
