from pathlib import Path

import pytest

from partsgrid.config import Settings
from partsgrid.schemas import Category, Part, RepairType


DATA_DIR = Path(__file__).resolve().parent / "data"


def make_category(category_id, tors, title=""):
    return Category(category_id=category_id, title=title or category_id, repair_types=tors)


def make_tor(tor_id, included=(), excluded=(), title=""):
    return RepairType(
        tor_id=tor_id,
        title=title or tor_id,
        parts_included=[Part(part_number=pn, s_os=sos) for pn, sos in included],
        parts_excluded=[Part(part_number=pn, s_os=sos) for pn, sos in excluded],
    )


@pytest.fixture
def settings():
    return Settings(key_prefix="tbl")


@pytest.fixture
def scenario_category():
    return make_category("C1", [make_tor("T1", included=[("P1", "A")], excluded=[("P2", "B")])])
