from conftest import make_category, make_tor

from partsgrid.schemas import CategorizedPart, Category, DividedParts, Part
from partsgrid.selection import PartKey, SelectionState


def _priced(category_id, tor_id, part_number, s_os, price, qty=1):
    return CategorizedPart(
        category_id=category_id,
        tor_id=tor_id,
        part_number=part_number,
        s_os=s_os,
        price=price,
        qty=qty,
    )


def test_scenario_select_included_part(scenario_category):
    state = SelectionState(key_prefix="tbl")
    tor = scenario_category.repair_types[0]
    p1 = tor.parts_included[0]

    state.toggle_parts([p1], "C1", "T1", checked=True)

    key = PartKey("tbl", "C1", "T1", "P1", "A")
    assert key in state.selected
    assert str(key) == "tbl_C1_T1_P1_A"
    assert state.selected[key].qty == 1
    assert state.selected[key].category_id == "C1"
    assert state.selected[key].tor_id == "T1"
    assert state.is_category_fully_selected(scenario_category) is False

    state.toggle_parts(tor.parts_excluded, "C1", "T1", checked=True)
    assert state.is_category_fully_selected(scenario_category) is True


def test_toggle_does_not_mutate_input_part():
    state = SelectionState()
    part = Part(part_number="P1", s_os="A")

    state.toggle_parts([part], "C1", "T1", checked=True)

    assert part.qty is None


def test_deselect_is_idempotent(scenario_category):
    state = SelectionState()
    parts = scenario_category.repair_types[0].all_parts()
    state.toggle_parts(parts, "C1", "T1", checked=True)

    state.toggle_parts(parts[:1], "C1", "T1", checked=False)
    once = dict(state.selected)
    state.toggle_parts(parts[:1], "C1", "T1", checked=False)

    assert state.selected == once
    assert state.selected_count == 1


def test_deselect_of_unknown_part_is_noop():
    state = SelectionState()

    state.toggle_parts([Part(part_number="X", s_os="Z")], "C1", "T1", checked=False)

    assert state.selected == {}


def test_reselect_preserves_previous_quantity():
    state = SelectionState()
    part = Part(part_number="P1", s_os="A")
    state.toggle_parts([part], "C1", "T1", checked=True)
    state.set_quantity(5)

    state.toggle_parts([part], "C1", "T1", checked=True)

    assert state.selected_parts()[0].qty == 5


def test_new_selection_defaults_quantity_even_after_quantity_change():
    state = SelectionState()
    state.toggle_parts([Part(part_number="P1", s_os="A")], "C1", "T1", checked=True)
    state.set_quantity(4)

    state.toggle_parts([Part(part_number="P9", s_os="A")], "C1", "T1", checked=True)

    by_number = {p.part_number: p.qty for p in state.selected_parts()}
    assert by_number == {"P1": 4, "P9": 1}


def test_same_part_in_included_and_excluded_shares_key():
    state = SelectionState()
    included = Part(part_number="P1", s_os="A")
    excluded = Part(part_number="P1", s_os="A", is_excluded=True)

    state.toggle_parts([included, excluded], "C1", "T1", checked=True)

    assert state.selected_count == 1


def test_keys_differ_by_category_and_repair_type():
    state = SelectionState()
    part = Part(part_number="P1", s_os="A")

    state.toggle_parts([part], "C1", "T1", checked=True)
    state.toggle_parts([part], "C2", "T1", checked=True)
    state.toggle_parts([part], "C1", "T2", checked=True)

    assert state.selected_count == 3


def test_toggle_category_selects_and_clears_every_part():
    category = make_category(
        "C1",
        [
            make_tor("T1", included=[("P1", "A")], excluded=[("P2", "B")]),
            make_tor("T2", included=[("P3", "A"), ("P4", "A")]),
        ],
    )
    state = SelectionState()

    state.toggle_category(category, checked=True)
    assert state.selected_count == 4
    assert state.is_category_fully_selected(category)

    state.toggle_category(category, checked=False)
    assert state.selected_count == 0
    assert not state.is_category_fully_selected(category)


def test_category_aggregate_false_when_one_part_missing():
    category = make_category(
        "C1",
        [make_tor("T1", included=[("P1", "A")]), make_tor("T2", excluded=[("P2", "B")])],
    )
    state = SelectionState()
    state.toggle_category(category, checked=True)

    state.toggle_parts([Part(part_number="P2", s_os="B")], "C1", "T2", checked=False)

    assert state.is_category_fully_selected(category) is False


def test_category_aggregate_vacuous_cases():
    state = SelectionState()

    assert state.is_category_fully_selected(make_category("C1", []))
    assert state.is_category_fully_selected(make_category("C2", [make_tor("T1")]))
    assert state.is_category_fully_selected(Category(category_id="C3", repair_types=None))


def test_set_quantity_clears_checked_and_updates_all_selected():
    state = SelectionState()
    state.toggle_parts([Part(part_number="P1", s_os="A")], "C1", "T1", checked=True)
    state.toggle_parts([Part(part_number="P2", s_os="B")], "C2", "T7", checked=True)
    state.overlay_prices([_priced("C1", "T1", "P1", "A", 10.0)])

    state.set_quantity(3)

    assert state.checked == {}
    assert [p.qty for p in state.selected_parts()] == [3, 3]


def test_overlay_prices_replaces_checked_registry():
    state = SelectionState(key_prefix="tbl")
    state.overlay_prices([_priced("C1", "T1", "P1", "A", 10.0)])

    state.overlay_prices(
        [_priced("C1", "T1", "P2", "B", 20.0), _priced("C2", "T2", "P3", "C", 30.0)]
    )

    assert set(state.checked) == {
        PartKey("tbl", "C1", "T1", "P2", "B"),
        PartKey("tbl", "C2", "T2", "P3", "C"),
    }


def test_overlay_prices_leaves_selection_untouched():
    state = SelectionState()
    state.toggle_parts([Part(part_number="P1", s_os="A")], "C1", "T1", checked=True)

    state.overlay_prices([])

    assert state.selected_count == 1


def test_query_reports_absent_price(scenario_category):
    state = SelectionState()
    p1, p2 = scenario_category.repair_types[0].all_parts()
    state.toggle_parts([p1], "C1", "T1", checked=True)
    state.overlay_prices([_priced("C1", "T1", "P2", "B", 7.5)])

    first = state.query(scenario_category, "T1", p1)
    second = state.query(scenario_category, "T1", p2)

    assert first.is_selected and not first.is_checked
    assert first.checked_part is None
    assert not second.is_selected and second.is_checked
    assert second.checked_part.price == 7.5


def test_reset_clears_both_registries(scenario_category):
    state = SelectionState()
    state.toggle_category(scenario_category, checked=True)
    state.overlay_prices([_priced("C1", "T1", "P1", "A", 1.0)])

    state.reset()

    assert state.selected == {}
    assert state.checked == {}


def test_details_payload_forces_excluded_quantity(scenario_category):
    state = SelectionState()
    tor = scenario_category.repair_types[0]
    state.overlay_prices(
        [_priced("C1", "T1", "P1", "A", 10.0, qty=4), _priced("C1", "T1", "P2", "B", 5.0, qty=4)]
    )
    parts = DividedParts[Part](included=tor.parts_included, excluded=tor.parts_excluded)

    payload = state.assemble_details_payload(scenario_category, "T1", None, parts)

    assert payload.included[0].qty == 4
    assert payload.excluded[0].qty == 1
    assert payload.excluded[0].price == 5.0
    assert state.get_checked_part(scenario_category, "T1", tor.parts_excluded[0]).qty == 4


def test_details_payload_keeps_unpriced_parts_absent(scenario_category):
    state = SelectionState()
    tor = scenario_category.repair_types[0]
    parts = DividedParts[Part](included=tor.parts_included, excluded=tor.parts_excluded)

    payload = state.assemble_details_payload(scenario_category, "T1", None, parts)

    assert payload.included == [None]
    assert payload.excluded == [None]


def test_catalog_extra_fields_do_not_break_selection():
    state = SelectionState(key_prefix="tbl")
    part = Part.model_validate(
        {
            "partNumber": "P1",
            "sOS": "A",
            "description": "Seal kit",
            "manufacturer": "Acme",
            "price": "on request",
            "availability": 5,
            "availableQty": "plenty",
        }
    )

    state.toggle_parts([part], "C1", "T1", checked=True)

    selected = state.selected[PartKey("tbl", "C1", "T1", "P1", "A")]
    assert selected.description == "Seal kit"
    assert selected.manufacturer == "Acme"
    assert selected.qty == 1
    assert selected.price is None
    assert selected.availability is None


def test_category_toggle_with_priced_looking_catalog_parts():
    tor = make_tor("T1")
    tor.parts_included.append(Part.model_validate({"partNumber": "P1", "sOS": "A", "leadTimeDays": "2w"}))
    category = make_category("C1", [tor])
    state = SelectionState()

    state.toggle_category(category, checked=True)

    assert state.is_category_fully_selected(category)
