"""
Tests for translating indices between the available subset and the full menu.
"""

from lunch_nutritionist.models import MenuItem, NutritionalSummary, NutritionistResponse
from lunch_nutritionist.services.availability import filter_available_items
from lunch_nutritionist.services.index_mapper import map_indices_to_menu, remap_indices


def _response(indices):
    return NutritionistResponse(
        selected_indices=indices,
        reasoning="why",
        nutritional_summary=NutritionalSummary(protein="high"),
    )


def test_identity_mapping_when_nothing_filtered(menu_items):
    mapped = map_indices_to_menu(_response([0, 2, 3]), menu_items, menu_items)

    assert mapped.selected_indices == [0, 2, 3]
    assert mapped.reasoning == "why"
    assert mapped.nutritional_summary.protein == "high"


def test_filtered_subset_maps_back_to_full_menu(menu_items):
    available = filter_available_items(menu_items, {2})
    assert [item.name for item in available] == ["Rice", "Salad", "Tofu", "Tea"]

    mapped = map_indices_to_menu(_response([0, 1, 2]), available, menu_items)

    assert mapped.selected_indices == [0, 2, 3]
    assert [menu_items[i].name for i in mapped.selected_indices] == ["Rice", "Salad", "Tofu"]


def test_order_of_selection_is_preserved(menu_items):
    available = filter_available_items(menu_items, {1, 3})

    mapped = map_indices_to_menu(_response([2, 0]), available, menu_items)

    assert mapped.selected_indices == [4, 1]


def test_reordered_target_is_matched_by_id(menu_items):
    reordered = list(reversed(menu_items))

    mapped = map_indices_to_menu(_response([0, 1]), menu_items, reordered)

    assert mapped.selected_indices == [4, 3]


def test_unknown_ids_and_out_of_range_indices_are_dropped(menu_items):
    source = [MenuItem(id=99, name="Ghost"), menu_items[2]]

    mapped = map_indices_to_menu(_response([0, 1, 5]), source, menu_items)

    assert mapped.selected_indices == [2]


def test_round_trip_preserves_item_ids(menu_items):
    available = filter_available_items(menu_items, {2, 5})
    original = _response([2, 0, 1])
    original_ids = {available[i].id for i in original.selected_indices}

    to_full = map_indices_to_menu(original, available, menu_items)
    back = map_indices_to_menu(to_full, menu_items, available)

    assert {available[i].id for i in back.selected_indices} == original_ids
    assert {menu_items[i].id for i in to_full.selected_indices} == original_ids


def test_snapshot_ids_map_onto_reordered_menu(menu_items):
    snapshot_ids = [1, 2, 3, 4, 5]
    reordered = list(reversed(menu_items))

    mapped = remap_indices([0, 2], snapshot_ids, reordered)

    assert [reordered[i].name for i in mapped] == ["Rice", "Salad"]
