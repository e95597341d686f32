"""Translate selection indices between two orderings of the same menu items."""

from lunch_nutritionist.models import MenuItem, NutritionistResponse


def remap_indices(
    indices: list[int],
    source_ids: list[int],
    target_items: list[MenuItem],
) -> list[int]:
    """
    Re-express indices into source_ids as indices into target_items, matching by
    item id. Out-of-range indices and ids missing from target_items are dropped.
    """
    target_index_by_id = {item.id: index for index, item in enumerate(target_items)}
    mapped: list[int] = []
    for source_index in indices:
        if not 0 <= source_index < len(source_ids):
            continue
        target_index = target_index_by_id.get(source_ids[source_index])
        if target_index is not None:
            mapped.append(target_index)
    return mapped


def map_indices_to_menu(
    response: NutritionistResponse,
    source_items: list[MenuItem],
    target_items: list[MenuItem],
) -> NutritionistResponse:
    """Response indices relative to source_items, re-expressed against target_items."""
    return NutritionistResponse(
        selected_indices=remap_indices(
            response.selected_indices,
            [item.id for item in source_items],
            target_items,
        ),
        reasoning=response.reasoning,
        nutritional_summary=response.nutritional_summary,
    )
