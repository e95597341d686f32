"""Menu data models."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class MenuItem(BaseModel):
    """A dish on offer. Identity is `id`."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Menu item identifier")
    name: str = Field(..., description="Display name")
    price: int = Field(default=0, description="Price in minor units")


class DailyMenu(BaseModel):
    """Ordered item ids for a date. The order is the canonical index space."""

    menu_date: date = Field(..., description="Date the menu is served")
    menu_item_ids: list[int] = Field(default_factory=list)
    nutritionist_reset: bool = Field(
        default=False,
        description="Set when the menu changed; cleared once the engine observes it",
    )
