"""Nutritionist selection models."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class NutritionalSummary(BaseModel):
    """Coarse nutrition profile of a selection."""

    protein: str = Field(default="", description="high|moderate|low")
    vegetables: str = Field(default="", description="high|moderate|low|none")
    carbohydrates: str = Field(default="", description="high|moderate|low")
    overall_rating: str = Field(default="", description="excellent|good|balanced|adequate")

    @field_validator("protein", "vegetables", "carbohydrates", "overall_rating", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value


class NutritionistResponse(BaseModel):
    """
    Recommended combination. `selected_indices` are 0-based positions in whichever
    item list the response was computed against.
    """

    model_config = ConfigDict(populate_by_name=True)

    selected_indices: list[StrictInt] = Field(..., alias="selected_menu_items")
    reasoning: str = Field(default="")
    nutritional_summary: NutritionalSummary = Field(default_factory=NutritionalSummary)

    @field_validator("reasoning", mode="before")
    @classmethod
    def _null_reasoning(cls, value):
        return "" if value is None else value

    @field_validator("nutritional_summary", mode="before")
    @classmethod
    def _null_summary(cls, value):
        return NutritionalSummary() if value is None else value


class SelectionCacheEntry(BaseModel):
    """Persisted recommendation for a date, indexed against its own menu snapshot."""

    selection_date: date = Field(...)
    menu_item_ids: list[int] = Field(
        ...,
        description="Full menu at computation time, used only for identity checks",
    )
    selected_indices: list[int] = Field(..., description="Indices into menu_item_ids")
    reasoning: str = Field(default="")
    nutritional_summary: str = Field(default="{}", description="JSON-encoded NutritionalSummary")
    created_at: datetime = Field(default_factory=datetime.now)


class UserSelection(BaseModel):
    """Marks that an employee used the recommendation on a date."""

    employee_id: int = Field(...)
    selection_date: date = Field(...)
    order_id: int | None = Field(default=None, description="Order the selection fed into, if any")
    created_at: datetime = Field(default_factory=datetime.now)
