"""
Response and request models shared by the proxy routes.

The frontend speaks camelCase; field names stay snake_case in Python and
are aliased on the wire.
"""

from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pokeadmin.models.collection import CollectionSummary, DisplaySet


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DisplayCardResponse(CamelModel):
    """A collected card ready for rendering."""

    id: str
    name: str
    image_url: str
    number: str
    rarity: str | None = None
    quantity: int


class DisplaySetResponse(CamelModel):
    """One collected set with its cards in natural card-number order."""

    id: str
    name: str
    symbol_url: str | None = None
    series: str | None = None
    release_date: str | None = None
    cards: list[DisplayCardResponse] = Field(default_factory=list)
    total_quantity_in_set: int = 0
    unique_cards_in_set: int = 0

    @classmethod
    def from_display_set(cls, display_set: DisplaySet) -> "DisplaySetResponse":
        return cls.model_validate(asdict(display_set))


class CollectionSummaryResponse(CamelModel):
    """A user's collection grouped by set, newest sets first."""

    sets: list[DisplaySetResponse] = Field(default_factory=list)
    total_unique_cards: int = 0
    total_cards: int = 0

    @classmethod
    def from_summary(cls, summary: CollectionSummary) -> "CollectionSummaryResponse":
        return cls(
            sets=[DisplaySetResponse.from_display_set(s) for s in summary.sets],
            total_unique_cards=summary.total_unique_cards(),
            total_cards=summary.total_cards(),
        )


class CardIdsRequest(CamelModel):
    """Request model for adding or removing collection cards."""

    card_ids: list[str] | None = Field(
        default=None,
        description="Card ids to add or remove, one entry per copy",
        examples=[["base1-4", "base1-4", "sv3pt5-6"]],
    )


class AppUser(CamelModel):
    """The signed-in user as seen by the frontend."""

    id: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    is_admin: bool | None = None
    auth_source: str | None = None
