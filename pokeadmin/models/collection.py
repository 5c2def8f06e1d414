from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

PLACEHOLDER_IMAGE_URL = "https://placehold.co/96x134.png?text={text}"


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _coerce_quantity(value: Any) -> int:
    """A collected record means at least one owned copy; unusable values count as 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return max(value, 1)
    try:
        return max(int(str(value)), 1)
    except (TypeError, ValueError):
        return 1


@dataclass(frozen=True)
class CollectedSetInfo:
    """Set metadata attached to each collected card by the backend."""

    id: str
    name: str
    symbol_url: str | None = None
    series: str | None = None
    release_date: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "CollectedSetInfo":
        if not isinstance(data, dict):
            data = {}
        return cls(
            id=str(data.get("id") or "unknown"),
            name=str(data.get("name") or "Unknown Set"),
            symbol_url=_optional_str(data.get("symbolUrl")),
            series=_optional_str(data.get("series")),
            release_date=_optional_str(data.get("releaseDate")),
        )


@dataclass(frozen=True)
class CollectedCardRecord:
    """
    One row of the backend collection response.

    The backend emits at most one record per distinct card within a set.
    """

    card_id: str
    name: str
    number: str
    quantity: int
    set: CollectedSetInfo
    rarity: str | None = None
    image_small: str | None = None
    image_large: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectedCardRecord":
        """Build a record from backend JSON, tolerating missing fields."""
        return cls(
            card_id=str(data.get("id") or data.get("cardId") or ""),
            name=str(data.get("name") or ""),
            number=str(data.get("number") or ""),
            quantity=_coerce_quantity(data.get("quantity")),
            set=CollectedSetInfo.from_dict(data.get("set")),
            rarity=_optional_str(data.get("rarity")),
            image_small=_optional_str(data.get("imageSmall")),
            image_large=_optional_str(data.get("imageLarge")),
        )


@dataclass(frozen=True)
class DisplayCard:
    """A collected card ready for rendering."""

    id: str
    name: str
    image_url: str
    number: str
    quantity: int
    rarity: str | None = None

    @classmethod
    def from_record(cls, record: CollectedCardRecord) -> "DisplayCard":
        placeholder = record.name[:3] if record.name else "Card"
        image_url = (
            record.image_small
            or record.image_large
            or PLACEHOLDER_IMAGE_URL.format(text=quote(placeholder))
        )
        return cls(
            id=record.card_id,
            name=record.name or "Unknown Card",
            image_url=image_url,
            number=record.number,
            quantity=record.quantity,
            rarity=record.rarity,
        )


@dataclass
class DisplaySet:
    """
    Collected cards of one set, aggregated for rendering.

    Invariant: total_quantity_in_set >= unique_cards_in_set >= 0, since every
    record carries a quantity of at least 1.
    """

    id: str
    name: str
    symbol_url: str | None = None
    series: str | None = None
    release_date: str | None = None
    cards: list[DisplayCard] = field(default_factory=list)
    total_quantity_in_set: int = 0
    unique_cards_in_set: int = 0

    @classmethod
    def from_set_info(cls, info: CollectedSetInfo) -> "DisplaySet":
        return cls(
            id=info.id,
            name=info.name,
            symbol_url=info.symbol_url,
            series=info.series,
            release_date=info.release_date,
        )

    def add(self, record: CollectedCardRecord) -> None:
        """Append a card and update the per-set totals."""
        self.cards.append(DisplayCard.from_record(record))
        self.total_quantity_in_set += record.quantity
        self.unique_cards_in_set += 1


@dataclass
class CollectionSummary:
    """All collected sets plus collection-wide totals."""

    sets: list[DisplaySet] = field(default_factory=list)

    def total_unique_cards(self) -> int:
        """Number of distinct cards across all sets."""
        return sum(s.unique_cards_in_set for s in self.sets)

    def total_cards(self) -> int:
        """Total number of cards across all sets."""
        return sum(s.total_quantity_in_set for s in self.sets)
