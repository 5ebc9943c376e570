"""Catalog and order payload models."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BookSummary(BaseModel):
    """One row of a topic search."""

    model_config = ConfigDict(populate_by_name=True)

    item_number: int = Field(
        validation_alias=AliasChoices("item_number", "itemNumber", "id")
    )
    title: str


class BookDetail(BaseModel):
    """Full record for a single book."""

    model_config = ConfigDict(populate_by_name=True)

    item_number: int = Field(
        validation_alias=AliasChoices("item_number", "itemNumber", "id")
    )
    title: str
    topic: str
    price: float
    stock: int = Field(validation_alias=AliasChoices("stock", "quantity"))


class Confirmation(BaseModel):
    """Order service answer to a purchase."""

    item_number: int
    message: str
    ok: bool = True


def parse_search_results(payload: Any) -> list[BookSummary]:
    """
    Accept the search shapes catalog replicas are known to return.

    Examples:
        [{"id": 1, "title": "RPCs for Noobs."}]
        {"items": [{"id": 1, "title": "RPCs for Noobs."}]}
        {"items": {"RPCs for Noobs.": 1}}
    """
    if payload is None:
        return []

    if isinstance(payload, dict):
        payload = payload.get("items", [])

    if isinstance(payload, dict):
        return [
            BookSummary(item_number=item_number, title=title)
            for title, item_number in payload.items()
        ]

    return [BookSummary.model_validate(row) for row in payload]


def parse_book_detail(payload: Any) -> BookDetail:
    return BookDetail.model_validate(payload)


def parse_confirmation(item_number: int | str, payload: Any) -> Confirmation:
    if not isinstance(payload, dict):
        payload = {}
    message = payload.get("message") or f"Bought book #{item_number} successfully!"
    return Confirmation(
        item_number=int(item_number),
        message=message,
        ok=bool(payload.get("ok", True)),
    )
