"""Book schemas — the catalog's model type."""

from typing import Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    """A catalog entry. Presenters read from it and never modify it."""

    id: int = Field(..., ge=1)
    author: str
    title: str
    pages: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)
    currency: str = Field(
        default="USD",
        description="ISO currency code of the price",
    )
    summary: str = ""
    published_year: Optional[int] = None
