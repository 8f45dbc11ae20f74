"""Book catalog — loads books from a YAML file and serves them by id.

Follows the same pattern as the presenter registry:
- Lazy loading with _loaded guard
- In-memory dict keyed by book id
- Global singleton via get_book_catalog()
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .schemas import Book

logger = logging.getLogger(__name__)

CATALOG_PATH = os.environ.get("LIBRARY_CATALOG_PATH", "")


class BookCatalog:
    """Catalog of books loaded from a YAML file."""

    def __init__(self, catalog_path: Optional[Path] = None):
        if catalog_path is None:
            if CATALOG_PATH:
                catalog_path = Path(CATALOG_PATH)
            else:
                catalog_path = Path(__file__).parent / "definitions" / "books.yaml"
        self.catalog_path = catalog_path
        self._books: dict[int, Book] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all books from the catalog file."""
        if self._loaded:
            return

        if not self.catalog_path.exists():
            logger.warning(f"Book catalog not found: {self.catalog_path}")
            self._loaded = True
            return

        with open(self.catalog_path, "r") as f:
            data = yaml.safe_load(f) or {}

        for entry in data.get("books", []):
            try:
                book = Book.model_validate(entry)
                self._books[book.id] = book
            except ValidationError as e:
                logger.error(f"Failed to load book {entry.get('id')}: {e}")

        self._loaded = True
        logger.info(f"Loaded {len(self._books)} books from {self.catalog_path}")

    def get(self, book_id: int) -> Optional[Book]:
        """Get a book by id."""
        self.load()
        return self._books.get(book_id)

    def list_all(self) -> list[Book]:
        """List all books in catalog order."""
        self.load()
        return list(self._books.values())

    def list_ids(self) -> list[int]:
        self.load()
        return list(self._books.keys())

    def count(self) -> int:
        self.load()
        return len(self._books)


# Global catalog instance
_catalog: Optional[BookCatalog] = None


def get_book_catalog() -> BookCatalog:
    """Get the global book catalog instance."""
    global _catalog
    if _catalog is None:
        _catalog = BookCatalog()
        _catalog.load()
    return _catalog
