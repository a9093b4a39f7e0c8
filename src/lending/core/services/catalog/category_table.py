"""Shelf categories indexed by category id."""

from __future__ import annotations

from collections.abc import Sequence

from src.lending.core.exceptions import InvalidCategory
from src.lending.runtime.config.config_data import CategoryConfig
from src.lending.runtime.context import get_config


class CategoryTable:
    """Ordered category list; category id N is the N-th entry (1-based)."""

    def __init__(self, categories: Sequence[CategoryConfig]) -> None:
        self._categories = tuple(categories)

    @classmethod
    def from_config(cls) -> CategoryTable:
        return cls(get_config().catalog.categories)

    def __len__(self) -> int:
        return len(self._categories)

    def ids(self) -> range:
        return range(1, len(self._categories) + 1)

    def resolve_id(self, category_id: int | str) -> int:
        """Normalize a category id given as int or numeric string.

        Raises:
            InvalidCategory: if the id is not an integer within the table.
        """
        if isinstance(category_id, bool):
            raise InvalidCategory(category_id)
        try:
            index = int(category_id)
        except (TypeError, ValueError):
            raise InvalidCategory(category_id) from None
        if not 1 <= index <= len(self._categories):
            raise InvalidCategory(category_id)
        return index

    def prefix_for(self, category_id: int | str) -> str:
        return self._categories[self.resolve_id(category_id) - 1].prefix

    def name_for(self, category_id: int | str) -> str:
        return self._categories[self.resolve_id(category_id) - 1].name

    def id_for_name(self, name: str) -> int | None:
        for index, category in enumerate(self._categories, start=1):
            if category.name == name:
                return index
        return None
