"""Grocery report helpers: filters and sort keys used by GroceryList views."""
from __future__ import annotations
from datetime import date, timedelta
from typing import Iterable, List, Tuple

from grocer.domain.Grocery import Grocery

__all__ = [
    "search_by_keyword", "low_stock", "expiring_within",
    "expiration_sort_key", "cost_sort_key", "category_sort_key",
]


def search_by_keyword(groceries: Iterable[Grocery], keyword: str) -> List[Grocery]:
    """Case-insensitive substring match on the name, in collection order."""
    needle = keyword.casefold()
    return [g for g in groceries if needle in g.name.casefold()]


def low_stock(groceries: Iterable[Grocery]) -> List[Grocery]:
    return [g for g in groceries if g.is_low()]


def expiring_within(groceries: Iterable[Grocery], today: date, days: int) -> List[Grocery]:
    """Return groceries expiring in [today, today + days]. Undated groceries are skipped."""
    last_day = today + timedelta(days=days)
    return [g for g in groceries
            if g.expiration is not None and today <= g.expiration <= last_day]


def expiration_sort_key(grocery: Grocery) -> Tuple[int, date]:
    # Undated groceries share one key so they stay in their original relative order
    if grocery.expiration is None:
        return (1, date.min)
    return (0, grocery.expiration)


def cost_sort_key(grocery: Grocery):
    return grocery.cost


def category_sort_key(grocery: Grocery) -> str:
    return grocery.category
