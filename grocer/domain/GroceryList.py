"""GroceryList aggregate: owns every Grocery, applies edit commands and builds views."""
import logging
from datetime import date
from typing import Callable, List, Optional, Protocol

from grocer.commands.detail_parser import parse_details
from grocer.domain.Grocery import Grocery
from grocer.domain.Location import Location, LocationRegistry
from grocer.domain.errors import (
    CannotUseError,
    DuplicateGroceryError,
    EmptyInputError,
    NoSuchGroceryError,
    PastExpirationDateError,
)
from grocer.events.Event_Bus import (
    EventBus,
    GROCERY_ADDED, GROCERY_REMOVED, GROCERY_UPDATED, GROCERY_LOW_STOCK, GROCERY_DEPLETED,
    GROCERY_PAST_EXPIRATION, GROCERY_FOUND, GROCERY_VIEWED, GROCERY_NOT_FOUND, GROCERY_LISTED,
    LOCATION_ADDED, LOCATION_LISTED, STORAGE_FAILED,
)
from grocer.logic import reports
from grocer.utilities.config import EXPIRY_WINDOW_DAYS
from grocer.utilities.constants import (
    AMOUNT_MARKER, CATEGORY_MARKER, COST_MARKER, EXPIRATION_MARKER,
    LOCATION_MARKER, RATING_MARKER, REMARK_MARKER,
)
from grocer.utilities.validators import (
    parse_amount, parse_cost, parse_expiration, parse_rating, parse_threshold,
)

logger = logging.getLogger(__name__)


class GroceryStorage(Protocol):
    def save(self, groceries: List[Grocery]) -> None: ...


class GroceryList:
    def __init__(self, storage: Optional[GroceryStorage] = None,
                 registry: Optional[LocationRegistry] = None,
                 today: Callable[[], date] = date.today):
        self.groceries: List[Grocery] = []
        self.locations = registry or LocationRegistry()
        self._storage = storage
        self._today = today
        self._event_bus = EventBus()

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    def _publish(self, event_name: str, payload=None):
        self._event_bus.publish(event_name, payload)

    def _persist(self):
        '''Saves the whole collection. I/O failures are reported, never rolled back.'''
        if self._storage is None:
            return
        try:
            self._storage.save(self.groceries)
        except OSError as e:
            logger.error(f"Failed to save groceries: {e}")
            self._publish(STORAGE_FAILED, {"error": e})

    # --- Lookup -----------------------------------------------------------
    def is_grocery_exists(self, name: str) -> bool:
        return self.find_grocery(name) is not None

    def find_grocery(self, name: str) -> Optional[Grocery]:
        for grocery in self.groceries:
            if grocery.matches(name):
                return grocery
        return None

    def get_grocery(self, name: str) -> Grocery:
        grocery = self.find_grocery(name)
        if grocery is None:
            raise NoSuchGroceryError(name.strip())
        return grocery

    def get_groceries(self) -> List[Grocery]:
        return self.groceries

    def _details(self, details: str, marker: str, command: str):
        name, value = parse_details(details, marker, self.is_grocery_exists, command)
        return self.get_grocery(name), value

    def load(self, groceries: List[Grocery]):
        '''Replaces the collection with already-built groceries (no persistence, no events).'''
        self.groceries = list(groceries)
        return self

    # --- Create / delete --------------------------------------------------
    def add(self, name: str) -> Grocery:
        name = (name or "").strip()
        if not name:
            raise EmptyInputError("grocery")
        if self.is_grocery_exists(name):
            raise DuplicateGroceryError(name)
        grocery = Grocery(name)
        self.groceries.append(grocery)
        logger.info(f"Added {grocery}")
        self._persist()
        self._publish(GROCERY_ADDED, {"grocery": grocery})
        return grocery

    def remove(self, name: str) -> Grocery:
        name = (name or "").strip()
        if not name:
            raise EmptyInputError("grocery")
        grocery = self.get_grocery(name)
        self.groceries.remove(grocery)
        self.locations.detach(grocery)
        logger.info(f"Removed {grocery.name}")
        self._persist()
        self._publish(GROCERY_REMOVED, {"grocery": grocery, "remaining": len(self.groceries)})
        return grocery

    # --- Field edits ------------------------------------------------------
    def _updated(self, grocery: Grocery, field: str):
        logger.info(f"Set {field} of {grocery.name}")
        self._persist()
        self._publish(GROCERY_UPDATED, {"grocery": grocery, "field": field})
        return grocery

    def edit_expiration(self, details: str) -> Grocery:
        grocery, value = self._details(details, EXPIRATION_MARKER, "exp")
        expiration = parse_expiration(value)
        try:
            grocery.set_expiration(expiration, self._today())
        except PastExpirationDateError as e:
            logger.warning(f"Rejected past expiration {value} for {grocery.name}")
            self._publish(GROCERY_PAST_EXPIRATION, {"grocery": grocery, "error": e})
        return self._updated(grocery, "expiration")

    def edit_category(self, details: str) -> Grocery:
        grocery, value = self._details(details, CATEGORY_MARKER, "cat")
        grocery.set_category(value)
        return self._updated(grocery, "category")

    def edit_amount(self, details: str, is_use: bool = False) -> Grocery:
        '''Sets the amount, or with is_use reduces it (never below 0).'''
        grocery, value = self._details(details, AMOUNT_MARKER, "use" if is_use else "amt")
        amount = parse_amount(value)

        if is_use and grocery.amount == 0:
            raise CannotUseError(grocery.name)
        elif is_use:
            amount = max(0, grocery.amount - amount)

        grocery.amount = amount
        logger.info(f"Set amount of {grocery.name} to {amount}")
        self._persist()
        if grocery.is_depleted():
            self._publish(GROCERY_DEPLETED, {"grocery": grocery})
        elif grocery.is_low():
            self._publish(GROCERY_LOW_STOCK, {
                "grocery": grocery,
                "remaining": grocery.amount,
                "threshold": grocery.threshold,
            })
        else:
            self._publish(GROCERY_UPDATED, {"grocery": grocery, "field": "amount"})
        return grocery

    def edit_remark(self, details: str) -> Grocery:
        grocery, value = self._details(details, REMARK_MARKER, "remark")
        remark = value.strip()
        if not remark:
            raise EmptyInputError("remark")
        grocery.remark = remark
        return self._updated(grocery, "remark")

    def edit_cost(self, details: str) -> Grocery:
        grocery, value = self._details(details, COST_MARKER, "cost")
        grocery.cost = parse_cost(value)
        return self._updated(grocery, "cost")

    def edit_threshold(self, details: str) -> Grocery:
        grocery, value = self._details(details, AMOUNT_MARKER, "th")
        grocery.threshold = parse_threshold(value)
        return self._updated(grocery, "threshold")

    def edit_location(self, details: str) -> Grocery:
        grocery, value = self._details(details, LOCATION_MARKER, "loc")
        location, created = self.locations.get_or_create(value)
        if created:
            self._publish(LOCATION_ADDED, {"location": location})
        self.locations.assign(grocery, location)
        return self._updated(grocery, "location")

    def edit_rating(self, details: str) -> Grocery:
        grocery, value = self._details(details, RATING_MARKER, "rate")
        rating = parse_rating(value)
        grocery.rating = rating.rating
        grocery.review = rating.review
        return self._updated(grocery, "rating")

    # --- Views ------------------------------------------------------------
    def find(self, keyword: str) -> List[Grocery]:
        keyword = (keyword or "").strip()
        if not keyword:
            raise EmptyInputError("keyword")
        found = reports.search_by_keyword(self.groceries, keyword)
        self._publish(GROCERY_FOUND, {"groceries": found, "keyword": keyword})
        return found

    def view(self, name: str) -> Optional[Grocery]:
        '''Exact (case-insensitive) match; publishes not_found instead of raising.'''
        name = (name or "").strip()
        if not name:
            raise EmptyInputError("grocery")
        grocery = self.find_grocery(name)
        if grocery is None:
            self._publish(GROCERY_NOT_FOUND, {"name": name})
        else:
            self._publish(GROCERY_VIEWED, {"grocery": grocery})
        return grocery

    def _listed(self, groceries: List[Grocery], title: str) -> List[Grocery]:
        self._publish(GROCERY_LISTED, {"groceries": groceries, "title": title})
        return groceries

    def list_all(self) -> List[Grocery]:
        return self._listed(list(self.groceries), "Here are your groceries:")

    def list_low_stock(self) -> List[Grocery]:
        return self._listed(reports.low_stock(self.groceries), "These groceries are running low:")

    def expiring_within_days(self, days: int = EXPIRY_WINDOW_DAYS) -> List[Grocery]:
        expiring = reports.expiring_within(self.groceries, self._today(), days)
        return self._listed(expiring, f"Here are the groceries expiring in the next {days} days:")

    def list_locations(self) -> List[Location]:
        locations = self.locations.get_locations()
        self._publish(LOCATION_LISTED, {"locations": locations})
        return locations

    # --- Sorting (in place) -----------------------------------------------
    def sort_by_expiration(self) -> List[Grocery]:
        self.groceries.sort(key=reports.expiration_sort_key)
        return self._listed(self.groceries, "Groceries sorted by expiration date:")

    def sort_by_cost(self) -> List[Grocery]:
        self.groceries.sort(key=reports.cost_sort_key, reverse=True)
        return self._listed(self.groceries, "Groceries sorted by cost:")

    def sort_by_category(self) -> List[Grocery]:
        self.groceries.sort(key=reports.category_sort_key)
        return self._listed(self.groceries, "Groceries sorted by category:")

    def __len__(self) -> int:
        return len(self.groceries)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(g) for g in self.groceries)
        return f"Groceries:\n\t{items_str}"
