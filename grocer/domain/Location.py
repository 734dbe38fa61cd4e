"""Storage locations and the registry that keeps grocery <-> location links consistent."""
import logging
from typing import Dict, List, Optional, Set, Tuple

from grocer.domain.Grocery import Grocery
from grocer.domain.errors import SameLocationError

logger = logging.getLogger(__name__)


class Location:
    def __init__(self, name: str):
        self.name = name
        # Back-references only; the GroceryList owns the groceries.
        self.members: Set[Grocery] = set()

    @property
    def key(self) -> str:
        return self.name.casefold()

    def __contains__(self, grocery: Grocery) -> bool:
        return grocery in self.members

    def __str__(self) -> str:
        names = ", ".join(sorted(g.name for g in self.members))
        return f"{self.name}: {names or '-'}"

    __repr__ = __str__


class LocationRegistry:
    """Named locations keyed case-insensitively.

    assign() and detach() are the only places that touch Location.members or
    Grocery.location, and they always update both sides together.
    """

    def __init__(self):
        self._locations: Dict[str, Location] = {}

    def find(self, name: str) -> Optional[Location]:
        return self._locations.get(name.strip().casefold())

    def get_or_create(self, name: str) -> Tuple[Location, bool]:
        '''Returns (location, created).'''
        location = self.find(name)
        if location is not None:
            return location, False
        location = Location(name.strip())
        self._locations[location.key] = location
        logger.info(f"Added location {location.name}")
        return location, True

    def assign(self, grocery: Grocery, location: Location):
        if grocery.location is location:
            raise SameLocationError(grocery.name, location.name)
        self.detach(grocery)
        location.members.add(grocery)
        grocery.location = location

    def detach(self, grocery: Grocery):
        old = grocery.location
        if old is not None:
            old.members.discard(grocery)
        grocery.location = None

    def get_locations(self) -> List[Location]:
        return list(self._locations.values())

    def __len__(self) -> int:
        return len(self._locations)
