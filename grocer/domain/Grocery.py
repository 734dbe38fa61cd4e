"""Grocery domain entity: one tracked household item and its attributes."""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, TYPE_CHECKING

from grocer.domain.errors import PastExpirationDateError
from grocer.utilities.config import DEFAULT_CATEGORY
from grocer.utilities.constants import DATE_FORMAT

if TYPE_CHECKING:
    from grocer.domain.Location import Location


class Grocery:
    def __init__(self, name: str, amount: int = 0, expiration: Optional[date] = None,
                 category: str = DEFAULT_CATEGORY, cost: Decimal = Decimal("0"), threshold: int = 0,
                 remark: str = "", rating: Optional[int] = None, review: Optional[str] = None):
        self.name = name
        self.amount = amount
        self.expiration = expiration
        self.category = category.upper()
        self.cost = cost
        self.threshold = threshold
        self.remark = remark
        self.rating = rating
        self.review = review
        # Maintained by LocationRegistry only
        self.location: Optional["Location"] = None

    @property
    def key(self) -> str:
        """Case-insensitive identity key."""
        return self.name.casefold()

    def matches(self, name: str) -> bool:
        return self.key == name.strip().casefold()

    def set_expiration(self, expiration: date, today: Optional[date] = None):
        '''Sets the expiration date, refusing dates before today.'''
        today = today or date.today()
        if expiration < today:
            raise PastExpirationDateError(expiration.strftime(DATE_FORMAT))
        self.expiration = expiration

    def set_category(self, category: str):
        self.category = category.upper()

    def is_low(self) -> bool:
        '''True when stock is running out but not yet depleted.'''
        return 0 < self.amount <= self.threshold

    def is_depleted(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        parts = [f"{self.name} - amount: {self.amount}"]
        if self.expiration:
            parts.append(f"Exp: {self.expiration.strftime(DATE_FORMAT)}")
        parts.append(f"Cat: {self.category}")
        parts.append(f"Cost: ${self.cost:.2f}")
        if self.location is not None:
            parts.append(f"Loc: {self.location.name}")
        if self.remark:
            parts.append(f"Remark: {self.remark}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Grocery from a dictionary. The location key is resolved by the caller.'''
        d = dict(data) if isinstance(data, dict) else {}
        expiration = d.get("expiration")
        if expiration and not isinstance(expiration, date):
            try:
                expiration = datetime.strptime(expiration, DATE_FORMAT).date()
            except (TypeError, ValueError):
                expiration = None
        try:
            cost = Decimal(str(d.get("cost") or "0"))
        except InvalidOperation:
            cost = Decimal("0")
        return Grocery(
            name=d.get("name", ""),
            amount=int(d.get("amount") or 0),
            expiration=expiration or None,
            category=d.get("category") or DEFAULT_CATEGORY,
            cost=cost,
            threshold=int(d.get("threshold") or 0),
            remark=d.get("remark") or "",
            rating=d.get("rating"),
            review=d.get("review"),
        )

    def to_dict(self):
        '''Converts the Grocery to a dictionary for JSON persistence.'''
        return {
            "name": self.name,
            "amount": self.amount,
            "expiration": self.expiration.strftime(DATE_FORMAT) if self.expiration else None,
            "category": self.category,
            "cost": str(self.cost),
            "threshold": self.threshold,
            "remark": self.remark,
            "location": self.location.name if self.location is not None else None,
            "rating": self.rating,
            "review": self.review,
        }
