"""User profile entity used by the calories mode for its daily goal."""
import logging
import re
from typing import Dict, Optional

from grocer.domain.errors import EmptyInputError, InvalidProfileError
from grocer.utilities.validators import parse_profile

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r'(\w+)/(.*?)(?=\s+\w+/|$)')


def parse_profile_fields(details: str) -> Dict[str, str]:
    """Parse 'name/Alex weight/70 goal/2000' into a dict of raw strings."""
    if details is None or not details.strip():
        raise EmptyInputError("profile details")
    fields = {key.lower(): value.strip() for key, value in _FIELD_RE.findall(details.strip())}
    if not fields:
        raise InvalidProfileError("expected fields written as key/value")
    return fields


class Profile:
    def __init__(self, name: str = "", weight: Optional[float] = None, height: Optional[float] = None,
                 age: Optional[int] = None, goal: Optional[int] = None):
        self.name = name
        self.weight = weight
        self.height = height
        self.age = age
        self.goal = goal

    def update(self, details: str) -> "Profile":
        '''Applies a partial update; fields not mentioned are kept.'''
        validated = parse_profile(parse_profile_fields(details))
        for field, value in validated.model_dump(exclude_none=True).items():
            setattr(self, field, value)
        logger.info(f"Updated profile {self.name or '(unnamed)'}")
        return self

    def __str__(self) -> str:
        def show(value, unit=""):
            return f"{value:g}{unit}" if isinstance(value, (int, float)) else "-"
        return (f"Name: {self.name or '-'} - Weight: {show(self.weight, 'kg')} - "
                f"Height: {show(self.height, 'cm')} - Age: {show(self.age)} - "
                f"Daily goal: {show(self.goal, ' kcal')}")

    __repr__ = __str__
