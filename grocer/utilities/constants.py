from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DATE_PATTERN: Final[str] = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
INTEGER_PATTERN: Final[str] = r"[+-]?[0-9]+"
DECIMAL_PATTERN: Final[str] = r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?"
MIN_RATING: Final[int] = 1
MAX_RATING: Final[int] = 5

# Delimiter markers separating a grocery name from the new value
EXPIRATION_MARKER: Final[str] = "d/"
CATEGORY_MARKER: Final[str] = "c/"
AMOUNT_MARKER: Final[str] = "a/"
COST_MARKER: Final[str] = "$"
REMARK_MARKER: Final[str] = "r/"
LOCATION_MARKER: Final[str] = "l/"
RATING_MARKER: Final[str] = "s/"
CALORIES_MARKER: Final[str] = "c/"
