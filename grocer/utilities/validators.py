"""
Input validation schemas using Pydantic for command payloads.

Each parse_* helper validates one raw payload string and translates a
pydantic ValidationError into the matching domain error.
"""
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from grocer.domain.errors import (
    DateFormatError,
    InvalidAmountError,
    InvalidCaloriesError,
    InvalidCostError,
    InvalidProfileError,
    InvalidRatingError,
)
from grocer.utilities.constants import (
    DATE_FORMAT, DATE_PATTERN, DECIMAL_PATTERN, INTEGER_PATTERN, MAX_RATING, MIN_RATING,
)


def _plain_integer(v):
    """Only accept ASCII digits with an optional sign; no '5.0' or '1_000'."""
    if isinstance(v, str) and not re.fullmatch(INTEGER_PATTERN, v):
        raise ValueError('Expected a whole number')
    return v


class AmountInput(BaseModel):
    """Schema for amount/use payloads: a whole number greater than 0."""
    amount: int = Field(..., gt=0)

    @field_validator('amount', mode='before')
    @classmethod
    def whole_number(cls, v):
        return _plain_integer(v)


class ThresholdInput(BaseModel):
    """Schema for threshold payloads. Sign is not checked."""
    threshold: int

    @field_validator('threshold', mode='before')
    @classmethod
    def whole_number(cls, v):
        return _plain_integer(v)


class WindowInput(BaseModel):
    """Schema for the number of days looked ahead by 'expiring'."""
    days: int = Field(..., ge=0)

    @field_validator('days', mode='before')
    @classmethod
    def whole_number(cls, v):
        return _plain_integer(v)


class CostInput(BaseModel):
    """Schema for cost payloads."""
    cost: Decimal = Field(..., ge=0, allow_inf_nan=False)

    @field_validator('cost', mode='before')
    @classmethod
    def plain_decimal(cls, v):
        if isinstance(v, str) and not re.fullmatch(DECIMAL_PATTERN, v):
            raise ValueError('Expected a plain decimal number')
        return v


class ExpirationInput(BaseModel):
    """Schema for expiration payloads in the fixed YYYY-MM-DD format."""
    expiration: date

    @field_validator('expiration', mode='before')
    @classmethod
    def parse_fixed_format(cls, v):
        if isinstance(v, date):
            return v
        if not isinstance(v, str) or not re.fullmatch(DATE_PATTERN, v):
            raise ValueError('Expiration must be written as YYYY-MM-DD')
        return datetime.strptime(v, DATE_FORMAT).date()


class RatingInput(BaseModel):
    """Schema for rating payloads: a score followed by an optional review."""
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    review: Optional[str] = None

    @field_validator('rating', mode='before')
    @classmethod
    def whole_number(cls, v):
        return _plain_integer(v)

    @field_validator('review')
    @classmethod
    def blank_review_is_none(cls, v):
        """Remove leading/trailing whitespace; an empty review is no review."""
        if v is None:
            return None
        return v.strip() or None


class CaloriesInput(BaseModel):
    calories: float = Field(..., ge=0, allow_inf_nan=False)


class ProfileInput(BaseModel):
    """Schema for partial profile updates."""
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    weight: Optional[float] = Field(None, gt=0, le=500)
    height: Optional[float] = Field(None, gt=0, le=300)
    age: Optional[int] = Field(None, gt=0, le=150)
    goal: Optional[int] = Field(None, ge=0, le=10000)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


def parse_amount(text: str) -> int:
    try:
        return AmountInput(amount=text).amount
    except ValidationError as e:
        raise InvalidAmountError(text) from e


def parse_threshold(text: str) -> int:
    try:
        return ThresholdInput(threshold=text).threshold
    except ValidationError as e:
        raise InvalidAmountError(text) from e


def parse_window_days(text: str) -> int:
    try:
        return WindowInput(days=text).days
    except ValidationError as e:
        raise InvalidAmountError(text) from e


def parse_cost(text: str) -> Decimal:
    try:
        return CostInput(cost=text).cost
    except ValidationError as e:
        raise InvalidCostError(text) from e


def parse_expiration(text: str) -> date:
    try:
        return ExpirationInput(expiration=text).expiration
    except ValidationError as e:
        raise DateFormatError(text) from e


def parse_rating(text: str) -> RatingInput:
    """Split 'RATING [REVIEW...]' and validate both parts."""
    score, _, review = text.strip().partition(' ')
    try:
        return RatingInput(rating=score, review=review)
    except ValidationError as e:
        raise InvalidRatingError(score) from e


def parse_calories(text: str) -> float:
    try:
        return CaloriesInput(calories=text).calories
    except ValidationError as e:
        raise InvalidCaloriesError(text) from e


def parse_profile(fields: dict) -> ProfileInput:
    try:
        return ProfileInput(**fields)
    except ValidationError as e:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidProfileError(detail) from e
