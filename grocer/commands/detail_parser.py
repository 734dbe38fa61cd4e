"""Splits an edit command's argument string into (grocery name, new value).

Every field-edit verb goes through parse_details() with its own delimiter
marker, e.g. 'Milk a/5' with 'a/' gives ('Milk', '5').
"""
from typing import Callable, Tuple

from grocer.domain.errors import (
    EmptyInputError,
    IncompleteParameterError,
    MissingParameterError,
    NoSuchGroceryError,
)

__all__ = ["split_details", "parse_details"]


def _split(details: str, marker: str) -> Tuple[str, ...]:
    if details is None or not details.strip():
        raise EmptyInputError("grocery")
    # str.partition is literal, so '$' is not a regex anchor here
    identifier, found, payload = details.partition(marker)
    if not found:
        return (identifier.strip(),)
    return identifier.strip(), payload.strip()


def _require_payload(parts: Tuple[str, ...], marker: str, command: str) -> Tuple[str, str]:
    if len(parts) < 2:
        raise MissingParameterError(command, marker)
    if not parts[1]:
        raise IncompleteParameterError(marker, command)
    return parts[0], parts[1]


def split_details(details: str, marker: str, command: str = "") -> Tuple[str, str]:
    """Split on the first occurrence of marker without checking the name."""
    return _require_payload(_split(details, marker), marker, command)


def parse_details(details: str, marker: str, is_known: Callable[[str], bool],
                  command: str = "") -> Tuple[str, str]:
    """Split on the first occurrence of marker and check the name exists.

    Raises EmptyInputError, NoSuchGroceryError, MissingParameterError or
    IncompleteParameterError, in that order of precedence.
    """
    parts = _split(details, marker)
    if not is_known(parts[0]):
        raise NoSuchGroceryError(parts[0])
    return _require_payload(parts, marker, command)
