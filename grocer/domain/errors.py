"""User-input validation errors raised by the grocery engine and dispatcher.

All of them derive from GroceryError so the dispatch boundary can render any
of them as a message without ending the session.
"""


class GroceryError(Exception):
    """Base class for every recoverable command error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(GroceryError):
    def __init__(self, what: str):
        super().__init__(f"The {what} cannot be empty.")
        self.what = what


class NoSuchGroceryError(GroceryError):
    def __init__(self, name: str):
        super().__init__(f"There is no such grocery ({name}).")
        self.name = name


class DuplicateGroceryError(GroceryError):
    def __init__(self, name: str):
        super().__init__(f"A grocery named '{name}' already exists.")
        self.name = name


class MissingParameterError(GroceryError):
    def __init__(self, command: str, marker: str, message: str = ""):
        super().__init__(message or f"Command '{command}' is missing its '{marker}' parameter.")
        self.command = command
        self.marker = marker


class IncompleteParameterError(MissingParameterError):
    def __init__(self, marker: str, command: str = ""):
        super().__init__(command, marker, f"Please give a value after '{marker}'.")


class InvalidAmountError(GroceryError):
    def __init__(self, value: str = ""):
        super().__init__(f"Invalid amount '{value}': please enter a whole number greater than 0.")
        self.value = value


class InvalidCostError(GroceryError):
    def __init__(self, value: str = ""):
        super().__init__(f"Invalid cost '{value}': please enter a number that is not negative.")
        self.value = value


class InvalidRatingError(GroceryError):
    def __init__(self, value: str = ""):
        super().__init__(f"Invalid rating '{value}': please enter a whole number from 1 to 5.")
        self.value = value


class InvalidCaloriesError(GroceryError):
    def __init__(self, value: str = ""):
        super().__init__(f"Invalid calories '{value}': please enter a number that is not negative.")
        self.value = value


class InvalidProfileError(GroceryError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid profile details: {detail}")


class DateFormatError(GroceryError):
    def __init__(self, value: str = ""):
        super().__init__(f"Invalid date '{value}': please use the format YYYY-MM-DD.")
        self.value = value


class PastExpirationDateError(GroceryError):
    def __init__(self, value):
        super().__init__(f"The expiration date {value} is already in the past.")
        self.value = value


class CannotUseError(GroceryError):
    def __init__(self, name: str = ""):
        super().__init__(f"Cannot use {name or 'this grocery'}: the amount is already 0.")
        self.name = name


class SameLocationError(GroceryError):
    def __init__(self, grocery: str, location: str):
        super().__init__(f"{grocery} is already stored in {location}.")
        self.grocery = grocery
        self.location = location


class InvalidCommandError(GroceryError):
    def __init__(self, verb: str = ""):
        super().__init__(f"Unknown command '{verb}'. Type 'help' to see the available commands.")
        self.verb = verb


__all__ = [
    'GroceryError', 'EmptyInputError', 'NoSuchGroceryError', 'DuplicateGroceryError',
    'MissingParameterError', 'IncompleteParameterError', 'InvalidAmountError',
    'InvalidCostError', 'InvalidRatingError', 'InvalidCaloriesError', 'InvalidProfileError',
    'DateFormatError', 'PastExpirationDateError', 'CannotUseError', 'SameLocationError',
    'InvalidCommandError',
]
