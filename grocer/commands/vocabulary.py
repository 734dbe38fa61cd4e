"""Command vocabularies for each interpretation mode.

Each grocery verb carries an explicit category tag, so dispatch never depends
on the order the members are declared in.
"""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple, Type

from grocer.domain.errors import InvalidCommandError


class Mode(Enum):
    GROCERY = "grocery"
    CALORIES = "calories"
    PROFILE = "profile"


class Category(Enum):
    ADD_DELETE = "add_delete"
    EDIT = "edit"
    VIEW = "view"


class Command(Enum):
    """Base for verb enums: value is (token, usage)."""

    @property
    def token(self) -> str:
        return self.value[0]

    @property
    def usage(self) -> str:
        return self.value[1]

    @classmethod
    def lookup(cls, verb: str) -> Optional["Command"]:
        verb = verb.strip().lower()
        for command in cls:
            if command.token == verb:
                return command
        return None

    @classmethod
    def resolve(cls, verb: str) -> "Command":
        command = cls.lookup(verb)
        if command is None:
            raise InvalidCommandError(verb)
        return command

    @classmethod
    def reference(cls) -> List[Tuple[str, str]]:
        return [(command.token, command.usage) for command in cls]


class ControlCommand(Command):
    """Verbs available in every mode."""
    SWITCH = ("switch", "switch MODE - change to grocery, calories or profile mode")
    HELP = ("help", "help - show the commands of the current mode")
    EXIT = ("exit", "exit - leave the program")


class GroceryCommand(Command):
    ADD = ("add", "add GROCERY", Category.ADD_DELETE)
    DEL = ("del", "del GROCERY", Category.ADD_DELETE)
    EXP = ("exp", "exp GROCERY d/YYYY-MM-DD", Category.EDIT)
    CAT = ("cat", "cat GROCERY c/CATEGORY", Category.EDIT)
    AMT = ("amt", "amt GROCERY a/AMOUNT", Category.EDIT)
    USE = ("use", "use GROCERY a/AMOUNT", Category.EDIT)
    TH = ("th", "th GROCERY a/THRESHOLD", Category.EDIT)
    COST = ("cost", "cost GROCERY $PRICE", Category.EDIT)
    REMARK = ("remark", "remark GROCERY r/REMARK", Category.EDIT)
    LOC = ("loc", "loc GROCERY l/LOCATION", Category.EDIT)
    RATE = ("rate", "rate GROCERY s/RATING [REVIEW]", Category.EDIT)
    FIND = ("find", "find KEYWORD", Category.VIEW)
    VIEW = ("view", "view GROCERY", Category.VIEW)
    LIST = ("list", "list - show all groceries", Category.VIEW)
    LISTC = ("listc", "listc - sort groceries by cost", Category.VIEW)
    LISTE = ("liste", "liste - sort groceries by expiration date", Category.VIEW)
    LISTCAT = ("listcat", "listcat - sort groceries by category", Category.VIEW)
    EXPIRING = ("expiring", "expiring [DAYS] - groceries expiring soon", Category.VIEW)
    LOW = ("low", "low - groceries running low", Category.VIEW)
    LOCS = ("locs", "locs - show storage locations", Category.VIEW)

    @property
    def category(self) -> Category:
        return self.value[2]


class CalCommand(Command):
    EAT = ("eat", "eat FOOD c/CALORIES")
    VIEW = ("view", "view - show today's foods and calories")


class ProfileCommand(Command):
    UPDATE = ("update", "update name/NAME weight/KG height/CM age/YEARS goal/KCAL")
    VIEW = ("view", "view - show your profile")


MODE_COMMANDS: dict[Mode, Type[Command]] = {
    Mode.GROCERY: GroceryCommand,
    Mode.CALORIES: CalCommand,
    Mode.PROFILE: ProfileCommand,
}


def resolve_mode(name: str) -> Mode:
    try:
        return Mode(name.strip().lower())
    except ValueError:
        raise InvalidCommandError(name.strip()) from None


__all__ = [
    'Mode', 'Category', 'Command', 'ControlCommand', 'GroceryCommand', 'CalCommand',
    'ProfileCommand', 'MODE_COMMANDS', 'resolve_mode',
]
