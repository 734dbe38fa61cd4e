"""Dispatcher: routes a command line to the grocery engine, calorie log or profile.

The dispatcher holds no process-wide state; everything it mutates lives in
the AppContext it is given.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Tuple

from grocer.commands.vocabulary import (
    CalCommand, Category, ControlCommand, GroceryCommand, MODE_COMMANDS, Mode,
    ProfileCommand, resolve_mode,
)
from grocer.domain.CalorieLog import CalorieLog
from grocer.domain.GroceryList import GroceryList
from grocer.domain.Profile import Profile
from grocer.domain.errors import GroceryError, MissingParameterError
from grocer.events.Event_Bus import (
    EventBus, CALORIES_VIEWED, COMMAND_FAILED, PROFILE_UPDATED, PROFILE_VIEWED,
    SESSION_EXIT, SESSION_HELP, SESSION_MODE_SWITCHED,
)
from grocer.infra.Grocery_Repository import GroceryRepository
from grocer.utilities.config import EXPIRY_WINDOW_DAYS
from grocer.utilities.validators import parse_window_days

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    groceries: GroceryList
    bus: EventBus = field(default_factory=EventBus)
    calories: CalorieLog = field(default_factory=CalorieLog)
    profile: Profile = field(default_factory=Profile)

    def __post_init__(self):
        self.groceries.set_event_bus(self.bus)
        self.calories.set_event_bus(self.bus)

    @classmethod
    def create(cls, data_file: Optional[Path] = None, bus: Optional[EventBus] = None,
               today: Callable[[], date] = date.today) -> "AppContext":
        """Build a context backed by a JSON repository, loading any saved groceries."""
        repository = GroceryRepository(data_file)
        groceries, registry = repository.load()
        grocery_list = GroceryList(storage=repository, registry=registry, today=today).load(groceries)
        return cls(groceries=grocery_list, bus=bus or EventBus())


def split_command(line: str) -> Tuple[str, str]:
    """Tokenize 'VERB REST-OF-LINE'; REST is returned stripped (possibly empty)."""
    parts = (line or "").strip().split(maxsplit=1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0].lower(), ""
    return parts[0].lower(), parts[1].strip()


class Dispatcher:
    def __init__(self, context: AppContext, mode: Mode = Mode.GROCERY):
        self.context = context
        self.mode = mode
        self.is_running = True

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    def run(self, line: str) -> bool:
        """Execute one line, reporting every error as a message. Returns is_running."""
        verb, args = split_command(line)
        if not verb:
            return self.is_running
        try:
            self.dispatch(verb, args)
        except GroceryError as e:
            logger.info(f"Command '{verb}' rejected: {e.message}")
            self.bus.publish(COMMAND_FAILED, {"message": e.message})
        except Exception:
            logger.exception(f"Unexpected error while running '{line}'")
            self.bus.publish(COMMAND_FAILED, {"message": "Something went wrong. Please try again."})
        return self.is_running

    def dispatch(self, verb: str, args: str = ""):
        """Resolve verb against the control verbs, then the active mode's vocabulary."""
        control = ControlCommand.lookup(verb)
        if control is not None:
            return self._control(control, args)

        command = MODE_COMMANDS[self.mode].resolve(verb)
        if self.mode is Mode.GROCERY:
            return self._grocery(command, args)
        if self.mode is Mode.CALORIES:
            return self._calories(command, args)
        return self._profile(command, args)

    # --- Control ----------------------------------------------------------
    def _control(self, command: ControlCommand, args: str):
        if command is ControlCommand.SWITCH:
            if not args:
                raise MissingParameterError("switch", "MODE")
            self.mode = resolve_mode(args)
            logger.info(f"Switched to {self.mode.value} mode")
            self.bus.publish(SESSION_MODE_SWITCHED, {"mode": self.mode.value})
        elif command is ControlCommand.HELP:
            commands = MODE_COMMANDS[self.mode].reference() + ControlCommand.reference()
            self.bus.publish(SESSION_HELP, {"mode": self.mode.value, "commands": commands})
        elif command is ControlCommand.EXIT:
            self.is_running = False
            self.bus.publish(SESSION_EXIT)

    # --- Grocery mode -----------------------------------------------------
    def _grocery(self, command: GroceryCommand, args: str):
        if command.category is Category.ADD_DELETE:
            return self._add_or_delete(command, args)
        if command.category is Category.EDIT:
            return self._edit(command, args)
        return self._view(command, args)

    def _add_or_delete(self, command: GroceryCommand, args: str):
        groceries = self.context.groceries
        if command is GroceryCommand.ADD:
            return groceries.add(args)
        return groceries.remove(args)

    def _edit(self, command: GroceryCommand, args: str):
        groceries = self.context.groceries
        handlers = {
            GroceryCommand.EXP: groceries.edit_expiration,
            GroceryCommand.CAT: groceries.edit_category,
            GroceryCommand.AMT: lambda details: groceries.edit_amount(details, is_use=False),
            GroceryCommand.USE: lambda details: groceries.edit_amount(details, is_use=True),
            GroceryCommand.TH: groceries.edit_threshold,
            GroceryCommand.COST: groceries.edit_cost,
            GroceryCommand.REMARK: groceries.edit_remark,
            GroceryCommand.LOC: groceries.edit_location,
            GroceryCommand.RATE: groceries.edit_rating,
        }
        return handlers[command](args)

    def _view(self, command: GroceryCommand, args: str):
        groceries = self.context.groceries
        if command is GroceryCommand.FIND:
            return groceries.find(args)
        if command is GroceryCommand.VIEW:
            return groceries.view(args)
        if command is GroceryCommand.EXPIRING:
            days = parse_window_days(args) if args else EXPIRY_WINDOW_DAYS
            return groceries.expiring_within_days(days)
        handlers = {
            GroceryCommand.LIST: groceries.list_all,
            GroceryCommand.LISTC: groceries.sort_by_cost,
            GroceryCommand.LISTE: groceries.sort_by_expiration,
            GroceryCommand.LISTCAT: groceries.sort_by_category,
            GroceryCommand.LOW: groceries.list_low_stock,
            GroceryCommand.LOCS: groceries.list_locations,
        }
        return handlers[command]()

    # --- Calories mode ----------------------------------------------------
    def _calories(self, command: CalCommand, args: str):
        calories = self.context.calories
        if command is CalCommand.EAT:
            return calories.eat(args)
        self.bus.publish(CALORIES_VIEWED, {
            "foods": calories.get_foods(),
            "total": calories.total(),
            "goal": self.context.profile.goal,
        })
        return calories.get_foods()

    # --- Profile mode -----------------------------------------------------
    def _profile(self, command: ProfileCommand, args: str):
        profile = self.context.profile
        if command is ProfileCommand.UPDATE:
            profile.update(args)
            self.bus.publish(PROFILE_UPDATED, {"profile": profile})
        else:
            self.bus.publish(PROFILE_VIEWED, {"profile": profile})
        return profile
