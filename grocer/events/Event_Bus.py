"""Simple Event Bus / Observer implementation carrying command results to the presentation layer.

Event names used so far:
  grocery.added          -> {"grocery": Grocery}
  grocery.removed        -> {"grocery": Grocery, "remaining": int}
  grocery.updated        -> {"grocery": Grocery, "field": str}
  grocery.low_stock      -> {"grocery": Grocery, "remaining": int, "threshold": int}
  grocery.depleted       -> {"grocery": Grocery}
  grocery.past_expiration-> {"grocery": Grocery, "error": PastExpirationDateError}
  grocery.found          -> {"groceries": [Grocery], "keyword": str}
  grocery.viewed         -> {"grocery": Grocery}
  grocery.not_found      -> {"name": str}
  grocery.listed         -> {"groceries": [Grocery], "title": str}
  location.added         -> {"location": Location}
  location.listed        -> {"locations": [Location]}
  storage.failed         -> {"error": OSError}
  calories.eaten         -> {"food": Food, "total": float}
  calories.viewed        -> {"foods": [Food], "total": float, "goal": int | None}
  profile.updated / profile.viewed -> {"profile": Profile}
  session.mode_switched  -> {"mode": str}
  session.help           -> {"mode": str, "commands": [(verb, usage)]}
  session.exit           -> None
  command.failed         -> {"message": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
GROCERY_ADDED = "grocery.added"
GROCERY_REMOVED = "grocery.removed"
GROCERY_UPDATED = "grocery.updated"
GROCERY_LOW_STOCK = "grocery.low_stock"
GROCERY_DEPLETED = "grocery.depleted"
GROCERY_PAST_EXPIRATION = "grocery.past_expiration"
GROCERY_FOUND = "grocery.found"
GROCERY_VIEWED = "grocery.viewed"
GROCERY_NOT_FOUND = "grocery.not_found"
GROCERY_LISTED = "grocery.listed"
LOCATION_ADDED = "location.added"
LOCATION_LISTED = "location.listed"
STORAGE_FAILED = "storage.failed"
CALORIES_EATEN = "calories.eaten"
CALORIES_VIEWED = "calories.viewed"
PROFILE_UPDATED = "profile.updated"
PROFILE_VIEWED = "profile.viewed"
SESSION_MODE_SWITCHED = "session.mode_switched"
SESSION_HELP = "session.help"
SESSION_EXIT = "session.exit"
COMMAND_FAILED = "command.failed"

ALL_EVENTS = (
	GROCERY_ADDED, GROCERY_REMOVED, GROCERY_UPDATED, GROCERY_LOW_STOCK, GROCERY_DEPLETED,
	GROCERY_PAST_EXPIRATION, GROCERY_FOUND, GROCERY_VIEWED, GROCERY_NOT_FOUND, GROCERY_LISTED,
	LOCATION_ADDED, LOCATION_LISTED, STORAGE_FAILED, CALORIES_EATEN, CALORIES_VIEWED,
	PROFILE_UPDATED, PROFILE_VIEWED, SESSION_MODE_SWITCHED, SESSION_HELP, SESSION_EXIT,
	COMMAND_FAILED,
)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def subscribe_all(self, callback: Callable[[str, Any], None]):
		for event_name in ALL_EVENTS:
			self.subscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception(f"Error delivering {event_name} to {cb}")


class EventRecorder:
	"""Subscriber that keeps every (event_name, payload) it receives."""

	def __init__(self):
		self.events: List[tuple] = []

	def __call__(self, event_name: str, payload: Any):
		self.events.append((event_name, payload))

	def names(self) -> List[str]:
		return [name for name, _ in self.events]

	def last(self, event_name: str = None):
		for name, payload in reversed(self.events):
			if event_name is None or name == event_name:
				return payload
		return None

	def clear(self):
		self.events.clear()


__all__ = [
	'EventBus', 'EventRecorder', 'ALL_EVENTS',
	'GROCERY_ADDED', 'GROCERY_REMOVED', 'GROCERY_UPDATED', 'GROCERY_LOW_STOCK', 'GROCERY_DEPLETED',
	'GROCERY_PAST_EXPIRATION', 'GROCERY_FOUND', 'GROCERY_VIEWED', 'GROCERY_NOT_FOUND',
	'GROCERY_LISTED', 'LOCATION_ADDED', 'LOCATION_LISTED', 'STORAGE_FAILED', 'CALORIES_EATEN',
	'CALORIES_VIEWED', 'PROFILE_UPDATED', 'PROFILE_VIEWED', 'SESSION_MODE_SWITCHED',
	'SESSION_HELP', 'SESSION_EXIT', 'COMMAND_FAILED',
]
