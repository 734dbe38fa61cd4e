"""Console observers: render command results published on an EventBus.

attach(bus) subscribes one renderer to every event name; all user-facing
formatting of grocery results lives here, not in the domain layer.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List

from .Event_Bus import (
    EventBus,
    GROCERY_ADDED, GROCERY_REMOVED, GROCERY_UPDATED, GROCERY_LOW_STOCK, GROCERY_DEPLETED,
    GROCERY_PAST_EXPIRATION, GROCERY_FOUND, GROCERY_VIEWED, GROCERY_NOT_FOUND, GROCERY_LISTED,
    LOCATION_ADDED, LOCATION_LISTED, STORAGE_FAILED, CALORIES_EATEN, CALORIES_VIEWED,
    PROFILE_UPDATED, PROFILE_VIEWED, SESSION_MODE_SWITCHED, SESSION_HELP, SESSION_EXIT,
    COMMAND_FAILED,
)
from grocer.utilities.constants import DATE_FORMAT


def _numbered(items: List[Any]) -> List[str]:
    return [f"  {i}. {item}" for i, item in enumerate(items, 1)]


def _grocery_detail(grocery) -> List[str]:
    exp = grocery.expiration.strftime(DATE_FORMAT) if grocery.expiration else "-"
    rating = f"{grocery.rating}/5" if grocery.rating else "-"
    lines = [
        f"Name: {grocery.name}",
        f"  Amount: {grocery.amount}",
        f"  Expiration: {exp}",
        f"  Category: {grocery.category}",
        f"  Cost: ${grocery.cost:.2f}",
        f"  Threshold: {grocery.threshold}",
        f"  Location: {grocery.location.name if grocery.location is not None else '-'}",
        f"  Remark: {grocery.remark or '-'}",
        f"  Rating: {rating}",
    ]
    if grocery.review:
        lines.append(f"  Review: {grocery.review}")
    return lines


def _updated_line(grocery, field: str) -> str:
    values = {
        "expiration": lambda g: g.expiration.strftime(DATE_FORMAT) if g.expiration else "-",
        "category": lambda g: g.category,
        "amount": lambda g: str(g.amount),
        "threshold": lambda g: str(g.threshold),
        "cost": lambda g: f"${g.cost:.2f}",
        "remark": lambda g: g.remark,
        "location": lambda g: g.location.name if g.location is not None else "-",
        "rating": lambda g: f"{g.rating}/5" + (f" ({g.review})" if g.review else ""),
    }
    value = values.get(field, lambda g: "")(grocery)
    return f"{grocery.name} {field}: {value}"


def render(event_name: str, payload: Any) -> List[str]:
    """Turn one event into the lines shown to the user."""
    p: Dict[str, Any] = payload or {}
    if event_name == GROCERY_ADDED:
        return [f"{p['grocery'].name} added!"]
    if event_name == GROCERY_REMOVED:
        return [f"{p['grocery'].name} is removed from the list.",
                f"You now have {p['remaining']} groceries left."]
    if event_name == GROCERY_UPDATED:
        return [_updated_line(p['grocery'], p['field'])]
    if event_name == GROCERY_LOW_STOCK:
        g = p['grocery']
        return [f"{g.name} amount: {g.amount}",
                f"Alert! {g.name} is running low (threshold {p['threshold']})."]
    if event_name == GROCERY_DEPLETED:
        return [f"{p['grocery'].name} is now out of stock!"]
    if event_name == GROCERY_PAST_EXPIRATION:
        return [p['error'].message]
    if event_name == GROCERY_FOUND:
        if not p['groceries']:
            return [f"No groceries match '{p['keyword']}'."]
        return [f"Here are the groceries matching '{p['keyword']}':"] + _numbered(p['groceries'])
    if event_name == GROCERY_VIEWED:
        return _grocery_detail(p['grocery'])
    if event_name == GROCERY_NOT_FOUND:
        return [f"{p['name']} is not in your groceries."]
    if event_name == GROCERY_LISTED:
        if not p['groceries']:
            return ["There are no groceries to show."]
        return [p['title']] + _numbered(p['groceries'])
    if event_name == LOCATION_ADDED:
        return [f"New location added: {p['location'].name}"]
    if event_name == LOCATION_LISTED:
        if not p['locations']:
            return ["There are no locations yet."]
        return ["Here are your locations:"] + _numbered(p['locations'])
    if event_name == STORAGE_FAILED:
        return [f"Warning: your groceries could not be saved ({p['error']})."]
    if event_name == CALORIES_EATEN:
        return [f"Ate {p['food']}.", f"Total today: {p['total']:g} kcal"]
    if event_name == CALORIES_VIEWED:
        lines = ["Here is what you ate today:"] + _numbered(p['foods'])
        lines.append(f"You have consumed {p['total']:g} calories for today")
        if p.get('goal'):
            lines.append(f"Remaining for your goal: {p['goal'] - p['total']:g} kcal")
        return lines
    if event_name in (PROFILE_UPDATED, PROFILE_VIEWED):
        prefix = ["Profile updated:"] if event_name == PROFILE_UPDATED else []
        return prefix + [str(p['profile'])]
    if event_name == SESSION_MODE_SWITCHED:
        return [f"Switched to {p['mode']} mode."]
    if event_name == SESSION_HELP:
        return [f"Commands in {p['mode']} mode:"] + [f"  {usage}" for _, usage in p['commands']]
    if event_name == SESSION_EXIT:
        return ["bye bye!"]
    if event_name == COMMAND_FAILED:
        return [p['message']]
    return []


class ConsoleObserver:
    def __init__(self, write: Callable[[str], None] = print):
        self._write = write

    def __call__(self, event_name: str, payload: Any):
        for line in render(event_name, payload):
            self._write(line)


def attach(bus: EventBus, write: Callable[[str], None] = print) -> ConsoleObserver:
    """Subscribe a console renderer to every event on bus."""
    observer = ConsoleObserver(write)
    bus.subscribe_all(observer)
    return observer


__all__ = ['render', 'ConsoleObserver', 'attach']
