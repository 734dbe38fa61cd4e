"""Calorie log: foods eaten today and their running calorie total."""
import logging
from typing import List

from grocer.commands.detail_parser import split_details
from grocer.events.Event_Bus import EventBus, CALORIES_EATEN
from grocer.utilities.constants import CALORIES_MARKER
from grocer.utilities.validators import parse_calories

logger = logging.getLogger(__name__)


class Food:
    def __init__(self, name: str, calories: float):
        self.name = name
        self.calories = calories

    def __str__(self) -> str:
        return f"{self.name} - {self.calories:g} kcal"

    __repr__ = __str__


class CalorieLog:
    def __init__(self):
        self.foods: List[Food] = []
        self._event_bus = EventBus()

    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    def eat(self, details: str) -> Food:
        '''Records a food from "FOOD c/CALORIES".'''
        name, value = split_details(details, CALORIES_MARKER, "eat")
        food = Food(name, parse_calories(value))
        self.foods.append(food)
        logger.info(f"Ate {food}")
        self._event_bus.publish(CALORIES_EATEN, {"food": food, "total": self.total()})
        return food

    def total(self) -> float:
        return sum(food.calories for food in self.foods)

    def get_foods(self) -> List[Food]:
        return self.foods
