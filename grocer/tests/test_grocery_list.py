from datetime import date
from decimal import Decimal
import unittest
from grocer.domain.GroceryList import GroceryList
from grocer.domain.errors import (
    CannotUseError,
    DateFormatError,
    DuplicateGroceryError,
    EmptyInputError,
    IncompleteParameterError,
    InvalidAmountError,
    InvalidCostError,
    InvalidRatingError,
    MissingParameterError,
    NoSuchGroceryError,
    SameLocationError,
)
from grocer.events.Event_Bus import (
    EventBus, EventRecorder,
    GROCERY_ADDED, GROCERY_DEPLETED, GROCERY_FOUND, GROCERY_LOW_STOCK, GROCERY_NOT_FOUND,
    GROCERY_PAST_EXPIRATION, GROCERY_REMOVED, GROCERY_UPDATED, GROCERY_VIEWED,
    LOCATION_ADDED, STORAGE_FAILED,
)
from grocer.utilities.config import DEFAULT_CATEGORY

TODAY = date(2024, 6, 1)


class MemoryStorage:
    def __init__(self):
        self.saves = []

    def save(self, groceries):
        self.saves.append([g.to_dict() for g in groceries])


class FailingStorage:
    def save(self, groceries):
        raise OSError("disk full")


class GroceryListTestCase(unittest.TestCase):

    def setUp(self):
        self.storage = MemoryStorage()
        self.recorder = EventRecorder()
        bus = EventBus()
        bus.subscribe_all(self.recorder)
        self.groceries = GroceryList(storage=self.storage, today=lambda: TODAY).set_event_bus(bus)


class TestAddRemove(GroceryListTestCase):

    def test_add_with_defaults(self):
        milk = self.groceries.add("Milk")
        self.assertEqual(milk.name, "Milk")
        self.assertEqual(milk.amount, 0)
        self.assertEqual(milk.category, DEFAULT_CATEGORY)
        self.assertEqual(self.groceries.get_groceries(), [milk])
        self.assertEqual(len(self.storage.saves), 1)
        self.assertIs(self.recorder.last(GROCERY_ADDED)["grocery"], milk)

    def test_add_then_find_returns_exactly_one(self):
        for name in ["Milk", "Oat Milk", "eggs"]:
            self.groceries.add(name)
        for name in ["Milk", "Oat Milk", "eggs"]:
            found = [g for g in self.groceries.find(name.upper()) if g.matches(name)]
            self.assertEqual(len(found), 1)

    def test_add_empty_name(self):
        with self.assertRaises(EmptyInputError):
            self.groceries.add("   ")
        self.assertEqual(self.storage.saves, [])

    def test_add_duplicate_name(self):
        self.groceries.add("Milk")
        with self.assertRaises(DuplicateGroceryError):
            self.groceries.add("mILK")
        self.assertEqual(len(self.groceries), 1)

    def test_remove(self):
        self.groceries.add("Milk")
        self.groceries.add("Eggs")
        removed = self.groceries.remove("milk")
        self.assertEqual(removed.name, "Milk")
        self.assertEqual([g.name for g in self.groceries.get_groceries()], ["Eggs"])
        self.assertEqual(self.recorder.last(GROCERY_REMOVED)["remaining"], 1)

    def test_remove_unknown(self):
        with self.assertRaises(NoSuchGroceryError):
            self.groceries.remove("Milk")

    def test_remove_empty(self):
        with self.assertRaises(EmptyInputError):
            self.groceries.remove("")

    def test_remove_detaches_location(self):
        milk = self.groceries.add("Milk")
        self.groceries.edit_location("Milk l/Fridge")
        fridge = milk.location
        self.groceries.remove("Milk")
        self.assertNotIn(milk, fridge.members)
        self.assertIsNone(milk.location)


class TestEditAmount(GroceryListTestCase):

    def setUp(self):
        super().setUp()
        self.milk = self.groceries.add("Milk")

    def test_set_amount_replaces(self):
        self.groceries.edit_amount("Milk a/5", False)
        self.assertEqual(self.milk.amount, 5)
        self.groceries.edit_amount("Milk a/2", False)
        self.assertEqual(self.milk.amount, 2)
        self.assertEqual(self.recorder.last(GROCERY_UPDATED)["field"], "amount")

    def test_use_reduces(self):
        self.groceries.edit_amount("Milk a/5", False)
        self.groceries.edit_amount("Milk a/3", True)
        self.assertEqual(self.milk.amount, 2)
        self.assertNotIn(GROCERY_LOW_STOCK, self.recorder.names())

    def test_use_never_goes_negative(self):
        for current in range(1, 6):
            for used in range(1, 8):
                self.milk.amount = current
                self.groceries.edit_amount(f"Milk a/{used}", True)
                self.assertEqual(self.milk.amount, max(0, current - used))

    def test_use_on_zero_fails_and_keeps_amount(self):
        saves = len(self.storage.saves)
        with self.assertRaises(CannotUseError):
            self.groceries.edit_amount("Milk a/1", True)
        self.assertEqual(self.milk.amount, 0)
        self.assertEqual(len(self.storage.saves), saves)

    def test_depleted_signal(self):
        self.groceries.edit_amount("Milk a/2", False)
        self.groceries.edit_amount("Milk a/5", True)
        self.assertEqual(self.milk.amount, 0)
        self.assertIs(self.recorder.last(GROCERY_DEPLETED)["grocery"], self.milk)

    def test_low_stock_signal(self):
        self.groceries.edit_amount("Milk a/5", False)
        self.groceries.edit_threshold("Milk a/2")
        self.assertEqual(self.milk.threshold, 2)
        self.recorder.clear()
        self.groceries.edit_amount("Milk a/4", True)
        self.assertEqual(self.milk.amount, 1)
        alert = self.recorder.last(GROCERY_LOW_STOCK)
        self.assertEqual(alert["remaining"], 1)
        self.assertEqual(alert["threshold"], 2)

    def test_invalid_amounts(self):
        for bad in ["abc", "0", "-2", "1.5"]:
            with self.assertRaises(InvalidAmountError):
                self.groceries.edit_amount(f"Milk a/{bad}", False)
        self.assertEqual(self.milk.amount, 0)

    def test_missing_marker(self):
        with self.assertRaises(MissingParameterError):
            self.groceries.edit_amount("Milk", False)

    def test_invalid_threshold(self):
        with self.assertRaises(InvalidAmountError):
            self.groceries.edit_threshold("Milk a/lots")

    def test_negative_threshold_accepted(self):
        self.groceries.edit_threshold("Milk a/-1")
        self.assertEqual(self.milk.threshold, -1)


class TestEditFields(GroceryListTestCase):

    def setUp(self):
        super().setUp()
        self.milk = self.groceries.add("Milk")

    def test_expiration(self):
        self.groceries.edit_expiration("Milk d/2999-01-01")
        self.assertEqual(self.milk.expiration, date(2999, 1, 1))

    def test_expiration_bad_format(self):
        for bad in ["01-02-2030", "2030/01/02", "2030-02-30", "soon"]:
            with self.assertRaises(DateFormatError):
                self.groceries.edit_expiration(f"Milk d/{bad}")
        self.assertIsNone(self.milk.expiration)

    def test_past_expiration_reported_without_mutation(self):
        self.groceries.edit_amount("Milk a/4", False)
        self.groceries.edit_expiration("Milk d/2999-01-01")
        self.groceries.edit_expiration("Milk d/2000-01-01")
        self.assertIn(GROCERY_PAST_EXPIRATION, self.recorder.names())
        self.assertEqual(self.milk.expiration, date(2999, 1, 1))
        self.assertEqual(self.milk.amount, 4)

    def test_category_upper_cased(self):
        self.groceries.edit_category("Milk c/dairy")
        self.assertEqual(self.milk.category, "DAIRY")

    def test_remark(self):
        self.groceries.edit_remark("Milk r/buy the skim one")
        self.assertEqual(self.milk.remark, "buy the skim one")

    def test_empty_remark_leaves_old_remark(self):
        self.groceries.edit_remark("Milk r/skim")
        with self.assertRaises(IncompleteParameterError):
            self.groceries.edit_remark("Milk r/  ")
        self.assertEqual(self.milk.remark, "skim")

    def test_cost(self):
        self.groceries.edit_cost("Milk $4.50")
        self.assertEqual(self.milk.cost, Decimal("4.50"))

    def test_invalid_cost(self):
        for bad in ["free", "-1"]:
            with self.assertRaises(InvalidCostError):
                self.groceries.edit_cost(f"Milk ${bad}")
        self.assertEqual(self.milk.cost, Decimal("0"))

    def test_rating_with_review(self):
        self.groceries.edit_rating("Milk s/4 creamy and fresh")
        self.assertEqual(self.milk.rating, 4)
        self.assertEqual(self.milk.review, "creamy and fresh")

    def test_rating_without_review(self):
        self.groceries.edit_rating("Milk s/5")
        self.assertEqual(self.milk.rating, 5)
        self.assertIsNone(self.milk.review)

    def test_invalid_rating(self):
        for bad in ["0", "6", "good"]:
            with self.assertRaises(InvalidRatingError):
                self.groceries.edit_rating(f"Milk s/{bad}")
        self.assertIsNone(self.milk.rating)

    def test_edit_unknown_grocery(self):
        with self.assertRaises(NoSuchGroceryError):
            self.groceries.edit_category("Bread c/bakery")


class TestEditLocation(GroceryListTestCase):

    def setUp(self):
        super().setUp()
        self.milk = self.groceries.add("Milk")

    def test_creates_location_lazily(self):
        self.groceries.edit_location("Milk l/Fridge")
        fridge = self.groceries.locations.find("fridge")
        self.assertIsNotNone(fridge)
        self.assertIs(self.milk.location, fridge)
        self.assertIn(self.milk, fridge.members)
        self.assertIs(self.recorder.last(LOCATION_ADDED)["location"], fridge)

    def test_move_between_locations(self):
        self.groceries.edit_location("Milk l/Fridge")
        fridge = self.milk.location
        self.groceries.edit_location("Milk l/Pantry")
        self.assertNotIn(self.milk, fridge.members)
        self.assertEqual(self.milk.location.name, "Pantry")
        self.assertIn(self.milk, self.milk.location.members)

    def test_same_location_fails_without_mutation(self):
        self.groceries.edit_location("Milk l/Fridge")
        fridge = self.milk.location
        saves = len(self.storage.saves)
        with self.assertRaises(SameLocationError):
            self.groceries.edit_location("Milk l/fridge")
        self.assertIs(self.milk.location, fridge)
        self.assertEqual(fridge.members, {self.milk})
        self.assertEqual(len(self.storage.saves), saves)

    def test_list_locations(self):
        self.groceries.edit_location("Milk l/Fridge")
        self.assertEqual([loc.name for loc in self.groceries.list_locations()], ["Fridge"])


class TestViews(GroceryListTestCase):

    def setUp(self):
        super().setUp()
        for name in ["Milk", "Oat milk", "Eggs"]:
            self.groceries.add(name)

    def test_find_substring_case_insensitive(self):
        found = self.groceries.find("MILK")
        self.assertEqual([g.name for g in found], ["Milk", "Oat milk"])
        self.assertEqual(self.recorder.last(GROCERY_FOUND)["keyword"], "MILK")

    def test_find_empty_keyword(self):
        with self.assertRaises(EmptyInputError):
            self.groceries.find("  ")

    def test_view_exact_match(self):
        grocery = self.groceries.view("oat MILK")
        self.assertEqual(grocery.name, "Oat milk")
        self.assertIs(self.recorder.last(GROCERY_VIEWED)["grocery"], grocery)

    def test_view_not_found_is_not_an_error(self):
        self.assertIsNone(self.groceries.view("mil"))
        self.assertEqual(self.recorder.last(GROCERY_NOT_FOUND)["name"], "mil")

    def test_list_low_stock(self):
        self.groceries.edit_amount("Milk a/1", False)
        self.groceries.edit_threshold("Milk a/2")
        self.groceries.edit_threshold("Eggs a/2")
        self.assertEqual([g.name for g in self.groceries.list_low_stock()], ["Milk"])

    def test_views_do_not_persist(self):
        saves = len(self.storage.saves)
        self.groceries.list_all()
        self.groceries.find("milk")
        self.groceries.sort_by_cost()
        self.assertEqual(len(self.storage.saves), saves)


class TestStorageFailure(unittest.TestCase):

    def test_failure_reported_and_state_kept(self):
        recorder = EventRecorder()
        bus = EventBus()
        bus.subscribe_all(recorder)
        groceries = GroceryList(storage=FailingStorage()).set_event_bus(bus)
        milk = groceries.add("Milk")
        self.assertEqual(groceries.get_groceries(), [milk])
        self.assertIsInstance(recorder.last(STORAGE_FAILED)["error"], OSError)
        self.assertIn(GROCERY_ADDED, recorder.names())
