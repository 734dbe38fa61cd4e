import unittest
from grocer.commands.detail_parser import parse_details, split_details
from grocer.domain.errors import (
    EmptyInputError,
    IncompleteParameterError,
    MissingParameterError,
    NoSuchGroceryError,
)

KNOWN = {"milk", "peanut butter"}


def is_known(name):
    return name.casefold() in KNOWN


class TestParseDetails(unittest.TestCase):

    def test_splits_name_and_value(self):
        self.assertEqual(parse_details("Milk a/5", "a/", is_known, "amt"), ("Milk", "5"))

    def test_trims_whitespace(self):
        self.assertEqual(parse_details("  Peanut Butter   c/  spreads ", "c/", is_known), ("Peanut Butter", "spreads"))

    def test_splits_on_first_marker_only(self):
        self.assertEqual(parse_details("Milk r/buy r/soon", "r/", is_known), ("Milk", "buy r/soon"))

    def test_dollar_marker_is_literal(self):
        self.assertEqual(parse_details("Milk $4.50", "$", is_known, "cost"), ("Milk", "4.50"))

    def test_name_match_is_case_insensitive(self):
        self.assertEqual(parse_details("MILK d/2030-01-01", "d/", is_known)[0], "MILK")

    def test_empty_input(self):
        with self.assertRaises(EmptyInputError):
            parse_details("", "a/", is_known)
        with self.assertRaises(EmptyInputError):
            parse_details("   ", "a/", is_known)

    def test_unknown_grocery(self):
        with self.assertRaises(NoSuchGroceryError) as ctx:
            parse_details("Bread a/2", "a/", is_known)
        self.assertEqual(ctx.exception.name, "Bread")

    def test_unknown_grocery_checked_before_missing_marker(self):
        # Without the marker the whole string is taken as the name
        with self.assertRaises(NoSuchGroceryError):
            parse_details("Milk 5", "a/", is_known)

    def test_missing_marker(self):
        with self.assertRaises(MissingParameterError) as ctx:
            parse_details("Milk", "a/", is_known, "amt")
        self.assertNotIsInstance(ctx.exception, IncompleteParameterError)
        self.assertEqual(ctx.exception.command, "amt")
        self.assertEqual(ctx.exception.marker, "a/")

    def test_empty_value(self):
        with self.assertRaises(IncompleteParameterError):
            parse_details("Milk a/   ", "a/", is_known)


class TestSplitDetails(unittest.TestCase):

    def test_no_lookup(self):
        self.assertEqual(split_details("Apple pie c/350", "c/", "eat"), ("Apple pie", "350"))

    def test_missing_marker(self):
        with self.assertRaises(MissingParameterError):
            split_details("Apple pie", "c/", "eat")

    def test_empty_value(self):
        with self.assertRaises(IncompleteParameterError):
            split_details("Apple pie c/", "c/", "eat")
