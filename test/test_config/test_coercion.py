import unittest

from dotconfig.core.coercion import (
    coerce_string, coerce_int, coerce_bool, coerce_float, coerce_string_array,
    parse_int, parse_float, parse_bool, split_list
)
from dotconfig.core.errors import (
    ArrayElementError, ConversionParseError, TypeMismatchError
)


class TestParsers(unittest.TestCase):
    """
    Test the string parsers shared by getters, unmarshalling and env access.
    """

    def test_parse_int(self):
        self.assertEqual(parse_int("42"), 42)
        self.assertEqual(parse_int("-7"), -7)
        self.assertEqual(parse_int("+7"), 7)

    def test_parse_int_rejects_non_decimal(self):
        for text in ["abc", "", " 1", "1 ", "1_000", "1.5", "0x10"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_int(text)

    def test_parse_float(self):
        self.assertEqual(parse_float("3.14"), 3.14)
        self.assertEqual(parse_float("1e3"), 1000.0)
        self.assertEqual(parse_float("-2"), -2.0)

    def test_parse_float_rejects_garbage(self):
        for text in ["", "abc", " 1.0", "1_0.0"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_float(text)

    def test_parse_bool_literals(self):
        for text in ["1", "t", "T", "true", "TRUE", "True"]:
            self.assertIs(parse_bool(text), True)
        for text in ["0", "f", "F", "false", "FALSE", "False"]:
            self.assertIs(parse_bool(text), False)

    def test_parse_bool_rejects_other_forms(self):
        for text in ["yes", "tRuE", "", "on", "2"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_bool(text)

    def test_split_list(self):
        self.assertEqual(split_list("one, two ,three"), ["one", "two", "three"])
        self.assertEqual(split_list(""), [])
        self.assertEqual(split_list("a,,b"), ["a", "", "b"])


class TestCoercion(unittest.TestCase):
    """
    Test the conversion table behind the typed getters.
    """

    def test_string(self):
        self.assertEqual(coerce_string("x", "p"), "x")
        with self.assertRaises(TypeMismatchError) as ctx:
            coerce_string(1, "app.name")
        self.assertIn("cannot convert value at path 'app.name' to string: found type int", str(ctx.exception))

    def test_int(self):
        self.assertEqual(coerce_int(42, "p"), 42)
        self.assertEqual(coerce_int(3.99, "p"), 3)
        self.assertEqual(coerce_int(-3.99, "p"), -3)
        self.assertEqual(coerce_int("5432", "p"), 5432)

    def test_int_parse_failure(self):
        with self.assertRaises(ConversionParseError) as ctx:
            coerce_int("abc", "test.string_value")
        message = str(ctx.exception)
        self.assertIn("cannot convert value 'abc' at path 'test.string_value' to int", message)
        self.assertIn("abc", message)

    def test_int_from_non_finite_float(self):
        for value in (float("inf"), float("-inf"), float("nan")):
            with self.assertRaises(ConversionParseError) as ctx:
                coerce_int(value, "limits.max")
            self.assertIn(f"cannot convert value '{value}' at path 'limits.max' to int", str(ctx.exception))
            self.assertEqual(ctx.exception.path, "limits.max")

    def test_int_rejects_bool(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            coerce_int(True, "p")
        self.assertIn("found type bool", str(ctx.exception))

    def test_bool(self):
        self.assertIs(coerce_bool(True, "p"), True)
        self.assertIs(coerce_bool("false", "p"), False)
        self.assertIs(coerce_bool("T", "p"), True)
        with self.assertRaises(ConversionParseError):
            coerce_bool("maybe", "p")
        with self.assertRaises(TypeMismatchError) as ctx:
            coerce_bool(1, "test.int_value")
        self.assertIn("cannot convert value at path 'test.int_value' to bool: found type int", str(ctx.exception))

    def test_float(self):
        self.assertEqual(coerce_float(0.75, "p"), 0.75)
        self.assertEqual(coerce_float(42, "p"), 42.0)
        self.assertIsInstance(coerce_float(42, "p"), float)
        self.assertEqual(coerce_float("2.5", "p"), 2.5)
        with self.assertRaises(TypeMismatchError) as ctx:
            coerce_float(True, "test.bool_value")
        self.assertIn("cannot convert value at path 'test.bool_value' to float: found type bool", str(ctx.exception))

    def test_string_array(self):
        stored = ["one", "two"]
        result = coerce_string_array(stored, "p")
        self.assertEqual(result, ["one", "two"])
        self.assertIsNot(result, stored)
        self.assertEqual(coerce_string_array("one, two,three ", "p"), ["one", "two", "three"])
        self.assertEqual(coerce_string_array("", "p"), [])

    def test_string_array_bad_element(self):
        with self.assertRaises(ArrayElementError) as ctx:
            coerce_string_array(["string", 123, True], "test_arrays.mixed_array")
        self.assertIn(
            "cannot convert item at index 1 in path 'test_arrays.mixed_array' to string: found type int",
            str(ctx.exception)
        )

    def test_string_array_bad_type(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            coerce_string_array(42, "test.int_value")
        self.assertIn("cannot convert value at path 'test.int_value' to string array: found type int", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
