"""
Kinds, coercion and validation tests.

Scope
- Validate Kind.of() classification and Default.of() scalar/choice-set construction.
- Validate every converter of coerce(), including its strictness.
- Validate check()/validate() for scalar, choice-set and variadic declarations.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta
from unittest import TestCase

from dashdash import ArgDecl, Default, InvalidChoiceError, Kind, TypeMismatchError
from dashdash.coercion import coerce
from dashdash.validation import check, validate


class TestKind(TestCase):
    """Behavioral tests for Kind."""

    def testClassification(self):
        self.assertIs(Kind.of(False), Kind.BOOL)
        self.assertIs(Kind.of(""), Kind.STRING)
        self.assertIs(Kind.of(0), Kind.INT)
        self.assertIs(Kind.of(0.0), Kind.FLOAT)
        self.assertIs(Kind.of(datetime(2020, 1, 1)), Kind.TIMESTAMP)
        self.assertIs(Kind.of(timedelta(minutes=1)), Kind.DURATION)

    def testBoolIsNotInt(self):
        self.assertIs(Kind.of(True), Kind.BOOL)

    def testUnsupported(self):
        with self.assertRaises(TypeError):
            Kind.of(None)
        with self.assertRaises(TypeError):
            Kind.of(b"bytes")

    def testPythonType(self):
        self.assertIs(Kind.FLOAT.type, float)
        self.assertIs(Kind.DURATION.type, timedelta)


class TestDefault(TestCase):
    """Behavioral tests for Default."""

    def testScalar(self):
        default = Default.of("./")
        self.assertIs(default.kind, Kind.STRING)
        self.assertEqual(default.scalar, "./")
        self.assertEqual(default.choices, ())
        self.assertFalse(default.multiple)

    def testChoiceSet(self):
        default = Default.of(["manager", "student"])
        self.assertIs(default.kind, Kind.STRING)
        self.assertEqual(default.scalar, "manager")
        self.assertEqual(default.choices, ("manager", "student"))
        self.assertTrue(default.multiple)

    def testEmptyChoiceSetRejected(self):
        with self.assertRaises(ValueError):
            Default.of([])

    def testMixedChoiceSetRejected(self):
        with self.assertRaises(TypeError):
            Default.of([1, "one"])

    def testBoolAndIntDoNotMix(self):
        with self.assertRaises(TypeError):
            Default.of([1, True])

    def testDuplicatedChoiceSetRejected(self):
        with self.assertRaises(ValueError):
            Default.of(["a", "a"])

    def testEquality(self):
        self.assertEqual(Default.of([1, 2]), Default.of((1, 2)))
        self.assertNotEqual(Default.of(0), Default.of(0.0))


class TestCoerce(TestCase):
    """Behavioral tests for coerce()."""

    def testBool(self):
        for token in ("1", "t", "T", "TRUE", "true", "True"):
            self.assertIs(coerce(token, Kind.BOOL), True)
        for token in ("0", "f", "F", "FALSE", "false", "False"):
            self.assertIs(coerce(token, Kind.BOOL), False)
        for token in ("yes", "no", "", "tRuE"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.BOOL)

    def testString(self):
        self.assertEqual(coerce(" spaced ", Kind.STRING), " spaced ")

    def testInt(self):
        self.assertEqual(coerce("42", Default.of(0)), 42)
        self.assertEqual(coerce("-7", Kind.INT), -7)
        self.assertEqual(coerce("+7", Kind.INT), 7)
        self.assertEqual(coerce("9223372036854775807", Kind.INT), 2 ** 63 - 1)
        for token in ("4.2", "0x10", "1_000", " 1", "", "9223372036854775808", "١٢"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.INT)

    def testFloat(self):
        self.assertEqual(coerce("1.5", Kind.FLOAT), 1.5)
        self.assertEqual(coerce(".5", Kind.FLOAT), 0.5)
        self.assertEqual(coerce("3", Kind.FLOAT), 3.0)
        self.assertEqual(coerce("-1e3", Kind.FLOAT), -1000.0)
        for token in ("abc", "nan", "inf", "1e400", "1_0.0", ""):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.FLOAT)

    def testTimestamp(self):
        self.assertEqual(coerce("2020-01-05 13:45", Kind.TIMESTAMP), datetime(2020, 1, 5, 13, 45))
        for token in ("2020-1-5 13:45", "2020-01-05", "2020-01-05T13:45", "2021-02-30 10:00", "2020-01-05 24:00"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.TIMESTAMP)

    def testDuration(self):
        self.assertEqual(coerce("1h30m", Kind.DURATION), timedelta(hours=1, minutes=30))
        self.assertEqual(coerce("1.5s", Kind.DURATION), timedelta(seconds=1.5))
        self.assertEqual(coerce("300ms", Kind.DURATION), timedelta(milliseconds=300))
        self.assertEqual(coerce("10us", Kind.DURATION), timedelta(microseconds=10))
        self.assertEqual(coerce("10µs", Kind.DURATION), timedelta(microseconds=10))
        self.assertEqual(coerce("-2m", Kind.DURATION), timedelta(minutes=-2))
        self.assertEqual(coerce("0", Kind.DURATION), timedelta(0))
        for token in ("1", "1d", "", "h", "1h 30m", "--1h"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.DURATION)

    def testDurationBounds(self):
        self.assertEqual(coerce("-9223372036854775808ns", Kind.DURATION), timedelta(microseconds=-9223372036854776))
        self.assertEqual(coerce("9223372036854775807ns", Kind.DURATION), timedelta(microseconds=9223372036854776))
        for token in ("9223372036854775808ns", "-9223372036854775809ns", "2562048h"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                coerce(token, Kind.DURATION)

    def testChoiceSetUsesElementKind(self):
        self.assertEqual(coerce("2", Default.of([1, 2, 3])), 2)


class TestValidation(TestCase):
    """Behavioral tests for check() and validate()."""

    def testCheckScalarIsStructural(self):
        self.assertTrue(check(Default.of(0), 12))
        self.assertFalse(check(Default.of(0), True))
        self.assertFalse(check(Default.of(0), 1.0))
        self.assertTrue(check(Default.of(timedelta(minutes=1)), timedelta(seconds=1)))

    def testCheckChoiceSetIsValueLevel(self):
        self.assertTrue(check(Default.of(["b", "a"]), "a"))
        self.assertFalse(check(Default.of(["b"]), "a"))
        self.assertFalse(check(Default.of([1, 2]), True))

    def testValidateChoice(self):
        argument = ArgDecl("category", ["manager", "student"])
        validate(argument, "student")
        with self.assertRaises(InvalidChoiceError) as context:
            validate(argument, "teacher")
        self.assertIs(context.exception.argument, argument)
        self.assertEqual(context.exception.value, "teacher")

    def testValidateTypeMismatch(self):
        with self.assertRaises(TypeMismatchError):
            validate(ArgDecl("count", 0), "3")

    def testValidateVariadicPerElement(self):
        argument = ArgDecl("levels", [1, 2, 3], variadic=True)
        validate(argument, [1, 3])
        with self.assertRaises(InvalidChoiceError) as context:
            validate(argument, [1, 4])
        self.assertEqual(context.exception.value, 4)

    def testValidateVariadicTypes(self):
        with self.assertRaises(TypeMismatchError):
            validate(ArgDecl("numbers", 0, variadic=True), [1, "2"])

    def testValidateAgreesWithCheck(self):
        argument = ArgDecl("level", [1, 2])
        for value, cls in ((1, None), (True, TypeMismatchError), (1.0, TypeMismatchError), (3, InvalidChoiceError)):
            with self.subTest(value=value):
                if check(argument.default, value):
                    self.assertIsNone(cls)
                    validate(argument, value)
                else:
                    with self.assertRaises(cls):
                        validate(argument, value)

    def testValidateUnsetIsAccepted(self):
        validate(ArgDecl("anything", 0))


if __name__ == '__main__':
    unittest.main()
