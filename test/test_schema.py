"""
Registry and command schema tests.

Scope
- Validate registration rules: names, short names, duplicates, "no-" flags,
  variadic placement and default kinds.
- Validate read-only views, lookups, representations and the sealing lifecycle.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from dashdash import ArgDecl, CommandSchema, FlagDecl, Kind, Registry
from dashdash.utils import Unset


class TestDeclarations(TestCase):
    """Behavioral tests for ArgDecl and FlagDecl."""

    def testArgumentStartsUnbound(self):
        argument = ArgDecl("username")
        self.assertEqual(argument.name, "username")
        self.assertIs(argument.value, Unset)
        self.assertFalse(argument.bound)
        self.assertFalse(argument.variadic)
        self.assertIs(argument.default.kind, Kind.STRING)

    def testFlagShortName(self):
        flag = FlagDecl("verbose", "v", False)
        self.assertEqual(flag.short, "v")
        self.assertTrue(flag.boolean)
        self.assertEqual(flag.label, "flag '--verbose'")

    def testFlagWithoutShortName(self):
        self.assertIsNone(FlagDecl("dir", default="/var/users").short)

    def testInvalidNames(self):
        for name in ("", "bad_name", "-x", "1st", "trailing-", "two words"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                ArgDecl(name)
        with self.assertRaises(TypeError):
            ArgDecl(42)

    def testValidNames(self):
        for name in ("a", "dry-run", "level2", "été"):
            with self.subTest(name=name):
                self.assertEqual(ArgDecl(name).name, name)

    def testInvalidShortNames(self):
        for short in ("", "ab", "-", "=", " "):
            with self.subTest(short=short), self.assertRaises(ValueError):
                FlagDecl("name", short)

    def testReadOnlyFields(self):
        with self.assertRaises(AttributeError):
            ArgDecl("name").value = "changed"

    def testRepresentation(self):
        self.assertTrue(repr(FlagDecl("verbose", "v", False)).startswith("flag-decl(name='verbose'"))
        self.assertTrue(repr(ArgDecl("output")).startswith("arg-decl(name='output'"))


class TestCommandSchema(TestCase):
    """Behavioral tests for CommandSchema registration."""

    def setUp(self):
        self.schema = CommandSchema("info")

    def testChaining(self):
        self.assertIs(self.schema.add_flag("verbose", "v", False), self.schema)
        self.assertIs(self.schema.add_arg("username"), self.schema)

    def testFlagLookups(self):
        self.schema.add_flag("verbose", "v", False)
        self.assertIs(self.schema.flag("verbose"), self.schema.flag("v"))
        self.assertEqual(self.schema.shorts, {"v": "verbose"})
        with self.assertRaises(KeyError):
            self.schema.flag("quiet")

    def testDuplicateFlagName(self):
        self.schema.add_flag("verbose", "v", False)
        with self.assertRaises(ValueError):
            self.schema.add_flag("verbose")

    def testDuplicateShortName(self):
        self.schema.add_flag("verbose", "v", False)
        with self.assertRaises(ValueError):
            self.schema.add_flag("version", "v")

    def testInvertibleFlagIsStoredWithoutPrefix(self):
        self.schema.add_flag("no-clean", default=True)
        self.assertEqual(list(self.schema.flags), ["clean"])
        self.assertIs(self.schema.flag("clean").default.scalar, True)

    def testNonBooleanInvertibleFlagRejected(self):
        with self.assertRaises(ValueError):
            self.schema.add_flag("no-output", default="./")

    def testInvertibleFlagCollidesWithPlainName(self):
        self.schema.add_flag("clean", default=False)
        with self.assertRaises(ValueError):
            self.schema.add_flag("no-clean", default=True)

    def testVariadicArgument(self):
        self.schema.add_arg("subjects...")
        self.assertTrue(self.schema.arg("subjects").variadic)

    def testVariadicMustBeLast(self):
        self.schema.add_arg("subjects...")
        with self.assertRaises(ValueError):
            self.schema.add_arg("username")

    def testDuplicateArgumentName(self):
        self.schema.add_arg("username")
        with self.assertRaises(ValueError):
            self.schema.add_arg("username...")

    def testFlagsAndArgumentsHaveSeparateNamespaces(self):
        self.schema.add_flag("output", "o", "./").add_arg("output")
        self.assertIn("output", self.schema.flags)
        self.assertIn("output", self.schema.args)

    def testUnsupportedDefault(self):
        with self.assertRaises(TypeError):
            self.schema.add_flag("level", default=None)
        with self.assertRaises(ValueError):
            self.schema.add_arg("category", [])

    def testBindingOrder(self):
        self.schema.add_arg("category", ["manager", "student"]).add_arg("username").add_arg("subjects...")
        self.assertEqual(self.schema.order, ["category", "username", "subjects"])
        self.assertEqual([argument.name for argument in self.schema.arguments()], self.schema.order)

    def testViewsAreCopies(self):
        self.schema.add_arg("username")
        self.schema.order.append("intruder")
        self.schema.args.clear()
        self.assertEqual(self.schema.order, ["username"])
        self.assertIn("username", self.schema.args)

    def testDeclarationsYieldFlagsThenArguments(self):
        self.schema.add_arg("username").add_flag("verbose", "v", False)
        self.assertEqual([declaration.name for declaration in self.schema.declarations()], ["verbose", "username"])

    def testNamespaceFallsBackToDefaults(self):
        self.schema \
            .add_arg("category", ["manager", "student"]) \
            .add_arg("subjects...") \
            .add_flag("version", "V", "1.0.1")
        self.assertEqual(self.schema.namespace(), {
            "version": "1.0.1",
            "category": "manager",
            "subjects": [],
        })


class TestRegistry(TestCase):
    """Behavioral tests for Registry."""

    def setUp(self):
        self.registry = Registry()

    def testRegisterReturnsSameSchema(self):
        info = self.registry.register("info")
        self.assertIs(self.registry.register("info"), info)
        self.assertIs(self.registry["info"], info)

    def testRootCommand(self):
        self.assertIsNone(self.registry.root)
        root = self.registry.register()
        self.assertIs(self.registry.root, root)
        self.assertEqual(root.name, "")

    def testMapping(self):
        self.registry.register()
        self.registry.register("info")
        self.assertEqual(len(self.registry), 2)
        self.assertEqual(list(self.registry), ["", "info"])
        self.assertIn("info", self.registry)
        self.assertNotIn("ghost", self.registry)

    def testInvalidCommandNames(self):
        for name in ("bad name", "-info", "info_"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                self.registry.register(name)
        with self.assertRaises(TypeError):
            self.registry.register(None)

    def testSealedAfterFirstParse(self):
        root = self.registry.register().add_flag("verbose", "v", False)
        self.assertFalse(self.registry.sealed)
        self.registry.parse([])
        self.assertTrue(self.registry.sealed)
        self.assertTrue(root.sealed)
        with self.assertRaises(RuntimeError):
            self.registry.register("info")
        with self.assertRaises(RuntimeError):
            root.add_flag("quiet", "q", False)
        with self.assertRaises(RuntimeError):
            root.add_arg("output")
        self.assertIs(self.registry.register(), root)

    def testSealedRegistryStillParses(self):
        self.registry.register().add_arg("output")
        self.assertEqual(self.registry.parse(["a"]).arg("output").value, "a")
        self.assertEqual(self.registry.parse(["b"]).arg("output").value, "b")

    def testRepresentation(self):
        self.registry.register("info")
        self.assertEqual(repr(self.registry), "registry(commands=['info'], sealed=False)")


if __name__ == '__main__':
    unittest.main()
