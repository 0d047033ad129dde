"""
Interfaces module behavioral tests (token scanning, outcomes, CLI entry point).

Scope
- Positional binding: order, defaults, variadic capture and trailing overflow.
- Option scanning: flags, counts, compound short options, option arguments.
- Faults: unknown options, compound syntax, required and trailing arguments.
- Outcomes: help/version short-circuit, deterministic re-parsing with fresh specs.
- report(): printing and exiting in shell mode.

Conventions
- Test method names follow CamelCase per project convention.
- Each parse builds a fresh spec through a configure callable.
"""
from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase

from argosy import (
    Argument,
    ArgumentSyntaxError,
    CommandLineSyntaxError,
    Interface,
    NoSuchOptionError,
    Parsed,
    RequiredArgumentError,
    Spec,
    Terminate,
    TrailingArgumentsError,
    parse,
    report,
)


def scan(tokens, configure=lambda spec: None):
    outcome = parse(tokens, configure)
    assert isinstance(outcome, Parsed), outcome
    return outcome.report


def flags(spec):
    spec.define_option("t", "test")
    spec.define_option("x", "example")


def options(spec):
    spec.define_option("f", "flag")
    spec.define_option("a", "opta", ["one"])
    spec.define_option("b", "optb", ["one", "two"])


class TestPositionals(TestCase):
    """Binding of plain tokens to declared arguments."""

    def testNoArguments(self):
        result = scan([])
        self.assertEqual(result.args, ())
        self.assertEqual(result.trailing, ())

    def testUndeclaredValuesAreTrailing(self):
        for tokens in (["a"], ["a", "b", "c"]):
            result = scan(tokens)
            self.assertEqual(result.args, tuple(tokens))
            self.assertEqual(len(result.args), len(result.trailing))

    def testRequiredWithTrailing(self):
        result = scan(["a", "b", "c", "d", "e"], lambda spec: spec.define_args("one", "two"))
        self.assertEqual(len(result.args), 5)
        self.assertEqual(result.arg("one"), "a")
        self.assertEqual(result.arg("two"), "b")
        self.assertEqual(result.trailing, ("c", "d", "e"))

    def testDefaultsOnlyWhenMissing(self):
        result = scan(["a", "b"], lambda spec: spec.define_args("foo", "bar:100", "baz:200"))
        self.assertEqual(result.args, ("a", "b", "200"))
        self.assertEqual(result.trailing, ())
        self.assertEqual(result.arg("foo"), "a")
        self.assertEqual(result.arg("bar"), "b")
        self.assertEqual(result.arg("baz"), "200")

    def testVariadicCapture(self):
        result = scan(["a", "b", "c", "d", "e"], lambda spec: spec.define_args("foo", "bar..."))
        self.assertEqual(len(result.args), 5)
        self.assertEqual(result.trailing, ())
        self.assertEqual(result.arg("foo"), "a")
        self.assertEqual(result.arg("bar"), ("b", "c", "d", "e"))

    def testDefaultsMixedWithVariadic(self):
        result = scan(["a", "b", "c", "d", "e"], lambda spec: spec.define_args("foo", "bar:42", "baz..."))
        self.assertEqual(result.args, ("a", "b", "c", "d", "e"))
        self.assertEqual(result.arg("bar"), "b")
        self.assertEqual(result.arg("baz"), ("c", "d", "e"))

    def testEmptyVariadic(self):
        result = scan(["a"], lambda spec: spec.define_args("foo", "bar..."))
        self.assertEqual(result.arg("bar"), ())
        self.assertEqual(result.args, ("a",))

    def testMissingRequiredRaises(self):
        with self.assertRaises(RequiredArgumentError) as context:
            parse(["a"], lambda spec: spec.define_args("one", "two"))
        self.assertEqual(context.exception.options["name"], "two")

    def testTrailingRaisesWhenRequested(self):
        def configure(spec):
            spec.define_args("one").raise_on_trailing()

        with self.assertRaises(TrailingArgumentsError) as context:
            parse(["a", "b", "c"], configure)
        self.assertEqual(context.exception.options["trailing"], ("b", "c"))

    def testVariadicBeforeLastFailsBeforeParsing(self):
        with self.assertRaises(ArgumentSyntaxError):
            parse([], lambda spec: spec.define_args("foo", "bar...", "baz"))

    def testLoneDashIsPositional(self):
        result = scan(["-"], lambda spec: spec.define_args("input"))
        self.assertEqual(result.arg("input"), "-")


class TestFlags(TestCase):
    """Flag toggling and counting."""

    def testSingleShortToggle(self):
        result = scan(["-t"], flags)
        self.assertIs(result.opt("t"), True)
        self.assertIs(result.opt("test"), True)
        self.assertEqual(result.count("test"), 1)

    def testCompoundRepeats(self):
        result = scan(["-ttttt"], flags)
        self.assertIs(result.opt("t"), True)
        self.assertEqual(result.count("test"), 5)

    def testSingleLongToggle(self):
        result = scan(["--test"], flags)
        self.assertIs(result.opt("t"), True)
        self.assertEqual(result.count("test"), 1)

    def testRepeatedLongToggles(self):
        result = scan(["--test", "--test", "--test"], flags)
        self.assertEqual(result.count("t"), 3)

    def testUntoggledFlag(self):
        result = scan(["foo"], flags)
        self.assertIs(result.opt("t"), False)
        self.assertIs(result.opt("test"), False)
        self.assertEqual(result.count("test"), 0)

    def testMixedCompound(self):
        result = scan(["-tx"], flags)
        self.assertIs(result.opt("test"), True)
        self.assertIs(result.opt("example"), True)
        self.assertEqual(result.count("test"), 1)
        self.assertEqual(result.count("example"), 1)

    def testMixedCompoundRepeats(self):
        result = scan(["-tttxxxxx"], flags)
        self.assertEqual(result.count("test"), 3)
        self.assertEqual(result.count("example"), 5)

    def testSeparatorStopsOptions(self):
        result = scan(["--", "-t"], flags)
        self.assertIs(result.opt("t"), False)
        self.assertEqual(result.args, ("-t",))

    def testFirstPositionalStopsOptions(self):
        result = scan(["foo", "-t"], flags)
        self.assertIs(result.opt("t"), False)
        self.assertEqual(result.args, ("foo", "-t"))


class TestOptions(TestCase):
    """Options that take arguments."""

    def testOneArgument(self):
        result = scan(["-a", "foo"], options)
        self.assertEqual(result.opt("a"), "foo")
        self.assertEqual(result.opt("b"), (None, None))

    def testMultipleArguments(self):
        result = scan(["-b", "foo", "bar"], options)
        self.assertIsNone(result.opt("a"))
        self.assertEqual(result.opt("b"), ("foo", "bar"))

    def testMultipleOptions(self):
        result = scan(["-a", "test", "-b", "foo", "bar"], options)
        self.assertEqual(result.opt("a"), "test")
        self.assertEqual(result.opt("b"), ("foo", "bar"))

    def testArgumentOptionLastInCompound(self):
        result = scan(["-fa", "test"], options)
        self.assertEqual(result.opt("a"), "test")
        self.assertIs(result.opt("flag"), True)

    def testArgumentOptionInsideCompoundRaises(self):
        with self.assertRaises(CommandLineSyntaxError):
            parse(["-af", "test"], options)

    def testArgumentOptionFirstInCompoundRaises(self):
        def configure(spec):
            spec.define_option("verbose", "v")
            spec.define_option("file", "f", ["name"])

        with self.assertRaises(CommandLineSyntaxError):
            parse(["-fv"], configure)

    def testLongName(self):
        result = scan(["--opta", "test"], options)
        self.assertEqual(result.opt("opta"), "test")

    def testLongNameWithTrailing(self):
        result = scan(["--opta", "test", "foo", "bar"], options)
        self.assertEqual(result.opt("opta"), "test")
        self.assertEqual(result.args, ("foo", "bar"))

    def testShortAndLongNames(self):
        result = scan(["-a", "test", "--optb", "foo", "bar"], options)
        self.assertEqual(result.opt("a"), "test")
        self.assertEqual(result.opt("optb"), ("foo", "bar"))

    def testFullCommandLine(self):
        result = scan(["-fa", "test", "--optb", "foo", "bar", "arg1", "arg2"], options)
        self.assertEqual(result.opt("a"), "test")
        self.assertEqual(result.opt("optb"), ("foo", "bar"))
        self.assertIs(result.opt("flag"), True)
        self.assertEqual(result.args, ("arg1", "arg2"))

    def testFlagCountingWithFullCommandLine(self):
        result = scan(["-ff", "-fffa", "test", "--optb", "foo", "bar", "arg1", "arg2"], options)
        self.assertEqual(result.count("flag"), 5)
        self.assertEqual(result.count("a"), 1)
        self.assertEqual(result.args, ("arg1", "arg2"))

    def testDashedValueIsTakenAsArgument(self):
        result = scan(["-a", "-f"], options)
        self.assertEqual(result.opt("a"), "-f")
        self.assertIs(result.opt("flag"), False)

    def testPartiallyFilledAtEndOfInput(self):
        result = scan(["-b", "foo"], options)
        self.assertEqual(result.opt("b"), ("foo", None))

    def testSlotDefault(self):
        result = scan(["--level"], lambda spec: spec.define_option("level", "l", ["n:3"]))
        self.assertEqual(result.opt("level"), "3")
        self.assertEqual(result.count("l"), 1)

    def testSeparatorEndsPendingOption(self):
        result = scan(["-a", "--", "value"], options)
        self.assertIsNone(result.opt("a"))
        self.assertEqual(result.args, ("value",))

    def testReportIndexing(self):
        result = scan(["-a", "foo"], options)
        self.assertEqual(result["opta"], "foo")


class TestUnknownOptions(TestCase):
    """Unknown names fail regardless of their position."""

    def testUnknownOptionsRaise(self):
        for tokens in (
            ["-v"],
            ["-compound"],
            ["--longform"],
            ["-v", "--longform"],
            ["-v", "--longform", "foo", "bar"],
            ["-t", "-v"],
        ):
            with self.subTest(tokens=tokens):
                with self.assertRaises(NoSuchOptionError):
                    parse(tokens, flags)


class TestOutcomes(TestCase):
    """Help/version short-circuit and deterministic reports."""

    def testHelpTerminates(self):
        outcome = parse(["-h"], lambda spec: spec.set_name("tool"))
        self.assertIsInstance(outcome, Terminate)
        self.assertEqual(outcome.code, 0)
        self.assertEqual(outcome.reason, "help")
        self.assertIn("USAGE:", outcome.renderable.plain)

    def testHelpWinsOverMissingArguments(self):
        outcome = parse(["--help"], lambda spec: spec.define_args("one", "two"))
        self.assertIsInstance(outcome, Terminate)

    def testVersionTerminates(self):
        outcome = parse(["-V"], lambda spec: spec.set_name("tool").set_version("1.2.3"))
        self.assertEqual(outcome, Terminate(0, "version", outcome.renderable))
        self.assertEqual(outcome.renderable.plain, "tool 1.2.3")

    def testVersionOnlyWhenDeclared(self):
        with self.assertRaises(NoSuchOptionError):
            parse(["-V"])

    def testHelpWinsOverVersion(self):
        outcome = parse(["-V", "-h"], lambda spec: spec.set_name("tool").set_version("1.2.3"))
        self.assertIsInstance(outcome, Terminate)
        self.assertEqual(outcome.reason, "help")

    def testCallerOwnedHelpIsNotInjected(self):
        def configure(spec):
            spec.define_option("help", "h", descr="Print a custom greeting")

        result = scan(["-h"], configure)
        self.assertIs(result.opt("help"), True)
        self.assertEqual(result.count("h"), 1)

    def testSharedArgumentsDoNotLeak(self):
        name = Argument("name")
        rest = Argument("rest", variadic=True)

        def configure(spec):
            spec.define_args(name, rest)

        first = scan(["a", "b"], configure)
        second = scan(["a", "b"], configure)
        self.assertEqual(first, second)
        self.assertEqual(second.arg("rest"), ("b",))
        with self.assertRaises(RequiredArgumentError):
            parse([], configure)

    def testHelpIsReported(self):
        result = scan([])
        self.assertIs(result.opt("help"), False)
        self.assertEqual(result.count("h"), 0)

    def testCallerOwnedAliasIsKept(self):
        def configure(spec):
            spec.define_option("host", "h", ["name"])

        result = scan(["-h", "example.org"], configure)
        self.assertEqual(result.opt("host"), "example.org")
        self.assertIs(result.opt("help"), False)

    def testReparsingIsDeterministic(self):
        def configure(spec):
            spec.define_args("foo", "bar:1", "rest...")
            options(spec)

        tokens = ["-ff", "-a", "x", "one", "two", "three"]
        self.assertEqual(scan(tokens, configure), scan(tokens, configure))

    def testShellStringIsSplit(self):
        result = scan("-a 'hello world'", options)
        self.assertEqual(result.opt("a"), "hello world")

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            parse([1])

    def testInterfaceAcceptsPrebuiltSpec(self):
        spec = Spec().define_args("name")
        outcome = Interface(spec).parse(["world"])
        self.assertEqual(outcome.report.arg("name"), "world")


class TestReport(TestCase):
    """report(): the CLI-facing entry point."""

    def testReturnsReport(self):
        result = report(["world"], lambda spec: spec.define_args("name"))
        self.assertEqual(result.arg("name"), "world")

    def testHelpExitsWithZero(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), self.assertRaises(SystemExit) as context:
            report(["-h"], lambda spec: spec.set_name("tool"), colorful=False)
        self.assertEqual(context.exception.code, 0)
        self.assertIn("USAGE: tool", stdout.getvalue())

    def testFaultExitsWithOne(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            report(["-v"], colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("no such option", stderr.getvalue())

    def testFaultRaisesOutsideShell(self):
        with self.assertRaises(NoSuchOptionError):
            report(["-v"], shell=False)


if __name__ == '__main__':
    unittest.main()
