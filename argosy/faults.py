"""
Argosy faults (errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing failure. Codes
  are grouped by domain (declaration, lookup, command line, internal misuse)
  so that logs and searches stay predictable.
- ArgosyException: base type that carries a message plus read-only options
  (code, title, hint and any context such as the offending token) and knows
  how to render itself with rich.
- trigger(): central entry point to surface a fault, respecting the
  shell/fancy/colorful runtime options.

Integration
- The parser raises faults directly; nothing is collected or swallowed.
- A CLI-facing caller (argosy.report) hands the fault to trigger(..., shell=True),
  which prints it to stderr and exits with status 1. Outside shell mode
  trigger() simply raises the fault.
- Hosts may remap codes with a __codes__ mapping, restyle output with a
  __styles__ mapping and name the program with __prog__, all read from
  __main__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declarations (2110x): ARGUMENT_SYNTAX
    - lookups (2111x): NO_SUCH_OPTION, NO_SUCH_ARGUMENT
    - command line (2112x): COMPOUND_SYNTAX, REQUIRED_ARGUMENT, TRAILING_ARGUMENTS
    - internal misuse (2113x): ARGUMENT_SET, INVALID_OPERATION
    """
    # --- declaration errors ---
    ARGUMENT_SYNTAX    = 21101

    # --- lookup errors ---
    NO_SUCH_OPTION     = 21111
    NO_SUCH_ARGUMENT   = 21112

    # --- command line errors ---
    COMPOUND_SYNTAX    = 21121
    REQUIRED_ARGUMENT  = 21122
    TRAILING_ARGUMENTS = 21123

    # --- internal misuse ---
    ARGUMENT_SET       = 21131
    INVALID_OPERATION  = 21132

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgosyException(Exception):
    """
    base class of every argosy fault.

    subclasses pin their default code/title/hint through class attributes;
    any of them can be overridden per instance through keyword options.
    """
    __code__ = Unset
    __title__ = "error"
    __hint__ = "run with --help to see the expected usage"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
            "hint": type(self).__hint__,
        } | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.options["code"]
        prog = text(getattr(main, "__prog__", self.options.get("prog") or "argosy"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            ": ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArgumentSyntaxError(ArgosyException, ValueError):
    __code__ = FaultCode.ARGUMENT_SYNTAX
    __title__ = "bad argument declaration"
    __hint__ = "declare arguments as 'name', 'name:default' or a final 'name...'"


class ArgumentSetError(ArgosyException, RuntimeError):
    __code__ = FaultCode.ARGUMENT_SET
    __title__ = "bad argument assignment"
    __hint__ = "use set() for single arguments and push() for variadic ones"


class NoSuchOptionError(ArgosyException, LookupError):
    __code__ = FaultCode.NO_SUCH_OPTION
    __title__ = "unknown option"
    __hint__ = "run with --help to see all available options"


class NoSuchArgumentError(ArgosyException, LookupError):
    __code__ = FaultCode.NO_SUCH_ARGUMENT
    __title__ = "unknown argument"
    __hint__ = "only declared positional arguments can be looked up"


class CommandLineSyntaxError(ArgosyException, ValueError):
    __code__ = FaultCode.COMPOUND_SYNTAX
    __title__ = "malformed compound option"
    __hint__ = "an option that expects an argument must come last in a compound like -abc"


class RequiredArgumentError(ArgosyException, ValueError):
    __code__ = FaultCode.REQUIRED_ARGUMENT
    __title__ = "missing argument"
    __hint__ = "add the missing argument, then run with --help to see the expected order"


class TrailingArgumentsError(ArgosyException, ValueError):
    __code__ = FaultCode.TRAILING_ARGUMENTS
    __title__ = "unexpected arguments"
    __hint__ = "remove the extra inputs or run with --help to see valid forms"


class InvalidOperationError(ArgosyException, RuntimeError):
    __code__ = FaultCode.INVALID_OPERATION
    __title__ = "invalid operation"
    __hint__ = "flags are toggled, options with arguments receive values"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgosyException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is printed to stderr and the process exits with
      status 1; otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "ArgosyException",
    "ArgumentSyntaxError",
    "ArgumentSetError",
    "NoSuchOptionError",
    "NoSuchArgumentError",
    "CommandLineSyntaxError",
    "RequiredArgumentError",
    "TrailingArgumentsError",
    "InvalidOperationError",
    "FaultCode",
    "trigger",
)
