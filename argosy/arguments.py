r"""
Argosy argument and option models.

Overview
- Declarations
  • declare(token): parse the declaration mini-language into a tagged variant.
      "name"          → Plain("name")
      "name:default"  → Defaulted("name", "default")   (everything after the first ':')
      "name..."       → Variadic("name")
  • The ':' form wins over '...': "name:x..." is Defaulted("name", "x...").

- Argument: a single named value slot, positional or owned by an Option.
  • set(value) for plain slots, push(value) for variadic ones; using the
    wrong one raises ArgumentSetError.
  • value resolves to: the set value, else the default, else () for a
    variadic slot, else None.
  • fulfilled is True once a value is set, when a default exists, or when the
    slot is variadic (variadic slots default to an empty sequence).

- Option: one flag/option identity, shared by all of its names.
  • Zero slots make it a flag: toggle() flips it on and counts repeats.
  • Otherwise push(value) fills the next free slot; value is the single
    slot's value, or a tuple of all slot values for multi-slot options.

Validation highlights
- Argument names must match r"[^\W\d_][^\W_]*" (a letter, then letters/digits).
- Option names must match r"[^\W\d_](-?[^\W_]+)*" and are given without dashes.

Quick example:
    >>> Argument.parse("count:10").value
    '10'
    >>> option = Option("file", "f", ("name",))
    >>> option.push("out.txt")
    >>> option.value
    'out.txt'
"""
import re
from typing import NamedTuple

from .faults import ArgumentSetError, ArgumentSyntaxError, InvalidOperationError
from .utils import Unset, coalesce, mirror


class Plain(NamedTuple):
    """A required argument: ``name``."""
    name: str


class Defaulted(NamedTuple):
    """An optional argument with a default: ``name:default``."""
    name: str
    default: str


class Variadic(NamedTuple):
    """A greedy trailing argument: ``name...``."""
    name: str


def declare(token, /):
    """
    Parse one declaration token into Plain, Defaulted or Variadic.

    Raises
    - TypeError: token is not a string.
    - ArgumentSyntaxError: empty token, whitespace, empty name or empty default.
    """
    if not isinstance(token, str):
        raise TypeError("declare() argument must be a string")

    match = re.fullmatch(r"(?P<name>[^\s:]+?)(?::(?P<default>\S+)|(?P<variadic>\.\.\.))?", token)
    if not match:
        raise ArgumentSyntaxError("invalid argument declaration: %r" % token, token=token)

    if match["default"] is not None:
        return Defaulted(match["name"], match["default"])
    if match["variadic"] is not None:
        return Variadic(match["name"])
    return Plain(match["name"])


class Argument:
    """
    A named value slot.

    Parameters
    - name: str, a letter followed by letters/digits.
    - default: str | Unset, returned as value while nothing was set.
    - variadic: bool, collects every pushed value into a sequence.
    """
    name = mirror("name")
    default = mirror("default")
    variadic = mirror("variadic")

    def __init__(self, name, default=Unset, /, *, variadic=False):
        if not isinstance(name, str):
            raise TypeError("argument name must be a string")
        if not re.fullmatch(r"[^\W\d_][^\W_]*", name):
            raise ArgumentSyntaxError("invalid argument name: %r" % name, name=name)
        if not isinstance(default, str | Unset):
            raise TypeError("argument default must be a string")
        if variadic and default is not Unset:
            raise ArgumentSyntaxError("variadic argument %r cannot have a default" % name, name=name)

        self._name = name
        self._default = default
        self._variadic = bool(variadic)
        self._value = [] if self._variadic else Unset

    @classmethod
    def parse(cls, token, /):
        """
        Build an Argument from a declaration token (see declare()).
        """
        match declare(token):
            case Defaulted(name, default):
                return cls(name, default)
            case Variadic(name):
                return cls(name, variadic=True)
            case Plain(name):
                return cls(name)

    def fresh(self):
        """Return an unset copy of this argument (same name, default and kind)."""
        return type(self)(self._name, self._default, variadic=self._variadic)

    def set(self, value, /):
        """Set the value of a plain argument."""
        if self._variadic:
            raise ArgumentSetError(
                "cannot set the value of variadic argument %r, push onto it instead" % self._name,
                name=self._name,
            )
        self._value = value

    def push(self, value, /):
        """Append a value to a variadic argument."""
        if not self._variadic:
            raise ArgumentSetError(
                "cannot push onto plain argument %r, set it instead" % self._name,
                name=self._name,
            )
        self._value.append(value)

    @property
    def value(self):
        if self._variadic:
            return tuple(self._value)
        return coalesce(self._value, coalesce(self._default))

    @property
    def has_default(self):
        return self._default is not Unset or self._variadic

    @property
    def fulfilled(self):
        return self._value is not Unset or self.has_default

    def __repr__(self):
        suffix = "..." if self._variadic else "" if self._default is Unset else ":" + self._default
        return "argument(%s)" % (self._name + suffix)

    def __rich_repr__(self):
        yield "name", self._name
        yield "default", coalesce(self._default)
        yield "variadic", self._variadic
        yield "value", self.value


class Option:
    """
    A flag or option reachable through one or more names.

    Parameters
    - long: str, primary name (without dashes).
    - short: str | Unset, secondary alias (without dashes).
    - arguments: Iterable of Argument or declaration tokens; empty for a flag.
      A bare string counts as a single declaration token.
    - descr: str | Unset, short description used in usage output.
    """
    long = mirror("long")
    short = mirror("short")
    arguments = mirror("arguments")
    descr = mirror("descr")
    count = mirror("count")

    def __init__(self, long, short=Unset, /, arguments=(), descr=Unset):
        if short is Unset:
            names = (long,)
        else:
            names = (long, short)
        for name in names:
            if not isinstance(name, str):
                raise TypeError("option names must be strings")
            if not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
                raise ValueError("invalid option name: %r" % name)
        if long == short:
            raise ValueError("option names cannot contain duplicates")

        if isinstance(arguments, str):
            arguments = (arguments,)

        slots = []
        for argument in arguments:
            if isinstance(argument, Argument):
                argument = argument.fresh()
            else:
                argument = Argument.parse(argument)
            if argument.variadic:
                raise ArgumentSyntaxError(
                    "option %r cannot take variadic argument %r" % (long, argument.name),
                    name=argument.name,
                )
            slots.append(argument)

        if not isinstance(descr, str | Unset):
            raise TypeError("option 'descr' must be a string")

        self._long = long
        self._short = short
        self._arguments = slots
        self._descr = coalesce(descr, "").strip()
        self._count = 0
        self._toggled = False
        self._index = 0

    @property
    def names(self):
        return (self._long,) if self._short is Unset else (self._long, self._short)

    @property
    def arity(self):
        return len(self._arguments)

    @property
    def flag(self):
        return not self._arguments

    @property
    def full(self):
        return self.flag or self._index >= len(self._arguments)

    def toggle(self):
        """Switch a flag on and count the occurrence."""
        if not self.flag:
            raise InvalidOperationError(
                "option %r expects an argument and cannot be toggled" % self._long,
                name=self._long,
            )
        self._count += 1
        self._toggled = True

    def increment(self):
        """Count an occurrence of an option that takes arguments."""
        self._count += 1

    def push(self, value, /):
        """Fill the next free argument slot with value."""
        if self.flag:
            raise InvalidOperationError("flag %r does not take arguments" % self._long, name=self._long)
        if self.full:
            raise InvalidOperationError(
                "option %r already received all %d of its arguments" % (self._long, self.arity),
                name=self._long,
            )
        self._arguments[self._index].set(value)
        self._index += 1

    @property
    def value(self):
        if self.flag:
            return self._toggled
        values = tuple(argument.value for argument in self._arguments)
        return values[0] if len(values) == 1 else values

    @property
    def header(self):
        names = " ".join(
            ("-" if len(name) == 1 else "--") + name
            for name in sorted(self.names, key=len)
        )
        if self.flag:
            return names
        return names + " " + ", ".join(argument.name.upper() for argument in self._arguments)

    def __str__(self):
        return "(%s)" % self.header

    def __repr__(self):
        return "option(%s)" % self.header

    def __rich_repr__(self):
        yield "names", self.names
        yield "arguments", tuple(self._arguments)
        yield "descr", self._descr
        yield "count", self._count
        yield "value", self.value


__all__ = (
    # Declarations
    "Plain",
    "Defaulted",
    "Variadic",
    "declare",

    # Models
    "Argument",
    "Option",
)
