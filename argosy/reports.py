"""
Parse results.

- Report: immutable snapshot of a completed parse (positional values, named
  positionals, trailing overflow, option values and option counts).
- Parsed / Terminate: the two outcomes of Interface.parse(). Terminate stands
  for the help/version short-circuit: it carries the exit code and the
  renderable to print, leaving the actual printing and exiting to the caller.
"""
from types import MappingProxyType
from typing import Any, NamedTuple

from .faults import NoSuchArgumentError, NoSuchOptionError


class Report:
    """
    Immutable view over the values collected by one parse.

    Attributes
    - args: tuple of every positional value (variadic values flattened,
      defaults included) followed by the trailing values.
    - named: mapping of positional name → value (tuple for variadic).
    - trailing: tuple of values no positional slot accepted.
    - options: mapping of option name (every alias) → value.
    - counts: mapping of option name (every alias) → number of occurrences.
    """
    __slots__ = ("_args", "_named", "_trailing", "_options", "_counts")

    def __init__(self, args=(), named=None, trailing=(), options=None, counts=None):
        object.__setattr__(self, "_args", tuple(args))
        object.__setattr__(self, "_named", MappingProxyType(dict(named or {})))
        object.__setattr__(self, "_trailing", tuple(trailing))
        object.__setattr__(self, "_options", MappingProxyType(dict(options or {})))
        object.__setattr__(self, "_counts", MappingProxyType(dict(counts or {})))

    def __setattr__(self, name, value):
        raise AttributeError("report objects are immutable")

    def __delattr__(self, name):
        raise AttributeError("report objects are immutable")

    @property
    def args(self):
        return self._args

    @property
    def named(self):
        return self._named

    @property
    def trailing(self):
        return self._trailing

    @property
    def options(self):
        return self._options

    @property
    def counts(self):
        return self._counts

    def arg(self, name, /):
        """Value of the positional argument called name."""
        try:
            return self._named[name]
        except KeyError:
            raise NoSuchArgumentError("no such argument: %r" % name, name=name) from None

    def opt(self, name, /):
        """Value of the option reachable through name."""
        try:
            return self._options[name]
        except KeyError:
            raise NoSuchOptionError("no such option: %r" % name, name=name) from None

    def count(self, name, /):
        """Number of times the option reachable through name was given."""
        try:
            return self._counts[name]
        except KeyError:
            raise NoSuchOptionError("no such option: %r" % name, name=name) from None

    __getitem__ = opt

    def __eq__(self, other):
        if not isinstance(other, Report):
            return NotImplemented
        return (
            self._args == other._args and
            self._named == other._named and
            self._trailing == other._trailing and
            self._options == other._options and
            self._counts == other._counts
        )

    def __hash__(self):
        return hash((self._args, self._trailing))

    def __rich_repr__(self):
        yield "args", self._args
        yield "named", dict(self._named)
        yield "trailing", self._trailing
        yield "options", dict(self._options)
        yield "counts", dict(self._counts)

    def __repr__(self):
        return "report(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class Parsed(NamedTuple):
    """The command line was parsed; inspect the report."""
    report: Report


class Terminate(NamedTuple):
    """
    The command line asked to stop (help or version).

    - code: exit status the process should end with.
    - reason: "help" or "version".
    - renderable: what to print before exiting (a rich Text).
    """
    code: int
    reason: str
    renderable: Any


__all__ = (
    "Report",
    "Parsed",
    "Terminate",
)
