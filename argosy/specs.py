"""
Argosy command line declarations (the Spec builder).

A Spec is the declarative half of a command line: the program metadata, the
ordered positional arguments and the named options. It is populated through a
fluent builder (every configuration call returns the spec itself) and then
handed to exactly one Interface, which seals it for the duration of the parse.

Example
    >>> spec = (
    ...     Spec()
    ...     .set_name("hello")
    ...     .define_args("name", "greeting:hello", "rest...")
    ...     .define_option("verbose", "v", descr="Increase verbosity")
    ...     .define_option("friend", "f", ("name",), descr="Inquire about a friend")
    ... )
"""
import functools
import logging
from collections.abc import Iterable

from .arguments import Argument, Option
from .faults import ArgumentSyntaxError, NoSuchArgumentError, NoSuchOptionError
from .utils import Unset, coalesce, mirror

logger = logging.getLogger(__name__)


def _mutator(method):
    """Guard a builder method against use on a sealed spec and return the spec."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._sealed:
            raise RuntimeError("spec is sealed and can no longer be configured")
        method(self, *args, **kwargs)
        return self
    return wrapper


def _sanitize_text(field, value, /):
    if not isinstance(value, str):
        raise TypeError("spec %r must be a string" % field)
    elif not (value := value.strip()):
        raise ValueError("spec %r cannot be empty" % field)
    return value


class Spec:
    """
    Declarative registry of positional arguments and options.

    Invariants
    - At most one positional argument is variadic, and it is the last one.
    - Every option alias maps to the same Option instance.
    - Once sealed (when an Interface starts parsing it) the spec is read-only.
    """
    name = mirror("name")
    descr = mirror("descr")
    version = mirror("version")
    arguments = mirror("arguments")
    options = mirror("options")
    variad = mirror("variad")
    option_listing = mirror("option_listing")
    trailing_error = mirror("trailing_error")

    def __init__(self):
        self._name = Unset
        self._descr = Unset
        self._version = Unset
        self._arguments = {}
        self._options = {}
        self._variad = Unset
        self._option_listing = False
        self._trailing_error = False
        self._sealed = False

    @property
    def variadic(self):
        return self._variad is not Unset

    @property
    def sealed(self):
        return self._sealed

    @property
    def unique_options(self):
        """Distinct options in registration order (aliases collapsed)."""
        return tuple({id(option): option for option in self._options.values()}.values())

    @_mutator
    def set_name(self, name, /):
        self._name = _sanitize_text("name", name)

    @_mutator
    def set_description(self, descr, /):
        self._descr = _sanitize_text("descr", descr)

    @_mutator
    def set_version(self, version, /):
        self._version = _sanitize_text("version", version)

    def header(self, *, name=Unset, descr=Unset, args=Unset, version=Unset):
        """
        Set the program metadata and positional arguments in one call.

        Parameters left Unset are not touched.
        """
        if name is not Unset:
            self.set_name(name)
        if descr is not Unset:
            self.set_description(descr)
        if args is not Unset:
            self.define_args(args)
        if version is not Unset:
            self.set_version(version)
        return self

    @_mutator
    def define_args(self, *tokens):
        """
        Replace the positional arguments with the given declarations.

        Accepts tokens as separate parameters or as a single iterable;
        see argosy.arguments.declare() for the declaration syntax.

        Raises
        - ArgumentSyntaxError: a malformed token, a duplicated name, or a
          variadic argument that is not the last one.
        """
        flattened = []
        for token in tokens:
            if isinstance(token, Iterable) and not isinstance(token, str):
                flattened.extend(token)
            else:
                flattened.append(token)

        arguments = {}
        variad = Unset
        for index, token in enumerate(flattened):
            argument = token.fresh() if isinstance(token, Argument) else Argument.parse(token)
            if argument.name in arguments:
                raise ArgumentSyntaxError("duplicated argument name: %r" % argument.name, name=argument.name)
            if argument.variadic:
                if index != len(flattened) - 1:
                    raise ArgumentSyntaxError(
                        "variadic arguments must come last, offending argument is %r" % argument.name,
                        name=argument.name,
                    )
                variad = argument
            arguments[argument.name] = argument

        self._arguments = arguments
        self._variad = variad
        logger.debug("declared arguments %s", list(arguments.values()))

    @_mutator
    def define_option(self, long, short=Unset, /, args=(), descr=Unset):
        """
        Register an option under its long name and, if given, its short alias.

        Both names map to one shared Option instance.

        Raises
        - ValueError: a name is invalid or already registered.
        - ArgumentSyntaxError: a malformed argument declaration.
        """
        option = Option(long, short, args, descr)
        for name in option.names:
            if name in self._options:
                raise ValueError("option name %r is already registered" % name)
        for name in option.names:
            self._options[name] = option
        logger.debug("declared option %r", option)

    def get_option(self, name, /):
        try:
            return self._options[name]
        except KeyError:
            raise NoSuchOptionError("no such option: %r" % name, name=name) from None

    def get_argument(self, name, /):
        try:
            return self._arguments[name]
        except KeyError:
            raise NoSuchArgumentError("no such argument: %r" % name, name=name) from None

    @_mutator
    def force_full_option_listing(self):
        """Always list every option header in the usage line."""
        self._option_listing = True

    @_mutator
    def raise_on_trailing(self):
        """Make trailing (unbound) arguments a TrailingArgumentsError."""
        self._trailing_error = True

    def _seal(self):
        if self._sealed:
            raise RuntimeError("spec was already consumed by a parse")
        self._sealed = True

    def __repr__(self):
        return "spec(name=%r, arguments=%r, options=%r)" % (
            coalesce(self._name),
            tuple(self._arguments),
            tuple(self._options),
        )

    def __rich_repr__(self):
        yield "name", coalesce(self._name)
        yield "descr", coalesce(self._descr)
        yield "version", coalesce(self._version)
        yield "arguments", tuple(self._arguments.values())
        yield "options", self.unique_options


__all__ = (
    "Spec",
)
