"""
Argosy interfaces: the command line parser.

An Interface takes ownership of one Spec, injects the built-in help/version
options, scans a token list once from left to right and returns either
Parsed(report) or Terminate(code, reason, renderable).

Token classification (first match wins)
1. "--"                       → stop taking options; the token is dropped.
2. pending option not full    → the token is the next argument of that option.
3. "--name"                   → long option; a flag is toggled, an option with
                                arguments becomes the pending option.
   "-xyz"                     → compound short options x, y, z; only the last
                                one may expect arguments.
4. anything else              → positional: bound to the next declared
                                argument, pushed onto the variadic argument,
                                or kept as trailing overflow. Options are no
                                longer taken after the first positional.

After the scan, help/version requests win over validation; then every
declared argument must be fulfilled and, if requested by the spec, no
trailing values may remain.

Module helpers
- parse(tokens, configure): build a fresh Spec, let configure() fill it, parse.
- report(tokens, configure): CLI-facing variant that prints help/version or
  faults and exits the process, returning the Report otherwise.
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import (
    ArgosyException,
    CommandLineSyntaxError,
    RequiredArgumentError,
    TrailingArgumentsError,
    trigger,
)
from .reports import Parsed, Report, Terminate
from .specs import Spec
from .usage import render_usage, render_version
from .utils import Unset

logger = logging.getLogger(__name__)

SEPARATOR = "--"


def _tokenize(prompt, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:]
    - str: shell-like string, split with shlex.split
    - Iterable[str]: used as-is
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("tokens must be a string or an iterable of strings")
        return tokens
    raise TypeError("tokens must be a string or an iterable of strings")


class Interface:
    """
    Parser bound to a single Spec for a single parse.

    Parameters
    - spec: the Spec to parse against; it is sealed once parsing starts.
    - shell: bool, faults are printed and exit the process instead of raising
      (honoured by run()).
    - colorful: bool, style the help/version output.
    - fancy: bool, frame fault output in a panel.
    """

    def __init__(self, spec, /, *, shell=False, colorful=True, fancy=False):
        if not isinstance(spec, Spec):
            raise TypeError("Interface() argument must be a spec")
        if spec.sealed:
            raise RuntimeError("spec was already consumed by a parse")
        self.spec = spec
        self.shell = shell
        self.colorful = colorful
        self.fancy = fancy

    def _inject(self, long, short, descr):
        names = tuple(name for name in (long, short) if name not in self.spec.options)
        if not names:
            return None
        self.spec.define_option(*names, descr=descr)
        return self.spec.get_option(names[0])

    def _short(self, token):
        shorts = token[1:]
        pending = None
        for index, short in enumerate(shorts):
            option = self.spec.get_option(short)
            if option.flag:
                option.toggle()
                logger.debug("toggled flag %s", option)
            elif index < len(shorts) - 1:
                raise CommandLineSyntaxError(
                    "-%s in compound option %r expects an argument" % (short, token),
                    token=token,
                    name=short,
                )
            else:
                option.increment()
                pending = option
        return pending

    def _long(self, token):
        option = self.spec.get_option(token[2:])
        if option.flag:
            option.toggle()
            logger.debug("toggled flag %s", option)
            return None
        option.increment()
        return option

    def parse(self, tokens, /):
        """
        Scan tokens against the spec.

        Returns
        - Parsed(report) on success.
        - Terminate(0, "help" | "version", renderable) when help or version
          was requested.

        Raises
        - NoSuchOptionError, CommandLineSyntaxError, RequiredArgumentError,
          TrailingArgumentsError (see argosy.faults).
        """
        tokens = _tokenize(tokens)
        if self.spec.sealed:
            raise RuntimeError("spec was already consumed by a parse")

        helper = self._inject("help", "h", "Print usage information and exit")
        versioner = None
        if self.spec.version:
            versioner = self._inject("version", "V", "Print version information and exit")
        self.spec._seal()

        taking = True
        pending = None
        cursor = 0
        trailing = []
        arguments = tuple(self.spec.arguments.values())
        variad = self.spec.variad

        for token in tokens:
            logger.debug("parsing token %r", token)
            if token == SEPARATOR:
                taking = False
            elif taking and pending is not None and not pending.full:
                pending.push(token)
                logger.debug("pushed %r to %s", token, pending)
            elif taking and token.startswith("-") and len(token) > 1:
                if token.startswith("--"):
                    pending = self._long(token)
                else:
                    pending = self._short(token)
            else:
                taking = False
                argument = arguments[cursor] if cursor < len(arguments) else None
                cursor += 1
                if argument is not None and not argument.variadic:
                    argument.set(token)
                    logger.debug("bound %r to %s", token, argument)
                elif variad is not None:
                    variad.push(token)
                    logger.debug("pushed %r to %s", token, variad)
                else:
                    trailing.append(token)
                    logger.debug("trailing %r", token)

        if helper is not None and helper.value:
            return Terminate(0, "help", render_usage(self.spec, colorful=self.colorful))
        if versioner is not None and versioner.value:
            return Terminate(0, "version", render_version(self.spec, colorful=self.colorful))

        for argument in arguments:
            if not argument.fulfilled:
                raise RequiredArgumentError(
                    "required argument %r was not given" % argument.name.upper(),
                    name=argument.name,
                )

        if self.spec.trailing_error and trailing:
            raise TrailingArgumentsError(
                "got trailing argument(s): %s" % ", ".join(trailing),
                trailing=tuple(trailing),
            )

        values = []
        for argument in arguments:
            if argument.variadic:
                values.extend(argument.value)
            else:
                values.append(argument.value)

        options = self.spec.options
        return Parsed(Report(
            args=values + trailing,
            named={argument.name: argument.value for argument in arguments},
            trailing=trailing,
            options={name: option.value for name, option in options.items()},
            counts={name: option.count for name, option in options.items()},
        ))

    def run(self, tokens=Unset, /):
        """
        Parse tokens and act on the outcome the way a command line tool would.

        - Terminate: the renderable is printed to stdout, then sys.exit(code).
        - Fault in shell mode: printed to stderr, then sys.exit(1).
        - Fault outside shell mode: raised.

        Returns
        - Report on a successful parse.
        """
        try:
            outcome = self.parse(tokens)
        except ArgosyException as fault:
            trigger(
                fault,
                shell=self.shell,
                colorful=self.colorful,
                fancy=self.fancy,
                prog=self.spec.name,
            )
            raise

        match outcome:
            case Terminate(code, _, renderable):
                Console().print(renderable)
                sys.exit(code)
            case Parsed(result):
                return result


def _build(configure, caller, /):
    spec = Spec()
    if configure is not Unset:
        if not callable(configure):
            raise TypeError("%s() configure argument must be callable" % caller)
        configure(spec)
    return spec


def parse(tokens=Unset, /, configure=Unset, **options):
    """
    Declare and parse a command line in one call.

    Parameters
    - tokens: Unset (sys.argv[1:]), a shell-like str, or an iterable of str.
    - configure: callable receiving a fresh Spec to populate.
    - **options: forwarded to Interface (shell, colorful, fancy).

    Returns
    - Parsed | Terminate, see Interface.parse().
    """
    return Interface(_build(configure, "parse"), **options).parse(tokens)


def report(tokens=Unset, /, configure=Unset, *, shell=True, colorful=True, fancy=False):
    """
    CLI-facing entry point, see Interface.run().

    Example
        >>> report(["-v", "world"], lambda spec: (
        ...     spec.define_args("name").define_option("verbose", "v")
        ... )).arg("name")
        'world'
    """
    spec = _build(configure, "report")
    return Interface(spec, shell=shell, colorful=colorful, fancy=fancy).run(tokens)


__all__ = (
    "Interface",
    "parse",
    "report",
)
