"""
Usage and version rendering.

The parser only decides *when* to show these (on --help / --version); this
module turns a Spec's metadata into rich Text.

Layout
    USAGE: <name> [<option header>]... ARG [OPTIONAL] [VARIAD1 VARIAD2...]
        <description>

    OPTIONS:
        <option header>
            <option description>

- With fewer than five distinct options (or with the full listing forced on
  the spec) every option header appears in the usage line, otherwise a
  single [OPTION...] placeholder is shown.
- The usage line wraps with a hanging indent under the first item.

Palette keys
- usage-label, program-name, option-header, argument-name, description-section,
  options-label, option-description, program-version

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict, deque

from rich.console import Console
from rich.text import Text

from .utils import Unset, coalesce

LABEL = "USAGE:"
LISTING_THRESHOLD = 5


def _palette(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "option-header": "bold #22C55E",
        "argument-name": "bold #FFD600",
        "description-section": "italic #A3A3A3",
        "options-label": "bold #FFFFFF",
        "option-description": "#9CA3AF",
        "program-version": "bold #00E6FF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _wrap(items, width, indent):
    """Join items with spaces, breaking lines so that none exceeds width."""
    lines = []
    items = deque(items)
    while items:
        line = items.popleft()
        while items and len(line) + 1 + len(items[0]) <= width - indent:
            line = line + Text(" ") + items.popleft()
        lines.append(line)
    return lines


def _positionals(spec, styler):
    items = []
    for argument in spec.arguments.values():
        name = argument.name.upper()
        if argument.variadic:
            items.append(Text("[%s1 %s2...]" % (name, name), styler("argument-name")))
        elif argument.has_default:
            items.append(Text("[%s]" % name, styler("argument-name")))
        else:
            items.append(Text(name, styler("argument-name")))
    return items


def render_usage(spec, /, *, colorful=True, width=Unset):
    """
    Render the usage screen of spec as rich Text.

    Parameters
    - spec: argosy.specs.Spec
    - colorful: bool, apply the palette.
    - width: int | Unset, wrapping width (defaults to the console width).
    """
    styler = _palette(colorful)
    width = coalesce(width, Console().width)
    options = spec.unique_options

    items = []
    if spec.name:
        items.append(Text(spec.name, styler("program-name")))
    if len(options) < LISTING_THRESHOLD or spec.option_listing:
        items.extend(Text.assemble("[", (option.header, styler("option-header")), "]") for option in options)
    else:
        items.append(Text("[OPTION...]", styler("option-header")))
    items.extend(_positionals(spec, styler))

    indent = len(LABEL) + 1
    usage = Text(LABEL, styler("usage-label"))
    lines = _wrap(items, width, indent)
    for index, line in enumerate(lines):
        usage.append("\n" + " " * indent if index else " ").append(line)

    renders = [usage]

    if spec.descr:
        descr = Text(spec.descr, styler("description-section"))
        for line in descr.wrap(Console(width=max(width - 4, 1)), max(width - 4, 1)):
            renders.append(Text("    ") + line)

    renders.append(Text(""))
    renders.append(Text("OPTIONS:", styler("options-label")))
    renders.append(Text(""))

    for option in options:
        renders.append(Text("    ") + Text(option.header, styler("option-header")))
        if option.descr:
            descr = Text(option.descr, styler("option-description"))
            for line in descr.wrap(Console(width=max(width - 8, 1)), max(width - 8, 1)):
                renders.append(Text("        ") + line)
        renders.append(Text(""))

    rendered = Text("\n").join(renders)
    rendered.rstrip()
    return rendered


def render_version(spec, /, *, colorful=True):
    """
    Render the version line of spec: "<name> <version>" (name when known).
    """
    styler = _palette(colorful)
    version = Text(spec.version or "", styler("program-version"))
    if spec.name:
        return Text.assemble((spec.name, styler("program-name")), " ", version)
    return version


__all__ = (
    "render_usage",
    "render_version",
)
