"""
Minnow help renderer.

Builds the usage/help block of an App from its registry alone (parsed state is
never consulted), as a rich Text:

    <description>

    Usage: <prog> [OPTIONS] <arg1> <arg2>

    Options:
        -l, --left <value>  left operand (default: 20)
            --right <value>
        -h, --help          Print help information

Options come first in declaration order, then flags in declaration order (the
built-in help flag is the first flag). Switch columns are padded to a common
width so descriptions line up.

Palette keys
- usage-label, program-name, metavar, options-label, option-name, flag-name,
  description, default
Define a mapping named __styles__ in __main__ to override any of them; with
colorful=False no style is applied.
"""
from collections import defaultdict

from rich.text import Text

from .utils import *

INDENT = " " * 4
GUTTER = " " * 2


def _switches(declaration, style, /):
    # "-l, --left", or "    --left" so long names stay aligned.
    *shorts, long = declaration.switches
    return Text("".join(short + ", " for short in shorts) or " " * 4).append(long, style)


def render(registry, /, name=Unset, descr=Unset, *, colorful=True):
    """
    Render the help block for a registry.

    Parameters
    - registry: Registry to describe.
    - name: program name; "PROG" when unknown.
    - descr: optional one-line description shown first.
    - colorful: apply the palette when True.

    Returns
    - rich.text.Text (use .plain for the unstyled string).
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "metavar": "bold #FFD600",
        "options-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "description": "#9CA3AF",
        "default": "italic #737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    help = Text()

    if descr := coalesce(descr):
        help.append(descr if isinstance(descr, Text) and colorful else str(descr), styler("description"))
        help.append("\n\n")

    help.append("Usage:", styler("usage-label")).append(" ")
    help.append(coalesce(name) or "PROG", styler("program-name"))
    help.append(" [OPTIONS]")
    for argument in registry.arguments:
        help.append(" ").append(argument.metavar, styler("metavar"))
    help.append("\n\n")

    help.append("Options:", styler("options-label")).append("\n")

    rows = []
    for option in registry.options:
        switches = _switches(option, styler("option-name"))
        switches.append(" ").append("<value>", styler("metavar"))
        rows.append((switches, option.descr, option.default))
    for flag in registry.flags:
        switches = _switches(flag, styler("flag-name"))
        rows.append((switches, flag.descr, None))

    width = max(len(switches) for switches, _, _ in rows)

    for switches, description, default in rows:
        line = Text(INDENT).append_text(switches)
        if description or default is not None:
            line.append(" " * (width - len(switches)) + GUTTER)
        if description:
            line.append(str(description), styler("description"))
        if default is not None:
            line.append(" " if description else "").append("(default: %s)" % default, styler("default"))
        help.append_text(line).append("\n")

    return help


__all__ = (
    "render",
)
