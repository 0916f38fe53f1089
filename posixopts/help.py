"""
posixopts help rendering.

Reads only the group names, the option names/arity/help text and each value's argument hint
and default. Lines follow the classic layout:

    Default:

    -i, --int <NUMBER>	Set the Int value. Default: 10
    -o, --ostring[=STRING]	Set the optional String value. Default: Seen, i was seen
        --quiet	Long-only options are indented to line up with "-x, ".

Palette keys (override through __styles__ in __main__)
- group-label, option-name, metavar, description, default-label, default
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .utils import *
from .values import Arity

_PALETTE = {
    "group-label": "bold #FFFFFF",
    "option-name": "bold #00E6FF",
    "metavar": "bold #FFD600",
    "description": "#9CA3AF",
    "default-label": "italic #737373",
    "default": "#FF4D94",
}


def _line(option, styler):
    line = Text()
    if option.short is not None:
        line.append("-" + option.short, styler("option-name"))
        if option.long is not None:
            line.append(", ")
    else:
        line.append("    ")

    if option.long is not None:
        line.append("--" + option.long, styler("option-name"))

    if hint := option.value.arg_hint:
        if option.arity is Arity.OPTIONAL:
            line.append_text(Text.assemble("[=", (hint, styler("metavar")), "]"))
        else:
            line.append_text(Text.assemble(" <", (hint, styler("metavar")), ">"))

    line.append("\t")
    line.append(option.help, styler("description"))

    if (default := option.value.default_value()) is not None:
        line.append(" Default: ", styler("default-label"))
        line.append(default, styler("default"))
    return line


def render_help(groups, /, console=Unset, *, colorful=True):
    """
    Print the help of the grouped options on console (stdout by default).
    """
    console = Console() if console is Unset else console
    styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    for group in groups:
        console.print(Text(group.name + ":", styler("group-label")), soft_wrap=True)
        console.print()
        for option in group:
            console.print(_line(option, styler), soft_wrap=True)
        console.print()


def format_help(groups, /):
    """
    Return the plain-text help of the grouped options.

    Same lines as render_help without styling; the tab between names and help text is
    kept as is (a terminal console expands it when printing).
    """
    lines = []
    for group in groups:
        lines += [group.name + ":", ""]
        lines += [_line(option, lambda style: "").plain for option in group]
        lines.append("")
    return "".join(line + "\n" for line in lines)


__all__ = (
    "render_help",
    "format_help",
)
