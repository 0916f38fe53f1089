"""
posixopts faults (configuration errors, parse errors, warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every problem the package reports.
  Codes are grouped by domain to keep messages consistent and logs searchable.
- ConfigurationError: structural problems in the caller's option definitions (duplicate
  names, conflicting arity, malformed names). Raised before any token is read.
- OptionFault / OptionWarning: per-token problems found while parsing. They carry a message
  plus context options and know how to render themselves with rich.
- ParseExit: groups the errors of a strict parse into one raisable exception.
- trigger(): central entry point to surface any fault with merged runtime options.

Reporting model
- Per-token faults are non-fatal. The parser collects them and, unless quiet, prints each
  one on stderr as soon as it happens; scanning then continues with the next token.
- Configuration errors are programming mistakes and propagate as exceptions.

Host overrides (read from __main__ when present)
- __prog__: program name shown in fault headers (defaults to basename of sys.argv[0]).
- __codes__: mapping FaultCode → label, replacing numeric codes in headers.
- __styles__: palette overrides for the keys listed in _PALETTE.
"""
import copy
import os.path
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
    - configuration (211xx)
      • DUPLICATE_LONG_NAME, DUPLICATE_SHORT_NAME, CONFLICTING_ARITY, MALFORMED_OPTION
    - options (1111x)
      • UNKNOWN_OPTION, AMBIGUOUS_OPTION, MISSING_ARGUMENT, UNEXPECTED_ARGUMENT,
        REPEATED_OPTION
    - values (1112x)
      • INVALID_NUMBER, NUMBER_RANGE
    - warnings (12xxx)
      • EMPTY_ARGUMENT
    """
    # --- configuration errors (21xxx) ---
    DUPLICATE_LONG_NAME  = 21101
    DUPLICATE_SHORT_NAME = 21102
    CONFLICTING_ARITY    = 21103
    MALFORMED_OPTION     = 21104

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION       = 11111
    AMBIGUOUS_OPTION     = 11112
    MISSING_ARGUMENT     = 11113
    UNEXPECTED_ARGUMENT  = 11114
    REPEATED_OPTION      = 11115

    # --- value errors (11xxx) ---
    INVALID_NUMBER       = 11121
    NUMBER_RANGE         = 11122

    # --- warnings (12xxx) ---
    EMPTY_ARGUMENT       = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels. without one, the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConfigurationError(ValueError):
    """
    Structural error in the option definitions.

    There is no valid way to parse against an ambiguous registry, so these are raised
    from option/registry construction and never collected like per-token faults.
    """

    def __init__(self, message, /, *, code, option=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.option = option


class DuplicateLongNameError(ConfigurationError): ...
class DuplicateShortNameError(ConfigurationError): ...
class ConflictingArityError(ConfigurationError): ...
class MalformedOptionError(ConfigurationError): ...


_PALETTE = {
    # header parts
    "prog-name": "bold #E6E6F0",
    "error-code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "warning-code": "bold #FFB400",
    "warning-title": "bold #FFC2E0",

    # body
    "error-message": "#C8C8D0",
    "warning-message": "#D6D6DE",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}


def _styles():
    return defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))


def _prog(options):
    return options.get("prog") or getattr(
        __import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "posixopts"
    )


def _render(fault, kind):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: "[ prog — code | title ]"
    - message: one sentence naming the token or option
    - hint: " → " followed by a single suggestion (omitted when absent)
    fancy wraps the message and hint in a Panel titled by the header.
    """
    styles = _styles()
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    code = fault.options.get("code")
    header = Text.assemble(
        "[ ",
        text(_prog(fault.options), "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else code, kind + "-code"),
        " | ",
        text(str(fault.options.get("title", kind)).title(), kind + "-title"),
        " ]"
    )
    message = text(fault.message, kind + "-message")
    renders = [message]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class OptionFault(Exception):
    """
    Per-token parse error.

    options (all optional, merged by the parser through __replace__)
    - code: FaultCode
    - title: short title for the header
    - hint: single actionable suggestion
    - token: the raw argv token involved
    - index: position of that token in argv
    - option: the CommandOption involved, when one was resolved
    - colorful, fancy, quiet, console, prog: rendering controls
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    def __rich__(self):
        return _render(self, "error")

    def __trigger__(self):
        if self.options.get("quiet", False):
            return
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(OptionFault): ...
class AmbiguousOptionError(OptionFault): ...
class MissingArgumentError(OptionFault): ...
class UnexpectedArgumentError(OptionFault): ...
class RepeatedOptionError(OptionFault): ...
class InvalidNumberError(OptionFault): ...
class NumberRangeError(OptionFault): ...


class OptionWarning(Warning):
    """
    Per-token parse warning; same options and rendering contract as OptionFault.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    def __rich__(self):
        return _render(self, "warning")

    def __trigger__(self):
        if self.options.get("quiet", False):
            return
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyArgumentWarning(OptionWarning): ...


class ParseExit(ExceptionGroup[OptionFault]):
    """
    Errors collected by a strict parse, raised once scanning has finished.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad usage", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad usage", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", True)
        prog = _prog(self.options)
        header = Text.assemble(
            "[ ",
            Text(prog, styles["prog-name"] if colorful else ""),
            " — ",
            Text(self.message.title(), styles["error-title"] if colorful else ""),
            " ]"
        )
        renders = [exception.__rich__() for exception in self.exceptions]
        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace before triggering.
    - OptionFault/OptionWarning print themselves (unless quiet); ParseExit raises.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ConfigurationError",
    "DuplicateLongNameError",
    "DuplicateShortNameError",
    "ConflictingArityError",
    "MalformedOptionError",
    "OptionFault",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "RepeatedOptionError",
    "InvalidNumberError",
    "NumberRangeError",
    "OptionWarning",
    "EmptyArgumentWarning",
    "ParseExit",
    "trigger",
)
