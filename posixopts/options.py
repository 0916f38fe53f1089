r"""
posixopts option definitions.

- CommandOption: one option (long name and/or short character, arity, value, help text,
  repeatability). Names and arity are validated on construction; problems raise
  ConfigurationError subclasses before anything is parsed.
- CommandGroup: a named, ordered collection of options. Groups only organize help output;
  they carry no parsing semantics.

Name rules
- long: non-empty, no whitespace or '=', must not start with '-' ("dry-run", "int", "o2").
- short: exactly one printable character other than '-', ':', '?' and '='.

Quick example:
    >>> size = Slot(10)
    >>> group = CommandGroup("Default", [
    ...     CommandOption("size", "n", Arity.REQUIRED, IntType(size, 10), "Set the size."),
    ... ])
"""
import re

from .faults import *
from .utils import *
from .values import Arity, Value

_LONG = re.compile(r"[^\s=\-][^\s=]*")
_RESERVED = frozenset("-:?=")


def _sanitize_long(long, /):
    if long is None:
        return None
    if not isinstance(long, str):
        raise TypeError("option long name must be a string")
    if not _LONG.fullmatch(long):
        raise MalformedOptionError(
            "option long name %r must be non-empty, must not start with '-' "
            "and must not contain '=' or blanks" % long,
            code=FaultCode.MALFORMED_OPTION
        )
    return long


def _sanitize_short(short, /):
    if short is None:
        return None
    if not isinstance(short, str):
        raise TypeError("option short name must be a string")
    if len(short) != 1 or not short.isprintable() or short.isspace() or short in _RESERVED:
        raise MalformedOptionError(
            "option short name %r must be a single character other than '-', ':', '?' and '='" % short,
            code=FaultCode.MALFORMED_OPTION
        )
    return short


class CommandOption:
    """
    One option definition.

    Parameters
    - long: str | None
      Long name without the leading "--".
    - short: str | None
      Short character without the leading "-".
    - arity: Arity
      NONE, REQUIRED or OPTIONAL. Anything else raises ConflictingArityError.
    - value: Value
      Handler that converts and stores the argument.
    - help: str
      One-line description for help output.
    - repeatable: bool
      Whether the option may appear more than once.
    """

    def __init__(self, long=None, short=None, arity=Arity.NONE, value=Unset, help="", *, repeatable=False):
        self._long = _sanitize_long(long)
        self._short = _sanitize_short(short)
        if self._long is None and self._short is None:
            raise MalformedOptionError(
                "option must have a long name, a short name, or both",
                code=FaultCode.MALFORMED_OPTION
            )

        if not isinstance(arity, Arity):
            raise ConflictingArityError(
                "option %r arity must be exactly one of Arity.NONE, Arity.REQUIRED or Arity.OPTIONAL" % self.label,
                code=FaultCode.CONFLICTING_ARITY,
                option=self
            )
        if not isinstance(value, Value):
            raise TypeError("option %r 'value' must be a Value" % self.label)
        if not isinstance(help, str):
            raise TypeError("option %r 'help' must be a string" % self.label)

        self._arity = arity
        self._value = value
        self._help = help.strip()
        self._repeatable = bool(repeatable)

    long = mirror("long")
    short = mirror("short")
    arity = mirror("arity")
    value = mirror("value")
    help = mirror("help")
    repeatable = mirror("repeatable")

    @property
    def label(self):
        """
        Spelling used in messages: "--long" when there is a long name, "-s" otherwise.
        """
        return "--" + self._long if self._long is not None else "-" + self._short

    @property
    def names(self):
        return tuple(name for name in (
            None if self._short is None else "-" + self._short,
            None if self._long is None else "--" + self._long,
        ) if name)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        options = {
            "long": self._long,
            "short": self._short,
            "arity": self._arity,
            "value": self._value,
            "help": self._help,
            "repeatable": self._repeatable,
        }
        return type(self)(**options | overrides)

    def __rich_repr__(self):
        yield "long", self._long
        yield "short", self._short
        yield "arity", self._arity
        yield "value", self._value
        yield "help", self._help
        yield "repeatable", self._repeatable

    def __repr__(self):
        return "command-option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class CommandGroup:
    """
    Named, ordered collection of options (help organization only).
    """

    def __init__(self, name, options=(), /):
        if not isinstance(name, str):
            raise TypeError("command group 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("command group 'name' cannot be empty")

        options = list(options)
        for option in options:
            if not isinstance(option, CommandOption):
                raise TypeError("command group %r options must be command options" % name)

        self._name = name
        self._options = options

    name = mirror("name")
    options = mirror("options")

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __rich_repr__(self):
        yield "name", self._name
        yield "options", tuple(self._options)

    def __repr__(self):
        return "command-group(name=%r, options=%r)" % (self._name, tuple(self._options))


__all__ = (
    "CommandOption",
    "CommandGroup",
)
