"""
posixopts parser: walk argv against the registry and dispatch to option values.

What this module provides
- Parser: holds the grouped definitions and runtime flags; parse(argv) runs one pass.
- parse(groups, argv, **flags): one-shot convenience wrapper.
- ParseResult: (index, faults) named tuple returned by every parse.

Pass structure
- a fresh Registry is built for every parse (configuration errors surface here, before any
  token is read) together with a fresh Tokenizer over the argv snapshot.
- each Match is dispatched to option.value.set(option, argument, report):
  • an attached argument of zero length ("--name=") counts as absent; for a REQUIRED
    option this is also reported as EmptyArgumentWarning.
  • the boolean returned by set() is not accumulated; faults carry the details.
- each fault yielded by the tokenizer or reported by a value is collected and, unless
  quiet, printed on stderr right away. Scanning always continues with the next token.
- the result index is the first argv position that was not consumed.

Runtime flags
- quiet: collect faults without printing them.
- strict: after the pass, raise ParseExit if any error was collected.
- colorful / fancy: rendering of printed faults (plain text, or rich Panel).
- abbreviations: accept unambiguous prefixes of long names.
- console: rich Console that receives printed faults (defaults to the stderr console).

Quick start
    from posixopts import *

    count = Slot(10)
    verbose = Slot(False)

    result = parse([
        CommandGroup("Default", [
            CommandOption("count", "c", Arity.REQUIRED, IntType(count, 10), "Set the count."),
            CommandOption("verbose", "v", Arity.NONE, BoolType(verbose), "Talk more."),
        ]),
    ], ["-v", "--count=3", "input.txt"])

    assert (count.value, verbose.value, result.index) == (3, True, 2)
"""
import copy
import logging
import sys
from typing import NamedTuple

from .faults import *
from .registry import Registry
from .tokenizer import Match, Tokenizer
from .utils import *
from .values import Arity

_logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    index: int
    faults: tuple

    @property
    def errors(self):
        return tuple(fault for fault in self.faults if isinstance(fault, OptionFault))

    @property
    def warnings(self):
        return tuple(fault for fault in self.faults if isinstance(fault, OptionWarning))

    @property
    def ok(self):
        return not self.errors


class Parser:
    """
    Parser over a fixed sequence of CommandGroup.

    The definitions are validated on construction (a Registry is built and discarded), so
    configuration errors are raised before the first parse. Every parse() then works on its
    own registry, tokenizer and fault list; nothing carries over from one call to the next.
    """

    def __init__(
            self,
            groups,
            /,
            *,
            quiet=False,
            strict=False,
            colorful=True,
            fancy=False,
            abbreviations=True,
            console=Unset
    ):
        self._groups = tuple(groups)
        Registry(self._groups)

        self._quiet = bool(quiet)
        self._strict = bool(strict)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._abbreviations = bool(abbreviations)
        self._console = console

    groups = mirror("groups")
    quiet = mirror("quiet")
    strict = mirror("strict")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    abbreviations = mirror("abbreviations")

    def report(self, fault, /, **options):
        """
        merge token context and the runtime rendering flags into a fault, print it and return it.
        """
        runtime = {"colorful": self._colorful, "fancy": self._fancy, "quiet": self._quiet}
        if self._console is not Unset:
            runtime["console"] = self._console
        fault = copy.replace(fault, **options | runtime)
        _logger.debug("fault %s at index %r: %s", fault.code, fault.index, fault.message)
        fault.__trigger__()
        return fault

    def parse(self, argv=Unset, /):
        """
        Parse argv (defaults to sys.argv[1:]) and return a ParseResult.

        Raises
        - ConfigurationError: the definitions are structurally invalid.
        - ParseExit: strict mode and at least one error was collected.
        - TypeError: argv is a string or contains non-string items.
        """
        if argv is Unset:
            argv = sys.argv[1:]
        elif isinstance(argv, str):
            raise TypeError("parse() argv must be a sequence of strings, not a string")

        faults = []
        registry = Registry(self._groups)
        tokenizer = Tokenizer(registry, argv, abbreviations=self._abbreviations)

        for event in tokenizer:
            if isinstance(event, Match):
                self._dispatch(event, faults)
            else:
                faults.append(self.report(event))

        result = ParseResult(tokenizer.index, tuple(faults))
        _logger.debug("parse stopped at index %d with %d faults", result.index, len(result.faults))

        if self._strict and result.errors:
            trigger(ParseExit(result.errors), colorful=self._colorful, fancy=self._fancy)
        return result

    def _dispatch(self, match, faults):
        option, argument = match.option, match.argument
        context = {"token": match.token, "index": match.index}

        if argument == "":
            if option.arity is Arity.REQUIRED:
                faults.append(self.report(EmptyArgumentWarning(
                    "empty argument for option %r" % option.label,
                    title="empty argument",
                    code=FaultCode.EMPTY_ARGUMENT,
                    option=option,
                    hint="add a value after '=' (for example: %s=<%s>)" % (
                        option.label, option.value.arg_hint or "VALUE"
                    )
                ), **context))
            argument = None

        accepted = option.value.set(option, argument, lambda fault: faults.append(self.report(fault, **context)))
        _logger.debug("%s <- %r (%s)", option.label, argument, "stored" if accepted else "skipped")


def parse(groups, argv=Unset, /, **options):
    """
    One-shot parse: Parser(groups, **options).parse(argv).

    Returns
    - ParseResult(index, faults); index is the first unconsumed position in argv.
    """
    return Parser(groups, **options).parse(argv)


__all__ = (
    "Parser",
    "ParseResult",
    "parse",
)
