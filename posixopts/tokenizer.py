r"""
posixopts tokenizer: a getopt_long-compatible scanner with its own cursor.

purpose
- classify argv tokens against a Registry the way getopt_long does with a "+:" optstring
  (strict ordering, missing arguments reported apart from unknown options), keeping the
  scan position in the object instead of process-wide optind/optopt state. Two tokenizers
  never interfere with each other.

iteration
- each step yields either a Match(option, argument, token, index) or an OptionFault
  describing why the token (or cluster character) was dropped. 'argument' is the raw
  string (possibly empty) or None when no argument was taken.
- iteration ends at the first token that is not an option; tokenizer.index is then the
  position of that token (or len(argv) when everything was consumed).

token forms
- "--"             → consumed, ends scanning
- "-", "file", ""  → not options, end scanning (left unconsumed)
- "--name"         → NONE/OPTIONAL: no argument; REQUIRED: takes the next token
- "--name=VALUE"   → REQUIRED/OPTIONAL: VALUE; NONE: UnexpectedArgumentError
- "-x"             → NONE/OPTIONAL: no argument; REQUIRED: takes the next token
- "-xVALUE"        → REQUIRED/OPTIONAL: VALUE (the rest of the token)
- "-abc"           → cluster, read one character at a time until an option takes the rest
- unambiguous prefixes of long names are accepted ("--verb" for "--verbose") unless
  abbreviations=False; an exact name always wins over longer names sharing its prefix.

faults
- UnknownOptionError: character or long name not in the registry
- AmbiguousOptionError: prefix shared by several long names
- UnexpectedArgumentError: "--name=VALUE" for an option without argument
- MissingArgumentError: REQUIRED option at the very end of argv
"""
import difflib
from typing import NamedTuple

from .faults import *
from .utils import *
from .values import Arity


class Match(NamedTuple):
    option: object
    argument: str | None
    token: str
    index: int


class Tokenizer:
    """
    Cursor over one argv snapshot.

    state
    - index: position of the token being scanned (next token once a token is finished)
    - cluster: position inside a short-option cluster, 0 when not inside one
    - unmatched: last token that produced an unknown/ambiguous fault, None otherwise
    """

    def __init__(self, registry, argv, /, *, abbreviations=True):
        argv = tuple(argv)
        for token in argv:
            if not isinstance(token, str):
                raise TypeError("tokenizer argv must contain only strings")
        self._registry = registry
        self._argv = argv
        self._abbreviations = bool(abbreviations)
        self._index = 0
        self._cluster = 0
        self._unmatched = None
        self._done = False

    index = mirror("index")
    unmatched = mirror("unmatched")

    def __iter__(self):
        return self

    def __next__(self):
        if self._cluster:
            return self._next_short()

        if self._done or self._index >= len(self._argv):
            self._done = True
            raise StopIteration

        token = self._argv[self._index]
        if token == "--":
            self._index += 1
            self._done = True
            raise StopIteration
        if token == "-" or not token.startswith("-"):
            self._done = True
            raise StopIteration

        if token.startswith("--"):
            return self._next_long(token)

        self._cluster = 1
        return self._next_short()

    def _take_next(self):
        # next argv element as an argument, whatever it looks like (getopt semantics)
        if self._index < len(self._argv):
            argument = self._argv[self._index]
            self._index += 1
            return argument
        return None

    def _next_long(self, token):
        start = self._index
        self._index += 1

        name, equals, inline = token[2:].partition("=")
        inline = inline if equals else None

        candidates = self._registry.match_long(name, self._abbreviations)

        if not candidates:
            self._unmatched = token
            suggestions = difflib.get_close_matches(name, self._registry.longs.keys(), 3)
            return UnknownOptionError(
                "unknown option %r" % token,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                token=token,
                index=start,
                hint=("did you mean %r?" % ("--" + suggestions[0])) if suggestions else "check the spelling of %r" % ("--" + name)
            )

        if len(candidates) > 1:
            self._unmatched = token
            return AmbiguousOptionError(
                "option %r is ambiguous" % ("--" + name),
                title="ambiguous option",
                code=FaultCode.AMBIGUOUS_OPTION,
                token=token,
                index=start,
                candidates=candidates,
                hint="possibilities: %s" % ", ".join("--" + option.long for option in candidates)
            )

        option, = candidates
        match option.arity:
            case Arity.NONE if inline is not None:
                return UnexpectedArgumentError(
                    "option %r doesn't allow an argument" % ("--" + option.long),
                    title="unexpected argument",
                    code=FaultCode.UNEXPECTED_ARGUMENT,
                    token=token,
                    index=start,
                    option=option,
                    hint="remove everything from '=' (for example: --%s)" % option.long
                )
            case Arity.REQUIRED if inline is None:
                inline = self._take_next()
                if inline is None:
                    return self._missing(option, token, start)

        return Match(option, inline, token, start)

    def _next_short(self):
        start = self._index
        token = self._argv[start]
        char = token[self._cluster]
        self._cluster += 1
        rest = token[self._cluster:]

        if not rest:
            self._finish_cluster()

        option = self._registry.find_short(char)
        if option is None:
            self._unmatched = token
            return UnknownOptionError(
                "unknown option %r" % ("-" + char),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                token=token,
                index=start,
                hint="check the spelling of %r" % ("-" + char)
            )

        match option.arity:
            case Arity.NONE:
                return Match(option, None, token, start)
            case Arity.OPTIONAL:
                if rest:
                    self._finish_cluster()
                    return Match(option, rest, token, start)
                return Match(option, None, token, start)
            case Arity.REQUIRED:
                if rest:
                    self._finish_cluster()
                    return Match(option, rest, token, start)
                if (argument := self._take_next()) is None:
                    return self._missing(option, token, start)
                return Match(option, argument, token, start)

    def _finish_cluster(self):
        self._cluster = 0
        self._index += 1

    def _missing(self, option, token, index):
        return MissingArgumentError(
            "missing argument for %r" % token,
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            token=token,
            index=index,
            option=option,
            hint="pass a value after %s (for example: %s %s)" % (
                option.label, option.label, option.value.arg_hint or "VALUE"
            )
        )


__all__ = (
    "Match",
    "Tokenizer",
)
