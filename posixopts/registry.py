"""
posixopts registry: the flattened, validated, indexed view of grouped options.

construction
- groups are flattened in declaration order (group order, then option order); that order
  drives the derived getopt descriptions and therefore help output, so it is stable.
- every option is copied with a private copy of its Value: "already used" bookkeeping
  belongs to one parse and never leaks into the caller's definitions or a later parse.
  Slots are shared, so values still write to the caller's destinations.
- duplicate long names raise DuplicateLongNameError, duplicate short characters raise
  DuplicateShortNameError. Both are ConfigurationError and depend only on the caller's
  static definitions, never on argv.

lookups
- find_short(char) → option | None
- match_long(name, abbreviations=True) → tuple of candidates
  • exact match wins and is returned alone
  • otherwise every option whose long name starts with 'name' (GNU-style abbreviation)
  • empty tuple when nothing matches
"""
import copy
import logging
from types import MappingProxyType

from .faults import *
from .options import CommandGroup
from .utils import *
from .values import Arity

_logger = logging.getLogger(__name__)


class Registry:
    """
    Flattened options plus long-name and short-character indices.

    Properties
    - options: tuple of CommandOption (private copies, declaration order)
    - longs: mapping long name → option
    - shorts: mapping short character → option
    - shortopts: getopt-style short option string, e.g. "+:i:bs:o::c:"
    - longopts: tuple of (long name, Arity) in declaration order
    """

    def __init__(self, groups, /):
        options = []
        longs = {}
        shorts = {}

        for group in groups:
            if not isinstance(group, CommandGroup):
                raise TypeError("registry groups must be command groups")

            for option in group:
                option = copy.replace(option, value=copy.copy(option.value))

                if option.long is not None:
                    if option.long in longs:
                        raise DuplicateLongNameError(
                            "duplicate long option '--%s' in group %r" % (option.long, group.name),
                            code=FaultCode.DUPLICATE_LONG_NAME,
                            option=option
                        )
                    longs[option.long] = option

                if option.short is not None:
                    if option.short in shorts:
                        raise DuplicateShortNameError(
                            "duplicate short option '-%s' in group %r" % (option.short, group.name),
                            code=FaultCode.DUPLICATE_SHORT_NAME,
                            option=option
                        )
                    shorts[option.short] = option

                options.append(option)

        self._options = tuple(options)
        self._longs = MappingProxyType(longs)
        self._shorts = MappingProxyType(shorts)

        _logger.debug("registry built with %d options (shortopts %r)", len(self._options), self.shortopts)

    options = mirror("options")
    longs = mirror("longs")
    shorts = mirror("shorts")

    @property
    def shortopts(self):
        # '+': stop at the first non-option, ':': report missing arguments apart from unknown options
        parts = ["+:"]
        for option in self._options:
            if option.short is None:
                continue
            parts.append(option.short)
            match option.arity:
                case Arity.REQUIRED:
                    parts.append(":")
                case Arity.OPTIONAL:
                    parts.append("::")
        return "".join(parts)

    @property
    def longopts(self):
        return tuple((option.long, option.arity) for option in self._options if option.long is not None)

    def find_short(self, char, /):
        return self._shorts.get(char)

    def match_long(self, name, /, abbreviations=True):
        """
        Return the options a long name resolves to: the exact match alone, else every
        option whose name starts with 'name'.

        Stricter than glibc getopt_long: several candidates are always ambiguous, even
        when they share the same arity (glibc silently picks the first one).
        """
        if (option := self._longs.get(name)) is not None:
            return (option,)
        if not abbreviations or not name:
            return ()
        return tuple(option for long, option in self._longs.items() if long.startswith(name))

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __rich_repr__(self):
        yield "shortopts", self.shortopts
        yield "longopts", self.longopts

    def __repr__(self):
        return "registry(shortopts=%r, longopts=%r)" % (self.shortopts, self.longopts)


__all__ = (
    "Registry",
)
