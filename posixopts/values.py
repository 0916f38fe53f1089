r"""
posixopts values: destinations, arity, and the typed option-value handlers.

Overview
- Arity: closed enumeration of how an option takes its argument (NONE, REQUIRED, OPTIONAL).
  Repeatability is a separate boolean on the option, so "required and optional at once"
  cannot be expressed.
- Store: policy of a boolean value (StoreTrue sets True, StoreFalse sets False).
- Slot: explicit destination cell owned by the caller. Slot(initial) keeps its own value;
  Slot.attribute(object, "name") writes through to an attribute of any object.
- Value: one option's behavior. It knows its argument hint and default (both used by help
  rendering), remembers whether it was already used, and converts/stores arguments.
- Typed values: StringType, IntType, BoolType, StringListType.

Value.set(option, argument=None, /, report=trigger) -> bool
- rejects a second use of a non-repeatable option (RepeatedOptionError)
- marks the value as used before the outcome is known, so a failed conversion still
  counts as the one allowed use
- argument absent + OPTIONAL arity → stores the default (fails when there is none)
- argument present, or NONE arity → stores whatever was given (possibly None)
- argument absent + REQUIRED arity → not applicable, returns False
Faults are handed to 'report' (the parser passes its collector); the return value tells
whether the slot was written.

Quick example:
    >>> count = Slot(10)
    >>> verbose = Slot(False)
    >>> IntType(count, 10).default_value()
    '10'
    >>> BoolType(verbose, StoreTrue).arg_hint
    ''
"""
import re
from collections.abc import MutableSequence
from enum import Enum

from .faults import *
from .utils import *

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

# optional blanks, optional sign, base-10 digits (leading zeros dropped)
_DECIMAL = re.compile(r"\s*([+-]?)0*([0-9]+)\s*")


def _shorten(argument, /, width=32):
    return argument if len(argument) <= width else argument[:width - 3] + "..."


class Arity(Enum):
    """
    How an option takes its argument.

    - NONE: "-x" / "--name" only; "--name=VALUE" is rejected by the tokenizer.
    - REQUIRED: "-xVALUE", "-x VALUE", "--name=VALUE", "--name VALUE".
    - OPTIONAL: "-xVALUE", "--name=VALUE" (attached forms only) or nothing at all.
    """
    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"


class Store(Enum):
    """
    What a BoolType writes when its option is seen.
    """
    FALSE = False
    TRUE = True


StoreFalse = Store.FALSE
StoreTrue = Store.TRUE


class Slot:
    """
    Destination cell for a typed value.

    The caller creates slots, hands them to typed values, and reads them back after
    parsing. A value never holds a reference to anything but its slot.
    """
    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    @staticmethod
    def attribute(object, name, /):
        """
        Return a slot that reads and writes object.<name>.
        """
        if not isinstance(name, str) or not name.isidentifier():
            raise TypeError("Slot.attribute() second argument must be an identifier")
        return _AttributeSlot(object, name)

    def __repr__(self):
        return "slot(%r)" % (self.value,)


class _AttributeSlot(Slot):
    __slots__ = ("_object", "_name")

    def __init__(self, object, name, /):
        self._object = object
        self._name = name

    @property
    def value(self):
        return getattr(self._object, self._name, None)

    @value.setter
    def value(self, value):
        setattr(self._object, self._name, value)

    def __repr__(self):
        return "slot(%s.%s=%r)" % (type(self._object).__name__, self._name, self.value)


class Value:
    """
    Base option-value handler.

    Subclasses provide:
    - default_value(self) -> str | None
    - _store(self, option, argument, report) -> bool
      argument is a non-empty string or None; report receives faults.

    Direct instantiation is only meaningful when implementing a new value type.
    """

    def __init__(self, slot, /, hint=""):
        if not isinstance(slot, Slot):
            raise TypeError(f"{type(self).__name__} target must be a slot")
        if not isinstance(hint, str):
            raise TypeError(f"{type(self).__name__} 'hint' must be a string")
        self._slot = slot
        self._hint = hint.strip()
        self._was_set = False

    slot = mirror("slot")
    arg_hint = mirror("hint")
    was_set = mirror("was_set")

    def default_value(self):
        """
        Return the default as a string, or None when there is no default.
        """
        return None

    def _store(self, option, argument, report):
        raise NotImplementedError

    def set(self, option, argument=None, /, report=trigger):
        if self._was_set and not option.repeatable:
            report(RepeatedOptionError(
                "option %r can only be used once" % option.label,
                title="repeated option",
                code=FaultCode.REPEATED_OPTION,
                option=option,
                hint="pass %s a single time" % option.label
            ))
            return False

        # counted before the outcome is known: a rejected argument still uses the option up
        self._was_set = True

        if argument is None and option.arity is Arity.OPTIONAL:
            if (default := self.default_value()) is None:
                return False
            return self._store(option, default, report)
        elif argument is not None or option.arity is Arity.NONE:
            return self._store(option, argument, report)
        return False

    def __rich_repr__(self):
        yield "slot", self._slot
        yield "hint", self._hint
        yield "default", self.default_value()
        yield "was_set", self._was_set

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))


class StringType(Value):
    """
    Stores the argument verbatim; fails when no argument is present.
    """

    def __init__(self, slot, /, default=Unset, hint="STRING"):
        if not isinstance(default, str | None | Unset):
            raise TypeError("StringType 'default' must be a string")
        super().__init__(slot, hint)
        self._default = default

    def default_value(self):
        return coalesce(self._default)

    def _store(self, option, argument, report):
        if argument is None:
            return False
        self._slot.value = argument
        return True


class IntType(Value):
    """
    Stores a base-10 integer within [minimum, maximum] (a C int by default).

    Malformed input reports InvalidNumberError, out-of-range input reports
    NumberRangeError; the slot keeps its previous value in both cases.
    """

    def __init__(self, slot, /, default=Unset, *, minimum=INT_MIN, maximum=INT_MAX):
        if isinstance(default, bool) or not isinstance(default, int | Unset):
            raise TypeError("IntType 'default' must be an integer")
        if minimum > maximum:
            raise ValueError("IntType 'minimum' cannot exceed 'maximum'")
        super().__init__(slot, "NUMBER")
        self._default = default
        self._minimum = minimum
        self._maximum = maximum

    minimum = mirror("minimum")
    maximum = mirror("maximum")

    def default_value(self):
        if self._default is Unset:
            return None
        return str(self._default)

    def _store(self, option, argument, report):
        if argument is None:
            return False

        if not (match := _DECIMAL.fullmatch(argument)):
            report(InvalidNumberError(
                "argument %r of option %r is invalid" % (_shorten(argument), option.label),
                title="invalid number",
                code=FaultCode.INVALID_NUMBER,
                option=option,
                hint="pass a base-10 integer (for example: %s 42)" % option.label
            ))
            return False

        try:
            number = int(match.group(1) + match.group(2))
        except ValueError:
            # more significant digits than int() converts; treated as out of range
            number = None
        if number is None or not self._minimum <= number <= self._maximum:
            report(NumberRangeError(
                "argument %r of option %r is out of range" % (_shorten(argument), option.label),
                title="number out of range",
                code=FaultCode.NUMBER_RANGE,
                option=option,
                hint="pass a number between %d and %d" % (self._minimum, self._maximum)
            ))
            return False

        self._slot.value = number
        return True


class BoolType(Value):
    """
    Ignores any argument and stores the policy chosen at construction time.

    The default is only rendered in help; it is never written to the slot.
    """

    def __init__(self, slot, /, store=Store.TRUE, default=Unset):
        if not isinstance(store, Store):
            raise TypeError("BoolType 'store' must be StoreTrue or StoreFalse")
        if not isinstance(default, bool | Unset):
            raise TypeError("BoolType 'default' must be a boolean")
        super().__init__(slot)
        self._store_policy = store
        self._default = default

    @property
    def store(self):
        return self._store_policy

    def default_value(self):
        if self._default is Unset:
            return None
        return "true" if self._default else "false"

    def _store(self, option, argument, report):
        self._slot.value = self._store_policy is Store.TRUE
        return True


class StringListType(Value):
    """
    Appends each argument to the slot's list, in command-line order.

    Meant for repeatable options; a slot holding None starts a new list.
    """

    def __init__(self, slot, /, hint="STRING"):
        if not isinstance(slot, Slot):
            raise TypeError("StringListType target must be a slot")
        if slot.value is not None and not isinstance(slot.value, MutableSequence):
            raise TypeError("StringListType slot must hold a list")
        super().__init__(slot, hint)

    def _store(self, option, argument, report):
        if argument is None:
            return False
        if self._slot.value is None:
            self._slot.value = []
        self._slot.value.append(argument)
        return True


__all__ = (
    # Enumerations
    "Arity",
    "Store",
    "StoreFalse",
    "StoreTrue",

    # Destinations
    "Slot",

    # Values
    "Value",
    "StringType",
    "IntType",
    "BoolType",
    "StringListType",

    # Constants
    "INT_MIN",
    "INT_MAX",
)
