import sys

from rich.pretty import pprint

from posixopts import *

my_string = Slot("I was untouched")
optional = Slot("I'm optional")
strings = Slot([])
my_flag = Slot(False)
my_int = Slot(10)

options = [
    CommandGroup("Default", [
        CommandOption("int", "i", Arity.REQUIRED, IntType(my_int, my_int.value), "Set the Int value."),
        CommandOption("bool", "b", Arity.NONE, BoolType(my_flag, StoreTrue, my_flag.value), "Enable the bool switch."),
    ]),
    CommandGroup("Extended", [
        CommandOption("string", "s", Arity.REQUIRED, StringType(my_string, my_string.value), "Set the String value."),
        CommandOption("ostring", "o", Arity.OPTIONAL, StringType(optional, "Seen, i was seen"), "Set the optional String value.", repeatable=True),
        CommandOption("cstring", "c", Arity.REQUIRED, StringListType(strings), "Add value to list of strings.", repeatable=True),
    ]),
]


if __name__ == '__main__':
    print("My options:")
    render_help(options)

    result = parse(options)

    pprint({
        "my_string": my_string.value,
        "optional": optional.value,
        "my_flag": my_flag.value,
        "my_int": my_int.value,
        "container": strings.value,
        "next in argv": sys.argv[1:][result.index] if result.index < len(sys.argv) - 1 else None,
    })
    sys.exit(0 if result.ok else 1)
