"""Native functions callable from Monkey code. BUILTINS is a closed name -> Builtin table; the evaluator consults it
only for names with no user binding, so `let len = fn(x) { 0 };` shadows the builtin.

Every builtin checks its own arguments and reports misuse with an Error value. exit is the single exception to
normal control flow: it terminates the process.
"""

import sys

from monkey.runtime.object import NULL, Array, Builtin, Error, Integer, String


def _wrong_count(arguments, want):
    return Error(f"wrong number of arguments. got={len(arguments)}, want={want}")


def _array_argument(name, arguments, count=1):
    """Returns the leading Array argument of a call, or an Error if the call is malformed."""
    if len(arguments) != count:
        return _wrong_count(arguments, count)
    if not isinstance(arguments[0], Array):
        return Error(f"argument to `{name}` must be ARRAY, got {arguments[0].kind}")
    return arguments[0]


def builtin_len(arguments):
    if len(arguments) != 1:
        return _wrong_count(arguments, 1)

    arg, = arguments
    if isinstance(arg, String):
        return Integer(len(arg.value))
    elif isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.kind}")


def builtin_first(arguments):
    array = _array_argument("first", arguments)
    if isinstance(array, Error):
        return array
    return array.elements[0] if array.elements else NULL


def builtin_last(arguments):
    array = _array_argument("last", arguments)
    if isinstance(array, Error):
        return array
    return array.elements[-1] if array.elements else NULL


def builtin_rest(arguments):
    array = _array_argument("rest", arguments)
    if isinstance(array, Error):
        return array
    return Array(array.elements[1:]) if array.elements else NULL


def builtin_push(arguments):
    """Returns a new array; the argument array is left untouched."""
    array = _array_argument("push", arguments, count=2)
    if isinstance(array, Error):
        return array
    return Array(array.elements + (arguments[1],))


def builtin_puts(arguments):
    """Writes each argument on its own line."""
    for arg in arguments:
        print(arg.inspect())
    return NULL


def builtin_println(arguments):
    """Writes each argument on its own line, like puts."""
    return builtin_puts(arguments)


def builtin_print(arguments):
    """Writes all arguments on one line, separated by spaces."""
    print(" ".join(arg.inspect() for arg in arguments))
    return NULL


def builtin_exit(arguments):
    if len(arguments) > 1:
        return _wrong_count(arguments, "0 or 1")

    code = arguments[0] if arguments else Integer(0)
    if not isinstance(code, Integer):
        return Error(f"argument to `exit` must be INTEGER, got {code.kind}")
    sys.exit(code.value)


BUILTINS = {
    builtin.name: builtin for builtin in (
        Builtin("len", builtin_len),
        Builtin("first", builtin_first),
        Builtin("last", builtin_last),
        Builtin("rest", builtin_rest),
        Builtin("push", builtin_push),
        Builtin("puts", builtin_puts),
        Builtin("print", builtin_print),
        Builtin("println", builtin_println),
        Builtin("exit", builtin_exit),
    )
}
