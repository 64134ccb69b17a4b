"""Recursive tree-walking evaluator. evaluate(node, env) executes a monkey.grammar.ast node against an Environment and
returns an Object, or None for nodes that produce no value (let statements, empty programs).

User-level faults never raise: they produce Error values, which short-circuit statement sequences, argument lists
and operands exactly like ReturnValue does, until they reach the top-level caller. Python exceptions escaping from
here are either internal bugs (TypeError for an unknown node) or host limits (RecursionError for runaway recursion in
the interpreted program), and are left to the host layer.
"""

import operator

from monkey.grammar import ast
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.object import (NULL, Array, Boolean, Builtin, Error, Function, Hash, Integer, ReturnValue, String,
                                   is_error, is_truthy)


def evaluate(node, env):
    """Evaluates node in env. Raises TypeError if node is not a syntax tree node."""
    try:
        handler = _HANDLERS[type(node)]
    except KeyError:
        raise TypeError(f"cannot evaluate {type(node).__name__}") from None
    return handler(node, env)


# statements

def _eval_program(program, env):
    result = None
    for statement in program.statements:
        result = evaluate(statement, env)

        if isinstance(result, ReturnValue):
            return result.value
        elif is_error(result):
            return result
    return result


def _eval_block(block, env):
    """Like _eval_program, but a ReturnValue is passed up still wrapped so that enclosing blocks stop too."""
    result = None
    for statement in block.statements:
        result = evaluate(statement, env)

        if isinstance(result, (ReturnValue, Error)):
            return result
    return result


def _eval_let(statement, env):
    value = evaluate(statement.value, env)
    if is_error(value):
        return value

    env.set(statement.name, value)
    return None


def _eval_return(statement, env):
    value = evaluate(statement.value, env)
    if is_error(value):
        return value
    return ReturnValue(value)


def _eval_expression_statement(statement, env):
    return evaluate(statement.value, env)


# literals

def _eval_integer(node, env):
    return Integer(node.value)


def _eval_boolean(node, env):
    return Boolean.of(node.value)


def _eval_string(node, env):
    return String(node.value)


def _eval_identifier(node, env):
    value = env.get(node.name)
    if value is not None:
        return value

    builtin = BUILTINS.get(node.name)
    if builtin is not None:
        return builtin
    return Error(f"identifier not found: {node.name}")


def _eval_function(node, env):
    return Function(node.parameters, env.copy(), node.body)


def _eval_expressions(nodes, env):
    """Evaluates nodes left to right. Returns the list of values, or the first Error encountered."""
    values = []
    for node in nodes:
        value = evaluate(node, env)
        if is_error(value):
            return value
        values.append(value)
    return values


def _eval_array(node, env):
    elements = _eval_expressions(node.elements, env)
    if is_error(elements):
        return elements
    return Array(tuple(elements))


def _eval_hash(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_error(key):
            return key
        if not key.hashable:
            return Error(f"unusable as hash key: {key.kind}")

        value = evaluate(value_node, env)
        if is_error(value):
            return value

        pairs[key] = value
    return Hash(pairs)


# operators

def prefix_operation(op, operand):
    """Applies prefix operator op to operand."""
    if op == "!":
        return Boolean.of(not is_truthy(operand))
    elif op == "-" and isinstance(operand, Integer):
        return Integer(-operand.value)
    return Error(f"unknown operator: {op}{operand.kind}")


def _divide(left, right):
    """Integer division truncating toward zero."""
    if right == 0:
        return Error("division by zero")

    quotient = abs(left) // abs(right)
    return Integer(quotient if (left < 0) == (right < 0) else -quotient)


INTEGER_OPERATORS = {
    "+": lambda left, right: Integer(left + right),
    "-": lambda left, right: Integer(left - right),
    "*": lambda left, right: Integer(left * right),
    "/": _divide,
    "<": lambda left, right: Boolean.of(left < right),
    ">": lambda left, right: Boolean.of(left > right),
    "==": lambda left, right: Boolean.of(left == right),
    "!=": lambda left, right: Boolean.of(left != right),
}

BOOLEAN_OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
}


def infix_operation(op, left, right):
    """Applies binary operator op to two evaluated operands, dispatching on their kinds."""
    if isinstance(left, Integer) and isinstance(right, Integer) and op in INTEGER_OPERATORS:
        return INTEGER_OPERATORS[op](left.value, right.value)
    elif left.kind != right.kind:
        return Error(f"type mismatch: {left.kind} {op} {right.kind}")
    elif isinstance(left, Boolean) and op in BOOLEAN_OPERATORS:
        return Boolean.of(BOOLEAN_OPERATORS[op](left.value, right.value))
    elif isinstance(left, String) and op == "+":
        return String(left.value + right.value)
    return Error(f"unknown operator: {left.kind} {op} {right.kind}")


def _eval_prefix(node, env):
    operand = evaluate(node.operand, env)
    if is_error(operand):
        return operand
    return prefix_operation(node.operator, operand)


def _eval_infix(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    right = evaluate(node.right, env)
    if is_error(right):
        return right

    return infix_operation(node.operator, left, right)


def _eval_if(node, env):
    condition = evaluate(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        result = _eval_block(node.consequence, env)
    elif node.alternative is not None:
        result = _eval_block(node.alternative, env)
    else:
        return NULL

    return NULL if result is None else result


def _eval_index(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    index = evaluate(node.index, env)
    if is_error(index):
        return index

    if isinstance(left, Array) and isinstance(index, Integer):
        if 0 <= index.value < len(left.elements):
            return left.elements[index.value]
        return NULL
    elif isinstance(left, Hash):
        if not index.hashable:
            return NULL  # such a key can never have been stored
        return left.pairs.get(index, NULL)
    return Error(f"index operator not supported: {left.kind}[{index.kind}]")


# function calls

def _resolve_callee(node, env):
    """Returns (function, name) for the callee of a call. name is the identifier the function was called through, if
    any. function may be an Error, or a non-callable object that the caller must reject.
    """
    callee = node.callee
    if not isinstance(callee, ast.Identifier):
        return evaluate(callee, env), None

    function = env.get(callee.name)
    if function is None:
        function = BUILTINS.get(callee.name)
    if function is None:
        return Error(f"identifier not found: {callee.name}"), None
    return function, callee.name


def apply_function(function, arguments, name=None):
    """Calls function with evaluated arguments. For a user Function, parameters are bound in a child of the
    function's captured scope, and name (if given) is bound to the function itself so that it can call itself.
    """
    if isinstance(function, Builtin):
        return function.fn(arguments)

    scope = function.env.new_child()
    if name is not None:
        scope.set(name, function)
    for parameter, argument in zip(function.parameters, arguments):
        scope.set(parameter, argument)

    result = _eval_block(function.body, scope)
    if isinstance(result, ReturnValue):
        return result.value
    return NULL if result is None else result


def _eval_call(node, env):
    function, name = _resolve_callee(node, env)
    if is_error(function):
        return function
    if not isinstance(function, (Function, Builtin)):
        return Error(f"not a function: {function.kind}")

    arguments = _eval_expressions(node.arguments, env)
    if is_error(arguments):
        return arguments

    return apply_function(function, arguments, name if isinstance(function, Function) else None)


_HANDLERS = {
    ast.Program: _eval_program,
    ast.BlockStatement: _eval_block,
    ast.LetStatement: _eval_let,
    ast.ReturnStatement: _eval_return,
    ast.ExpressionStatement: _eval_expression_statement,
    ast.IntegerLiteral: _eval_integer,
    ast.BooleanLiteral: _eval_boolean,
    ast.StringLiteral: _eval_string,
    ast.Identifier: _eval_identifier,
    ast.PrefixExpression: _eval_prefix,
    ast.InfixExpression: _eval_infix,
    ast.IfExpression: _eval_if,
    ast.FunctionLiteral: _eval_function,
    ast.CallExpression: _eval_call,
    ast.ArrayLiteral: _eval_array,
    ast.IndexExpression: _eval_index,
    ast.HashLiteral: _eval_hash,
}
