"""Abstract syntax tree of the Monkey language, the shared vocabulary between monkey.parser and monkey.runtime.

```
<program>   ::= <statement>*
<statement> ::= "let" <ident> "=" <expr> [";"]     ; LetStatement
              | "return" <expr> [";"]               ; ReturnStatement
              | <expr> [";"]                        ; ExpressionStatement
<block>     ::= "{" <statement>* "}"
<expr>      ::= <int> | <string> | <ident> | "true" | "false"
              | ("-" | "!") <expr>                  ; PrefixExpression
              | <expr> <operator> <expr>            ; InfixExpression
              | <expr> "(" [<expr> ("," <expr>)*] ")"
              | <expr> "[" <expr> "]"
              | "if" "(" <expr> ")" <block> ["else" <block>]
              | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
              | "[" [<expr> ("," <expr>)*] "]"
              | "{" [<expr> ":" <expr> ("," <expr> ":" <expr>)*] "}"
              | "(" <expr> ")"
```

Every node is a frozen dataclass, so a tree is immutable once the parser has built it. str(node) is the canonical
rendering: operators are fully parenthesized, which makes it usable for checking how an expression was grouped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple


class Node(ABC):
    """Superclass of every syntax tree node."""

    @abstractmethod
    def __str__(self):
        """Canonical rendering of this node."""


class Statement(Node, ABC):
    """A statement: let, return or a bare expression."""


class Expression(Node, ABC):
    """Any node that evaluates to a value."""


def _join(nodes):
    return ", ".join(str(node) for node in nodes)


# statements

@dataclass(frozen=True)
class BlockStatement(Node):
    """Ordered statements of an if-branch or function body."""
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class Program(Node):
    """Top-level statements of a parsed source."""
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class LetStatement(Statement):
    name: str
    value: Expression

    def __str__(self):
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression

    def __str__(self):
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    value: Expression

    def __str__(self):
        return str(self.value)


# expressions

@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self):
        return f"\"{self.value}\""


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    operand: Expression

    def __str__(self):
        return f"({self.operator}{self.operand})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    operator: str
    left: Expression
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class CallExpression(Expression):
    callee: Expression
    arguments: Tuple[Expression, ...] = ()

    def __str__(self):
        return f"{self.callee}({_join(self.arguments)})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if ({self.condition}) {{{self.consequence}}}"
        if self.alternative is not None:
            result += f" else {{{self.alternative}}}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[str, ...]
    body: BlockStatement

    def __str__(self):
        return f"fn({', '.join(self.parameters)}) {{{self.body}}}"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...] = ()

    def __str__(self):
        return f"[{_join(self.elements)}]"


@dataclass(frozen=True)
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self):
        return f"({self.left}[{self.index}])"


@dataclass(frozen=True)
class HashLiteral(Expression):
    """pairs keeps source order; duplicate keys are resolved at evaluation time."""
    pairs: Tuple[Tuple[Expression, Expression], ...] = ()

    def __str__(self):
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.pairs) + "}"
