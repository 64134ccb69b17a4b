"""Lexical tokens of the Monkey language. A token stream is any finite sequence of Tokens terminated by an EOF token.

```
<token> ::= <int> | <string> | <ident>          ; literals and identifiers
          | "=" | "+" | "-" | "!" | "*" | "/"   ; operators
          | "<" | ">" | "==" | "!="
          | "," | ";" | ":" | "(" | ")"         ; delimiters
          | "{" | "}" | "[" | "]"
          | "let" | "fn" | "if" | "else"       ; keywords
          | "return" | "true" | "false"
```

Characters outside of this grammar are not rejected by the lexer: they become ILLEGAL tokens so that the parser can
decide how to fail.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Closed set of token kinds. Fixed-text kinds carry their text as value."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


@dataclass(frozen=True)
class Token:
    """Single lexical token. literal is the source text of the token (empty for EOF)."""
    kind: TokenKind
    literal: str = ""

    @classmethod
    def of(cls, kind):
        """Token for a fixed-text kind, e.g. Token.of(TokenKind.PLUS) == Token(TokenKind.PLUS, '+')."""
        return cls(kind, "" if kind is TokenKind.EOF else kind.value)

    @classmethod
    def ident(cls, name):
        """Identifier or keyword token for name."""
        kind = KEYWORDS.get(name, TokenKind.IDENT)
        return cls(kind, name)

    def __str__(self):
        return self.literal

    def __repr__(self):
        return f"Token({self.kind.name}, {self.literal!r})"


EOF = Token.of(TokenKind.EOF)
