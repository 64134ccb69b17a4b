"""Precedence-climbing (Pratt) parser for the Monkey language. Turns a token stream into a monkey.grammar.ast.Program.

Parsing is best-effort: a malformed statement records a diagnostic in Parser.errors and produces no node, and the
parser moves on to the next token. Thus one pass can surface several independent errors, and it is up to the caller
to decide whether a program with diagnostics should be run.

Expressions are parsed by parse_expression(precedence): a prefix form is parsed for the current token, after which
infix forms are folded in for as long as the next token binds tighter than precedence. Because the right operand of a
binary operator is parsed at that operator's own precedence, chains of equal precedence group to the left:

    a + b - c   ->   ((a + b) - c)
    a + b * c   ->   (a + (b * c))
"""

from enum import IntEnum

from monkey.grammar.ast import (ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement,
                                FunctionLiteral, HashLiteral, Identifier, IfExpression, IndexExpression,
                                InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, Program,
                                ReturnStatement, StringLiteral)
from monkey.grammar.token import EOF, TokenKind


class Precedence(IntEnum):
    """Binding power of infix tokens, low to high."""
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 8        # a[x]


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}


def describe(token):
    """Token description used in diagnostics: its kind, plus the offending character for ILLEGAL tokens."""
    if token.kind is TokenKind.ILLEGAL:
        return f"ILLEGAL '{token.literal}'"
    return token.kind.name


class Parser:
    """Parses tokens, an iterable of Tokens. Once tokens is exhausted, the parser behaves as if it keeps reading EOF,
    so a stream without a trailing EOF is still parsed to completion.
    """

    def __init__(self, tokens):
        self._tokens = iter(tokens)
        self.errors = []

        self.cur = EOF
        self.peek = EOF
        self._advance()
        self._advance()

        self._prefix = {
            TokenKind.INT: self._parse_integer,
            TokenKind.IDENT: self._parse_identifier,
            TokenKind.STRING: self._parse_string,
            TokenKind.TRUE: self._parse_boolean,
            TokenKind.FALSE: self._parse_boolean,
            TokenKind.BANG: self._parse_prefix,
            TokenKind.MINUS: self._parse_prefix,
            TokenKind.LPAREN: self._parse_grouped,
            TokenKind.IF: self._parse_if,
            TokenKind.FUNCTION: self._parse_function,
            TokenKind.LBRACKET: self._parse_array,
            TokenKind.LBRACE: self._parse_hash,
        }
        self._infix = {kind: self._parse_infix for kind in PRECEDENCES}
        self._infix[TokenKind.LPAREN] = self._parse_call
        self._infix[TokenKind.LBRACKET] = self._parse_index

    # token handling

    def _advance(self):
        self.cur = self.peek
        self.peek = next(self._tokens, EOF)

    def _cur_is(self, kind):
        return self.cur.kind is kind

    def _peek_is(self, kind):
        return self.peek.kind is kind

    def _expect_peek(self, kind):
        """Advances if the next token is of kind. Otherwise records a diagnostic and returns False."""
        if self._peek_is(kind):
            self._advance()
            return True

        self.errors.append(f"expected next token to be {kind.name}, got {describe(self.peek)} instead")
        return False

    def _peek_precedence(self):
        return PRECEDENCES.get(self.peek.kind, Precedence.LOWEST)

    def _cur_precedence(self):
        return PRECEDENCES.get(self.cur.kind, Precedence.LOWEST)

    # statements

    def parse_program(self):
        """Parses every statement up to EOF. Statements that fail to parse are left out of the Program."""
        statements = []
        while not self._cur_is(TokenKind.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self._advance()
        return Program(tuple(statements))

    def parse_statement(self):
        """Parses the statement starting at the current token. Leaves the current token on its last token."""
        if self._cur_is(TokenKind.LET):
            return self._parse_let()
        elif self._cur_is(TokenKind.RETURN):
            return self._parse_return()
        return self._parse_expression_statement()

    def _skip_semicolon(self):
        if self._peek_is(TokenKind.SEMICOLON):
            self._advance()

    def _parse_let(self):
        if not self._expect_peek(TokenKind.IDENT):
            return None
        name = self.cur.literal

        if not self._expect_peek(TokenKind.ASSIGN):
            return None
        self._advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return LetStatement(name, value)

    def _parse_return(self):
        self._advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return ReturnStatement(value)

    def _parse_expression_statement(self):
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return ExpressionStatement(value)

    def _parse_block(self):
        """Parses statements up to the closing brace, assuming the current token is the opening brace."""
        statements = []
        self._advance()

        while not self._cur_is(TokenKind.RBRACE):
            if self._cur_is(TokenKind.EOF):
                self.errors.append(f"expected next token to be {TokenKind.RBRACE.name}, got EOF instead")
                return None

            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self._advance()

        return BlockStatement(tuple(statements))

    # expressions

    def parse_expression(self, precedence):
        """Parses an expression whose infix operators all bind tighter than precedence. Returns None (after
        recording a diagnostic) if the expression is malformed.
        """
        prefix = self._prefix.get(self.cur.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {describe(self.cur)} found")
            return None

        left = prefix()
        while left is not None and not self._peek_is(TokenKind.SEMICOLON) and precedence < self._peek_precedence():
            infix = self._infix[self.peek.kind]
            self._advance()
            left = infix(left)

        return left

    def _parse_integer(self):
        try:
            return IntegerLiteral(int(self.cur.literal))
        except ValueError:
            self.errors.append(f"could not parse '{self.cur.literal}' as integer")
            return None

    def _parse_identifier(self):
        return Identifier(self.cur.literal)

    def _parse_string(self):
        return StringLiteral(self.cur.literal)

    def _parse_boolean(self):
        return BooleanLiteral(self._cur_is(TokenKind.TRUE))

    def _parse_prefix(self):
        operator = self.cur.literal
        self._advance()

        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(operator, operand)

    def _parse_grouped(self):
        self._advance()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def _parse_if(self):
        if not self._expect_peek(TokenKind.LPAREN):
            return None
        self._advance()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenKind.RPAREN) or not self._expect_peek(TokenKind.LBRACE):
            return None

        consequence = self._parse_block()
        if consequence is None:
            return None

        alternative = None
        if self._peek_is(TokenKind.ELSE):
            self._advance()
            if not self._expect_peek(TokenKind.LBRACE):
                return None

            alternative = self._parse_block()
            if alternative is None:
                return None

        return IfExpression(condition, consequence, alternative)

    def _parse_function(self):
        if not self._expect_peek(TokenKind.LPAREN):
            return None

        parameters = self._parse_parameters()
        if parameters is None or not self._expect_peek(TokenKind.LBRACE):
            return None

        body = self._parse_block()
        if body is None:
            return None
        return FunctionLiteral(parameters, body)

    def _parse_parameters(self):
        """Parses identifiers up to the closing paren, assuming the current token is the opening paren."""
        if self._peek_is(TokenKind.RPAREN):
            self._advance()
            return ()

        if not self._expect_peek(TokenKind.IDENT):
            return None
        parameters = [self.cur.literal]

        while self._peek_is(TokenKind.COMMA):
            self._advance()
            if not self._expect_peek(TokenKind.IDENT):
                return None
            parameters.append(self.cur.literal)

        if not self._expect_peek(TokenKind.RPAREN):
            return None
        return tuple(parameters)

    def _parse_expression_list(self, end):
        """Parses comma-separated expressions up to a token of kind end (call arguments, array elements)."""
        if self._peek_is(end):
            self._advance()
            return ()

        self._advance()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        expressions = [expression]

        while self._peek_is(TokenKind.COMMA):
            self._advance()
            self._advance()

            expression = self.parse_expression(Precedence.LOWEST)
            if expression is None:
                return None
            expressions.append(expression)

        if not self._expect_peek(end):
            return None
        return tuple(expressions)

    def _parse_array(self):
        elements = self._parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(elements)

    def _parse_hash(self):
        pairs = []

        while not self._peek_is(TokenKind.RBRACE):
            self._advance()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self._expect_peek(TokenKind.COLON):
                return None

            self._advance()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))

            if not self._peek_is(TokenKind.RBRACE) and not self._expect_peek(TokenKind.COMMA):
                return None

        self._advance()
        return HashLiteral(tuple(pairs))

    def _parse_infix(self, left):
        operator = self.cur.literal
        precedence = self._cur_precedence()
        self._advance()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(operator, left, right)

    def _parse_call(self, callee):
        arguments = self._parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return CallExpression(callee, arguments)

    def _parse_index(self, left):
        self._advance()

        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self._expect_peek(TokenKind.RBRACKET):
            return None
        return IndexExpression(left, index)


def parse(tokens):
    """Convenience wrapper: returns (program, errors) for tokens."""
    parser = Parser(tokens)
    program = parser.parse_program()
    return program, parser.errors
