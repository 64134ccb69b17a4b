"""Character-level tokenizer for the Monkey language. Produces the token stream consumed by monkey.parser.Parser.

Lexer is an iterator: it yields tokens up to and including a single EOF token, then stops. The parser does not
depend on this class, only on the stream it produces.
"""

from monkey.grammar.token import EOF, Token, TokenKind


class Lexer:
    """Iterates over the tokens of source."""
    WHITESPACE = " \t\n\r"
    TWO_CHAR = {"==": TokenKind.EQ, "!=": TokenKind.NOT_EQ}
    ONE_CHAR = {kind.value: kind for kind in TokenKind if len(kind.value) == 1}

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self._done = False

    @staticmethod
    def is_letter(char):
        return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    def _peek(self, offset=0):
        pos = self.pos + offset
        return self.source[pos] if pos < len(self.source) else ""

    def _read_while(self, predicate):
        start = self.pos
        while self.pos < len(self.source) and predicate(self.source[self.pos]):
            self.pos += 1
        return self.source[start:self.pos]

    def _read_string(self):
        """Reads a string literal, assuming self.pos is on the opening quote. An unterminated string runs to the end
        of the input.
        """
        self.pos += 1
        literal = self._read_while(lambda char: char != "\"")
        self.pos += 1  # closing quote (or past the end)
        return Token(TokenKind.STRING, literal)

    def next_token(self):
        """Returns the next token, or EOF once the input is exhausted."""
        self._read_while(lambda char: char in Lexer.WHITESPACE)

        char = self._peek()
        if not char:
            return EOF

        pair = char + self._peek(1)
        if pair in Lexer.TWO_CHAR:
            self.pos += 2
            return Token(Lexer.TWO_CHAR[pair], pair)

        if char == "\"":
            return self._read_string()
        elif Lexer.is_letter(char):
            return Token.ident(self._read_while(Lexer.is_letter))
        elif Lexer.is_digit(char):
            return Token(TokenKind.INT, self._read_while(Lexer.is_digit))

        self.pos += 1
        return Token(Lexer.ONE_CHAR.get(char, TokenKind.ILLEGAL), char)

    def __iter__(self):
        return self

    def __next__(self):
        if self._done:
            raise StopIteration

        token = self.next_token()
        if token.kind is TokenKind.EOF:
            self._done = True
        return token


def tokenize(source):
    """Returns the list of tokens in source, ending with EOF."""
    return list(Lexer(source))
