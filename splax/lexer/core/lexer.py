import logging
from typing import List, Optional

from splax.config import EQUAL_SUFFIX_TOKENS, RESERVED_KEYWORDS, SINGLE_CHAR_TOKENS, WHITESPACE
from splax.error_reporter import ErrorReporter
from splax.exceptions import ErrorCode, LexError

from .classes import LiteralValue, Token, TokenType

logger = logging.getLogger(__name__)


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


class Lexer:
    """
    Converts a source string into a list of tokens in a single left-to-right pass.
    `start` marks the first character of the lexeme being scanned and `current`
    the character about to be consumed. Lexical errors are reported and
    scanning carries on with the next character.
    """

    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        logger.debug(f"Scanning {len(self.source)} characters.")
        while not self._is_at_end():
            self.start = self.current
            self._scan_token()

        self.tokens.append(Token(type=TokenType.EOF, lexeme="", line=self.line))
        logger.debug(f"Scanned {len(self.tokens)} tokens.")
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[char]
            self._add_token(double if self._match("=") else single)
        elif char == "/":
            if self._match("/"):
                # A comment runs until the end of the line.
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif char in WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        elif char == '"':
            self._string()
        elif _is_digit(char):
            self._number()
        elif _is_alpha(char):
            self._identifier()
        else:
            self._error(ErrorCode.UNEXPECTED_CHARACTER, char=char)

    # --- Scanners for longer lexemes ---

    def _string(self):
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self.line += 1
            self._advance()

        if self._is_at_end():
            self._error(ErrorCode.UNTERMINATED_STRING)
            return

        self._advance()  # closing quote
        self._add_token(TokenType.STRING, self.source[self.start + 1 : self.current - 1])

    def _number(self):
        while _is_digit(self._peek()):
            self._advance()

        # A '.' only belongs to the number when a digit follows it.
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self.start : self.current]))

    def _identifier(self):
        while _is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self.start : self.current]
        token_type = RESERVED_KEYWORDS.get(text, TokenType.IDENTIFIER)
        literal = {TokenType.TRUE: True, TokenType.FALSE: False}.get(token_type)
        self._add_token(token_type, literal)

    # --- Cursor helpers ---

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consumes the next character only if it is `expected`."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        return "\0" if self._is_at_end() else self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def _add_token(self, token_type: TokenType, literal: LiteralValue = None):
        lexeme = self.source[self.start : self.current]
        self.tokens.append(Token(type=token_type, lexeme=lexeme, literal=literal, line=self.line))

    def _error(self, code: ErrorCode, **kwargs):
        self.reporter.report(LexError(code, line=self.line, **kwargs))


def scan_tokens(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """High-level entry point for the lexer."""
    return Lexer(source, reporter).scan_tokens()
