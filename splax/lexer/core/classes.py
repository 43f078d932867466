"""
Defines the data structures (contracts) produced by the lexer stage.

A token is a frozen pydantic model: once the lexer emits it nothing can
change it, and the parser consumes tokens strictly in order.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class TokenType(Enum):
    # --- Single-character tokens ---
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    COMMA = "COMMA"
    DOT = "DOT"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SEMICOLON = "SEMICOLON"
    SLASH = "SLASH"
    STAR = "STAR"
    PERCENT = "PERCENT"

    # --- One or two character tokens ---
    BANG = "BANG"
    BANG_EQUAL = "BANG_EQUAL"
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    # --- Literals ---
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # --- Keywords ---
    AND = "AND"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FN = "FN"
    IF = "IF"
    LET = "LET"
    NULL = "NULL"
    OR = "OR"
    PRINT = "PRINT"
    TRUE = "TRUE"
    WHILE = "WHILE"

    EOF = "EOF"


# bool comes first so that True/False are never coerced into 1.0/0.0
LiteralValue = Optional[Union[bool, float, str]]


class Token(BaseModel):
    """A classified lexical unit together with the source line it was scanned on."""

    model_config = ConfigDict(frozen=True)

    type: TokenType
    lexeme: str
    literal: LiteralValue = None
    line: int

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.EOF

    def __str__(self):
        if self.literal is None:
            return f"{self.type.value} {self.lexeme}".rstrip()
        return f"{self.type.value} {self.lexeme} {self.literal}"
