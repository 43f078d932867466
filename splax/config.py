"""
Static configuration data for the Splax front-end.
This includes the keyword table, punctuation mappings and the friendly token
names used in syntax error messages.
"""

from .lexer.core.classes import TokenType

RESERVED_KEYWORDS = {
    "and": TokenType.AND,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "if": TokenType.IF,
    "let": TokenType.LET,
    "null": TokenType.NULL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "true": TokenType.TRUE,
    "while": TokenType.WHILE,
}

# Punctuation that is always a complete token on its own.
# '/' is missing on purpose: it may start a comment.
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "%": TokenType.PERCENT,
}

# Characters that become a two-character operator when followed by '='.
# Maps the first character to (single token, two-character token).
EQUAL_SUFFIX_TOKENS = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

WHITESPACE = {" ", "\t", "\r"}

# Tokens that can only start a new statement; the parser resumes there after an error.
STATEMENT_KEYWORDS = {TokenType.FN, TokenType.LET, TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.LEFT_BRACE}

MAX_ARGUMENTS = 255

TOKEN_FRIENDLY_NAMES = {
    TokenType.LEFT_PAREN: "'('",
    TokenType.RIGHT_PAREN: "')'",
    TokenType.LEFT_BRACE: "'{'",
    TokenType.RIGHT_BRACE: "'}'",
    TokenType.COMMA: "','",
    TokenType.SEMICOLON: "';'",
    TokenType.EQUAL: "'='",
    TokenType.IDENTIFIER: "a name",
    TokenType.EOF: "end of input",
}
