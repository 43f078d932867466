"""
Custom exception types for the Splax front-end.
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from splax.lexer.core.classes import Token


class ErrorCode(Enum):

    # --- Lexical Errors ---
    UNEXPECTED_CHARACTER = "Unexpected character '{char}'."
    UNTERMINATED_STRING = "Unterminated string."

    # --- Syntax Errors ---
    # 'expected' is a friendly description of the missing token, 'context' says where it was expected.
    EXPECTED_TOKEN = "Expect {expected} {context}."
    EXPECTED_EXPRESSION = "Expect expression."
    INVALID_ASSIGNMENT_TARGET = "Invalid assignment target."
    TOO_MANY_ARGUMENTS = "Can't have more than {limit} arguments."
    TOO_MANY_PARAMETERS = "Can't have more than {limit} parameters."

    # --- Binding Errors ---
    UNDEFINED_VARIABLE = "Reference to undefined variable '{name}'."
    SCOPE_DISCARDED = "Scope {index} has already been discarded."
    SCOPE_STILL_ENCLOSING = "Scope {index} cannot be discarded while it encloses {children} live scope(s)."
    GLOBAL_SCOPE_DISCARD = "The global scope cannot be discarded."
    ARGUMENT_COUNT_MISMATCH = "Function '{name}' expects {expected} argument(s), but got {provided}."

    # --- Pipeline Errors ---
    FRONT_END_FAILED = "{count} error(s) found in '{file_path}'."
    TREE_TOO_DEEP = "Syntax tree starting on line {start} is nested too deeply to print (recursion limit {limit})."


class SplaxError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        line: Optional[int] = None,
        where: str = "",
        **kwargs,
    ):
        self.code = code
        self.line = line
        self.details = kwargs

        # --- 1. Generate the core error message ---
        # The format string (e.g., "Unexpected character '{char}'.") is populated
        # with any extra data it needs from kwargs.
        self.core_message = code.value.format(**kwargs)

        # --- 2. Determine the location prefix ---
        if line is not None:
            location_prefix = f"[line {line}] Error{where}: "
        else:
            location_prefix = f"Error{where}: "

        # --- 3. Combine them for the final message ---
        self.message = location_prefix + self.core_message

        super().__init__(self.message)

    @property
    def diagnostic(self):
        """The (line, message) pair handed to error-reporting collaborators."""
        return self.line, self.message


class LexError(SplaxError):
    """Raised (and reported) for characters the lexer cannot turn into a token."""


class ParseError(SplaxError):
    """A syntax error anchored on the token where the parser gave up."""

    def __init__(self, token: "Token", code: ErrorCode, **kwargs):
        self.token = token
        where = " at end" if token.is_eof else f" at '{token.lexeme}'"
        super().__init__(code, line=token.line, where=where, **kwargs)


class UnboundVariable(SplaxError):
    def __init__(self, name: str, line: Optional[int] = None):
        self.name = name
        super().__init__(ErrorCode.UNDEFINED_VARIABLE, line=line, name=name)


class FrontEndError(SplaxError):
    """Aggregates every lexical and syntax error reported during one front-end run."""

    def __init__(self, errors: List[SplaxError], file_path: str):
        self.errors = errors
        super().__init__(ErrorCode.FRONT_END_FAILED, count=len(errors), file_path=file_path)
        self.message = "\n".join([self.message] + [e.message for e in errors])
        self.args = (self.message,)


class InternalCompilerError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
