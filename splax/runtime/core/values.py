"""
Values that can be bound in an Environment besides plain literals.
"""

import logging
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from splax.exceptions import ErrorCode, SplaxError
from splax.lexer.core.classes import Token
from splax.parser.core.classes import BlockStmt, FunctionStmt

from .environment import Environment

logger = logging.getLogger(__name__)


class FunctionObject(BaseModel):
    """
    A first-class function: the declaration it was built from plus the scope that
    was active where it was declared. Calls resolve free variables through
    `closure`, never through the caller's scope chain.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declaration: FunctionStmt
    closure: Environment

    @classmethod
    def declare(cls, declaration: FunctionStmt, environment: Environment) -> "FunctionObject":
        """Builds the function value for `declaration` and binds it by name in `environment`."""
        function = cls(declaration=declaration, closure=environment)
        environment.define(declaration.name, function)
        logger.debug(f"Declared {function} capturing scope {environment.index}.")
        return function

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def params(self) -> Tuple[Token, ...]:
        return self.declaration.params

    @property
    def body(self) -> BlockStmt:
        return self.declaration.body

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def bind_arguments(self, arguments: list, line: Optional[int] = None) -> Environment:
        """
        Opens the scope for one call: a child of the captured closure with every
        parameter defined to its argument. The caller discards it when the call ends.
        """
        if len(arguments) != self.arity:
            raise SplaxError(ErrorCode.ARGUMENT_COUNT_MISMATCH, line=line, name=self.name, expected=self.arity, provided=len(arguments))

        call_scope = self.closure.enclose()
        for param, argument in zip(self.declaration.params, arguments):
            call_scope.define(param, argument)
        return call_scope

    def __str__(self):
        return f"<fn {self.name}>"
