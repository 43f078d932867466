"""
Defines the formal data structures (contracts) for the Abstract Syntax Tree (AST)
produced by the parser stage.

Each node is a frozen pydantic model that records the source line it starts on,
enabling error reporting in later passes. Child sequences are tuples, so a tree
cannot be modified once the parser has built it. Nodes carry no behaviour: passes
are written as visitors (see visitor.py).
"""

from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from splax.exceptions import ParseError
from splax.lexer.core.classes import LiteralValue, Token

# --- Core Data Structures ---


class ASTNode(BaseModel):
    """A base class for all AST nodes, ensuring they have a line."""

    model_config = ConfigDict(frozen=True)

    line: int


# A generic type hint for any expression node
Expression = Union["LiteralExpr", "GroupingExpr", "UnaryExpr", "BinaryExpr", "LogicalExpr", "VariableExpr", "AssignExpr", "CallExpr"]

# A generic type hint for any statement node
Statement = Union["BlockStmt", "ExpressionStmt", "PrintStmt", "LetStmt", "IfStmt", "WhileStmt", "FunctionStmt"]


# --- Expressions ---


class LiteralExpr(ASTNode):
    node_type: Literal["literal"] = "literal"
    value: LiteralValue


class GroupingExpr(ASTNode):
    node_type: Literal["grouping"] = "grouping"
    expression: Expression


class UnaryExpr(ASTNode):
    node_type: Literal["unary"] = "unary"
    operator: Token
    right: Expression


class BinaryExpr(ASTNode):
    node_type: Literal["binary"] = "binary"
    left: Expression
    operator: Token
    right: Expression


class LogicalExpr(ASTNode):
    """Like BinaryExpr, but for 'and'/'or', whose right operand may never be evaluated."""

    node_type: Literal["logical"] = "logical"
    left: Expression
    operator: Token
    right: Expression


class VariableExpr(ASTNode):
    node_type: Literal["variable"] = "variable"
    name: Token


class AssignExpr(ASTNode):
    node_type: Literal["assign"] = "assign"
    name: Token
    value: Expression


class CallExpr(ASTNode):
    node_type: Literal["call"] = "call"
    callee: Expression
    paren: Token  # closing paren, locates runtime errors raised by the call
    arguments: Tuple[Expression, ...]


# --- Statements ---


class BlockStmt(ASTNode):
    node_type: Literal["block"] = "block"
    statements: Tuple[Statement, ...]


class ExpressionStmt(ASTNode):
    node_type: Literal["expression"] = "expression"
    expression: Expression


class PrintStmt(ASTNode):
    node_type: Literal["print"] = "print"
    expression: Expression


class LetStmt(ASTNode):
    node_type: Literal["let"] = "let"
    name: Token
    initializer: Expression


class IfStmt(ASTNode):
    node_type: Literal["if"] = "if"
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement] = None


class WhileStmt(ASTNode):
    node_type: Literal["while"] = "while"
    condition: Expression
    body: Statement


class FunctionStmt(ASTNode):
    node_type: Literal["function"] = "function"
    name: Token
    params: Tuple[Token, ...]
    body: BlockStmt


# --- Parser output ---


class ParseResult(BaseModel):
    """Every statement the parser could build, plus every syntax error it recovered from."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    statements: List[Statement]
    errors: List[ParseError] = []

    @property
    def ok(self) -> bool:
        return not self.errors


# A generic type hint for any node in the AST
Node = Union[Expression, Statement]


for _model in (
    GroupingExpr,
    UnaryExpr,
    BinaryExpr,
    LogicalExpr,
    AssignExpr,
    CallExpr,
    BlockStmt,
    ExpressionStmt,
    PrintStmt,
    LetStmt,
    IfStmt,
    WhileStmt,
    FunctionStmt,
    ParseResult,
):
    _model.model_rebuild()
