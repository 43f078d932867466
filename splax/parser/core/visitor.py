"""
Visitor contracts for AST passes.

A pass implements one method per node kind and is driven by `walk`, which
dispatches on the node's exact class. Node definitions stay untouched when a
new pass is added; a pass that forgets a node kind cannot be instantiated.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Union

from splax.exceptions import InternalCompilerError

from .classes import *

R = TypeVar("R")


class ExprVisitor(ABC, Generic[R]):
    @abstractmethod
    def visit_literal_expr(self, expr: LiteralExpr) -> R: ...

    @abstractmethod
    def visit_grouping_expr(self, expr: GroupingExpr) -> R: ...

    @abstractmethod
    def visit_unary_expr(self, expr: UnaryExpr) -> R: ...

    @abstractmethod
    def visit_binary_expr(self, expr: BinaryExpr) -> R: ...

    @abstractmethod
    def visit_logical_expr(self, expr: LogicalExpr) -> R: ...

    @abstractmethod
    def visit_variable_expr(self, expr: VariableExpr) -> R: ...

    @abstractmethod
    def visit_assign_expr(self, expr: AssignExpr) -> R: ...

    @abstractmethod
    def visit_call_expr(self, expr: CallExpr) -> R: ...


class StmtVisitor(ABC, Generic[R]):
    @abstractmethod
    def visit_block_stmt(self, stmt: BlockStmt) -> R: ...

    @abstractmethod
    def visit_expression_stmt(self, stmt: ExpressionStmt) -> R: ...

    @abstractmethod
    def visit_print_stmt(self, stmt: PrintStmt) -> R: ...

    @abstractmethod
    def visit_let_stmt(self, stmt: LetStmt) -> R: ...

    @abstractmethod
    def visit_if_stmt(self, stmt: IfStmt) -> R: ...

    @abstractmethod
    def visit_while_stmt(self, stmt: WhileStmt) -> R: ...

    @abstractmethod
    def visit_function_stmt(self, stmt: FunctionStmt) -> R: ...


_DISPATCH = {
    LiteralExpr: "visit_literal_expr",
    GroupingExpr: "visit_grouping_expr",
    UnaryExpr: "visit_unary_expr",
    BinaryExpr: "visit_binary_expr",
    LogicalExpr: "visit_logical_expr",
    VariableExpr: "visit_variable_expr",
    AssignExpr: "visit_assign_expr",
    CallExpr: "visit_call_expr",
    BlockStmt: "visit_block_stmt",
    ExpressionStmt: "visit_expression_stmt",
    PrintStmt: "visit_print_stmt",
    LetStmt: "visit_let_stmt",
    IfStmt: "visit_if_stmt",
    WhileStmt: "visit_while_stmt",
    FunctionStmt: "visit_function_stmt",
}


def walk(visitor: Union[ExprVisitor[R], StmtVisitor[R]], node: Node) -> R:
    """Calls the visitor method registered for the node's kind and returns its result."""
    method_name = _DISPATCH.get(type(node))
    if method_name is None:
        raise InternalCompilerError(f"No visitor method registered for node type '{type(node).__name__}'.")

    method = getattr(visitor, method_name, None)
    if method is None:
        raise InternalCompilerError(f"{type(visitor).__name__} cannot visit '{type(node).__name__}' nodes.")
    return method(node)
