"""
A debugging pass that renders the AST as parenthesised prefix text.
`1 + 2 * 3` becomes `(+ 1 (* 2 3))`. It is only ever called on request
(e.g. `splax --print-ast`); no other phase depends on it.

The printer recurses once per tree level, so a tree deeper than the
interpreter's recursion limit (a chain of a few hundred operators is
enough) cannot be printed and raises TREE_TOO_DEEP. The parser itself folds
operator chains in a loop and has no such limit for them.
"""

import sys
from typing import Iterable, Union

from splax.exceptions import ErrorCode, SplaxError

from .classes import *
from .visitor import ExprVisitor, StmtVisitor, walk


def format_literal(value: LiteralValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


class AstPrinter(ExprVisitor[str], StmtVisitor[str]):
    def print(self, node: Node) -> str:
        try:
            return walk(self, node)
        except RecursionError:
            raise SplaxError(ErrorCode.TREE_TOO_DEEP, start=node.line, limit=sys.getrecursionlimit()) from None

    def _parenthesize(self, name: str, *parts: Union[Node, str]) -> str:
        rendered = [part if isinstance(part, str) else walk(self, part) for part in parts]
        return "(" + " ".join([name] + rendered) + ")"

    # --- Expressions ---

    def visit_literal_expr(self, expr: LiteralExpr) -> str:
        return format_literal(expr.value)

    def visit_grouping_expr(self, expr: GroupingExpr) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_unary_expr(self, expr: UnaryExpr) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary_expr(self, expr: BinaryExpr) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_logical_expr(self, expr: LogicalExpr) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable_expr(self, expr: VariableExpr) -> str:
        return expr.name.lexeme

    def visit_assign_expr(self, expr: AssignExpr) -> str:
        return f"= {expr.name.lexeme} {walk(self, expr.value)}"

    def visit_call_expr(self, expr: CallExpr) -> str:
        return walk(self, expr.callee)

    # --- Statements ---

    def visit_block_stmt(self, stmt: BlockStmt) -> str:
        return self._parenthesize("block", *stmt.statements)

    def visit_expression_stmt(self, stmt: ExpressionStmt) -> str:
        return self._parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt: PrintStmt) -> str:
        return self._parenthesize("print", stmt.expression)

    def visit_let_stmt(self, stmt: LetStmt) -> str:
        return self._parenthesize("let", stmt.name.lexeme, stmt.initializer)

    def visit_if_stmt(self, stmt: IfStmt) -> str:
        if stmt.else_branch is None:
            return self._parenthesize("if", stmt.condition, stmt.then_branch)
        return self._parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_while_stmt(self, stmt: WhileStmt) -> str:
        return self._parenthesize("while", stmt.condition, stmt.body)

    def visit_function_stmt(self, stmt: FunctionStmt) -> str:
        params = "(" + " ".join(param.lexeme for param in stmt.params) + ")"
        return self._parenthesize("fn", stmt.name.lexeme, params, *stmt.body.statements)


def print_ast(nodes: Union[Node, Iterable[Node]]) -> str:
    """Renders one node, or a sequence of top-level statements one per line."""
    printer = AstPrinter()
    if isinstance(nodes, ASTNode):
        return printer.print(nodes)
    return "\n".join(printer.print(node) for node in nodes)
