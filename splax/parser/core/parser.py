import logging
from typing import Callable, List, Optional

from splax.config import MAX_ARGUMENTS, STATEMENT_KEYWORDS, TOKEN_FRIENDLY_NAMES
from splax.error_reporter import ErrorReporter
from splax.exceptions import ErrorCode, ParseError
from splax.lexer.core.classes import Token, TokenType

from .classes import *

logger = logging.getLogger(__name__)


class Parser:
    """
    A recursive-descent parser. Each grammar rule is one method, ordered from the
    lowest to the highest binding strength; a rule only ever calls the rule right
    above it for its operands, which is what gives the grammar its precedence.

    Rules raise ParseError when they cannot continue. `declaration` is the only
    place that catches it: the error is reported, tokens are skipped up to the
    next statement boundary and parsing resumes, so one malformed statement
    never hides the ones after it.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.current = 0
        self.errors: List[ParseError] = []
        self.block_depth = 0

    def parse(self) -> ParseResult:
        logger.debug(f"Parsing {len(self.tokens)} tokens.")
        statements = []
        while not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)

        logger.debug(f"Parsed {len(statements)} top-level statements with {len(self.errors)} error(s).")
        return ParseResult(statements=statements, errors=self.errors)

    def parse_expression(self) -> Expression:
        """Parses a single expression that must span the whole token stream."""
        expression = self._expression()
        if not self._is_at_end():
            raise ParseError(self._peek(), ErrorCode.EXPECTED_TOKEN, expected="end of input", context="after expression")
        return expression

    # --- Declarations ---

    def _declaration(self) -> Optional[Statement]:
        try:
            if self._match(TokenType.FN):
                return self._function_declaration()
            if self._match(TokenType.LET):
                return self._let_declaration()
            return self._statement()
        except ParseError as e:
            self._record(e)
            self._synchronize()
            return None

    def _function_declaration(self) -> FunctionStmt:
        keyword = self._previous()
        name = self._consume(TokenType.IDENTIFIER, "after 'fn'", expected="function name")
        self._consume(TokenType.LEFT_PAREN, "after function name")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self._record(ParseError(self._peek(), ErrorCode.TOO_MANY_PARAMETERS, limit=MAX_ARGUMENTS))
                params.append(self._consume(TokenType.IDENTIFIER, "in parameter list", expected="parameter name"))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "after parameters")

        self._consume(TokenType.LEFT_BRACE, "before function body")
        body = self._block()
        return FunctionStmt(line=keyword.line, name=name, params=params, body=body)

    def _let_declaration(self) -> LetStmt:
        keyword = self._previous()
        name = self._consume(TokenType.IDENTIFIER, "after 'let'", expected="variable name")
        self._consume(TokenType.EQUAL, "after variable name")
        initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "after variable declaration")
        return LetStmt(line=keyword.line, name=name, initializer=initializer)

    # --- Statements ---

    def _statement(self) -> Statement:
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.LEFT_BRACE):
            return self._block()
        return self._expression_statement()

    def _print_statement(self) -> PrintStmt:
        keyword = self._previous()
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "after value")
        return PrintStmt(line=keyword.line, expression=value)

    def _if_statement(self) -> IfStmt:
        keyword = self._previous()
        self._consume(TokenType.LEFT_PAREN, "after 'if'")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "after if condition")

        then_branch = self._statement()
        # Checking for 'else' right after the innermost then-branch binds a dangling else to the nearest if.
        else_branch = self._statement() if self._match(TokenType.ELSE) else None
        return IfStmt(line=keyword.line, condition=condition, then_branch=then_branch, else_branch=else_branch)

    def _while_statement(self) -> WhileStmt:
        keyword = self._previous()
        self._consume(TokenType.LEFT_PAREN, "after 'while'")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "after condition")
        body = self._statement()
        return WhileStmt(line=keyword.line, condition=condition, body=body)

    def _block(self) -> BlockStmt:
        """Parses the statements of a block whose '{' has already been consumed."""
        brace = self._previous()
        statements = []
        self.block_depth += 1
        try:
            while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
                statement = self._declaration()
                if statement is not None:
                    statements.append(statement)
        finally:
            self.block_depth -= 1

        self._consume(TokenType.RIGHT_BRACE, "after block")
        return BlockStmt(line=brace.line, statements=statements)

    def _expression_statement(self) -> ExpressionStmt:
        expression = self._expression()
        self._consume(TokenType.SEMICOLON, "after expression")
        return ExpressionStmt(line=expression.line, expression=expression)

    # --- Expressions, lowest to highest precedence ---

    def _expression(self) -> Expression:
        return self._assignment()

    def _assignment(self) -> Expression:
        expression = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expression, VariableExpr):
                return AssignExpr(line=expression.line, name=expression.name, value=value)

            # Reported but not raised: the parser is not confused, the statement can still finish.
            self._record(ParseError(equals, ErrorCode.INVALID_ASSIGNMENT_TARGET))

        return expression

    def _or(self) -> Expression:
        return self._left_associative(self._and, LogicalExpr, TokenType.OR)

    def _and(self) -> Expression:
        return self._left_associative(self._equality, LogicalExpr, TokenType.AND)

    def _equality(self) -> Expression:
        return self._left_associative(self._comparison, BinaryExpr, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> Expression:
        return self._left_associative(
            self._term,
            BinaryExpr,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _term(self) -> Expression:
        return self._left_associative(self._factor, BinaryExpr, TokenType.MINUS, TokenType.PLUS)

    def _factor(self) -> Expression:
        return self._left_associative(self._unary, BinaryExpr, TokenType.SLASH, TokenType.STAR, TokenType.PERCENT)

    def _left_associative(self, operand: Callable[[], Expression], node_class, *operators: TokenType) -> Expression:
        """
        Parses `operand (operator operand)*`. Every operator found at this level is
        folded into the running left operand, so `a - b - c` is `(a - b) - c`.
        """
        expression = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expression = node_class(line=expression.line, left=expression, operator=operator, right=right)
        return expression

    def _unary(self) -> Expression:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return UnaryExpr(line=operator.line, operator=operator, right=right)
        return self._call()

    def _call(self) -> Expression:
        expression = self._primary()
        while self._match(TokenType.LEFT_PAREN):
            expression = self._finish_call(expression)
        return expression

    def _finish_call(self, callee: Expression) -> CallExpr:
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self._record(ParseError(self._peek(), ErrorCode.TOO_MANY_ARGUMENTS, limit=MAX_ARGUMENTS))
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break

        paren = self._consume(TokenType.RIGHT_PAREN, "after arguments")
        return CallExpr(line=callee.line, callee=callee, paren=paren, arguments=arguments)

    def _primary(self) -> Expression:
        token = self._peek()

        if self._match(TokenType.FALSE):
            return LiteralExpr(line=token.line, value=False)
        if self._match(TokenType.TRUE):
            return LiteralExpr(line=token.line, value=True)
        if self._match(TokenType.NULL):
            return LiteralExpr(line=token.line, value=None)
        if self._match(TokenType.NUMBER, TokenType.STRING):
            return LiteralExpr(line=token.line, value=token.literal)
        if self._match(TokenType.IDENTIFIER):
            return VariableExpr(line=token.line, name=token)
        if self._match(TokenType.LEFT_PAREN):
            expression = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "after expression")
            return GroupingExpr(line=token.line, expression=expression)

        raise ParseError(token, ErrorCode.EXPECTED_EXPRESSION)

    # --- Token stream helpers ---

    def _match(self, *token_types: TokenType) -> bool:
        """Consumes the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, context: str, expected: Optional[str] = None) -> Token:
        if self._check(token_type):
            return self._advance()

        expected = expected or TOKEN_FRIENDLY_NAMES.get(token_type, token_type.value)
        raise ParseError(self._peek(), ErrorCode.EXPECTED_TOKEN, expected=expected, context=context)

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type is token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type is TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    # --- Error handling ---

    def _record(self, error: ParseError):
        logger.debug(f"Syntax error: {error.message}")
        self.errors.append(error)
        self.reporter.report(error)

    def _synchronize(self):
        """
        Discards tokens until the start of what is probably the next statement.
        Inside a block a '}' is left for the block to close; at the top level it
        is stray and gets skipped like any other token.
        """
        if not self._at_closing_brace():
            self._advance()
        while not self._is_at_end():
            if self._previous().type is TokenType.SEMICOLON:
                return
            if self._peek().type in STATEMENT_KEYWORDS or self._at_closing_brace():
                return
            self._advance()

    def _at_closing_brace(self) -> bool:
        return self.block_depth > 0 and self._check(TokenType.RIGHT_BRACE)


def parse(tokens: List[Token], reporter: Optional[ErrorReporter] = None) -> ParseResult:
    """High-level entry point for the parser."""
    return Parser(tokens, reporter).parse()


def parse_expression(tokens: List[Token]) -> Expression:
    """Parses a lone expression, raising ParseError on the first syntax error."""
    return Parser(tokens).parse_expression()
