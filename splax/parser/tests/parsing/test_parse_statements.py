import pytest

from splax.exceptions import ErrorCode
from splax.lexer.core.lexer import scan_tokens
from splax.parser.core.classes import *
from splax.parser.core.parser import parse

from ..utils.assertion_helper import assert_asts_equal
from ..utils.factory_helpers import *


def parse_source(code):
    result = parse(scan_tokens(code))
    assert result.ok, [e.message for e in result.errors]
    return result.statements


@pytest.mark.parametrize(
    "code",
    [
        pytest.param("", id="empty_file"),
        pytest.param("// comment", id="only_comment"),
        pytest.param("\t\t   ", id="tabs_and_spaces"),
    ],
)
def test_parsed_file_without_statements(code):
    assert parse_source(code) == []


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("1 + 2;", get_expression_stmt(get_binary(get_number_literal(1), "+", get_number_literal(2))), id="expression"),
        pytest.param('print "hi";', get_print_stmt(get_string_literal("hi")), id="print"),
        pytest.param("let a = 1;", get_let_stmt("a", get_number_literal(1)), id="let"),
        pytest.param("let a = b = c;", get_let_stmt("a", get_assign("b", get_variable("c"))), id="let_with_assignment"),
        pytest.param("{}", get_block([]), id="empty_block"),
        pytest.param(
            "{ let a = 1; print a; }",
            get_block([get_let_stmt("a", get_number_literal(1)), get_print_stmt(get_variable("a"))]),
            id="block",
        ),
        pytest.param(
            "{ { a; } }",
            get_block([get_block([get_expression_stmt(get_variable("a"))])]),
            id="nested_block",
        ),
        pytest.param(
            "if (a) print 1;",
            get_if_stmt(get_variable("a"), get_print_stmt(get_number_literal(1))),
            id="if_without_else",
        ),
        pytest.param(
            "if (a) print 1; else print 2;",
            get_if_stmt(get_variable("a"), get_print_stmt(get_number_literal(1)), get_print_stmt(get_number_literal(2))),
            id="if_with_else",
        ),
        pytest.param(
            "while (i < 3) i = i + 1;",
            get_while_stmt(
                get_binary(get_variable("i"), "<", get_number_literal(3)),
                get_expression_stmt(get_assign("i", get_binary(get_variable("i"), "+", get_number_literal(1)))),
            ),
            id="while",
        ),
        pytest.param("fn noop() {}", get_function_stmt("noop", [], []), id="function_without_params"),
        pytest.param(
            "fn add(a, b) { print a + b; }",
            get_function_stmt("add", ["a", "b"], [get_print_stmt(get_binary(get_variable("a"), "+", get_variable("b")))]),
            id="function_with_params",
        ),
        pytest.param(
            "add(1, 2);",
            get_expression_stmt(get_call(get_variable("add"), [get_number_literal(1), get_number_literal(2)])),
            id="call_statement",
        ),
    ],
)
def test_statement_parsed_correctly(code, expected):
    statements = parse_source(code)
    assert len(statements) == 1
    assert_asts_equal(statements[0], expected)


def test_dangling_else_binds_to_nearest_if():
    statements = parse_source("if (a) if (b) print 1; else print 2;")

    expected = get_if_stmt(
        get_variable("a"),
        get_if_stmt(get_variable("b"), get_print_stmt(get_number_literal(1)), get_print_stmt(get_number_literal(2))),
    )
    assert_asts_equal(statements[0], expected)
    assert statements[0].else_branch is None


def test_function_closing_over_outer_variable():
    code = """
    fn make_counter() {
        let count = 0;
        fn increment() {
            count = count + 1;
            print count;
        }
        increment;
    }
    """
    statements = parse_source(code)

    outer = statements[0]
    assert isinstance(outer, FunctionStmt)
    assert [type(s) for s in outer.body.statements] == [LetStmt, FunctionStmt, ExpressionStmt]
    inner = outer.body.statements[1]
    assert inner.name.lexeme == "increment"
    assert inner.params == ()


def test_statement_lines():
    statements = parse_source("let a = 1;\n\nwhile (a)\n  a = a - 1;")
    assert [s.line for s in statements] == [1, 3]
    assert statements[1].body.line == 4


@pytest.mark.parametrize(
    "code, error, message",
    [
        pytest.param("let = 1;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at '=': Expect variable name after 'let'.", id="let_missing_name"),
        pytest.param("let a;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at ';': Expect '=' after variable name.", id="let_missing_initializer"),
        pytest.param("let a = ;", ErrorCode.EXPECTED_EXPRESSION, "[line 1] Error at ';': Expect expression.", id="let_missing_value"),
        pytest.param("print 1", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at end: Expect ';' after value.", id="print_missing_semicolon"),
        pytest.param("1 + 2", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at end: Expect ';' after expression.", id="expression_missing_semicolon"),
        pytest.param("if a) print 1;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at 'a': Expect '(' after 'if'.", id="if_missing_paren"),
        pytest.param("while (a print 1;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at 'print': Expect ')' after condition.", id="while_missing_paren"),
        pytest.param("{ print 1;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at end: Expect '}' after block.", id="unclosed_block"),
        pytest.param("fn (a) {}", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at '(': Expect function name after 'fn'.", id="function_missing_name"),
        pytest.param("fn f(a, 1) {}", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at '1': Expect parameter name in parameter list.", id="function_bad_param"),
        pytest.param("fn f() print 1;", ErrorCode.EXPECTED_TOKEN, "[line 1] Error at 'print': Expect '{' before function body.", id="function_missing_body"),
        pytest.param("1 = 2;", ErrorCode.INVALID_ASSIGNMENT_TARGET, "[line 1] Error at '=': Invalid assignment target.", id="invalid_assignment_target"),
        pytest.param("(a) = 2;", ErrorCode.INVALID_ASSIGNMENT_TARGET, "[line 1] Error at '=': Invalid assignment target.", id="grouping_is_not_a_target"),
    ],
)
def test_statement_parsed_error(code, error, message):
    result = parse(scan_tokens(code))

    assert not result.ok
    assert result.errors[0].code == error
    assert result.errors[0].message == message


def test_invalid_assignment_target_keeps_the_statement():
    result = parse(scan_tokens("1 = 2;"))
    assert len(result.errors) == 1
    assert len(result.statements) == 1
    assert_asts_equal(result.statements[0], get_expression_stmt(get_number_literal(1)))


def test_too_many_arguments_is_reported_without_aborting():
    arguments = ", ".join(["1"] * 256)
    result = parse(scan_tokens(f"f({arguments});"))

    assert [e.code for e in result.errors] == [ErrorCode.TOO_MANY_ARGUMENTS]
    assert len(result.statements) == 1
    assert len(result.statements[0].expression.arguments) == 256


def test_too_many_parameters_is_reported_without_aborting():
    params = ", ".join(f"p{i}" for i in range(256))
    result = parse(scan_tokens(f"fn f({params}) {{}}"))

    assert [e.code for e in result.errors] == [ErrorCode.TOO_MANY_PARAMETERS]
    assert len(result.statements[0].params) == 256
