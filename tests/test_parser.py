import pytest
from hypothesis import given, strategies as st

from monkey.errors import (
    ParseError,
    UnexpectedToken,
    MissingToken,
    InvalidIntegerValue,
    InvalidBooleanValue,
    InvalidPrefixOperator,
    InvalidInfixOperator,
    NestingTooDeep,
)
from monkey.reader.ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    PrefixOperator,
    InfixOperator,
)
from monkey.reader.lexer import Lexer, tokenize
from monkey.reader.parser import Parser, Precedence, parse
from monkey.reader.token import Token, TokenKind


def single_expression(source):
    program = parse(source)
    assert len(program.statements) == 1
    statement = program.statements[0]
    assert isinstance(statement, ExpressionStatement)
    return statement.expression


# -----------------------------------------------------
# Statements
# -----------------------------------------------------

def test_let_statements():
    program = parse("let x = 5; let y = 10; let foobar = 838383;")
    assert program.statements == (
        LetStatement(Identifier("x"), IntegerLiteral(5)),
        LetStatement(Identifier("y"), IntegerLiteral(10)),
        LetStatement(Identifier("foobar"), IntegerLiteral(838383)),
    )


def test_return_statements():
    program = parse("return 5; return 10; return add(1, 2);")
    assert program.statements == (
        ReturnStatement(IntegerLiteral(5)),
        ReturnStatement(IntegerLiteral(10)),
        ReturnStatement(
            CallExpression(Identifier("add"), (IntegerLiteral(1), IntegerLiteral(2)))
        ),
    )


def test_expression_statements_with_and_without_semicolon():
    program = parse("3 + 4; -5 * 5")
    assert program.statements == (
        ExpressionStatement(
            InfixExpression(IntegerLiteral(3), InfixOperator.PLUS, IntegerLiteral(4))
        ),
        ExpressionStatement(
            InfixExpression(
                PrefixExpression(PrefixOperator.NEGATE, IntegerLiteral(5)),
                InfixOperator.MULTIPLY,
                IntegerLiteral(5),
            )
        ),
    )


def test_block_statement():
    parser = Parser(Lexer("{ x; 2 + 3; let a = 5; }"))
    assert parser.parse_block_statement() == BlockStatement(
        (
            ExpressionStatement(Identifier("x")),
            ExpressionStatement(
                InfixExpression(IntegerLiteral(2), InfixOperator.PLUS, IntegerLiteral(3))
            ),
            LetStatement(Identifier("a"), IntegerLiteral(5)),
        )
    )


def test_empty_program():
    assert parse("") == Program(())
    assert parse("   \n ") == Program(())


def test_parser_accepts_token_iterables():
    tokens = [Token(TokenKind.INT, "1"), Token(TokenKind.PLUS, "+"), Token(TokenKind.INT, "2")]
    program = Parser(tokens).parse_program()
    assert str(program) == "(1 + 2)"


def test_eof_token_ends_the_stream():
    program = Parser(tokenize("let a = 1;", include_eof=True)).parse_program()
    assert len(program.statements) == 1


# -----------------------------------------------------
# Expressions
# -----------------------------------------------------

def test_identifier_expression():
    assert single_expression("foobar;") == Identifier("foobar")


def test_integer_literal():
    assert single_expression("5;") == IntegerLiteral(5)


@pytest.mark.parametrize("source,value", [("true;", True), ("false;", False)])
def test_boolean_literal(source, value):
    assert single_expression(source) == BooleanLiteral(value)


@pytest.mark.parametrize(
    "source,operator,operand",
    [
        ("!5;", PrefixOperator.NOT, IntegerLiteral(5)),
        ("-15;", PrefixOperator.NEGATE, IntegerLiteral(15)),
        ("!true;", PrefixOperator.NOT, BooleanLiteral(True)),
        ("-a", PrefixOperator.NEGATE, Identifier("a")),
    ],
)
def test_prefix_expressions(source, operator, operand):
    assert single_expression(source) == PrefixExpression(operator, operand)


@pytest.mark.parametrize(
    "source,operator",
    [
        ("5 + 5;", InfixOperator.PLUS),
        ("5 - 5;", InfixOperator.MINUS),
        ("5 * 5;", InfixOperator.MULTIPLY),
        ("5 / 5;", InfixOperator.DIVIDE),
        ("5 > 5;", InfixOperator.GREATER_THAN),
        ("5 < 5;", InfixOperator.LESS_THAN),
        ("5 == 5;", InfixOperator.EQUAL),
        ("5 != 5;", InfixOperator.NOT_EQUAL),
    ],
)
def test_infix_expressions(source, operator):
    assert single_expression(source) == InfixExpression(IntegerLiteral(5), operator, IntegerLiteral(5))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c", "(a + (b * c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4)\n((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true", "true"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("3 < 5 == true", "((3 < 5) == true)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("2 / (5 + 5)", "(2 / (5 + 5))"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        (
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
            "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        ),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
        ("-f(x)", "(-f(x))"),
        ("f(x)(y)", "f(x)(y)"),
    ],
)
def test_operator_precedence(source, expected):
    assert str(parse(source)) == expected


def test_if_expression():
    expression = single_expression("if (x < y) { x }")
    assert expression == IfExpression(
        InfixExpression(Identifier("x"), InfixOperator.LESS_THAN, Identifier("y")),
        BlockStatement((ExpressionStatement(Identifier("x")),)),
        None,
    )
    assert str(expression) == "if (x < y) {x}"


def test_if_else_expression():
    expression = single_expression("if (x < y) { x } else { y }")
    assert expression.alternative == BlockStatement((ExpressionStatement(Identifier("y")),))
    assert str(expression) == "if (x < y) {x} else {y}"


def test_if_condition_grouping_is_isolated():
    expression = single_expression("if ((1 + 2) * 3) { 1 } * 2")
    # the `* 2` applies to the whole if-expression, not to the condition
    assert isinstance(expression, InfixExpression)
    assert isinstance(expression.left, IfExpression)
    assert str(expression.left.condition) == "((1 + 2) * 3)"


def test_function_literal():
    expression = single_expression("fn(x, y) { x + y; }")
    assert expression == FunctionLiteral(
        (Identifier("x"), Identifier("y")),
        BlockStatement(
            (
                ExpressionStatement(
                    InfixExpression(Identifier("x"), InfixOperator.PLUS, Identifier("y"))
                ),
            )
        ),
    )
    assert str(expression) == "fn(x, y){(x + y)}"


@pytest.mark.parametrize(
    "source,params",
    [
        ("fn() {};", []),
        ("fn(x) {};", ["x"]),
        ("fn(x, y, z) {};", ["x", "y", "z"]),
    ],
)
def test_function_parameters(source, params):
    expression = single_expression(source)
    assert [p.name for p in expression.parameters] == params


def test_call_expression():
    expression = single_expression("add(1, 2 * 3, 4 + 5);")
    assert isinstance(expression, CallExpression)
    assert expression.function == Identifier("add")
    assert [str(a) for a in expression.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_call_without_arguments():
    assert single_expression("f()") == CallExpression(Identifier("f"), ())


def test_immediately_invoked_function_literal():
    expression = single_expression("fn(x) { x }(5)")
    assert isinstance(expression, CallExpression)
    assert isinstance(expression.function, FunctionLiteral)
    assert str(expression) == "fn(x){x}(5)"


def test_display_of_statements():
    program = parse("let a = fn(x) { return x * 2; }; a(3);")
    assert str(program) == "let a = fn(x){return (x * 2);};\na(3)"


def test_block_display_joins_with_newlines():
    assert str(parse("if (a) { let b = 1; b }")) == "if a {let b = 1;\nb}"


def test_precedence_ordering():
    assert Precedence.CALL > Precedence.PREFIX > Precedence.PRODUCT
    assert Precedence.PRODUCT > Precedence.SUM > Precedence.LESSGREATER
    assert Precedence.LESSGREATER > Precedence.EQUALS > Precedence.LOWEST


# -----------------------------------------------------
# Errors
# -----------------------------------------------------

def test_expect_reports_unexpected_token():
    parser = Parser(Lexer("x = 5"))
    with pytest.raises(UnexpectedToken) as info:
        parser.expect(TokenKind.ASSIGN)
    assert info.value.literal == "x"
    assert parser.expect(TokenKind.IDENT) == Token(TokenKind.IDENT, "x")


@pytest.mark.parametrize(
    "source,literal",
    [
        ("let = 5;", "="),
        ("let x 5;", "5"),
        ("let 5 = x;", "5"),
        ("let x = 5 let", "let"),
        ("return 5 6", "6"),
        (")", ")"),
        ("5 + ;", ";"),
        ("@", "@"),
        ("let x = #;", "#"),
        ("(1 + 2", None),
        ("if x { 1 }", "x"),
        ("fn(x, 1) { x }", "1"),
        ("fn x { x }", "x"),
        ("add(1, 2", None),
        ("add(1 2)", "2"),
        ("else { 1 }", "else"),
    ],
)
def test_syntax_errors(source, literal):
    with pytest.raises(ParseError) as info:
        parse(source)
    if literal is None:
        assert isinstance(info.value, MissingToken)
    else:
        assert isinstance(info.value, UnexpectedToken)
        assert info.value.literal == literal


@pytest.mark.parametrize("source", ["let x = 5", "return 1", "let", "let x =", "if (true) { 1", "-"])
def test_missing_token_at_end_of_input(source):
    with pytest.raises(MissingToken) as info:
        parse(source)
    assert str(info.value) == "expected token, found none"
    assert info.value.position is None


def test_error_carries_token_position():
    with pytest.raises(UnexpectedToken) as info:
        parse("let a = 1;\nlet b = );")
    assert info.value.position == (1, 8)
    assert str(info.value) == "unexpected token: )"


def test_first_error_aborts_parse():
    # both statements are malformed; only the first is reported
    with pytest.raises(UnexpectedToken) as info:
        parse("let = 1; let y 2;")
    assert info.value.literal == "="


@pytest.mark.parametrize(
    "source",
    [
        "(" * 1500 + "1" + ")" * 1500,
        "-" * 1500 + "1",
        "if (true) { " * 1500 + "1" + " }" * 1500,
    ],
)
def test_deep_nesting_is_a_parse_error(source):
    with pytest.raises(NestingTooDeep) as info:
        parse(source)
    assert str(info.value) == "expression nested too deeply"
    assert isinstance(info.value, ParseError)


def test_moderate_nesting_parses():
    source = "(" * 50 + "1" + ")" * 50
    assert str(parse(source)) == "1"


def test_integer_out_of_range():
    with pytest.raises(InvalidIntegerValue) as info:
        parse("9223372036854775808")
    assert info.value.text == "9223372036854775808"
    assert str(info.value) == "failed to convert 9223372036854775808 to i64 value"


def test_largest_integer_parses():
    assert single_expression("9223372036854775807") == IntegerLiteral(2 ** 63 - 1)


def test_invalid_boolean_value():
    parser = Parser([Token(TokenKind.TRUE, "yes")])
    with pytest.raises(InvalidBooleanValue) as info:
        parser.parse_boolean_literal()
    assert info.value.text == "yes"


def test_invalid_prefix_operator():
    parser = Parser([Token(TokenKind.MINUS, "~"), Token(TokenKind.INT, "1")])
    with pytest.raises(InvalidPrefixOperator):
        parser.parse_expression(Precedence.LOWEST)


def test_invalid_infix_operator():
    parser = Parser([Token(TokenKind.INT, "1"), Token(TokenKind.PLUS, "%"), Token(TokenKind.INT, "2")])
    with pytest.raises(InvalidInfixOperator):
        parser.parse_expression(Precedence.LOWEST)


@given(st.integers(min_value=0, max_value=2 ** 63 - 1))
def test_integer_literals_in_range_round_trip(n):
    assert single_expression(str(n)) == IntegerLiteral(n)


@given(st.integers(min_value=2 ** 63, max_value=10 ** 25))
def test_integer_literals_out_of_range_rejected(n):
    with pytest.raises(InvalidIntegerValue):
        parse(str(n))
