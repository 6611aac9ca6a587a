"""
  Monkey Parser

Recursive descent for statements, precedence climbing (Pratt) for
expressions. The parser keeps a single token of lookahead over a lazy token
stream and builds an immutable Program.

- Statement leaders: `let`, `return`, anything else is an expression statement
- Null-denotation table: identifiers, integers, booleans, `!`/`-` prefixes,
  grouped expressions, `if`, `fn`
- Infix table: binary operators plus `(` for call expressions
- The first error raised aborts the whole parse; there is no resynchronization
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Iterable, Iterator, Optional

from monkey.errors import (
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
    Statement,
    Expression,
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
from monkey.reader.lexer import Lexer
from monkey.reader.token import Token, TokenKind
from monkey.types.values import I64_MIN, I64_MAX


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


class Parser:
    """Builds a Program from a stream of tokens."""

    def __init__(self, tokens: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(tokens)
        self.buffer: list[Token] = []

        self.prefix_fns: dict[TokenKind, Callable[[], Expression]] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.TRUE: self.parse_boolean_literal,
            TokenKind.FALSE: self.parse_boolean_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_fns: dict[TokenKind, Callable[[Expression], Expression]] = {
            TokenKind.PLUS: self.parse_infix_expression,
            TokenKind.MINUS: self.parse_infix_expression,
            TokenKind.ASTERISK: self.parse_infix_expression,
            TokenKind.SLASH: self.parse_infix_expression,
            TokenKind.LT: self.parse_infix_expression,
            TokenKind.GT: self.parse_infix_expression,
            TokenKind.EQ: self.parse_infix_expression,
            TokenKind.NOT_EQ: self.parse_infix_expression,
            TokenKind.LPAREN: self.parse_call_expression,
        }
        self.statement_fns: dict[TokenKind, Callable[[], Statement]] = {
            TokenKind.LET: self.parse_let_statement,
            TokenKind.RETURN: self.parse_return_statement,
        }

    # --- token cursor ---
    def peek(self) -> Optional[Token]:
        if not self.buffer:
            token = next(self.tokens, None)
            if token is None or token.kind is TokenKind.EOF:
                return None
            self.buffer.append(token)
        return self.buffer[0]

    def peek_is(self, kind: TokenKind) -> bool:
        token = self.peek()
        return token is not None and token.kind is kind

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise MissingToken()
        return self.buffer.pop(0)

    def expect(self, kind: TokenKind) -> Token:
        """Consume the next token if it has the given kind, else raise."""
        token = self.peek()
        if token is None:
            raise MissingToken()
        if token.kind is not kind:
            raise UnexpectedToken(token.literal, token)
        return self.advance()

    def peek_precedence(self) -> Precedence:
        token = self.peek()
        if token is None:
            return Precedence.LOWEST
        return PRECEDENCES.get(token.kind, Precedence.LOWEST)

    # --- statements ---
    def parse_program(self) -> Program:
        statements: list[Statement] = []
        try:
            while self.peek() is not None:
                statements.append(self.parse_statement())
        except RecursionError:
            # Nested expressions and blocks recurse on the Python stack.
            raise NestingTooDeep(self.buffer[0] if self.buffer else None) from None
        return Program(tuple(statements))

    def parse_statement(self) -> Statement:
        token = self.peek()
        if token is None:
            raise MissingToken()
        parse_fn = self.statement_fns.get(token.kind, self.parse_expression_statement)
        return parse_fn()

    def parse_let_statement(self) -> LetStatement:
        """let <identifier> = <expression>;"""
        self.expect(TokenKind.LET)
        name = self.expect(TokenKind.IDENT)
        self.expect(TokenKind.ASSIGN)
        value = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenKind.SEMICOLON)
        return LetStatement(Identifier(name.literal), value)

    def parse_return_statement(self) -> ReturnStatement:
        """return <expression>;"""
        self.expect(TokenKind.RETURN)
        value = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenKind.SEMICOLON)
        return ReturnStatement(value)

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_is(TokenKind.SEMICOLON):
            self.advance()
        return ExpressionStatement(expression)

    def parse_block_statement(self) -> BlockStatement:
        """{ <statement>* }"""
        self.expect(TokenKind.LBRACE)
        statements: list[Statement] = []
        while True:
            token = self.peek()
            if token is None:
                raise MissingToken()
            if token.kind is TokenKind.RBRACE:
                self.advance()
                break
            statements.append(self.parse_statement())
        return BlockStatement(tuple(statements))

    # --- expressions ---
    def parse_expression(self, precedence: Precedence) -> Expression:
        token = self.peek()
        if token is None:
            raise MissingToken()
        prefix = self.prefix_fns.get(token.kind)
        if prefix is None:
            raise UnexpectedToken(token.literal, token)
        left = prefix()

        # Fold in operators that bind tighter than the caller's precedence.
        while not self.peek_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_fns[self.peek().kind]
            left = infix(left)
        return left

    def parse_identifier(self) -> Identifier:
        token = self.expect(TokenKind.IDENT)
        return Identifier(token.literal)

    def parse_integer_literal(self) -> IntegerLiteral:
        token = self.expect(TokenKind.INT)
        try:
            value = int(token.literal)
        except ValueError:
            raise InvalidIntegerValue(token.literal, token) from None
        if not I64_MIN <= value <= I64_MAX:
            raise InvalidIntegerValue(token.literal, token)
        return IntegerLiteral(value)

    def parse_boolean_literal(self) -> BooleanLiteral:
        token = self.advance()
        if token.kind is TokenKind.TRUE and token.literal == "true":
            return BooleanLiteral(True)
        if token.kind is TokenKind.FALSE and token.literal == "false":
            return BooleanLiteral(False)
        raise InvalidBooleanValue(token.literal, token)

    def parse_prefix_expression(self) -> PrefixExpression:
        token = self.advance()
        try:
            operator = PrefixOperator(token.literal)
        except ValueError:
            raise InvalidPrefixOperator(token.literal, token) from None
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.advance()
        try:
            operator = InfixOperator(token.literal)
        except ValueError:
            raise InvalidInfixOperator(token.literal, token) from None
        # Recursing at the operator's own precedence keeps it left-associative.
        right = self.parse_expression(PRECEDENCES[token.kind])
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Expression:
        self.expect(TokenKind.LPAREN)
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenKind.RPAREN)
        return expression

    def parse_if_expression(self) -> IfExpression:
        """if (<condition>) <block> [else <block>]"""
        self.expect(TokenKind.IF)
        self.expect(TokenKind.LPAREN)
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenKind.RPAREN)
        consequence = self.parse_block_statement()
        alternative = None
        if self.peek_is(TokenKind.ELSE):
            self.advance()
            alternative = self.parse_block_statement()
        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        """fn(<ident>, ...) <block>"""
        self.expect(TokenKind.FUNCTION)
        parameters = self.parse_function_parameters()
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body)

    def parse_function_parameters(self) -> tuple[Identifier, ...]:
        self.expect(TokenKind.LPAREN)
        parameters: list[Identifier] = []
        if self.peek_is(TokenKind.RPAREN):
            self.advance()
            return ()
        parameters.append(self.parse_identifier())
        while self.peek_is(TokenKind.COMMA):
            self.advance()
            parameters.append(self.parse_identifier())
        self.expect(TokenKind.RPAREN)
        return tuple(parameters)

    def parse_call_expression(self, function: Expression) -> CallExpression:
        self.expect(TokenKind.LPAREN)
        arguments: list[Expression] = []
        if self.peek_is(TokenKind.RPAREN):
            self.advance()
            return CallExpression(function, ())
        arguments.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_is(TokenKind.COMMA):
            self.advance()
            arguments.append(self.parse_expression(Precedence.LOWEST))
        self.expect(TokenKind.RPAREN)
        return CallExpression(function, tuple(arguments))


def parse(source: str) -> Program:
    """Parse source text into a Program, raising the first ParseError found."""
    return Parser(Lexer(source)).parse_program()
