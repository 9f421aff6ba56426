"""
  zeal Parser

Recursive descent over the scanner's token list, one method per precedence
level, lowest first:

    control (if / while) -> pipeline -> || -> && -> equality -> comparison
    -> additive -> multiplicative -> unary -> call / field access -> primary

Rewrites performed while parsing:

- `f! a b` and `f a b` are both calls; any primary directly after another
  primary is an extra argument.
- `x.name! a` becomes `name(x, a)`.
- `x |> f a` becomes `f(x, a)` and `x |> f` becomes `f(x)`.

`&&`, `||` and `|>` may start a continuation line when that line is indented
deeper than the first token of the current statement.
A closed indentation block ends the expression it belongs to, so nothing on
the line after its END_BLOCK continues a call or an operator chain.

Every malformed construct raises ZealSyntaxError at once; there is no
recovery.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from zeal import config
from zeal.errors import ZealSyntaxError
from zeal.reader.tokens import Token, TokenType
from zeal.syntax.ast import (
    Assignment,
    Binary,
    Block,
    BuiltinFunction,
    Declaration,
    Expr,
    FunctionCall,
    Get,
    Group,
    If,
    LambdaExpr,
    Literal,
    Unary,
    While,
)
from zeal.types.symbol import Symbol

logger = logging.getLogger(__name__)

ARGUMENT_STARTS = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.LEFT_PAREN,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.STRING,
        TokenType.INT,
        TokenType.FN,
    }
)

STATEMENT_TERMINATORS = (TokenType.SEMICOLON, TokenType.EOL)

EQUALITY_OPS = (TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL)
COMPARISON_OPS = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
ADDITIVE_OPS = (TokenType.MINUS, TokenType.PLUS)
MULTIPLICATIVE_OPS = (TokenType.STAR, TokenType.SLASH_SLASH, TokenType.MOD)
UNARY_OPS = (TokenType.MINUS, TokenType.BANG)


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            self.tokens.append(Token(TokenType.EOF))
        self.index = 0
        # column of the first token of the statement being parsed
        self.anchor_col = 0

    # ------------------------
    # Token cursor
    # ------------------------
    def peek(self, offset: int = 0) -> Token:
        i = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[i]

    def previous(self) -> Optional[Token]:
        if self.index == 0:
            return None
        return self.tokens[self.index - 1]

    def advance(self) -> Token:
        token = self.peek()
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def match(self, *types: TokenType) -> bool:
        if self.check(*types):
            self.advance()
            return True
        return False

    def match_continued(self, *types: TokenType) -> bool:
        """Match an operator here, or at the start of a deeper-indented next line."""
        if self.match(*types):
            return True
        following = self.peek(1)
        if (
            self.check(TokenType.EOL)
            and following.type in types
            and following.location.col > self.anchor_col
        ):
            self.advance()
            self.advance()
            return True
        return False

    def expect(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(message)

    def error(self, message: str, token: Optional[Token] = None) -> ZealSyntaxError:
        token = token or self.peek()
        return ZealSyntaxError(f"{message}, found '{token}'", token.location)

    def after_block(self) -> bool:
        """True right after an END_BLOCK: the block closed the expression it belongs to."""
        previous = self.previous()
        return previous is not None and previous.type is TokenType.END_BLOCK

    def skip_line_ends(self) -> None:
        while self.match(TokenType.EOL):
            pass

    # ------------------------
    # Statements
    # ------------------------
    def parse_statement(self) -> Optional[Expr]:
        """Parse the next top-level statement, or return None at end of input."""
        self.skip_line_ends()
        if self.check(TokenType.EOF):
            return None
        return self.statement()

    def parse_all(self) -> Iterator[Expr]:
        while (statement := self.parse_statement()) is not None:
            yield statement

    def statement(self) -> Expr:
        saved_anchor = self.anchor_col
        self.anchor_col = self.peek().location.col
        try:
            expr = self.simple_statement()
            self.terminator()
            return expr
        finally:
            self.anchor_col = saved_anchor

    def simple_statement(self) -> Expr:
        """An expression, optionally turned into a declaration or an assignment."""
        expr = self.expression()
        if self.check(TokenType.COLON):
            return self.declaration(expr)
        if self.check(TokenType.EQUAL):
            return self.assignment(expr)
        return expr

    def terminator(self) -> None:
        if self.match(*STATEMENT_TERMINATORS):
            return
        if self.check(TokenType.EOF, TokenType.END_BLOCK):
            return
        if self.after_block():
            return
        raise self.error("Expected ';' or end of line after statement")

    def declaration(self, target: Expr) -> Declaration:
        colon = self.advance()
        if not (isinstance(target, Literal) and isinstance(target.value, Symbol)):
            raise self.error("Invalid left-hand side of declaration", colon)
        if not self.match(TokenType.EQUAL):
            raise self.error("Malformed declaration, expected ':='")
        value = self.expression()
        return Declaration(target.value, value, location=target.location)

    def assignment(self, target: Expr) -> Assignment:
        equal = self.advance()
        if not (isinstance(target, Literal) and isinstance(target.value, Symbol)):
            raise self.error("Invalid assignment target", equal)
        value = self.expression()
        return Assignment(target.value, value, location=target.location)

    def block(self, begin: Token) -> Block:
        statements = []
        while True:
            self.skip_line_ends()
            if self.match(TokenType.END_BLOCK):
                break
            if self.check(TokenType.EOF):
                raise self.error("Unterminated block")
            statements.append(self.statement())
        return Block(statements, location=begin.location)

    def branch(self) -> Expr:
        """The body after a ':', either an indented block or one inline statement."""
        if self.check(TokenType.BEGIN_BLOCK):
            return self.block(self.advance())
        return self.simple_statement()

    # ------------------------
    # Expressions
    # ------------------------
    def expression(self) -> Expr:
        return self.control_expression()

    def control_expression(self) -> Expr:
        token = self.peek()
        if self.match(TokenType.WHILE):
            condition = self.expression()
            self.expect(TokenType.COLON, "Expected ':' after while condition")
            return While(condition, self.branch(), location=token.location)
        if self.match(TokenType.IF):
            return self.if_expression(token)
        return self.pipeline()

    def if_expression(self, token: Token) -> If:
        condition = self.expression()
        self.expect(TokenType.COLON, "Expected ':' after if condition")
        then_branch = self.branch()

        if self.check(TokenType.EOL) and self.peek(1).type is TokenType.ELSE:
            self.advance()
        else_branch = None
        if self.match(TokenType.ELSE):
            if self.check(TokenType.IF):
                else_branch = self.expression()
            elif self.match(TokenType.COLON):
                else_branch = self.branch()
            else:
                else_branch = self.simple_statement()
        return If(condition, then_branch, else_branch, location=token.location)

    def pipeline(self) -> Expr:
        expr = self.logical_or()
        while not self.after_block() and self.match_continued(TokenType.PIPELINE):
            target = self.call()
            if isinstance(target, FunctionCall):
                target.args.insert(0, expr)
                expr = target
            else:
                expr = FunctionCall(target, [expr], location=target.location)
        return expr

    def binary_level(self, operand, operators: tuple[TokenType, ...], continued: bool = False) -> Expr:
        expr = operand()
        matcher = self.match_continued if continued else self.match
        while not self.after_block() and matcher(*operators):
            op = self.previous()
            rhs = operand()
            expr = Binary(expr, op.type, rhs, location=op.location)
        return expr

    def logical_or(self) -> Expr:
        return self.binary_level(self.logical_and, (TokenType.OR_OR,), continued=True)

    def logical_and(self) -> Expr:
        return self.binary_level(self.equality, (TokenType.AND_AND,), continued=True)

    def equality(self) -> Expr:
        return self.binary_level(self.comparison, EQUALITY_OPS)

    def comparison(self) -> Expr:
        return self.binary_level(self.additive, COMPARISON_OPS)

    def additive(self) -> Expr:
        return self.binary_level(self.multiplicative, ADDITIVE_OPS)

    def multiplicative(self) -> Expr:
        return self.binary_level(self.unary, MULTIPLICATIVE_OPS)

    def unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            op = self.previous()
            return Unary(op.type, self.unary(), location=op.location)
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while not self.after_block():
            if self.match(TokenType.DOT):
                name = self.expect(TokenType.IDENTIFIER, "Expected name after '.'")
                expr = Get(expr, name.value, location=name.location)
            elif self.match(TokenType.BANG) or self.peek_argument():
                args = self.arguments()
                if isinstance(expr, Get):
                    # method sugar: the field names the callee, the receiver leads
                    args.insert(0, expr.receiver)
                    expr = Literal(Symbol(expr.name), location=expr.location)
                expr = FunctionCall(expr, args, location=expr.location)
            else:
                break
        return expr

    def peek_argument(self) -> bool:
        return not self.after_block() and self.check(*ARGUMENT_STARTS)

    def arguments(self) -> list[Expr]:
        args = []
        while self.peek_argument():
            args.append(self.primary())
        return args

    def primary(self) -> Expr:
        token = self.advance()
        loc = token.location
        match token.type:
            case TokenType.TRUE:
                return Literal(True, location=loc)
            case TokenType.FALSE:
                return Literal(False, location=loc)
            case TokenType.INT | TokenType.STRING:
                return Literal(token.value, location=loc)
            case TokenType.IDENTIFIER:
                return Literal(Symbol(token.value), location=loc)
            case TokenType.LEFT_PAREN:
                expr = self.expression()
                if not self.match(TokenType.RIGHT_PAREN):
                    raise self.error("Unclosed parenthesis")
                return Group(expr, location=loc)
            case TokenType.FN:
                return self.lambda_expr(token)
            case TokenType.PRINT:
                return BuiltinFunction(token, location=loc)
        raise self.error("Unexpected token", token)

    def lambda_expr(self, token: Token) -> LambdaExpr:
        params = []
        while not self.match(TokenType.THIN_ARROW):
            param = self.peek()
            if param.type is not TokenType.IDENTIFIER:
                raise self.error("Expected parameter name or '->' in function")
            self.advance()
            params.append(Symbol(param.value))

        if self.check(TokenType.BEGIN_BLOCK):
            body = self.block(self.advance()).statements
        else:
            body = [self.simple_statement()]
        if not body:
            raise self.error("Empty function body", token)
        return LambdaExpr(params, body, location=token.location)


def parse(tokens: Iterable[Token]) -> list[Expr]:
    """Parse a token list into an ordered list of statement nodes.

    Nesting deeper than the recursion limit allows is a ZealSyntaxError.
    """
    parser = Parser(tokens)
    with config.recursion_limit():
        try:
            statements = list(parser.parse_all())
        except RecursionError:
            raise ZealSyntaxError("Expression nested too deeply", parser.peek().location) from None
    logger.debug("parsed %d statements", len(statements))
    return statements
