"""
Recursive descent parser for the calcpad arithmetic language.

Grammar (precedence low to high):
    expr    → term (("+"|"-") term)*
    term    → factor (("*"|"/"|"%") factor)*
    factor  → NUMBER | "(" expr ")" | "-" factor
"""

from __future__ import annotations

import math

from calcpad.core.errors import ExpressionSyntaxError, MathError
from calcpad.core.expression_lang.tokenizer import (
    Token,
    TokenKind,
    tokenize,
    validate_parens,
)
from calcpad.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

_ADDITIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.PERCENT: BinaryOp.MOD,
}

# Deepest run of nested parentheses and unary minus signs
MAX_DEPTH = 200


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise ExpressionSyntaxError(f"Expected {_describe_kind(kind)}, got {_describe(tok)}", tok.pos)
        return self.advance()

    def enter(self, tok: Token) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise ExpressionSyntaxError("Expression nested too deeply", tok.pos)

    def leave(self) -> None:
        self.depth -= 1

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDITIVE:
            op = _ADDITIVE[self.advance().kind]
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/' | '%') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE:
            op = _MULTIPLICATIVE[self.advance().kind]
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """NUMBER | '(' expr ')' | '-' factor"""
        tok = self.current

        if tok.kind == TokenKind.MINUS:
            self.enter(tok)
            self.advance()
            operand = self.parse_factor()
            self.leave()
            return UnaryExpr(op=UnaryOp.NEG, operand=operand)

        if tok.kind == TokenKind.LPAREN:
            self.enter(tok)
            self.advance()
            expr = self.parse_expr()
            self.expect(TokenKind.RPAREN)
            self.leave()
            return expr

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return _parse_number(tok)

        if tok.kind == TokenKind.EOF:
            raise ExpressionSyntaxError("Unexpected end of expression", tok.pos)

        raise ExpressionSyntaxError(f"Unexpected token: {_describe(tok)}", tok.pos)


def _parse_number(tok: Token) -> Literal:
    """Convert a NUMBER token into a literal, rejecting overflow."""
    value = float(tok.value)
    if not math.isfinite(value):
        raise MathError(f"Number too large: {tok.value[:16]}...", tok.pos)
    return Literal(value=value)


def _describe_kind(kind: TokenKind) -> str:
    if kind == TokenKind.RPAREN:
        return "')'"
    return kind.value


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of expression"
    return repr(tok.value)


def parse_tokens(tokens: list[Token]) -> Expr:
    """Parse an already tokenized, paren-balanced token list."""
    parser = _Parser(tokens)
    expr = parser.parse_expr()

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        raise ExpressionSyntaxError(
            f"Unexpected token after expression: {parser.current.value!r}",
            parser.current.pos,
        )

    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2 + 3 * (4 - 1)")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
        MathError: If a numeric literal does not fit in a double.
    """
    tokens = tokenize(source)
    validate_parens(tokens)

    if tokens[0].kind == TokenKind.EOF:
        raise ExpressionSyntaxError("Empty expression", 0)

    return parse_tokens(tokens)
