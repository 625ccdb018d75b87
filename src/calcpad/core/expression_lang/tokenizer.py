"""
Tokenizer for the calcpad arithmetic language.

Converts an expression string into a sequence of typed tokens and checks
parenthesis balance before any parsing happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from calcpad.core.errors import ExpressionSyntaxError


class TokenKind(StrEnum):
    """Token types for the arithmetic language."""

    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    value: str
    pos: int


_SINGLE_MAP: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_WHITESPACE = " \t\n\r"
_DIGITS = "0123456789"


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        ExpressionSyntaxError: On an unknown character or malformed number.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            continue

        if c in _DIGITS or c == ".":
            i, tok = _read_number(source, i)
            tokens.append(tok)
            continue

        if c in _SINGLE_MAP:
            tokens.append(Token(_SINGLE_MAP[c], c, i))
            i += 1
            continue

        raise ExpressionSyntaxError(f"Unexpected character: {c!r}", i)

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens


def _read_number(source: str, start: int) -> tuple[int, Token]:
    """Read digits with at most one decimal point."""
    i = start
    n = len(source)
    seen_dot = False
    seen_digit = False

    while i < n and (source[i] in _DIGITS or source[i] == "."):
        if source[i] == ".":
            if seen_dot:
                raise ExpressionSyntaxError(
                    f"Malformed number: {source[start : i + 1]!r}", start
                )
            seen_dot = True
        else:
            seen_digit = True
        i += 1

    if not seen_digit:
        raise ExpressionSyntaxError("Malformed number: '.'", start)

    return i, Token(TokenKind.NUMBER, source[start:i], start)


def validate_parens(tokens: list[Token]) -> None:
    """Check that parentheses are balanced.

    The depth counter must never go negative and must end at zero.

    Raises:
        ExpressionSyntaxError: Pointing at the unmatched parenthesis.
    """
    open_positions: list[int] = []
    for tok in tokens:
        if tok.kind == TokenKind.LPAREN:
            open_positions.append(tok.pos)
        elif tok.kind == TokenKind.RPAREN:
            if not open_positions:
                raise ExpressionSyntaxError("Unmatched ')'", tok.pos)
            open_positions.pop()

    if open_positions:
        raise ExpressionSyntaxError("Unclosed '('", open_positions[0])
