"""
Coordinate text format.

A document is written as blocks of points separated by blank lines:

    [10,10],
    [90,10],
    [90,90],
    [10,90],
    [10,10,-1]

The trailing -1 marks the last point of a closed shape. Reading is
deliberately forgiving: the text is often edited by hand, so anything that is
not a well-formed point token is skipped instead of rejected.
"""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .geometry import Document, Point, Shape

POINT_SEPARATOR = ",\n"
SHAPE_SEPARATOR = "\n\n"
CLOSURE_MARKER = "-1"
DECIMALS = 2
_QUANTUM = Decimal(1).scaleb(-DECIMALS)
# Wide enough for every finite float written out in full
_CONTEXT = Context(prec=400)


def format_number(value: float) -> str:
    """
    Round to two decimals and drop trailing zeros (10.50 -> 10.5, 3.00 -> 3).

    Halves round away from zero (0.125 -> 0.13), on the exact binary value.
    """
    rounded = Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT)
    text = format(rounded, "f")
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        return '0'
    return text


def format_point(point: Point, closing: bool = False) -> str:
    x = format_number(point[0])
    y = format_number(point[1])
    if closing:
        return f"[{x},{y},{CLOSURE_MARKER}]"
    return f"[{x},{y}]"


def serialize_shape(shape: Shape) -> str:
    last = len(shape.points) - 1
    return POINT_SEPARATOR.join(
        format_point(p, closing=shape.closed and i == last)
        for i, p in enumerate(shape.points)
    )


def serialize_document(document: Document) -> str:
    """Render a document as coordinate text."""
    return SHAPE_SEPARATOR.join(serialize_shape(shape) for shape in document.shapes)


class TokenKind(Enum):
    NUMBER = "NUMBER"
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    COMMA = "COMMA"
    SPACE = "SPACE"
    OTHER = "OTHER"


class Token(NamedTuple):
    kind: TokenKind
    text: str


_TOKEN_SPEC = [
    (TokenKind.NUMBER, r'-?\d+(?:\.\d+)?'),
    (TokenKind.OPEN, r'\['),
    (TokenKind.CLOSE, r'\]'),
    (TokenKind.COMMA, r','),
    (TokenKind.SPACE, r'\s+'),
    (TokenKind.OTHER, r'.'),
]
_TOKEN_RE = re.compile(
    '|'.join(f'(?P<{kind.name}>{pattern})' for kind, pattern in _TOKEN_SPEC),
    re.DOTALL | re.ASCII,
)


def tokenize(text: str) -> List[Token]:
    """Split text into coordinate tokens. Every character lands in some token."""
    return [Token(TokenKind[m.lastgroup], m.group()) for m in _TOKEN_RE.finditer(text)]


class PointToken(NamedTuple):
    point: Point
    closing: bool


class _PointMatcher:
    """
    Matches one point at a given token position.

    Grammar, with optional whitespace between any two symbols:

        point  := '[' NUMBER ',' NUMBER [ ',' '-1' ] ']'
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens

    def match(self, pos: int) -> Optional[Tuple[PointToken, int]]:
        pos = self._expect(pos, TokenKind.OPEN)
        if pos is None:
            return None

        x, pos = self._number(pos)
        if pos is None:
            return None
        pos = self._expect(pos, TokenKind.COMMA)
        if pos is None:
            return None
        y, pos = self._number(pos)
        if pos is None:
            return None

        closing = False
        after_comma = self._expect(pos, TokenKind.COMMA)
        if after_comma is not None:
            marker, pos = self._number(after_comma)
            if pos is None or marker != CLOSURE_MARKER:
                return None
            closing = True

        pos = self._expect(pos, TokenKind.CLOSE)
        if pos is None:
            return None
        point = (float(x), float(y))
        if not all(math.isfinite(c) for c in point):
            return None
        return PointToken(point, closing), pos

    def _skip_space(self, pos: int) -> int:
        while pos < len(self.tokens) and self.tokens[pos].kind is TokenKind.SPACE:
            pos += 1
        return pos

    def _expect(self, pos: int, kind: TokenKind) -> Optional[int]:
        pos = self._skip_space(pos)
        if pos < len(self.tokens) and self.tokens[pos].kind is kind:
            return pos + 1
        return None

    def _number(self, pos: int) -> Tuple[Optional[str], Optional[int]]:
        pos = self._skip_space(pos)
        if pos < len(self.tokens) and self.tokens[pos].kind is TokenKind.NUMBER:
            return self.tokens[pos].text, pos + 1
        return None, None


def scan_points(block: str) -> Iterator[PointToken]:
    """
    Yield every well-formed point in a block of text.

    When a bracket does not start a valid point, scanning resumes right after
    that bracket, so stray characters only cost the point they touch.
    """
    tokens = tokenize(block)
    matcher = _PointMatcher(tokens)
    pos = 0
    while pos < len(tokens):
        if tokens[pos].kind is TokenKind.OPEN:
            result = matcher.match(pos)
            if result is not None:
                point_token, pos = result
                yield point_token
                continue
        pos += 1


def split_blocks(text: str) -> List[str]:
    """Normalize line endings and split on blank lines."""
    normalized = text.replace('\r\n', '\n').replace('\r', '\n').strip()
    if not normalized:
        return []
    return [block for block in re.split(r'\n\s*\n', normalized) if block.strip()]


def parse_document(text: Optional[str]) -> Document:
    """
    Read coordinate text back into a document.

    Never raises: text without any point tokens gives an empty document.

    Within a block, a point carrying the -1 marker closes the current shape
    and starts a new one. Points left over at the end of a block become one
    open shape.
    """
    shapes: List[Shape] = []

    for block in split_blocks(text or ""):
        current: List[Point] = []
        for point_token in scan_points(block):
            current.append(point_token.point)
            if point_token.closing:
                shapes.append(Shape(tuple(current), closed=True))
                current = []
        if current:
            shapes.append(Shape(tuple(current), closed=False))

    return Document(tuple(shapes))
