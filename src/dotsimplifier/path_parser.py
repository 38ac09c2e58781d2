"""
SVG path data interpreter.

Turns a path 'd' attribute into point subpaths. Straight commands
(M, L, H, V, Z) map directly to points and cubic curves (C) are flattened
into a fixed number of samples. Other commands (Q, S, T, A) are recognized
but produce no points.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple

from .errors import MalformedInputError
from .geometry import Point

logger = logging.getLogger(__name__)

# Every letter except the exponent marker starts a command
TOKEN_PATTERN = re.compile(
    r'([A-DF-Za-df-z])|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)',
    re.ASCII,
)

CURVE_STEPS = 10


class CommandKind(Enum):
    MOVE_TO = "M"
    LINE_TO = "L"
    HORIZONTAL_LINE_TO = "H"
    VERTICAL_LINE_TO = "V"
    CURVE_TO = "C"
    CLOSE_PATH = "Z"
    UNSUPPORTED = "?"

    @classmethod
    def from_letter(cls, letter: str) -> "CommandKind":
        try:
            return cls(letter.upper())
        except ValueError:
            return cls.UNSUPPORTED


@dataclass(frozen=True)
class PathCommand:
    """One command letter with the numbers that follow it."""

    kind: CommandKind
    relative: bool
    args: Tuple[float, ...]
    letter: str = ""


class Subpath(NamedTuple):
    points: List[Point]
    closed: bool


def parse_finite(text: str) -> float:
    """Convert a numeric literal, rejecting ones too large for a float."""
    value = float(text)
    if not math.isfinite(value):
        raise MalformedInputError(f"Number out of range: {text}")
    return value


def tokenize_path(d: str) -> List[PathCommand]:
    """
    Split path data into commands.

    Numbers that appear before the first command letter are ignored.

    Args:
        d: SVG path data string

    Returns:
        List of PathCommand in source order
    """
    commands: List[PathCommand] = []
    letter = None
    args: List[float] = []

    for cmd_token, num_token in TOKEN_PATTERN.findall(d or ""):
        if cmd_token:
            if letter is not None:
                commands.append(_make_command(letter, args))
            letter = cmd_token
            args = []
        elif letter is not None:
            args.append(parse_finite(num_token))

    if letter is not None:
        commands.append(_make_command(letter, args))

    return commands


def _make_command(letter: str, args: List[float]) -> PathCommand:
    return PathCommand(
        kind=CommandKind.from_letter(letter),
        relative=letter.islower(),
        args=tuple(args),
        letter=letter,
    )


def cubic_point(p0: Point, c1: Point, c2: Point, p1: Point, t: float) -> Point:
    """Evaluate a cubic Bezier with the Bernstein basis."""
    it = 1 - t
    b0 = it * it * it
    b1 = 3 * it * it * t
    b2 = 3 * it * t * t
    b3 = t * t * t
    return (
        b0 * p0[0] + b1 * c1[0] + b2 * c2[0] + b3 * p1[0],
        b0 * p0[1] + b1 * c1[1] + b2 * c2[1] + b3 * p1[1],
    )


class PathInterpreter:
    """
    Walks a command list keeping a cursor and the current subpath start.

    One interpreter handles one path; use interpret_path() for the common case.
    """

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.start_x = 0.0
        self.start_y = 0.0
        self.current: List[Point] = []
        self.subpaths: List[Subpath] = []

    def run(self, commands: List[PathCommand]) -> List[Subpath]:
        for command in commands:
            handler = self._handlers[command.kind]
            handler(self, command)

        if self.current:
            self.subpaths.append(Subpath(self.current, False))
            self.current = []
        return self.subpaths

    def _resolve(self, command: PathCommand, x: float, y: float) -> Point:
        if command.relative:
            return (self.x + x, self.y + y)
        return (x, y)

    def _move_to(self, command: PathCommand) -> None:
        args = command.args
        for i in range(0, len(args) - 1, 2):
            px, py = self._resolve(command, args[i], args[i + 1])
            if i == 0:
                if self.current:
                    self.subpaths.append(Subpath(self.current, False))
                self.current = [(px, py)]
                self.start_x, self.start_y = px, py
            else:
                # Extra pairs after a moveto are implicit linetos
                self.current.append((px, py))
            self.x, self.y = px, py

    def _line_to(self, command: PathCommand) -> None:
        args = command.args
        for i in range(0, len(args) - 1, 2):
            px, py = self._resolve(command, args[i], args[i + 1])
            self.current.append((px, py))
            self.x, self.y = px, py

    def _horizontal_line_to(self, command: PathCommand) -> None:
        for value in command.args:
            px = self.x + value if command.relative else value
            self.current.append((px, self.y))
            self.x = px

    def _vertical_line_to(self, command: PathCommand) -> None:
        for value in command.args:
            py = self.y + value if command.relative else value
            self.current.append((self.x, py))
            self.y = py

    def _curve_to(self, command: PathCommand) -> None:
        args = command.args
        for i in range(0, len(args) - 5, 6):
            start = (self.x, self.y)
            c1 = self._resolve(command, args[i], args[i + 1])
            c2 = self._resolve(command, args[i + 2], args[i + 3])
            end = self._resolve(command, args[i + 4], args[i + 5])

            for step in range(1, CURVE_STEPS + 1):
                self.current.append(cubic_point(start, c1, c2, end, step / CURVE_STEPS))
            self.x, self.y = end

    def _close_path(self, command: PathCommand) -> None:
        if self.current:
            self.current.append((self.start_x, self.start_y))
            self.subpaths.append(Subpath(self.current, True))
            self.current = []

    def _unsupported(self, command: PathCommand) -> None:
        logger.debug("Skipping unsupported path command %r", command.letter)

    _handlers = {
        CommandKind.MOVE_TO: _move_to,
        CommandKind.LINE_TO: _line_to,
        CommandKind.HORIZONTAL_LINE_TO: _horizontal_line_to,
        CommandKind.VERTICAL_LINE_TO: _vertical_line_to,
        CommandKind.CURVE_TO: _curve_to,
        CommandKind.CLOSE_PATH: _close_path,
        CommandKind.UNSUPPORTED: _unsupported,
    }


def interpret_path(d: str) -> List[Subpath]:
    """
    Parse SVG path data into point subpaths.

    Args:
        d: SVG path data string

    Returns:
        List of subpaths; a subpath is closed when it ended with Z/z
    """
    return PathInterpreter().run(tokenize_path(d))


def contains_close_path(d: str) -> bool:
    """True when the path data holds a close-path command."""
    return any(c.kind is CommandKind.CLOSE_PATH for c in tokenize_path(d))
