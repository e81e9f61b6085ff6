from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator
from config import PathMode
from errors import MalformedPathError
from geometry import Point, arc_to_points, is_number, reflect, sample_cubic, sample_quadratic
from path_data import tokenize_path_data

logger = logging.getLogger(__name__)


class CommandKind(enum.Enum):
    MOVE_TO = 'm'
    LINE_TO = 'l'
    HORIZONTAL_LINE_TO = 'h'
    VERTICAL_LINE_TO = 'v'
    CUBIC_CURVE_TO = 'c'
    SMOOTH_CUBIC_CURVE_TO = 's'
    QUADRATIC_CURVE_TO = 'q'
    SMOOTH_QUADRATIC_CURVE_TO = 't'
    ARC_TO = 'a'
    CLOSE_PATH = 'z'

    @classmethod
    def from_letter(cls, letter: str) -> CommandKind | None:
        try:
            return cls(letter.lower())
        except ValueError:
            return None


COMMAND_ARITY = {
    CommandKind.MOVE_TO: 2,
    CommandKind.LINE_TO: 2,
    CommandKind.HORIZONTAL_LINE_TO: 1,
    CommandKind.VERTICAL_LINE_TO: 1,
    CommandKind.CUBIC_CURVE_TO: 6,
    CommandKind.SMOOTH_CUBIC_CURVE_TO: 4,
    CommandKind.QUADRATIC_CURVE_TO: 4,
    CommandKind.SMOOTH_QUADRATIC_CURVE_TO: 2,
    CommandKind.ARC_TO: 7,
    CommandKind.CLOSE_PATH: 0,
}

CUBIC_FAMILY = (CommandKind.CUBIC_CURVE_TO, CommandKind.SMOOTH_CUBIC_CURVE_TO)
QUADRATIC_FAMILY = (CommandKind.QUADRATIC_CURVE_TO, CommandKind.SMOOTH_QUADRATIC_CURVE_TO)


@dataclass(frozen=True)
class PathCommand:
    kind: CommandKind
    relative: bool
    params: tuple[float, ...]
    position: int = -1


def iter_commands(tokens: Iterable[str]) -> Iterator[PathCommand]:
    """Group path tokens into commands, firing each one as soon as its arity is met.

    A command letter may be omitted for repeated commands; every repeated
    parameter group fires the same command again, moveto included. Raises
    MalformedPathError when a new letter arrives while parameters are still
    pending. Parameters left over at the end of input are dropped.
    """
    kind = None
    relative = False
    params: list[float] = []

    for position, token in enumerate(tokens):
        if is_number(token):
            params.append(float(token))
        else:
            if params:
                raise MalformedPathError(
                    f"{len(params)} unused parameter(s) before command {token!r}", position)
            kind = CommandKind.from_letter(token)
            relative = token.islower()
            if kind is None:
                logger.debug("Skipping unknown path command %r", token)

        if kind is None or len(params) != COMMAND_ARITY[kind]:
            continue

        yield PathCommand(kind, relative, tuple(params), position)
        params = []


@dataclass
class InterpreterState:
    cursor: Point = Point(0.0, 0.0)
    cubic_control: Point = Point(0.0, 0.0)
    quadratic_control: Point = Point(0.0, 0.0)
    previous: CommandKind | None = None
    start_offset: int = 0
    vertices: list[Point] = field(default_factory=list)
    finished: list[list[Point]] = field(default_factory=list)

    def append(self, point: Point):
        self.vertices.append(point)
        self.cursor = point

    def extend(self, points: list[Point]):
        for point in points:
            self.append(point)

    def flush(self):
        if self.vertices:
            self.finished.append(self.vertices)
            self.vertices = []


class PathInterpreter:
    def __init__(self, path_mode: PathMode = PathMode.CONTINUOUS):
        self.path_mode = path_mode
        self._handlers = {
            CommandKind.MOVE_TO: self._move_to,
            CommandKind.LINE_TO: self._line_to,
            CommandKind.HORIZONTAL_LINE_TO: self._horizontal_line_to,
            CommandKind.VERTICAL_LINE_TO: self._vertical_line_to,
            CommandKind.CUBIC_CURVE_TO: self._cubic_curve_to,
            CommandKind.SMOOTH_CUBIC_CURVE_TO: self._smooth_cubic_curve_to,
            CommandKind.QUADRATIC_CURVE_TO: self._quadratic_curve_to,
            CommandKind.SMOOTH_QUADRATIC_CURVE_TO: self._smooth_quadratic_curve_to,
            CommandKind.ARC_TO: self._arc_to,
            CommandKind.CLOSE_PATH: self._close_path,
        }

    def interpret(self, path: str | list[str]) -> list[list[Point]]:
        """Flatten path data into vertex sequences, in drawing order.

        Continuous mode yields at most one sequence. Discontinuous mode starts
        a new sequence at every moveto. Malformed data never raises: the
        vertices committed before the bad token are returned.
        """
        tokens = tokenize_path_data(path) if isinstance(path, str) else path
        state = InterpreterState()

        try:
            for command in iter_commands(tokens):
                origin = state.cursor if command.relative else Point(0.0, 0.0)
                self._handlers[command.kind](state, command, origin)
                state.previous = command.kind
        except MalformedPathError as e:
            logger.warning("Malformed path data at token %d: %s (keeping %d vertices)",
                           e.position, e, len(state.vertices) + sum(len(v) for v in state.finished))

        state.flush()
        return state.finished

    def _move_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        if self.path_mode is PathMode.DISCONTINUOUS:
            state.flush()
        state.start_offset = len(state.vertices)
        # a moveto always commits its point, exactly like a lineto
        self._line_to(state, command, origin)

    def _line_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        x, y = command.params
        state.append(Point(x + origin.x, y + origin.y))

    def _horizontal_line_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        state.append(Point(command.params[0] + origin.x, state.cursor.y))

    def _vertical_line_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        state.append(Point(state.cursor.x, command.params[0] + origin.y))

    def _cubic_curve_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        x1, y1, x2, y2, x, y = command.params
        first = Point(x1 + origin.x, y1 + origin.y)
        second = Point(x2 + origin.x, y2 + origin.y)
        end = Point(x + origin.x, y + origin.y)
        state.extend(sample_cubic(state.cursor, first, second, end))
        state.cubic_control = second

    def _smooth_cubic_curve_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        x2, y2, x, y = command.params
        if state.previous in CUBIC_FAMILY:
            first = reflect(state.cubic_control, state.cursor)
        else:
            first = state.cursor
        second = Point(x2 + origin.x, y2 + origin.y)
        end = Point(x + origin.x, y + origin.y)
        state.extend(sample_cubic(state.cursor, first, second, end))
        state.cubic_control = second

    def _quadratic_curve_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        x1, y1, x, y = command.params
        control = Point(x1 + origin.x, y1 + origin.y)
        end = Point(x + origin.x, y + origin.y)
        state.extend(sample_quadratic(state.cursor, control, end))
        state.quadratic_control = control

    def _smooth_quadratic_curve_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        x, y = command.params
        if state.previous in QUADRATIC_FAMILY:
            control = reflect(state.quadratic_control, state.cursor)
        else:
            control = state.cursor
        end = Point(x + origin.x, y + origin.y)
        state.extend(sample_quadratic(state.cursor, control, end))
        state.quadratic_control = control

    def _arc_to(self, state: InterpreterState, command: PathCommand, origin: Point):
        if not state.vertices:
            raise MalformedPathError("arc has no starting point", command.position)
        rx, ry, angle, large_arc, sweep, x, y = command.params
        end = Point(x + origin.x, y + origin.y)
        state.extend(arc_to_points(state.cursor, rx, ry, angle, large_arc != 0, sweep != 0, end))

    def _close_path(self, state: InterpreterState, command: PathCommand, origin: Point):
        if state.start_offset >= len(state.vertices):
            raise MalformedPathError("closepath without a sub-path to close", command.position)
        state.append(state.vertices[state.start_offset])


def interpret_path(path: str | list[str], path_mode: PathMode = PathMode.CONTINUOUS) -> list[list[Point]]:
    return PathInterpreter(path_mode).interpret(path)
