# Copyright (c) 2026 Signer — MIT License

"""Diagrams: characters placed into the cells of a fixed 7x7 grid.

A simple diagram holds one character per cell. A complex diagram holds a
string of up to 50 characters per cell; placing a value on a cell that is
already used appends to it. An animated diagram is a sequence of simple
frames and only has a legacy art secret (see legacy.py).

The order in which cells are first used is kept: it is part of the secret.

Usage:
    from gridseed.diagram import SimpleDiagram
    d = SimpleDiagram.from_values(["A", "B"], [(0, 0), (3, 4)])
    d.get(3, 4)       # "B"
    d.occupied()      # ((Position(row=0, col=0), "A"), (Position(row=3, col=4), "B"))
"""

from collections import namedtuple

from .errors import ValidationError

GRID_SIZE = 7
CELL_COUNT = GRID_SIZE * GRID_SIZE
MAX_CELL_LENGTH = 50


class Position(namedtuple("Position", ["row", "col"])):
    __slots__ = ()

    @property
    def linear(self):
        return self.row * GRID_SIZE + self.col

    @classmethod
    def from_linear(cls, index):
        if not 0 <= index < CELL_COUNT:
            raise ValidationError(f"cell index {index} is outside the grid",
                                  field="position", value=index)
        return cls(*divmod(index, GRID_SIZE))


def to_position(pos):
    """Validate a (row, col) pair and return it as a Position."""
    try:
        row, col = pos
    except (TypeError, ValueError):
        raise ValidationError(f"position must be a (row, col) pair, got {pos!r}",
                              field="position", value=pos) from None
    for coord in (row, col):
        if isinstance(coord, bool) or not isinstance(coord, int):
            raise ValidationError(f"position must hold integers, got {pos!r}",
                                  field="position", value=pos)
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValidationError(
            f"position ({row}, {col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid",
            field="position", value=pos)
    return Position(row, col)


def _pair_up(values, positions):
    values = list(values)
    positions = list(positions)
    if len(values) != len(positions):
        raise ValidationError(
            f"got {len(values)} values but {len(positions)} positions",
            field="positions", value=len(positions))
    return zip(values, positions)


def _check_text(value):
    if not isinstance(value, str):
        raise ValidationError(f"cell values must be strings, got {type(value).__name__}",
                              field="value", value=value)


class _Diagram:
    """Read-only grid shared by simple and complex diagrams."""

    kind = None

    def __init__(self):
        self._cells = {}  # Position -> str, insertion order = first use

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter(self.occupied())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.occupied() == other.occupied()

    def __hash__(self):
        return hash((self.kind, self.occupied()))

    def __repr__(self):
        # Never show cell contents
        return f"{type(self).__name__}(n={len(self)})"

    def get(self, row, col):
        """Return the value at (row, col), or None when the cell is empty."""
        return self._cells.get(to_position((row, col)))

    def occupied(self):
        """(Position, value) pairs in the order the cells were first used."""
        return tuple(self._cells.items())

    def positions(self):
        return tuple(self._cells)

    def values(self):
        return tuple(self._cells.values())

    def indices(self):
        """Occupied positions in row-major order."""
        return tuple(sorted(self._cells))

    def grid(self):
        """The full 7x7 grid as nested tuples; empty cells are None."""
        return tuple(
            tuple(self._cells.get(Position(r, c)) for c in range(GRID_SIZE))
            for r in range(GRID_SIZE)
        )


def _single_chars(cells):
    """Position -> character, one character per cell and no repeats."""
    out = {}
    for pos, value in cells:
        pos = to_position(pos)
        _check_text(value)
        if len(value) != 1:
            raise ValidationError(
                f"simple diagram cells hold exactly one character, got {len(value)}",
                field="value", value=value)
        if pos in out:
            raise ValidationError(
                f"position ({pos.row}, {pos.col}) is used twice",
                field="position", value=tuple(pos))
        out[pos] = value
    return out


class SimpleDiagram(_Diagram):
    """One character per cell, each cell used at most once."""

    kind = "simple"

    def __init__(self, cells):
        super().__init__()
        self._cells.update(_single_chars(cells))
        if not self._cells:
            raise ValidationError("diagram must have at least one cell",
                                  field="values", value=0)

    @classmethod
    def from_values(cls, values, positions):
        return cls((p, v) for v, p in _pair_up(values, positions))


class ComplexDiagram(_Diagram):
    """Up to 50 characters per cell; repeated positions append."""

    kind = "complex"

    def __init__(self, cells):
        super().__init__()
        for pos, value in cells:
            pos = to_position(pos)
            _check_text(value)
            if not value:
                raise ValidationError("cell values must not be empty",
                                      field="value", value=value)
            merged = self._cells.get(pos, "") + value
            if len(merged) > MAX_CELL_LENGTH:
                raise ValidationError(
                    f"cell ({pos.row}, {pos.col}) exceeds {MAX_CELL_LENGTH} characters",
                    field="value", value=len(merged))
            self._cells[pos] = merged
        if not self._cells:
            raise ValidationError("diagram must have at least one cell",
                                  field="values", value=0)

    @classmethod
    def from_values(cls, values, positions):
        return cls((p, v) for v, p in _pair_up(values, positions))


def _grid_cells(grid):
    """(Position, value) pairs of a 7x7 nested sequence; None marks an empty cell."""
    rows = list(grid)
    if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
        raise ValidationError(f"frames must be {GRID_SIZE}x{GRID_SIZE} grids",
                              field="frame", value=len(rows))
    return [(Position(r, c), value)
            for r, row in enumerate(rows)
            for c, value in enumerate(row)
            if value is not None]


class AnimateDiagram:
    """A sequence of 7x7 frames, each holding one character per used cell.

    Frames may be empty, but the animation as a whole must place at least
    one character. Only the legacy art secret covers animations.
    """

    kind = "animate"

    def __init__(self, frames):
        self._frames = []
        for frame in frames:
            cells = frame.occupied() if hasattr(frame, "occupied") else frame
            self._frames.append(_single_chars(cells))
        self._frames = tuple(self._frames)
        if not any(self._frames):
            raise ValidationError("animation must place at least one character",
                                  field="frames", value=len(self._frames))

    @classmethod
    def from_grids(cls, grids):
        """Build from 7x7 nested sequences of characters or None."""
        return cls(_grid_cells(grid) for grid in grids)

    def __len__(self):
        return len(self._frames)

    def __eq__(self, other):
        if not isinstance(other, AnimateDiagram):
            return NotImplemented
        return self.frames() == other.frames()

    def __hash__(self):
        return hash((self.kind, self.frames()))

    def __repr__(self):
        return f"AnimateDiagram(frames={len(self)}, n={self.cell_count()})"

    def cell_count(self):
        return sum(len(cells) for cells in self._frames)

    def get(self, frame, row, col):
        return self._frames[frame].get(to_position((row, col)))

    def occupied(self, frame):
        """(Position, character) pairs of one frame in placement order."""
        return tuple(self._frames[frame].items())

    def grid(self, frame):
        cells = self._frames[frame]
        return tuple(
            tuple(cells.get(Position(r, c)) for c in range(GRID_SIZE))
            for r in range(GRID_SIZE)
        )

    def frames(self):
        return tuple(self.grid(i) for i in range(len(self)))
