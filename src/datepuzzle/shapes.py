"""Piece shapes, the shape catalog, and orientation generation.

Each piece is stored as a tight bitmap and tagged with a unique positive
multiplier.  Every cell a piece covers on the board holds that multiplier, so
the board alone tells which piece sits where.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import cached_property, lru_cache
from typing import TypeAlias

import numpy as np

from datepuzzle.errors import InvariantViolationError

Bitmap: TypeAlias = tuple[tuple[int, ...], ...]
Pattern: TypeAlias = tuple[str, Sequence[str]]

MAX_PIECE_SIZE = 4
"""Pieces must fit inside a 4x4 bounding box."""

FILLED_CHAR = "#"
"""Character marking an occupied cell in a piece pattern."""

PIECE_PATTERNS: tuple[Pattern, ...] = (
    ("Y", ("..#.", "####")),
    ("O", ("###", "###")),
    ("L", ("#...", "####")),
    ("V", ("#..", "#..", "###")),
    ("N", ("###.", "..##")),
    ("P", ("###", ".##")),
    ("U", ("###", "#.#")),
    ("S", ("##.", ".#.", ".##")),
)
"""The eight pieces of the calendar puzzle, in multiplier order (1..8)."""


def parse_pattern(rows: Sequence[str]) -> Bitmap:
    """Convert text rows ('#' filled, anything else empty) into a 0/1 bitmap."""
    return tuple(tuple(1 if ch == FILLED_CHAR else 0 for ch in row) for row in rows)


@dataclass(frozen=True)
class PieceShape:
    """A piece in its canonical orientation."""

    name: str
    """Short display name of the piece."""

    width: int
    height: int

    bitmap: Bitmap
    """Occupancy grid, `bitmap[y][x]` is 1 where the piece covers a cell."""

    multiplier: int
    """Unique positive value stamped into every cell the piece covers."""

    def __post_init__(self) -> None:
        """Validate the bitmap against the declared dimensions."""
        if self.multiplier <= 0:
            raise ValueError(f"Piece {self.name}: multiplier must be positive.")
        if not (0 < self.width <= MAX_PIECE_SIZE and 0 < self.height <= MAX_PIECE_SIZE):
            raise ValueError(
                f"Piece {self.name}: {self.width}x{self.height} exceeds "
                f"{MAX_PIECE_SIZE}x{MAX_PIECE_SIZE}."
            )
        if len(self.bitmap) != self.height or any(len(row) != self.width for row in self.bitmap):
            raise ValueError(
                f"Piece {self.name}: bitmap does not match {self.width}x{self.height}."
            )
        grid = np.array(self.bitmap)
        if not np.isin(grid, (0, 1)).all():
            raise ValueError(f"Piece {self.name}: bitmap may only contain 0 and 1.")
        # Tight bounding box: no empty edge row or column
        if not (grid[0].any() and grid[-1].any() and grid[:, 0].any() and grid[:, -1].any()):
            raise ValueError(f"Piece {self.name}: bounding box is not tight.")

    @classmethod
    def from_pattern(cls, name: str, rows: Sequence[str], multiplier: int) -> "PieceShape":
        """Build a piece from text rows such as `("##.", ".##")`."""
        bitmap = parse_pattern(rows)
        return cls(
            name=name,
            width=max((len(row) for row in bitmap), default=0),
            height=len(bitmap),
            bitmap=bitmap,
            multiplier=multiplier,
        )

    @property
    def cell_count(self) -> int:
        """Number of cells covered by the piece."""
        return sum(map(sum, self.bitmap))

    def layout(self) -> np.ndarray:
        """Return the occupancy grid scaled by the multiplier."""
        return np.array(self.bitmap, dtype=np.int32) * self.multiplier


@dataclass(frozen=True, eq=False)
class Orientation:
    """One rotation/mirror variant of a piece.

    Immutable: `layout` is a read-only array of shape `(height, width)` whose
    cells are either 0 or the piece multiplier.
    """

    layout: np.ndarray

    def __post_init__(self) -> None:
        layout = np.array(self.layout, dtype=np.int32)
        layout.setflags(write=False)
        object.__setattr__(self, "layout", layout)

    @property
    def height(self) -> int:
        return self.layout.shape[0]

    @property
    def width(self) -> int:
        return self.layout.shape[1]

    @cached_property
    def cells(self) -> tuple[tuple[int, int], ...]:
        """Row-major `(dy, dx)` offsets of the occupied cells."""
        return tuple((int(dy), int(dx)) for dy, dx in np.argwhere(self.layout))

    @cached_property
    def value(self) -> int:
        """The multiplier carried by the occupied cells."""
        return int(self.layout.max())

    @cached_property
    def lead(self) -> int:
        """Column of the first occupied cell in the top row."""
        return int(np.flatnonzero(self.layout[0])[0])

    def key(self) -> tuple[int, int, bytes]:
        return (self.width, self.height, self.layout.tobytes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Orientation):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def visual_str(self) -> str:
        """Multiline picture of the orientation ('#' filled, '.' empty)."""
        return "\n".join(
            "".join(FILLED_CHAR if cell else "." for cell in row) for row in self.layout
        )


def rotate(layout: np.ndarray, quarter_turns: int) -> np.ndarray:
    """Rotate a layout clockwise by `quarter_turns` x 90 degrees.

    Args:
        layout (np.ndarray): Grid of shape `(height, width)`.
        quarter_turns (int): 0, 1, 2 or 3.

    Returns:
        A new array; odd turns swap width and height.

    Raises:
        InvariantViolationError: If `quarter_turns` is not in 0..3.
    """
    height, width = layout.shape
    ys, xs = np.indices(layout.shape)
    if quarter_turns == 0:
        return layout.copy()
    if quarter_turns == 1:
        rotated = np.zeros((width, height), dtype=layout.dtype)
        rotated[xs, height - 1 - ys] = layout
    elif quarter_turns == 2:
        rotated = np.zeros((height, width), dtype=layout.dtype)
        rotated[height - 1 - ys, width - 1 - xs] = layout
    elif quarter_turns == 3:
        rotated = np.zeros((width, height), dtype=layout.dtype)
        rotated[width - 1 - xs, ys] = layout
    else:
        raise InvariantViolationError(f"Invalid rotation index: {quarter_turns}")
    return rotated


def mirror(layout: np.ndarray) -> np.ndarray:
    """Flip a layout horizontally."""
    return np.flip(layout, axis=1).copy()


def generate_orientations(layout: np.ndarray) -> tuple[Orientation, ...]:
    """Return every distinct orientation of a piece layout.

    The four rotations of the layout come first, then the four rotations of its
    mirror image.  An orientation equal to one already produced (same width,
    height and cells) is dropped, so symmetric pieces yield fewer than 8.
    """
    kept: list[Orientation] = []
    seen: set[Orientation] = set()
    for base in (layout, mirror(layout)):
        for quarter_turns in range(4):
            orientation = Orientation(rotate(base, quarter_turns))
            if orientation in seen:
                continue
            seen.add(orientation)
            kept.append(orientation)
    return tuple(kept)


@dataclass(frozen=True)
class Catalog:
    """The set of pieces for a puzzle together with their orientations."""

    pieces: tuple[PieceShape, ...]

    orientations: tuple[tuple[Orientation, ...], ...] = field(init=False, repr=False)
    """`orientations[i]` holds the distinct orientations of `pieces[i]`."""

    def __post_init__(self) -> None:
        multipliers = [piece.multiplier for piece in self.pieces]
        if len(set(multipliers)) != len(multipliers):
            raise ValueError(f"Piece multipliers must be unique: {multipliers}")
        object.__setattr__(
            self,
            "orientations",
            tuple(generate_orientations(piece.layout()) for piece in self.pieces),
        )

    @classmethod
    def from_patterns(cls, patterns: Iterable[Pattern]) -> "Catalog":
        """Build a catalog from `(name, rows)` patterns, numbering multipliers from 1."""
        return cls(
            tuple(
                PieceShape.from_pattern(name, rows, multiplier)
                for multiplier, (name, rows) in enumerate(patterns, start=1)
            )
        )

    def __len__(self) -> int:
        return len(self.pieces)

    @property
    def total_area(self) -> int:
        """Sum of the cell counts of all pieces."""
        return sum(piece.cell_count for piece in self.pieces)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Return the calendar puzzle catalog, built on first use and shared afterwards."""
    return Catalog.from_patterns(PIECE_PATTERNS)
