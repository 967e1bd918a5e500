"""Coordinate mapping for Launchpad devices."""

from typing import Optional

from launchgrid.exceptions import InvalidCoordinateError
from launchgrid.models.leds import LedId, SideLED, TopLED


class CoordinateMap:
    """
    Bidirectional mapping between logical coordinates and device notes.

    Programmer layout, with x selecting the row from the top and y the
    column from the left::

        x=0:  81 82 83 84 85 86 87 88 | 89  (side 0)
        x=1:  71 72 ...            78 | 79
        ...
        x=7:  11 12 ...            18 | 19  (side 7)

    So ``note = 81 - 10*x + y``. The top row (91-99) and the side column
    are separate tables reached through TopLED / SideLED.

    The extended 9x9 space used by RGB lighting puts the top row at y=0,
    shifts the grid down by one, and uses x=8 for the side column with
    (8, 0) as the logo.

    All lookups are pure; forward lookups raise InvalidCoordinateError
    outside their domain, reverse lookups return None.
    """

    GRID_SIZE = 8

    # notes[x][y], row x from the top
    GRID_NOTES: tuple[tuple[int, ...], ...] = tuple(
        tuple(81 - 10 * x + y for y in range(8)) for x in range(8)
    )
    SIDE_NOTES: tuple[int, ...] = tuple(led.note for led in SideLED)
    TOP_NOTES: tuple[int, ...] = tuple(led.note for led in TopLED)

    _NOTE_TO_GRID: dict[int, tuple[int, int]] = {
        note: (x, y) for x, row in enumerate(GRID_NOTES) for y, note in enumerate(row)
    }

    @classmethod
    def note_for_grid(cls, x: int, y: int) -> int:
        """
        Convert grid coordinates to a note.

        Example:
            (0, 0) -> 81 (top-left)
            (7, 7) -> 18 (bottom-right)
        """
        if not (0 <= x < cls.GRID_SIZE and 0 <= y < cls.GRID_SIZE):
            raise InvalidCoordinateError("grid", (x, y))
        return cls.GRID_NOTES[x][y]

    @classmethod
    def grid_for_note(cls, note: int) -> Optional[tuple[int, int]]:
        """Convert a note to grid coordinates, None if not a grid note."""
        return cls._NOTE_TO_GRID.get(note)

    @classmethod
    def note_for_side(cls, index: int) -> int:
        """Note of side LED ``index`` (0 = top)."""
        if not 0 <= index < len(cls.SIDE_NOTES):
            raise InvalidCoordinateError("side", index)
        return cls.SIDE_NOTES[index]

    @classmethod
    def side_for_note(cls, note: int) -> Optional[int]:
        led = SideLED.from_note(note)
        return None if led is None else int(led)

    @staticmethod
    def note_for_top(led: TopLED | int) -> int:
        try:
            return TopLED(led).note
        except ValueError as e:
            raise InvalidCoordinateError("top row", led) from e

    @staticmethod
    def top_for_note(note: int) -> Optional[TopLED]:
        return TopLED.from_note(note)

    @classmethod
    def note_for_led(cls, led: LedId) -> int:
        """Note of a function LED, top row or side column."""
        if isinstance(led, TopLED):
            return led.note
        if isinstance(led, SideLED):
            return cls.note_for_side(int(led))
        raise InvalidCoordinateError("function LED", led)

    @classmethod
    def is_side_note(cls, note: int) -> bool:
        return note in cls.SIDE_NOTES

    @classmethod
    def device_identity_for_coords(cls, x: int, y: int) -> int:
        """
        Note for a cell of the extended 9x9 space.

        - (8, 0): logo
        - x == 8: side LED y-1
        - y == 0: top LED x
        - otherwise: grid cell (x, y-1)
        """
        if not (0 <= x <= 8 and 0 <= y <= 8):
            raise InvalidCoordinateError("extended grid", (x, y))

        if x == 8 and y == 0:
            return TopLED.LOGO.note
        if x == 8:
            return cls.SIDE_NOTES[y - 1]
        if y == 0:
            return cls.TOP_NOTES[x]
        return cls.GRID_NOTES[x][y - 1]

    # Names used by the controller surface
    grid_to_note = note_for_grid
    note_to_grid = grid_for_note
