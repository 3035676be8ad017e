"""Keyboard navigation for the terminal front end.

Screens are small frozen values and `handle_key` is a pure transition: it
returns the next screen, the next form and a command for the driver. The
driver is the only place that calls the engine or touches the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .form import FIELDS, FieldSpec, MortgageForm

PAGE_ROWS = 10

CONFIRM_KEYS = {"enter", "l", "right"}
BACK_KEYS = {"esc", "h", "left"}


class Command(Enum):
    NONE = "none"
    RECALCULATE = "recalculate"
    SHOW_RESULTS = "show_results"
    EXPORT_SPREADSHEET = "export_spreadsheet"
    EXPORT_ANALYSIS = "export_analysis"
    QUIT = "quit"


@dataclass(frozen=True)
class EditingField:
    index: int = 0

    @property
    def spec(self) -> FieldSpec:
        return FIELDS[self.index]


@dataclass(frozen=True)
class ViewingSpreadsheet:
    scroll_offset: int = 0


@dataclass(frozen=True)
class ViewingSummary:
    return_offset: int = 0


Screen = EditingField | ViewingSpreadsheet | ViewingSummary


@dataclass(frozen=True)
class Step:
    screen: Screen
    form: MortgageForm
    command: Command = Command.NONE


def last_field() -> EditingField:
    return EditingField(len(FIELDS) - 1)


def _edit_field(screen: EditingField, form: MortgageForm, key: str) -> Step:
    spec = screen.spec
    first = screen.index == 0

    if key == "tab":
        return Step(screen, form.toggled(spec))
    if key == "backspace":
        return Step(screen, form.backspaced(spec))
    if key in CONFIRM_KEYS:
        if not form.can_confirm(spec):
            return Step(screen, form)
        if screen == last_field():
            return Step(screen, form, Command.SHOW_RESULTS)
        return Step(EditingField(screen.index + 1), form, Command.RECALCULATE)
    if first and key in {"esc", "q"}:
        return Step(screen, form, Command.QUIT)
    if not first and key in BACK_KEYS:
        return Step(EditingField(screen.index - 1), form)
    if len(key) == 1:
        return Step(screen, form.typed(spec, key))
    return Step(screen, form)


def _scroll(offset: int, row_count: int) -> int:
    if row_count <= 0:
        return 0
    return max(0, min(offset, row_count - 1))


def _view_spreadsheet(screen: ViewingSpreadsheet, form: MortgageForm, key: str, row_count: int) -> Step:
    offset = screen.scroll_offset
    if key in {"q", "Q"}:
        return Step(screen, form, Command.QUIT)
    if key in BACK_KEYS:
        return Step(last_field(), form)
    if key in {"s", "S"}:
        return Step(ViewingSummary(return_offset=offset), form)
    if key in {"e", "E"}:
        return Step(screen, form, Command.EXPORT_SPREADSHEET)

    moves = {
        "down": offset + 1,
        "j": offset + 1,
        "up": offset - 1,
        "k": offset - 1,
        "pagedown": offset + PAGE_ROWS,
        "ctrl+d": offset + PAGE_ROWS,
        "pageup": offset - PAGE_ROWS,
        "ctrl+u": offset - PAGE_ROWS,
        "g": 0,
        "G": row_count - 1,
    }
    if key in moves:
        return Step(ViewingSpreadsheet(_scroll(moves[key], row_count)), form)
    return Step(screen, form)


def _view_summary(screen: ViewingSummary, form: MortgageForm, key: str) -> Step:
    if key in {"q", "Q"}:
        return Step(screen, form, Command.QUIT)
    if key in BACK_KEYS:
        return Step(ViewingSpreadsheet(screen.return_offset), form)
    if key in {"e", "E"}:
        return Step(screen, form, Command.EXPORT_ANALYSIS)
    return Step(screen, form)


def handle_key(screen: Screen, form: MortgageForm, key: str, row_count: int = 0) -> Step:
    """
    Apply one key press.

    `key` is a single printable character or one of the names enter, tab,
    backspace, esc, left, right, up, down, pageup, pagedown, ctrl+d, ctrl+u.
    `row_count` is the length of the current schedule, used to clamp scrolling.
    """
    if isinstance(screen, EditingField):
        return _edit_field(screen, form, key)
    if isinstance(screen, ViewingSpreadsheet):
        return _view_spreadsheet(screen, form, key, row_count)
    return _view_summary(screen, form, key)
