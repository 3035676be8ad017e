"""Curses front end: field-by-field form, spreadsheet view and summary view."""

from __future__ import annotations

import curses
import logging
from pathlib import Path

from dotenv import load_dotenv

from config.settings import Settings, load_settings
from .calculations import compute, monthly_pi_payment
from .errors import CalculationError
from .export import write_analysis, write_spreadsheet
from .form import MortgageForm
from .models import InputParameters, MonthlyRecord, SummaryResult
from .navigation import (
    Command,
    EditingField,
    Screen,
    ViewingSpreadsheet,
    handle_key,
)
from .summary import summarize

logger = logging.getLogger(__name__)

TITLE = "Home Buyer Calculator"

SPREADSHEET_COLUMNS = [
    ("Month", 6, lambda r: f"{r.month_index}"),
    ("Interest", 10, lambda r: f"${r.interest_portion:,.0f}"),
    ("Principal", 10, lambda r: f"${r.principal_portion:,.0f}"),
    ("Extra", 8, lambda r: f"${r.extra_principal_applied:,.0f}"),
    ("Balance", 11, lambda r: f"${r.remaining_balance:,.0f}"),
    ("PMI", 6, lambda r: f"${r.pmi_charged:,.0f}"),
    ("Taxes", 8, lambda r: f"${r.taxes:,.0f}"),
    ("Insur.", 7, lambda r: f"${r.insurance_cost:,.0f}"),
    ("Maint.", 7, lambda r: f"${r.maintenance_cost:,.0f}"),
    ("HOA", 6, lambda r: f"${r.hoa_fee:,.0f}"),
    ("House", 11, lambda r: f"${r.house_value_at_month:,.0f}"),
    ("Payment", 9, lambda r: f"${r.actual_payment:,.0f}"),
    ("CoC", 8, lambda r: f"${r.cost_of_capital_this_month:,.0f}"),
    ("Equity", 11, lambda r: f"${r.equity_at_month:,.0f}"),
]

_NAMED_KEYS = {
    curses.KEY_ENTER: "enter",
    10: "enter",
    13: "enter",
    9: "tab",
    curses.KEY_BACKSPACE: "backspace",
    127: "backspace",
    8: "backspace",
    27: "esc",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_NPAGE: "pagedown",
    curses.KEY_PPAGE: "pageup",
    4: "ctrl+d",
    21: "ctrl+u",
}


def key_name(code: int) -> str | None:
    if code in _NAMED_KEYS:
        return _NAMED_KEYS[code]
    if 32 <= code < 127:
        return chr(code)
    return None


class TerminalSession:
    """Holds the current screen and last results; runs engine calls and exports for commands."""

    def __init__(self, settings: Settings, form: MortgageForm | None = None):
        self.settings = settings
        self.screen: Screen = EditingField(0)
        self.form = form or MortgageForm()
        self.params: InputParameters | None = None
        self.records: list[MonthlyRecord] = []
        self.summary: SummaryResult | None = None
        self.status = ""
        self.running = True

    def dispatch(self, key: str) -> None:
        step = handle_key(self.screen, self.form, key, row_count=len(self.records))
        self.screen = step.screen
        self.form = step.form

        if step.command is Command.QUIT:
            self.running = False
        elif step.command is Command.RECALCULATE:
            # Earlier fields may be confirmed before later ones parse; keep quiet until then.
            self._calculate(report_errors=False)
        elif step.command is Command.SHOW_RESULTS:
            if self._calculate(report_errors=True):
                self.screen = ViewingSpreadsheet(0)
        elif step.command is Command.EXPORT_SPREADSHEET:
            self._export(lambda: write_spreadsheet(self.records, self.settings.export_dir))
        elif step.command is Command.EXPORT_ANALYSIS:
            self._export(lambda: write_analysis(self.params, self.summary, self.settings.export_dir))

    def _calculate(self, report_errors: bool) -> bool:
        try:
            params = self.form.to_parameters(self.settings.cost_of_capital_rate)
            records = compute(params)
            summary = summarize(params, records)
        except CalculationError as exc:
            if report_errors:
                logger.warning("Calculation failed: %s", exc)
                self.status = f"Error: {exc}"
            return False
        self.params, self.records, self.summary = params, records, summary
        self.status = ""
        return True

    def _export(self, write) -> None:
        if self.summary is None:
            self.status = "Nothing to export yet."
            return
        try:
            path: Path = write()
        except OSError as exc:
            logger.warning("Export failed: %s", exc)
            self.status = f"Error exporting to CSV: {exc}"
            return
        self.status = f"Exported to {path}"


# -----------------------------
# Rendering
# -----------------------------
def _put(win, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if 0 <= y < height and x < width:
        win.addnstr(y, x, text, max(0, width - x - 1), attr)


def _render_field(win, session: TerminalSession, screen: EditingField) -> int:
    spec = screen.spec
    form = session.form
    _put(win, 2, 2, spec.title, curses.A_UNDERLINE)
    if spec.toggle:
        use_percent = form.uses_percent(spec)
        pct = getattr(form, f"{spec.key}_percent")
        amt = getattr(form, f"{spec.key}_amount")
        _put(win, 4, 4, f"{'>' if use_percent else ' '} {spec.percent_label}: {pct}%",
             curses.A_BOLD if use_percent else curses.A_DIM)
        _put(win, 5, 4, f"{'>' if not use_percent else ' '} {spec.amount_label}: ${amt}",
             curses.A_BOLD if not use_percent else curses.A_DIM)
        help_text = "Tab: toggle % / $ | Enter/l/->: continue | Esc/h/<-: back"
    else:
        unit = "%" if spec.key in {"interest_rate", "house_appreciation"} else ""
        prefix = "" if unit or spec.integer else "$"
        _put(win, 4, 4, f"{prefix}{form.text(spec)}{unit}", curses.A_BOLD)
        help_text = "Enter/l/->: continue | Esc/q: exit" if screen.index == 0 else "Enter/l/->: continue | Esc/h/<-: back"
    _put(win, 7, 2, help_text, curses.A_DIM)
    return 9


def _render_spreadsheet(win, session: TerminalSession, screen: ViewingSpreadsheet) -> int:
    height, _ = win.getmaxyx()
    x = 2
    for name, width, _fmt in SPREADSHEET_COLUMNS:
        _put(win, 2, x, name.rjust(width), curses.A_BOLD)
        x += width + 1

    visible = max(1, height - 6)
    selected = screen.scroll_offset
    top = max(0, min(selected - visible // 2, len(session.records) - visible))
    for row, rec in enumerate(session.records[top:top + visible]):
        attr = curses.A_REVERSE if top + row == selected else 0
        x = 2
        for _name, width, fmt in SPREADSHEET_COLUMNS:
            _put(win, 3 + row, x, fmt(rec).rjust(width), attr)
            x += width + 1

    _put(win, height - 2, 2, "j/k: navigate | g/G: top/bottom | s: summary | e: export CSV | h: back | q: quit", curses.A_DIM)
    return height - 3


def summary_lines(session: TerminalSession) -> list[str]:
    summary, params = session.summary, session.params
    if summary is None or params is None:
        return []
    payment = monthly_pi_payment(params.loan_amount, params.interest_rate_annual, params.term_years)
    return [
        f"Loan Amount:            ${params.loan_amount:,.2f}",
        f"Monthly P&I:            ${payment:,.2f}",
        f"Total Interest Paid:    ${summary.total_interest_paid:,.2f}",
        f"Total Principal Paid:   ${summary.total_principal_paid:,.2f}",
        f"Total Taxes Paid:       ${summary.total_taxes_paid:,.2f}",
        f"Total Insurance Paid:   ${summary.total_insurance_paid:,.2f}",
        f"Total Maintenance Paid: ${summary.total_maintenance_paid:,.2f}",
        f"Total PMI Paid:         ${summary.total_pmi_paid:,.2f}",
        f"Total HOA Paid:         ${summary.total_hoa_paid:,.2f}",
        f"Total Payments:         ${summary.total_payments:,.2f}",
        f"Total Cost of Capital:  ${summary.total_cost_of_capital:,.2f}",
        f"Waste Cost:             ${summary.waste_cost:,.2f}",
        f"Final House Value:      ${summary.final_house_value:,.2f}",
        f"Final Equity:           ${summary.final_equity:,.2f}",
        f"Months to Payoff:       {summary.months_to_payoff}",
        f"Effective Interest:     {summary.effective_interest_rate:.2%}",
    ]


def _render_summary(win, session: TerminalSession) -> int:
    lines = summary_lines(session)
    for i, line in enumerate(lines):
        _put(win, 2 + i, 4, line)
    _put(win, 3 + len(lines), 2, "e: export analysis CSV | h/<-: back | q: quit", curses.A_DIM)
    return 5 + len(lines)


def render(win, session: TerminalSession) -> None:
    win.erase()
    _put(win, 0, 2, TITLE, curses.A_BOLD)
    screen = session.screen
    if isinstance(screen, EditingField):
        status_row = _render_field(win, session, screen)
    elif isinstance(screen, ViewingSpreadsheet):
        status_row = _render_spreadsheet(win, session, screen)
    else:
        status_row = _render_summary(win, session)
    if session.status:
        _put(win, status_row, 2, session.status)
    win.refresh()


def _loop(stdscr, session: TerminalSession) -> None:
    curses.curs_set(0)
    stdscr.keypad(True)
    while session.running:
        render(stdscr, session)
        name = key_name(stdscr.getch())
        if name is not None:
            session.dispatch(name)


def main() -> int:
    load_dotenv()
    settings = load_settings()
    if settings.log_file is not None:
        logging.basicConfig(level=settings.log_level, filename=settings.log_file)
    else:
        # stderr would draw over the curses screen
        logging.basicConfig(level=settings.log_level, handlers=[logging.NullHandler()])

    session = TerminalSession(settings)
    curses.wrapper(_loop, session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
