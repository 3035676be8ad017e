from mortgage.export import ANALYSIS_FILENAME, SPREADSHEET_FILENAME
from mortgage.form import FIELDS, MortgageForm
from mortgage.navigation import EditingField, ViewingSpreadsheet, ViewingSummary, last_field
from mortgage.terminal import TerminalSession, key_name, summary_lines


def _walk_form(session: TerminalSession) -> None:
    for _ in FIELDS:
        session.dispatch("enter")


def test_full_walkthrough_reaches_spreadsheet(settings):
    session = TerminalSession(settings)
    for char in "300000":
        session.dispatch(char)
    _walk_form(session)

    assert session.screen == ViewingSpreadsheet(0)
    assert len(session.records) == 360
    assert session.summary.months_to_payoff == 360
    assert session.status == ""


def test_invalid_form_stays_on_last_field(settings):
    session = TerminalSession(settings, MortgageForm(house_value="300000", down_payment_percent="100"))
    _walk_form(session)

    assert session.screen == last_field()
    assert session.status.startswith("Error:")
    assert session.summary is None


def test_runaway_appreciation_reports_error_instead_of_crashing(settings):
    session = TerminalSession(settings, MortgageForm(house_value="300000", house_appreciation="10000"))
    _walk_form(session)

    assert session.running
    assert session.screen == last_field()
    assert session.status.startswith("Error:")
    assert session.summary is None


def test_field_confirmation_recalculates(settings):
    session = TerminalSession(settings, MortgageForm(house_value="300000"))
    session.dispatch("enter")

    assert session.screen == EditingField(1)
    assert session.summary is not None


def test_exports_write_into_export_dir(settings):
    session = TerminalSession(settings, MortgageForm(house_value="300000"))
    _walk_form(session)

    session.dispatch("e")
    assert (settings.export_dir / SPREADSHEET_FILENAME).exists()
    assert session.status.startswith("Exported to")

    session.dispatch("s")
    assert isinstance(session.screen, ViewingSummary)
    session.dispatch("e")
    assert (settings.export_dir / ANALYSIS_FILENAME).exists()


def test_quit_stops_session(settings):
    session = TerminalSession(settings)
    session.dispatch("esc")
    assert not session.running


def test_summary_lines_after_calculation(settings):
    session = TerminalSession(settings, MortgageForm(house_value="300000"))
    assert summary_lines(session) == []

    _walk_form(session)
    lines = summary_lines(session)
    assert any(line.startswith("Months to Payoff:") and line.endswith("360") for line in lines)


def test_key_names():
    assert key_name(10) == "enter"
    assert key_name(9) == "tab"
    assert key_name(4) == "ctrl+d"
    assert key_name(ord("j")) == "j"
    assert key_name(0) is None
