import csv

from mortgage.calculations import compute
from mortgage.export import (
    ANALYSIS_FILENAME,
    SPREADSHEET_FILENAME,
    analysis_csv,
    spreadsheet_csv,
    write_analysis,
    write_spreadsheet,
)
from mortgage.summary import summarize
from tests.helpers import full_cost_params, make_params

HEADER = (
    "month,interest,principal,extra_principal,remaining_balance,pmi,taxes,insurance,"
    "maintenance,hoa,house_value,actual_payment,cost_of_capital,equity"
)


def test_spreadsheet_header_and_row_count():
    records = compute(make_params(term_years=2))
    lines = spreadsheet_csv(records).splitlines()

    assert lines[0] == HEADER
    assert len(lines) == 1 + 24


def test_spreadsheet_rows_use_two_decimals():
    records = compute(make_params())
    first = spreadsheet_csv(records).splitlines()[1].split(",")

    assert first[0] == "1"
    assert first[1] == "1200.00"
    assert first[2] == f"{records[0].principal_portion:.2f}"
    assert all(len(cell.split(".")[1]) == 2 for cell in first[1:])

    last = spreadsheet_csv(records).splitlines()[-1].split(",")
    assert last[0] == "360"
    assert last[4] == "0.00"


def test_analysis_has_parameters_blank_row_then_summary():
    params = full_cost_params()
    records = compute(params)
    summary = summarize(params, records)

    rows = list(csv.reader(analysis_csv(params, summary).splitlines()))
    blank = rows.index([])
    inputs = dict(rows[:blank])
    results = rows[blank + 1:]

    assert inputs["house_value"] == "400000.00"
    assert inputs["down_payment"] == "10.00%"
    assert inputs["loan_amount"] == "360000.00"
    assert inputs["maintenance"] == "3000.00"
    assert inputs["term_years"] == "30"

    names = [name for name, _ in results]
    assert names[:12] == [
        "total_interest_paid",
        "total_principal_paid",
        "total_pmi_paid",
        "total_taxes_paid",
        "total_insurance_paid",
        "total_maintenance_paid",
        "total_hoa_paid",
        "total_cost_of_capital",
        "waste_cost",
        "final_equity",
        "months_to_payoff",
        "final_house_value",
    ]
    values = dict(results)
    assert values["months_to_payoff"] == str(len(records))
    assert values["total_interest_paid"] == f"{summary.total_interest_paid:.2f}"


def test_write_files_to_directory(tmp_path):
    params = make_params(term_years=5)
    records = compute(params)
    summary = summarize(params, records)

    sheet = write_spreadsheet(records, tmp_path / "out")
    analysis = write_analysis(params, summary, tmp_path / "out")

    assert sheet == tmp_path / "out" / SPREADSHEET_FILENAME
    assert analysis == tmp_path / "out" / ANALYSIS_FILENAME
    assert sheet.read_text(encoding="utf-8").splitlines()[0] == HEADER
    assert "months_to_payoff,60" in analysis.read_text(encoding="utf-8")
