"""CSV export of a computed run: the monthly spreadsheet and the analysis sheet."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from .calculations import schedule_frame
from .models import InputParameters, MonthlyRecord, SummaryResult

logger = logging.getLogger(__name__)

SPREADSHEET_FILENAME = "mortgage_spreadsheet.csv"
ANALYSIS_FILENAME = "mortgage_analysis.csv"


def spreadsheet_csv(records: list[MonthlyRecord]) -> str:
    df = schedule_frame(records)
    return df.to_csv(index=False, float_format="%.2f", lineterminator="\n")


def _parameter_rows(params: InputParameters) -> list[list[str]]:
    return [
        ["house_value", f"{params.house_value:.2f}"],
        ["down_payment", params.down_payment.describe()],
        ["down_payment_amount", f"{params.down_payment_amount:.2f}"],
        ["loan_amount", f"{params.loan_amount:.2f}"],
        ["hoa_fee_monthly", f"{params.hoa_fee_monthly:.2f}"],
        ["interest_rate_annual", f"{params.interest_rate_annual:.2f}%"],
        ["property_tax", params.property_tax.describe()],
        ["insurance", params.insurance.describe()],
        ["maintenance", params.maintenance.describe()],
        ["pmi", params.pmi.describe()],
        ["appreciation_rate_annual", f"{params.appreciation_rate_annual:.2f}%"],
        ["term_years", str(params.term_years)],
        ["extra_principal_monthly", f"{params.extra_principal_monthly:.2f}"],
        ["cost_of_capital_rate_annual", f"{params.effective_cost_of_capital_rate:.2f}%"],
    ]


def _summary_rows(summary: SummaryResult) -> list[list[str]]:
    return [
        ["total_interest_paid", f"{summary.total_interest_paid:.2f}"],
        ["total_principal_paid", f"{summary.total_principal_paid:.2f}"],
        ["total_pmi_paid", f"{summary.total_pmi_paid:.2f}"],
        ["total_taxes_paid", f"{summary.total_taxes_paid:.2f}"],
        ["total_insurance_paid", f"{summary.total_insurance_paid:.2f}"],
        ["total_maintenance_paid", f"{summary.total_maintenance_paid:.2f}"],
        ["total_hoa_paid", f"{summary.total_hoa_paid:.2f}"],
        ["total_cost_of_capital", f"{summary.total_cost_of_capital:.2f}"],
        ["waste_cost", f"{summary.waste_cost:.2f}"],
        ["final_equity", f"{summary.final_equity:.2f}"],
        ["months_to_payoff", str(summary.months_to_payoff)],
        ["final_house_value", f"{summary.final_house_value:.2f}"],
        ["total_payments", f"{summary.total_payments:.2f}"],
        ["effective_interest_rate", f"{summary.effective_interest_rate:.4f}"],
    ]


def analysis_csv(params: InputParameters, summary: SummaryResult) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(_parameter_rows(params))
    writer.writerow([])
    writer.writerows(_summary_rows(summary))
    return buf.getvalue()


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.info("Exported %s", path)
    return path


def write_spreadsheet(records: list[MonthlyRecord], directory: Path | str = ".") -> Path:
    return _write(Path(directory) / SPREADSHEET_FILENAME, spreadsheet_csv(records))


def write_analysis(params: InputParameters, summary: SummaryResult, directory: Path | str = ".") -> Path:
    return _write(Path(directory) / ANALYSIS_FILENAME, analysis_csv(params, summary))
