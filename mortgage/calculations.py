import logging
import math
from datetime import date

import pandas as pd

from .costs import compute_costs_monthly, pmi_monthly
from .errors import NonConverging
from .models import InputParameters, MonthlyRecord

logger = logging.getLogger(__name__)

PMI_EQUITY_THRESHOLD = 0.20

_EPS = 1e-6  # residual balance treated as paid off

SCHEDULE_COLUMNS = [
    "month",
    "interest",
    "principal",
    "extra_principal",
    "remaining_balance",
    "pmi",
    "taxes",
    "insurance",
    "maintenance",
    "hoa",
    "house_value",
    "actual_payment",
    "cost_of_capital",
    "equity",
]


def monthly_pi_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Standard fixed-rate amortization payment:
      M = P * r / (1 - (1+r)^-n)
    where r = annual_rate/12, n = years*12.

    Equivalent to P * [ r(1+r)^n / ((1+r)^n - 1) ]; the negative power
    underflows to zero for extreme rates where the positive one overflows.
    """
    if principal <= 0:
        return 0.0
    n = term_years * 12
    r = (annual_rate_pct / 100.0) / 12.0
    if r == 0:
        return principal / n
    return principal * r / (1 - (1 + r) ** -n)


def compute(params: InputParameters) -> list[MonthlyRecord]:
    """
    Month-by-month schedule for the full term, or until extra principal pays
    the loan off early.

    Raises NonConverging when the scheduled payment stops covering interest.
    """
    r = (params.interest_rate_annual / 100.0) / 12.0
    appreciation = (params.appreciation_rate_annual / 100.0) / 12.0
    coc_rate = (params.effective_cost_of_capital_rate / 100.0) / 12.0

    payment = monthly_pi_payment(params.loan_amount, params.interest_rate_annual, params.term_years)
    pmi_cost = pmi_monthly(params)

    records: list[MonthlyRecord] = []
    bal = params.loan_amount
    invested = params.down_payment_amount
    pmi_cancelled = False

    for m in range(1, params.term_months + 1):
        interest = bal * r
        principal_paid = payment - interest
        if not principal_paid > 0:
            raise NonConverging(
                f"Month {m}: payment ${payment:,.2f} does not cover interest ${interest:,.2f}."
            )

        # Last scheduled month or scheduled principal clears the loan: clamp to balance.
        if m == params.term_months or principal_paid >= bal - _EPS:
            principal_paid = bal
            extra = 0.0
            final = True
        else:
            extra = max(0.0, min(params.extra_principal_monthly, bal - principal_paid))
            final = bal - principal_paid - extra <= _EPS
            if final:
                extra = bal - principal_paid

        cost_of_capital = invested * coc_rate

        bal = 0.0 if final else bal - (principal_paid + extra)
        invested += principal_paid + extra

        try:
            house_value = params.house_value * (1 + appreciation) ** m
        except OverflowError:
            house_value = math.inf
        if not math.isfinite(house_value) or house_value <= 0:
            raise NonConverging(
                f"Month {m}: house value leaves the representable range at "
                f"{params.appreciation_rate_annual:g}% annual appreciation."
            )
        equity = house_value - bal

        if not pmi_cancelled and equity / house_value >= PMI_EQUITY_THRESHOLD:
            pmi_cancelled = True
        pmi = 0.0 if pmi_cancelled else pmi_cost

        costs = compute_costs_monthly(params, house_value)
        taxes = costs["property_tax_monthly"]
        insurance = costs["home_insurance_monthly"]
        maintenance = costs["maintenance_monthly"]
        hoa = costs["hoa_monthly"]

        actual_payment = (
                principal_paid
                + interest
                + extra
                + pmi
                + taxes
                + insurance
                + maintenance
                + hoa
        )

        records.append(MonthlyRecord(
            month_index=m,
            interest_portion=interest,
            principal_portion=principal_paid,
            extra_principal_applied=extra,
            remaining_balance=bal,
            pmi_charged=pmi,
            taxes=taxes,
            insurance_cost=insurance,
            maintenance_cost=maintenance,
            hoa_fee=hoa,
            house_value_at_month=house_value,
            actual_payment=actual_payment,
            cost_of_capital_this_month=cost_of_capital,
            equity_at_month=equity,
        ))

        if final:
            break

    logger.debug(
        "Computed %d month schedule for loan $%.2f at %.3f%% (payment $%.2f)",
        len(records),
        params.loan_amount,
        params.interest_rate_annual,
        payment,
    )
    return records


def schedule_frame(records: list[MonthlyRecord]) -> pd.DataFrame:
    """Tabular view of the schedule, one row per month, in export column order."""
    rows = [
        {
            "month": rec.month_index,
            "interest": rec.interest_portion,
            "principal": rec.principal_portion,
            "extra_principal": rec.extra_principal_applied,
            "remaining_balance": rec.remaining_balance,
            "pmi": rec.pmi_charged,
            "taxes": rec.taxes,
            "insurance": rec.insurance_cost,
            "maintenance": rec.maintenance_cost,
            "hoa": rec.hoa_fee,
            "house_value": rec.house_value_at_month,
            "actual_payment": rec.actual_payment,
            "cost_of_capital": rec.cost_of_capital_this_month,
            "equity": rec.equity_at_month,
        }
        for rec in records
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def payoff_date(start_year: int, start_month: int, months_to_payoff: int) -> str:
    # payoff month is start + n-1 months (display only)
    y = start_year
    m = start_month
    m_total = (y * 12 + (m - 1)) + (months_to_payoff - 1)
    y2 = m_total // 12
    m2 = (m_total % 12) + 1
    return date(y2, m2, 1).strftime("%b. %Y")
