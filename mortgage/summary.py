from .errors import InvalidInput
from .models import InputParameters, MonthlyRecord, SummaryResult


def summarize(params: InputParameters, records: list[MonthlyRecord]) -> SummaryResult:
    """Whole-run totals over a computed schedule plus its terminal values."""
    if not records:
        raise InvalidInput("Cannot summarize an empty schedule.")

    total_interest = 0.0
    total_principal = 0.0
    total_pmi = 0.0
    total_taxes = 0.0
    total_insurance = 0.0
    total_maintenance = 0.0
    total_hoa = 0.0
    total_coc = 0.0
    total_payments = 0.0

    for rec in records:
        total_interest += rec.interest_portion
        total_principal += rec.principal_portion + rec.extra_principal_applied
        total_pmi += rec.pmi_charged
        total_taxes += rec.taxes
        total_insurance += rec.insurance_cost
        total_maintenance += rec.maintenance_cost
        total_hoa += rec.hoa_fee
        total_coc += rec.cost_of_capital_this_month
        total_payments += rec.actual_payment

    waste_cost = (
            total_interest
            + total_pmi
            + total_taxes
            + total_insurance
            + total_maintenance
            + total_hoa
            + total_coc
    )

    last = records[-1]
    months = len(records)
    effective_rate = (total_interest / total_principal) * (12.0 / months) if total_principal > 0 else 0.0

    return SummaryResult(
        total_interest_paid=total_interest,
        total_principal_paid=total_principal,
        total_pmi_paid=total_pmi,
        total_taxes_paid=total_taxes,
        total_insurance_paid=total_insurance,
        total_maintenance_paid=total_maintenance,
        total_hoa_paid=total_hoa,
        total_cost_of_capital=total_coc,
        waste_cost=waste_cost,
        final_equity=last.equity_at_month,
        months_to_payoff=months,
        final_house_value=last.house_value_at_month,
        total_payments=total_payments,
        effective_interest_rate=effective_rate,
    )
