from __future__ import annotations

import math
from dataclasses import dataclass, field

from .errors import InvalidInput


# -----------------------------
# Percent / dollar toggles
# -----------------------------
@dataclass(frozen=True)
class Percentage:
    value: float  # percent points, 6.5 means 6.5%

    is_percentage = True

    def resolve(self, basis: float) -> float:
        return basis * (self.value / 100.0)

    def describe(self) -> str:
        return f"{self.value:.2f}%"


@dataclass(frozen=True)
class FixedAmount:
    value: float  # dollars

    is_percentage = False

    def resolve(self, basis: float) -> float:
        return self.value

    def describe(self) -> str:
        return f"{self.value:.2f}"


CostBasis = Percentage | FixedAmount

MAX_TERM_YEARS = 100


# -----------------------------
# Calculation inputs
# -----------------------------
@dataclass(frozen=True)
class InputParameters:
    house_value: float
    down_payment: CostBasis
    hoa_fee_monthly: float
    interest_rate_annual: float  # percent
    property_tax: CostBasis  # annual, percent of house value
    insurance: CostBasis  # annual, percent of house value
    maintenance: CostBasis  # annual, percent of house value
    pmi: CostBasis  # annual, percent of loan amount
    appreciation_rate_annual: float  # percent, may be negative
    term_years: int
    extra_principal_monthly: float

    # Alternative-investment return used for cost of capital; None means the mortgage rate.
    cost_of_capital_rate_annual: float | None = None

    down_payment_amount: float = field(init=False)
    loan_amount: float = field(init=False)

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise InvalidInput(errors)

        down_payment_amount = self.down_payment.resolve(self.house_value)
        loan_amount = self.house_value - down_payment_amount
        if down_payment_amount >= self.house_value or loan_amount <= 0:
            raise InvalidInput("Down payment must be less than the house value.")

        # frozen dataclass: derived fields are set once here
        object.__setattr__(self, "down_payment_amount", down_payment_amount)
        object.__setattr__(self, "loan_amount", loan_amount)

    def validate(self) -> list[str]:
        errors = []
        for label, value in (
            ("House value", self.house_value),
            ("Down payment", self.down_payment.value),
            ("HOA fee", self.hoa_fee_monthly),
            ("Interest rate", self.interest_rate_annual),
            ("Property tax", self.property_tax.value),
            ("Insurance", self.insurance.value),
            ("Maintenance", self.maintenance.value),
            ("PMI", self.pmi.value),
            ("Appreciation rate", self.appreciation_rate_annual),
            ("Extra principal payment", self.extra_principal_monthly),
            ("Cost of capital rate", self.cost_of_capital_rate_annual),
        ):
            if value is not None and not math.isfinite(value):
                errors.append(f"{label} must be a finite number.")
        if errors:
            return errors

        if self.house_value <= 0:
            errors.append("House value must be greater than zero.")
        if self.down_payment.value < 0:
            errors.append("Down payment cannot be negative.")
        if self.hoa_fee_monthly < 0:
            errors.append("HOA fee cannot be negative.")
        if self.interest_rate_annual < 0:
            errors.append("Interest rate cannot be negative.")
        for label, basis in (
            ("Property tax", self.property_tax),
            ("Insurance", self.insurance),
            ("Maintenance", self.maintenance),
            ("PMI", self.pmi),
        ):
            if basis.value < 0:
                errors.append(f"{label} cannot be negative.")
        if self.appreciation_rate_annual <= -1200.0:
            errors.append("Appreciation rate must be greater than -1200%.")
        if isinstance(self.term_years, bool) or not isinstance(self.term_years, int):
            errors.append("Loan term must be a whole number of years.")
        elif self.term_years <= 0:
            errors.append("Loan term must be at least one year.")
        elif self.term_years > MAX_TERM_YEARS:
            errors.append(f"Loan term cannot exceed {MAX_TERM_YEARS} years.")
        if self.extra_principal_monthly < 0:
            errors.append("Extra principal payment cannot be negative.")
        if self.cost_of_capital_rate_annual is not None and self.cost_of_capital_rate_annual < 0:
            errors.append("Cost of capital rate cannot be negative.")
        return errors

    @property
    def term_months(self) -> int:
        return self.term_years * 12

    @property
    def pmi_annual_amount(self) -> float:
        return self.pmi.resolve(self.loan_amount)

    @property
    def effective_cost_of_capital_rate(self) -> float:
        if self.cost_of_capital_rate_annual is None:
            return self.interest_rate_annual
        return self.cost_of_capital_rate_annual


# -----------------------------
# Calculation outputs
# -----------------------------
@dataclass(frozen=True)
class MonthlyRecord:
    month_index: int
    interest_portion: float
    principal_portion: float
    extra_principal_applied: float
    remaining_balance: float
    pmi_charged: float
    taxes: float
    insurance_cost: float
    maintenance_cost: float
    hoa_fee: float
    house_value_at_month: float
    actual_payment: float
    cost_of_capital_this_month: float
    equity_at_month: float

    @property
    def waste_cost(self) -> float:
        """Everything paid this month that does not build equity, plus cost of capital."""
        return (
                self.interest_portion
                + self.pmi_charged
                + self.taxes
                + self.insurance_cost
                + self.maintenance_cost
                + self.hoa_fee
                + self.cost_of_capital_this_month
        )

    @property
    def equity_share(self) -> float:
        if self.house_value_at_month <= 0:
            return 0.0
        return self.equity_at_month / self.house_value_at_month


@dataclass(frozen=True)
class SummaryResult:
    total_interest_paid: float
    total_principal_paid: float
    total_pmi_paid: float
    total_taxes_paid: float
    total_insurance_paid: float
    total_maintenance_paid: float
    total_hoa_paid: float
    total_cost_of_capital: float
    waste_cost: float
    final_equity: float
    months_to_payoff: int
    final_house_value: float

    total_payments: float
    effective_interest_rate: float
