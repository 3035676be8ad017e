"""Text-buffer input form shared by the keyboard front end.

Each field keeps the raw characters typed so far. Fields that can be entered
either as a percentage or as a dollar amount keep one buffer per unit plus a
flag saying which one is active.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .errors import InvalidInput
from .models import FixedAmount, InputParameters, Percentage


@dataclass(frozen=True)
class FieldSpec:
    key: str
    title: str
    toggle: bool = False
    percent_label: str = "Percentage"
    amount_label: str = "Dollar Amount"
    allow_negative: bool = False
    integer: bool = False
    optional: bool = False


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("house_value", "What is the value of the house you're considering buying?"),
    FieldSpec("down_payment", "Down Payment", toggle=True),
    FieldSpec("hoa_fee", "What is the monthly HOA fee? (0 if none)", optional=True),
    FieldSpec("interest_rate", "What is your expected interest rate? (%)"),
    FieldSpec(
        "property_tax",
        "Property Tax",
        toggle=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    FieldSpec(
        "insurance",
        "Home Insurance",
        toggle=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    FieldSpec(
        "maintenance",
        "Maintenance & Repairs",
        toggle=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    FieldSpec(
        "pmi",
        "PMI (charged while equity is below 20%)",
        toggle=True,
        percent_label="Annual Percentage of Loan Amount",
        amount_label="Fixed Annual Amount",
    ),
    FieldSpec("house_appreciation", "Expected annual house appreciation rate? (%)", allow_negative=True),
    FieldSpec("loan_term", "Loan term in years?", integer=True),
    FieldSpec("extra_principal", "Extra principal payment each month? (0 if none)"),
)


@dataclass(frozen=True)
class MortgageForm:
    house_value: str = ""
    down_payment_percent: str = "20"
    down_payment_amount: str = ""
    use_down_payment_percent: bool = True
    hoa_fee: str = "0"
    interest_rate: str = "6.5"
    property_tax_percent: str = "2"
    property_tax_amount: str = ""
    use_property_tax_percent: bool = True
    insurance_percent: str = "0.35"
    insurance_amount: str = ""
    use_insurance_percent: bool = True
    maintenance_percent: str = "1"
    maintenance_amount: str = ""
    use_maintenance_percent: bool = True
    pmi_percent: str = "0.5"
    pmi_amount: str = ""
    use_pmi_percent: bool = True
    house_appreciation: str = "3"
    loan_term: str = "30"
    extra_principal: str = "0"

    # ---- per-field buffer access ----
    def uses_percent(self, spec: FieldSpec) -> bool:
        return spec.toggle and getattr(self, f"use_{spec.key}_percent")

    def _buffer_name(self, spec: FieldSpec) -> str:
        if not spec.toggle:
            return spec.key
        return f"{spec.key}_percent" if self.uses_percent(spec) else f"{spec.key}_amount"

    def text(self, spec: FieldSpec) -> str:
        return getattr(self, self._buffer_name(spec))

    def accepts(self, spec: FieldSpec, char: str) -> bool:
        if char.isdigit():
            return True
        if spec.integer:
            return False
        if char == ".":
            return True
        return spec.allow_negative and char == "-"

    def typed(self, spec: FieldSpec, char: str) -> MortgageForm:
        if not self.accepts(spec, char):
            return self
        return replace(self, **{self._buffer_name(spec): self.text(spec) + char})

    def backspaced(self, spec: FieldSpec) -> MortgageForm:
        return replace(self, **{self._buffer_name(spec): self.text(spec)[:-1]})

    def toggled(self, spec: FieldSpec) -> MortgageForm:
        if not spec.toggle:
            return self
        flag = f"use_{spec.key}_percent"
        return replace(self, **{flag: not getattr(self, flag)})

    def can_confirm(self, spec: FieldSpec) -> bool:
        return spec.optional or bool(self.text(spec))

    # ---- conversion ----
    def to_parameters(self, cost_of_capital_rate: float | None = None) -> InputParameters:
        """Parse every buffer; raise InvalidInput listing each unparseable field."""
        errors: list[str] = []
        values = {}
        for spec in FIELDS:
            raw = self.text(spec).strip()
            if not raw and spec.optional:
                raw = "0"
            try:
                number = int(raw) if spec.integer else float(raw)
            except ValueError:
                errors.append(f"{spec.title}: '{raw}' is not a valid number.")
                continue
            if spec.toggle:
                number = Percentage(number) if self.uses_percent(spec) else FixedAmount(number)
            values[spec.key] = number

        if errors:
            raise InvalidInput(errors)

        return InputParameters(
            house_value=values["house_value"],
            down_payment=values["down_payment"],
            hoa_fee_monthly=values["hoa_fee"],
            interest_rate_annual=values["interest_rate"],
            property_tax=values["property_tax"],
            insurance=values["insurance"],
            maintenance=values["maintenance"],
            pmi=values["pmi"],
            appreciation_rate_annual=values["house_appreciation"],
            term_years=values["loan_term"],
            extra_principal_monthly=values["extra_principal"],
            cost_of_capital_rate_annual=cost_of_capital_rate,
        )
