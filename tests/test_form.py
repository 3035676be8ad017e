import pytest

from mortgage.errors import InvalidInput
from mortgage.form import FIELDS, MortgageForm
from mortgage.models import FixedAmount, Percentage

SPECS = {spec.key: spec for spec in FIELDS}


def _filled(**overrides) -> MortgageForm:
    values = {"house_value": "300000"}
    values.update(overrides)
    return MortgageForm(**values)


def test_field_order():
    assert [spec.key for spec in FIELDS] == [
        "house_value",
        "down_payment",
        "hoa_fee",
        "interest_rate",
        "property_tax",
        "insurance",
        "maintenance",
        "pmi",
        "house_appreciation",
        "loan_term",
        "extra_principal",
    ]


def test_defaults_parse_once_house_value_is_given():
    params = _filled().to_parameters()

    assert params.house_value == 300000.0
    assert params.down_payment == Percentage(20.0)
    assert params.interest_rate_annual == 6.5
    assert params.property_tax == Percentage(2.0)
    assert params.insurance == Percentage(0.35)
    assert params.maintenance == Percentage(1.0)
    assert params.pmi == Percentage(0.5)
    assert params.appreciation_rate_annual == 3.0
    assert params.term_years == 30
    assert params.extra_principal_monthly == 0.0
    assert params.cost_of_capital_rate_annual is None


def test_typing_appends_to_active_buffer():
    spec = SPECS["house_value"]
    form = MortgageForm()
    for char in "250000.5":
        form = form.typed(spec, char)

    assert form.text(spec) == "250000.5"
    assert form.backspaced(spec).text(spec) == "250000."


def test_rejected_characters_leave_form_unchanged():
    form = MortgageForm()
    assert form.typed(SPECS["house_value"], "x") == form
    assert form.typed(SPECS["house_value"], "-") == form
    assert form.typed(SPECS["loan_term"], ".") == form
    assert form.typed(SPECS["house_appreciation"], "-").house_appreciation == "3-"


def test_toggle_switches_buffer():
    spec = SPECS["down_payment"]
    form = MortgageForm().toggled(spec)

    assert not form.uses_percent(spec)
    assert form.text(spec) == ""
    form = form.typed(spec, "5").typed(spec, "0")
    assert form.down_payment_amount == "50"
    assert form.down_payment_percent == "20"


def test_toggle_ignored_on_plain_field():
    form = MortgageForm()
    assert form.toggled(SPECS["interest_rate"]) == form


def test_fixed_amount_toggle_reaches_parameters():
    spec = SPECS["property_tax"]
    form = _filled().toggled(spec)
    for char in "4800":
        form = form.typed(spec, char)

    assert form.to_parameters().property_tax == FixedAmount(4800.0)


def test_can_confirm_requires_text_except_hoa():
    form = MortgageForm(hoa_fee="")
    assert not form.can_confirm(SPECS["house_value"])
    assert form.can_confirm(SPECS["hoa_fee"])


def test_empty_hoa_means_zero():
    assert _filled(hoa_fee="").to_parameters().hoa_fee_monthly == 0.0


def test_unparseable_fields_are_all_reported():
    form = MortgageForm(house_value="", interest_rate="1.2.3")
    with pytest.raises(InvalidInput) as excinfo:
        form.to_parameters()

    assert len(excinfo.value.errors) == 2


def test_structural_errors_surface_as_invalid_input():
    with pytest.raises(InvalidInput):
        _filled(down_payment_percent="100").to_parameters()


def test_cost_of_capital_rate_passed_through():
    assert _filled().to_parameters(7.0).cost_of_capital_rate_annual == 7.0


def test_overlong_number_is_rejected_not_infinite():
    with pytest.raises(InvalidInput) as excinfo:
        _filled(house_value="9" * 400).to_parameters()

    assert excinfo.value.errors == ["House value must be a finite number."]


def test_overlong_loan_term_is_rejected():
    with pytest.raises(InvalidInput):
        _filled(loan_term="9" * 40).to_parameters()
