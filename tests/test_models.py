import math

import pytest

from mortgage.errors import CalculationError, InvalidInput
from mortgage.models import FixedAmount, MonthlyRecord, Percentage
from tests.helpers import make_params


def test_percentage_resolves_against_basis():
    assert Percentage(2.0).resolve(300000.0) == pytest.approx(6000.0)
    assert Percentage(2.0).is_percentage


def test_fixed_amount_ignores_basis():
    assert FixedAmount(1500.0).resolve(300000.0) == 1500.0
    assert FixedAmount(1500.0).resolve(1.0) == 1500.0
    assert not FixedAmount(1500.0).is_percentage


def test_down_payment_percentage_resolved_at_construction():
    params = make_params(down_payment=Percentage(20.0))

    assert params.down_payment_amount == pytest.approx(60000.0)
    assert params.loan_amount == pytest.approx(240000.0)
    assert params.term_months == 360


def test_down_payment_fixed_amount():
    params = make_params(down_payment=FixedAmount(45000.0))

    assert params.down_payment_amount == 45000.0
    assert params.loan_amount == 255000.0


def test_pmi_percentage_is_against_loan_amount():
    params = make_params(down_payment=Percentage(10.0), pmi=Percentage(0.5))
    assert params.pmi_annual_amount == pytest.approx(270000.0 * 0.005)


def test_cost_of_capital_rate_defaults_to_mortgage_rate():
    assert make_params().effective_cost_of_capital_rate == 6.0
    assert make_params(cost_of_capital_rate_annual=8.0).effective_cost_of_capital_rate == 8.0


def test_params_are_immutable():
    params = make_params()
    with pytest.raises(AttributeError):
        params.house_value = 1.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"house_value": 0.0},
        {"down_payment": Percentage(100.0)},
        {"down_payment": FixedAmount(300000.0)},
        {"down_payment": FixedAmount(350000.0)},
        {"down_payment": Percentage(-5.0)},
        {"hoa_fee_monthly": -1.0},
        {"interest_rate_annual": -0.5},
        {"property_tax": Percentage(-1.0)},
        {"insurance": FixedAmount(-10.0)},
        {"maintenance": Percentage(-1.0)},
        {"pmi": FixedAmount(-1.0)},
        {"term_years": 0},
        {"term_years": -5},
        {"term_years": 2.5},
        {"term_years": 101},
        {"extra_principal_monthly": -100.0},
        {"appreciation_rate_annual": -1200.0},
        {"cost_of_capital_rate_annual": -1.0},
        {"house_value": math.inf},
        {"interest_rate_annual": math.nan},
        {"appreciation_rate_annual": math.inf},
        {"property_tax": FixedAmount(math.inf)},
        {"cost_of_capital_rate_annual": math.nan},
    ],
)
def test_invalid_inputs_are_rejected(overrides):
    with pytest.raises(InvalidInput):
        make_params(**overrides)


def test_invalid_input_collects_every_problem():
    with pytest.raises(InvalidInput) as excinfo:
        make_params(hoa_fee_monthly=-1.0, interest_rate_annual=-1.0, term_years=0)

    assert len(excinfo.value.errors) == 3
    assert isinstance(excinfo.value, CalculationError)


def test_negative_appreciation_is_allowed():
    assert make_params(appreciation_rate_annual=-4.0).appreciation_rate_annual == -4.0


def test_equity_share_of_worthless_house_is_zero():
    record = MonthlyRecord(
        month_index=1,
        interest_portion=0.0,
        principal_portion=0.0,
        extra_principal_applied=0.0,
        remaining_balance=1000.0,
        pmi_charged=0.0,
        taxes=0.0,
        insurance_cost=0.0,
        maintenance_cost=0.0,
        hoa_fee=0.0,
        house_value_at_month=0.0,
        actual_payment=0.0,
        cost_of_capital_this_month=0.0,
        equity_at_month=-1000.0,
    )
    assert record.equity_share == 0.0
