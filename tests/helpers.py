from mortgage.models import FixedAmount, InputParameters, Percentage


def make_params(**overrides) -> InputParameters:
    """$300k house, 20% down, 6% for 30 years, every other cost zero."""
    values = dict(
        house_value=300000.0,
        down_payment=Percentage(20.0),
        hoa_fee_monthly=0.0,
        interest_rate_annual=6.0,
        property_tax=FixedAmount(0.0),
        insurance=FixedAmount(0.0),
        maintenance=FixedAmount(0.0),
        pmi=FixedAmount(0.0),
        appreciation_rate_annual=0.0,
        term_years=30,
        extra_principal_monthly=0.0,
    )
    values.update(overrides)
    return InputParameters(**values)


def full_cost_params(**overrides) -> InputParameters:
    values = dict(
        house_value=400000.0,
        down_payment=Percentage(10.0),
        hoa_fee_monthly=150.0,
        interest_rate_annual=6.5,
        property_tax=Percentage(2.0),
        insurance=Percentage(0.35),
        maintenance=FixedAmount(3000.0),
        pmi=Percentage(0.5),
        appreciation_rate_annual=3.0,
        term_years=30,
        extra_principal_monthly=100.0,
    )
    values.update(overrides)
    return make_params(**values)
