from .models import InputParameters


def compute_costs_monthly(params: InputParameters, house_value_at_month: float) -> dict:
    """
    Normalize the recurring carrying costs to monthly dollars for one month.

    Property tax, insurance and maintenance are annual figures. When given as a
    percentage they track the appreciated house value, otherwise they stay at
    the fixed dollar amount. HOA is already monthly.
    """
    return {
        "property_tax_monthly": params.property_tax.resolve(house_value_at_month) / 12.0,
        "home_insurance_monthly": params.insurance.resolve(house_value_at_month) / 12.0,
        "maintenance_monthly": params.maintenance.resolve(house_value_at_month) / 12.0,
        "hoa_monthly": params.hoa_fee_monthly,
    }


def pmi_monthly(params: InputParameters) -> float:
    # PMI percentage is quoted against the original loan amount, per year
    return params.pmi_annual_amount / 12.0
