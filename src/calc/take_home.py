from tax.IncomeTaxDetails import IncomeTaxDetails
from tax.SocialInsuranceDetails import SocialInsuranceDetails
from model.TaxResult import NetPayResult


class NetPayCalculator:
    """Calculator that computes annual take-home pay using injected detail providers.

    Pass hydrated instances of `IncomeTaxDetails` and `SocialInsuranceDetails`
    into the constructor. This keeps file I/O in the caller and makes the
    calculation logic easy to unit test.
    """

    def __init__(self, income_tax: IncomeTaxDetails, insurance: SocialInsuranceDetails):
        self.income_tax = income_tax
        self.insurance = insurance

    def calc_net_pay(self, gross_pay: float) -> NetPayResult:
        insurance = self.insurance.calc_insurance(gross_pay)
        # Simplified tax base: only the insurance premiums are deducted.
        # Earned income deductions and personal allowances are not modeled.
        taxable_income = gross_pay - insurance.total
        tax = self.income_tax.calc_income_tax(taxable_income)

        total_deductions = insurance.total + tax.total
        return NetPayResult(
            gross_pay=gross_pay,
            insurance=insurance,
            tax=tax,
            taxable_income=taxable_income,
            total_deductions=total_deductions,
            net_pay=gross_pay - insurance.total - tax.total
        )

    def marginal_deductions(self, base_income: float, extra_income: float) -> float:
        """Insurance plus tax attributable to extra_income stacked on top of base_income.

        Computed as deductions(base + extra) - deductions(base) so the
        progressive rates apply to the increment only.
        """
        base = self.calc_net_pay(base_income)
        combined = self.calc_net_pay(base_income + extra_income)
        return combined.total_deductions - base.total_deductions
