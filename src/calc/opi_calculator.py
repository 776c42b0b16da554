import math

from calc.take_home import NetPayCalculator
from model.RewardData import RewardParams, RewardResult


def divide(numerator: float, denominator: float) -> float:
    """Float division that returns nan or a signed inf for a zero denominator instead of raising."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


class OPIRewardCalculator:
    """Calculator for a single OPI stock-ratio election.

    Splits the OPI payout into cash and stock, adds the additional benefit
    on the stock portion, converts it to whole shares at the base price, and
    attributes tax to the OPI by marginal differencing against salary alone:
    - Shares are floored; the fractional shortfall is paid as cash
    - Taxable OPI income is the payout plus the additional benefit
    - Price appreciation between grant and the future price is not taxed
    """

    def __init__(self, net_pay_calculator: NetPayCalculator, additional_benefit_rate: float = 0.15):
        """Initialize with the net pay calculator used for tax attribution.

        Args:
            net_pay_calculator: Computes insurance and tax on an annual gross pay.
            additional_benefit_rate: Uplift on the stock election (e.g., 0.15 for 15%).
        """
        self.net_pay_calculator = net_pay_calculator
        self.additional_benefit_rate = additional_benefit_rate

    def break_even_price(self, base_stock_price: float) -> float:
        """Future price at which the extra shares exactly offset a price decline."""
        rate = self.additional_benefit_rate
        return base_stock_price * (1 - rate / (1 + rate))

    def calc_reward(self, params: RewardParams) -> RewardResult:
        annual_salary = params.annual_salary

        opi_amount = annual_salary * (params.opi_rate / 100)
        stock_reward_amount = opi_amount * (params.stock_ratio / 100)
        cash_amount_gross = opi_amount - stock_reward_amount

        additional_benefit = stock_reward_amount * self.additional_benefit_rate
        total_stock_reward = stock_reward_amount + additional_benefit

        # Whole shares only; a nan or inf quotient is carried through unfloored
        quotient = divide(total_stock_reward, params.base_stock_price)
        stock_count = math.floor(quotient) if math.isfinite(quotient) else quotient
        remainder = total_stock_reward - (stock_count * params.base_stock_price)
        future_stock_value = stock_count * params.future_stock_price

        # OPI tax is the extra insurance and income tax over salary alone
        salary_only_tax = self.net_pay_calculator.calc_net_pay(annual_salary)
        opi_taxable_income = opi_amount + additional_benefit
        total_tax = self.net_pay_calculator.calc_net_pay(annual_salary + opi_taxable_income)
        opi_tax_amount = total_tax.total_deductions - salary_only_tax.total_deductions

        gross_total = cash_amount_gross + future_stock_value + remainder
        total_received = gross_total - opi_tax_amount

        # Baseline: the whole OPI taken in cash
        all_cash_tax = self.net_pay_calculator.calc_net_pay(annual_salary + opi_amount)
        all_cash_opi_tax = all_cash_tax.total_deductions - salary_only_tax.total_deductions
        all_cash_net = opi_amount - all_cash_opi_tax

        return RewardResult(
            stock_ratio=params.stock_ratio,
            opi_rate=params.opi_rate,
            opi_amount=opi_amount,
            stock_reward_amount=stock_reward_amount,
            additional_benefit=additional_benefit,
            total_stock_reward=total_stock_reward,
            stock_count=stock_count,
            remainder=remainder,
            future_stock_value=future_stock_value,
            cash_amount_gross=cash_amount_gross,
            opi_taxable_income=opi_taxable_income,
            opi_tax_amount=opi_tax_amount,
            salary_only_tax=salary_only_tax,
            total_tax=total_tax,
            gross_total=gross_total,
            total_received=total_received,
            all_cash_net=all_cash_net,
            vs_all_cash=total_received - all_cash_net
        )
