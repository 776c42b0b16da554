from calc.opi_calculator import OPIRewardCalculator, divide
from calc.take_home import NetPayCalculator
from model.RewardData import AllCashOutcome, ComparisonResult, RewardParams, StockOutcome


class TaxComparisonCalculator:
    """Compares taking the whole OPI in cash against the stock election in params.

    The break-even price uses the same benefit rate as the share allocation.
    """

    def __init__(self, reward_calculator: OPIRewardCalculator, net_pay_calculator: NetPayCalculator):
        self.reward_calculator = reward_calculator
        self.net_pay_calculator = net_pay_calculator

    def compare_tax_impact(self, params: RewardParams) -> ComparisonResult:
        opi_amount = params.annual_salary * (params.opi_rate / 100)

        # Case 1: 100% cash, taxed at the marginal rate over salary
        opi_marginal_tax = self.net_pay_calculator.marginal_deductions(params.annual_salary, opi_amount)
        all_cash_net_amount = opi_amount - opi_marginal_tax
        all_cash = AllCashOutcome(
            gross_amount=opi_amount,
            taxable_income=opi_amount,
            tax=opi_marginal_tax,
            net_amount=all_cash_net_amount,
            future_value=all_cash_net_amount
        )

        # Case 2: the election in params
        stock_result = self.reward_calculator.calc_reward(params)
        with_stock = StockOutcome(
            gross_amount=opi_amount,
            additional_benefit=stock_result.additional_benefit,
            taxable_income=stock_result.opi_taxable_income,
            tax=stock_result.opi_tax_amount,
            stock_count=stock_result.stock_count,
            future_stock_value=stock_result.future_stock_value,
            cash_portion=stock_result.cash_amount_gross,
            remainder=stock_result.remainder,
            total_future_value=stock_result.total_received
        )

        # Closed form from the allocation: independent of salary and tax
        break_even_price = self.reward_calculator.break_even_price(params.base_stock_price)
        break_even_change = (divide(break_even_price, params.base_stock_price) - 1) * 100

        return ComparisonResult(
            stock_ratio=params.stock_ratio,
            all_cash=all_cash,
            with_stock=with_stock,
            difference=with_stock.total_future_value - all_cash.future_value,
            break_even_price=break_even_price,
            break_even_change=break_even_change,
            recommendation='stock' if with_stock.total_future_value >= all_cash.net_amount else 'cash'
        )
