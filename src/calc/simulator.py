"""OPI simulator that wires the calculators together.

A single simulation run mirrors what a user sees after submitting the form:
1. Ratio sweep - every stock ratio option at the given future price
2. Price sweep - the ratio sweep repeated for each price change scenario
3. Cash-vs-stock comparison at the optimal ratio from step 1

Nothing is cached between runs; every call recomputes from the parameters.
"""

import os
from typing import Iterable, List, Optional

from model.RewardData import (
    ComparisonResult, PriceScenario, RewardParams, RewardResult, ScenarioSet, SimulationResult,
)
from model.TaxResult import InsuranceBreakdown, NetPayResult, TaxBreakdown
from tax.IncomeTaxDetails import IncomeTaxDetails
from tax.SocialInsuranceDetails import SocialInsuranceDetails
from tax.OPIProgramDetails import OPIProgramDetails
from calc.take_home import NetPayCalculator
from calc.opi_calculator import OPIRewardCalculator
from calc.scenario_calculator import ScenarioCalculator
from calc.tax_comparison import TaxComparisonCalculator


DEFAULT_REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '../../reference'))


class OPISimulator:
    """Facade over the tax details and the reward calculators."""

    def __init__(self,
                 income_tax: IncomeTaxDetails,
                 insurance: SocialInsuranceDetails,
                 program: OPIProgramDetails):
        self.income_tax = income_tax
        self.insurance = insurance
        self.program = program
        self.net_pay_calculator = NetPayCalculator(income_tax, insurance)
        self.reward_calculator = OPIRewardCalculator(self.net_pay_calculator, program.additional_benefit_rate)
        self.scenario_calculator = ScenarioCalculator(self.reward_calculator, program)
        self.comparison_calculator = TaxComparisonCalculator(self.reward_calculator, self.net_pay_calculator)

    @classmethod
    def from_reference(cls, reference_dir: Optional[str] = None, year: Optional[int] = None) -> 'OPISimulator':
        """Build a simulator from the JSON files in a reference directory.

        Args:
            reference_dir: Directory holding income-tax-details.json,
                social-insurance.json and opi-program.json. Defaults to the
                project's reference directory.
            year: Tax year to use. Defaults to the latest year in each file.
        """
        reference_dir = reference_dir or DEFAULT_REFERENCE_DIR
        income_tax = IncomeTaxDetails(year, os.path.join(reference_dir, 'income-tax-details.json'))
        insurance = SocialInsuranceDetails(year, os.path.join(reference_dir, 'social-insurance.json'))
        program = OPIProgramDetails.from_reference(os.path.join(reference_dir, 'opi-program.json'))
        return cls(income_tax, insurance, program)

    def calc_insurance(self, gross_pay: float) -> InsuranceBreakdown:
        return self.insurance.calc_insurance(gross_pay)

    def calc_income_tax(self, taxable_income: float) -> TaxBreakdown:
        return self.income_tax.calc_income_tax(taxable_income)

    def calc_net_pay(self, gross_pay: float) -> NetPayResult:
        return self.net_pay_calculator.calc_net_pay(gross_pay)

    def calc_reward(self, params: RewardParams) -> RewardResult:
        return self.reward_calculator.calc_reward(params)

    def sweep_ratios(self, params: RewardParams) -> ScenarioSet:
        return self.scenario_calculator.sweep_ratios(params)

    def sweep_prices(self, params: RewardParams,
                     price_changes: Optional[Iterable[float]] = None) -> List[PriceScenario]:
        return self.scenario_calculator.sweep_prices(params, price_changes)

    def compare_tax_impact(self, params: RewardParams) -> ComparisonResult:
        return self.comparison_calculator.compare_tax_impact(params)

    def run(self, params: RewardParams) -> SimulationResult:
        """Run the full simulation for validated parameters.

        params.stock_ratio is ignored; the comparison uses the optimal ratio.
        """
        scenario_set = self.sweep_ratios(params)
        price_scenarios = self.sweep_prices(params)
        tax_comparison = self.compare_tax_impact(params.with_ratio(scenario_set.optimal_ratio))
        return SimulationResult(
            params=params,
            scenario_set=scenario_set,
            price_scenarios=price_scenarios,
            tax_comparison=tax_comparison
        )
