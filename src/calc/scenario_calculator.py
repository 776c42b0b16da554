from typing import Iterable, List, Optional

from calc.opi_calculator import OPIRewardCalculator
from model.RewardData import PriceScenario, RewardParams, RewardResult, ScenarioSet
from tax.OPIProgramDetails import OPIProgramDetails


def select_optimal(scenarios: List[RewardResult]) -> RewardResult:
    """Return the scenario with the highest total_received.

    Scans left to right and only replaces on a strictly greater total, so
    with ascending ratios the lowest ratio wins a tie.
    """
    best = scenarios[0]
    for current in scenarios[1:]:
        if current.total_received > best.total_received:
            best = current
    return best


class ScenarioCalculator:
    """Sweeps the reward calculation over ratio options and price changes."""

    def __init__(self, reward_calculator: OPIRewardCalculator, program: OPIProgramDetails):
        self.reward_calculator = reward_calculator
        self.program = program

    def sweep_ratios(self, params: RewardParams) -> ScenarioSet:
        """Run the reward calculation once per ratio option, holding everything else fixed."""
        scenarios = [
            self.reward_calculator.calc_reward(params.with_ratio(ratio))
            for ratio in self.program.stock_ratio_options
        ]
        optimal = select_optimal(scenarios)
        return ScenarioSet(
            scenarios=scenarios,
            optimal_ratio=optimal.stock_ratio,
            optimal_scenario=optimal
        )

    def sweep_prices(self, params: RewardParams,
                     price_changes: Optional[Iterable[float]] = None) -> List[PriceScenario]:
        """Re-run the ratio sweep for each future price change (in percent of the base price).

        Args:
            params: Base parameters; future_stock_price is replaced per scenario.
            price_changes: Percent changes to evaluate. Defaults to the program's scenarios.
        """
        if price_changes is None:
            price_changes = self.program.price_change_scenarios

        results = []
        for change in price_changes:
            future_price = params.base_stock_price * (1 + change / 100)
            scenario_set = self.sweep_ratios(params.with_future_price(future_price))
            results.append(PriceScenario(
                price_change=change,
                future_price=future_price,
                scenarios=scenario_set.scenarios,
                optimal_ratio=scenario_set.optimal_ratio,
                optimal_scenario=scenario_set.optimal_scenario
            ))
        return results
