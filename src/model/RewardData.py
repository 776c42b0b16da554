"""Data model for OPI stock reward simulations.

This module contains the input record for a simulation and the result
records produced at each stage of the pipeline: a single stock-ratio
election (`RewardResult`), a sweep over every ratio option (`ScenarioSet`),
a sweep over future price changes (`PriceScenario`), the cash-vs-stock
comparison (`ComparisonResult`), and the bundle a front end renders
(`SimulationResult`).
"""

from dataclasses import dataclass, replace
from typing import List, Optional

from model.TaxResult import NetPayResult


@dataclass(frozen=True)
class RewardParams:
    """Inputs for one simulation.

    opi_rate and stock_ratio are percentages (0-50), not fractions.
    """
    annual_salary: float
    opi_rate: float
    base_stock_price: float
    future_stock_price: float
    stock_ratio: float = 0.0

    def with_ratio(self, stock_ratio: float) -> 'RewardParams':
        return replace(self, stock_ratio=stock_ratio)

    def with_future_price(self, future_stock_price: float) -> 'RewardParams':
        return replace(self, future_stock_price=future_stock_price)

    @classmethod
    def from_dict(cls, data: dict) -> 'RewardParams':
        """Build from a camelCase parameter file or tool argument dict."""
        return cls(
            annual_salary=data.get('annualSalary', 0),
            opi_rate=data.get('opiRate', 0),
            base_stock_price=data.get('baseStockPrice', 0),
            future_stock_price=data.get('futureStockPrice', 0),
            stock_ratio=data.get('stockRatio', 0),
        )


@dataclass(frozen=True)
class RewardResult:
    """Everything computed for a single stock-ratio election."""
    # Inputs echoed back
    stock_ratio: float
    opi_rate: float

    # OPI payout
    opi_amount: float

    # Stock side
    stock_reward_amount: float
    additional_benefit: float
    total_stock_reward: float
    stock_count: int
    remainder: float  # paid in cash, always < base_stock_price
    future_stock_value: float

    # Cash side
    cash_amount_gross: float

    # Tax attributable to the OPI (marginal over salary alone)
    opi_taxable_income: float
    opi_tax_amount: float
    salary_only_tax: NetPayResult
    total_tax: NetPayResult

    # Totals
    gross_total: float
    total_received: float
    all_cash_net: float
    vs_all_cash: float


@dataclass(frozen=True)
class ScenarioSet:
    scenarios: List[RewardResult]
    optimal_ratio: float
    optimal_scenario: RewardResult


@dataclass(frozen=True)
class PriceScenario:
    price_change: float  # percent change from base_stock_price
    future_price: float
    scenarios: List[RewardResult]
    optimal_ratio: float
    optimal_scenario: RewardResult


@dataclass(frozen=True)
class AllCashOutcome:
    gross_amount: float
    taxable_income: float
    tax: float
    net_amount: float
    future_value: float


@dataclass(frozen=True)
class StockOutcome:
    gross_amount: float
    additional_benefit: float
    taxable_income: float
    tax: float
    stock_count: int
    future_stock_value: float
    cash_portion: float
    remainder: float
    total_future_value: float


@dataclass(frozen=True)
class ComparisonResult:
    stock_ratio: float
    all_cash: AllCashOutcome
    with_stock: StockOutcome
    difference: float
    break_even_price: float
    break_even_change: float  # percent, negative means the price may fall this far
    recommendation: str  # 'stock' or 'cash'


@dataclass(frozen=True)
class SimulationResult:
    """Everything a front end needs to render one simulation run."""
    params: RewardParams
    scenario_set: ScenarioSet
    price_scenarios: List[PriceScenario]
    tax_comparison: ComparisonResult

    @property
    def optimal_ratio(self) -> float:
        return self.scenario_set.optimal_ratio

    def get_price_scenario(self, price_change: float) -> Optional[PriceScenario]:
        for ps in self.price_scenarios:
            if ps.price_change == price_change:
                return ps
        return None
