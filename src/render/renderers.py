"""Renderer classes for displaying OPI simulation results.

This module contains renderer classes that handle the presentation logic
for the different views of a simulation. Each renderer takes the
SimulationResult from one run and prints the part it is responsible for.
"""

from abc import ABC, abstractmethod
from typing import List

from model.RewardData import SimulationResult
from model.field_metadata import get_short_name, wrap_header
from render.formatting import (
    format_currency,
    format_currency_short,
    format_percent,
    format_signed_percent,
)


WIDTH = 100


def format_multiline_headers(columns: List[tuple], first_label: str, first_width: int = 8) -> tuple[List[str], str]:
    """Format column headers with multi-line wrapping support.

    Args:
        columns: List of (header_text, width) tuples for each column
        first_label: Label of the leading row-key column
        first_width: Width of the leading column

    Returns:
        Tuple of (list of header lines, separator line)
    """
    wrapped_headers = [(wrap_header(header, width), width) for header, width in columns]
    max_lines = max(len(lines) for lines, _ in wrapped_headers) if wrapped_headers else 1

    # Pad at the top so the last line of every header is aligned
    for lines, _ in wrapped_headers:
        while len(lines) < max_lines:
            lines.insert(0, "")

    header_lines = []
    for line_idx in range(max_lines):
        label = first_label if line_idx == max_lines - 1 else ""
        header_line = f"  {label:<{first_width}}"
        for lines, width in wrapped_headers:
            header_line += f" {lines[line_idx]:>{width}}"
        header_lines.append(header_line)

    sep_line = f"  {'-' * first_width}"
    for _, width in wrapped_headers:
        sep_line += f" {'-' * width}"

    return header_lines, sep_line


def _title(text: str) -> None:
    print()
    print("=" * WIDTH)
    print(f"{text:^{WIDTH}}")
    print("=" * WIDTH)
    print()


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: SimulationResult) -> None:
        """Render the data to output.

        Args:
            data: The SimulationResult from one simulation run
        """
        pass


class SummaryRenderer(BaseRenderer):
    """Renderer for the headline numbers: optimal ratio, OPI amount, best net total."""

    def render(self, data: SimulationResult) -> None:
        optimal = data.scenario_set.optimal_scenario
        _title("OPI STOCK REWARD SUMMARY")
        print(f"  {'Annual Salary:':<40} {format_currency(data.params.annual_salary):>20}")
        print(f"  {'OPI Rate:':<40} {format_percent(data.params.opi_rate, 0):>20}")
        print(f"  {'Base / Future Stock Price:':<40} {format_currency(data.params.base_stock_price):>20} / {format_currency(data.params.future_stock_price)}")
        print("-" * WIDTH)
        print(f"  {'Optimal Stock Ratio:':<40} {format_percent(data.scenario_set.optimal_ratio, 0):>20}")
        print(f"  {'OPI Amount (pre-tax):':<40} {format_currency_short(optimal.opi_amount):>20}")
        print(f"  {'Best Net Total:':<40} {format_currency_short(optimal.total_received):>20}")
        print(f"  {'vs 100% Cash:':<40} {format_currency(optimal.vs_all_cash):>20}")
        print()


class RatioComparisonRenderer(BaseRenderer):
    """Renderer for the per-ratio comparison table. The optimal row is starred."""

    def render(self, data: SimulationResult) -> None:
        _title("COMPARISON BY STOCK RATIO")

        columns = [
            (get_short_name("stock_reward_amount"), 11),
            (get_short_name("additional_benefit"), 10),
            (get_short_name("stock_count"), 8),
            (get_short_name("cash_amount_gross"), 11),
            (get_short_name("future_stock_value"), 11),
            (get_short_name("opi_tax_amount"), 11),
            (get_short_name("total_received"), 11),
            (get_short_name("vs_all_cash"), 11),
        ]
        header_lines, sep_line = format_multiline_headers(columns, "Ratio")
        for line in header_lines:
            print(line)
        print(sep_line)

        optimal_ratio = data.scenario_set.optimal_ratio
        for s in data.scenario_set.scenarios:
            marker = "*" if s.stock_ratio == optimal_ratio else " "
            ratio_label = f"{marker}{format_percent(s.stock_ratio, 0)}"
            print(f"  {ratio_label:<8}"
                  f" {format_currency_short(s.stock_reward_amount):>11}"
                  f" {'+' + format_currency_short(s.additional_benefit):>10}"
                  f" {s.stock_count:>8,}"
                  f" {format_currency_short(s.cash_amount_gross):>11}"
                  f" {format_currency_short(s.future_stock_value):>11}"
                  f" {format_currency_short(s.opi_tax_amount):>11}"
                  f" {format_currency_short(s.total_received):>11}"
                  f" {format_currency_short(s.vs_all_cash):>11}")
        print(sep_line)
        print("  * optimal ratio (ties go to the lower ratio)")
        print()


class PriceScenarioRenderer(BaseRenderer):
    """Renderer for net totals under each future price change."""

    def render(self, data: SimulationResult) -> None:
        _title("NET TOTAL BY FUTURE STOCK PRICE")
        if not data.price_scenarios:
            print("  No price scenarios")
            return

        ratios = [s.stock_ratio for s in data.price_scenarios[0].scenarios]
        columns = [("Future Price", 10)]
        columns += [(f"Stock {format_percent(r, 0)}", 9) for r in ratios]
        columns.append(("Optimal", 8))
        header_lines, sep_line = format_multiline_headers(columns, "Change")
        for line in header_lines:
            print(line)
        print(sep_line)

        for ps in data.price_scenarios:
            row = f"  {format_signed_percent(ps.price_change):<8} {format_currency_short(ps.future_price):>10}"
            for s in ps.scenarios:
                row += f" {format_currency_short(s.total_received):>9}"
            row += f" {format_percent(ps.optimal_ratio, 0):>8}"
            print(row)
        print(sep_line)
        print()


class TaxComparisonRenderer(BaseRenderer):
    """Renderer for 100% cash versus the optimal stock election."""

    def render(self, data: SimulationResult) -> None:
        comparison = data.tax_comparison
        all_cash = comparison.all_cash
        with_stock = comparison.with_stock
        _title("100% CASH VS STOCK")

        print("-" * WIDTH)
        print("100% CASH")
        print("-" * WIDTH)
        print(f"  {'Gross Amount:':<40} {format_currency(all_cash.gross_amount):>20}")
        print(f"  {'Insurance + Income Tax:':<40} {format_currency(-all_cash.tax):>20}")
        print(f"  {'Net Amount:':<40} {format_currency(all_cash.net_amount):>20}")

        print()
        print("-" * WIDTH)
        print(f"STOCK {format_percent(comparison.stock_ratio, 0)}")
        print("-" * WIDTH)
        print(f"  {'Cash Portion (gross):':<40} {format_currency(with_stock.cash_portion):>20}")
        print(f"  {'Stock Value (future price):':<40} {format_currency(with_stock.future_stock_value):>20}")
        print(f"  {'Shares Granted:':<40} {with_stock.stock_count:>20,}")
        print(f"  {'Remainder (cash):':<40} {format_currency(with_stock.remainder):>20}")
        print(f"  {'Additional Benefit:':<40} {'+' + format_currency_short(with_stock.additional_benefit):>20}")
        print(f"  {'Insurance + Income Tax:':<40} {format_currency(-with_stock.tax):>20}")
        print(f"  {'Expected Total Value:':<40} {format_currency(with_stock.total_future_value):>20}")

        print()
        sign = '+' if comparison.difference >= 0 else ''
        print(f"  {'Difference (stock - cash):':<40} {sign + format_currency(comparison.difference):>20}")
        print()


class BreakEvenRenderer(BaseRenderer):
    """Renderer for the break-even price and the resulting recommendation."""

    def render(self, data: SimulationResult) -> None:
        comparison = data.tax_comparison
        params = data.params
        _title("BREAK-EVEN ANALYSIS")
        print(f"  {'Base Stock Price:':<40} {format_currency(params.base_stock_price):>20}")
        print(f"  {'Break-even Stock Price:':<40} {format_currency(comparison.break_even_price):>20}")
        print(f"  {'Tolerable Price Change:':<40} {format_percent(comparison.break_even_change):>20}")
        print()
        print(f"  With the {format_percent(data.tax_comparison.stock_ratio, 0)} stock election the extra benefit"
              f" absorbs a price fall of about {format_percent(abs(comparison.break_even_change))}.")

        future = format_currency_short(params.future_stock_price)
        break_even = format_currency_short(comparison.break_even_price)
        if comparison.recommendation == 'stock':
            print(f"  Recommendation: STOCK. The expected price ({future}) keeps the stock election"
                  f" ahead of cash (break-even {break_even}).")
        else:
            print(f"  Recommendation: CASH. At the expected price ({future}) cash is worth more"
                  f" (break-even {break_even}).")
        print()


class FullReportRenderer(BaseRenderer):
    """Renders every section in the order the results page shows them."""

    SECTIONS = (SummaryRenderer, RatioComparisonRenderer, PriceScenarioRenderer,
                TaxComparisonRenderer, BreakEvenRenderer)

    def render(self, data: SimulationResult) -> None:
        for section in self.SECTIONS:
            section().render(data)


RENDERER_REGISTRY = {
    'Full': FullReportRenderer,
    'Summary': SummaryRenderer,
    'Ratios': RatioComparisonRenderer,
    'PriceScenarios': PriceScenarioRenderer,
    'TaxComparison': TaxComparisonRenderer,
    'BreakEven': BreakEvenRenderer,
}
