"""Render module for OPI simulation output display."""

from render.renderers import (
    BaseRenderer,
    SummaryRenderer,
    RatioComparisonRenderer,
    PriceScenarioRenderer,
    TaxComparisonRenderer,
    BreakEvenRenderer,
    FullReportRenderer,
    RENDERER_REGISTRY,
)
from render.formatting import (
    format_currency,
    format_currency_short,
    format_percent,
)

__all__ = [
    'BaseRenderer',
    'SummaryRenderer',
    'RatioComparisonRenderer',
    'PriceScenarioRenderer',
    'TaxComparisonRenderer',
    'BreakEvenRenderer',
    'FullReportRenderer',
    'RENDERER_REGISTRY',
    'format_currency',
    'format_currency_short',
    'format_percent',
]
