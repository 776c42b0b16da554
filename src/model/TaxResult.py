"""Tax and social insurance result records.

These are plain immutable values produced by the `tax` details classes and
the net pay calculator. Nothing here performs any calculation.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TaxBracket:
    """One row of the progressive tax table.

    Tax inside the bracket is `income * rate - deduction`, where `deduction`
    is the cumulative deduction that makes the table continuous.
    """
    max_income: float  # inclusive upper bound; float('inf') for the top bracket
    rate: float
    deduction: float


@dataclass(frozen=True)
class TaxBreakdown:
    income_tax: float
    local_tax: float  # local income tax surcharge on income_tax
    total: float
    bracket: Optional[TaxBracket] = None


@dataclass(frozen=True)
class InsuranceBreakdown:
    national_pension: float
    health_insurance: float
    long_term_care: float
    employment_insurance: float
    total: float


@dataclass(frozen=True)
class NetPayResult:
    gross_pay: float
    insurance: InsuranceBreakdown
    tax: TaxBreakdown
    taxable_income: float  # gross_pay - insurance.total
    total_deductions: float
    net_pay: float
