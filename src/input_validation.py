"""Input parsing and validation for simulation parameters.

The calculators never validate their inputs. Front ends (the CLI and the MCP
tools) call `validate_inputs` first and show the messages instead of
running the simulation.
"""

import math
from typing import List

from model.RewardData import RewardParams


class InvalidParametersError(ValueError):
    """Raised by ensure_valid; `errors` holds one message per problem."""

    def __init__(self, errors: List[str]):
        super().__init__("\n".join(errors))
        self.errors = errors


def parse_amount(text) -> float:
    """Parse a number that may contain thousands separators, e.g. '150,000,000'."""
    if isinstance(text, (int, float)):
        return float(text)
    cleaned = str(text).replace(',', '').replace('_', '').strip()
    if not cleaned:
        raise ValueError("Empty amount")
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Not a number: {text!r}")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_inputs(params: RewardParams, max_opi_rate: float = 50, max_stock_ratio: float = 50) -> List[str]:
    """Return a list of user-facing error messages; empty when params are usable."""
    errors = []
    if not _is_number(params.annual_salary) or params.annual_salary <= 0:
        errors.append("Annual salary must be a positive amount.")
    if not _is_number(params.opi_rate) or params.opi_rate < 0 or params.opi_rate > max_opi_rate:
        errors.append(f"OPI rate must be between 0 and {max_opi_rate:g}%.")
    if not _is_number(params.base_stock_price) or params.base_stock_price <= 0:
        errors.append("Base stock price must be a positive amount.")
    if not _is_number(params.future_stock_price) or params.future_stock_price <= 0:
        errors.append("Future stock price must be a positive amount.")
    if not _is_number(params.stock_ratio) or params.stock_ratio < 0 or params.stock_ratio > max_stock_ratio:
        errors.append(f"Stock ratio must be between 0 and {max_stock_ratio:g}%.")
    return errors


def ensure_valid(params: RewardParams, max_opi_rate: float = 50, max_stock_ratio: float = 50) -> RewardParams:
    """Return params unchanged, or raise InvalidParametersError listing every problem."""
    errors = validate_inputs(params, max_opi_rate, max_stock_ratio)
    if errors:
        raise InvalidParametersError(errors)
    return params
