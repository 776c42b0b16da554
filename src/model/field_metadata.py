"""Field metadata for RewardResult fields.

Short names are used as column headers in the comparison tables and as
labels in MCP tool output. Descriptions explain what each figure means.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Column header (unique, concise)
    description: str  # Full description of the field


FIELD_METADATA: Dict[str, FieldInfo] = {
    # Election
    "stock_ratio": FieldInfo("Stock Ratio", "Percentage of the OPI elected as stock"),
    "opi_rate": FieldInfo("OPI Rate", "OPI payout as a percentage of annual salary"),
    "opi_amount": FieldInfo("OPI Amount", "OPI payout before tax"),

    # Stock side
    "stock_reward_amount": FieldInfo("Stock Election", "Portion of the OPI elected as stock"),
    "additional_benefit": FieldInfo("Extra Benefit", "15% uplift granted on the stock election"),
    "total_stock_reward": FieldInfo("Total Stock Reward", "Stock election plus the extra benefit"),
    "stock_count": FieldInfo("Shares", "Whole shares granted at the base price"),
    "remainder": FieldInfo("Remainder", "Fractional-share shortfall paid in cash"),
    "future_stock_value": FieldInfo("Future Stock Value", "Granted shares valued at the future price"),

    # Cash side
    "cash_amount_gross": FieldInfo("Cash (Gross)", "Portion of the OPI paid in cash before tax"),

    # Tax
    "opi_taxable_income": FieldInfo("OPI Taxable", "OPI plus extra benefit added to taxable income"),
    "opi_tax_amount": FieldInfo("OPI Tax", "Insurance and income tax attributable to the OPI"),

    # Totals
    "gross_total": FieldInfo("Gross Total", "Cash plus future stock value plus remainder"),
    "total_received": FieldInfo("Net Total", "Gross total minus OPI tax"),
    "all_cash_net": FieldInfo("All-Cash Net", "Net amount if the whole OPI were taken in cash"),
    "vs_all_cash": FieldInfo("vs All-Cash", "Net total minus the all-cash net amount"),
}


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def wrap_header(text: str, max_width: int) -> list[str]:
    """Wrap a header into lines no wider than max_width, splitting on spaces.

    A single word longer than max_width is kept on its own line.
    """
    if len(text) <= max_width:
        return [text]

    lines = []
    current_line = ""
    for word in text.split():
        if not current_line:
            current_line = word
        elif len(current_line) + 1 + len(word) <= max_width:
            current_line += " " + word
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines
