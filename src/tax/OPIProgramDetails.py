import os
import json
from typing import Optional, Tuple

DEFAULT_REF_PATH = os.path.join(os.path.dirname(__file__), '../../reference/opi-program.json')


class OPIProgramDetails:
    """Encapsulates the OPI stock reward program rules.

    The ratio options, the additional benefit rate and the default price
    change scenarios come from `reference/opi-program.json`. These are
    company program rules, not statutory values, so they carry no tax year.
    """

    def __init__(self,
                 stock_ratio_options: Tuple[float, ...] = (0, 10, 20, 30, 40, 50),
                 additional_benefit_rate: float = 0.15,
                 price_change_scenarios: Tuple[float, ...] = (-30, -20, -10, 0, 10, 20, 30),
                 max_opi_rate: float = 50,
                 max_stock_ratio: float = 50):
        self.stock_ratio_options = tuple(sorted(stock_ratio_options))
        self.additional_benefit_rate = additional_benefit_rate
        self.price_change_scenarios = tuple(price_change_scenarios)
        self.max_opi_rate = max_opi_rate
        self.max_stock_ratio = max_stock_ratio
        if not self.stock_ratio_options:
            raise ValueError("At least one stock ratio option is required")

    @classmethod
    def from_reference(cls, ref_path: Optional[str] = None) -> 'OPIProgramDetails':
        """Load program rules from opi-program.json.

        Missing keys fall back to the constructor defaults.
        """
        with open(ref_path or DEFAULT_REF_PATH, 'r') as f:
            data = json.load(f)
        kwargs = {}
        if 'stockRatioOptions' in data:
            kwargs['stock_ratio_options'] = tuple(data['stockRatioOptions'])
        if 'additionalBenefitRate' in data:
            kwargs['additional_benefit_rate'] = data['additionalBenefitRate']
        if 'priceChangeScenarios' in data:
            kwargs['price_change_scenarios'] = tuple(data['priceChangeScenarios'])
        if 'maxOpiRate' in data:
            kwargs['max_opi_rate'] = data['maxOpiRate']
        if 'maxStockRatio' in data:
            kwargs['max_stock_ratio'] = data['maxStockRatio']
        return cls(**kwargs)
