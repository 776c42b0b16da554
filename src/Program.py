import sys
import os
import json
import argparse
from typing import Optional

from calc.simulator import OPISimulator
from input_validation import parse_amount, validate_inputs
from model.RewardData import RewardParams
from render.renderers import RENDERER_REGISTRY


INPUT_PARAMETERS_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '../input-parameters'))


def load_program_params(program_name: str, input_dir: Optional[str] = None) -> dict:
    """Load a saved parameter set from input-parameters/<program_name>/params.json.

    Raises:
        FileNotFoundError: if the program has no params.json
    """
    params_path = os.path.join(input_dir or INPUT_PARAMETERS_DIR, program_name, 'params.json')
    if not os.path.exists(params_path):
        raise FileNotFoundError(f"Parameter file not found: {params_path}")
    with open(params_path, 'r') as f:
        return json.load(f)


def build_params(args: argparse.Namespace, saved: dict) -> RewardParams:
    """Merge saved program values with command-line overrides."""
    values = dict(saved)
    overrides = {
        'annualSalary': args.salary,
        'opiRate': args.opi_rate,
        'baseStockPrice': args.base_price,
        'futureStockPrice': args.future_price,
    }
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    return RewardParams.from_dict(values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='OPI stock reward simulator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Full            Every section below (default)
  Summary         Optimal ratio, OPI amount and best net total
  Ratios          Comparison table for each stock ratio option
  PriceScenarios  Net totals for each future price change
  TaxComparison   100% cash versus the optimal stock election
  BreakEven       Break-even stock price and recommendation

Examples:
  python src/Program.py example
  python src/Program.py example --mode Ratios
  python src/Program.py example --future-price 48,000
  python src/Program.py --salary 150,000,000 --opi-rate 25 --base-price 55,000 --future-price 65,000
        """
    )
    parser.add_argument('program_name', nargs='?', help='Name of a saved parameter set (folder in input-parameters)')
    parser.add_argument('--salary', '-s', type=parse_amount, help='Annual contract salary in won')
    parser.add_argument('--opi-rate', '-o', type=parse_amount, help='Expected OPI rate in percent (0-50)')
    parser.add_argument('--base-price', '-b', type=parse_amount, help='Base stock price in won')
    parser.add_argument('--future-price', '-f', type=parse_amount, help='Expected stock price in one year')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Full',
                        help='Output mode (default: Full)')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    saved = {}
    if args.program_name:
        try:
            saved = load_program_params(args.program_name)
        except FileNotFoundError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)

    params = build_params(args, saved)
    simulator = OPISimulator.from_reference()

    errors = validate_inputs(params, simulator.program.max_opi_rate, simulator.program.max_stock_ratio)
    if errors:
        print("Invalid input:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    result = simulator.run(params)
    renderer = RENDERER_REGISTRY[args.mode]()
    renderer.render(result)


if __name__ == "__main__":
    main()
