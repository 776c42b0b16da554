"""OPI Simulator Tools for MCP Server.

This module provides the tool implementations that wrap the OPI simulator
and expose its results through MCP. Saved parameter sets live in
input-parameters/<program>/params.json; explicit arguments override them.
"""

import os
import sys
import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from calc.simulator import OPISimulator
from input_validation import validate_inputs
from model.RewardData import RewardParams, RewardResult, SimulationResult
from model.field_metadata import get_description, get_short_name


PARAM_KEYS = ('annualSalary', 'opiRate', 'baseStockPrice', 'futureStockPrice', 'stockRatio')


def scenario_row(s: RewardResult) -> dict:
    """Flatten a RewardResult for JSON output, dropping the nested net pay records."""
    row = asdict(s)
    row.pop('salary_only_tax', None)
    row.pop('total_tax', None)
    return row


class SimulatorTools:
    """Tools that wrap the OPI simulator for one saved parameter set."""

    def __init__(self, base_path: str, program_name: str, simulator: Optional[OPISimulator] = None):
        """Initialize with paths and run the saved simulation.

        Args:
            base_path: Path to the project root (holds reference/ and input-parameters/)
            program_name: Name of the program folder in input-parameters
            simulator: Shared simulator; built from base_path/reference when omitted
        """
        self.base_path = base_path
        self.program_name = program_name
        self.saved = self._load_params()
        self.simulator = simulator or OPISimulator.from_reference(os.path.join(base_path, 'reference'))
        self.params = RewardParams.from_dict(self.saved)
        errors = self._validate(self.params)
        if errors:
            raise ValueError(f"Invalid parameters in '{program_name}': {'; '.join(errors)}")
        self.result: SimulationResult = self.simulator.run(self.params)

    def _load_params(self) -> dict:
        """Load the saved parameter set."""
        params_path = os.path.join(self.base_path, 'input-parameters', self.program_name, 'params.json')
        with open(params_path, 'r') as f:
            return json.load(f)

    def _validate(self, params: RewardParams) -> List[str]:
        program = self.simulator.program
        return validate_inputs(params, program.max_opi_rate, program.max_stock_ratio)

    def _resolve(self, overrides: Optional[Dict[str, Any]]) -> RewardParams:
        """Apply explicit overrides on top of the saved parameters."""
        if not overrides:
            return self.params
        values = dict(self.saved)
        for key in PARAM_KEYS:
            if overrides.get(key) is not None:
                values[key] = overrides[key]
        return RewardParams.from_dict(values)

    def _invalid(self, params: RewardParams) -> Optional[dict]:
        errors = self._validate(params)
        if errors:
            return {"error": "Invalid parameters", "validation_errors": errors}
        return None

    def _simulate(self, overrides: Optional[Dict[str, Any]]) -> SimulationResult:
        params = self._resolve(overrides)
        if params == self.params:
            return self.result
        return self.simulator.run(params)

    def get_program_parameters(self) -> dict:
        """Get the saved parameters of this program."""
        return {
            "program_name": self.program_name,
            "parameters": {key: self.saved.get(key) for key in PARAM_KEYS if key in self.saved},
            "program_rules": {
                "stock_ratio_options": list(self.simulator.program.stock_ratio_options),
                "additional_benefit_rate": self.simulator.program.additional_benefit_rate,
                "price_change_scenarios": list(self.simulator.program.price_change_scenarios),
                "max_opi_rate": self.simulator.program.max_opi_rate,
                "max_stock_ratio": self.simulator.program.max_stock_ratio
            }
        }

    def run_simulation(self, overrides: Optional[Dict[str, Any]] = None) -> dict:
        """Summarize a full simulation: optimal ratio, best net total and recommendation."""
        invalid = self._invalid(self._resolve(overrides))
        if invalid:
            return invalid
        result = self._simulate(overrides)
        optimal = result.scenario_set.optimal_scenario
        return {
            "program_name": self.program_name,
            "parameters": asdict(result.params),
            "optimal_ratio": result.optimal_ratio,
            "opi_amount": optimal.opi_amount,
            "best_total_received": optimal.total_received,
            "all_cash_net": optimal.all_cash_net,
            "vs_all_cash": optimal.vs_all_cash,
            "recommendation": result.tax_comparison.recommendation,
            "break_even_price": result.tax_comparison.break_even_price,
            "break_even_change_percent": result.tax_comparison.break_even_change
        }

    def get_ratio_comparison(self, overrides: Optional[Dict[str, Any]] = None) -> dict:
        """Get every stock ratio scenario with the optimum marked."""
        invalid = self._invalid(self._resolve(overrides))
        if invalid:
            return invalid
        scenario_set = self._simulate(overrides).scenario_set
        columns = list(scenario_row(scenario_set.optimal_scenario))
        return {
            "program_name": self.program_name,
            "optimal_ratio": scenario_set.optimal_ratio,
            "columns": {key: get_short_name(key) for key in columns},
            "column_descriptions": {key: get_description(key) for key in columns},
            "scenarios": [scenario_row(s) for s in scenario_set.scenarios]
        }

    def get_price_scenarios(self, overrides: Optional[Dict[str, Any]] = None,
                            price_changes: Optional[List[float]] = None) -> dict:
        """Get the net total of each ratio under each future price change."""
        params = self._resolve(overrides)
        invalid = self._invalid(params)
        if invalid:
            return invalid
        if price_changes is None:
            price_scenarios = self._simulate(overrides).price_scenarios
        else:
            price_scenarios = self.simulator.sweep_prices(params, price_changes)
        return {
            "program_name": self.program_name,
            "price_scenarios": [
                {
                    "price_change": ps.price_change,
                    "future_price": ps.future_price,
                    "optimal_ratio": ps.optimal_ratio,
                    "total_received_by_ratio": {
                        str(s.stock_ratio): s.total_received for s in ps.scenarios
                    }
                }
                for ps in price_scenarios
            ]
        }

    def compare_tax_impact(self, overrides: Optional[Dict[str, Any]] = None) -> dict:
        """Compare 100% cash with a stock election (the optimal ratio unless stockRatio is given)."""
        params = self._resolve(overrides)
        invalid = self._invalid(params)
        if invalid:
            return invalid
        if overrides and overrides.get('stockRatio') is not None:
            comparison = self.simulator.compare_tax_impact(params)
        else:
            comparison = self._simulate(overrides).tax_comparison
        return {
            "program_name": self.program_name,
            **asdict(comparison)
        }


class MultiProgramTools:
    """Manager for multiple saved parameter sets.

    Discovers all available programs and caches their simulations,
    allowing queries to specify which program to use. Calculations that
    need no saved program (net pay, income tax) use the shared simulator.
    """

    def __init__(self, base_path: str, default_program: Optional[str] = None):
        """Initialize and discover all available programs.

        Args:
            base_path: Path to the project root
            default_program: Default program to use when none specified
        """
        self.base_path = base_path
        self.programs: Dict[str, SimulatorTools] = {}
        self.default_program = default_program
        self.simulator = OPISimulator.from_reference(os.path.join(base_path, 'reference'))
        self._discover_programs()

    def _discover_programs(self):
        """Discover and load all available programs."""
        input_params_path = os.path.join(self.base_path, 'input-parameters')

        if not os.path.exists(input_params_path):
            return

        for name in sorted(os.listdir(input_params_path)):
            program_dir = os.path.join(input_params_path, name)
            params_path = os.path.join(program_dir, 'params.json')

            if os.path.isdir(program_dir) and os.path.exists(params_path):
                try:
                    self.programs[name] = SimulatorTools(self.base_path, name, self.simulator)
                except Exception as e:
                    # Log but don't fail on individual program errors
                    print(f"Warning: Failed to load program '{name}': {e}", file=sys.stderr)

        if self.default_program is None and self.programs:
            self.default_program = list(self.programs.keys())[0]

    def _get_program(self, program: Optional[str] = None) -> SimulatorTools:
        """Get the specified program or default."""
        program_name = program or self.default_program

        if program_name not in self.programs:
            available = list(self.programs.keys())
            raise ValueError(
                f"Program '{program_name}' not found. Available programs: {available}"
            )

        return self.programs[program_name]

    def list_programs(self) -> dict:
        """List all available programs."""
        programs_info = {}
        for name, tools in self.programs.items():
            programs_info[name] = {
                "annual_salary": tools.params.annual_salary,
                "opi_rate": tools.params.opi_rate,
                "optimal_ratio": tools.result.optimal_ratio
            }

        return {
            "available_programs": list(self.programs.keys()),
            "default_program": self.default_program,
            "programs_info": programs_info
        }

    def reload_programs(self) -> dict:
        """Reload all programs from disk."""
        old_programs = set(self.programs.keys())
        self.programs = {}
        self._discover_programs()
        new_programs = set(self.programs.keys())

        return {
            "status": "reloaded",
            "programs_loaded": len(self.programs),
            "available_programs": sorted(new_programs),
            "added": sorted(new_programs - old_programs),
            "removed": sorted(old_programs - new_programs),
            "default_program": self.default_program
        }

    def get_program_parameters(self, program: Optional[str] = None) -> dict:
        return self._get_program(program).get_program_parameters()

    def run_simulation(self, program: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> dict:
        return self._get_program(program).run_simulation(overrides)

    def get_ratio_comparison(self, program: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> dict:
        return self._get_program(program).get_ratio_comparison(overrides)

    def get_price_scenarios(self, program: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None,
                            price_changes: Optional[List[float]] = None) -> dict:
        return self._get_program(program).get_price_scenarios(overrides, price_changes)

    def compare_tax_impact(self, program: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> dict:
        return self._get_program(program).compare_tax_impact(overrides)

    def calculate_net_pay(self, gross_pay: float) -> dict:
        """Insurance, income tax and net pay for an annual gross pay."""
        result = self.simulator.calc_net_pay(gross_pay)
        data = asdict(result)
        data["marginal_rate"] = self.simulator.income_tax.marginal_rate(result.taxable_income)
        return data

    def calculate_income_tax(self, taxable_income: float) -> dict:
        """Income tax and local income tax for a taxable income."""
        data = asdict(self.simulator.calc_income_tax(taxable_income))
        data["marginal_rate"] = self.simulator.income_tax.marginal_rate(taxable_income)
        return data
