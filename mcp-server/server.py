#!/usr/bin/env python3
"""MCP Server for the OPI Stock Reward Simulator.

This server exposes the OPI simulation as MCP tools, allowing AI
assistants to answer questions about cash-vs-stock elections.
"""

import os
import sys
import json
import asyncio
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import MultiProgramTools, PARAM_KEYS


# Create the MCP server
server = Server("opi-simulator")

# Global tools instance (initialized on startup)
tools: MultiProgramTools | None = None


def get_tools() -> MultiProgramTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default program can be set via OPI_SIMULATOR_PROGRAM env var
        default_program = os.environ.get('OPI_SIMULATOR_PROGRAM')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiProgramTools(base_path, default_program)
    return tools


# Common program parameter schema
PROGRAM_PARAM = {
    "type": "string",
    "description": "The saved parameter set (folder in input-parameters). If not specified, uses the default program. Use list_programs to see available programs."
}

# Optional overrides of the saved parameters
OVERRIDE_PARAMS = {
    "annualSalary": {"type": "number", "description": "Annual contract salary in won"},
    "opiRate": {"type": "number", "description": "Expected OPI rate in percent of salary (0-50)"},
    "baseStockPrice": {"type": "number", "description": "Base stock price in won"},
    "futureStockPrice": {"type": "number", "description": "Expected stock price in one year, in won"},
}


def simulation_schema(extra: dict | None = None) -> dict:
    properties = {"program": PROGRAM_PARAM, **OVERRIDE_PARAMS}
    if extra:
        properties.update(extra)
    return {"type": "object", "properties": properties, "required": []}


def extract_overrides(arguments: dict[str, Any]) -> dict[str, Any]:
    return {key: arguments[key] for key in PARAM_KEYS if arguments.get(key) is not None}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available OPI simulation tools."""
    return [
        Tool(
            name="list_programs",
            description="List all saved parameter sets with their salary, OPI rate and optimal stock ratio.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="reload_programs",
            description="Reload all saved parameter sets from disk. Use this after adding, modifying, or removing params.json files.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_program_parameters",
            description="Get the saved parameters of a program and the OPI program rules (ratio options, 15% additional benefit, price scenarios).",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="run_simulation",
            description="Run the full simulation and summarize it: optimal stock ratio, best after-tax total, difference versus 100% cash, break-even price and recommendation.",
            inputSchema=simulation_schema()
        ),
        Tool(
            name="get_ratio_comparison",
            description="Get the detailed result for every stock ratio option (0-50%): shares granted, remainder, future stock value, OPI tax and after-tax total.",
            inputSchema=simulation_schema()
        ),
        Tool(
            name="get_price_scenarios",
            description="Get the after-tax total of each stock ratio under a range of future price changes, and the optimal ratio for each.",
            inputSchema=simulation_schema({
                "priceChanges": {
                    "type": "array",
                    "items": {"type": "number"},
                    "description": "Optional: percent changes from the base price to evaluate. Defaults to -30..+30 in steps of 10."
                }
            })
        ),
        Tool(
            name="compare_tax_impact",
            description="Compare taking the whole OPI in cash against a stock election, including the break-even stock price.",
            inputSchema=simulation_schema({
                "stockRatio": {
                    "type": "number",
                    "description": "Optional: stock ratio in percent to compare. Defaults to the optimal ratio."
                }
            })
        ),
        Tool(
            name="calculate_net_pay",
            description="Calculate social insurance premiums, income tax, local income tax and net pay for an annual gross pay.",
            inputSchema={
                "type": "object",
                "properties": {
                    "grossPay": {
                        "type": "number",
                        "description": "Annual gross pay in won"
                    }
                },
                "required": ["grossPay"]
            }
        ),
        Tool(
            name="calculate_income_tax",
            description="Calculate progressive income tax and local income tax for a taxable income, with the matched bracket.",
            inputSchema={
                "type": "object",
                "properties": {
                    "taxableIncome": {
                        "type": "number",
                        "description": "Annual taxable income in won"
                    }
                },
                "required": ["taxableIncome"]
            }
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        sim_tools = get_tools()
        program = arguments.get("program")
        overrides = extract_overrides(arguments)

        if name == "list_programs":
            result = sim_tools.list_programs()
        elif name == "reload_programs":
            result = sim_tools.reload_programs()
        elif name == "get_program_parameters":
            result = sim_tools.get_program_parameters(program)
        elif name == "run_simulation":
            result = sim_tools.run_simulation(program, overrides)
        elif name == "get_ratio_comparison":
            result = sim_tools.get_ratio_comparison(program, overrides)
        elif name == "get_price_scenarios":
            result = sim_tools.get_price_scenarios(program, overrides, arguments.get("priceChanges"))
        elif name == "compare_tax_impact":
            result = sim_tools.compare_tax_impact(program, overrides)
        elif name == "calculate_net_pay":
            result = sim_tools.calculate_net_pay(arguments["grossPay"])
        elif name == "calculate_income_tax":
            result = sim_tools.calculate_income_tax(arguments["taxableIncome"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
