import json
import os
from typing import Optional

from model.TaxResult import TaxBracket, TaxBreakdown

DEFAULT_REF_PATH = os.path.join(os.path.dirname(__file__), '../../reference/income-tax-details.json')


class IncomeTaxDetails:
	def __init__(self, year: Optional[int] = None, ref_path: Optional[str] = None):
		"""
		year: tax year to use; defaults to the latest year in the reference file
		ref_path: alternate income-tax-details.json (tests, MCP base paths)
		"""
		self.ref_path = ref_path or DEFAULT_REF_PATH
		self.brackets_by_year = {}
		self.local_tax_rate_by_year = {}
		self._load_brackets()
		if year is None:
			year = max(self.brackets_by_year)
		if year not in self.brackets_by_year:
			raise ValueError(f"No tax brackets available for year {year}")
		self.year = year
		self.brackets = self.brackets_by_year[year]
		self.local_tax_rate = self.local_tax_rate_by_year[year]

	def _load_brackets(self):
		with open(self.ref_path, 'r') as f:
			data = json.load(f)

		tax_years = data.get("taxYears", [])
		if not tax_years:
			raise ValueError("income-tax-details.json must contain a 'taxYears' array with at least one entry")

		tax_years = sorted(tax_years, key=lambda x: x["year"])

		for i in range(1, len(tax_years)):
			if tax_years[i]["year"] != tax_years[i-1]["year"] + 1:
				raise ValueError(f"Tax years must be sequential. Gap found between {tax_years[i-1]['year']} and {tax_years[i]['year']}")

		for year_data in tax_years:
			year = year_data["year"]
			brackets = []
			for b in year_data.get("brackets", []):
				rate = b["rate"]
				if rate > 1:
					rate = rate / 100.0
				max_income = b.get("maxIncome")
				brackets.append(TaxBracket(
					max_income=float('inf') if max_income is None else max_income,
					rate=rate,
					deduction=b.get("deduction", 0)
				))
			validate_brackets(brackets, year)
			self.brackets_by_year[year] = tuple(brackets)
			self.local_tax_rate_by_year[year] = year_data.get("localIncomeTaxRate", 0.10)

	def find_bracket(self, taxable_income: float) -> Optional[TaxBracket]:
		"""Return the first bracket whose upper limit covers the income, or None for income <= 0."""
		if taxable_income <= 0:
			return None
		for b in self.brackets:
			if taxable_income <= b.max_income:
				return b
		# Only reachable for nan; the top bracket is unbounded
		return self.brackets[-1]

	def calc_income_tax(self, taxable_income: float) -> TaxBreakdown:
		"""
		Returns the income tax, local income tax and their total for a taxable income.

		The bracket table is cumulative: tax = income * rate - deduction for the
		bracket the whole income falls in. This equals summing each slice at its
		own rate, since the deductions make the table continuous.
		"""
		bracket = self.find_bracket(taxable_income)
		if bracket is None:
			return TaxBreakdown(income_tax=0.0, local_tax=0.0, total=0.0, bracket=None)
		income_tax = taxable_income * bracket.rate - bracket.deduction
		# Clamp without max() so a nan input still propagates
		if income_tax < 0:
			income_tax = 0.0
		local_tax = income_tax * self.local_tax_rate
		return TaxBreakdown(
			income_tax=income_tax,
			local_tax=local_tax,
			total=income_tax + local_tax,
			bracket=bracket
		)

	def marginal_rate(self, taxable_income: float) -> float:
		"""Returns the national marginal rate for the income (0.0 when nothing is taxable)."""
		bracket = self.find_bracket(taxable_income)
		return bracket.rate if bracket else 0.0


def validate_brackets(brackets: list, year: int) -> None:
	"""Raise ValueError unless limits and rates strictly increase and the top bracket is unbounded."""
	if not brackets:
		raise ValueError(f"Tax year {year} must define at least one bracket")
	for i in range(1, len(brackets)):
		if brackets[i].max_income <= brackets[i-1].max_income:
			raise ValueError(f"Bracket limits must strictly increase in {year}: {brackets[i-1].max_income} then {brackets[i].max_income}")
		if brackets[i].rate <= brackets[i-1].rate:
			raise ValueError(f"Bracket rates must strictly increase in {year}: {brackets[i-1].rate} then {brackets[i].rate}")
	if brackets[-1].max_income != float('inf'):
		raise ValueError(f"The top bracket for {year} must be unbounded (maxIncome null)")
