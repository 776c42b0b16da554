import json
import os
from typing import Optional

from model.TaxResult import InsuranceBreakdown

DEFAULT_REF_PATH = os.path.join(os.path.dirname(__file__), '../../reference/social-insurance.json')


class SocialInsuranceDetails:
    """Holds the four statutory social insurance rates and computes premiums.

    Loads the employee share of national pension, health insurance,
    long-term care and employment insurance from the reference file. The
    national pension premium is capped at an annual ceiling; the others
    are uncapped.
    """

    def __init__(self, year: Optional[int] = None, ref_path: Optional[str] = None):
        """Initialize by loading the reference file.

        Args:
            year: Tax year to use. Defaults to the latest year in the file.
            ref_path: Alternate social-insurance.json location.
        """
        self.ref_path = ref_path or DEFAULT_REF_PATH
        self.data_by_year = {}
        self._load_data()
        if year is None:
            year = max(self.data_by_year)
        if year not in self.data_by_year:
            raise ValueError(f"No social insurance data available for year {year}")
        self.year = year

        data = self.data_by_year[year]
        self.pension_rate = data["pensionRate"]
        self.pension_cap = data["pensionCap"]
        self.health_rate = data["healthRate"]
        self.long_term_care_rate = data["longTermCareRate"]
        self.employment_rate = data["employmentRate"]

    def _load_data(self):
        """Load rates from JSON, one entry per tax year."""
        with open(self.ref_path, 'r') as f:
            data = json.load(f)

        tax_years = data.get("taxYears", [])
        if not tax_years:
            raise ValueError("social-insurance.json must contain a 'taxYears' array with at least one entry")

        tax_years = sorted(tax_years, key=lambda x: x["year"])

        for i in range(1, len(tax_years)):
            if tax_years[i]["year"] != tax_years[i-1]["year"] + 1:
                raise ValueError(f"Tax years must be sequential. Gap found between {tax_years[i-1]['year']} and {tax_years[i]['year']}")

        for year_data in tax_years:
            pension = year_data.get("nationalPension", {})
            self.data_by_year[year_data["year"]] = {
                "pensionRate": pension.get("rate", 0),
                "pensionCap": pension.get("annualCap", float('inf')),
                "healthRate": year_data.get("healthInsurance", 0),
                "longTermCareRate": year_data.get("longTermCare", 0),
                "employmentRate": year_data.get("employmentInsurance", 0)
            }

    def calc_insurance(self, gross_pay: float) -> InsuranceBreakdown:
        """Calculate each premium for an annual gross pay.

        Long-term care is charged on the health insurance premium, not on
        gross pay. The pension cap is annual, so gross_pay must be annual too.

        Args:
            gross_pay: Annual gross pay.

        Returns:
            The four premiums and their total.
        """
        national_pension = min(gross_pay * self.pension_rate, self.pension_cap)
        health_insurance = gross_pay * self.health_rate
        long_term_care = health_insurance * self.long_term_care_rate
        employment_insurance = gross_pay * self.employment_rate
        return InsuranceBreakdown(
            national_pension=national_pension,
            health_insurance=health_insurance,
            long_term_care=long_term_care,
            employment_insurance=employment_insurance,
            total=national_pension + health_insurance + long_term_care + employment_insurance
        )

    def get_rates(self) -> dict:
        """Return the rates in effect for the selected year."""
        return dict(self.data_by_year[self.year])
