import os
import sys
import json
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.SocialInsuranceDetails import SocialInsuranceDetails


@pytest.fixture(scope="module")
def insurance():
    return SocialInsuranceDetails()


def test_reference_rates(insurance):
    assert insurance.year == 2025
    assert insurance.pension_rate == pytest.approx(0.045)
    assert insurance.pension_cap == 3258000
    assert insurance.health_rate == pytest.approx(0.03545)
    assert insurance.long_term_care_rate == pytest.approx(0.1295)
    assert insurance.employment_rate == pytest.approx(0.009)
    assert insurance.get_rates()['pensionCap'] == 3258000


def test_below_pension_cap(insurance):
    result = insurance.calc_insurance(50000000)
    # 50,000,000 * 4.5% = 2,250,000 is under the 3,258,000 cap
    assert result.national_pension == pytest.approx(2250000)
    # 50,000,000 * 3.545%
    assert result.health_insurance == pytest.approx(1772500)
    # long-term care is 12.95% of the health premium, not of gross pay
    assert result.long_term_care == pytest.approx(1772500 * 0.1295)
    assert result.long_term_care == pytest.approx(229538.75)
    assert result.employment_insurance == pytest.approx(450000)
    assert result.total == pytest.approx(4702038.75)


def test_pension_cap_applies(insurance):
    # 4.5% of anything above 72,400,000 exceeds the cap
    for gross in (72400001, 100000000, 150000000, 1000000000):
        result = insurance.calc_insurance(gross)
        assert result.national_pension == 3258000


def test_cap_boundary(insurance):
    result = insurance.calc_insurance(72400000)
    assert result.national_pension == pytest.approx(3258000)


def test_total_is_sum_of_components(insurance):
    result = insurance.calc_insurance(100000000)
    assert result.total == pytest.approx(
        result.national_pension + result.health_insurance
        + result.long_term_care + result.employment_insurance
    )
    # 3,258,000 + 3,545,000 + 459,077.5 + 900,000
    assert result.total == pytest.approx(8162077.5)


def test_zero_gross_pay(insurance):
    result = insurance.calc_insurance(0)
    assert result.total == 0


def test_missing_tax_years(tmp_path):
    ref = tmp_path / 'social-insurance.json'
    ref.write_text(json.dumps({"taxYears": []}))
    with pytest.raises(ValueError):
        SocialInsuranceDetails(ref_path=str(ref))


def test_unknown_year():
    with pytest.raises(ValueError):
        SocialInsuranceDetails(2019)


def test_missing_pension_cap_means_uncapped(tmp_path):
    ref = tmp_path / 'social-insurance.json'
    ref.write_text(json.dumps({"taxYears": [{
        "year": 2025,
        "nationalPension": {"rate": 0.05},
        "healthInsurance": 0,
        "longTermCare": 0,
        "employmentInsurance": 0
    }]}))
    insurance = SocialInsuranceDetails(ref_path=str(ref))
    assert insurance.calc_insurance(1000000000).national_pension == pytest.approx(50000000)
