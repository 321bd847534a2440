"""Tax/VAT Rates by Country

Standard rates for common European countries. Pure lookup: an unknown
country yields no rates and callers decide on a fallback.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel


class TaxRateType(str, Enum):
    STANDARD = "standard"
    REDUCED = "reduced"
    ZERO = "zero"


class TaxRate(BaseModel):
    label: str
    rate: Decimal
    type: TaxRateType


class CountryTaxRates(BaseModel):
    name: str
    code: str
    currency: str
    vat_label: str  # e.g. "MWST", "USt", "TVA"
    rates: List[TaxRate]


def _rates(*entries) -> List[TaxRate]:
    return [TaxRate(label=label, rate=Decimal(rate), type=kind) for label, rate, kind in entries]


TAX_RATES: Dict[str, CountryTaxRates] = {
    "CH": CountryTaxRates(
        name="Switzerland", code="CH", currency="CHF", vat_label="MWST",
        rates=_rates(
            ("Standard (8.1%)", "8.1", TaxRateType.STANDARD),
            ("Reduced (2.6%)", "2.6", TaxRateType.REDUCED),
            ("Hotel (3.8%)", "3.8", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "DE": CountryTaxRates(
        name="Germany", code="DE", currency="EUR", vat_label="USt",
        rates=_rates(
            ("Standard (19%)", "19", TaxRateType.STANDARD),
            ("Reduced (7%)", "7", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "AT": CountryTaxRates(
        name="Austria", code="AT", currency="EUR", vat_label="USt",
        rates=_rates(
            ("Standard (20%)", "20", TaxRateType.STANDARD),
            ("Reduced (10%)", "10", TaxRateType.REDUCED),
            ("Super Reduced (13%)", "13", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "FR": CountryTaxRates(
        name="France", code="FR", currency="EUR", vat_label="TVA",
        rates=_rates(
            ("Standard (20%)", "20", TaxRateType.STANDARD),
            ("Intermediate (10%)", "10", TaxRateType.REDUCED),
            ("Reduced (5.5%)", "5.5", TaxRateType.REDUCED),
            ("Super Reduced (2.1%)", "2.1", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "IT": CountryTaxRates(
        name="Italy", code="IT", currency="EUR", vat_label="IVA",
        rates=_rates(
            ("Standard (22%)", "22", TaxRateType.STANDARD),
            ("Reduced (10%)", "10", TaxRateType.REDUCED),
            ("Super Reduced (4%)", "4", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "NL": CountryTaxRates(
        name="Netherlands", code="NL", currency="EUR", vat_label="BTW",
        rates=_rates(
            ("Standard (21%)", "21", TaxRateType.STANDARD),
            ("Reduced (9%)", "9", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "BE": CountryTaxRates(
        name="Belgium", code="BE", currency="EUR", vat_label="TVA/BTW",
        rates=_rates(
            ("Standard (21%)", "21", TaxRateType.STANDARD),
            ("Reduced (12%)", "12", TaxRateType.REDUCED),
            ("Super Reduced (6%)", "6", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "LU": CountryTaxRates(
        name="Luxembourg", code="LU", currency="EUR", vat_label="TVA",
        rates=_rates(
            ("Standard (17%)", "17", TaxRateType.STANDARD),
            ("Intermediate (14%)", "14", TaxRateType.REDUCED),
            ("Reduced (8%)", "8", TaxRateType.REDUCED),
            ("Super Reduced (3%)", "3", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "ES": CountryTaxRates(
        name="Spain", code="ES", currency="EUR", vat_label="IVA",
        rates=_rates(
            ("Standard (21%)", "21", TaxRateType.STANDARD),
            ("Reduced (10%)", "10", TaxRateType.REDUCED),
            ("Super Reduced (4%)", "4", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
    "PT": CountryTaxRates(
        name="Portugal", code="PT", currency="EUR", vat_label="IVA",
        rates=_rates(
            ("Standard (23%)", "23", TaxRateType.STANDARD),
            ("Intermediate (13%)", "13", TaxRateType.REDUCED),
            ("Reduced (6%)", "6", TaxRateType.REDUCED),
            ("Exempt (0%)", "0", TaxRateType.ZERO),
        ),
    ),
}


def get_country_tax_rates(country_code: str) -> Optional[CountryTaxRates]:
    """Full tax table entry for a country, None if unsupported"""
    return TAX_RATES.get((country_code or "").strip().upper())


def get_tax_rates_for_country(country_code: str) -> List[TaxRate]:
    """Valid tax rates for a country; empty list if unsupported"""
    country = get_country_tax_rates(country_code)
    if not country:
        return []
    return list(country.rates)


def get_standard_rate(country_code: str) -> Optional[Decimal]:
    """Standard VAT band of a country, None if unsupported"""
    for rate in get_tax_rates_for_country(country_code):
        if rate.type == TaxRateType.STANDARD:
            return rate.rate
    return None


def get_currency_for_country(country_code: str) -> Optional[str]:
    country = get_country_tax_rates(country_code)
    return country.currency if country else None


def get_vat_label(country_code: str) -> str:
    """VAT label printed on invoices (e.g. "MWST"), "VAT" if unsupported"""
    country = get_country_tax_rates(country_code)
    return country.vat_label if country else "VAT"


def is_valid_rate(country_code: str, rate: Decimal) -> bool:
    return any(r.rate == Decimal(str(rate)) for r in get_tax_rates_for_country(country_code))


def get_supported_countries() -> List[str]:
    return list(TAX_RATES.keys())


def get_supported_currencies() -> List[str]:
    """Currencies of the supported countries, in table order"""
    return list(dict.fromkeys(country.currency for country in TAX_RATES.values()))
