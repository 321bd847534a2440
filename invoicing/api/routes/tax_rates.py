"""Tax Rate API Routes

Read-only access to the VAT table used when pricing line items.
"""

from typing import List, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from invoicing.domain.tax_rates import (
    TaxRate,
    get_country_tax_rates,
    get_supported_countries,
    get_tax_rates_for_country,
    get_vat_label,
)

router = APIRouter(prefix="/tax-rates", tags=["Tax Rates"])


class CountryTaxRatesResponse(BaseModel):
    code: str
    name: Optional[str] = None
    currency: Optional[str] = None
    vat_label: str
    rates: List[TaxRate]


def _country_response(country_code: str) -> CountryTaxRatesResponse:
    code = country_code.strip().upper()
    country = get_country_tax_rates(code)
    return CountryTaxRatesResponse(
        code=code,
        name=country.name if country else None,
        currency=country.currency if country else None,
        vat_label=get_vat_label(code),
        rates=get_tax_rates_for_country(code),
    )


@router.get("", response_model=List[CountryTaxRatesResponse])
async def list_tax_rates():
    """All supported countries with their VAT rates"""
    return [_country_response(code) for code in get_supported_countries()]


@router.get("/{country_code}", response_model=CountryTaxRatesResponse)
async def get_tax_rates(country_code: str):
    """
    VAT rates of one country.

    Unknown countries return an empty `rates` list and the generic `VAT` label.
    """
    return _country_response(country_code)
