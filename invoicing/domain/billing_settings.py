"""Billing Settings Value Object

Typed view over the tenant's persisted `settings["billing"]` bag. Defaults are
resolved here once so renderers never deal with missing keys.
"""

from decimal import Decimal
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class BillingSettings(BaseModel):
    """
    Issuer and banking configuration of one tenant

    Missing or null text fields resolve to empty strings so documents render
    blanks instead of failing.
    """

    company_name: str = Field(default="", description="Issuer name")
    address_line1: str = Field(default="", description="Issuer street and number")
    postal_code: str = Field(default="", description="Issuer postal code")
    city: str = Field(default="", description="Issuer city")
    country: str = Field(default="CH", description="Issuer country (ISO 3166-1 alpha-2)")
    vat_number: str = Field(default="", description="Issuer VAT registration number")
    email: str = Field(default="", description="Issuer contact email")
    iban: str = Field(default="", description="Creditor account (IBAN)")
    bic: str = Field(default="", description="Bank identifier code")
    bank_name: str = Field(default="", description="Bank name")
    default_currency: str = Field(default="CHF", description="Currency for new invoices")
    default_tax_rate: Decimal = Field(default=Decimal("8.1"), description="Tax rate for new lines")
    invoice_prefix: str = Field(default="INV", description="Invoice number prefix")
    payment_terms_days: int = Field(default=30, ge=0, description="Days until due date")
    language: Literal["en", "de"] = Field(default="en", description="Document language")

    class Config:
        extra = "ignore"

    @field_validator(
        "company_name", "address_line1", "postal_code", "city", "vat_number",
        "email", "iban", "bic", "bank_name", mode="before",
    )
    @classmethod
    def blank_if_missing(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("country", "default_currency", mode="before")
    @classmethod
    def upper_code(cls, v, info):
        if not v:
            return "CH" if info.field_name == "country" else "CHF"
        return str(v).strip().upper()

    @field_validator("invoice_prefix", mode="before")
    @classmethod
    def prefix_or_default(cls, v):
        return str(v).strip() if v else "INV"

    @field_validator("language", mode="before")
    @classmethod
    def known_language(cls, v):
        v = str(v or "en").lower()[:2]
        return v if v in ("en", "de") else "en"

    @property
    def account(self) -> str:
        """IBAN without whitespace"""
        return "".join(self.iban.split())

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Dict[str, Any]],
        defaults: Optional[Dict[str, Any]] = None,
    ) -> "BillingSettings":
        """
        Resolve billing settings from an organization settings bag

        Args:
            settings: Organization.settings as persisted (may be None)
            defaults: Deployment-wide values used where the tenant set none

        Returns:
            BillingSettings with defaults applied
        """
        billing = (settings or {}).get("billing") or {}
        if not isinstance(billing, dict):
            billing = {}
        values = {k: v for k, v in (defaults or {}).items() if v is not None}
        values.update({k: v for k, v in billing.items() if v is not None})
        return cls.model_validate(values)
