"""Swiss QR-bill payment slip payload

Builds the payload of the Swiss Payment Standards QR-bill (version 0200,
structured addresses) with qrbill, which enforces the rules a bank checks
when scanning it: IBAN checksum and country, address completeness, and the
reference type matching the account type. Errors from qrbill surface as
PaymentSlipError.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional
from iso3166 import countries
from pydantic import BaseModel, Field
from qrbill import QRBill

SUPPORTED_CURRENCIES = ("CHF", "EUR")
MAX_AMOUNT = Decimal("999999999.99")
MAX_MESSAGE_LENGTH = 140
DEFAULT_COUNTRY = "CH"


class PaymentSlipError(ValueError):
    """Raised when the payment slip cannot be built from the given data"""
    pass


class ReferenceType(str, Enum):
    QRR = "QRR"  # 27-digit QR reference, QR-IBAN only
    SCOR = "SCOR"  # ISO 11649 creditor reference
    NON = "NON"  # Unreferenced payment


class SlipAddress(BaseModel):
    """Structured (type S) address block"""

    name: str = Field(default="", max_length=70)
    street: str = Field(default="", max_length=70)
    building_number: str = Field(default="", max_length=16)
    postal_code: str = Field(default="", max_length=16)
    city: str = Field(default="", max_length=35)
    country: str = Field(default=DEFAULT_COUNTRY, min_length=2, max_length=2)

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.postal_code and self.city)

    def to_qrbill(self) -> dict:
        return {
            "name": self.name,
            "street": self.street,
            "house_num": self.building_number,
            "pcode": self.postal_code,
            "city": self.city,
            "country": self.country,
        }

    def lines(self) -> List[str]:
        """Address as printed on the slip"""
        lines = [self.name]
        street = f"{self.street} {self.building_number}".strip()
        if street:
            lines.append(street)
        lines.append(f"{self.country}-{self.postal_code} {self.city}".strip())
        return lines


class PaymentSlipPayload(BaseModel):
    """Validated content of one QR-bill; built per render, never persisted"""

    currency: str
    amount: Decimal
    account: str
    creditor: SlipAddress
    debtor: Optional[SlipAddress] = None
    reference_type: ReferenceType = ReferenceType.NON
    reference: str = ""
    message: str = ""
    encoded: str = Field(default="", repr=False)

    class Config:
        frozen = True

    def qr_data(self) -> str:
        """Complete QR-bill payload string, elements separated by CR LF"""
        return self.encoded


def _clip(value: Optional[str], limit: int) -> str:
    return (value or "").strip()[:limit]


def country_code(value: Optional[str]) -> Optional[str]:
    """
    ISO 3166 alpha-2 code for a code or English country name

    Blank values default to CH, unknown ones give None.
    """
    value = (value or "").strip()
    if not value:
        return DEFAULT_COUNTRY
    try:
        return countries.get(value).alpha2
    except KeyError:
        return None


def _address(name, street, postal_code, city, country: str) -> SlipAddress:
    return SlipAddress(
        name=_clip(name, 70),
        street=_clip(street, 70),
        postal_code=_clip(postal_code, 16),
        city=_clip(city, 35),
        country=country,
    )


def _debtor(name, street, postal_code, city, country) -> Optional[SlipAddress]:
    """Debtor block, None unless name, locality and country are all usable"""
    code = country_code(country)
    if code is None:
        return None
    debtor = _address(name, street, postal_code, city, code)
    return debtor if debtor.is_complete else None


def build_payment_slip(
    currency: str,
    amount: Decimal,
    account: str,
    creditor_name: str,
    creditor_street: str,
    creditor_postal_code: str,
    creditor_city: str,
    creditor_country: str,
    debtor_name: str = "",
    debtor_street: str = "",
    debtor_postal_code: str = "",
    debtor_city: str = "",
    debtor_country: str = "",
    reference: str = "",
    message: str = "",
) -> PaymentSlipPayload:
    """
    Validate QR-bill inputs and assemble the payload

    Args:
        currency: CHF or EUR
        amount: Positive amount, at most 999 999 999.99
        account: Creditor IBAN (CH or LI), whitespace is ignored
        creditor_*: Creditor address, name/postal code/city are mandatory
        debtor_*: Debtor address, omitted unless name, postal code and city are set
        reference: QR reference, RF creditor reference or "" for none
        message: Unstructured message, clipped to 140 characters

    Returns:
        PaymentSlipPayload

    Raises:
        PaymentSlipError: If any field violates the QR-bill rules
    """
    currency = (currency or "").strip().upper()
    if currency not in SUPPORTED_CURRENCIES:
        raise PaymentSlipError(
            f"Unsupported currency for QR-bill: {currency or '<empty>'} "
            f"(expected one of {', '.join(SUPPORTED_CURRENCIES)})"
        )

    amount = Decimal(str(amount)) if amount is not None else Decimal("0")
    if amount <= 0:
        raise PaymentSlipError(f"QR-bill amount must be positive, got {amount}")
    if amount > MAX_AMOUNT:
        raise PaymentSlipError(f"QR-bill amount exceeds {MAX_AMOUNT}")
    amount = amount.quantize(Decimal("0.01"))

    account = "".join((account or "").split()).upper()
    if not account:
        raise PaymentSlipError("Creditor account (IBAN) is required for a QR-bill")

    creditor_code = country_code(creditor_country)
    if creditor_code is None:
        raise PaymentSlipError(f"Unknown creditor country: {creditor_country}")
    creditor = _address(
        creditor_name, creditor_street, creditor_postal_code, creditor_city, creditor_code
    )
    missing = [
        label for label, value in (
            ("name", creditor.name),
            ("postal code", creditor.postal_code),
            ("city", creditor.city),
        ) if not value
    ]
    if missing:
        raise PaymentSlipError(f"Creditor {', '.join(missing)} required for a QR-bill")

    debtor = _debtor(debtor_name, debtor_street, debtor_postal_code, debtor_city, debtor_country)
    reference = "".join((reference or "").split()).upper()
    message = _clip(message, MAX_MESSAGE_LENGTH)

    try:
        bill = QRBill(
            account=account,
            creditor=creditor.to_qrbill(),
            amount=str(amount),
            currency=currency,
            debtor=debtor.to_qrbill() if debtor else None,
            ref_number=reference or None,
            additional_information=message,
        )
    except ValueError as e:
        raise PaymentSlipError(f"Invalid QR-bill data: {e}") from e

    return PaymentSlipPayload(
        currency=currency,
        amount=amount,
        account=account,
        creditor=creditor,
        debtor=debtor,
        reference_type=ReferenceType(bill.ref_type),
        reference="".join((bill.reference_number or "").split()),
        message=message,
        encoded=bill.qr_data(),
    )
