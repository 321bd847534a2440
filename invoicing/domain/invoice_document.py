"""Invoice Document Model

First stage of PDF generation: resolves every string and number the page
shows from the invoice, its line items, the billed contact and the tenant's
billing settings. The result is engine independent; a renderer only places
what it finds here.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
from pydantic import BaseModel

from invoicing.domain.billing_settings import BillingSettings
from invoicing.domain.contact import Contact
from invoicing.domain.invoice import Invoice, InvoiceType
from invoicing.domain.invoice_line_item import InvoiceLineItem
from invoicing.domain.payment_slip import PaymentSlipPayload, build_payment_slip
from invoicing.domain.qr_reference import format_iban, format_reference
from invoicing.domain.tax_rates import get_vat_label
from invoicing.domain.totals import line_total, round_money

DEFAULT_BILLEE = "Valued Client"


class DocumentLabels(BaseModel):
    """Static texts of one document language"""

    title: str
    invoice_number: str
    invoice_date: str
    due_date: str
    bill_to: str
    description: str
    quantity: str
    unit_price: str
    line_total: str
    subtotal: str
    total: str
    bank_details: str
    iban: str
    bic: str
    bank: str
    notes: str
    pay_online: str
    footer: str  # formatted with due_date and invoice_number
    slip_hint: str
    message: str  # formatted with invoice_number
    receipt: str
    payment_part: str
    account_payable_to: str
    reference: str
    additional_information: str
    payable_by: str
    payable_by_blank: str
    currency: str
    amount: str
    acceptance_point: str
    date_format: str


LABELS: Dict[str, DocumentLabels] = {
    "en": DocumentLabels(
        title="INVOICE",
        invoice_number="Invoice No:",
        invoice_date="Date:",
        due_date="Due Date:",
        bill_to="Bill To:",
        description="Description",
        quantity="Qty",
        unit_price="Unit Price",
        line_total="Total",
        subtotal="Subtotal:",
        total="Total",
        bank_details="Bank Details",
        iban="IBAN:",
        bic="BIC:",
        bank="Bank:",
        notes="Notes",
        pay_online="Pay online:",
        footer="Payment due by {due_date}. Please reference invoice {invoice_number} with your payment.",
        slip_hint="Please use the payment slip below for your payment.",
        message="Invoice {invoice_number}",
        receipt="Receipt",
        payment_part="Payment part",
        account_payable_to="Account / Payable to",
        reference="Reference",
        additional_information="Additional information",
        payable_by="Payable by",
        payable_by_blank="Payable by (name/address)",
        currency="Currency",
        amount="Amount",
        acceptance_point="Acceptance point",
        date_format="%d/%m/%Y",
    ),
    "de": DocumentLabels(
        title="RECHNUNG",
        invoice_number="Rechnungs-Nr:",
        invoice_date="Datum:",
        due_date="Fällig am:",
        bill_to="Rechnungsadresse:",
        description="Beschreibung",
        quantity="Menge",
        unit_price="Preis",
        line_total="Total",
        subtotal="Zwischensumme:",
        total="Total",
        bank_details="Bankverbindung",
        iban="IBAN:",
        bic="BIC:",
        bank="Bank:",
        notes="Bemerkungen",
        pay_online="Online bezahlen:",
        footer="Zahlbar bis {due_date}. Bitte geben Sie bei der Zahlung die Rechnung {invoice_number} an.",
        slip_hint="Bitte verwenden Sie den untenstehenden Einzahlungsschein für die Zahlung.",
        message="Rechnung {invoice_number}",
        receipt="Empfangsschein",
        payment_part="Zahlteil",
        account_payable_to="Konto / Zahlbar an",
        reference="Referenz",
        additional_information="Zusätzliche Informationen",
        payable_by="Zahlbar durch",
        payable_by_blank="Zahlbar durch (Name/Adresse)",
        currency="Währung",
        amount="Betrag",
        acceptance_point="Annahmestelle",
        date_format="%d.%m.%Y",
    ),
}


class DocumentLine(BaseModel):
    description: str
    quantity: str
    unit_price: str
    total: str


class PaymentSlipView(BaseModel):
    """Payment slip region: the scannable payload and its printed texts"""

    payload: PaymentSlipPayload
    account: str
    creditor_lines: List[str]
    debtor_lines: List[str]
    reference: str
    message: str
    currency: str
    amount: str


class InvoiceDocument(BaseModel):
    """Everything needed to draw one invoice, already formatted"""

    language: str
    labels: DocumentLabels
    invoice_number: str
    invoice_date: str
    due_date: str
    currency: str
    issuer_name: str
    issuer_lines: List[str]
    billee_name: str
    billee_lines: List[str]
    lines: List[DocumentLine]
    subtotal: str
    vat_label: str
    tax_total: str
    amount_total: str
    cross_border: bool
    bank_details: List[Tuple[str, str]] = []
    notes: str = ""
    payment_link: str = ""
    footer: str = ""
    payment_slip: Optional[PaymentSlipView] = None

    @property
    def title(self) -> str:
        return f"{self.labels.title} {self.invoice_number}"


def format_money(value, separator: str = "'") -> str:
    """Two decimals with grouped thousands, e.g. 1'621.50"""
    amount = round_money(Decimal(str(value if value is not None else 0)))
    return f"{amount:,.2f}".replace(",", separator)


def format_quantity(value) -> str:
    """Quantity without insignificant trailing zeros, e.g. 10 or 1.5"""
    text = f"{Decimal(str(value)).quantize(Decimal('0.0001')):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_date(value, date_format: str) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime(date_format)
    return str(value)


def _issuer_lines(settings: BillingSettings) -> List[str]:
    lines = [
        settings.address_line1,
        f"{settings.postal_code} {settings.city}".strip(),
        settings.country,
    ]
    if settings.vat_number:
        lines.append(f"{get_vat_label(settings.country)}: {settings.vat_number}")
    if settings.email:
        lines.append(settings.email)
    return lines


def _payment_slip(
    invoice: Invoice,
    contact: Optional[Contact],
    settings: BillingSettings,
    labels: DocumentLabels,
) -> PaymentSlipView:
    payload = build_payment_slip(
        currency=invoice.currency,
        amount=invoice.amount_total,
        account=invoice.iban_used or settings.account,
        creditor_name=settings.company_name,
        creditor_street=settings.address_line1,
        creditor_postal_code=settings.postal_code,
        creditor_city=settings.city,
        creditor_country=settings.country,
        debtor_name=contact.display_name if contact else "",
        debtor_street=(contact.address_line1 or "") if contact else "",
        debtor_postal_code=(contact.postal_code or "") if contact else "",
        debtor_city=(contact.city or "") if contact else "",
        debtor_country=contact.country if contact else "",
        reference=invoice.qr_reference or "",
        message=labels.message.format(invoice_number=invoice.invoice_number),
    )
    return PaymentSlipView(
        payload=payload,
        account=format_iban(payload.account),
        creditor_lines=payload.creditor.lines(),
        debtor_lines=payload.debtor.lines() if payload.debtor else [],
        reference=format_reference(payload.reference),
        message=payload.message,
        currency=payload.currency,
        amount=format_money(payload.amount, separator=" "),
    )


def build_invoice_document(
    invoice: Invoice,
    line_items: Iterable[InvoiceLineItem],
    contact: Optional[Contact],
    settings: BillingSettings,
) -> InvoiceDocument:
    """
    Prepare the printable content of an invoice

    Args:
        invoice: Invoice with persisted totals
        line_items: Lines of the invoice, in any order
        contact: Billed contact, None when it no longer exists
        settings: Resolved billing settings of the issuing tenant

    Returns:
        InvoiceDocument

    Raises:
        PaymentSlipError: If a swiss_qr invoice cannot carry a valid payment slip
    """
    labels = LABELS.get(settings.language, LABELS["en"])
    cross_border = invoice.invoice_type == InvoiceType.EU_SEPA
    invoice_date = format_date(invoice.invoice_date or invoice.created_at, labels.date_format)
    due_date = format_date(invoice.due_date, labels.date_format)

    rows = [
        DocumentLine(
            description=item.description,
            quantity=format_quantity(item.quantity),
            unit_price=format_money(item.unit_price),
            total=format_money(line_total(item)),
        )
        for item in sorted(line_items, key=lambda item: item.sort_order)
    ]

    billee_name = (contact.display_name if contact else "") or DEFAULT_BILLEE

    document = InvoiceDocument(
        language=settings.language,
        labels=labels,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice_date,
        due_date=due_date,
        currency=invoice.currency,
        issuer_name=settings.company_name,
        issuer_lines=_issuer_lines(settings),
        billee_name=billee_name,
        billee_lines=contact.address_lines() if contact else [],
        lines=rows,
        subtotal=format_money(invoice.subtotal),
        vat_label=get_vat_label(settings.country),
        tax_total=format_money(invoice.tax_total),
        amount_total=format_money(invoice.amount_total),
        cross_border=cross_border,
        notes=invoice.notes or "",
        payment_link=invoice.payment_link or "",
    )

    if cross_border:
        bank_details = [(labels.iban, format_iban(invoice.iban_used or settings.account))]
        if settings.bic:
            bank_details.append((labels.bic, settings.bic))
        if settings.bank_name:
            bank_details.append((labels.bank, settings.bank_name))
        document.bank_details = bank_details
        document.footer = labels.footer.format(
            due_date=due_date, invoice_number=invoice.invoice_number
        )
    else:
        document.payment_slip = _payment_slip(invoice, contact, settings, labels)

    return document
