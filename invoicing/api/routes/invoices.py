"""Invoice API Routes

FastAPI routes for creating invoices, moving them through their lifecycle and
downloading the PDF.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from invoicing.api.error import ClientError
from invoicing.api.schemas.invoice_request import CreateInvoiceRequestSchema
from invoicing.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    InvoiceResponseDTO,
    LineItemCommandDTO,
)
from invoicing.app.use_cases.invoicing.create_invoice import CreateInvoice
from invoicing.app.use_cases.invoicing.get_invoice import GetInvoice
from invoicing.app.use_cases.invoicing.change_invoice_status import ChangeInvoiceStatus
from invoicing.app.use_cases.invoicing.generate_invoice_pdf import GenerateInvoicePdf
from invoicing.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoicing.adapter.repositories.invoice_line_item_repository import SqlAlchemyInvoiceLineItemRepository
from invoicing.adapter.repositories.contact_repository import SqlAlchemyContactRepository
from invoicing.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from invoicing.adapter.services.pdf_service import ReportLabInvoicePdfService
from invoicing.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicing.depends import get_session

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_STATUS = {
    "ORGANIZATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONTACT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
    "UNSUPPORTED_CURRENCY": status.HTTP_400_BAD_REQUEST,
    "INVALID_PAYMENT_SLIP": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _raise_for(result):
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS.get(result.error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        )


def settings_defaults() -> dict:
    """Deployment-wide billing defaults applied where a tenant set none"""
    return {
        "invoice_prefix": ApplicationConfig.DEFAULT_INVOICE_PREFIX,
        "payment_terms_days": ApplicationConfig.DEFAULT_PAYMENT_TERMS_DAYS,
    }


def _error_example(code: str, message: str, description: str) -> dict:
    return {
        "description": description,
        "content": {"application/json": {"example": {"error": {"code": code, "message": message}}}},
    }


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: _error_example("UNSUPPORTED_CURRENCY", "Currency USD is not supported", "Invalid request"),
        404: _error_example("CONTACT_NOT_FOUND", "Contact c0a8e1d2 not found", "Organization or contact not found"),
    },
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice.

    Totals are calculated from the line items. The invoice number, due date
    and (for `swiss_qr`) the payment reference are generated.

    **Returns:**
    - 201: Invoice created
    - 400: Validation error or unsupported currency
    - 404: Organization or contact not found
    """
    command = CreateInvoiceCommandDTO(
        org_id=request.org_id,
        contact_id=request.contact_id,
        currency=request.currency,
        invoice_type=request.invoice_type,
        invoice_date=request.invoice_date,
        due_date=request.due_date,
        notes=request.notes,
        payment_link=request.payment_link,
        line_items=[LineItemCommandDTO(**item.model_dump()) for item in request.line_items],
    )

    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyInvoiceLineItemRepository(session),
        contact_repo=SqlAlchemyContactRepository(session),
        organization_repo=SqlAlchemyOrganizationRepository(session),
        settings_defaults=settings_defaults(),
    )
    result = await use_case.execute(command)
    _raise_for(result)
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: _error_example("INVOICE_NOT_FOUND", "Invoice with ID 123 not found", "Invoice not found")},
)
async def get_invoice(invoice_id: str, session: AsyncSession = Depends(get_session)):
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineItemRepository(session),
    )
    result = await use_case.execute(invoice_id)
    _raise_for(result)
    return result.value


def _status_use_case(session: AsyncSession) -> ChangeInvoiceStatus:
    return ChangeInvoiceStatus(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))


STATUS_RESPONSES = {
    404: _error_example("INVOICE_NOT_FOUND", "Invoice with ID 123 not found", "Invoice not found"),
    409: _error_example(
        "INVALID_STATUS_TRANSITION", "Invoice INV-2026-0001 cannot move from paid to cancelled",
        "Transition not allowed",
    ),
}


@router.post("/{invoice_id}/send", response_model=InvoiceResponseDTO, responses=STATUS_RESPONSES)
async def send_invoice(invoice_id: str, session: AsyncSession = Depends(get_session)):
    """Mark a draft invoice as sent"""
    result = await _status_use_case(session).send(invoice_id)
    _raise_for(result)
    return result.value


@router.post("/{invoice_id}/paid", response_model=InvoiceResponseDTO, responses=STATUS_RESPONSES)
async def mark_invoice_paid(invoice_id: str, session: AsyncSession = Depends(get_session)):
    """Mark a sent or overdue invoice as paid"""
    result = await _status_use_case(session).mark_paid(invoice_id)
    _raise_for(result)
    return result.value


@router.post("/{invoice_id}/cancel", response_model=InvoiceResponseDTO, responses=STATUS_RESPONSES)
async def cancel_invoice(invoice_id: str, session: AsyncSession = Depends(get_session)):
    """Cancel an invoice that is not paid yet"""
    result = await _status_use_case(session).cancel(invoice_id)
    _raise_for(result)
    return result.value


@router.get(
    "/{invoice_id}/download",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        404: _error_example("INVOICE_NOT_FOUND", "Invoice with ID 123 not found", "Invoice not found"),
        422: _error_example(
            "INVALID_PAYMENT_SLIP", "Payment slip for invoice INV-2026-0001 is invalid",
            "Invoice cannot carry a valid payment slip",
        ),
        500: _error_example("GENERATE_INVOICE_PDF_FAILED", "Failed to generate invoice PDF", "Rendering failed"),
    },
)
async def download_invoice_pdf(invoice_id: str, session: AsyncSession = Depends(get_session)):
    """
    Download the invoice as PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Invoice not found
    - 422: swiss_qr invoice without a valid payment slip (e.g. missing IBAN)
    - 500: Rendering failed
    """
    use_case = GenerateInvoicePdf(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyInvoiceLineItemRepository(session),
        contact_repo=SqlAlchemyContactRepository(session),
        organization_repo=SqlAlchemyOrganizationRepository(session),
        pdf_service=ReportLabInvoicePdfService(invariant=ApplicationConfig.PDF_INVARIANT),
        settings_defaults=settings_defaults(),
    )
    result = await use_case.execute(invoice_id)
    _raise_for(result)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.value.filename}"'},
    )
