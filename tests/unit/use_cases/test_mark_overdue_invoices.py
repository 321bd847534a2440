"""Unit tests for MarkOverdueInvoices use case"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from invoicing.app.use_cases.invoicing.mark_overdue_invoices import MarkOverdueInvoices
from invoicing.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


def make_invoice(number, status=InvoiceStatus.SENT, due=date(2026, 1, 31)):
    return Invoice(
        org_id="org_1",
        invoice_number=number,
        status=status,
        amount_total=Decimal("100.00"),
        due_date=due,
    )


@pytest.fixture
def candidates():
    return [make_invoice("INV-2026-0001"), make_invoice("INV-2026-0002")]


@pytest.fixture
def mock_invoice_repo(candidates):
    repo = MagicMock()
    repo.get_overdue_candidates = AsyncMock(return_value=candidates)
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.send_overdue_notice = AsyncMock(return_value=True)
    return service


@pytest.mark.asyncio
class TestMarkOverdueInvoices:
    async def test_marks_and_notifies(
        self, mock_uow, mock_invoice_repo, mock_notification_service, candidates
    ):
        """
        Given: Two sent invoices past their due date
        When: The overdue check runs
        Then: Both become overdue, are committed and notified
        """
        # Arrange
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo, mock_notification_service)

        # Act
        result = await use_case.execute(today=date(2026, 2, 15))

        # Assert
        assert result.is_ok()
        assert result.value.checked_count == 2
        assert result.value.marked_count == 2
        assert result.value.notified_count == 2
        assert result.value.invoice_numbers == ["INV-2026-0001", "INV-2026-0002"]
        assert all(invoice.status == InvoiceStatus.OVERDUE for invoice in candidates)
        mock_invoice_repo.get_overdue_candidates.assert_called_once_with(date(2026, 2, 15))
        mock_uow.commit.assert_called_once()
        assert mock_notification_service.send_overdue_notice.call_count == 2

    async def test_skips_invoices_no_longer_sent(self, mock_uow, mock_invoice_repo, candidates):
        # Arrange
        candidates[1].status = InvoiceStatus.PAID
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo)

        # Act
        result = await use_case.execute(today=date(2026, 2, 15))

        # Assert
        assert result.is_ok()
        assert result.value.checked_count == 2
        assert result.value.marked_count == 1
        assert result.value.notified_count == 0
        assert candidates[1].status == InvoiceStatus.PAID

    async def test_notification_failure_keeps_status(
        self, mock_uow, mock_invoice_repo, mock_notification_service, candidates
    ):
        """
        Given: The notification channel fails for one invoice
        When: The overdue check runs
        Then: Both invoices stay overdue and only the delivered notice is counted
        """
        # Arrange
        mock_notification_service.send_overdue_notice = AsyncMock(
            side_effect=[Exception("Webhook down"), True]
        )
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo, mock_notification_service)

        # Act
        result = await use_case.execute(today=date(2026, 2, 15))

        # Assert
        assert result.is_ok()
        assert result.value.marked_count == 2
        assert result.value.notified_count == 1
        assert all(invoice.status == InvoiceStatus.OVERDUE for invoice in candidates)
        mock_uow.rollback.assert_not_called()

    async def test_no_candidates(self, mock_uow, mock_invoice_repo, mock_notification_service):
        # Arrange
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[])
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo, mock_notification_service)

        # Act
        result = await use_case.execute()

        # Assert
        assert result.is_ok()
        assert result.value.checked_count == 0
        assert result.value.invoice_numbers == []
        mock_notification_service.send_overdue_notice.assert_not_called()

    async def test_rollback_on_repository_failure(self, mock_uow, mock_invoice_repo):
        # Arrange
        mock_invoice_repo.update = AsyncMock(side_effect=Exception("Database error"))
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo)

        # Act
        result = await use_case.execute(today=date(2026, 2, 15))

        # Assert
        assert result.is_err()
        assert result.error.code == "MARK_OVERDUE_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
