"""Unit tests for overdue notification channels"""

import json
import logging
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from invoicing.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
    overdue_payload,
)
from invoicing.domain.invoice import Invoice, InvoiceStatus

WEBHOOK_URL = "https://hooks.example.com/overdue"
REAL_ASYNC_CLIENT = httpx.AsyncClient


@pytest.fixture
def invoice():
    return Invoice(
        id="inv_1",
        org_id="org_1",
        contact_id="contact_1",
        invoice_number="INV-2026-0001",
        status=InvoiceStatus.OVERDUE,
        currency="CHF",
        amount_total=Decimal("1621.50"),
        due_date=date(2026, 2, 14),
    )


def mock_client(handler):
    """Patch httpx.AsyncClient so requests are answered by `handler`"""
    def factory(**kwargs):
        return REAL_ASYNC_CLIENT(transport=httpx.MockTransport(handler), **kwargs)

    return patch(
        "invoicing.adapter.services.notification_service.httpx.AsyncClient", side_effect=factory
    )


class TestOverduePayload:
    def test_payload_fields(self, invoice):
        # Act
        payload = overdue_payload(invoice)

        # Assert
        assert payload == {
            "type": "invoice_overdue",
            "invoice_id": "inv_1",
            "org_id": "org_1",
            "contact_id": "contact_1",
            "invoice_number": "INV-2026-0001",
            "currency": "CHF",
            "amount_total": "1621.50",
            "due_date": "2026-02-14",
        }


@pytest.mark.asyncio
class TestLoggingNotificationService:
    async def test_logs_warning(self, invoice, caplog):
        # Act
        with caplog.at_level(logging.WARNING):
            delivered = await LoggingNotificationService().send_overdue_notice(invoice)

        # Assert
        assert delivered is True
        assert "[OVERDUE]" in caplog.text
        assert "INV-2026-0001" in caplog.text


@pytest.mark.asyncio
class TestWebhookNotificationService:
    async def test_posts_json(self, invoice):
        """
        Given: A reachable webhook
        When: An overdue notice is sent
        Then: The invoice payload is POSTed as JSON
        """
        # Arrange
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"ok": True})

        service = WebhookNotificationService(WEBHOOK_URL)

        # Act
        with mock_client(handler):
            delivered = await service.send_overdue_notice(invoice)

        # Assert
        assert delivered is True
        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == WEBHOOK_URL
        assert json.loads(requests[0].content)["invoice_number"] == "INV-2026-0001"

    async def test_error_status_returns_false(self, invoice):
        # Arrange
        service = WebhookNotificationService(WEBHOOK_URL)

        # Act
        with mock_client(lambda request: httpx.Response(500)):
            delivered = await service.send_overdue_notice(invoice)

        # Assert
        assert delivered is False

    async def test_connection_error_returns_false(self, invoice, caplog):
        # Arrange
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        service = WebhookNotificationService(WEBHOOK_URL)

        # Act
        with mock_client(handler):
            delivered = await service.send_overdue_notice(invoice)

        # Assert
        assert delivered is False
        assert "failed" in caplog.text


@pytest.mark.asyncio
class TestCompositeNotificationService:
    async def test_delivered_if_any_channel_succeeds(self, invoice):
        # Arrange
        failing = MagicMock()
        failing.send_overdue_notice = AsyncMock(side_effect=Exception("boom"))
        declined = MagicMock()
        declined.send_overdue_notice = AsyncMock(return_value=False)
        working = MagicMock()
        working.send_overdue_notice = AsyncMock(return_value=True)

        # Act
        delivered = await CompositeNotificationService([failing, declined, working]).send_overdue_notice(invoice)

        # Assert
        assert delivered is True
        working.send_overdue_notice.assert_called_once_with(invoice)

    async def test_not_delivered_if_all_fail(self, invoice):
        # Arrange
        declined = MagicMock()
        declined.send_overdue_notice = AsyncMock(return_value=False)

        # Act
        delivered = await CompositeNotificationService([declined]).send_overdue_notice(invoice)

        # Assert
        assert delivered is False


class TestCreateNotificationService:
    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)

    def test_log_and_webhook(self):
        # Act
        service = create_notification_service(WEBHOOK_URL)

        # Assert
        assert isinstance(service, CompositeNotificationService)
        assert [type(s) for s in service.services] == [LoggingNotificationService, WebhookNotificationService]
        assert service.services[1].webhook_url == WEBHOOK_URL
