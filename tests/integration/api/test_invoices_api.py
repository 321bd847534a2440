"""Integration tests for the invoice and tax rate HTTP API"""

import pytest

from invoicing.domain.invoice import InvoiceStatus


def invoice_body(organization, contact, **overrides):
    body = {
        "org_id": organization.id,
        "contact_id": contact.id,
        "currency": "CHF",
        "invoice_date": "2026-01-15",
        "line_items": [
            {"description": "Consulting", "quantity": "10", "unit_price": "150.00", "tax_rate": "8.1"}
        ],
    }
    body.update(overrides)
    return body


async def create_invoice(client, organization, contact, **overrides):
    response = await client.post("/api/invoices", json=invoice_body(organization, contact, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
class TestCreateInvoiceEndpoint:
    async def test_create_invoice(self, client, organization, contact):
        """
        Given: A tenant with billing settings and a contact
        When: POST /api/invoices is called
        Then: A draft with calculated totals, number, due date and reference is returned
        """
        # Act
        response = await client.post("/api/invoices", json=invoice_body(organization, contact))

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "INV-2026-0001"
        assert data["status"] == "draft"
        assert data["invoice_type"] == "swiss_qr"
        assert float(data["subtotal"]) == 1500.00
        assert float(data["tax_total"]) == 121.50
        assert float(data["amount_total"]) == 1621.50
        assert data["due_date"] == "2026-02-14"
        assert data["qr_reference"] == "RF16INV20260001"
        assert data["iban_used"] == "CH9300762011623852957"
        assert len(data["line_items"]) == 1

    async def test_numbers_increment(self, client, organization, contact):
        # Act
        first = await create_invoice(client, organization, contact)
        second = await create_invoice(client, organization, contact)

        # Assert
        assert first["invoice_number"] == "INV-2026-0001"
        assert second["invoice_number"] == "INV-2026-0002"

    async def test_unknown_contact(self, client, organization, contact):
        # Act
        response = await client.post(
            "/api/invoices", json=invoice_body(organization, contact, contact_id="missing")
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CONTACT_NOT_FOUND"

    async def test_unknown_organization(self, client, organization, contact):
        # Act
        response = await client.post(
            "/api/invoices", json=invoice_body(organization, contact, org_id="missing")
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORGANIZATION_NOT_FOUND"

    async def test_unsupported_currency(self, client, organization, contact):
        # Act
        response = await client.post(
            "/api/invoices", json=invoice_body(organization, contact, currency="usd")
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_CURRENCY"

    async def test_validation_error(self, client, organization, contact):
        """
        Given: A line item with zero quantity
        When: POST /api/invoices is called
        Then: 400 VALIDATION_ERROR in the common error shape
        """
        # Arrange
        body = invoice_body(organization, contact, line_items=[
            {"description": "Consulting", "quantity": "0", "unit_price": "150.00"}
        ])

        # Act
        response = await client.post("/api/invoices", json=body)

        # Assert
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "quantity" in error["message"]

    async def test_due_date_before_invoice_date(self, client, organization, contact):
        # Act
        response = await client.post(
            "/api/invoices", json=invoice_body(organization, contact, due_date="2026-01-01")
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
class TestInvoiceLifecycleEndpoints:
    async def test_get_invoice(self, client, organization, contact):
        # Arrange
        created = await create_invoice(client, organization, contact)

        # Act
        response = await client.get(f"/api/invoices/{created['invoice_id']}")

        # Assert
        assert response.status_code == 200
        assert response.json()["invoice_number"] == created["invoice_number"]
        assert response.json()["line_items"][0]["description"] == "Consulting"

    async def test_get_unknown_invoice(self, client):
        # Act
        response = await client.get("/api/invoices/missing")

        # Assert
        assert response.status_code == 404
        assert response.json() == {
            "error": {"code": "INVOICE_NOT_FOUND", "message": "Invoice with ID missing not found"}
        }

    async def test_send_then_pay(self, client, organization, contact):
        """
        Given: A draft invoice
        When: It is sent and then marked paid
        Then: Each step succeeds and a second payment is a 409 conflict
        """
        # Arrange
        invoice_id = (await create_invoice(client, organization, contact))["invoice_id"]

        # Act
        sent = await client.post(f"/api/invoices/{invoice_id}/send")
        paid = await client.post(f"/api/invoices/{invoice_id}/paid")
        cancelled = await client.post(f"/api/invoices/{invoice_id}/cancel")

        # Assert
        assert sent.status_code == 200
        assert sent.json()["status"] == InvoiceStatus.SENT.value
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert paid.json()["paid_at"] is not None
        assert cancelled.status_code == 409
        assert cancelled.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    async def test_cancel_draft(self, client, organization, contact):
        # Arrange
        invoice_id = (await create_invoice(client, organization, contact))["invoice_id"]

        # Act
        response = await client.post(f"/api/invoices/{invoice_id}/cancel")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"


@pytest.mark.asyncio
class TestDownloadEndpoint:
    async def test_download_swiss_qr_pdf(self, client, organization, contact):
        # Arrange
        created = await create_invoice(client, organization, contact)

        # Act
        response = await client.get(f"/api/invoices/{created['invoice_id']}/download")

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="INV-2026-0001.pdf"'
        assert response.content.startswith(b"%PDF")

    async def test_download_cross_border_pdf(self, client, organization, contact):
        # Arrange
        created = await create_invoice(
            client, organization, contact, invoice_type="eu_sepa", currency="EUR"
        )

        # Act
        response = await client.get(f"/api/invoices/{created['invoice_id']}/download")

        # Assert
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    async def test_download_without_iban(self, client, db_session, organization, contact):
        """
        Given: A swiss_qr invoice of a tenant that has no IBAN
        When: The PDF is downloaded
        Then: 422 INVALID_PAYMENT_SLIP is returned
        """
        # Arrange
        billing = dict(organization.settings["billing"], iban="")
        organization.settings = {"billing": billing}
        db_session.add(organization)
        await db_session.commit()
        created = await create_invoice(client, organization, contact)

        # Act
        response = await client.get(f"/api/invoices/{created['invoice_id']}/download")

        # Assert
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PAYMENT_SLIP"

    async def test_download_unknown_invoice(self, client):
        # Act
        response = await client.get("/api/invoices/missing/download")

        # Assert
        assert response.status_code == 404


@pytest.mark.asyncio
class TestTaxRateAndHealthEndpoints:
    async def test_list_tax_rates(self, client):
        # Act
        response = await client.get("/api/tax-rates")

        # Assert
        assert response.status_code == 200
        codes = [country["code"] for country in response.json()]
        assert codes[0] == "CH"
        assert "DE" in codes

    async def test_country_tax_rates(self, client):
        # Act
        response = await client.get("/api/tax-rates/ch")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["code"] == "CH"
        assert data["vat_label"] == "MWST"
        assert [float(rate["rate"]) for rate in data["rates"]] == [8.1, 2.6, 3.8, 0.0]

    async def test_unknown_country_has_no_rates(self, client):
        # Act
        response = await client.get("/api/tax-rates/US")

        # Assert
        assert response.status_code == 200
        assert response.json()["rates"] == []
        assert response.json()["vat_label"] == "VAT"

    async def test_health(self, client):
        # Act
        response = await client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
