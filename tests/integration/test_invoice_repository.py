"""Integration tests for the SQLAlchemy repositories against SQLite"""

import pytest
from datetime import date
from decimal import Decimal

from invoicing.adapter.repositories.contact_repository import SqlAlchemyContactRepository
from invoicing.adapter.repositories.invoice_line_item_repository import SqlAlchemyInvoiceLineItemRepository
from invoicing.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoicing.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from invoicing.domain.base import utc_now
from invoicing.domain.invoice import Invoice, InvoiceStatus
from invoicing.domain.invoice_line_item import InvoiceLineItem
from invoicing.domain.organization import Organization


async def add_invoice(repo, org_id, number, status=InvoiceStatus.DRAFT, due_date=None):
    return await repo.create(
        Invoice(
            org_id=org_id,
            invoice_number=number,
            status=status,
            amount_total=Decimal("100.00"),
            due_date=due_date,
        )
    )


@pytest.mark.asyncio
class TestInvoiceNumbering:
    """Test per-tenant, per-year invoice number sequences"""

    async def test_first_number_of_year(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        number = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)

        # Assert
        assert number == "INV-2026-0001"

    async def test_sequence_continues_after_highest(self, db_session, organization):
        """
        Given: INV-2026-0001 and INV-2026-0002 exist
        When: The next number is generated
        Then: INV-2026-0003 is returned
        """
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "INV-2026-0001")
        await add_invoice(repo, organization.id, "INV-2026-0002")

        # Act
        number = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)

        # Assert
        assert number == "INV-2026-0003"

    async def test_sequence_restarts_each_year(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "INV-2025-0042")

        # Act
        number = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)

        # Assert
        assert number == "INV-2026-0001"

    async def test_sequences_are_per_organization(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        other = await SqlAlchemyOrganizationRepository(db_session).create(Organization(name="Other AG"))
        await add_invoice(repo, other.id, "INV-2026-0007")

        # Act
        mine = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)
        theirs = await repo.generate_invoice_number(org_id=other.id, prefix="INV", year=2026)

        # Assert
        assert mine == "INV-2026-0001"
        assert theirs == "INV-2026-0008"

    async def test_prefixes_are_independent(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "RE-2026-0005")

        # Act
        number = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)

        # Assert
        assert number == "INV-2026-0001"

    async def test_sequence_past_four_digits(self, db_session, organization):
        """
        Given: INV-2026-9999 and INV-2026-10000 exist
        When: The next number is generated
        Then: The wider suffix counts as higher and INV-2026-10001 is returned
        """
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "INV-2026-9999")
        await add_invoice(repo, organization.id, "INV-2026-10000")

        # Act
        number = await repo.generate_invoice_number(org_id=organization.id, prefix="INV", year=2026)

        # Assert
        assert number == "INV-2026-10001"

    async def test_wildcards_in_prefix_match_literally(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "AB-2026-0005")
        await add_invoice(repo, organization.id, "A%-2026-0003")

        # Act
        underscore = await repo.generate_invoice_number(org_id=organization.id, prefix="A_", year=2026)
        percent = await repo.generate_invoice_number(org_id=organization.id, prefix="A%", year=2026)

        # Assert
        assert underscore == "A_-2026-0001"
        assert percent == "A%-2026-0004"


@pytest.mark.asyncio
class TestInvoiceQueries:
    async def test_overdue_candidates(self, db_session, organization):
        """
        Given: Sent invoices due before, on and after today plus an overdue draft
        When: Overdue candidates are requested
        Then: Only sent invoices due strictly before today are returned
        """
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        today = date(2026, 2, 15)
        await add_invoice(repo, organization.id, "INV-2026-0001", InvoiceStatus.SENT, date(2026, 2, 1))
        await add_invoice(repo, organization.id, "INV-2026-0002", InvoiceStatus.SENT, today)
        await add_invoice(repo, organization.id, "INV-2026-0003", InvoiceStatus.SENT, date(2026, 3, 1))
        await add_invoice(repo, organization.id, "INV-2026-0004", InvoiceStatus.DRAFT, date(2026, 1, 1))
        await add_invoice(repo, organization.id, "INV-2026-0005", InvoiceStatus.SENT, date(2026, 1, 10))

        # Act
        candidates = await repo.get_overdue_candidates(today)

        # Assert
        assert [invoice.invoice_number for invoice in candidates] == ["INV-2026-0005", "INV-2026-0001"]

    async def test_get_by_org_id_filters_status(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await add_invoice(repo, organization.id, "INV-2026-0001", InvoiceStatus.SENT)
        await add_invoice(repo, organization.id, "INV-2026-0002", InvoiceStatus.DRAFT)

        # Act
        all_invoices = await repo.get_by_org_id(organization.id)
        sent = await repo.get_by_org_id(organization.id, status=InvoiceStatus.SENT)

        # Assert
        assert len(all_invoices) == 2
        assert [invoice.invoice_number for invoice in sent] == ["INV-2026-0001"]

    async def test_update_persists_status(self, db_session, organization):
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        invoice = await add_invoice(repo, organization.id, "INV-2026-0001")

        # Act
        invoice.status = InvoiceStatus.SENT
        await repo.update(invoice)
        await db_session.commit()
        loaded = await repo.get_by_id(invoice.id)

        # Assert
        assert loaded.status == InvoiceStatus.SENT

    async def test_timestamps_are_stored(self, db_session, organization):
        """
        Given: A sent invoice
        When: It is marked paid with a timezone-aware timestamp and updated
        Then: paid_at and updated_at are persisted
        """
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        invoice = await add_invoice(repo, organization.id, "INV-2026-0001", InvoiceStatus.SENT)
        paid_at = utc_now()

        # Act
        invoice.status = InvoiceStatus.PAID
        invoice.paid_at = paid_at
        await repo.update(invoice)
        await db_session.commit()
        loaded = await repo.get_by_id(invoice.id)

        # Assert
        assert loaded.paid_at.replace(tzinfo=None) == paid_at.replace(tzinfo=None)
        assert loaded.updated_at is not None


@pytest.mark.asyncio
class TestLineItemsAndContacts:
    async def test_line_items_in_sort_order(self, db_session, organization):
        # Arrange
        invoice = await add_invoice(SqlAlchemyInvoiceRepository(db_session), organization.id, "INV-2026-0001")
        repo = SqlAlchemyInvoiceLineItemRepository(db_session)
        await repo.create_many([
            InvoiceLineItem(invoice_id=invoice.id, description="Second", quantity=Decimal("1"),
                            unit_price=Decimal("5.00"), sort_order=1),
            InvoiceLineItem(invoice_id=invoice.id, description="First", quantity=Decimal("2.5"),
                            unit_price=Decimal("10.00"), tax_rate=Decimal("8.1"), sort_order=0),
        ])

        # Act
        items = await repo.get_by_invoice_id(invoice.id)

        # Assert
        assert [item.description for item in items] == ["First", "Second"]
        assert items[0].quantity == Decimal("2.5")
        assert items[0].line_total == Decimal("25.00")

    async def test_contact_scoped_to_organization(self, db_session, contact):
        # Arrange
        repo = SqlAlchemyContactRepository(db_session)

        # Act
        found = await repo.get_by_id(contact.id, org_id=contact.org_id)
        foreign = await repo.get_by_id(contact.id, org_id="another-org")
        unscoped = await repo.get_by_id(contact.id)

        # Assert
        assert found.id == contact.id
        assert foreign is None
        assert unscoped.id == contact.id

    async def test_organization_settings_round_trip(self, db_session, organization):
        # Act
        loaded = await SqlAlchemyOrganizationRepository(db_session).get_by_id(organization.id)

        # Assert
        assert loaded.settings["billing"]["company_name"] == "Muster AG"
