import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import invoicing.domain  # noqa: F401  registers the tables on SQLModel.metadata
from invoicing.adapter.repositories.contact_repository import SqlAlchemyContactRepository
from invoicing.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from invoicing.depends import get_session
from invoicing.domain.contact import Contact
from invoicing.domain.organization import Organization

BILLING = {
    "company_name": "Muster AG",
    "address_line1": "Bahnhofstrasse 1",
    "postal_code": "8001",
    "city": "Zürich",
    "country": "CH",
    "vat_number": "CHE-123.456.789",
    "iban": "CH93 0076 2011 6238 5295 7",
    "bic": "POFICHBEXXX",
    "bank_name": "PostFinance",
    "default_tax_rate": "8.1",
    "payment_terms_days": 30,
}


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a throwaway SQLite file"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path}/test.db"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def organization(db_session):
    """Tenant with complete Swiss billing settings"""
    organization = await SqlAlchemyOrganizationRepository(db_session).create(
        Organization(name="Muster AG", settings={"billing": dict(BILLING)})
    )
    await db_session.commit()
    return organization


@pytest_asyncio.fixture
async def contact(db_session, organization):
    contact = await SqlAlchemyContactRepository(db_session).create(
        Contact(
            org_id=organization.id,
            is_company=True,
            company_name="Acme GmbH",
            address_line1="Seeweg 5",
            postal_code="3000",
            city="Bern",
            country="CH",
        )
    )
    await db_session.commit()
    return contact


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from invoicing.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
