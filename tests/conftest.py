"""Pytest fixtures for partnerpool tests."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from partnerpool.config.settings import SearchConfig, Settings
from partnerpool.db.models import (
    Base,
    IdentifierType,
    LegalEntity,
    LegalEntityIdentifier,
    LegalForm,
    LogisticAddress,
    Site,
)

# =============================================================================
# Seeded business partners
# =============================================================================
#
# Müller Handels GmbH & Co. KG   BPNL000000000065
#   legal address      A1 BPNA0000000001XY  Bahnhofstraße 1, 71034 Böblingen
#   additional address A3 BPNA00000000009W  "Lager Nord", Industriestraße 10, 71034 Böblingen
#   site Werk Sindelfingen  BPNS0000000000WN
#     main address       A2 BPNA0000000002XY  Stuttgarter Straße 5, 71063 Sindelfingen
#     additional address A5 BPNA0000000005XY  "Tor 2", Hanns-Klemm-Straße 3, 71063 Sindelfingen
# Schmidt Logistik AG            BPNL0000000002XY
#   legal address      A4 BPNA0000000004XY  Hauptstraße 20, 10115 Berlin
#   site Lager Spandau      BPNS0000000002XY
#     main address       A7 BPNA0000000007XY  Am Juliusturm 8, 13599 Berlin
# Müller AG                      BPNL0000000003XY
#   legal address      A6 BPNA0000000006XY  Marktplatz 1, 80331 München

MUELLER_HANDELS_BPN = "BPNL000000000065"
SCHMIDT_BPN = "BPNL0000000002XY"
MUELLER_AG_BPN = "BPNL0000000003XY"
WERK_SINDELFINGEN_BPN = "BPNS0000000000WN"
LAGER_SPANDAU_BPN = "BPNS0000000002XY"
LAGER_NORD_BPN = "BPNA00000000009W"
TOR_2_BPN = "BPNA0000000005XY"


def _address(
    id: int,
    bpn: str,
    street_name: str,
    house_number: str,
    postal_code: str,
    city: str,
    name: str | None = None,
) -> LogisticAddress:
    return LogisticAddress(
        id=id,
        bpn=bpn,
        name=name,
        street_name=street_name,
        street_house_number=house_number,
        postal_code=postal_code,
        city=city,
        country="DE",
        administrative_area_level1="DE-BW" if postal_code.startswith("7") else None,
    )


def build_partners() -> list[LegalEntity]:
    """Build the seeded legal entities with their sites and addresses."""
    gmbh_co_kg = LegalForm(
        id=1, technical_key="DE_GMBH_CO_KG", name="GmbH & Co. KG", abbreviation="GmbH & Co. KG"
    )
    ag = LegalForm(id=2, technical_key="DE_AG", name="Aktiengesellschaft", abbreviation="AG")
    vat_id = IdentifierType(
        id=1, technical_key="EU_VAT_ID_DE", name="Value added tax identification number"
    )

    a1 = _address(1, "BPNA0000000001XY", "Bahnhofstraße", "1", "71034", "Böblingen")
    a2 = _address(
        2,
        "BPNA0000000002XY",
        "Stuttgarter Straße",
        "5",
        "71063",
        "Sindelfingen",
        name="Werk Sindelfingen Haupttor",
    )
    a3 = _address(
        3, LAGER_NORD_BPN, "Industriestraße", "10", "71034", "Böblingen", name="Lager Nord"
    )
    a4 = _address(4, "BPNA0000000004XY", "Hauptstraße", "20", "10115", "Berlin")
    a5 = _address(5, TOR_2_BPN, "Hanns-Klemm-Straße", "3", "71063", "Sindelfingen", name="Tor 2")
    a6 = _address(6, "BPNA0000000006XY", "Marktplatz", "1", "80331", "München")
    a7 = _address(
        7,
        "BPNA0000000007XY",
        "Am Juliusturm",
        "8",
        "13599",
        "Berlin",
        name="Lager Spandau Einfahrt",
    )

    mueller_handels = LegalEntity(
        id=1,
        bpn=MUELLER_HANDELS_BPN,
        legal_name="Müller Handels GmbH & Co. KG",
        legal_form=gmbh_co_kg,
        is_participant_data=True,
        shared_by_owner=True,
        checked_by_external_data_source=True,
        number_of_sharing_members=2,
        confidence_level=8,
    )
    mueller_handels.identifiers.append(
        LegalEntityIdentifier(
            id=1, value="DE123456789", issuing_body="Bundeszentralamt für Steuern", type=vat_id
        )
    )
    mueller_handels.addresses.extend([a1, a2, a3, a5])
    mueller_handels.legal_address = a1
    werk = Site(id=1, bpn=WERK_SINDELFINGEN_BPN, name="Werk Sindelfingen")
    werk.addresses.extend([a2, a5])
    werk.main_address = a2
    mueller_handels.sites.append(werk)

    schmidt = LegalEntity(
        id=2, bpn=SCHMIDT_BPN, legal_name="Schmidt Logistik AG", legal_form=ag
    )
    schmidt.addresses.extend([a4, a7])
    schmidt.legal_address = a4
    spandau = Site(id=2, bpn=LAGER_SPANDAU_BPN, name="Lager Spandau")
    spandau.addresses.append(a7)
    spandau.main_address = a7
    schmidt.sites.append(spandau)

    mueller_ag = LegalEntity(id=3, bpn=MUELLER_AG_BPN, legal_name="Müller AG", legal_form=ag)
    mueller_ag.addresses.append(a6)
    mueller_ag.legal_address = a6

    return [mueller_handels, schmidt, mueller_ag]


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    Tests that call setup_logging() must not leak handlers into other tests.
    """
    yield
    structlog.reset_defaults()


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on an empty database."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded_engine(test_engine, session_factory):
    """Engine whose database holds the seeded business partners."""
    async with session_factory() as session:
        session.add_all(build_partners())
        await session.commit()
    return test_engine


@pytest_asyncio.fixture
async def seeded_session(seeded_engine, session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Fresh session over the seeded database, as a request would get."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def search_config() -> SearchConfig:
    return SearchConfig()


# =============================================================================
# API test fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create settings for API testing."""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        ENVIRONMENT="test",
        DEBUG=True,
        log_level="DEBUG",
    )


@pytest.fixture
def test_app(test_settings: Settings, session_factory) -> FastAPI:
    """Create a FastAPI test application bound to the test database."""
    from partnerpool.api.app import create_app
    from partnerpool.db.dependencies import get_db

    app = create_app(settings=test_settings)

    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    return app


@pytest_asyncio.fixture
async def test_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing.

    Calls the application directly without network overhead.
    """
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def seeded_client(seeded_engine, test_client: AsyncClient) -> AsyncClient:
    """HTTP client over the seeded database."""
    return test_client
