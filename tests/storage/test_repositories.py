"""
Tests for the async repositories.

============================================================
PURPOSE
============================================================
Repositories against a real SQLite database (aiosqlite),
one fresh database file per test.

============================================================
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from core.domain import (
    InstrumentType,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
)
from storage.database import Database, DatabaseConfig
from storage.models import InstrumentModel, MarketDataModel, UserModel
from storage.repositories import (
    ConnectionError,
    InstrumentRepository,
    MarketDataRepository,
    OrderRepository,
    QueryError,
    UserRepository,
)


# ============================================================
# FIXTURES
# ============================================================

@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'brokerage.db'}"))
    await db.connect()
    await db.create_all()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def seeded(database):
    async with database.session_factory() as session:
        async with session.begin():
            session.add_all([
                UserModel(id=1, email="emiliano@test.com", account_number="10001"),
                UserModel(id=2, email="jose@test.com", account_number="10002"),
                InstrumentModel(id=47, ticker="PAMP", name="Pampa Holding S.A.", type="ACCIONES"),
                InstrumentModel(id=31, ticker="YPFD", name="Y.P.F. S.A.", type="ACCIONES"),
                InstrumentModel(id=13, ticker="BMA", name="Banco Macro S.A.", type="ACCIONES"),
                InstrumentModel(id=1, ticker="DYCA", name="Dycasa S.A.", type="ACCIONES"),
                InstrumentModel(id=66, ticker="ARS", name="PESOS", type="MONEDA"),
            ])
        async with session.begin():
            session.add_all([
                MarketDataModel(instrument_id=47, close=Decimal("925.85"), quote_date=date(2023, 7, 13)),
                MarketDataModel(instrument_id=47, close=Decimal("930.00"), quote_date=date(2023, 7, 14)),
                MarketDataModel(instrument_id=47, close=Decimal("920.00"), quote_date=date(2023, 7, 12)),
            ])
    return database


def make_order(user_id=1, side=OrderSide.BUY, status=OrderStatus.FILLED, price="930.00", size=10) -> Order:
    return Order(
        instrument_id=47,
        user_id=user_id,
        side=side,
        type=OrderType.MARKET,
        size=size,
        price=Decimal(price),
        status=status,
        datetime=datetime(2024, 7, 15, 14, 30, tzinfo=timezone.utc),
    )


# ============================================================
# DATABASE
# ============================================================

class TestDatabase:

    @pytest.mark.asyncio
    async def test_health_check(self, database):
        assert database.is_connected
        assert await database.health_check() is True

    @pytest.mark.asyncio
    async def test_session_factory_requires_connect(self):
        db = Database(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))

        assert not db.is_connected
        assert await db.health_check() is False
        with pytest.raises(RuntimeError):
            db.session_factory

    def test_safe_url_hides_credentials(self):
        config = DatabaseConfig(url="postgresql+asyncpg://broker:secret@db:5432/brokerage")

        assert "secret" not in config.safe_url
        assert not config.is_sqlite


# ============================================================
# USERS / INSTRUMENTS / MARKET DATA
# ============================================================

class TestUserRepository:

    @pytest.mark.asyncio
    async def test_get_by_id(self, seeded):
        user = await UserRepository(seeded.session_factory).get_by_id(1)

        assert user.email == "emiliano@test.com"
        assert user.account_number == "10001"

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, seeded):
        assert await UserRepository(seeded.session_factory).get_by_id(404) is None


class TestInstrumentRepository:

    @pytest.mark.asyncio
    async def test_get_by_ticker(self, seeded):
        instrument = await InstrumentRepository(seeded.session_factory).get_by_ticker("PAMP")

        assert instrument.id == 47
        assert instrument.type == InstrumentType.ACCIONES

    @pytest.mark.asyncio
    async def test_get_by_ticker_is_exact(self, seeded):
        assert await InstrumentRepository(seeded.session_factory).get_by_ticker("PAM") is None

    @pytest.mark.asyncio
    async def test_get_by_id(self, seeded):
        instrument = await InstrumentRepository(seeded.session_factory).get_by_id(66)

        assert instrument.ticker == "ARS"
        assert instrument.type == InstrumentType.MONEDA

    @pytest.mark.asyncio
    async def test_search_matches_name_case_insensitive(self, seeded):
        results = await InstrumentRepository(seeded.session_factory).search_partial("s.a.", 10)

        assert [i.ticker for i in results] == ["BMA", "DYCA", "PAMP", "YPFD"]

    @pytest.mark.asyncio
    async def test_search_matches_ticker(self, seeded):
        results = await InstrumentRepository(seeded.session_factory).search_partial("ypf", 10)

        assert [i.ticker for i in results] == ["YPFD"]

    @pytest.mark.asyncio
    async def test_search_respects_limit(self, seeded):
        results = await InstrumentRepository(seeded.session_factory).search_partial("S.A", 2)

        assert [i.ticker for i in results] == ["BMA", "DYCA"]

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, seeded):
        assert await InstrumentRepository(seeded.session_factory).search_partial("%%%", 10) == []


class TestMarketDataRepository:

    @pytest.mark.asyncio
    async def test_latest_by_date(self, seeded):
        latest = await MarketDataRepository(seeded.session_factory).get_latest(47)

        assert latest.close == Decimal("930.00")
        assert latest.date == date(2023, 7, 14)

    @pytest.mark.asyncio
    async def test_no_data_returns_none(self, seeded):
        assert await MarketDataRepository(seeded.session_factory).get_latest(31) is None


# ============================================================
# ORDERS
# ============================================================

class TestOrderRepository:

    @pytest.mark.asyncio
    async def test_save_assigns_id(self, seeded):
        repository = OrderRepository(seeded.session_factory)

        saved = await repository.save(make_order())

        assert saved.id is not None
        assert saved.price == Decimal("930.00")
        assert saved.status == OrderStatus.FILLED

    @pytest.mark.asyncio
    async def test_find_by_user_and_status(self, seeded):
        repository = OrderRepository(seeded.session_factory)
        first = await repository.save(make_order())
        await repository.save(make_order(status=OrderStatus.REJECTED))
        await repository.save(make_order(user_id=2))
        second = await repository.save(make_order(side=OrderSide.SELL, size=4, price="931.50"))

        filled = await repository.find_by_user_and_status(1, OrderStatus.FILLED)

        assert [o.id for o in filled] == [first.id, second.id]
        assert filled[1].side == OrderSide.SELL
        assert filled[1].size == 4
        assert filled[1].price == Decimal("931.50")
        assert filled[1].type == OrderType.MARKET

    @pytest.mark.asyncio
    async def test_rejected_orders_are_persisted(self, seeded):
        repository = OrderRepository(seeded.session_factory)
        await repository.save(make_order(status=OrderStatus.REJECTED))

        rejected = await repository.find_by_user_and_status(1, OrderStatus.REJECTED)

        assert len(rejected) == 1


# ============================================================
# ERROR WRAPPING
# ============================================================

class TestErrorWrapping:

    def test_operational_error_maps_to_connection_error(self):
        repository = UserRepository(session_factory=None)
        error = OperationalError("SELECT 1", {}, Exception("unable to open database file"))

        with pytest.raises(ConnectionError) as exc_info:
            repository._handle_db_error(error, "get_by_id")

        assert "[UserRepository] get_by_id" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_table_maps_to_repository_error(self, tmp_path):
        db = Database(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}"))
        await db.connect()
        try:
            with pytest.raises((QueryError, ConnectionError)):
                await UserRepository(db.session_factory).get_by_id(1)
        finally:
            await db.disconnect()
