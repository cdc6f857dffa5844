"""Consolidated data layer tests.

Covers:
- Product entity creation, defaults, equality and the computed discount
- Product table persistence (in-memory SQLite)
- Product repository operations (find, get, create, delete)
- Database engine, session scope and table creation
"""

from unittest.mock import Mock
from uuid import UUID

import pytest
from sqlalchemy import event, inspect
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from src.storefront.core.catalog import NEWEST_FIRST, PersistenceWriteFailure, ProductFilter
from src.storefront.core.services.database import (
    DbManageService,
    DbSessionService,
    build_engine,
)
from src.storefront.entities.service.product import Product, ProductRepository, ProductTable
from src.storefront.runtime.config.config_data import ConfigData, DatabaseConfig
from src.storefront.runtime.context import with_context


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_creation_with_defaults(self):
        product = Product(name="Canapé Nova", main_category="SEJOUR")

        UUID(product.id)  # Raises ValueError if invalid
        assert product.is_active is True
        assert product.sub_category is None
        assert product.gallery == []
        assert product.created_at is not None

    def test_discount_percentage(self):
        product = Product(
            name="Table Lina",
            main_category="SALLE A MANGER",
            initial_price=4000,
            top_deals_price=2990,
        )
        assert product.discount_percentage == 25

    def test_discount_without_initial_price(self):
        product = Product(name="Chaise", main_category="SEJOUR", initial_price=0, top_deals_price=100)
        assert product.discount_percentage == 0

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValueError):
            Product(name="Lit", main_category="CHAMBRE A COUCHER", initial_price=-1)

    def test_equality_ignores_timestamps(self):
        first = Product(id="p-1", name="Lit Mia", main_category="CHAMBRE A COUCHER")
        second = first.model_copy(update={"updated_at": first.updated_at.replace(year=2000)})

        assert first == second
        assert hash(first) == hash(second)
        assert first != first.model_copy(update={"name": "Lit Mia XL"})

    def test_serialization_includes_discount(self):
        product = Product(name="Salon", main_category="ENSEMBLES DE JARDIN", initial_price=100, top_deals_price=80)
        assert product.model_dump(mode="json")["discount_percentage"] == 20


class TestProductTable:
    """Test Product database table operations."""

    def test_table_round_trip(self, session: Session):
        row = ProductTable(
            id="t-1",
            name="Buffet Oslo",
            main_category="SALLE A MANGER",
            gallery=["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"],
        )
        session.add(row)
        session.commit()

        saved = session.exec(select(ProductTable).where(ProductTable.id == "t-1")).one()
        assert saved.gallery == ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"]
        assert saved.is_active is True

    def test_entity_from_row(self, add_product):
        row = add_product(name="Armoire", main_category="CHAMBRE A COUCHER", sub_category="SEJOUR")
        product = Product.model_validate(row, from_attributes=True)

        assert product.id == row.id
        assert product.sub_category == "SEJOUR"


class TestProductRepository:
    def test_create_forces_active(self, session: Session):
        repository = ProductRepository(session)
        created = repository.create(
            Product(name="Table basse", main_category="SEJOUR", is_active=False)
        )
        session.commit()

        assert created.is_active is True
        assert repository.get(created.id) == created

    def test_get_missing_returns_none(self, session: Session):
        assert ProductRepository(session).get("missing") is None

    def test_delete(self, session: Session, add_product):
        row = add_product()
        repository = ProductRepository(session)

        assert repository.delete(row.id) is True
        session.commit()
        assert repository.get(row.id) is None
        assert repository.delete(row.id) is False

    def test_find_returns_page_and_total(self, session: Session, add_product):
        for _ in range(5):
            add_product(main_category="SEJOUR")
        add_product(main_category="CHAMBRE A COUCHER")

        page = ProductRepository(session).find(
            ProductFilter(category_key="SEJOUR"), NEWEST_FIRST, limit=2, offset=2
        )
        assert len(page.rows) == 2
        assert page.matched_count == 5
        assert all(isinstance(p, Product) for p in page.rows)

    def test_page_past_the_end_keeps_total(self, session: Session, add_product):
        for _ in range(3):
            add_product(main_category="SEJOUR")

        page = ProductRepository(session).find(
            ProductFilter(category_key="SEJOUR"), NEWEST_FIRST, limit=2, offset=10
        )
        assert page.rows == []
        assert page.matched_count == 3

    def test_no_match_counts_zero(self, session: Session, add_product):
        add_product(main_category="SEJOUR")
        page = ProductRepository(session).find(
            ProductFilter(category_key="ENSEMBLES DE JARDIN"), NEWEST_FIRST, limit=12, offset=0
        )
        assert (page.rows, page.matched_count) == ([], 0)

    @pytest.mark.parametrize("offset", [0, 10])
    def test_find_reads_page_and_total_in_one_statement(
        self, engine, session: Session, add_product, offset
    ):
        for _ in range(4):
            add_product()
        selects = []

        def _record(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith("SELECT"):
                selects.append(statement)

        event.listen(engine, "before_cursor_execute", _record)
        try:
            page = ProductRepository(session).find(
                ProductFilter(), NEWEST_FIRST, limit=3, offset=offset
            )
        finally:
            event.remove(engine, "before_cursor_execute", _record)

        assert page.matched_count == 4
        assert len(selects) == 1

    def test_write_failure_is_wrapped(self):
        session = Mock(spec=Session)
        session.flush.side_effect = OperationalError("INSERT", {}, Exception("read-only"))

        with pytest.raises(PersistenceWriteFailure):
            ProductRepository(session).create(Product(name="X", main_category="SEJOUR"))


class TestDatabaseServices:
    @pytest.fixture
    def database_service(self):
        config = ConfigData(database=DatabaseConfig(url="sqlite:///:memory:"))
        service = DbSessionService(build_engine(config))
        DbManageService(service.engine).create_all()
        yield service
        service.dispose()

    def test_create_all_creates_product_table(self, database_service):
        assert "product" in inspect(database_service.engine).get_table_names()

    def test_session_scope_commits(self, database_service):
        with database_service.session_scope() as session:
            session.add(ProductTable(id="scoped", name="Console", main_category="SEJOUR"))

        with database_service.session_scope() as session:
            assert ProductRepository(session).get("scoped") is not None

    def test_session_scope_rolls_back_on_error(self, database_service):
        with pytest.raises(RuntimeError):
            with database_service.session_scope() as session:
                session.add(ProductTable(id="lost", name="Vitrine", main_category="SEJOUR"))
                session.flush()
                raise RuntimeError("abort")

        with database_service.session_scope() as session:
            assert ProductRepository(session).get("lost") is None

    def test_health_check(self, database_service):
        assert database_service.health_check() is True

    def test_init_db_uses_configured_database(self, tmp_path):
        from src.storefront.runtime.init_db import init_db

        db_path = tmp_path / "catalog.db"
        override = ConfigData(database=DatabaseConfig(url=f"sqlite:///{db_path}"))
        with with_context(override):
            init_db()

        service = DbSessionService(build_engine(override))
        try:
            assert "product" in inspect(service.engine).get_table_names()
        finally:
            service.dispose()
