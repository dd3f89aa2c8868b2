"""
Tests for the storage backends.
"""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tilltrack.core.database import check_db_connection, init_db
from tilltrack.core.redis_client import check_redis_connection
from tilltrack.core.repository import (
    InMemoryRepository,
    RedisRepository,
    SqlRepository,
    build_repository,
    product_list_adapter,
)


@pytest.fixture
def sql_repository():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    return SqlRepository(sessionmaker(bind=engine, autoflush=False, autocommit=False))


@pytest.fixture
def history(make_sale, make_transaction, meal, beer, sandwich):
    return [
        make_sale(datetime(2024, 3, 15, 9, 0), sandwich, 2),
        make_transaction(datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc), [(meal, 1), (beer, 3)]),
        make_sale(datetime(2024, 3, 15, 18, 30), beer),
    ]


class TestInMemoryRepository:
    """Test cases for InMemoryRepository."""

    def test_append_keeps_order(self, history):
        repository = InMemoryRepository()

        for transaction in history:
            repository.append_transaction(transaction)

        assert repository.load_transactions() == history

    def test_loaded_list_is_a_snapshot(self, history):
        repository = InMemoryRepository(transactions=history)

        repository.load_transactions().clear()

        assert len(repository.load_transactions()) == 3


class TestSqlRepository:
    """Test cases for SqlRepository."""

    def test_empty_store(self, sql_repository):
        assert sql_repository.load_transactions() == []
        assert sql_repository.load_products() == []

    def test_append_and_reload_is_identical(self, sql_repository, history):
        for transaction in history:
            sql_repository.append_transaction(transaction)

        assert sql_repository.load_transactions() == history

    def test_save_transactions_replaces_history(self, sql_repository, history):
        sql_repository.append_transaction(history[0])

        sql_repository.save_transactions(history[1:])

        assert sql_repository.load_transactions() == history[1:]

    def test_products_round_trip(self, sql_repository, meal, beer, sandwich):
        sql_repository.save_products([meal, beer])
        sql_repository.save_products([sandwich, meal])

        assert sql_repository.load_products() == [sandwich, meal]


class TestRedisRepository:
    """Test cases for RedisRepository with a mocked client."""

    @pytest.fixture
    def client(self):
        return Mock()

    @pytest.fixture
    def repository(self, client):
        return RedisRepository(client, key_prefix="test")

    def test_append_pushes_json(self, repository, client, history):
        repository.append_transaction(history[0])

        client.rpush.assert_called_once_with("test:transactions", history[0].model_dump_json())

    def test_load_transactions(self, repository, client, history):
        client.lrange.return_value = [t.model_dump_json() for t in history]

        assert repository.load_transactions() == history
        client.lrange.assert_called_once_with("test:transactions", 0, -1)

    def test_save_transactions_uses_pipeline(self, repository, client, history):
        pipe = client.pipeline.return_value

        repository.save_transactions(history)

        pipe.delete.assert_called_once_with("test:transactions")
        pipe.rpush.assert_called_once_with("test:transactions", *[t.model_dump_json() for t in history])
        pipe.execute.assert_called_once()

    def test_save_empty_history_only_deletes(self, repository, client):
        pipe = client.pipeline.return_value

        repository.save_transactions([])

        pipe.delete.assert_called_once_with("test:transactions")
        pipe.rpush.assert_not_called()

    def test_products(self, repository, client, meal, beer):
        client.get.return_value = product_list_adapter.dump_json([meal, beer])

        assert repository.load_products() == [meal, beer]

        repository.save_products([beer])
        client.set.assert_called_once_with("test:products", product_list_adapter.dump_json([beer]))

    def test_missing_products_key(self, repository, client):
        client.get.return_value = None

        assert repository.load_products() == []


def test_build_repository_defaults_to_memory():
    assert isinstance(build_repository("memory"), InMemoryRepository)


class TestConnectionChecks:
    """Test cases for the storage health checks."""

    def test_database_check(self):
        engine = create_engine("sqlite:///:memory:")

        assert check_db_connection(bind=engine) is True

    def test_redis_check(self):
        client = Mock()

        assert check_redis_connection(client) is True

        client.ping.side_effect = ConnectionError("refused")
        assert check_redis_connection(client) is False
