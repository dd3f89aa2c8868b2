"""
Storage collaborators for the transaction history and the product catalog.

The core only needs an ordered, append-only list of transactions and the
list of products. Each backend stores both as pydantic JSON so that a
save/reload cycle reproduces identical records.
"""
import logging
from functools import lru_cache
from typing import List, Protocol, Sequence

from pydantic import TypeAdapter
from sqlalchemy import delete, select

from tilltrack.core.config import settings
from tilltrack.core.database import SessionLocal, get_db_context, init_db
from tilltrack.models.inventory import Product
from tilltrack.models.records import ProductRecord, TransactionRecord
from tilltrack.models.sales import Transaction

logger = logging.getLogger(__name__)

product_list_adapter = TypeAdapter(List[Product])


class Repository(Protocol):
    """Interface the core uses to reach durable storage."""

    def load_transactions(self) -> List[Transaction]:
        ...

    def append_transaction(self, transaction: Transaction) -> None:
        ...

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        ...

    def load_products(self) -> List[Product]:
        ...

    def save_products(self, products: Sequence[Product]) -> None:
        ...


class InMemoryRepository:
    """Process-local storage, used by tests and the default configuration."""

    def __init__(self, products: Sequence[Product] = (), transactions: Sequence[Transaction] = ()):
        self._products = list(products)
        self._transactions = list(transactions)

    def load_transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def append_transaction(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._transactions = list(transactions)

    def load_products(self) -> List[Product]:
        return list(self._products)

    def save_products(self, products: Sequence[Product]) -> None:
        self._products = list(products)


class SqlRepository:
    """SQLAlchemy storage with one JSON document per row."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def load_transactions(self) -> List[Transaction]:
        with get_db_context(self.session_factory) as db:
            payloads = db.scalars(
                select(TransactionRecord.payload).order_by(TransactionRecord.id)
            ).all()
        return [Transaction.model_validate_json(payload) for payload in payloads]

    def append_transaction(self, transaction: Transaction) -> None:
        with get_db_context(self.session_factory) as db:
            db.add(self._transaction_record(transaction))

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        with get_db_context(self.session_factory) as db:
            db.execute(delete(TransactionRecord))
            db.add_all([self._transaction_record(t) for t in transactions])

    def load_products(self) -> List[Product]:
        with get_db_context(self.session_factory) as db:
            payloads = db.scalars(
                select(ProductRecord.payload).order_by(ProductRecord.id)
            ).all()
        return [Product.model_validate_json(payload) for payload in payloads]

    def save_products(self, products: Sequence[Product]) -> None:
        with get_db_context(self.session_factory) as db:
            db.execute(delete(ProductRecord))
            db.add_all([
                ProductRecord(product_id=p.id, payload=p.model_dump_json())
                for p in products
            ])

    @staticmethod
    def _transaction_record(transaction: Transaction) -> TransactionRecord:
        return TransactionRecord(
            receipt_number=transaction.receipt_number,
            payload=transaction.model_dump_json(),
        )


class RedisRepository:
    """Redis storage: transactions in a list, the catalog as one document."""

    def __init__(self, client, key_prefix: str = "tilltrack"):
        self.client = client
        self.transactions_key = f"{key_prefix}:transactions"
        self.products_key = f"{key_prefix}:products"

    def load_transactions(self) -> List[Transaction]:
        payloads = self.client.lrange(self.transactions_key, 0, -1)
        return [Transaction.model_validate_json(payload) for payload in payloads]

    def append_transaction(self, transaction: Transaction) -> None:
        self.client.rpush(self.transactions_key, transaction.model_dump_json())

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        pipe = self.client.pipeline()
        pipe.delete(self.transactions_key)
        if transactions:
            pipe.rpush(self.transactions_key, *[t.model_dump_json() for t in transactions])
        pipe.execute()

    def load_products(self) -> List[Product]:
        payload = self.client.get(self.products_key)
        if not payload:
            return []
        return product_list_adapter.validate_json(payload)

    def save_products(self, products: Sequence[Product]) -> None:
        self.client.set(self.products_key, product_list_adapter.dump_json(list(products)))


def build_repository(backend: str) -> Repository:
    """Create the storage backend named in the settings."""
    if backend == "sql":
        init_db()
        return SqlRepository()
    if backend == "redis":
        from tilltrack.core.redis_client import redis_client
        return RedisRepository(redis_client, settings.redis_key_prefix)
    return InMemoryRepository()


@lru_cache()
def get_repository() -> Repository:
    """Get the process-wide repository."""
    logger.info(f"Using {settings.storage_backend} storage backend")
    return build_repository(settings.storage_backend)
