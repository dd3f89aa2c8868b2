"""
FastAPI dependencies wiring the services to the configured storage.
"""
from functools import lru_cache

from fastapi import Depends

from tilltrack.core.repository import Repository, get_repository
from tilltrack.services.cart_ledger import CartLedger
from tilltrack.services.catalog import CatalogService
from tilltrack.services.transaction_factory import TransactionFactory


@lru_cache()
def get_cart_ledger() -> CartLedger:
    """The store's single cashier session."""
    return CartLedger()


def get_catalog(repository: Repository = Depends(get_repository)) -> CatalogService:
    return CatalogService(repository)


def get_transaction_factory(
    ledger: CartLedger = Depends(get_cart_ledger),
    repository: Repository = Depends(get_repository)
) -> TransactionFactory:
    return TransactionFactory(ledger, repository)
