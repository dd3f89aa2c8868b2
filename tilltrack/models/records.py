"""
Database tables for the SQL storage backend.

Products and transactions are stored as JSON documents produced by the
pydantic models, so field names and numeric types survive a reload. Row
ids keep the insertion order of the transaction history.
"""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from tilltrack.core.database import Base


class ProductRecord(Base):
    """Stored catalog entry."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(64), unique=True, index=True, nullable=False)
    payload = Column(Text, nullable=False)
    stored_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<ProductRecord(id={self.id}, product_id='{self.product_id}')>"


class TransactionRecord(Base):
    """Stored transaction, append-only."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    receipt_number = Column(String(64), index=True, nullable=False)
    payload = Column(Text, nullable=False)
    stored_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<TransactionRecord(id={self.id}, receipt_number='{self.receipt_number}')>"
