from sqlalchemy import Column, Integer, String, Text, ForeignKey, Numeric, DateTime, func
from sqlalchemy.orm import relationship
from stockkeeper.db.base import Base


class Inventory(Base):
    """
    Stock record owned by exactly one account.

    sku is unique across all accounts, not per owner.
    """
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, default=0)
    unit_price = Column(Numeric(10, 2), default=0)
    category = Column(String(100), nullable=True)
    supplier = Column(String(255), nullable=True)
    min_stock_level = Column(Integer, default=0)
    location = Column(String(255), nullable=True)
    sku = Column(String(100), unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="inventory_items")
