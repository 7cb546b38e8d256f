from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from stockkeeper.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt digest, never serialized
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())

    # Deletion of items is left to the database (ON DELETE CASCADE)
    inventory_items = relationship("Inventory", back_populates="owner", passive_deletes=True)
