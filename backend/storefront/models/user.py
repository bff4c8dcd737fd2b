import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, String, DateTime, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship, deferred
from storefront.db.database import Base


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


# Join table for the "like" relation; the composite key keeps one row per pair
user_liked_products = Table(
    "user_liked_products",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(255), nullable=False, unique=True)
    # Only loaded on demand (authentication)
    password = deferred(Column(String(255), nullable=False))
    role = Column(String(20), nullable=False, default=Role.USER.value)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    liked_products = relationship(
        "Product",
        secondary=user_liked_products,
        back_populates="likers",
        passive_deletes=True,
    )
