import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime, Uuid
from sqlalchemy.orm import relationship
from storefront.db.database import Base
from storefront.models.user import user_liked_products


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False)
    image = Column(String(2048), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    images = relationship(
        "Image",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Image.created_at",
    )
    likers = relationship(
        "User",
        secondary=user_liked_products,
        back_populates="liked_products",
        passive_deletes=True,
    )
