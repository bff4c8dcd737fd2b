import asyncio
import os
from decimal import Decimal
from sqlalchemy import select
from storefront.db.database import db
from storefront.models import Product, Role, User
from storefront.security import hash_password


# Sample products
PRODUCTS_DATA = [
    ("iPhone 15", "Latest Apple smartphone", "Electronics", Decimal("999.99"), 25),
    ("MacBook Pro", "16-inch laptop with M3 chip", "Electronics", Decimal("1999.99"), 10),
    ("AirPods Pro", "Noise cancelling earbuds", "Electronics", Decimal("249.99"), 40),
    ("Winter Jacket", "Waterproof insulated jacket", "Clothing", Decimal("149.99"), 30),
    ("Running Shoes", "Lightweight trainers", "Clothing", Decimal("89.99"), 50),
    ("Organic Coffee", "1kg whole beans", "Food", Decimal("14.99"), 100),
    ("Standing Desk", "Electric height-adjustable desk", "Home", Decimal("399.99"), 8),
]

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin")


async def seed_database():
    # Create tables
    await db.create_all()

    async with db.session_factory() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            print("Database already seeded")
            return

        session.add(User(
            email=ADMIN_EMAIL,
            username=ADMIN_USERNAME,
            password=hash_password(ADMIN_PASSWORD),
            role=Role.ADMIN.value,
        ))

        for name, description, category, price, stock in PRODUCTS_DATA:
            session.add(Product(
                name=name,
                description=description,
                category=category,
                price=price,
                stock=stock,
            ))

        await session.commit()
        print("Database seeded successfully!")

    await db.disconnect()


if __name__ == "__main__":
    asyncio.run(seed_database())
