"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 8 sample users (6 vendor owners, 2 customers)
  - 6 sample vendors spread around Salvador (BA), one of them inactive
  - a few products per vendor and some reviews
"""

import asyncio

from sqlalchemy import text

from marketplace.infrastructure.database import async_session_factory, engine
from marketplace.infrastructure.models import ProductModel, ReviewModel, UserModel
from marketplace.infrastructure.repositories import VendorRepository

# Salvador city centre (Praça Municipal, approx)
CENTER_LAT, CENTER_LNG = -12.9714, -38.5104


USERS = [
    {"name": "Joana Santos", "email": "joana@example.com", "phone": "71991234567"},
    {"name": "Carlos Lima", "email": "carlos@example.com", "phone": "71992345678"},
    {"name": "Marta Souza", "email": "marta@example.com", "phone": "71993456789"},
    {"name": "Paulo Alves", "email": "paulo@example.com", "phone": "71994567890"},
    {"name": "Rita Oliveira", "email": "rita@example.com", "phone": "71995678901"},
    {"name": "Bruno Costa", "email": "bruno@example.com", "phone": "71996789012"},
    {"name": "Ana Ribeiro", "email": "ana@example.com", "phone": None},
    {"name": "Lucas Ferreira", "email": "lucas@example.com", "phone": None},
]

VENDORS = [
    # owner index, business name, lat, lng, active
    {"owner": 0, "name": "Acarajé da Joana", "lat": -12.9714, "lng": -38.5104, "active": True},
    {"owner": 1, "name": "Coco Gelado Barra", "lat": -13.0100, "lng": -38.5320, "active": True},
    {"owner": 2, "name": "Tapioca da Marta", "lat": -13.0000, "lng": -38.5000, "active": True},
    {"owner": 3, "name": "Picolé do Paulo", "lat": -12.9390, "lng": -38.4300, "active": True},
    {"owner": 4, "name": "Cuscuz Itapuã", "lat": -12.9480, "lng": -38.3580, "active": True},
    {"owner": 5, "name": "Churros Pelourinho", "lat": -12.9730, "lng": -38.5080, "active": False},
]

PRODUCTS = {
    0: [("Acarajé", 12.0), ("Abará", 10.0), ("Cocada", 5.0)],
    1: [("Coco gelado", 7.0), ("Água mineral", 4.0)],
    2: [("Tapioca de queijo", 9.0), ("Tapioca de coco", 8.0), ("Café", 3.5),
        ("Suco de cajá", 6.0), ("Bolo de aipim", 6.5), ("Mingau", 5.0)],
    3: [("Picolé de umbu", 4.0)],
    4: [("Cuscuz com ovo", 11.0), ("Cuscuz com carne seca", 15.0)],
    5: [("Churros", 6.0)],
}


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM vendors"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Users ─────────────────────────────────────────────────────
        user_models = []
        for u in USERS:
            m = UserModel(name=u["name"], email=u["email"], phone=u["phone"])
            session.add(m)
            user_models.append(m)
        await session.flush()
        print(f"  Created {len(user_models)} users")

        # ── Vendors ───────────────────────────────────────────────────
        repo = VendorRepository(session)
        vendor_models = []
        for v in VENDORS:
            vendor = await repo.create_vendor(
                user_id=user_models[v["owner"]].id,
                business_name=v["name"],
                latitude=v["lat"],
                longitude=v["lng"],
                rating=4.5,
                is_active=v["active"],
            )
            vendor_models.append(vendor)
        print(f"  Created {len(vendor_models)} vendors")

        # ── Products ──────────────────────────────────────────────────
        product_count = 0
        for idx, items in PRODUCTS.items():
            for name, price in items:
                session.add(
                    ProductModel(
                        vendor_id=vendor_models[idx].id, name=name, price=price
                    )
                )
                product_count += 1
        await session.flush()
        print(f"  Created {product_count} products")

        # ── Reviews ───────────────────────────────────────────────────
        customers = user_models[6:]
        for vendor in vendor_models[:3]:
            for customer in customers:
                session.add(
                    ReviewModel(vendor_id=vendor.id, user_id=customer.id, rating=5)
                )
        await session.flush()
        print(f"  Created {3 * len(customers)} reviews")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
