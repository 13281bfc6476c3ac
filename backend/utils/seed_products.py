import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.orm import Session
from config import settings
from database import init_db, make_engine, make_session_factory
from models.product import Product

SAMPLE_PRODUCTS = [
    {"name": "Salted Butter 200g", "price": 89.0, "quantity": 24},
    {"name": "Unsalted Butter 200g", "price": 85.0, "quantity": 30},
    {"name": "Cultured Butter 125g", "price": 129.5, "quantity": 12},
    {"name": "Garlic Herb Butter 100g", "price": 65.0, "quantity": 18},
    {"name": "Ghee 500ml", "price": 245.0, "quantity": 6},
]


def seed_products(db: Session) -> int:
    """Insert sample products whose names are not in the table yet."""
    print("📦 Seeding sample butter products...")
    existing = {name for (name,) in db.query(Product.name).all()}
    count = 0

    for p in SAMPLE_PRODUCTS:
        if p["name"] in existing:
            continue
        db.add(Product(**p))
        count += 1

    db.commit()
    print(f"✅ Inserted {count} new products.")
    return count


def main():
    engine = make_engine(settings.database_url, pool_size=settings.DB_POOL_SIZE)
    init_db(engine)
    db = make_session_factory(engine)()
    try:
        seed_products(db)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
