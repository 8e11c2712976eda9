import argparse
from decimal import Decimal
from sqlmodel import Session, select
from app.db.session import engine, create_db_and_tables, drop_db_and_tables
# Register every table before create_all / drop_all
import app.models  # noqa: F401
from app.models.product import Product

STICKERS = [
    {
        "name": "Laravel Logo Sticker",
        "description": "Official Laravel logo sticker in premium vinyl. Perfect for laptops, water bottles, and more.",
        "price": Decimal("4.99"),
        "image_url": "/images/products/laravel-sticker.png",
        "stock_quantity": 100,
        "category": "Framework",
    },
    {
        "name": "React Logo Sticker",
        "description": "High-quality React logo sticker. Show your love for React with this durable vinyl sticker.",
        "price": Decimal("3.99"),
        "image_url": "/images/products/react-sticker.png",
        "stock_quantity": 150,
        "category": "Framework",
    },
    {
        "name": "Vue.js Logo Sticker",
        "description": "Official Vue.js logo sticker. Waterproof and fade-resistant vinyl material.",
        "price": Decimal("3.99"),
        "image_url": "/images/products/vue-sticker.png",
        "stock_quantity": 120,
        "category": "Framework",
    },
    {
        "name": "PHP Elephant Sticker",
        "description": "Classic PHP elephant logo sticker. A must-have for PHP developers.",
        "price": Decimal("5.99"),
        "image_url": "/images/products/php-sticker.png",
        "stock_quantity": 80,
        "category": "Language",
    },
    {
        "name": "GitHub Octocat Sticker",
        "description": "Official GitHub Octocat sticker. Perfect for showing your open source spirit.",
        "price": Decimal("4.49"),
        "image_url": "/images/products/github-sticker.png",
        "stock_quantity": 200,
        "category": "Platform",
    },
    {
        "name": "Sentry Logo Sticker",
        "description": "Sentry logo sticker for error monitoring enthusiasts. Keep your code under surveillance.",
        "price": Decimal("4.99"),
        "image_url": "/images/products/sentry-sticker.png",
        "stock_quantity": 110,
        "category": "Monitoring",
    },
]

def seed_products():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        # Check if products already exist to avoid duplicates
        existing_products = session.exec(select(Product)).all()
        if existing_products:
            print(f"Database already contains {len(existing_products)} products. Skipping seed.")
            return

        print("Seeding initial products...")
        for data in STICKERS:
            session.add(Product(**data, is_active=True))

        session.commit()
        print(f"Successfully seeded {len(STICKERS)} products!")

def reset_database():
    print("Dropping all tables...")
    drop_db_and_tables()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the sticker catalog.")
    parser.add_argument("--reset", action="store_true", help="drop every table before seeding")
    args = parser.parse_args()

    if args.reset:
        reset_database()
    seed_products()
