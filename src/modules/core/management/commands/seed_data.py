from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.cart.models import CartItem
from modules.catalog.models import Category, Product

DEMO_USER_ID = "demo-user"


class Command(BaseCommand):
    help = "Seed database with sample categories, products and a demo cart."

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-cart",
            action="store_true",
            help=f"Also fill a cart for user '{DEMO_USER_ID}'.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        categories = self._seed_categories()
        products = self._seed_products(categories)
        cart_lines = self._seed_cart(products) if options["with_cart"] else 0

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"products={len(products)}, "
                f"cart_lines={cart_lines}"
            )
        )

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        seed_categories = [
            ("Electronics", "Computers, peripherals and gadgets"),
            ("Furniture", "Desks, chairs and storage"),
            ("Office", "Stationery and desk supplies"),
        ]
        categories: dict[str, Category] = {}
        for name, description in seed_categories:
            category, _ = Category.objects.get_or_create(
                name=name, defaults={"description": description}
            )
            categories[name] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("27\" Monitor", "Electronics", Decimal("1299.90")),
            ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
            ("Gaming Mouse", "Electronics", Decimal("249.90")),
            ("14\" Laptop", "Electronics", Decimal("3999.00")),
            ("Headset", "Electronics", Decimal("299.90")),
            ("Office Desk", "Furniture", Decimal("899.00")),
            ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
            ("Bookshelf", "Furniture", Decimal("699.00")),
            ("A4 Paper", "Office", Decimal("29.90")),
            ("Blue Pen", "Office", Decimal("4.90")),
            ("Notebook", "Office", Decimal("19.90")),
            ("Stapler", "Office", Decimal("39.90")),
            ("Sticky Notes", "Office", Decimal("12.90")),
            ("Calculator", "Office", Decimal("89.90")),
            ("Laptop Stand", "Office", Decimal("149.90")),
        ]
        for title, category_name, price in catalog:
            product, _ = Product.objects.get_or_create(
                title=title,
                defaults={
                    "description": f"{title} ({category_name.lower()})",
                    "price": price,
                    "stock": random.randint(0, 100),
                    "category": categories[category_name],
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_cart(self, products: list[Product]) -> int:
        self.stdout.write("Creating demo cart...")
        in_stock = [product for product in products if product.stock > 0]
        if not in_stock:
            self.stdout.write(self.style.WARNING("Skipping cart (no stock)."))
            return 0

        created = 0
        for product in random.sample(in_stock, k=min(3, len(in_stock))):
            _, was_created = CartItem.objects.get_or_create(
                user_id=DEMO_USER_ID,
                product=product,
                defaults={"quantity": random.randint(1, min(product.stock, 5))},
            )
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS("Creating demo cart... Done!"))
        return created
