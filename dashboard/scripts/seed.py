"""Fill the database with demo users and customers.

Usage::

    python -m dashboard.scripts.seed --total 20

Existing users and customers are deleted first. Everything runs in one
transaction: on any error the database is left as it was and the command
exits non-zero. Each customer is linked to the user with the same name and
gets ``sort_order`` equal to its insertion index.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import text as sql_text

from dashboard.db.base import get_engine, transaction_scope
from dashboard.db.migrations_runner import apply_migrations
from dashboard.logging_setup import configure_logging
from dashboard.logic.passwords import hash_password
from dashboard.logic.repository_users import insert_user

logger = logging.getLogger(__name__)

BATCH_SIZE = 50
DEFAULT_PASSWORD = "password123"

FIRST_NAMES = ("Ava", "Liam", "Noah", "Emma", "Olivia", "Mia", "Lucas", "Amelia", "Ethan", "Isla", "Arjun", "Priya")
LAST_NAMES = ("Smith", "Patel", "Garcia", "Nguyen", "Kowalski", "Brown", "Sato", "Okafor", "Rossi", "Müller")
COMPANIES = ("Acme Corp", "Globex", "Initech", "Umbrella", "Hooli", "Stark Industries", "Wayne Enterprises")
CITIES = (("Pune", "Maharashtra"), ("Austin", "Texas"), ("Leeds", "Yorkshire"), ("Lyon", "Rhone"))
WORDS = ("net30", "prepaid", "standard", "express", "iso9001", "none")


def generate_batch(size: int, offset: int, rng: random.Random) -> List[Tuple[Dict[str, Any], Dict[str, Any]]]:
    """Return ``(user, customer)`` value pairs for one batch."""
    batch = []
    for i in range(size):
        n = offset + i
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        email = f"{first}.{last}.{n}@example.com".lower()
        city, state = rng.choice(CITIES)
        company = rng.choice(COMPANIES)
        zip_code = f"{rng.randint(100000, 999999)}"
        phone = f"+1-555-{rng.randint(1000000, 9999999)}"
        user = {
            "email": email,
            "first_name": first,
            "last_name": last,
            "company": company,
            "address": f"{rng.randint(1, 999)} Main Street",
            "city": city,
            "state": state,
            "country": "Demo",
            "zip": zip_code,
            "phone": phone,
            "about": "Seeded demo account",
        }
        customer = {
            "first_name": first,
            "last_name": last,
            "email": email,
            "company": company,
            "address": user["address"],
            "city": city,
            "state": state,
            "zip": zip_code,
            "country": "Demo",
            "phone": phone,
            "mobile": phone,
            "shipping_firstname": first,
            "shipping_lastname": last,
            "shipping_company": company,
            "shipping_address": user["address"],
            "shipping_city": city,
            "shipping_state": state,
            "shipping_zip": zip_code,
            "shipping_country": "Demo",
            "shipping_phone": phone,
            "shipping_mobile": phone,
            "sendinvoice": rng.choice(("true", "false")),
            "conformance": rng.choice(WORDS),
            "terms": rng.choice(WORDS),
            "freight": rng.choice(WORDS),
            "note": "Seeded demo customer",
            "about": "Seeded demo customer",
            "sort_order": n,
        }
        batch.append((user, customer))
    return batch


_INSERT_CUSTOMER = sql_text(
    """
    INSERT INTO customers (
        user_id, first_name, last_name, email, company, address, city, state, zip, country,
        phone, mobile, shipping_firstname, shipping_lastname, shipping_company, shipping_address,
        shipping_city, shipping_state, shipping_zip, shipping_country, shipping_phone,
        shipping_mobile, sendinvoice, conformance, terms, freight, note, about, sort_order
    ) VALUES (
        :user_id, :first_name, :last_name, :email, :company, :address, :city, :state, :zip, :country,
        :phone, :mobile, :shipping_firstname, :shipping_lastname, :shipping_company, :shipping_address,
        :shipping_city, :shipping_state, :shipping_zip, :shipping_country, :shipping_phone,
        :shipping_mobile, :sendinvoice, :conformance, :terms, :freight, :note, :about, :sort_order
    )
    """
)


def seed(total: int, *, seed_value: int | None = None, password: str = DEFAULT_PASSWORD) -> int:
    """Replace all users and customers with ``total`` demo pairs; return the count."""
    rng = random.Random(seed_value)
    # One hash for every demo user; bcrypt dominates the runtime otherwise
    password_hash = hash_password(password)
    inserted = 0
    with transaction_scope() as conn:
        conn.execute(sql_text("DELETE FROM customers"))
        conn.execute(sql_text("DELETE FROM users"))
        total_batches = (total + BATCH_SIZE - 1) // BATCH_SIZE
        for batch_no in range(total_batches):
            size = min(BATCH_SIZE, total - inserted)
            for user, customer in generate_batch(size, inserted, rng):
                user_id = insert_user(conn, {**user, "password_hash": password_hash})
                conn.execute(_INSERT_CUSTOMER, {**customer, "user_id": user_id})
            inserted += size
            logger.info("seed.batch_done batch=%s/%s inserted=%s", batch_no + 1, total_batches, inserted)
    return inserted


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed demo users and customers")
    parser.add_argument("--total", type=int, default=20, help="number of user/customer pairs")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible data")
    parser.add_argument("--migrate", action="store_true", help="apply pending migrations first")
    args = parser.parse_args(argv)

    configure_logging()
    if args.total < 0:
        parser.error("--total must be non-negative")
    try:
        if args.migrate:
            apply_migrations(get_engine())
        count = seed(args.total, seed_value=args.seed)
    except Exception:
        logger.error("seed.failed", exc_info=True)
        return 1
    logger.info("seed.completed inserted=%s", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
