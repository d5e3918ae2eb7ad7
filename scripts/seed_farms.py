#!/usr/bin/env python3
"""
Seed the database with demo farms and CSA shares.
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add the parent directory to the path so we can import from csa_market
sys.path.append(str(Path(__file__).parent.parent))

from csa_market.core.db import create_tables, get_db
from csa_market.core.logging import setup_logging
from csa_market.models.contracts import ShareFrequency
from csa_market.models.schema import CsaShare, Farm, utcnow

logger = setup_logging(name="seed_farms")

DEMO_FARMS = [
    {
        "name": "Green Valley Farm",
        "description": "Organic vegetables and herbs grown in the Hudson Valley.",
        "city": "Kingston",
        "state": "NY",
        "price_per_week": 32.0,
        "rating": 4.8,
        "categories": ["vegetables", "herbs"],
        "delivery_options": ["pickup", "delivery"],
    },
    {
        "name": "Sunny Acres Orchard",
        "description": "Apples, pears and stone fruit from a family orchard.",
        "city": "Sebastopol",
        "state": "CA",
        "price_per_week": 28.5,
        "rating": 4.6,
        "categories": ["fruit"],
        "delivery_options": ["pickup"],
    },
    {
        "name": "Meadowbrook Dairy",
        "description": "Grass-fed milk, yogurt and cheese.",
        "city": "Burlington",
        "state": "VT",
        "price_per_week": 45.0,
        "rating": None,
        "categories": ["dairy"],
        "delivery_options": ["delivery"],
    },
    {
        "name": "Blue Heron Flowers & Honey",
        "description": "Cut flowers all season plus raw wildflower honey.",
        "city": "Asheville",
        "state": "NC",
        "price_per_week": None,
        "rating": 4.2,
        "categories": ["flowers", "honey"],
        "delivery_options": ["pickup"],
    },
]


def seed(owner_id: str, copies: int) -> int:
    """Insert ``copies`` rounds of the demo farms, each with one weekly share."""
    created = 0
    now = utcnow()
    with get_db() as db:
        for round_index in range(copies):
            for offset, template in enumerate(DEMO_FARMS):
                data = dict(template)
                categories = data.pop("categories")
                delivery_options = data.pop("delivery_options")
                if round_index:
                    data["name"] = f"{data['name']} #{round_index + 1}"

                farm = Farm(
                    user_id=owner_id,
                    created_at=now - timedelta(minutes=created, microseconds=offset),
                    **data,
                )
                farm.categories = categories
                farm.delivery_options = delivery_options
                db.add(farm)
                db.flush()

                db.add(
                    CsaShare(
                        farm_id=farm.id,
                        name=f"{farm.name} weekly share",
                        price=int((farm.price_per_week or 35.0) * 100),
                        frequency=ShareFrequency.WEEKLY,
                    )
                )
                created += 1
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo farms and CSA shares")
    parser.add_argument("--owner", default="dev_user_123", help="User id that owns the farms")
    parser.add_argument("--copies", type=int, default=1, help="Rounds of demo farms to insert")
    args = parser.parse_args()

    create_tables()
    try:
        count = seed(args.owner, args.copies)
    except Exception as e:
        logger.error(f"Failed to seed database: {e}")
        sys.exit(1)
    print(f"Seeded {count} farms")
