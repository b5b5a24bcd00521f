#!/usr/bin/env python3
# =============================================================================
# scripts/seed_subscription_plans.py - Seed the Plan Catalog
# =============================================================================
# Writes the built-in Basic / Professional / Enterprise plans into the
# subscription_plans table. Safe to re-run: rows are upserted on id.
#
# Usage:
#   python scripts/seed_subscription_plans.py
#   python scripts/seed_subscription_plans.py --dry-run   # Print rows only
# =============================================================================

import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

# Check for Supabase credentials
if not os.getenv("SUPABASE_URL") or not os.getenv("SUPABASE_SERVICE_KEY"):
    print("ERROR: SUPABASE_URL / SUPABASE_SERVICE_KEY not found in environment")
    print("Please set them in your .env file or environment")
    sys.exit(1)

from core.services.billing_service import DEFAULT_PLANS, PLANS_TABLE
from lib.supabase_client import SupabaseClient


def plan_rows() -> list[dict]:
    """Catalog entries in the subscription_plans column layout (yearly by default)."""
    return [
        {
            **plan,
            "features": json.dumps(plan["features"]),
            "price": plan["yearly_price"],
            "interval": "yearly",
            "active": True,
        }
        for plan in DEFAULT_PLANS
    ]


def main():
    rows = plan_rows()

    if "--dry-run" in sys.argv:
        for row in rows:
            print(json.dumps(row, indent=2))
        return

    client = SupabaseClient.get_client()
    response = client.table(PLANS_TABLE).upsert(rows, on_conflict="id").execute()

    print(f"Seeded {len(response.data or [])} subscription plans:")
    for row in response.data or []:
        print(f"  - {row['id']}: {row['name']} ({row['monthly_price']}/mo, {row['yearly_price']}/yr)")


if __name__ == "__main__":
    main()
