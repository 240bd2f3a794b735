#!/usr/bin/env python3
"""
Replace the credit card offer catalog with the offers in a JSON file.

Usage:
    python scripts/seed_offers.py [path/to/offers.json]

Reads MONGO_URL / MONGODB_DATABASE from the environment (or .env).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from adapter.mongodb.connection import OFFERS_COLLECTION_NAME, get_database_name, get_mongodb_client
from adapter.mongodb.offer_repository import MongoOfferRepository
from utils.logging import setup_structured_logging

logger = logging.getLogger("seed_offers")

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "credit_card_offers.json"

REQUIRED_FIELDS = ("card_name", "issuer", "min_credit_score")

# (band, lowest min_credit_score in the band)
SCORE_BANDS = (
    ("excellent", 740),
    ("good", 670),
    ("fair", 580),
    ("poor", 0),
)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_offers(path: Path) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        offers = json.load(f)

    for i, offer in enumerate(offers):
        missing = [name for name in REQUIRED_FIELDS if offer.get(name) in (None, "")]
        if missing:
            raise ValueError(f"Offer #{i} is missing required fields: {', '.join(missing)}")
        if not _is_int(offer["min_credit_score"]):
            raise ValueError(f"Offer #{i} ({offer['card_name']}) min_credit_score must be an integer")
        max_score = offer.get("max_credit_score")
        if max_score is not None and not _is_int(max_score):
            raise ValueError(f"Offer #{i} ({offer['card_name']}) max_credit_score must be an integer")
        annual_fee = offer.get("annual_fee", 0)
        if isinstance(annual_fee, bool) or not isinstance(annual_fee, (int, float)):
            raise ValueError(f"Offer #{i} ({offer['card_name']}) annual_fee must be a number")
        if max_score is not None and max_score < offer["min_credit_score"]:
            raise ValueError(f"Offer #{i} ({offer['card_name']}) has max_credit_score below min_credit_score")
    return offers


def summarize_by_band(offers: list[dict]) -> dict[str, int]:
    summary = {band: 0 for band, _ in SCORE_BANDS}
    for offer in offers:
        for band, floor in SCORE_BANDS:
            if offer["min_credit_score"] >= floor:
                summary[band] += 1
                break
    return summary


def seed(db, offers: list[dict]) -> int:
    """Drop existing offers and insert the given ones. Returns the inserted count."""
    collection = db[OFFERS_COLLECTION_NAME]
    deleted = collection.delete_many({}).deleted_count
    logger.info("Existing offers cleared", extra={"deleted": deleted})

    now = datetime.now(timezone.utc)
    docs = [{**offer, "annual_fee": offer.get("annual_fee", 0), "created_at": now, "updated_at": now} for offer in offers]
    inserted = len(collection.insert_many(docs).inserted_ids) if docs else 0

    MongoOfferRepository(db).ensure_indexes()
    return inserted


def main(argv: list[str]) -> int:
    load_dotenv()
    setup_structured_logging()

    path = Path(argv[1]) if len(argv) > 1 else DEFAULT_DATA_PATH
    offers = load_offers(path)

    client = get_mongodb_client()
    if client is None:
        logger.error("MongoDB unavailable; set MONGO_URL")
        return 1

    inserted = seed(client[get_database_name()], offers)
    logger.info("Credit card offers seeded", extra={
        "inserted": inserted,
        "source": str(path),
        "byBand": summarize_by_band(offers),
    })
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
