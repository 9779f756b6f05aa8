import json
import os
import sys

from loguru import logger
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from griftline.db import ENTRIES, GLOSSARY, METADATA, METADATA_ID
from griftline.models.entry_model import Entry, GlossaryEntry, Metadata


def grift_total(entries: list[dict]) -> float:
    return sum(
        float(e["scamAmountDetails"].get("total") or 0)
        for e in entries
        if (e.get("scamAmountDetails") or {}).get("hasScamAmount")
    )


def ensure_indexes(db: Database) -> None:
    col = db[ENTRIES]
    col.create_index("id", unique=True)
    col.create_index("readableId", unique=True)
    col.create_index([("date", DESCENDING), ("id", ASCENDING)])
    for kind in ("theme", "tech", "blockchain"):
        col.create_index([(f"filters.{kind}", ASCENDING), ("date", DESCENDING), ("id", ASCENDING)])
    col.create_index([("starred", ASCENDING), ("date", DESCENDING), ("id", ASCENDING)])
    col.create_index([("collection", ASCENDING), ("date", DESCENDING), ("id", ASCENDING)])


def seed(db: Database, data: dict) -> dict:
    """
    Replace entries, glossary and metadata with the contents of a dump.

    ``data`` holds ``entries``, ``glossary`` and optionally ``collections``.
    Every record is validated before anything is written.
    """
    entries = [
        Entry.model_validate(e).model_dump(mode="json", exclude={"key"})
        for e in data.get("entries", [])
    ]
    glossary = [GlossaryEntry.model_validate(g).model_dump() for g in data.get("glossary", [])]
    metadata = Metadata(
        griftTotal=grift_total(entries),
        collections=data.get("collections", {}),
    )

    db[ENTRIES].delete_many({})
    if entries:
        db[ENTRIES].insert_many(entries)
    db[GLOSSARY].delete_many({})
    if glossary:
        db[GLOSSARY].insert_many(glossary)
    db[METADATA].replace_one({"_id": METADATA_ID}, metadata.model_dump(), upsert=True)
    ensure_indexes(db)

    logger.info(
        f"Seeded {len(entries)} entries, {len(glossary)} glossary terms, "
        f"grift total {metadata.griftTotal:,.0f}"
    )
    return {"entries": len(entries), "glossary": len(glossary), "griftTotal": metadata.griftTotal}


if __name__ == "__main__":
    from griftline.db import db

    path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(os.path.dirname(__file__), "entries.json")
    with open(path, "r") as f:
        seed(db, json.load(f))
