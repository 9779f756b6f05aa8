import redis
from pymongo.database import Database

from ..db import METADATA, METADATA_ID
from ..models.entry_model import Metadata
from .cache import METADATA_KEY, cached_json
from .entries import store_errors


@store_errors
def _load_metadata(db: Database) -> dict | None:
    return db[METADATA].find_one({"_id": METADATA_ID}, {"_id": 0})


def get_metadata(db: Database, cache: redis.Redis) -> Metadata:
    """The metadata singleton; an empty record when none has been written."""
    doc = cached_json(cache, METADATA_KEY, lambda: _load_metadata(db) or {})
    return Metadata.model_validate(doc)
