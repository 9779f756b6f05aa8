import re
from typing import Dict, List

import redis
from loguru import logger
from pymongo.database import Database

from ..db import GLOSSARY
from ..models.entry_model import GlossaryEntry
from .cache import GLOSSARY_KEY, cached_json
from .entries import store_errors

# <span class="glossary" data-glossary-id="rug-pull">rug pulled</span>
REFERENCE_RE = re.compile(r'data-glossary-id="([^"]+)"')


@store_errors
def _load_glossary(db: Database) -> list[dict]:
    return list(db[GLOSSARY].find({}, {"_id": 0}).sort("term", 1))


def get_glossary(db: Database, cache: redis.Redis) -> List[GlossaryEntry]:
    docs = cached_json(cache, GLOSSARY_KEY, lambda: _load_glossary(db))
    return [GlossaryEntry.model_validate(d) for d in docs]


def referenced_terms(body: str, glossary: List[GlossaryEntry]) -> Dict[str, GlossaryEntry]:
    """Glossary entries referenced from an entry body, keyed by id."""
    by_id = {g.id: g for g in glossary}
    found: Dict[str, GlossaryEntry] = {}
    for term_id in REFERENCE_RE.findall(body or ""):
        if term_id in found:
            continue
        if term_id not in by_id:
            logger.warning(f"Unknown glossary reference: {term_id}")
            continue
        found[term_id] = by_id[term_id]
    return found
