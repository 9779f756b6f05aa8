from typing import List

import redis
from fastapi import APIRouter, Depends
from pymongo.database import Database

from ..db import get_db
from ..models.entry_model import GlossaryEntry, Metadata
from ..redis_client import get_redis
from ..services.glossary import get_glossary
from ..services.metadata import get_metadata

router = APIRouter(tags=["Metadata"])


@router.get("/metadata", response_model=Metadata)
async def metadata(db: Database = Depends(get_db), cache: redis.Redis = Depends(get_redis)):
    """Running grift total and collection labels."""
    return get_metadata(db, cache)


@router.get("/glossary", response_model=List[GlossaryEntry])
async def glossary(db: Database = Depends(get_db), cache: redis.Redis = Depends(get_redis)):
    return get_glossary(db, cache)
