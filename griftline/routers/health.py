from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..db import get_db

router = APIRouter(tags=["health"])

@router.get("/")
def root():
    return {"status": "ok"}


@router.get("/health/db")
def db_health(db: Database = Depends(get_db)):
    try:
        db.command("ping")
    except PyMongoError as e:
        return {"status": "unavailable", "error": str(e)}
    return {"status": "ok", "db_name": db.name}
