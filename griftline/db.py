from pymongo import MongoClient
from pymongo.database import Database

from .config import settings

client = MongoClient(settings.MONGO_URI)

# Specify database and collections
db = client[settings.MONGO_DB_NAME]
ENTRIES = "entries"
METADATA = "metadata"
GLOSSARY = "glossary"

# metadata is a single document with this _id
METADATA_ID = "metadata"


def get_db() -> Database:
    return db
