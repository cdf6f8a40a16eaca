# backend/database/connection.py
import logging
from pymongo import MongoClient, ASCENDING, DESCENDING
from config import settings

logger = logging.getLogger("database.connection")

# ============================================================
# 🔧 URI BUILDER
# ============================================================
def build_mongo_uri():
    if settings.MONGO_URI:
        return settings.MONGO_URI
    host = settings.MONGO_HOST
    port = settings.MONGO_PORT
    if settings.MONGO_USER and settings.MONGO_PASSWORD:
        return f"mongodb://{settings.MONGO_USER}:{settings.MONGO_PASSWORD}@{host}:{port}"
    return f"mongodb://{host}:{port}"

# ============================================================
# 🎵 MUSIC DATABASE CONNECTION
# ============================================================
def get_music_db():
    """The client connects lazily; nothing touches the network here."""
    try:
        client = MongoClient(
            build_mongo_uri(),
            serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
            tz_aware=False,
        )
        db = client[settings.MONGO_DB]
        logger.info(f"✅ Music database configured: {settings.MONGO_DB}")
        return db
    except Exception as e:
        logger.error(f"❌ Error configuring MongoDB ({settings.MONGO_DB}): {e}")
        raise e

# ============================================================
# 🧩 GLOBAL INSTANCE
# ============================================================
music_db = get_music_db()

# ============================================================
# 🚀 INDEX INITIALIZATION
# ============================================================
def init_db(db=None):
    """Creates the indexes the listing and ownership queries rely on."""
    db = music_db if db is None else db
    try:
        db["tracks"].create_index([("createdAt", DESCENDING)])
        db["tracks"].create_index([("artist", ASCENDING), ("createdAt", DESCENDING)])
        db["albums"].create_index([("artist", ASCENDING), ("createdAt", DESCENDING)])
        db["favorites"].create_index(
            [("userId", ASCENDING), ("audioId", ASCENDING)], unique=True
        )
        logger.info("✅ Indexes initialized.")
    except Exception as e:
        logger.warning(f"⚠️ Could not create indexes: {e}")
