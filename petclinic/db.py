from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from .config import get_settings

_settings = get_settings()
_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

# Reference data, same ids as the classic petclinic sample
PET_TYPES = {1: "cat", 2: "dog", 3: "lizard", 4: "snake", 5: "bird", 6: "hamster"}

async def get_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is None:
        _client = AsyncIOMotorClient(_settings.mongodb_uri)
        _db = _client[_settings.db_name]
        await _db.pets.create_index([("owner_id", 1)])
        await _db.owners.create_index([("last_name", 1)])
        for type_id, name in PET_TYPES.items():
            await _db.pet_types.update_one(
                {"_id": type_id}, {"$setOnInsert": {"name": name}}, upsert=True
            )
        # keep the sequence ahead of the seeded ids
        await _db.counters.update_one(
            {"_id": "pet_types"}, {"$max": {"seq": max(PET_TYPES)}}, upsert=True
        )
    return _db


async def next_id(db: AsyncIOMotorDatabase, collection: str) -> int:
    """Allocates the next integer id for a collection from the counters collection."""
    doc = await db.counters.find_one_and_update(
        {"_id": collection},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(doc["seq"])
