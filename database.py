# database.py
from motor.motor_asyncio import AsyncIOMotorClient

import config

client = AsyncIOMotorClient(config.MONGODB_URI)
db = client[config.MONGODB_DB]


def get_db():
    """FastAPI dependency returning the shared database handle."""
    return db


async def init_db():
    await db.users.create_index("id", unique=True)
    await db.users.create_index("email", unique=True)
    await db.questions.create_index("id", unique=True)
