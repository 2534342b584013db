from __future__ import annotations

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from parking import config


def create_mongo_client(url: str | None = None) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(url or config.mongo_url())


async def connect_mongo(state) -> AsyncIOMotorDatabase:
    """Open the Mongo client and attach it (and the database) to `state`.

    `state` is the FastAPI `app.state`; the client lives as long as the app.
    """

    if getattr(state, "mongo_client", None) is not None and getattr(state, "db", None) is not None:
        return state.db

    client = create_mongo_client()
    state.mongo_client = client
    state.db = client[config.db_name()]
    return state.db


async def close_mongo(state) -> None:
    client = getattr(state, "mongo_client", None)
    if client is not None:
        client.close()

    state.mongo_client = None
    state.db = None


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    db = getattr(request.app.state, "db", None)
    if db is None:
        db = await connect_mongo(request.app.state)
    return db
