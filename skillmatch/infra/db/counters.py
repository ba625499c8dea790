"""Integer id allocation backed by a counters collection."""

from __future__ import annotations


class CounterRepo:
    """Hands out increasing integer ids per collection name."""

    COLLECTION = "counters"

    def __init__(self, db) -> None:
        self._col = db[self.COLLECTION]

    async def next_id(self, name: str) -> int:
        doc = await self._col.find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=True,
        )
        return int(doc["seq"])
