import asyncio

from schemawire.core.models.schema import JsonSchema, SubjectSchema


class ResolutionCache:
    """
    Remembers, per (subject, candidate schema), the latest schema fetched
    from the registry.

    Entries are never replaced: the first schema stored for a key stays
    for the lifetime of the cache, even if the registry publishes newer
    versions afterwards. Compatibility decisions taken against that schema
    therefore stay consistent. There is no eviction.

    Access goes through a single asyncio lock, held only around the dict
    operations, never across registry calls.
    """

    def __init__(self) -> None:
        self._entries: dict[SubjectSchema, JsonSchema] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: SubjectSchema) -> JsonSchema | None:
        async with self._lock:
            return self._entries.get(key)

    async def insert_if_absent(self, key: SubjectSchema, schema: JsonSchema) -> JsonSchema:
        """
        Store `schema` under `key` unless the key is already present, and
        return the schema held by the cache once the call completes.
        """
        async with self._lock:
            return self._entries.setdefault(key, schema)

    def __contains__(self, key: SubjectSchema) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
