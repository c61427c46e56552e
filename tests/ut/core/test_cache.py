import asyncio

import pytest

from schemawire.core.cache import ResolutionCache
from schemawire.core.models.schema import JsonSchema, SubjectSchema


@pytest.mark.ut
@pytest.mark.asyncio
async def test_get_missing_key(cache, candidate):
    assert await cache.get(SubjectSchema("orders-value", candidate)) is None
    assert len(cache) == 0


@pytest.mark.ut
@pytest.mark.asyncio
async def test_insert_then_get(cache, candidate, compatible_latest):
    key = SubjectSchema("orders-value", candidate)

    stored = await cache.insert_if_absent(key, compatible_latest)

    assert stored is compatible_latest
    assert await cache.get(key) is compatible_latest
    assert key in cache
    assert len(cache) == 1


@pytest.mark.ut
@pytest.mark.asyncio
async def test_first_writer_wins(cache, candidate, compatible_latest, incompatible_latest):
    key = SubjectSchema("orders-value", candidate)

    await cache.insert_if_absent(key, compatible_latest)
    stored = await cache.insert_if_absent(key, incompatible_latest)

    assert stored is compatible_latest
    assert await cache.get(key) is compatible_latest
    assert len(cache) == 1


@pytest.mark.ut
@pytest.mark.asyncio
async def test_keys_use_schema_equality(cache, candidate, compatible_latest):
    await cache.insert_if_absent(SubjectSchema("orders-value", candidate), compatible_latest)

    same_schema = JsonSchema.parse(candidate.canonical_string())
    assert await cache.get(SubjectSchema("orders-value", same_schema)) is compatible_latest
    assert await cache.get(SubjectSchema("orders-key", candidate)) is None


@pytest.mark.ut
@pytest.mark.asyncio
async def test_concurrent_inserts_keep_one_value(cache, candidate):
    key = SubjectSchema("orders-value", candidate)
    schemas = [JsonSchema.parse({"title": f"v{i}"}) for i in range(20)]

    results = await asyncio.gather(*(cache.insert_if_absent(key, s) for s in schemas))

    assert len(cache) == 1
    winner = await cache.get(key)
    assert all(result is winner for result in results)
    assert winner is schemas[0]
