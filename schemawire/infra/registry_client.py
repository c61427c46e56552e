"""Async adapter over the confluent-kafka schema registry client.

The confluent client is synchronous: its calls run on a small thread pool,
the way blocking backends are driven from the event loop elsewhere. It
memoises registered and looked-up ids per (subject, schema) itself, so
steady-state framing costs no round-trip.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import httpx
from confluent_kafka.schema_registry import Schema, SchemaRegistryClient
from confluent_kafka.schema_registry import SchemaReference as ClientSchemaReference
from confluent_kafka.schema_registry.error import SchemaRegistryError as ClientError

from schemawire.core.errors import RegistryUnavailableError, SchemaRegistryError
from schemawire.core.models.schema import (
    JSON_SCHEMA_TYPE,
    JsonSchema,
    SchemaMetadata,
    SchemaReference,
)

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger("infra.registry_client")

T = TypeVar("T")

_HTTP_SERVER_ERROR_MIN = 500
_UNKNOWN_ERROR_CODE = -1


class ConfluentSchemaRegistry:
    """
    SchemaRegistry implementation backed by confluent-kafka's
    SchemaRegistryClient.

    The client and its thread pool are created on first use or with
    `connect()`, and must be released with `close()` (or by using the
    registry as an async context manager). An already built client can be
    passed as `client`; it is then used instead of one built from the
    connection settings.

    `json_schema_support` mirrors the registry client option of the same
    purpose: when it is disabled, `parse_schema` never yields a schema and
    resolving the latest version of a subject fails with a
    ConfigurationError.
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 10.0,
        cache_capacity: int = 1000,
        json_schema_support: bool = True,
        max_workers: int = 4,
        client: Any = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._json_schema_support = json_schema_support
        self._max_workers = max_workers
        self._provided_client = client
        self._client: Any = None
        self._pool: ThreadPoolExecutor | None = None

        # no local retries: failures surface to the caller at once
        self._conf: dict[str, Any] = {
            "url": self._url,
            "timeout": timeout,
            "max.retries": 0,
        }
        if cache_capacity > 0:
            self._conf["cache.capacity"] = cache_capacity
        if username:
            self._conf["basic.auth.user.info"] = f"{username}:{password or ''}"

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the client and its thread pool. Calling it twice is harmless."""
        if self._client is not None:
            return
        client = self._provided_client or SchemaRegistryClient(self._conf)
        self._client = client.__enter__()
        self._pool = ThreadPoolExecutor(max_workers=self._max_workers)
        logger.debug(f"Schema registry client connected to {self._url}")

    async def close(self) -> None:
        if self._client is None:
            return

        client, pool = self._client, self._pool
        self._client, self._pool = None, None

        def shutdown() -> None:
            client.__exit__(None, None, None)
            if pool is not None:
                pool.shutdown(wait=True)

        await asyncio.to_thread(shutdown)
        logger.debug("Schema registry client closed")

    async def __aenter__(self) -> ConfluentSchemaRegistry:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def register(self, subject: str, schema: JsonSchema) -> int:
        schema_id = await self._call(
            "register", subject, _register, subject, _to_client_schema(schema)
        )
        logger.debug(f"Registered schema under '{subject}' with id {schema_id}")
        return schema_id

    async def get_id(self, subject: str, schema: JsonSchema) -> int:
        return await self._call(
            "lookup", subject, _lookup, subject, _to_client_schema(schema)
        )

    async def get_latest_schema_metadata(self, subject: str) -> SchemaMetadata:
        return await self._call("latest version", subject, _latest, subject)

    def parse_schema(self, metadata: SchemaMetadata) -> JsonSchema | None:
        if not self._json_schema_support or metadata.schema_type != JSON_SCHEMA_TYPE:
            return None
        return JsonSchema.parse(
            metadata.schema,
            references=metadata.references,
            version=metadata.version
        )

    async def _call(
        self,
        operation: str,
        subject: str,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        if self._client is None:
            await self.connect()
        assert self._client is not None

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._pool, func, self._client, *args)
        except ClientError as ex:
            raise _map_client_error(operation, subject, ex) from ex
        except httpx.TimeoutException as ex:
            raise RegistryUnavailableError(
                f"Schema registry at {self._url} timed out after {self._timeout}s: {ex}"
            ) from ex
        except (httpx.TransportError, OSError) as ex:
            raise RegistryUnavailableError(
                f"Schema registry at {self._url} is unreachable: {ex}"
            ) from ex
        except (ValueError, KeyError, TypeError) as ex:
            raise SchemaRegistryError(
                f"Schema registry {operation} for subject '{subject}' "
                f"returned a malformed response: {ex!r}"
            ) from ex


def _register(client: SchemaRegistryClient, subject: str, schema: Schema) -> int:
    return _schema_id(client.register_schema(subject, schema))


def _lookup(client: SchemaRegistryClient, subject: str, schema: Schema) -> int:
    return _schema_id(client.lookup_schema(subject, schema).schema_id)


def _latest(client: SchemaRegistryClient, subject: str) -> SchemaMetadata:
    registered = client.get_latest_version(subject)
    schema = registered.schema
    if schema is None or schema.schema_str is None:
        raise ValueError("latest version carries no schema text")

    return SchemaMetadata(
        id=_schema_id(registered.schema_id),
        subject=registered.subject or subject,
        version=int(registered.version),
        schema=schema.schema_str,
        # the registry leaves the type out for AVRO schemas
        schema_type=schema.schema_type or "AVRO",
        references=tuple(
            SchemaReference(name=ref.name, subject=ref.subject, version=int(ref.version))
            for ref in schema.references or ()
        ),
    )


def _schema_id(value: Any) -> int:
    if value is None:
        raise KeyError("id")
    return int(value)


def _to_client_schema(schema: JsonSchema) -> Schema:
    return Schema(
        schema_str=schema.schema_string(),
        schema_type=schema.schema_type,
        references=[
            ClientSchemaReference(name=ref.name, subject=ref.subject, version=ref.version)
            for ref in schema.references
        ],
    )


def _map_client_error(operation: str, subject: str, ex: ClientError) -> SchemaRegistryError:
    status = ex.http_status_code if ex.http_status_code != _UNKNOWN_ERROR_CODE else None
    error_code = ex.error_code if ex.error_code != _UNKNOWN_ERROR_CODE else None
    text = (
        f"Schema registry {operation} for subject '{subject}' failed with HTTP {status}"
        f" (error code {error_code}): {ex.error_message}"
    )
    if status is not None and status >= _HTTP_SERVER_ERROR_MIN:
        return RegistryUnavailableError(text, status, error_code)
    return SchemaRegistryError(text, status, error_code)
