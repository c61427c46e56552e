import json
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncIterator

from pydantic import ValidationError

from schemawire.bootstrap.config.settings import SchemaWireConfig, RegistrySettings, SerializerSettings
from schemawire.core.facade import RecordSerializer
from schemawire.core.models.schema import JsonSchema
from schemawire.core.ports.registry import SchemaRegistry
from schemawire.infra.json_encoder import JsonDocumentEncoder
from schemawire.infra.jsonschema_validator import JsonSchemaValidator
from schemawire.infra.registry_client import ConfluentSchemaRegistry


@lru_cache
def get_config() -> SchemaWireConfig:
    try:
        return SchemaWireConfig()
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def build_registry(settings: RegistrySettings) -> ConfluentSchemaRegistry:
    return ConfluentSchemaRegistry(
        url=settings.url,
        username=settings.username,
        password=settings.password,
        timeout=settings.timeout,
        cache_capacity=settings.cache_capacity,
        json_schema_support=settings.json_schema_support,
    )


def build_record_serializer(
    registry: SchemaRegistry,
    schema: JsonSchema,
    settings: SerializerSettings,
) -> RecordSerializer:
    return RecordSerializer(
        registry=registry,
        candidate=schema,
        config=settings.to_config(),
        encoder=JsonDocumentEncoder(),
        validator=JsonSchemaValidator(),
    )


@asynccontextmanager
async def open_record_serializer(
    config: SchemaWireConfig,
    schema: JsonSchema,
) -> AsyncIterator[RecordSerializer]:
    """
    Build key and value serializers for `schema` against the configured
    registry, and close the registry connection on exit.
    """
    async with build_registry(config.registry) as registry:
        yield build_record_serializer(registry, schema, config.serializer)


def load_schema(path: str | Path) -> JsonSchema:
    file = Path(path)
    if not file.is_file():
        raise SystemExit(f"[schema] Schema file not found: '{file}'.")
    return JsonSchema.parse(file.read_text(encoding="utf-8"))
