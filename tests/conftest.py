import pytest

from schemawire.core.cache import ResolutionCache
from schemawire.core.models.config import SerializerConfig
from schemawire.core.models.schema import JsonSchema
from schemawire.infra.json_encoder import JsonDocumentEncoder
from schemawire.infra.jsonschema_validator import JsonSchemaValidator
from tests.fake.fake_registry import FakeSchemaRegistry


@pytest.fixture
def candidate() -> JsonSchema:
    return JsonSchema.parse({
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "note": {"type": "string"},
        },
        "required": ["id"],
    })


@pytest.fixture
def compatible_latest() -> JsonSchema:
    return JsonSchema.parse({
        "type": "object",
        "properties": {
            "id": {"type": "number"},
            "note": {"type": "string"},
            "origin": {"type": "string"},
        },
        "required": ["id"],
    })


@pytest.fixture
def incompatible_latest() -> JsonSchema:
    return JsonSchema.parse({
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "name": {"type": "string"},
        },
        "required": ["id", "name"],
    })


@pytest.fixture
def registry() -> FakeSchemaRegistry:
    return FakeSchemaRegistry()


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def encoder() -> JsonDocumentEncoder:
    return JsonDocumentEncoder()


@pytest.fixture
def validator() -> JsonSchemaValidator:
    return JsonSchemaValidator()


@pytest.fixture
def latest_config() -> SerializerConfig:
    return SerializerConfig(
        automatic_registration=False,
        use_latest_version=True,
        latest_compatibility_strict=True,
    )
