from schemawire.core.cache import ResolutionCache
from schemawire.core.models.config import SerializerConfig
from schemawire.core.models.schema import JsonSchema
from schemawire.core.ports.encoder import DocumentEncoder
from schemawire.core.ports.registry import SchemaRegistry
from schemawire.core.ports.validator import PayloadValidator
from schemawire.core.service.resolver import SchemaResolver
from schemawire.core.service.serializer import JsonSchemaSerializer


class RecordSerializer:
    """
    Key and value serializers for one candidate schema.

    Both roles share the configuration and a single resolution cache
    owned by this object. Dropping the RecordSerializer drops the cache.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        candidate: JsonSchema,
        config: SerializerConfig,
        encoder: DocumentEncoder,
        validator: PayloadValidator,
    ) -> None:
        self.cache = ResolutionCache()
        self.resolver = SchemaResolver(
            registry=registry,
            config=config,
            cache=self.cache,
            candidate=candidate
        )
        self.for_key = JsonSchemaSerializer(
            is_key=True,
            resolver=self.resolver,
            encoder=encoder,
            validator=validator,
            config=config
        )
        self.for_value = JsonSchemaSerializer(
            is_key=False,
            resolver=self.resolver,
            encoder=encoder,
            validator=validator,
            config=config
        )
