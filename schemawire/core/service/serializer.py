import logging
from typing import Any

from schemawire.core.envelope import write_envelope
from schemawire.core.models.config import SerializerConfig
from schemawire.core.naming import subject_name
from schemawire.core.ports.encoder import DocumentEncoder
from schemawire.core.ports.validator import PayloadValidator
from schemawire.core.service.resolver import SchemaResolver


class JsonSchemaSerializer:
    """
    Frames values for one record role (key or value) of any topic.

    For each value: derive the subject from the topic, encode the value
    into a JSON document, resolve the schema to validate against, validate
    the document if enabled, resolve the schema id, and write the envelope.

    Validation happens before the id is resolved: a document rejected by
    the schema never causes a registration or id lookup. Any failure
    raises and produces no bytes.
    """

    def __init__(
        self,
        is_key: bool,
        resolver: SchemaResolver,
        encoder: DocumentEncoder,
        validator: PayloadValidator,
        config: SerializerConfig,
    ) -> None:
        self._is_key = is_key
        self._resolver = resolver
        self._encoder = encoder
        self._validator = validator
        self._config = config
        self._logger = logging.getLogger("core.service.serializer")

    @property
    def is_key(self) -> bool:
        return self._is_key

    async def serialize(self, topic: str, value: Any) -> bytes | None:
        # null records (tombstones) are passed through unframed
        if value is None:
            return None

        subject = subject_name(topic, self._is_key)
        document = self._encoder.encode(value)

        schema = await self._resolver.schema_for_validation(subject)
        if self._config.validate_payload:
            self._validator.validate(schema, document)

        schema_id = await self._resolver.id_for_envelope(subject)
        self._logger.debug(f"Framing record for '{subject}' with schema id {schema_id}")

        return write_envelope(schema_id, self._encoder.dumps(document))

    async def __call__(self, topic: str, value: Any) -> bytes | None:
        return await self.serialize(topic, value)
