from typing import Protocol

from schemawire.core.models.schema import JsonSchema, SchemaMetadata


class SchemaRegistry(Protocol):
    """
    Client side view of a schema registry.

    Every coroutine is a network round-trip from the caller's point of
    view. Implementations report transport and service failures with
    RegistryUnavailableError and other error responses with
    SchemaRegistryError. They do not retry on behalf of the caller
    unless documented otherwise.
    """

    async def register(self, subject: str, schema: JsonSchema) -> int:
        """
        Register `schema` under `subject` and return its id. Registering
        a schema that already exists under the subject returns the
        existing id.
        """

    async def get_id(self, subject: str, schema: JsonSchema) -> int:
        """
        Return the id of `schema` if it is registered under `subject`.
        Fails with SchemaRegistryError when it is not.
        """

    async def get_latest_schema_metadata(self, subject: str) -> SchemaMetadata:
        """Return the most recent version registered under `subject`."""

    def parse_schema(self, metadata: SchemaMetadata) -> JsonSchema | None:
        """
        Turn a registry response into a schema object. Returns None when
        the client is not configured for the schema family of the response.
        """
