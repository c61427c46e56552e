import logging

from schemawire.core.cache import ResolutionCache
from schemawire.core.errors import ConfigurationError, IncompatibleSchemaError
from schemawire.core.models.config import SerializerConfig
from schemawire.core.models.schema import JsonSchema, SubjectSchema
from schemawire.core.ports.registry import SchemaRegistry


class SchemaResolver:
    """
    Decides, for a subject, which schema a document is validated against
    and which id is written in its envelope.

    Policy, evaluated in this order:

    - automatic registration: validate with the candidate schema and
      frame with the id returned by registering it.
    - use latest version: validate with the latest registered schema and
      frame with its id. The latest schema is fetched once per subject and
      kept in the resolution cache.
    - otherwise: validate with the candidate schema and frame with the id
      it already has in the registry.

    Registry failures are not retried here and propagate unchanged.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        config: SerializerConfig,
        cache: ResolutionCache,
        candidate: JsonSchema,
    ) -> None:
        self._registry = registry
        self._config = config
        self._cache = cache
        self._candidate = candidate
        self._logger = logging.getLogger("core.service.resolver")

    @property
    def candidate(self) -> JsonSchema:
        return self._candidate

    async def schema_for_validation(self, subject: str) -> JsonSchema:
        if not self._config.automatic_registration and self._config.use_latest_version:
            return await self.resolve_latest(subject)
        return self._candidate

    async def id_for_envelope(self, subject: str) -> int:
        if self._config.automatic_registration:
            return await self._registry.register(subject, self._candidate)

        if self._config.use_latest_version:
            latest = await self.resolve_latest(subject)
            return await self._registry.get_id(subject, latest)

        return await self._registry.get_id(subject, self._candidate)

    async def resolve_latest(self, subject: str) -> JsonSchema:
        """
        Return the latest schema registered under `subject`, from the cache
        when this subject and candidate were already resolved.

        On a miss the latest version is fetched and checked for backward
        compatibility with the candidate. With strict compatibility, any
        issue aborts the resolution and nothing is cached. A cached entry
        is never refreshed, so registry-side version bumps are not seen
        until the cache is dropped.
        """
        key = SubjectSchema(subject, self._candidate)

        cached = await self._cache.get(key)
        if cached is not None:
            self._logger.debug(f"Latest schema for '{subject}' served from cache")
            return cached

        metadata = await self._registry.get_latest_schema_metadata(subject)
        latest = self._registry.parse_schema(metadata)
        if latest is None:
            raise ConfigurationError(
                f"Latest schema of subject '{subject}' (id {metadata.id}, type "
                f"{metadata.schema_type}) cannot be read as a JSON schema. "
                f"Enable JSON schema support on the registry client."
            )

        issues = latest.is_backward_compatible(self._candidate)
        if issues:
            if self._config.latest_compatibility_strict:
                raise IncompatibleSchemaError(subject, issues)

            self._logger.warning(
                f"Latest schema of '{subject}' (version {metadata.version}) is not "
                f"backward compatible with the candidate schema: {', '.join(issues)}"
            )

        self._logger.debug(
            f"Resolved latest schema for '{subject}': id {metadata.id}, "
            f"version {metadata.version}"
        )
        return await self._cache.insert_if_absent(key, latest)
