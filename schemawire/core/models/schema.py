import json
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Mapping, NamedTuple

from schemawire.core.compat import backward_issues
from schemawire.core.errors import SchemaParseError


JSON_SCHEMA_TYPE = "JSON"


@dataclass(frozen=True)
class SchemaReference:
    """
    A named pointer from one registered schema to another registered
    subject version, as stored by the registry.
    """
    name: str
    subject: str
    version: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "subject": self.subject, "version": self.version}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaReference":
        return cls(
            name=data["name"],
            subject=data["subject"],
            version=int(data["version"])
        )


@dataclass(frozen=True)
class SchemaMetadata:
    """
    A subject version as returned by the registry. The schema text is kept
    raw: turning it into a schema object is the job of the registry client,
    which knows which schema families it has been configured for.
    """
    id: int
    """
    Registry-wide identifier of the schema.
    """

    subject: str
    """
    Subject this version belongs to.
    """

    version: int
    """
    Version number within the subject.
    """

    schema: str
    """
    Raw schema text.
    """

    schema_type: str = "AVRO"
    """
    Schema family. The registry omits the field for AVRO schemas.
    """

    references: tuple[SchemaReference, ...] = ()


@dataclass(frozen=True)
class JsonSchema:
    """
    A JSON schema as exchanged with the registry.

    `text` is what goes over the wire: the registry matches lookups against
    the text it stored, key order included, so it is kept as given (or
    dumped compactly, in insertion order, when built from a mapping).

    Instances are immutable and hashable. Two instances are equal when
    their canonical texts (sorted keys, compact) and references are equal,
    whatever the whitespace or key order of the text they were built from.
    The registry version is informative only and does not take part in
    equality.
    """
    text: str = field(compare=False)
    canonical: str
    references: tuple[SchemaReference, ...] = ()
    version: int | None = field(default=None, compare=False)

    schema_type = JSON_SCHEMA_TYPE

    @classmethod
    def parse(
        cls,
        schema: str | Mapping[str, Any] | bool,
        references: tuple[SchemaReference, ...] | list[SchemaReference] = (),
        version: int | None = None,
    ) -> "JsonSchema":
        if isinstance(schema, str):
            try:
                document = json.loads(schema)
            except json.JSONDecodeError as ex:
                raise SchemaParseError(f"Schema is not valid JSON: {ex}") from ex
            text = schema
        else:
            document = schema
            text = None

        if not isinstance(document, (Mapping, bool)):
            raise SchemaParseError(
                f"A JSON schema must be an object or a boolean, "
                f"got {type(document).__name__}"
            )

        return cls(
            text=text if text is not None else _compact_dumps(document),
            canonical=_compact_dumps(document, sort_keys=True),
            references=tuple(references),
            version=version
        )

    @cached_property
    def document(self) -> dict[str, Any] | bool:
        """The schema as a plain Python object, keys in their original order."""
        return json.loads(self.text)

    def schema_string(self) -> str:
        return self.text

    def canonical_string(self) -> str:
        return self.canonical

    def to_registry_payload(self) -> dict[str, Any]:
        """Request body used to register or look up this schema."""
        payload: dict[str, Any] = {
            "schema": self.text,
            "schemaType": self.schema_type,
        }
        if self.references:
            payload["references"] = [ref.to_dict() for ref in self.references]
        return payload

    def is_backward_compatible(self, previous: "JsonSchema") -> list[str]:
        """
        Return the issues preventing this schema from reading documents
        written with `previous`. An empty list means compatible.
        """
        return backward_issues(self.document, previous.document)


class SubjectSchema(NamedTuple):
    subject: str
    schema: JsonSchema


def _compact_dumps(document: Any, sort_keys: bool = False) -> str:
    return json.dumps(document, sort_keys=sort_keys, separators=(",", ":"), ensure_ascii=False)
