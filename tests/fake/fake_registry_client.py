from dataclasses import dataclass

from confluent_kafka.schema_registry import Schema, SchemaReference
from confluent_kafka.schema_registry.error import SchemaRegistryError


@dataclass
class FakeRegisteredSchema:
    schema_id: int | None
    schema: Schema | None
    subject: str
    version: int


class FakeRegistryClient:
    """
    In-memory stand-in for confluent-kafka's SchemaRegistryClient.

    Subjects hold a list of schema texts; ids are global and assigned in
    registration order. Lookups match the stored text exactly, key order
    included, as the registry does. Every call is kept in `calls`, and
    setting `error` makes every call raise it.
    """

    def __init__(self) -> None:
        self.subjects: dict[str, list[tuple[int, str, str]]] = {}
        self.schemas: dict[tuple[str, str], int] = {}
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None
        self.entered = 0
        self.exited = 0
        self._next_id = 1

    def __enter__(self) -> "FakeRegistryClient":
        self.entered += 1
        return self

    def __exit__(self, *args) -> None:
        self.exited += 1

    def add(self, subject: str, schema: str, schema_type: str = "JSON") -> int:
        key = (schema_type, schema)
        if key not in self.schemas:
            self.schemas[key] = self._next_id
            self._next_id += 1
        schema_id = self.schemas[key]
        versions = self.subjects.setdefault(subject, [])
        if all(existing_id != schema_id for existing_id, _, _ in versions):
            versions.append((schema_id, schema, schema_type))
        return schema_id

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def register_schema(self, subject_name: str, schema: Schema, normalize_schemas: bool = False) -> int:
        self._record("register_schema", subject_name)
        return self.add(subject_name, schema.schema_str, schema.schema_type)

    def lookup_schema(
        self,
        subject_name: str,
        schema: Schema,
        normalize_schemas: bool = False,
        deleted: bool = False,
    ) -> FakeRegisteredSchema:
        self._record("lookup_schema", subject_name)
        if subject_name not in self.subjects:
            raise SchemaRegistryError(404, 40401, f"Subject '{subject_name}' not found.")
        for version, (schema_id, text, schema_type) in enumerate(self.subjects[subject_name], start=1):
            if text == schema.schema_str:
                return FakeRegisteredSchema(
                    schema_id=schema_id,
                    schema=Schema(schema_str=text, schema_type=schema_type, references=[]),
                    subject=subject_name,
                    version=version,
                )
        raise SchemaRegistryError(404, 40403, "Schema not found")

    def get_latest_version(self, subject_name: str) -> FakeRegisteredSchema:
        self._record("get_latest_version", subject_name)
        if subject_name not in self.subjects:
            raise SchemaRegistryError(404, 40401, f"Subject '{subject_name}' not found.")
        versions = self.subjects[subject_name]
        schema_id, text, schema_type = versions[-1]
        return FakeRegisteredSchema(
            schema_id=schema_id,
            schema=Schema(schema_str=text, schema_type=schema_type, references=[]),
            subject=subject_name,
            version=len(versions),
        )

    def _record(self, method: str, subject: str) -> None:
        self.calls.append((method, subject))
        if self.error is not None:
            raise self.error


def registered(
    schema_str: str,
    schema_id: int | None = 1,
    version: int = 1,
    subject: str = "orders-value",
    references: list[SchemaReference] | None = None,
) -> FakeRegisteredSchema:
    return FakeRegisteredSchema(
        schema_id=schema_id,
        schema=Schema(schema_str=schema_str, schema_type="JSON", references=references or []),
        subject=subject,
        version=version,
    )
