from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, best_match
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from schemawire.core.errors import SchemaParseError, ValidationError
from schemawire.core.models.schema import JsonSchema


class JsonSchemaValidator:
    """
    PayloadValidator backed by the `jsonschema` library.

    The draft is taken from the `$schema` keyword of each schema and
    defaults to draft 7. Compiled validators are kept per schema, so a
    schema is checked once no matter how many documents it validates.
    """

    def __init__(self, default=Draft7Validator) -> None:
        self._default = default
        self._validators: dict[JsonSchema, Validator] = {}

    def validate(self, schema: JsonSchema, document: Any) -> None:
        validator = self._get_validator(schema)
        errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
        if not errors:
            return

        error = best_match(errors)
        raise ValidationError(
            f"Document does not conform to schema at {error.json_path}: {error.message}",
            errors=errors
        ) from error

    def _get_validator(self, schema: JsonSchema) -> Validator:
        validator = self._validators.get(schema)
        if validator is None:
            cls = validator_for(schema.document, default=self._default)
            try:
                cls.check_schema(schema.document)
            except SchemaError as ex:
                raise SchemaParseError(f"Invalid JSON schema: {ex.message}") from ex
            validator = cls(schema.document)
            self._validators[schema] = validator
        return validator
