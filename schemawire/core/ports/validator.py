from typing import Any, Protocol

from schemawire.core.models.schema import JsonSchema


class PayloadValidator(Protocol):
    def validate(self, schema: JsonSchema, document: Any) -> None:
        """
        Check `document` against `schema`. Raises ValidationError
        describing the violation when the document does not conform.
        """
