from typing import Any, Protocol


class DocumentEncoder(Protocol):
    """
    Turns application values into JSON documents, then documents into the
    bytes written after the envelope header.

    Documents are plain Python trees (dict, list, str, int, float, bool,
    None) so that they can be validated before being written.
    Implementations must be deterministic.
    """

    def encode(self, value: Any) -> Any:
        """Convert an application value into a JSON document."""

    def dumps(self, document: Any) -> bytes:
        """Serialize a JSON document into bytes."""
