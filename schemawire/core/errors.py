class SerdeError(Exception):
    """Base class for every error raised while framing a message."""


class SchemaParseError(SerdeError):
    """Raised when a schema text cannot be read as a JSON schema."""


class SchemaRegistryError(SerdeError):
    """
    Raised when the schema registry answers with an error response.

    `status_code` is the HTTP status of the response (None when no
    response was received) and `error_code` the registry specific code
    found in the body, e.g. 40401 for an unknown subject.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class RegistryUnavailableError(SchemaRegistryError):
    """Raised on transport failures, timeouts and 5xx registry responses."""


class ConfigurationError(SerdeError):
    """
    Raised when the registry returns a schema that the local installation
    cannot interpret as a JSON schema. This usually means JSON schema
    support is disabled on the registry client, or the subject holds a
    schema of another family (AVRO, PROTOBUF).
    """


class IncompatibleSchemaError(SerdeError):
    """
    Raised when strict compatibility is enabled and the latest registered
    schema cannot read documents written with the candidate schema.
    """

    def __init__(self, subject: str, issues: list[str]) -> None:
        self.subject = subject
        self.issues = list(issues)
        super().__init__(
            f"Incompatible schema for subject '{subject}': {', '.join(self.issues)}"
        )


class ValidationError(SerdeError):
    """Raised when a document does not satisfy the resolved schema."""

    def __init__(self, message: str, errors: list | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
