from dataclasses import dataclass


@dataclass(frozen=True)
class SerializerConfig:
    """
    Static behaviour of a JSON schema serializer.

    The flags select how the schema id written in the envelope is resolved
    and whether documents are checked before being framed. They are fixed
    for the lifetime of the serializer.
    """
    automatic_registration: bool = True
    """
    Register the candidate schema under the subject on every call and use
    the returned id. Takes priority over `use_latest_version`.
    """

    use_latest_version: bool = False
    """
    Frame messages with the id of the latest version registered under the
    subject instead of the candidate schema. Only used when automatic
    registration is disabled.
    """

    validate_payload: bool = False
    """
    Validate every encoded document against the resolved schema before
    writing the envelope.
    """

    latest_compatibility_strict: bool = True
    """
    Refuse to use the latest version when it cannot read documents written
    with the candidate schema.
    """
