MAGIC_BYTE: int = 0
ID_SIZE: int = 4
HEADER_SIZE: int = 1 + ID_SIZE

_ID_MIN = -(1 << 31)
_ID_MAX = (1 << 31) - 1


def write_envelope(schema_id: int, document: bytes) -> bytes:
    """
    Frame an encoded document:

        envelope = magic byte (0x00)
                 || schema id (4 bytes, big-endian, signed)
                 || document

    The document is copied as is. There is no length prefix: the document
    ends with the buffer. Readers must reject any other magic byte.
    """
    if not _ID_MIN <= schema_id <= _ID_MAX:
        raise ValueError(f"Schema id {schema_id} does not fit in a signed 32-bit integer")

    return (
        MAGIC_BYTE.to_bytes(1, "big")
        + schema_id.to_bytes(ID_SIZE, "big", signed=True)
        + bytes(document)
    )
