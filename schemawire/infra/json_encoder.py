import json
from typing import Any

from pydantic_core import to_jsonable_python


class JsonDocumentEncoder:
    """
    DocumentEncoder producing compact UTF-8 JSON.

    Values are converted with pydantic's serializer, so pydantic models,
    dataclasses, enums, datetimes, UUIDs and plain containers are all
    accepted. Field aliases are used when `by_alias` is set, matching what
    consumers generated from the same models expect.
    """

    def __init__(self, by_alias: bool = True, exclude_none: bool = False) -> None:
        self._by_alias = by_alias
        self._exclude_none = exclude_none

    def encode(self, value: Any) -> Any:
        return to_jsonable_python(
            value,
            by_alias=self._by_alias,
            exclude_none=self._exclude_none
        )

    def dumps(self, document: Any) -> bytes:
        return json.dumps(
            document,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
