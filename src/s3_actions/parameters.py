"""Per-invocation parameter resolution."""

from collections.abc import Mapping
from typing import Any, BinaryIO, Optional

FILE = "file"
FILE_NAME = "file_name"
OBJECT_KEY = "object_key"
DESTINATION_BUCKET_NAME = "destination_bucket_name"
DESTINATION_FILE_NAME = "destination_file_name"
DESTINATION_OBJECT_KEY = "destination_object_key"
CONTENT_TYPE = "content_type"

KEY_PARAMETERS = (FILE_NAME, OBJECT_KEY)
DESTINATION_KEY_PARAMETERS = (DESTINATION_FILE_NAME, DESTINATION_OBJECT_KEY)


class ParameterValues:
    """Named values resolved for one invocation of a sender.

    The object key falls back to the invocation message when neither
    ``file_name`` nor ``object_key`` is given.
    """

    def __init__(
        self, values: Optional[Mapping[str, Any]] = None, message: Optional[str] = None
    ):
        self._values = dict(values or {})
        self.message = message

    def _first(self, names: tuple[str, ...]) -> Optional[str]:
        for name in names:
            value = self._values.get(name)
            if value is not None:
                return str(value)
        return None

    def object_key(self) -> Optional[str]:
        key = self._first(KEY_PARAMETERS)
        if key is None:
            return self.message
        return key

    def file(self) -> Optional[BinaryIO]:
        return self._values.get(FILE)

    def destination_bucket_name(self, default: Optional[str] = None) -> Optional[str]:
        return self._first((DESTINATION_BUCKET_NAME,)) or default

    def destination_object_key(self) -> Optional[str]:
        return self._first(DESTINATION_KEY_PARAMETERS)

    def content_type(self) -> Optional[str]:
        return self._first((CONTENT_TYPE,))
