import collections.abc
import enum
import typing

import pydantic


class Shape(enum.Enum):
    """The kinds of payload the renderer knows how to lay out."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    BYTES = "bytes"
    SCALAR = "scalar"


def classify(value: typing.Any) -> Shape:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Shape.BYTES
    if isinstance(value, str):
        return Shape.SCALAR
    if isinstance(value, collections.abc.Mapping):
        return Shape.MAPPING
    if isinstance(value, (list, tuple)):
        return Shape.SEQUENCE
    return Shape.SCALAR


class FilterArgs(pydantic.BaseModel):
    """What a user filter gets to see about the event being logged."""

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)

    is_response: bool
    # Request body for request events, response body for response and error events
    data: typing.Any = None

    @property
    def has_string_data(self) -> bool:
        return isinstance(self.data, str)

    @property
    def has_map_data(self) -> bool:
        return classify(self.data) is Shape.MAPPING

    @property
    def has_list_data(self) -> bool:
        return classify(self.data) is Shape.SEQUENCE

    @property
    def has_bytes_data(self) -> bool:
        return classify(self.data) is Shape.BYTES

    @property
    def has_json_data(self) -> bool:
        return self.has_map_data or self.has_list_data


class FormData(pydantic.BaseModel):
    """Fields and files of a multipart request body."""

    boundary: str
    fields: typing.List[typing.Tuple[str, str]] = []
    files: typing.List[typing.Tuple[str, str]] = []

    def as_mapping(self) -> typing.Dict[str, str]:
        entries: typing.Dict[str, str] = {}
        entries.update(self.fields)
        entries.update(self.files)
        return entries
