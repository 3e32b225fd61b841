import typing

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from colored_httpx_logger.colors import Color

COLOR_FIELDS = (
    "request_color",
    "header_color",
    "body_color",
    "error_color",
    "response_color",
    "response_header_color",
    "response_status_color",
)


class LoggerConfig(BaseModel):
    """What the logger prints and how it looks.

    Color fields that are not given take the value of ``default_color``, so
    every color is set once the model is built.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    show_request: bool = Field(True, description="Print the request line box")
    show_request_headers: bool = Field(
        False, description="Print query parameters, headers and extensions"
    )
    show_request_body: bool = Field(False, description="Print the request body")
    show_response_headers: bool = Field(
        False, description="Print the response headers"
    )
    show_response_body: bool = Field(True, description="Print the response body")
    show_errors: bool = Field(True, description="Print failed requests")
    compact: bool = Field(True, description="Inline small maps and lists")
    max_width: PositiveInt = Field(90, description="Columns per printed line")
    enabled: bool = Field(True, description="Master switch for all output")

    default_color: Color = Color.RESET
    request_color: Color = Color.RESET
    header_color: Color = Color.RESET
    body_color: Color = Color.RESET
    error_color: Color = Color.RESET
    response_color: Color = Color.RESET
    response_header_color: Color = Color.RESET
    response_status_color: Color = Color.RESET

    chunk_size: PositiveInt = Field(20, description="Bytes per line of binary bodies")
    flatten_list_limit: PositiveInt = Field(
        10, description="Lists with this many items or more are never inlined"
    )
    tab_step: str = "    "
    initial_tab: PositiveInt = 1

    @model_validator(mode="before")
    @classmethod
    def fill_colors(cls, data: typing.Any) -> typing.Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        default = data.get("default_color")
        if default is None:
            default = Color.RESET
            data["default_color"] = default
        for name in COLOR_FIELDS:
            if data.get(name) is None:
                data[name] = default
        return data

    def updated(self, **changes: typing.Any) -> "LoggerConfig":
        """Copy of this config with ``changes`` applied.

        A new ``default_color`` also replaces every color that still matched
        the old default, unless that color is part of ``changes``.
        """
        data = self.model_dump()
        if changes.get("default_color") is not None:
            for name in COLOR_FIELDS:
                if name not in changes and data[name] == self.default_color:
                    del data[name]
        data.update(changes)
        return LoggerConfig(**data)
