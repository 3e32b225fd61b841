"""
Turning httpx request and response bodies into values the renderer can lay out.

JSON bodies become dicts and lists, textual bodies become strings and anything
else stays as raw bytes. Multipart request bodies are described by their
fields instead of their encoded bytes.
"""

import json
import logging
import typing

import httpx

from colored_httpx_logger.model import FormData

logger = logging.getLogger(__name__)

TEXT_MEDIA_TYPES = {
    "application/javascript",
    "application/x-www-form-urlencoded",
    "application/xml",
    "application/x-ndjson",
}


def media_type(content_type: typing.Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_media(media: str) -> bool:
    return media == "application/json" or media.endswith("+json")


def is_text_media(media: str) -> bool:
    return (
        media == ""
        or media.startswith("text/")
        or media.endswith("+xml")
        or media in TEXT_MEDIA_TYPES
    )


def decode_body(
    content: bytes,
    content_type: typing.Optional[str],
    encoding: str = "utf-8",
) -> typing.Any:
    """Decode a raw body according to its Content-Type.

    Returns None for an empty body.
    """
    if not content:
        return None
    media = media_type(content_type)
    if is_json_media(media):
        try:
            return json.loads(content)
        except ValueError as e:
            logger.debug(f"Body declared as {media} is not valid JSON: {e}")
            return content.decode(encoding, errors="replace")
    if is_text_media(media):
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            return bytes(content)
    return bytes(content)


def response_payload(response: httpx.Response) -> typing.Any:
    """Decoded body of a response, or None if the body has not been read."""
    try:
        response.content
    except httpx.ResponseNotRead:
        return None
    return decode_body(
        response.content,
        response.headers.get("content-type"),
        response.encoding or "utf-8",
    )


def form_data(request: httpx.Request) -> typing.Optional[FormData]:
    """Describe a multipart request body, or None if the body is not multipart."""
    stream = request.stream
    boundary = getattr(stream, "boundary", None)
    fields = getattr(stream, "fields", None)
    if boundary is None or fields is None:
        return None
    if isinstance(boundary, bytes):
        boundary = boundary.decode("ascii")

    form = FormData(boundary=boundary)
    for field in fields:
        if hasattr(field, "file"):
            form.files.append((field.name, f"<file: {field.filename}>"))
        else:
            value = field.value
            if isinstance(value, bytes):
                value = value.decode("utf-8", errors="replace")
            form.fields.append((field.name, str(value)))
    return form


def request_payload(request: httpx.Request) -> typing.Any:
    """Body of an outgoing request.

    Streaming bodies that have not been read are not consumed here and are
    reported as None.
    """
    form = form_data(request)
    if form is not None:
        return form
    try:
        content = request.content
    except httpx.RequestNotRead:
        return None
    return decode_body(content, request.headers.get("content-type"))
