"""Decode an OpenAPI v3 JSON document into a :class:`~specmap.models.API`.

Decoding is a single structural pass driven by the models' field aliases:
Pydantic walks the JSON tree, fills each field by key name and reports any
value whose JSON shape does not fit the declared field type. There is no
``$ref`` resolution and no semantic validation; status codes, required
property names and reference strings are taken as given.

The three entry points differ only in what they accept:

* :func:`parse` -- a binary or text file-like object.
* :func:`parse_bytes` -- UTF-8 encoded bytes.
* :func:`parse_text` -- an already decoded string.

Every failure surfaces as :class:`~specmap.exceptions.DeserializationError`
and no partially populated tree is ever returned.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Union

from pydantic import ValidationError

from specmap.exceptions import DeserializationError, ErrorDetail
from specmap.models import API

logger = logging.getLogger(__name__)

_BOM = b"\xef\xbb\xbf"


def parse(stream: IO[bytes] | IO[str]) -> API:
    """Read one JSON document from *stream* and decode it.

    Raw unbuffered binary streams are wrapped in :class:`io.BufferedReader`.
    The stream is read to EOF but not closed.

    Args:
        stream: Readable binary or text stream holding the document.

    Returns:
        The decoded :class:`~specmap.models.API`.

    Raises:
        DeserializationError: If the input is not UTF-8, not well-formed
            JSON, or a value's shape does not match its field.
    """
    if isinstance(stream, io.RawIOBase):
        stream = io.BufferedReader(stream)
    return _decode(stream.read())


def parse_bytes(data: bytes) -> API:
    """Decode a UTF-8 encoded document. A leading BOM is ignored."""
    return _decode(data)


def parse_text(text: str) -> API:
    """Decode a document that is already a string."""
    return _decode(text)


def _decode(data: Union[bytes, str]) -> API:
    if isinstance(data, bytes):
        if data.startswith(_BOM):
            data = data[len(_BOM):]
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.debug("Rejecting non UTF-8 input: %s", exc)
            raise DeserializationError(
                f"Input is not valid UTF-8: {exc}",
                details=[ErrorDetail(location="", message=str(exc), kind="utf8_invalid")],
            ) from exc
    elif data.startswith("\ufeff"):
        data = data[1:]

    logger.debug("Decoding OpenAPI document (%d characters)", len(data))
    try:
        api = API.model_validate_json(data)
    except ValidationError as exc:
        error = DeserializationError.from_validation_error(exc)
        logger.debug("Decoding failed: %s", error)
        raise error from exc

    logger.debug(
        "Decoded OpenAPI %s document: %d paths, %d component groups",
        api.version or "(unversioned)",
        len(api.paths),
        len(api.components),
    )
    return api
