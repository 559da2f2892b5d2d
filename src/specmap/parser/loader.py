"""Read OpenAPI documents from a URL, local file, or stdin and decode them.

This module is the I/O layer in front of :func:`~specmap.parser.decoder.parse`.
It fetches the raw bytes of a document, enforces the configured size limit,
and hands the bytes to the decoder. Nothing here interprets the document.

The public function is :func:`load_api`. Source failures raise
:class:`~specmap.exceptions.SourceError`; decoding failures propagate
unchanged as :class:`~specmap.exceptions.DeserializationError`.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import IO, Optional

import httpx

from specmap.config import LoaderConfig
from specmap.exceptions import SourceError
from specmap.models import API
from specmap.parser.decoder import parse

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def load_api(source: str, config: Optional[LoaderConfig] = None) -> API:
    """Load and decode an OpenAPI document from URL, file path, or stdin ('-').

    Args:
        source: An ``http``/``https`` URL, a file path, or ``-`` for stdin.
        config: Timeout, TLS and size settings. Defaults apply when omitted.

    Returns:
        The decoded :class:`~specmap.models.API`.

    Raises:
        SourceError: If the source cannot be read, is empty, or exceeds
            ``config.max_bytes``.
        DeserializationError: If the document does not decode.
    """
    config = config or LoaderConfig()
    if source == "-":
        data = _load_from_stdin(config)
    elif source.startswith(("http://", "https://")):
        data = _load_from_url(source, config)
    else:
        data = _load_from_file(source, config)

    if not data.strip():
        raise SourceError(f"No content in spec source: {source}")

    logger.debug("Read %d bytes from %s", len(data), source)
    return parse(io.BytesIO(data))


def _read_limited(stream: IO[bytes], limit: int, source: str) -> bytes:
    """Read *stream* to EOF, failing once more than *limit* bytes arrive."""
    buf = bytearray()
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > limit:
            raise SourceError(f"Spec from {source} exceeds the {limit}-byte limit")
    return bytes(buf)


def _load_from_stdin(config: LoaderConfig) -> bytes:
    """Read the document from stdin's binary buffer.

    Raises:
        SourceError: If stdin cannot be read or exceeds the size limit.
    """
    try:
        return _read_limited(sys.stdin.buffer, config.max_bytes, "stdin")
    except OSError as exc:
        raise SourceError(f"Failed to read from stdin: {exc}") from exc


def _load_from_url(url: str, config: LoaderConfig) -> bytes:
    """Fetch the document over HTTP(S), streaming so the size limit applies early.

    Raises:
        SourceError: On HTTP status errors, network errors, or oversize bodies.
    """
    try:
        with httpx.stream(
            "GET",
            url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
        ) as response:
            response.raise_for_status()
            buf = bytearray()
            for chunk in response.iter_bytes():
                buf.extend(chunk)
                if len(buf) > config.max_bytes:
                    raise SourceError(
                        f"Spec from {url} exceeds the {config.max_bytes}-byte limit"
                    )
            return bytes(buf)
    except httpx.HTTPStatusError as exc:
        raise SourceError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SourceError(f"Failed to fetch spec from {url}: {exc}") from exc


def _load_from_file(path: str, config: LoaderConfig) -> bytes:
    """Read the document from a local file.

    Raises:
        SourceError: If the file is missing, unreadable, or too large.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceError(f"Spec file not found: {path}")

    try:
        with file_path.open("rb") as f:
            return _read_limited(f, config.max_bytes, path)
    except OSError as exc:
        raise SourceError(f"Failed to read spec file {path}: {exc}") from exc
