"""OpenAPI document decoding -- read a source and build the typed model.

Typical usage::

    from specmap.parser import parse

    with open("openapi.json", "rb") as f:
        api = parse(f)
    print(api.info.title)

Sub-modules:

* :mod:`~specmap.parser.decoder` -- structural JSON decoding into
  :class:`~specmap.models.API`.
* :mod:`~specmap.parser.loader` -- I/O layer (URL, file, stdin) with a
  size limit, feeding the decoder.
"""

from specmap.parser.decoder import parse, parse_bytes, parse_text
from specmap.parser.loader import load_api

__all__ = ["parse", "parse_bytes", "parse_text", "load_api"]
