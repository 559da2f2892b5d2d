"""specmap -- Map OpenAPI v3 JSON documents onto a typed Python model.

This package decodes the practical subset of OpenAPI v3 that spec
inspectors, correlators and generators need: paths, operations,
parameters, request and response bodies, and component schemas. It
tolerates rather than rejects documents that stray from the full standard,
and leaves ``$ref`` strings unresolved.

Typical usage::

    from specmap import parse

    with open("openapi.json", "rb") as f:
        api = parse(f)
    for path, method, op in api.operations():
        print(method.upper(), path, op.operation_id)

Modules:
    models: Pydantic models for the decoded document.
    parser: Decoding entry points and source loading.
    exceptions: Exception hierarchy with exit-code mapping.
    config: XDG-aware configuration for the loader and CLI.
    output: stdout/stderr formatting used by the CLI.
    app: Typer application and ``specmap`` entry point.
"""

__version__ = "0.1.0"

from specmap.exceptions import DeserializationError  # noqa: E402
from specmap.parser import parse  # noqa: E402

__all__ = ["DeserializationError", "parse", "__version__"]
