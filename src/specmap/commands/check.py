"""The ``specmap check`` command -- decode a spec and report the outcome."""

from __future__ import annotations

import typer

from specmap.exceptions import DeserializationError, SpecmapError
from specmap.output import error, get_output, print_record

_MAX_REPORTED = 20


def check_command(
    ctx: typer.Context,
    source: str = typer.Argument(help="Spec file path, http(s) URL, or '-' for stdin."),
) -> None:
    """Decode SOURCE and report whether it fits the OpenAPI model.

    On success prints a short summary. On failure prints each decode
    problem with its location and exits with code 4.

    Example::

        specmap check openapi.json
        curl -s https://example.com/openapi.json | specmap check -
    """
    from specmap.parser import load_api

    config = ctx.obj["config"]
    try:
        api = load_api(source, config.loader)
    except DeserializationError as exc:
        error(str(exc))
        output = get_output()
        for detail in exc.details[:_MAX_REPORTED]:
            output.info(f"  {detail}")
        if len(exc.details) > _MAX_REPORTED:
            output.info(f"  ... and {len(exc.details) - _MAX_REPORTED} more")
        raise typer.Exit(code=exc.exit_code) from None
    except SpecmapError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    operations = api.operations()
    print_record(
        {
            "status": "ok",
            "openapi": api.version,
            "title": api.info.title,
            "paths": len(api.paths),
            "operations": len(operations),
            "components": sum(len(group) for group in api.components.values()),
        },
        title=source,
    )
