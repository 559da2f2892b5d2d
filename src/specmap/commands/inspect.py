"""Inspect commands -- examine a decoded OpenAPI document.

Provides the ``specmap inspect`` sub-command group with read-only views of
a spec: general info, servers, paths, a single operation, component groups
and a single component type. Every sub-command takes the spec SOURCE as its
first argument (file path, http(s) URL, or ``-`` for stdin).

``$ref`` values are shown as written; nothing is resolved.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specmap.exceptions import InvalidUsageError, SpecmapError
from specmap.models import API, Method, Property, Schema
from specmap.output import (
    OutputFormat,
    error,
    get_output,
    info,
    print_record,
    print_table,
)


inspect_app = typer.Typer(no_args_is_help=True)

_SOURCE_HELP = "Spec file path, http(s) URL, or '-' for stdin."


def _load(ctx: typer.Context, source: str) -> API:
    """Load *source* with the resolved loader config, exiting on failure."""
    from specmap.parser import load_api

    try:
        return load_api(source, ctx.obj["config"].loader)
    except SpecmapError as exc:
        error(f"Failed to load spec: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


def _fail(exc: SpecmapError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def _text(value: Optional[str]) -> str:
    return value if value else "-"


def _describe_schema(schema: Optional[Schema]) -> str:
    """One-line description of a value: ``string``, ``array[#/...]``, a ``$ref``..."""
    if schema is None:
        return "-"
    if schema.is_array:
        element = schema.items.ref or schema.items.type
        return f"array[{element}]"
    return schema.ref or schema.type or "-"


def _describe_property(prop: Property) -> str:
    if prop.items is not None and (prop.items.type or prop.items.ref):
        element = prop.items.ref or prop.items.type
        return f"array[{element}]"
    if prop.type and prop.ref:
        return f"{prop.type} | {prop.ref}"
    return prop.ref or prop.type or "-"


def _find_operation(api: API, path: str, method: str) -> Method:
    operations = api.paths.get(path)
    if operations is None:
        raise InvalidUsageError(f"Path not found in spec: {path}")
    operation = operations.get(method.lower())
    if operation is None:
        # Method keys are kept as written; fall back to a case-insensitive match.
        operation = next(
            (op for key, op in operations.items() if key.lower() == method.lower()),
            None,
        )
    if operation is None:
        available = ", ".join(m.upper() for m in operations) or "none"
        raise InvalidUsageError(
            f"No {method.upper()} operation on {path} (available: {available})"
        )
    return operation


@inspect_app.command("info")
def inspect_info(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
) -> None:
    """Show spec metadata and overall counts.

    Example::

        specmap inspect info openapi.json
    """
    api = _load(ctx, source)
    print_record(
        {
            "openapi": api.version,
            "title": api.info.title,
            "version": api.info.version,
            "servers": [server.url for server in api.servers],
            "paths": len(api.paths),
            "operations": len(api.operations()),
            "component_groups": sorted(api.components),
        },
        title=api.info.title or source,
    )


@inspect_app.command("servers")
def inspect_servers(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
) -> None:
    """List servers in preference order."""
    api = _load(ctx, source)
    if not api.servers:
        info("No servers declared.")
        return
    rows = [[str(i), _text(server.url)] for i, server in enumerate(api.servers, start=1)]
    print_table(["#", "URL"], rows, title="Servers")


@inspect_app.command("paths")
def inspect_paths(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
    tag: Optional[str] = typer.Option(
        None, "--tag", "-t", help="Only show operations carrying this tag."
    ),
) -> None:
    """List every operation with its method, path and operation id.

    The summary column falls back to the description when an operation has
    no summary.

    Example::

        specmap inspect paths openapi.json --tag pets
    """
    api = _load(ctx, source)
    rows: list[list[str]] = []
    for path, method, op in api.operations():
        if tag is not None and tag not in op.tags:
            continue
        rows.append([
            method.upper(),
            path,
            _text(op.operation_id),
            _text(op.summary or op.description),
        ])

    if not rows:
        info("No operations found.")
        return
    print_table(
        ["Method", "Path", "Operation ID", "Summary"],
        rows,
        title=f"{api.info.title or source} -- Paths ({len(rows)})",
    )


@inspect_app.command("operation")
def inspect_operation(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
    path: str = typer.Argument(help="Path as written in the spec, e.g. '/pets/{id}'."),
    method: str = typer.Argument(help="HTTP method, e.g. 'get'."),
) -> None:
    """Show parameters, request body and responses of one operation.

    Example::

        specmap inspect operation openapi.json /pets/{petId} get
    """
    api = _load(ctx, source)
    try:
        op = _find_operation(api, path, method)
    except InvalidUsageError as exc:
        raise _fail(exc) from None

    parameters = [
        {
            "name": param.name,
            "in": param.location,
            "required": param.required,
            "schema": _describe_schema(param.schema_),
            "description": param.description,
        }
        for param in op.parameters
    ]
    responses = [
        {
            "status": status,
            "description": response.description,
            "content": sorted(response.content),
        }
        for status, response in op.responses.items()
    ]
    body: Optional[dict[str, Any]] = None
    if op.request_body is not None:
        body = {
            "required": op.request_body.required,
            "content": sorted(op.request_body.content),
            "description": op.request_body.description,
        }

    summary = {
        "path": path,
        "method": method.upper(),
        "operation_id": op.operation_id,
        "tags": op.tags,
        "summary": op.summary,
        "description": op.description,
    }

    output = get_output()
    if output.format == OutputFormat.JSON:
        summary.update(parameters=parameters, request_body=body, responses=responses)
        print_record(summary)
        return

    print_record(summary, title=f"{method.upper()} {path}")
    if parameters:
        print_table(
            ["Name", "In", "Required", "Schema", "Description"],
            [
                [
                    _text(p["name"]),
                    _text(p["in"]),
                    "yes" if p["required"] else "no",
                    p["schema"],
                    _text(p["description"]),
                ]
                for p in parameters
            ],
            title="Parameters",
        )
    if body is not None:
        print_record(
            {
                "required": body["required"],
                "content": body["content"],
                "description": body["description"],
            },
            title="Request body",
        )
    if responses:
        print_table(
            ["Status", "Description", "Content"],
            [
                [r["status"], _text(r["description"]), ", ".join(r["content"]) or "-"]
                for r in responses
            ],
            title="Responses",
        )


@inspect_app.command("components")
def inspect_components(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
    group: Optional[str] = typer.Option(
        None, "--group", "-g", help="Only list one component group, e.g. 'schemas'."
    ),
) -> None:
    """List component types with their discriminator and property count.

    Example::

        specmap inspect components openapi.json --group schemas
    """
    api = _load(ctx, source)
    groups = api.components
    if group is not None:
        if group not in groups:
            raise _fail(InvalidUsageError(f"Component group not found: {group}"))
        groups = {group: groups[group]}

    rows: list[list[str]] = []
    for group_name, types in sorted(groups.items()):
        for name, component in sorted(types.items()):
            rows.append([
                group_name,
                name,
                _text(component.type),
                str(len(component.properties)),
            ])

    if not rows:
        info("No components defined in this spec.")
        return
    print_table(
        ["Group", "Name", "Type", "Properties"],
        rows,
        title=f"Components ({len(rows)})",
    )


@inspect_app.command("type")
def inspect_type(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
    name: str = typer.Argument(help="Component name, e.g. 'Pet'."),
    group: str = typer.Option(
        "schemas", "--group", "-g", help="Component group holding the type."
    ),
) -> None:
    """Show the properties of one component type.

    Example::

        specmap inspect type openapi.json Pet
    """
    api = _load(ctx, source)
    component = api.components.get(group, {}).get(name)
    if component is None:
        raise _fail(InvalidUsageError(f"Component not found: {group}/{name}"))

    required = set(component.required)
    rows = [
        [
            prop_name,
            _describe_property(prop),
            _text(prop.format),
            "yes" if prop.nullable else "no",
            "yes" if prop_name in required else "no",
            ", ".join(str(v) for v in prop.enum) or "-",
        ]
        for prop_name, prop in component.properties.items()
    ]
    if not rows:
        info(f"{name} declares no properties.")
        return
    print_table(
        ["Property", "Type", "Format", "Nullable", "Required", "Enum"],
        rows,
        title=f"{group}/{name} ({_text(component.type)})",
    )
