"""Built-in CLI sub-commands for specmap.

* :mod:`~specmap.commands.check` -- decode a spec and report success or
  the decode errors.
* :mod:`~specmap.commands.inspect` -- list servers, paths, operations and
  component types of a decoded spec.
* :mod:`~specmap.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``check``).
"""
