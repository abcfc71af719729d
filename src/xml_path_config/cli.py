"""CLI adapter for ``xml_path_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the flattened view of an XML configuration on the command line so
operators can see which paths a document produces and what a typed getter would
return for them, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_dump` – prints every ``[path] = value`` entry.
* :func:`cli_get` – typed lookup of one path, scalar or comma-separated vector.
* :func:`cli_children` – lists element paths below a path.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It only talks to
:class:`xml_path_config.core.XmlConfig` and turns its silent failure modes (the
parse error flag, missing paths) into non-zero exit codes.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import XmlConfig
from .domain.conversion import convert, format_value, split_fields
from .domain.errors import ConversionError

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

TYPE_CHOICES: Final[dict[str, type]] = {"str": str, "int": int, "float": float, "bool": bool}
_DISTRIBUTION: Final[str] = "xml_path_config"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Flattened, typed access to XML configuration files",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="xml_path_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo("xml_path_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


_source_argument = click.argument("source")
_string_option = click.option(
    "--string/--file",
    "as_string",
    default=False,
    help="Treat SOURCE as the XML document itself instead of a filename",
)


@cli.command("dump", context_settings=CLICK_CONTEXT_SETTINGS)
@_source_argument
@_string_option
def cli_dump(source: str, as_string: bool) -> None:
    """Print every flattened entry of SOURCE as ``[path] = value``."""

    config = _load(source, as_string)
    click.echo(config.dump(), nl=False)


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@_source_argument
@click.argument("path")
@_string_option
@click.option(
    "--type",
    "type_name",
    type=click.Choice(sorted(TYPE_CHOICES), case_sensitive=False),
    default="str",
    show_default=True,
    help="Type the stored text is converted to",
)
@click.option("--default", "default", default=None, help="Value printed when PATH does not exist")
@click.option("--vector/--scalar", default=False, help="Read PATH as a comma-separated list (printed as JSON)")
def cli_get(
    source: str,
    path: str,
    as_string: bool,
    type_name: str,
    default: Optional[str],
    vector: bool,
) -> None:
    """Print the value stored at PATH in SOURCE, converted to ``--type``.

    Without ``--default`` a missing PATH is an error; a given default is
    converted to ``--type`` like stored text would be, and split on commas
    first when ``--vector`` is set.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> doc = '<config><A n="4"/></config>'
    >>> CliRunner().invoke(cli, ["get", doc, "A:n", "--string", "--type", "int"]).output
    '4\\n'
    """

    config = _load(source, as_string)
    kind = TYPE_CHOICES[type_name.lower()]
    if not config.exists(path) and default is None:
        raise click.ClickException(f"Path not found: {path}")
    try:
        if vector:
            if config.exists(path):
                values = config.get_vector(path, [], kind)
            else:
                values = [convert(field, kind) for field in split_fields(default)]
            click.echo(json.dumps(list(values)))
        elif not config.exists(path):
            click.echo(format_value(convert(default, kind)))
        else:
            click.echo(format_value(config.get(path, None, kind)))
    except ConversionError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("children", context_settings=CLICK_CONTEXT_SETTINGS)
@_source_argument
@click.argument("path", default="")
@_string_option
@click.option("--direct/--prefix", default=False, help="Only list elements exactly one level below PATH")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as a JSON array")
def cli_children(source: str, path: str, as_string: bool, direct: bool, as_json: bool) -> None:
    """List the element paths below PATH in SOURCE, one per line."""

    config = _load(source, as_string)
    children = config.children_of(path, direct=direct)
    if as_json:
        click.echo(json.dumps(children, indent=2))
        return
    for child in children:
        click.echo(child)


def _load(source: str, as_string: bool) -> XmlConfig:
    """Load *source* and fail the command when the document did not parse."""

    config = XmlConfig(source, as_string=as_string)
    if config.error_parsing:
        raise click.ClickException(f"Failed to load configuration: {config.last_error}")
    return config


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
