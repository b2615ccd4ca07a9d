"""Click-based CLI host for confighelper."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console as RichConsole
from rich.markup import escape

from confighelper import __version__
from confighelper.config import (
    ensure_config_exists,
    get_config_path,
    load_or_default_config,
    validate_config_file,
)
from confighelper.document.accessor import DocumentError
from confighelper.document.models import DirectoryEntry, DriveMapping
from confighelper.helper import ConfigHelper
from confighelper.logger import ConsoleLogger
from confighelper.output import Console, create_console
from confighelper.settings.store import XmlSettingsStore
from confighelper.settings.values import CONVERSION_ERRORS, ValueKind, parse_value

# Enum values need a Python enum class, which the command line cannot name
KIND_CHOICES = [kind.value for kind in ValueKind if kind is not ValueKind.ENUM]


class CliState:
    """Per-invocation options shared by all commands."""

    def __init__(self, document: Optional[Path], lenient: bool, verbose: bool):
        self.document = document
        self.lenient = lenient
        self.verbose = verbose
        self._helper: Optional[ConfigHelper] = None
        self._console: Optional[Console] = None

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = create_console(verbose=self.verbose)
        return self._console

    @property
    def helper(self) -> ConfigHelper:
        if self._helper is None:
            try:
                options = load_or_default_config()
            except (ValueError, yaml.YAMLError) as e:
                self.console.print_error(f"Invalid options file {get_config_path()}: {e}")
                sys.exit(1)

            self._console = create_console(
                verbose=self.verbose or options.output.verbose,
                colored=options.output.colored,
            )
            logger = ConsoleLogger(
                RichConsole(stderr=True, no_color=not options.output.colored),
                verbose=self.verbose or options.output.verbose,
            )
            if self.document is not None:
                options = options.model_copy(update={"document": str(self.document.expanduser())})
            if self.lenient:
                options = options.model_copy(update={"strict": False})
            self._helper = ConfigHelper.from_config(options, logger=logger)
        return self._helper


pass_state = click.make_pass_decorator(CliState)


@click.group()
@click.version_option(version=__version__, prog_name="confighelper")
@click.option(
    "--document",
    "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="XML configuration document (overrides the options file)",
)
@click.option("--lenient", is_flag=True, help="Skip drive letter and UNC path format checks")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def cli(ctx: click.Context, document: Optional[Path], lenient: bool, verbose: bool) -> None:
    """confighelper - typed settings, directories and drive mappings in an XML config file.

    \b
    Sections managed:
      appSettings    flat key/value settings
      directories    paths with exclusion lists
      driveMappings  drive letter -> UNC path
    """
    ctx.obj = CliState(document, lenient, verbose)


@cli.command()
@pass_state
def init(state: CliState) -> None:
    """Add any missing section declarations and sections."""
    helper = state.helper
    changed = helper.ensure_sections_exist()

    if not helper.validator.validated:
        state.console.print_error(f"Could not validate {helper.path}")
        sys.exit(1)

    if changed:
        state.console.print_success(f"Added required sections to {helper.path}")
    else:
        state.console.print_info(f"{helper.path} already has the required sections")


@cli.command("get")
@click.argument("key")
@click.option("--kind", "-k", type=click.Choice(KIND_CHOICES), default="text", show_default=True)
@pass_state
def get_value(state: CliState, key: str, kind: str) -> None:
    """Print the value of KEY converted to the given kind."""
    value = state.helper.get_value(key, None, kind=ValueKind(kind))

    if value is None:
        state.console.print_warning(f"Key not found or not convertible: {key}")
        sys.exit(1)

    if isinstance(value, list):
        for item in value:
            click.echo(item)
    else:
        click.echo(value)


@cli.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--kind", "-k", type=click.Choice(KIND_CHOICES), default="text", show_default=True)
@pass_state
def set_value(state: CliState, key: str, value: str, kind: str) -> None:
    """Store VALUE under KEY, checking it converts to the given kind."""
    value_kind = ValueKind(kind)
    try:
        parsed = parse_value(value, value_kind)
    except CONVERSION_ERRORS as e:
        state.console.print_error(f"'{value}' is not a valid {kind}: {e}")
        sys.exit(1)

    if not state.helper.set_value(key, parsed, kind=value_kind):
        state.console.print_error(f"Failed to set {key}")
        sys.exit(1)

    state.console.print_success(f"Set {key}")


@cli.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "yaml"]),
    default="table",
    show_default=True,
)
@pass_state
def show(state: CliState, output_format: str) -> None:
    """Show settings, directories and drive mappings."""
    helper = state.helper
    helper.ensure_sections_exist()

    settings: dict[str, str] = {}
    if isinstance(helper.store, XmlSettingsStore):
        try:
            settings = helper.store.as_dict()
        except DocumentError as e:
            state.console.print_error(e.message)
            sys.exit(1)

    directories = helper.get_directories()
    mappings = helper.get_drive_mappings()

    if output_format == "yaml":
        data = {
            "document": str(helper.path),
            "settings": settings,
            "directories": [entry.model_dump() for entry in directories],
            "drive_mappings": [mapping.model_dump() for mapping in mappings],
        }
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True), nl=False)
        return

    state.console.print(f"[dim]Document: {escape(str(helper.path))}[/dim]")
    state.console.print_settings(settings)
    state.console.print_directories(directories)
    state.console.print_drive_mappings(mappings)


# ============================================================================
# Directories
# ============================================================================


@cli.group()
def dirs() -> None:
    """Manage directory entries."""
    pass


@dirs.command("list")
@pass_state
def dirs_list(state: CliState) -> None:
    """List directory entries."""
    directories = state.helper.get_directories()
    state.console.print_directories(directories)


@dirs.command("add")
@click.argument("path")
@click.option("--exclude", "-x", "exclusions", multiple=True, help="Relative sub-path to skip (repeatable)")
@pass_state
def dirs_add(state: CliState, path: str, exclusions: tuple[str, ...]) -> None:
    """Add PATH, or replace its exclusions if it already exists."""
    if not state.helper.add_directory(DirectoryEntry(path=path, exclusions=list(exclusions))):
        state.console.print_error(f"Failed to add directory {path}")
        sys.exit(1)
    state.console.print_success(f"Saved directory {path}")


@dirs.command("remove")
@click.argument("path")
@pass_state
def dirs_remove(state: CliState, path: str) -> None:
    """Remove the directory entry for PATH."""
    if not state.helper.remove_directory(path):
        state.console.print_error(f"Directory not removed: {path}")
        sys.exit(1)
    state.console.print_success(f"Removed directory {path}")


# ============================================================================
# Drive mappings
# ============================================================================


@cli.group()
def drives() -> None:
    """Manage drive letter to UNC path mappings."""
    pass


@drives.command("list")
@pass_state
def drives_list(state: CliState) -> None:
    """List drive mappings."""
    mappings = state.helper.get_drive_mappings()
    state.console.print_drive_mappings(mappings)


@drives.command("get")
@click.argument("letter")
@pass_state
def drives_get(state: CliState, letter: str) -> None:
    """Print the UNC path mapped to LETTER."""
    mapping = state.helper.get_drive_mapping(letter)
    if mapping is None:
        state.console.print_warning(f"No mapping for drive {letter}")
        sys.exit(1)
    click.echo(mapping.unc_path)


@drives.command("add")
@click.argument("letter")
@click.argument("unc_path")
@pass_state
def drives_add(state: CliState, letter: str, unc_path: str) -> None:
    """Map LETTER to UNC_PATH, updating an existing mapping for the same letter."""
    if not state.helper.add_drive_mapping(DriveMapping(drive_letter=letter, unc_path=unc_path)):
        state.console.print_error(f"Failed to map drive {letter}")
        sys.exit(1)
    state.console.print_success(f"Mapped drive {letter}")


@drives.command("remove")
@click.argument("letter")
@pass_state
def drives_remove(state: CliState, letter: str) -> None:
    """Remove the mapping for LETTER (v, V, v: and V: are equivalent)."""
    if not state.helper.remove_drive_mapping(letter):
        state.console.print_error(f"Drive mapping not removed: {letter}")
        sys.exit(1)
    state.console.print_success(f"Removed drive mapping {letter}")


# ============================================================================
# Host options
# ============================================================================


@cli.group()
def options() -> None:
    """Manage the host options file (~/.config/confighelper/config.yaml)."""
    pass


@options.command("init")
@pass_state
def options_init(state: CliState) -> None:
    """Create the options file with defaults if it does not exist."""
    path, created = ensure_config_exists()
    if created:
        state.console.print_success(f"Created options file: {path}")
    else:
        state.console.print_info(f"Options file already exists: {path}")


@options.command("show")
@pass_state
def options_show(state: CliState) -> None:
    """Show the effective host options."""
    try:
        config = load_or_default_config()
    except (ValueError, yaml.YAMLError) as e:
        state.console.print_error(f"Invalid options file {get_config_path()}: {e}")
        sys.exit(1)

    state.console.print(f"[dim]Options file: {escape(str(get_config_path()))}[/dim]")
    click.echo(yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False), nl=False)


@options.command("check")
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_state
def options_check(state: CliState, file: Optional[Path]) -> None:
    """Validate an options file (defaults to the active one)."""
    is_valid, errors = validate_config_file(file)
    if is_valid:
        state.console.print_success("Options file is valid")
        return

    for error in errors:
        state.console.print_error(error)
    sys.exit(1)


if __name__ == "__main__":
    cli()
