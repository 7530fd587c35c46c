"""CLI commands for relnamer.

This module implements the user-facing commands: name, presentation, config
and version.
- Uses Typer for declarative CLI structure and option parsing.
- Results are rendered through a ConsoleManager so ``--no-rich`` applies;
  errors go to the shared console.

Design:
- Annotated aliases define arguments/options once for reuse across commands.
- ReleaseInfo groups everything one inference pass produces, so the table
  renderer and the JSON output read the same object.
- Exit codes are an Enum; INCOMPLETE still prints the best-effort name.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, List, Optional, Set

import typer
from pydantic import ValidationError
from rich.markup import escape

from relnamer.cli import app, console
from relnamer.cli.console import ConsoleManager
from relnamer.cli.renderer import render_release
from relnamer.core import (
    UnsupportedMediaError,
    classify_variant,
    compose_name,
    normalize_technical_report,
    parse_name,
    resolve_tags,
)
from relnamer.core.presentation import render_presentation
from relnamer.core.scanner import analyze_directory
from relnamer.core.validation import missing_fields
from relnamer.models.core import AttributeBag, DirectoryAnalysis, merge_attributes
from relnamer.models.report import TechnicalReport
from relnamer.models.taxonomy import Taxonomy
from relnamer.models.variant import Episode, Movie, SeasonPack, VariantKind
from relnamer.rules.base import load_policy
from relnamer.utils.config import set_setting
from relnamer.utils.debug import debug, setup_logger
from relnamer.utils.json import dumps


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    INCOMPLETE = 2


RELEASE_PATH = Annotated[
    Path,
    typer.Argument(
        help="Release file or directory. The path does not have to exist; "
        "a bare release name is parsed as-is.",
    ),
]

MEDIAINFO = Annotated[
    Optional[Path],
    typer.Option(
        "--mediainfo",
        "-m",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON report produced by `mediainfo --Output=JSON`.",
    ),
]

TAXONOMY = Annotated[
    Optional[Path],
    typer.Option(
        "--taxonomy",
        "-x",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON snapshot of the tracker's tag taxonomy.",
    ),
]

FORCED_TYPE = Annotated[
    Optional[VariantKind],
    typer.Option(
        "--type",
        "-t",
        case_sensitive=False,
        help="Force the release type instead of inferring it.",
    ),
]

GROUP = Annotated[
    Optional[str],
    typer.Option(
        "--group",
        "-g",
        help="Release group to use instead of the one found in the name.",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output the result as JSON.",
    ),
]


@dataclass
class ReleaseInfo:
    """Everything one inference pass produced for a path."""

    path: Path
    bag: AttributeBag
    variant: Movie | SeasonPack | Episode
    name: str = ""
    tags: Set[str] = field(default_factory=set)
    missing: List[str] = field(default_factory=list)
    directory: Optional[DirectoryAnalysis] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "variant": self.variant.model_dump(),
            "attributes": self.bag.model_dump(),
            "tags": self.tags,
            "missing": self.missing,
        }


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(ExitCode.ERROR)


def _load_report(path: Optional[Path]) -> Optional[TechnicalReport]:
    if path is None:
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return TechnicalReport.from_mediainfo(json.load(f))
    except (OSError, json.JSONDecodeError) as e:
        raise _fail(f"Could not read technical report {path}: {e}") from e


def _load_taxonomy(path: Optional[Path]) -> Optional[Taxonomy]:
    if path is None:
        return None
    try:
        return Taxonomy.from_file(path)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise _fail(f"Could not load taxonomy {path}: {e}") from e


def _tag_source(path: Path, directory: Optional[DirectoryAnalysis]) -> Path:
    # Directories carry no extension; the first video file stands in.
    if directory and directory.is_directory and directory.video_files:
        return path / directory.video_files[0]
    return path


def infer_release(
    path: Path,
    *,
    report: Optional[TechnicalReport] = None,
    taxonomy: Optional[Taxonomy] = None,
    forced: Optional[VariantKind] = None,
    group: Optional[str] = None,
) -> ReleaseInfo:
    """Run the whole inference pass for *path*.

    Raises:
        UnsupportedMediaError: If the item is an ebook or a game.
    """
    bag = parse_name(str(path))
    if report is not None:
        bag = merge_attributes(bag, normalize_technical_report(report))
    if group:
        bag = bag.model_copy(update={"release_group": group})

    directory = analyze_directory(path) if path.is_dir() else None
    if directory and directory.episode_count and not bag.episode_count:
        bag = bag.model_copy(update={"episode_count": directory.episode_count})

    variant = classify_variant(path, bag, directory_analysis=directory, forced=forced)
    info = ReleaseInfo(path=path, bag=bag, variant=variant, directory=directory)
    info.name = compose_name(variant, bag, load_policy())
    info.tags = resolve_tags(variant, bag, taxonomy, path=_tag_source(path, directory))
    info.missing = missing_fields(variant, bag)
    debug("Inferred %s for %s (%s)", info.name, path, info.variant.kind)
    return info


def _total_size(path: Path) -> int:
    if path.is_file():
        return path.stat().st_size
    if path.is_dir():
        return sum(p.stat().st_size for p in path.rglob("*") if p.is_file())
    return 0


@app.command()
def name(
    path: RELEASE_PATH,
    mediainfo: MEDIAINFO = None,
    taxonomy: TAXONOMY = None,
    forced_type: FORCED_TYPE = None,
    group: GROUP = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Infer the canonical release name and tracker tags for PATH."""
    report = _load_report(mediainfo)
    tax = _load_taxonomy(taxonomy)
    try:
        info = infer_release(
            path, report=report, taxonomy=tax, forced=forced_type, group=group
        )
    except UnsupportedMediaError as e:
        raise _fail(str(e)) from e

    if json_output:
        typer.echo(dumps(info.to_dict()))
    else:
        with ConsoleManager() as out:
            render_release(info, taxonomy=tax, console=out)

    if info.missing:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] missing required field(s): "
            f"{', '.join(info.missing)}"
        )
        raise typer.Exit(ExitCode.INCOMPLETE)


@app.command()
def presentation(
    path: RELEASE_PATH,
    mediainfo: MEDIAINFO = None,
    forced_type: FORCED_TYPE = None,
) -> None:
    """Print the BBCode upload description for PATH."""
    report = _load_report(mediainfo)
    try:
        info = infer_release(path, report=report, forced=forced_type)
    except UnsupportedMediaError as e:
        raise _fail(str(e)) from e
    typer.echo(render_presentation(info.variant, info.bag, total_size=_total_size(path)))


@app.command()
def config(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. naming.default_group")],
    value: Annotated[str, typer.Argument(help="Value to store")],
) -> None:
    """Persist a setting in config.toml."""
    try:
        set_setting(key, value)
    except OSError as e:
        raise _fail(f"Could not write config: {e}") from e
    console.print(f"Set [bold]{escape(key)}[/bold] = {escape(value)}")


@app.command()
def version() -> None:
    """Show the version of relnamer."""
    from relnamer.__about__ import __version__

    console.print(f"relnamer version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    # Module loggers share the relnamer handler; RELNAMER_DEBUG=1 turns on traces.
    setup_logger()
    app()
