"""Renderer for CLI output.

Renders one inference result as a rich table of the variant, the attributes
that were found and the resolved tags, followed by the composed name.
"""

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from relnamer.models.taxonomy import Taxonomy

if TYPE_CHECKING:
    from relnamer.cli.commands import ReleaseInfo

# Attribute rows shown in the table, in display order.
ATTRIBUTE_ROWS = (
    "title",
    "year",
    "season",
    "episode",
    "resolution",
    "video_codec",
    "hdr",
    "source",
    "audio_codecs",
    "audio_channels",
    "audio_languages",
    "subtitle_languages",
    "language",
    "release_group",
)


def _display(value: object) -> str:
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value))
    return "" if value is None else escape(str(value))


def render_release(
    info: "ReleaseInfo",
    taxonomy: Optional[Taxonomy] = None,
    console: Console | None = None,
) -> None:
    """Print *info* as a table followed by the composed name.

    Args:
        info: Result of one inference pass.
        taxonomy: Used to show tag names next to their ids.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title=f"Release: {escape(info.path.name)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("type", info.variant.kind, style="bold")
    for attribute in ATTRIBUTE_ROWS:
        value = _display(getattr(info.bag, attribute))
        if value:
            table.add_row(attribute, value)

    for tag_id in sorted(info.tags, key=str):
        label = taxonomy.tag_name(tag_id) if taxonomy else None
        text = f"{label} ({tag_id})" if label else tag_id
        table.add_row("tag", escape(text), style="yellow")

    for missing in info.missing:
        table.add_row("missing", missing, style="red bold")

    console.print(table)
    # Reason: soft_wrap keeps the name on one line whatever the terminal width.
    console.print(info.name, style="bold", soft_wrap=True, markup=False)
