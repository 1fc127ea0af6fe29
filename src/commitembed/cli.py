"""CLI entry point: commit-embed command with edit, create, list and config subcommands."""

from __future__ import annotations

import logging
import sys
from functools import partial
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from commitembed import __version__
from commitembed.config import config_path, load_config, save_config, set_counter, set_target_folder
from commitembed.document import TextDocument
from commitembed.items import ItemKind, read_front_matter
from commitembed.logging_setup import log_file_for, setup_logging
from commitembed.synthesizer import NoteSynthesizer
from commitembed.vault import VaultStore

logger = logging.getLogger(__name__)

console = Console(highlight=False)

_SEVERITY_STYLES = {
    "error": "red",
    "warning": "yellow",
    "information": "green",
}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def console_notify(message: str, severity: str = "information", **_) -> None:
    """Print a notice the way the TUI would toast it."""
    style = _SEVERITY_STYLES.get(severity, "green")
    console.print(f"  [{style}]{escape(message)}[/{style}]")


def copy_to_clipboard(text: str) -> bool:
    """Copy text to system clipboard. Returns True on success."""
    try:
        import pyperclip
        pyperclip.copy(text)
        logger.info("Embed reference copied to clipboard.")
        return True
    except Exception as exc:
        logger.warning("Could not copy to clipboard: %s", exc)
        return False


def _parse_lines(raw: str) -> tuple[int, int]:
    """Parse ``4`` or ``3-5`` into an inclusive 1-based range."""
    first, sep, last = raw.partition("-")
    try:
        a = int(first)
        b = int(last) if sep else a
    except ValueError:
        raise click.BadParameter(f"expected N or A-B, got {raw!r}", param_hint="--lines")
    return a, b


def _resolve_vault(vault: str | None, document: Path) -> VaultStore:
    """Vault root: --vault, else the document's folder."""
    return VaultStore(Path(vault) if vault else document.resolve().parent)


def _settings(ctx: click.Context) -> tuple[dict, partial]:
    path = ctx.obj["config_path"]
    return load_config(path), partial(save_config, path=path)


# ---------------------------------------------------------------------------
# Main command group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--config", "config_file",
    type=click.Path(dir_okay=False),
    envvar="COMMIT_EMBED_CONFIG",
    help="Settings file to use instead of ~/.config/commit-embed/config.json.",
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(__version__, prog_name="commit-embed")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, debug: bool) -> None:
    """commit-embed: move a selection into a numbered theorem note and embed it back."""
    ctx.ensure_object(dict)
    cfg_path = Path(config_file).expanduser() if config_file else config_path()
    ctx.obj["config_path"] = cfg_path
    ctx.obj["debug"] = debug
    setup_logging(debug=debug, log_file=log_file_for(cfg_path))


# ---------------------------------------------------------------------------
# edit subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.option("--vault", type=click.Path(file_okay=False), help="Vault root. Defaults to the document's folder.")
@click.pass_context
def edit(ctx: click.Context, document: str, vault: str | None) -> None:
    """Open DOCUMENT in the editor. Select text and press ^t to commit it."""
    from commitembed.app import EditorApp

    doc_path = Path(document).expanduser()
    store = _resolve_vault(vault, doc_path)
    settings, save = _settings(ctx)
    setup_logging(debug=ctx.obj["debug"], log_file=log_file_for(ctx.obj["config_path"]), console=False)
    EditorApp(doc_path, store, settings, save_settings=save).run()


# ---------------------------------------------------------------------------
# create subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--lines", "line_range", help="Lines to commit, e.g. 4 or 3-5.")
@click.option("--match", "match_text", help="Commit the first occurrence of this text.")
@click.option(
    "-k", "--kind",
    type=click.Choice([k.value for k in ItemKind], case_sensitive=False),
    default=ItemKind.THEOREM.value,
    show_default=True,
    help="Kind of item to create.",
)
@click.option("-n", "--name", default="", help="Item name. Empty becomes 'Untitled'.")
@click.option("--vault", type=click.Path(file_okay=False), help="Vault root. Defaults to the document's folder.")
@click.option("--copy", "copy_embed", is_flag=True, default=False, help="Copy the embed reference to the clipboard.")
@click.pass_context
def create(
    ctx: click.Context,
    document: str,
    line_range: str | None,
    match_text: str | None,
    kind: str,
    name: str,
    vault: str | None,
    copy_embed: bool,
) -> None:
    """Commit part of DOCUMENT as a new note and embed it in place."""
    if (line_range is None) == (match_text is None):
        raise click.UsageError("Give exactly one of --lines or --match.")

    doc_path = Path(document)
    doc = TextDocument.open(doc_path)
    try:
        if line_range is not None:
            doc.select_lines(*_parse_lines(line_range))
        else:
            doc.select_match(match_text)
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    if not doc.get_selection():
        console_notify("Error: No text selected.")
        sys.exit(1)

    store = _resolve_vault(vault, doc_path)
    settings, save = _settings(ctx)
    synthesizer = NoteSynthesizer(store, settings, save_settings=save, notify=console_notify)
    result = synthesizer.commit(doc, name.strip(), ItemKind.parse(kind))
    if result is None:
        sys.exit(1)

    console.print(f"  [dim]Note: {escape(str(store.resolve(result.file_path)))}[/dim]")
    console.print(f"  [dim]Embed: {escape(result.embed_reference)}[/dim]")
    if copy_embed and copy_to_clipboard(result.embed_reference):
        console.print("  [green]Clipboard[/green]     copied")


# ---------------------------------------------------------------------------
# list subcommand
# ---------------------------------------------------------------------------

@main.command(name="list")
@click.option("--vault", type=click.Path(exists=True, file_okay=False), default=".", show_default=True)
@click.pass_context
def list_items(ctx: click.Context, vault: str) -> None:
    """List notes in the target folder with their tags."""
    store = VaultStore(vault)
    settings, _ = _settings(ctx)
    folder = settings["target_folder"]
    try:
        paths = list(store.list_markdown(folder))
    except ValueError as exc:
        logger.warning("Cannot list %s: %s", folder, exc)
        console.print(f"  [dim]Target folder {escape(folder)} is outside the vault.[/dim]")
        return
    if not paths:
        console.print(f"  [dim]No items in {escape(folder)}/ yet.[/dim]")
        return
    for path in paths:
        try:
            content = store.read(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            console.print(f"  [bold]{escape(Path(path).stem)}[/bold]  [dim](unreadable)[/dim]")
            continue
        meta = read_front_matter(content)
        tags = meta.get("tags") or []
        tag_text = ", ".join(str(t) for t in tags) if isinstance(tags, list) else str(tags)
        console.print(f"  [bold]{escape(Path(path).stem)}[/bold]  [dim]{escape(tag_text)}[/dim]")


# ---------------------------------------------------------------------------
# config subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.option("--show", is_flag=True, help="Show current config values.")
@click.option("--counter", help="Set the item counter (non-numeric input is ignored).")
@click.option("--folder", help="Set the target folder (blank resets to the default).")
@click.pass_context
def config(ctx: click.Context, show: bool, counter: str | None, folder: str | None) -> None:
    """Show or edit configuration."""
    settings, save = _settings(ctx)
    changed = False
    if counter is not None:
        if set_counter(settings, counter):
            changed = True
        else:
            console.print(f"  [yellow]Ignored counter value {counter!r}; keeping {settings['counter']}.[/yellow]")
    if folder is not None:
        set_target_folder(settings, folder)
        changed = True
    if changed:
        save(settings)
        console.print(f"  Config saved to [dim]{ctx.obj['config_path']}[/dim]")

    if show or not changed:
        console.print(f"  Config file: [dim]{ctx.obj['config_path']}[/dim]")
        for key, val in settings.items():
            console.print(f"  [bold]{key}:[/bold] {val}")
