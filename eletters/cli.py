"""CLI entry point for eletters."""

from __future__ import annotations

import asyncio
import json
import mimetypes
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from eletters.client import RemoteDraftClient
from eletters.config import ElettersConfig, load_config
from eletters.config.loader import DEFAULT_CONFIG_TEMPLATE
from eletters.document import Letter, LetterValidationError, parse_letter, validate_structure
from eletters.drafter import DraftSession, summarize
from eletters.importer import ImportService, draft_name_for
from eletters.layout import LAYOUT_MODES, transform
from eletters.llm import create_llm_provider
from eletters.log import setup_logging
from eletters.preview import ScreenPreview, describe_letter
from eletters.storage import (
    DraftNotFoundError,
    EletterStatus,
    JsonDraftStore,
    aggregate_metrics,
    draft_kind,
    draft_metrics,
)
from eletters.translation import (
    LANGUAGE_LABELS,
    TRANSLATION_MODES,
    TranslationError,
    check_language,
    translate_letter_with_engine,
)

app = typer.Typer(
    name="eletters",
    help="Draft, lay out and import interactive letters.",
)

config_app = typer.Typer(help="Manage eletters configuration.")
app.add_typer(config_app, name="config")

drafts_app = typer.Typer(help="Manage stored drafts.")
app.add_typer(drafts_app, name="drafts")

templates_app = typer.Typer(help="Browse templates and start drafts from them.")
app.add_typer(templates_app, name="templates")

# Global state
_config: ElettersConfig | None = None


def _get_config() -> ElettersConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to eletters.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    setup_logging(_config.log_level, _config.log_format)


def _check_layout(mode: str) -> None:
    if mode not in LAYOUT_MODES:
        raise ValueError(f"Unknown layout mode '{mode}'. Use one of: {', '.join(LAYOUT_MODES)}")


def _read_letter(path: str) -> Letter:
    """Load a letter JSON file. Raises ValueError with a readable message."""
    file = Path(path)
    if not file.is_file():
        raise ValueError(f"File not found: {path}")
    try:
        raw = json.loads(file.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return parse_letter(raw)


def _emit_letter(letter: Letter, output: str | None) -> None:
    text = json.dumps(letter.to_json(), indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n")
        rprint(f"[green]Written to[/green] {output}")
    else:
        rprint(Syntax(text, "json"))


def _store() -> JsonDraftStore:
    return JsonDraftStore(_get_config().storage.path)


# ---------------------------------------------------------------------------
# Drafting and layout
# ---------------------------------------------------------------------------


@app.command()
def draft(
    prompt: str = typer.Argument(..., help="What the letter should be, or how to change it"),
    current: Annotated[
        str | None, typer.Option("--current", help="Existing draft JSON to edit")
    ] = None,
    layout: Annotated[str, typer.Option("--layout", "-l", help="single or per-question")] = "single",
    offline: Annotated[
        bool, typer.Option("--offline", help="Skip the draft service, use local logic only")
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write draft JSON to file")
    ] = None,
) -> None:
    """Draft a letter from a prompt (or edit an existing one)."""
    cfg = _get_config()
    try:
        _check_layout(layout)
        existing = _read_letter(current) if current else None
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    client = None
    if cfg.remote.enabled and not offline:
        client = RemoteDraftClient(cfg.remote.base_url, timeout=cfg.remote.timeout)
    session = DraftSession(client, layout_mode=layout)
    session.draft = existing

    reply = asyncio.run(session.submit(prompt))
    if reply is None:
        rprint("[yellow]Nothing to draft: the prompt is empty.[/yellow]")
        raise typer.Exit(1)
    if session.last_error:
        rprint(f"[red]Error:[/red] {session.last_error}")
        raise typer.Exit(1)

    rprint(Panel(reply, title="Assistant", border_style="blue"))
    letter = session.apply()
    if letter is not None:
        _emit_letter(letter, output)


@app.command()
def layout(
    file: str = typer.Argument(..., help="Letter JSON file"),
    mode: Annotated[str, typer.Option("--mode", "-m", help="single or per-question")] = "single",
    questions_only: Annotated[
        bool, typer.Option("--questions-only", help="Keep only question elements when splitting")
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write result JSON to file")
    ] = None,
) -> None:
    """Reflow a letter into one screen or one question per screen."""
    try:
        _check_layout(mode)
        letter = _read_letter(file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _emit_letter(transform(letter, mode, questions_only=questions_only), output)


@app.command("summarize")
def summarize_cmd(
    file: str = typer.Argument(..., help="Letter JSON file"),
    source: Annotated[
        str, typer.Option("--source", help="remote-primary, remote-secondary or heuristic")
    ] = "heuristic",
) -> None:
    """Print the one-line summary of a letter."""
    try:
        letter = _read_letter(file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(summarize(letter, source))


@app.command()
def translate(
    file: str = typer.Argument(..., help="Letter JSON file"),
    lang: Annotated[str, typer.Option("--lang", "-l", help="Target language code")] = "de",
    engine: Annotated[str, typer.Option("--engine", "-e", help="auto, demo or llm")] = "demo",
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write result JSON to file")
    ] = None,
) -> None:
    """Translate a letter's texts into another language."""
    cfg = _get_config()
    try:
        check_language(lang)
        if engine not in TRANSLATION_MODES:
            raise ValueError(f"Unknown engine '{engine}'. Use one of: {', '.join(TRANSLATION_MODES)}")
        letter = _read_letter(file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    provider = None
    if engine != "demo" and cfg.llm.primary is not None:
        try:
            provider = create_llm_provider(cfg.llm.primary)
        except ValueError as e:
            if engine == "llm":
                rprint(f"[red]Error:[/red] {e}")
                raise typer.Exit(1)
            rprint(f"[yellow]{e}; using the demo dictionary.[/yellow]")

    try:
        result = asyncio.run(translate_letter_with_engine(letter, lang, engine, provider))
    except TranslationError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(f"Translated to {LANGUAGE_LABELS[lang]} [dim](engine: {result.engine})[/dim]")
    _emit_letter(result.letter, output)


def _screen_tree(tree: Tree, screen: ScreenPreview) -> None:
    node = tree.add(
        f"[bold]Screen {screen.order}[/bold] [dim]({screen.mode.value}, {screen.justify})[/dim]"
    )
    for block in screen.blocks:
        label = f"[cyan]{block.kind}[/cyan] {block.label}"
        if block.placeholder:
            label += " [dim](placeholder)[/dim]"
        child = node.add(label)
        if block.glyphs:
            child.add(" ".join(block.glyphs))
        if block.min_label or block.max_label:
            child.add(f"[dim]{block.min_label or ''} … {block.max_label or ''}[/dim]")
        marker = "☐" if block.multi else "○"
        for option in block.options:
            child.add(f"{marker} {option}" if block.kind == "choice" else option)


@app.command()
def show(file: str = typer.Argument(..., help="Letter JSON file")) -> None:
    """Render a text preview of a letter."""
    try:
        letter = _read_letter(file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    tree = Tree(f"[bold]{letter.title}[/bold] [dim]({letter.id})[/dim]")
    for screen in describe_letter(letter):
        _screen_tree(tree, screen)
    rprint(tree)


@app.command()
def validate(
    file: str = typer.Argument(..., help="Letter JSON file"),
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table or json")
    ] = "table",
) -> None:
    """Check a letter's structure (ordering, ids, parent links)."""
    try:
        letter = _read_letter(file)
    except LetterValidationError as e:
        rprint(f"[red]FAIL[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    result = validate_structure(letter)
    if format == "json":
        rprint(json.dumps(result.model_dump(), indent=2))
    else:
        status = "[green]PASS[/green]" if result.valid else "[red]FAIL[/red]"
        table = Table(title=f"Validation: {file}")
        table.add_column("Status", justify="center")
        table.add_column("Screens", justify="right")
        table.add_column("Errors", justify="right", style="red")
        table.add_column("Warnings", justify="right", style="yellow")
        table.add_row(status, str(len(letter.screens)), str(len(result.errors)), str(len(result.warnings)))
        rprint(table)
        for err in result.errors:
            rprint(f"  [red]error:[/red] {err}")
        for warn in result.warnings:
            rprint(f"  [yellow]warn:[/yellow] {warn}")

    if not result.valid:
        raise typer.Exit(1)


@app.command("import")
def import_file(
    file: str = typer.Argument(..., help="Questionnaire file (PDF, DOCX, DOC, PNG, JPG, TXT, MD, HTML)"),
    save: Annotated[
        bool, typer.Option("--save/--no-save", help="Store the result as a new draft")
    ] = True,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write draft JSON to file")
    ] = None,
) -> None:
    """Import a questionnaire document as a draft letter."""
    cfg = _get_config()
    path = Path(file)
    if not path.is_file():
        rprint(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    service = ImportService(cfg.importer)
    mime_type, _ = mimetypes.guess_type(path.name)
    result = service.import_bytes(path.name, mime_type, path.read_bytes())
    if result.error:
        rprint(f"[red]Error:[/red] {result.error}")
        raise typer.Exit(1)

    for note in result.notes:
        rprint(f"[dim]-[/dim] {note}")
    if result.warning:
        rprint(f"[yellow]{result.warning}[/yellow]")
    if not result.draft_json:
        return

    letter = parse_letter(result.draft_json)
    if save:
        stored = _store().create_draft(name=draft_name_for(path.name), letter=letter)
        rprint(f"[green]Saved draft[/green] {stored.id} ({stored.name})")
    if output or not save:
        _emit_letter(letter, output)


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port")] = None,
) -> None:
    """Run the drafting and import HTTP service."""
    import uvicorn

    from eletters.server import create_app

    cfg = _get_config()
    uvicorn.run(
        create_app(cfg),
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        log_level=cfg.log_level if cfg.log_level != "warn" else "warning",
    )


# ---------------------------------------------------------------------------
# Drafts and templates
# ---------------------------------------------------------------------------


@drafts_app.command("list")
def drafts_list() -> None:
    """List stored drafts with delivery metrics."""
    drafts = _store().list_drafts()
    if not drafts:
        rprint("[yellow]No drafts yet.[/yellow]")
        return

    table = Table(title=f"Drafts ({len(drafts)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Updated")
    table.add_column("Sent", justify="right")
    table.add_column("Open %", justify="right")
    table.add_column("Done %", justify="right")
    for d in drafts:
        m = draft_metrics(d)
        table.add_row(
            d.id,
            d.name,
            draft_kind(d),
            d.status.value,
            d.updated_at.strftime("%Y-%m-%d %H:%M"),
            str(m.sent),
            str(m.open_rate),
            str(m.completion_rate),
        )
    rprint(table)

    total = aggregate_metrics(drafts)
    rprint(
        f"[dim]Total sent:[/dim] {total.sent}  [dim]open:[/dim] {total.open_rate}%  "
        f"[dim]start:[/dim] {total.start_rate}%  [dim]completion:[/dim] {total.completion_rate}%"
    )


@drafts_app.command("create")
def drafts_create(
    name: Annotated[str | None, typer.Option("--name", "-n", help="Draft name")] = None,
    file: Annotated[
        str | None, typer.Option("--from", help="Letter JSON file to store")
    ] = None,
) -> None:
    """Create a draft (blank unless --from is given)."""
    try:
        letter = _read_letter(file) if file else None
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    created = _store().create_draft(name=name, letter=letter)
    rprint(f"[green]Created[/green] {created.id} ({created.name})")


@drafts_app.command("rename")
def drafts_rename(
    draft_id: str = typer.Argument(..., help="Draft ID"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a draft and its letter title."""
    try:
        renamed = _store().rename_draft(draft_id, name)
    except DraftNotFoundError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Renamed[/green] {renamed.id} to {renamed.name}")


@drafts_app.command("copy")
def drafts_copy(draft_id: str = typer.Argument(..., help="Draft ID")) -> None:
    """Duplicate a draft with fresh ids."""
    try:
        copied = _store().copy_draft(draft_id)
    except DraftNotFoundError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Copied[/green] {draft_id} to {copied.id} ({copied.name})")


@drafts_app.command("delete")
def drafts_delete(draft_id: str = typer.Argument(..., help="Draft ID")) -> None:
    """Delete a draft."""
    try:
        _store().delete_draft(draft_id)
    except DraftNotFoundError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Deleted[/green] {draft_id}")


@drafts_app.command("publish")
def drafts_publish(
    draft_id: str = typer.Argument(..., help="Draft ID"),
    running: Annotated[
        bool, typer.Option("--running", help="Mark as running instead of sent")
    ] = False,
) -> None:
    """Mark a draft as sent (or running)."""
    status = EletterStatus.running if running else EletterStatus.sent
    try:
        published = _store().publish_draft(draft_id, status)
    except (DraftNotFoundError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Published[/green] {published.id} ({published.status.value})")


@drafts_app.command("export")
def drafts_export(
    draft_id: str = typer.Argument(..., help="Draft ID"),
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write letter JSON to file")
    ] = None,
) -> None:
    """Print or write a stored draft's letter JSON."""
    try:
        stored = _store().get_draft(draft_id)
    except DraftNotFoundError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _emit_letter(stored.letter, output)


@templates_app.command("list")
def templates_list() -> None:
    """List library and user templates."""
    templates = _store().list_templates()
    table = Table(title=f"Templates ({len(templates)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Category", style="green")
    table.add_column("Screens", justify="right")
    for t in templates:
        table.add_row(t.id, t.name, t.source, t.category or "-", str(len(t.letter.screens)))
    rprint(table)


@templates_app.command("use")
def templates_use(template_id: str = typer.Argument(..., help="Template ID")) -> None:
    """Start a new draft from a template."""
    try:
        created = _store().create_draft_from_template(template_id)
    except DraftNotFoundError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Created[/green] {created.id} from template {template_id}")


@templates_app.command("save")
def templates_save(
    file: str = typer.Argument(..., help="Letter JSON file"),
    name: Annotated[str | None, typer.Option("--name", "-n", help="Template name")] = None,
) -> None:
    """Save a letter as a user template."""
    try:
        letter = _read_letter(file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    template = _store().add_user_template(name or letter.title, letter)
    rprint(f"[green]Saved template[/green] {template.id} ({template.name})")


@templates_app.command("delete")
def templates_delete(template_id: str = typer.Argument(..., help="Template ID")) -> None:
    """Delete a user template."""
    try:
        _store().delete_template(template_id)
    except (DraftNotFoundError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Deleted[/green] {template_id}")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default eletters.yaml in current directory."""
    target = Path("eletters.yaml")
    if target.exists() and not force:
        rprint("[yellow]eletters.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
