"""slidestream CLI — Typer + Rich terminal interface.

Commands: parse, generate, serve, models, config.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from slidestream import __version__
from slidestream.keys import key_status, load_keys_env
from slidestream.providers.registry import (
    config_dir,
    load_generation_config,
    load_models,
    resolve_model,
)
from slidestream.schemas.events import SlideEvent, SlideEventType
from slidestream.streaming.emitter import SlideEventEmitter
from slidestream.streaming.pacer import Pacer
from slidestream.streaming.pipeline import SlideStreamPipeline, iter_deltas
from slidestream.streaming.sse import format_sse

# Load API keys from ~/.slidestream/keys.env and .env on startup
load_keys_env()

console = Console()

# ── App and sub-apps ─────────────────────────────────────────────

app = typer.Typer(
    name="slidestream",
    help="Recover slides from streaming LLM completions as they arrive.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

models_app = typer.Typer(
    name="models",
    help="Inspect the model registry.",
    no_args_is_help=True,
)
app.add_typer(models_app, name="models")

config_app = typer.Typer(
    name="config",
    help="Show generation configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


# ── Version callback ───────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"slidestream {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log parser and provider activity.",
    ),
) -> None:
    """slidestream — incremental slide generation from LLM streams."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ── Helpers ──────────────────────────────────────────────────────


def _load_registry():
    """Load the model registry, exit on error."""
    try:
        return load_models()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading models:[/red] {e}")
        raise typer.Exit(1) from None


def _load_config():
    """Load generation config, exit on error."""
    try:
        return load_generation_config()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from None


def _preview(value: object, width: int = 60) -> str:
    text = str(value).replace("\n", " ")
    return text if len(text) <= width else text[: width - 1] + "…"


async def _drive(
    pipeline: SlideStreamPipeline,
    deltas: AsyncIterable[str],
    *,
    sse: bool,
) -> SlideEvent:
    """Run the pipeline, rendering events as they arrive; return the terminal event."""
    terminal: SlideEvent | None = None
    if sse:
        async for event in pipeline.run(deltas):
            console.out(format_sse(event), end="")
            terminal = event
        return terminal

    with console.status("[bold blue]Waiting for slides...", spinner="dots") as status:
        async for event in pipeline.run(deltas):
            data = event.data
            if event.type == SlideEventType.CHARACTER:
                status.update(
                    f"[bold blue]Slide {data['slideIndex'] + 1}[/bold blue] "
                    f"[dim]{data['field']}:[/dim] {_preview(data['content'])}"
                )
            elif event.type == SlideEventType.SLIDE_CREATED:
                slide = data["slide"]
                console.print(
                    f"[green]✓[/green] Slide {data['slideIndex'] + 1} "
                    f"[cyan]{slide.get('type')}[/cyan] {_preview(slide.get('title', ''))}"
                )
            terminal = event
    return terminal


def _render_result(terminal: SlideEvent) -> None:
    """Show the slide table for complete, or the error message."""
    if terminal.type == SlideEventType.ERROR:
        console.print(f"[red]Generation failed:[/red] {terminal.data['message']}")
        raise typer.Exit(1)

    slides = terminal.data["slides"]
    table = Table(title="Generated Slides", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="bold cyan")
    table.add_column("Title")
    table.add_column("ID", style="dim")

    for index, slide in enumerate(slides, start=1):
        table.add_row(
            str(index),
            str(slide.get("type", "")),
            _preview(slide.get("title") or slide.get("question") or ""),
            str(slide.get("id", "")),
        )

    console.print(table)
    console.print(f"\n[dim]{terminal.data['totalSlides']} slides generated[/dim]")


def _exit_on_error(terminal: SlideEvent) -> None:
    """Exit 1 on an error terminal; in SSE mode the exit status is the only summary."""
    if terminal.type == SlideEventType.ERROR:
        raise typer.Exit(1)


def _count_events(emitter: SlideEventEmitter) -> dict[str, int]:
    counts: dict[str, int] = {}

    def _tally(event: SlideEvent) -> None:
        counts[event.type.value] = counts.get(event.type.value, 0) + 1

    emitter.add_listener(_tally)
    return counts


# ── slidestream parse ────────────────────────────────────────────


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Recorded completion text to replay"),
    chunk_size: int = typer.Option(
        1, "--chunk-size", "-c", min=1,
        help="Characters per replayed delta",
    ),
    paced: bool = typer.Option(
        False, "--paced",
        help="Apply the configured typing delays",
    ),
    sse: bool = typer.Option(
        False, "--sse",
        help="Print raw Server-Sent Event frames instead of a table",
    ),
) -> None:
    """Replay a recorded completion through the streaming parser."""
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1)

    config = _load_config()
    text = path.read_text(encoding="utf-8")
    emitter = SlideEventEmitter()
    counts = _count_events(emitter)
    pipeline = SlideStreamPipeline.from_config(
        config,
        pacer=None if paced else Pacer.instant(),
        event_emitter=emitter,
    )

    terminal = asyncio.run(_drive(pipeline, iter_deltas(text, chunk_size), sse=sse))
    if sse:
        _exit_on_error(terminal)
        return

    _render_result(terminal)
    console.print(
        f"[dim]{counts.get('character', 0)} character events, "
        f"{counts.get('slide_created', 0)} slide events[/dim]"
    )


# ── slidestream generate ─────────────────────────────────────────


@app.command()
def generate(
    prompt_file: Path = typer.Argument(..., help="File holding the rendered system prompt"),
    model: str = typer.Option(
        "", "--model", "-m",
        help="Model registry key (default from config)",
    ),
    sse: bool = typer.Option(
        False, "--sse",
        help="Print raw Server-Sent Event frames instead of a table",
    ),
) -> None:
    """Stream a live completion and show slides as they are recovered."""
    if not prompt_file.is_file():
        console.print(f"[red]File not found:[/red] {prompt_file}")
        raise typer.Exit(1)

    registry = _load_registry()
    config = _load_config()
    try:
        cfg = resolve_model(registry, model or config.model)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from None

    if not key_status(cfg.api_key_env):
        console.print(
            f"[red]API key not set:[/red] {cfg.api_key_env}\n"
            f"Set it with: export {cfg.api_key_env}=your-key"
        )
        raise typer.Exit(1)

    from slidestream.providers.litellm_provider import LiteLLMProvider

    provider = LiteLLMProvider(cfg)
    if not sse:
        console.print(Panel(
            f"[bold]Model:[/bold] {cfg.display_name} ({cfg.model})\n"
            f"[bold]Prompt:[/bold] {prompt_file}",
            title="[bold blue]slidestream[/bold blue]",
            border_style="blue",
        ))

    deltas = provider.stream_text(
        [],
        prompt_file.read_text(encoding="utf-8"),
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.timeout,
    )
    pipeline = SlideStreamPipeline.from_config(config)
    terminal = asyncio.run(_drive(pipeline, deltas, sse=sse))
    if sse:
        _exit_on_error(terminal)
    else:
        _render_result(terminal)


# ── slidestream serve ────────────────────────────────────────────


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to serve on"),
) -> None:
    """Run the slide streaming HTTP service."""
    import uvicorn

    from slidestream.server import create_app

    console.print(Panel(
        f"[bold]Stream endpoint:[/bold] POST http://{host}:{port}/api/slides/stream",
        title="[bold blue]slidestream server[/bold blue]",
        border_style="blue",
    ))
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


# ── slidestream models ───────────────────────────────────────────


@models_app.command("list")
def models_list() -> None:
    """Show all registered models as a table."""
    registry = _load_registry()

    table = Table(title="Registered Models", show_lines=True)
    table.add_column("Key", style="bold cyan")
    table.add_column("Display Name")
    table.add_column("Provider", style="dim")
    table.add_column("Context", justify="right")
    table.add_column("API Key")

    for key, cfg in sorted(registry.items()):
        table.add_row(
            key,
            cfg.display_name,
            cfg.provider,
            f"{cfg.context_window:,}",
            "[green]set[/green]" if key_status(cfg.api_key_env) else "[red]not set[/red]",
        )

    console.print(table)
    console.print(f"\n[dim]{len(registry)} models registered[/dim]")


# ── slidestream config ───────────────────────────────────────────


@config_app.command("show")
def config_show() -> None:
    """Show current generation configuration."""
    config = _load_config()

    table = Table(title="Generation Configuration", show_header=False, show_lines=True)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Default Model", config.model)
    table.add_row("Temperature", f"{config.temperature:.2f}")
    table.add_row("Max Tokens", str(config.max_tokens))
    table.add_row("Timeout", f"{config.timeout}s")
    table.add_row("Fallback Type", config.fallback_type)
    table.add_row("Character Delay", f"{config.pacing.character_delay * 1000:.0f}ms")
    table.add_row("Slide Delay", f"{config.pacing.slide_delay * 1000:.0f}ms")
    table.add_row("Config Dir", str(config_dir()))

    console.print(table)
