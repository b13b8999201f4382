"""
audiowork.cli - Typer CLI entry point.

Provides the extract and info subcommands over the pipeline.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from audiowork import __version__
from audiowork.config import PipelineConfig, build_config, load_config
from audiowork.exceptions import AudioWorkError
from audiowork.logging import configure_logging

app = typer.Typer(
    name="audiowork",
    help="Cut a time range out of an audio file or URL and save it as WAV.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"audiowork {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """audiowork - decode, slice and re-encode audio clips."""
    pass


def resolve_config(
    config_path: Path | None,
    sample_rate: int | None,
    verbose: bool,
    timeout: float | None = None,
) -> PipelineConfig:
    """Merge an optional YAML config with command-line overrides."""
    base = load_config(config_path).model_dump() if config_path else {}
    return build_config(
        base,
        sample_rate=sample_rate,
        debug_log=True if verbose else None,
        fetch_timeout=timeout,
    )


@app.command("extract")
def extract_cmd(
    source: str = typer.Argument(..., help="Audio file path or http(s) URL"),
    from_seconds: float = typer.Option(..., "--from", "-s", help="Range start in seconds"),
    to_seconds: float = typer.Option(..., "--to", "-e", help="Range end in seconds"),
    output: Path = typer.Option(Path("clip.wav"), "--output", "-o", help="Output WAV path"),
    sample_rate: int = typer.Option(None, "--sample-rate", "-r", help="Decode sample rate"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to audiowork.yaml"),
    timeout: float = typer.Option(None, "--timeout", "-t", help="Network timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Extract a time range and write it as a WAV clip."""
    from audiowork.service import extract_clip
    from audiowork.utils import format_duration, format_size

    configure_logging(verbose)

    try:
        config = resolve_config(config_path, sample_rate, verbose, timeout)
    except (AudioWorkError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[cyan]Extracting {format_duration(from_seconds)} → {format_duration(to_seconds)} "
        f"from {source}...[/cyan]"
    )

    try:
        result = extract_clip(source, from_seconds, to_seconds, config=config)
        result.save(output)
    except (AudioWorkError, TimeoutError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] Wrote {output} ({format_size(result.size)}, {result.mime_type})"
    )


@app.command("info")
def info_cmd(
    source: str = typer.Argument(..., help="Audio file path or http(s) URL"),
    sample_rate: int = typer.Option(None, "--sample-rate", "-r", help="Decode sample rate"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to audiowork.yaml"),
) -> None:
    """Decode a source and show what the pipeline sees."""
    from audiowork.decode.audio import decode_audio
    from audiowork.loader import fetch_url, is_url, read_file
    from audiowork.utils import format_duration, format_size

    try:
        config = resolve_config(config_path, sample_rate, verbose=False)
        if is_url(source):
            data = fetch_url(source, config.fetch_timeout)
        else:
            data = read_file(Path(source))
        decoded = decode_audio(data, config.sample_rate, max_seconds=config.max_decode_seconds)
    except (AudioWorkError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Decoded Audio")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Source", source)
    table.add_row("Encoded size", format_size(len(data)))
    table.add_row("Sample rate", f"{decoded.sample_rate} Hz")
    table.add_row("Channels", str(decoded.channel_count))
    table.add_row("Samples", str(decoded.length))
    table.add_row("Duration", format_duration(decoded.duration))
    if decoded.duration >= config.max_decode_seconds:
        table.add_row("Note", f"[yellow]Truncated to {config.max_decode_seconds:g}s[/yellow]")

    console.print(table)
