"""Command line entry point for tick-progress."""

import hashlib
import sys
import time
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tickprogress import __version__
from tickprogress.core.control import control
from tickprogress.core.iteration import for_each_block_with_progress
from tickprogress.ui.progress import BYTES_FORMAT, COLLECTION_FORMAT, ProgressLine
from tickprogress.utils.config import Config
from tickprogress.utils.formatting import format_bytes, format_duration

# Configure logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

console = Console()


def setup_config(config_path: Optional[Path] = None) -> Config:
    """Setup and return configuration instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration instance
    """
    return Config(config_path)


def make_progress_line(config: Config, default_format: str) -> ProgressLine:
    """Build a progress line honouring the configured format and bar style.

    Args:
        config: Configuration instance
        default_format: Template used when the config does not set one

    Returns:
        Progress line callback
    """
    template = config.get("line_format") or default_format
    return ProgressLine(template, **config.bar_style())


def resolve_block_size(config: Config, block_size: Optional[int]) -> int:
    """Pick the block size from the option or the config.

    Raises:
        click.BadParameter: If the block size is not positive
    """
    if block_size is None:
        block_size = int(config.get("block_size", 4096))
    if block_size <= 0:
        raise click.BadParameter("must be a positive number of bytes", param_hint="--block-size")
    return block_size


def _elapsed_since(started: float) -> str:
    return format_duration(timedelta(seconds=time.monotonic() - started))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to a JSON configuration file")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """tick-progress - progress bars, rates and ETAs for long-running loops."""
    if verbose:
        console.print(f"[bold green]tick-progress v{__version__}[/bold green]")
        logging.getLogger().setLevel(logging.INFO)

    ctx.obj = setup_config(config_path)


@main.command("demo")
@click.option("--total", default=100, type=int, help="Number of ticks to complete")
@click.option("--step", default=1, type=int, help="Ticks per step")
@click.option("--delay", default=0.05, type=float, help="Seconds to wait between steps")
@click.pass_obj
def demo_command(config: Config, total: int, step: int, delay: float) -> None:
    """Tick a progress bar to completion."""
    if total <= 0:
        raise click.BadParameter("must be positive", param_hint="--total")
    if step <= 0:
        raise click.BadParameter("must be positive", param_hint="--step")

    try:
        line = make_progress_line(config, COLLECTION_FORMAT)
        progress = control(total_ticks=total, ticks_per_step=step, updater=line)
        logger.info(f"Running demo with {total} ticks in steps of {step}")

        while progress.current_ticks < progress.total_ticks:
            time.sleep(delay)
            progress.tick()
        line.finish()

        snapshot = progress.progress
        summary = f"""
[bold cyan]Ticks:[/bold cyan] {snapshot.current_ticks}/{snapshot.total}
[bold cyan]Updates:[/bold cyan] {line.updates}
[bold cyan]Elapsed:[/bold cyan] {snapshot.elapsed.strip()}
        """.strip()

        console.print(Panel(summary, title="Demo Complete", border_style="green"))

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)


@main.command("checksum")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--algorithm", "-a", default="sha256",
              type=click.Choice(sorted(hashlib.algorithms_guaranteed)),
              help="Hash algorithm")
@click.option("--block-size", type=int, help="Bytes read per block")
@click.pass_obj
def checksum_command(config: Config, file: Path, algorithm: str, block_size: Optional[int]) -> None:
    """Hash FILE while showing read progress."""
    block_size = resolve_block_size(config, block_size)

    try:
        digest = hashlib.new(algorithm)
        line = make_progress_line(config, BYTES_FORMAT)

        for_each_block_with_progress(
            file,
            lambda buffer, bytes_read: digest.update(buffer),
            block_size=block_size,
            updater=line
        )
        line.finish()

        if algorithm.startswith("shake_"):
            hexdigest = digest.hexdigest(32)
        else:
            hexdigest = digest.hexdigest()

        console.print(f"{hexdigest}  {file}")

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)
    except Exception as e:
        logger.exception("Checksum failed")
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)


@main.command("copy")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--block-size", type=int, help="Bytes copied per block")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing destination")
@click.pass_obj
def copy_command(
    config: Config,
    source: Path,
    destination: Path,
    block_size: Optional[int],
    force: bool
) -> None:
    """Copy SOURCE to DESTINATION while showing byte progress."""
    block_size = resolve_block_size(config, block_size)

    if destination.exists() and not force:
        console.print(f"[red]Error: {destination} already exists (use --force to overwrite)[/red]")
        sys.exit(1)

    try:
        started = time.monotonic()
        line = make_progress_line(config, BYTES_FORMAT)

        with open(destination, "wb") as out:
            copied = for_each_block_with_progress(
                source,
                lambda buffer, bytes_read: out.write(buffer),
                block_size=block_size,
                updater=line
            )
        line.finish()

        summary = f"""
[bold cyan]Source:[/bold cyan] {source}
[bold cyan]Destination:[/bold cyan] {destination}
[bold cyan]Copied:[/bold cyan] {format_bytes(copied)}
[bold cyan]Elapsed:[/bold cyan] {_elapsed_since(started)}
        """.strip()

        console.print(Panel(summary, title="Copy Complete", border_style="green"))

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)
    except Exception as e:
        logger.exception("Copy failed")
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
