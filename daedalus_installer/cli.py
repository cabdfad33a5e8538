"""
daedalus-installer CLI.

Command-line interface for building the macOS installer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.config import get_config
from .core.exceptions import InstallerError
from .core.logging import setup_logging
from .models.build import BuildOptions, CardanoBackendSpec, Cluster, MantisBackendSpec

app = typer.Typer(
    name="daedalus-installer",
    help="Build the signed macOS installer for Daedalus",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"daedalus-installer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """daedalus-installer: Electron app + Cardano node -> signed .pkg."""
    pass


@app.command()
def build(
    cluster: Cluster = typer.Option(
        ...,
        "--cluster",
        "-c",
        help="Cluster to build the installer for",
    ),
    app_name: str = typer.Option(
        "Daedalus",
        "--app-name",
        help="Application name used in the configuration templates",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--out-dir",
        "-o",
        help="Directory receiving the signed installer",
    ),
    cardano: Optional[Path] = typer.Option(
        None,
        "--cardano",
        help="Path to the Cardano node distribution (daedalus-bridge)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    mantis: bool = typer.Option(
        False,
        "--mantis",
        help="Bundle the Mantis backend instead of Cardano",
    ),
    build_job: Optional[str] = typer.Option(
        None,
        "--build-job",
        "-b",
        help="CI build job identifier appended to the file name",
    ),
    test_installer: bool = typer.Option(
        False,
        "--test-installer",
        help="Install the built package on this machine to check it installs",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Build, sign and verify the macOS installer."""
    if (cardano is None) == (not mantis):
        console.print("[red]Choose exactly one backend: --cardano PATH or --mantis[/red]")
        raise typer.Exit(2)

    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    setup_logging(config)

    options = BuildOptions(
        cluster=cluster,
        app_name=app_name,
        output_dir=output_dir,
        backend=CardanoBackendSpec(bridge=cardano) if cardano is not None else MantisBackendSpec(),
        build_job=build_job,
        test_installer=test_installer,
    )

    console.print(Panel.fit(
        "[bold blue]daedalus-installer[/bold blue]\n"
        "Electron app + node backend → signed .pkg",
        border_style="blue",
    ))
    console.print(f"\n[bold]Cluster:[/bold] {cluster.value}")
    console.print(f"[bold]Backend:[/bold] {options.backend.kind}")
    console.print(f"[bold]Output:[/bold] {output_dir}\n")

    from .orchestration import InstallerPipeline

    pipeline = InstallerPipeline(options, config=config)
    try:
        result = pipeline.run()
    except InstallerError as e:
        console.print("\n[bold red]✗ Installer build failed![/bold red]")
        console.print(f"Error: {escape(str(e))}")
        if pipeline.result.failed_stage:
            console.print(f"Failed at: {pipeline.result.failed_stage}")
        raise typer.Exit(1)

    console.print("\n[bold green]✓ Installer built successfully![/bold green]\n")

    table = Table(title="Build Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    for stage in result.stages:
        table.add_row(stage.stage_name, stage.status.value, f"{stage.duration_seconds:.1f}s")
    console.print(table)

    console.print(f"\n[bold]Backend version:[/bold] {result.backend_version or '(none)'}")
    console.print(f"[bold]Frontend version:[/bold] {result.frontend_version}")
    console.print(f"[bold]Generated:[/bold] {result.package_path}")


@app.command("version-file")
def version_file(
    path: Path = typer.Argument(..., help="Path to a backend version file"),
) -> None:
    """Print the version read from a backend version file."""
    from .services.versions import read_version_file

    version = read_version_file(path)
    console.print(version if version else "[dim](no version file)[/dim]")


@app.command()
def config() -> None:
    """Show the effective configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Installers Dir", str(cfg.paths.installers_dir))
    table.add_row("Frontend Dir", str(cfg.paths.resolve(cfg.paths.frontend_dir)))
    table.add_row("Config Templates", str(cfg.paths.resolve(cfg.paths.config_templates)))
    table.add_row("Product Plist", str(cfg.paths.resolve(cfg.paths.product_plist)))
    table.add_row("Signing Identity", cfg.signing.identity or "[red]not set[/red]")
    table.add_row("Signing Keychain", str(cfg.signing.keychain) if cfg.signing.keychain else "default")

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  DAEDALUS_LOG_LEVEL, DAEDALUS_INSTALLERS_DIR, DAEDALUS_FRONTEND_DIR")
    console.print("  DAEDALUS_CONFIG_TEMPLATES, DAEDALUS_SIGNING_IDENTITY, DAEDALUS_SIGNING_KEYCHAIN")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
