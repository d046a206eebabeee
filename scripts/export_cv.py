#!/usr/bin/env python3
"""
Résumé Export CLI

Exports résumé profiles to ATS-friendly PDF (or plain text) and checks
exported PDFs using the rendering context.

Commands:
    export   - Export a profile to PDF or text
    validate - Run layout diagnostics on an exported PDF
    presets  - List available layout presets

Examples:\n

    export_cv.py export pt                                    # Portuguese data file

    export_cv.py export en --preset spacing_compact           # English, compact spacing

    export_cv.py export data/profiles/cv.json --format text   # Plain-text export

    export_cv.py validate outs/results/2025-11-14/Mariana_Costa_Ribeiro_Resume_ATS_pt_2025-11-14.pdf pt
"""

from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.profile import CVDocument, InvalidProfileError, Language, load_cv, load_cv_for_language
from vitae.contexts.rendering import (
    ExportError,
    FileExportSink,
    analyze_export,
    build_layout_config,
    export_cv,
    load_layout_presets,
)
from vitae.contexts.rendering.logger import log_diagnostics_result

load_dotenv()


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def resolve_profile(identifier: str) -> CVDocument:
    """Load a profile from a language code ("pt", "en") or a JSON file path."""
    if identifier.lower() in {language.value for language in Language}:
        return load_cv_for_language(identifier)
    return load_cv(Path(identifier))


app = typer.Typer(
    help="Export résumé profiles to ATS-friendly PDF and check exported PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("export")
def export_command(
    profile: Annotated[
        str,
        typer.Argument(help="Language code (pt, en) or path to a profile JSON file"),
    ],
    presets: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset to apply (repeatable, later overrides earlier)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: pdf or text"),
    ] = "pdf",
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Output directory (default: RESULTS_PATH/<today>)"),
    ] = None,
    check: Annotated[
        bool,
        typer.Option("--check", help="Run layout diagnostics on the exported PDF"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output and every error line on failure"),
    ] = False,
):
    """
    Export a résumé profile.

    Examples:\n

        $ export_cv.py export pt                               # Export Portuguese profile

        $ export_cv.py export en -p page_letter -p style_plain # Letter page, no colors

        $ export_cv.py export en --check                       # Export, then diagnose
    """
    if output_format not in ("pdf", "text"):
        typer.secho(f"Error: unknown format '{output_format}' (use pdf or text)\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        cv = resolve_profile(profile)
        config = build_layout_config(presets or None)
    except (FileNotFoundError, InvalidProfileError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nExporting: {cv.name} ({cv.language.value})", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Format: {output_format}")
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    try:
        result = export_cv(
            cv,
            config=config,
            sink=FileExportSink(output_dir),
            output_format=output_format,
            verbose=verbose,
        )
    except ExportError as e:
        typer.secho("\n✗ Export failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        typer.echo("")
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  File: {display_path(result.path)}")

    if check and output_format == "pdf":
        diagnostics = analyze_export(result.path, cv, config)
        log_diagnostics_result(result.path, diagnostics)
        if not diagnostics.is_valid:
            typer.secho(f"  Diagnostic issues: {len(diagnostics.get_inherited_issues())}", fg=typer.colors.YELLOW)
            typer.echo("")
            raise typer.Exit(code=1)

    typer.echo("")
    raise typer.Exit(code=0)


@app.command("validate")
def validate_command(
    pdf_path: Annotated[
        Path,
        typer.Argument(help="Exported PDF to check"),
    ],
    profile: Annotated[
        str,
        typer.Argument(help="Language code (pt, en) or path to the profile it was exported from"),
    ],
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout presets used for the export (repeatable)"),
    ] = None,
    pages: Annotated[
        Optional[int],
        typer.Option("--pages", help="Expected page count", min=1),
    ] = None,
):
    """
    Check an exported PDF: footers, section order and bottom margin.

    Examples:\n

        $ export_cv.py validate outs/results/2025-11-14/Mariana_Costa_Ribeiro_Resume_ATS_pt_2025-11-14.pdf pt

        $ export_cv.py validate resume.pdf data/profiles/cv.en.json --pages 2
    """
    typer.secho(f"\nValidating: {display_path(pdf_path)}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        cv = resolve_profile(profile)
        config = build_layout_config(presets or None)
        diagnostics = analyze_export(pdf_path, cv, config, expected_page_count=pages)
    except (FileNotFoundError, InvalidProfileError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    issues = diagnostics.get_inherited_issues()
    if diagnostics.is_valid:
        typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("✗ Validation failed", fg=typer.colors.RED, bold=True)
    typer.echo(f"  Page count: {diagnostics.actual_page_count}")
    for issue in issues:
        typer.secho(f"  - {issue}", fg=typer.colors.RED)
    typer.echo("")

    raise typer.Exit(code=0 if diagnostics.is_valid else 1)


@app.command("presets")
def presets_command(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Presets file (default: LAYOUT_PRESETS_PATH)"),
    ] = None,
):
    """List available layout presets."""
    try:
        presets = load_layout_presets(config_path)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("\nAvailable presets:", fg=typer.colors.BLUE, bold=True)
    for name in sorted(presets):
        typer.echo(f"  {name}: {', '.join(sorted(presets[name] or {}))}")
    typer.echo("")


if __name__ == "__main__":
    app()
