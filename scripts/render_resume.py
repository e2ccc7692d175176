#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders resume identities to HTML or PDF using the composition and rendering
contexts.

Commands:
    list        - List available resume identities and templates
    html        - Render a resume to HTML (browser or pdf document) or JSON (api)
    pdf         - Generate a content-measured PDF
    health      - Check that the headless browser launches and renders
    config      - Show the effective PDF configuration and validate it
    cache-stats - Render once and show cache statistics

Examples:\n

    render_resume.py list                                   # Show what can be rendered

    render_resume.py html eng_mgr -o eng_mgr.html           # Browser document

    render_resume.py html eng_mgr --mode api                # JSON bundle to stdout

    render_resume.py pdf eng_mgr --scale 0.95               # PDF with custom scale
"""

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.composition import ResumeComposer
from folio.contexts.rendering import PDFGenerator, load_pdf_config
from folio.utils.errors import FolioError
from folio.utils.logger import setup_logger
from folio.utils.paths import ProjectPaths

load_dotenv()


class OutputMode(str, Enum):
    browser = "browser"
    pdf = "pdf"
    api = "api"


app = typer.Typer(
    help="Render resumes to HTML and content-measured PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    project_root: Annotated[
        Optional[Path],
        typer.Option(
            "--project-root",
            "-r",
            help="Project root holding data/, resumes/, styles/ (default: FOLIO_PROJECT_ROOT or cwd)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log at DEBUG level"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Also write a DEBUG log file to this directory"),
    ] = None,
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    paths = ProjectPaths.from_env(project_root)
    setup_logger(
        "render_resume",
        log_dir=log_dir,
        level="DEBUG" if verbose else "INFO",
        extra_provenance={"Project root": paths.root},
    )
    ctx.obj = paths


@app.command("list")
def list_command(ctx: typer.Context):
    """
    List available resume identities and templates.

    Examples:\n

        $ render_resume.py list
    """
    composer = ResumeComposer.from_paths(ctx.obj)

    typer.secho("\nResume types:", fg=typer.colors.BLUE, bold=True)
    for resume_id in composer.get_available_resume_types():
        typer.echo(f"  {resume_id}")

    typer.secho("\nTemplates:", fg=typer.colors.BLUE, bold=True)
    for template in composer.get_available_templates():
        typer.echo(f"  {template}")
    typer.echo("")


@app.command("html")
def html_command(
    ctx: typer.Context,
    resume_id: Annotated[str, typer.Argument(help="Resume identity (directory under data/)")],
    template: Annotated[
        str, typer.Option("--template", "-t", help="Template name")
    ] = "default",
    mode: Annotated[
        OutputMode,
        typer.Option("--mode", "-m", help="browser: linked CSS + navigation; pdf: inline CSS; api: JSON"),
    ] = OutputMode.browser,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
):
    """
    Render a resume to an HTML document (or a JSON bundle in api mode).

    Examples:\n

        $ render_resume.py html eng_mgr                         # Browser document to stdout

        $ render_resume.py html eng_mgr --mode pdf -o out.html  # Self-contained document

        $ render_resume.py html eng_mgr --mode api              # Fragment + CSS + data as JSON
    """
    composer = ResumeComposer.from_paths(ctx.obj)

    try:
        if mode == OutputMode.browser:
            text = asyncio.run(composer.compose_for_browser(resume_id, template))
        elif mode == OutputMode.pdf:
            text = asyncio.run(composer.compose_for_pdf(resume_id, template))
        else:
            rendered = asyncio.run(composer.compose_for_api(resume_id, template))
            text = json.dumps(rendered.to_dict(), indent=2, default=str)
    except FolioError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.secho(f"✓ Wrote {mode.value} output", fg=typer.colors.GREEN, bold=True, err=True)
    typer.echo(f"  Output: {ctx.obj.display(output.resolve())}", err=True)


async def _generate(generator: PDFGenerator, resume_id: str, template: str, options: dict):
    try:
        return await generator.generate_pdf(resume_id, options=options, template=template)
    finally:
        await generator.close()


@app.command("pdf")
def pdf_command(
    ctx: typer.Context,
    resume_id: Annotated[str, typer.Argument(help="Resume identity (directory under data/)")],
    template: Annotated[
        str, typer.Option("--template", "-t", help="Template name")
    ] = "default",
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", help="Override PDF scale", min=0.1, max=3.0),
    ] = None,
    no_background: Annotated[
        bool,
        typer.Option("--no-background", help="Do not print background colors/images"),
    ] = False,
):
    """
    Generate a PDF whose page is sized to the rendered content.

    Examples:\n

        $ render_resume.py pdf eng_mgr

        $ render_resume.py pdf ai_lead --scale 0.9
    """
    options = {}
    if scale is not None:
        options["scale"] = scale
    if no_background:
        options["print_background"] = False

    typer.secho(f"\nGenerating PDF: {resume_id}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template}")
    typer.echo("")

    generator = PDFGenerator(ResumeComposer.from_paths(ctx.obj))
    result = asyncio.run(_generate(generator, resume_id, template, options))

    if result.success:
        typer.secho("✓ PDF generated", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Page: {result.width_px}x{result.height_px}px")
        if result.page_count is not None:
            typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  Time: {result.generation_time_ms:.0f}ms")
        typer.echo(f"  PDF: {ctx.obj.display(result.file_path)}")
    else:
        typer.secho("✗ PDF generation failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Stage: {result.failed_stage.value if result.failed_stage else 'unknown'}")
        typer.secho(f"  Error: {result.error}", fg=typer.colors.RED)
        typer.echo(f"  Time: {result.generation_time_ms:.0f}ms")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


async def _health(generator: PDFGenerator) -> bool:
    try:
        return await generator.health_check()
    finally:
        await generator.close()


@app.command("health")
def health_command(ctx: typer.Context):
    """Check that the headless browser launches and renders a trivial page."""
    generator = PDFGenerator(ResumeComposer.from_paths(ctx.obj))
    healthy = asyncio.run(_health(generator))

    if healthy:
        typer.secho("✓ Browser healthy", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("✗ Browser unhealthy", fg=typer.colors.RED, bold=True)
    raise typer.Exit(code=0 if healthy else 1)


@app.command("config")
def config_command():
    """Show the effective PDF configuration (defaults + environment) and validate it."""
    config = load_pdf_config()
    typer.echo(json.dumps(config.to_dict(), indent=2))

    errors = config.validate()
    if errors:
        typer.secho(f"\n✗ {len(errors)} configuration problems", fg=typer.colors.RED, bold=True, err=True)
        for error in errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("\n✓ Configuration valid", fg=typer.colors.GREEN, bold=True, err=True)


@app.command("cache-stats")
def cache_stats_command(
    ctx: typer.Context,
    resume_id: Annotated[
        Optional[str],
        typer.Argument(help="Render this resume first (browser and pdf) to populate caches"),
    ] = None,
    template: Annotated[
        str, typer.Option("--template", "-t", help="Template name")
    ] = "default",
):
    """
    Show cache statistics for every caching service.

    Caches are per process, so pass a resume identity to see them populated.
    """
    composer = ResumeComposer.from_paths(ctx.obj)

    if resume_id is not None:
        async def warm():
            await composer.compose_for_browser(resume_id, template)
            await composer.compose_for_pdf(resume_id, template)

        try:
            asyncio.run(warm())
        except FolioError as e:
            typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.echo(json.dumps(composer.get_cache_stats(), indent=2))


if __name__ == "__main__":
    app()
