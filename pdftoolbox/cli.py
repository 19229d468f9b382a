"""
Command-line interface for pdftoolbox.

Each command runs one job over the given files and exports the produced
artifacts into an output directory.
"""

import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from . import __version__
from .core.config import Settings, load_settings
from .core.exceptions import PdfToolboxError
from .core.geometry import PAGE_FORMATS
from .core.model import InputFile
from .core.utils import format_file_size, set_log_level
from .jobs import BatchExportScheduler, ConversionJob, ConversionJobRunner, DirectorySink, Operation

console = Console()

_INPUT_PATH = click.Path(exists=True, dir_okay=False)


def _output_dir_option(func):
    return click.option(
        '--output-dir', '-o',
        default='./output',
        help='Directory receiving the exported files',
        type=click.Path(file_okay=False),
    )(func)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """
    pdftoolbox - merge, split, compress and convert PDFs and images locally.
    """
    try:
        settings = load_settings()
    except PdfToolboxError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        sys.exit(1)
    set_log_level("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


def _run_job(settings: Settings, operation: Operation, paths, description: str, **options) -> ConversionJob:
    inputs = [InputFile.from_path(path) for path in paths]
    runner = ConversionJobRunner(operation, settings=settings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=None)

        def update_progress(current, total):
            progress.update(task, completed=current, total=total)

        job = runner.run(inputs, progress_callback=update_progress, **options)

    if job.failed:
        console.print(f"\n[bold red]✗ Error:[/bold red] {job.error_message}")
        sys.exit(1)
    if job.error_message:
        console.print(f"\n[bold yellow]! Warning:[/bold yellow] {job.error_message}")
    return job


def _export(settings: Settings, job: ConversionJob, output_dir) -> None:
    sink = DirectorySink(output_dir)
    scheduler = BatchExportScheduler(job, sink, interval_ms=settings.export_interval_ms)
    scheduler.export_all()
    scheduler.wait()

    table = Table(title=f"Exported {len(sink.written)} file(s)")
    table.add_column("File", style="cyan")
    table.add_column("Size", style="green", justify="right")
    for artifact in job.artifacts:
        table.add_row(artifact.name, format_file_size(artifact.size))

    console.print()
    console.print(table)
    console.print(f"[dim]Output directory: {sink.directory}[/dim]\n")
    job.release()


@cli.command(name="merge")
@click.argument('inputs', nargs=-1, required=True, type=_INPUT_PATH)
@_output_dir_option
@click.pass_obj
def merge_command(settings, inputs, output_dir):
    """
    Merge two or more PDF files, in the given order.

    Example:

        pdftoolbox merge a.pdf b.pdf -o merged
    """
    job = _run_job(settings, Operation.MERGE, inputs, "Merging PDFs")
    _export(settings, job, output_dir)


@cli.command(name="images-to-pdf")
@click.argument('inputs', nargs=-1, required=True, type=_INPUT_PATH)
@click.option(
    '--page-format',
    type=click.Choice(sorted(PAGE_FORMATS), case_sensitive=False),
    default=None,
    help='Page size of the generated document',
)
@_output_dir_option
@click.pass_obj
def images_to_pdf_command(settings, inputs, page_format, output_dir):
    """
    Place each image on its own page of a new PDF.
    """
    job = _run_job(
        settings, Operation.IMAGES_TO_PDF, inputs, "Converting images", page_format=page_format
    )
    _export(settings, job, output_dir)


@cli.command(name="split")
@click.argument('input_pdf', type=_INPUT_PATH)
@_output_dir_option
@click.pass_obj
def split_command(settings, input_pdf, output_dir):
    """
    Split a PDF into one file per page (page-1.pdf, page-2.pdf, ...).
    """
    job = _run_job(settings, Operation.SPLIT, [input_pdf], "Splitting pages")
    if not job.outputs:
        console.print("\n[bold yellow]The document has no pages; nothing to export.[/bold yellow]")
        return
    _export(settings, job, output_dir)


@cli.command(name="convert")
@click.argument('inputs', nargs=-1, required=True, type=_INPUT_PATH)
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['jpeg', 'jpg', 'png', 'webp'], case_sensitive=False),
    default=None,
    help='Target image format',
)
@click.option(
    '--quality', '-q',
    type=float,
    default=None,
    help='Lossy quality between 0.0 and 1.0 (ignored for PNG)',
)
@click.option(
    '--stop-on-error',
    is_flag=True,
    help='Fail the whole batch on the first unreadable image',
)
@_output_dir_option
@click.pass_obj
def convert_command(settings, inputs, output_format, quality, stop_on_error, output_dir):
    """
    Convert images between JPEG, PNG and WebP.
    """
    job = _run_job(
        settings,
        Operation.CONVERT_IMAGES,
        inputs,
        "Converting images",
        format=output_format,
        quality=quality,
        isolate_failures=False if stop_on_error else None,
    )
    _export(settings, job, output_dir)


@cli.command(name="compress")
@click.argument('input_pdf', type=_INPUT_PATH)
@_output_dir_option
@click.pass_obj
def compress_command(settings, input_pdf, output_dir):
    """
    Re-serialise a PDF to reduce its size.
    """
    job = _run_job(settings, Operation.COMPRESS, [input_pdf], "Compressing PDF")
    stats = job.statistics
    if stats is not None:
        table = Table(title="Compression", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Original size", format_file_size(stats.original_size))
        table.add_row("Compressed size", format_file_size(stats.compressed_size))
        table.add_row("Reduction", f"{stats.reduction_percent:.1f}%")
        table.add_row("Pages", str(stats.page_count))
        console.print()
        console.print(table)
    _export(settings, job, output_dir)


if __name__ == "__main__":  # pragma: no cover
    cli()
