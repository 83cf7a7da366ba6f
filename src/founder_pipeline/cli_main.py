"""
Command-line interface for the Founder pipeline.

Provides the full ``run`` pipeline plus the two stages as standalone
commands so they can be rerun on existing files.
"""

import functools
import sys
from pathlib import Path

import click
from loguru import logger

from .config.settings import get_settings, create_environment_config, Settings
from .core.exceptions import FounderError
from .fasta.aggregator import FastaAggregator
from .fasta.gene_cutter import ResponseClassifier
from .main_orchestrator import FounderPipelineOrchestrator, PipelineJobConfig
from .utils.logging import setup_logging


def handle_errors(func):
    """Decorator to report pipeline errors and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FounderError as e:
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


@click.group()
@click.version_option(package_name="founder-pipeline")
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='Configuration file path')
@click.option('--env', type=click.Choice(['development', 'production']), default='production', help='Environment')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log errors')
@click.pass_context
def cli(ctx, config, env, verbose, quiet):
    """
    Founder pipeline - combine sample FASTA files, cut genes with
    GeneCutter and split the result into AA and NA alignments.
    """
    ctx.ensure_object(dict)
    
    try:
        if config:
            settings = Settings.load_config(Path(config))
        elif env == 'production':
            settings = get_settings()
        else:
            settings = create_environment_config(env)
    except FounderError as e:
        raise click.UsageError(str(e))
    
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"
    else:
        level = settings.logging.level
    
    setup_logging(
        level=level,
        log_file=settings.logging.log_file,
        format_string=settings.logging.format,
        enable_json=settings.logging.enable_json_logging,
        rotation=settings.logging.log_rotation,
    )
    
    ctx.obj['settings'] = settings


@cli.command()
@click.option('--input', '-i', 'input_dir', required=True, type=click.Path(exists=True, file_okay=False), help='Input directory path')
@click.option('--output', '-o', 'output_dir', required=True, type=click.Path(file_okay=False), help='Output directory path')
@click.option('--keep-original', is_flag=True, help='Keep intermediate files')
@click.option('--region', help='GeneCutter region (defaults to configuration)')
@click.option('--skip-annotation', is_flag=True, help='Do not run locator; use an existing annotated file')
@click.option('--annotated', type=click.Path(exists=True, dir_okay=False), help='Annotated FASTA to use with --skip-annotation')
@click.pass_context
@handle_errors
def run(ctx, input_dir, output_dir, keep_original, region, skip_annotation, annotated):
    """Run the Founder pipeline."""
    settings = ctx.obj['settings']
    
    job = PipelineJobConfig(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        region=region,
        keep_original=True if keep_original else None,
        run_annotation=not skip_annotation,
        annotated_path=Path(annotated) if annotated else None,
    )
    
    with FounderPipelineOrchestrator(settings) as orchestrator:
        result = orchestrator.process(job)
    summary = result.get_summary()
    
    click.echo(click.style("✓ Pipeline completed successfully!", fg='green'))
    click.echo(f"Records combined: {summary['records_combined']}")
    click.echo(f"AA count: {summary['aa_count']}")
    click.echo(f"NA count: {summary['na_count']}")
    click.echo(f"Processing time: {summary['processing_time']:.2f}s")
    for file_path in summary['output_files']:
        click.echo(f"  - {file_path}")


@cli.command()
@click.argument('input_dir', type=click.Path(exists=True, file_okay=False))
@click.argument('output_fasta', type=click.Path(dir_okay=False))
@click.pass_context
@handle_errors
def combine(ctx, input_dir, output_fasta):
    """Combine every FASTA file of INPUT_DIR into OUTPUT_FASTA."""
    settings = ctx.obj['settings']
    
    result = FastaAggregator(settings).process(input_dir, output_fasta)
    
    click.echo(click.style("✓ Sequences combined!", fg='green'))
    click.echo(f"Files: {len(result.files_processed)}")
    click.echo(f"Records: {result.record_count}")
    click.echo(f"Output: {result.output_path}")


@cli.command(name='gene-cutter')
@click.argument('annotated_fasta', type=click.Path(dir_okay=False))
@click.option('--aa', 'aa_output', required=True, type=click.Path(dir_okay=False), help='Amino-acid FASTA output')
@click.option('--na', 'na_output', required=True, type=click.Path(dir_okay=False), help='Nucleotide FASTA output')
@click.option('--region', help='GeneCutter region (defaults to configuration)')
@click.option('--timeout', type=float, help='Request timeout in seconds')
@click.pass_context
@handle_errors
def gene_cutter(ctx, annotated_fasta, aa_output, na_output, region, timeout):
    """Submit ANNOTATED_FASTA to GeneCutter and split the AA/NA results."""
    settings = ctx.obj['settings']
    if timeout is not None:
        settings = settings.model_copy(
            update={"gene_cutter": settings.gene_cutter.model_copy(update={"timeout": timeout})}
        )
    
    with ResponseClassifier(settings) as classifier:
        aa_count, na_count = classifier.process(
            annotated_fasta, region, aa_output, na_output
        )
    
    click.echo(click.style("✓ GeneCutter results split!", fg='green'))
    click.echo(f"AA count: {aa_count}")
    click.echo(f"NA count: {na_count}")


@cli.command()
@click.pass_context
def info(ctx):
    """Show the active configuration."""
    settings = ctx.obj['settings']
    
    click.echo(f"{settings.app_name}")
    click.echo(f"Version: {settings.app_version}")
    click.echo(f"")
    click.echo(f"GeneCutter:")
    click.echo(f"  URL: {settings.gene_cutter.url}")
    click.echo(f"  Region: {settings.gene_cutter.region}")
    click.echo(f"  Timeout: {settings.gene_cutter.timeout or 'none'}")
    click.echo(f"Pipeline:")
    click.echo(f"  Locator command: {settings.pipeline.locator_command}")
    click.echo(f"  Combined file: {settings.pipeline.combined_filename}")
    click.echo(f"  Keep originals: {settings.pipeline.keep_original}")
    logger.debug("Displayed configuration")


if __name__ == '__main__':
    cli()
