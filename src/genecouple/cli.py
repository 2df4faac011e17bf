"""Command-line interface."""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from genecouple.config import CouplingConfig
from genecouple.core.class_filters import ClassFilterType
from genecouple.core.classifiers import ClassifierType
from genecouple.core.neighbors import NeighborType
from genecouple.core.pair_filters import PairFilterType
from genecouple.couples import find_couplings
from genecouple.io.genomes import GenomeDirectory
from genecouple.prepare import CouplingPreparer
from genecouple.reports import ReportType

app = typer.Typer(help="genecouple: functional coupling of genes across genomes")
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(code=1)


@contextmanager
def _open_output(output: Optional[Path]):
    """Open the report stream; a report file is removed if the run fails."""
    if output is None:
        yield sys.stdout
        return
    try:
        with open(output, "w") as fh:
            yield fh
    except Exception:
        output.unlink(missing_ok=True)
        raise


@app.command()
def couples(
    genome_dir: Path = typer.Argument(..., help="Directory of GTO files"),
    max_gap: int = typer.Option(5000, "--gap", "-d", help="Maximum distance between neighboring features"),
    classifier_type: ClassifierType = typer.Option(ClassifierType.PGFAMS, "--method", "-t", help="Feature classification scheme"),
    neighbor_type: NeighborType = typer.Option(NeighborType.CLOSE, "--finder", help="Neighbor-finding policy"),
    class_filter_type: ClassFilterType = typer.Option(ClassFilterType.NONE, "--filter", help="Class filter"),
    pair_filter_type: PairFilterType = typer.Option(PairFilterType.WEIGHT, "--pair-filter", help="Pair significance test"),
    min_group: float = typer.Option(15.0, "--min", "-m", help="Minimum group size or weight"),
    class_limit: int = typer.Option(2, "--limit", help="Maximum occurrences of a class per genome (limited filter)"),
    blacklist_file: Optional[Path] = typer.Option(None, "--blacklist", help="Classes to remove (blacklist filter)"),
    whitelist_file: Optional[Path] = typer.Option(None, "--whitelist", help="Classes of interest (whitelist pair filter)"),
    family_file: Optional[Path] = typer.Option(None, "--families", help="Family definition or family name table"),
    name_file: Optional[Path] = typer.Option(None, "--names", help="FASTA file of family names"),
    seed_filtering: bool = typer.Option(False, "--seed-filter", help="Skip genomes without a seed protein"),
    random_seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed for the random classifier"),
    report_type: ReportType = typer.Option(ReportType.GROUP, "--format", help="Report format"),
    verify_file: Optional[Path] = typer.Option(None, "--verify", help="Previous coupling report (verify format)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Find functionally coupled class pairs in a genome directory."""
    _configure_logging(verbose)
    try:
        config = CouplingConfig(
            max_gap=max_gap,
            classifier_type=classifier_type,
            neighbor_type=neighbor_type,
            class_filter_type=class_filter_type,
            pair_filter_type=pair_filter_type,
            min_group=min_group,
            class_limit=class_limit,
            blacklist_file=blacklist_file,
            whitelist_file=whitelist_file,
            family_file=family_file,
            name_file=name_file,
            seed_filtering=seed_filtering,
            random_seed=random_seed,
        )
        config.validate()
        genomes = GenomeDirectory(genome_dir)
        classifier = config.build_classifier()
        # Fail on bad filter options before the output file is created.
        config.build_class_filter()
        config.build_pair_filter()
    except (ValueError, FileNotFoundError) as e:
        _fail(e)

    logger.info(f"{len(genomes)} genomes found in {genome_dir}.")
    try:
        with _open_output(output) as fh:
            reporter = report_type.create(fh, classifier, verify_file)
            summary = find_couplings(genomes, config, reporter)
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        _fail(e)

    if output is not None:
        table = Table(title="Coupling Summary")
        table.add_column("Measure", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Genomes processed", str(summary.genomes_processed))
        table.add_row("Genomes skipped", str(summary.genomes_skipped))
        table.add_row("Distinct pairs", str(summary.distinct_pairs))
        table.add_row("Pairs output", str(summary.pairs_output))
        table.add_row("Pairs skipped", str(summary.pairs_skipped))
        table.add_row("Class instances filtered", str(summary.classes_filtered))
        table.add_row("Mean group size", f"{summary.mean_group_size:.2f}")
        table.add_row("Max group size", str(summary.max_group_size))
        console.print(table)


@app.command()
def prepare(
    couplings: Path = typer.Argument(..., help="Scored coupling report"),
    genome_dir: Path = typer.Argument(..., help="Directory of GTO files"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory (default: the genome directory)"),
    max_gap: int = typer.Option(5000, "--gap", "-d", help="Maximum distance between neighboring features"),
    classifier_type: ClassifierType = typer.Option(ClassifierType.PGFAMS, "--method", "-t", help="Feature classification scheme"),
    neighbor_type: NeighborType = typer.Option(NeighborType.CLOSE, "--finder", help="Neighbor-finding policy"),
    family_file: Optional[Path] = typer.Option(None, "--families", help="Family definition or family name table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Mark the couplings of a scored report on a genome directory."""
    _configure_logging(verbose)
    try:
        config = CouplingConfig(
            max_gap=max_gap,
            classifier_type=classifier_type,
            neighbor_type=neighbor_type,
            family_file=family_file,
        )
        config.validate()
        genomes = GenomeDirectory(genome_dir)
        preparer = CouplingPreparer(config.build_classifier(), config.build_finder(), couplings)
    except (ValueError, FileNotFoundError) as e:
        _fail(e)

    total = preparer.mark_genomes(genomes)
    genome_path, couples_path = preparer.write_tables(out if out is not None else genome_dir)
    console.print(f"[green]{total} couplings marked.[/green] Tables written to {genome_path} and {couples_path}.")


@app.command()
def methods():
    """List the available strategies."""
    table = Table(title="Coupling Strategies")
    table.add_column("Option", style="cyan")
    table.add_column("Description")
    table.add_column("Values", style="green")

    for option, enum_type in (
        ("--method", ClassifierType),
        ("--finder", NeighborType),
        ("--filter", ClassFilterType),
        ("--pair-filter", PairFilterType),
        ("--format", ReportType),
    ):
        values = ", ".join(member.value for member in enum_type)
        table.add_row(option, (enum_type.__doc__ or "").strip(), values)

    console.print(table)


@app.command()
def version():
    """Show genecouple version."""
    from genecouple import __version__
    console.print(f"genecouple version {__version__}")


if __name__ == "__main__":
    app()
