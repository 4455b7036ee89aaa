"""Command-line interface for income statement generation."""

import argparse
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from rental_finance import __version__
from rental_finance.config import Config, ConfigError, load_config
from rental_finance.models.booking import Booking
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import ComparisonType, PeriodType
from rental_finance.models.property import Property
from rental_finance.models.report import IncomeStatement
from rental_finance.utils.logging_config import DEFAULT_LOG_FILE, get_logger, setup_logging

# Load environment variables from .env file (if it exists)
load_dotenv()

console = Console()
logger = get_logger(__name__)

SUPPORTED_OUTPUTS = (".csv", ".xlsx")


def parse_period_list(raw: str) -> list[int]:
    """Parse a 1-based period list such as "1,6,12" into zero-based indices.

    Raises:
        argparse.ArgumentTypeError: If an entry is not a positive integer.
    """
    indices = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            number = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid period number: '{part}'") from None
        if number < 1:
            raise argparse.ArgumentTypeError(f"Period numbers start at 1, got {number}")
        indices.append(number - 1)
    return indices


def parse_as_of(raw: str) -> date:
    """Parse an ISO date (YYYY-MM-DD) given to --as-of.

    Raises:
        argparse.ArgumentTypeError: If the value is not an ISO date.
    """
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: '{raw}', expected YYYY-MM-DD") from None


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="rental-finance",
        description="Build a period-bucketed income statement from booking and expense exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --bookings bookings.csv --expenses expenses.csv --year 2024
  %(prog)s -b bookings.csv -e expenses.csv -p properties.csv --period month --periods 1,6,12
  %(prog)s -b bookings.csv -e expenses.csv --compare lastYear -o statement.xlsx
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Input files
    parser.add_argument(
        "-b", "--bookings",
        type=Path,
        default=None,
        help="CSV export of bookings",
    )
    parser.add_argument(
        "-e", "--expenses",
        type=Path,
        default=None,
        help="CSV export of expenses",
    )
    parser.add_argument(
        "-p", "--properties",
        type=Path,
        default=None,
        help="CSV export of properties (occupancy assumes one unit without it)",
    )

    # Report selection
    parser.add_argument(
        "--year",
        type=int,
        default=date.today().year,
        help="Report year (default: current year)",
    )
    parser.add_argument(
        "--period",
        choices=[t.value for t in PeriodType],
        default=PeriodType.QUARTER.value,
        help="Period granularity (default: quarter)",
    )
    parser.add_argument(
        "--periods",
        type=parse_period_list,
        default=None,
        metavar="N[,N...]",
        help="Only these periods, numbered from 1 (e.g. 1,6,12 for Jan, Jun, Dec)",
    )
    parser.add_argument(
        "--compare",
        choices=[t.value for t in ComparisonType],
        default=ComparisonType.NONE.value,
        help="Add previous-year comparison columns",
    )
    parser.add_argument(
        "--property",
        dest="property_id",
        default=None,
        help="Restrict the report to one property ID",
    )
    parser.add_argument(
        "--as-of",
        type=parse_as_of,
        default=None,
        help="End date of the year-to-date summary (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--currency",
        choices=[c.value for c in Currency],
        default=None,
        help="Reporting currency (default: from settings, XAF)",
    )

    # Output and configuration
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the statement to a .csv or .xlsx file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings.yaml (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path("config"),
        help="Base config directory (default: ./config)",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Check configuration and input files without generating a report",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )

    return parser


def get_log_level(verbosity: int) -> str:
    """Convert verbosity count to log level.

    Args:
        verbosity: Number of -v flags.

    Returns:
        Log level string.
    """
    if verbosity >= 2:
        return "DEBUG"
    elif verbosity >= 1:
        return "INFO"
    else:
        return "WARNING"


def validate_output_path(path: Path, base_dir: Path | None = None) -> Path:
    """Validate that output path is within allowed directory.

    Args:
        path: The path to validate.
        base_dir: Base directory to constrain paths within (default: cwd).

    Returns:
        The resolved, validated path.

    Raises:
        ValueError: If the path escapes the allowed directory or has an
            unsupported extension.
    """
    if base_dir is None:
        base_dir = Path.cwd()

    resolved_base = base_dir.resolve()
    resolved_path = (base_dir / path).resolve()

    try:
        resolved_path.relative_to(resolved_base)
    except ValueError:
        raise ValueError(
            f"Invalid path: '{path}' escapes the allowed directory. "
            f"Paths must be within '{resolved_base}'"
        ) from None

    if resolved_path.suffix.lower() not in SUPPORTED_OUTPUTS:
        raise ValueError(
            f"Unsupported output format '{resolved_path.suffix}', use one of {', '.join(SUPPORTED_OUTPUTS)}"
        )
    return resolved_path


def create_progress() -> Progress:
    """Create a progress display.

    Returns:
        Rich Progress instance.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        console=console,
    )


def load_inputs(args: argparse.Namespace) -> tuple[list[Booking], list[Expense], list[Property]]:
    """Load the input exports named on the command line.

    Raises:
        ParseError: If a file is missing or unusable.
    """
    from rental_finance.parsers import load_bookings, load_expenses, load_properties

    bookings: list[Booking] = []
    expenses: list[Expense] = []
    properties: list[Property] = []

    files = [
        (path, loader)
        for path, loader in (
            (args.bookings, load_bookings),
            (args.expenses, load_expenses),
            (args.properties, load_properties),
        )
        if path is not None
    ]

    with create_progress() as progress:
        task = progress.add_task("Loading exports...", total=len(files))
        for path, loader in files:
            progress.console.print(f"  Reading {path.name}")
            records = loader(path)
            if loader is load_bookings:
                bookings = records
            elif loader is load_expenses:
                expenses = records
            else:
                properties = records
            progress.update(task, advance=1)

    return bookings, expenses, properties


def validate_inputs(args: argparse.Namespace) -> int:
    """Validate configuration and input files.

    Args:
        args: Parsed command-line arguments.

    Returns:
        0 if valid, 1 if errors found.
    """
    from rental_finance.parsers import ParseError

    console.print("[bold]Validating configuration and inputs...[/bold]\n")

    errors: list[str] = []
    warnings: list[str] = []

    settings_path = args.config or (args.config_dir / "settings.yaml")
    if settings_path.exists():
        console.print(f"[green]✓[/green] Settings: {settings_path}")
    else:
        warnings.append(f"Settings file not found: {settings_path}")

    try:
        config = load_config(settings_path=args.config, config_dir=args.config_dir)
        console.print(
            f"[green]✓[/green] Currency {config.report.currency.value}, "
            f"reconciliation tolerance {config.report.reconciliation_tolerance}"
        )
    except (ConfigError, OSError) as e:
        errors.append(f"Failed to load configuration: {e}")

    if args.bookings is None and args.expenses is None:
        warnings.append("No --bookings or --expenses given, the report would be empty")

    try:
        bookings, expenses, properties = load_inputs(args)
        console.print(
            f"[green]✓[/green] {len(bookings)} bookings, {len(expenses)} expenses, "
            f"{len(properties)} properties"
        )
    except ParseError as e:
        errors.append(str(e))

    if warnings:
        console.print("\n[yellow]Warnings:[/yellow]")
        for w in warnings:
            console.print(f"  - {w}")

    if errors:
        console.print("\n[red]Errors:[/red]")
        for err in errors:
            console.print(f"  - {err}")
        return 1

    console.print("\n[green]Inputs are valid.[/green]")
    return 0


def display_statement(statement: IncomeStatement, config: Config) -> None:
    """Print the statement as a table."""
    from rental_finance.output.layout import (
        RowKind,
        build_rows,
        format_value,
        row_cells,
        statement_header,
        statement_subtitle,
        statement_title,
    )

    date_format = config.output.date_format
    table = Table(title=statement_title(statement), caption=statement_subtitle(statement, date_format))
    for i, heading in enumerate(statement_header(statement)):
        table.add_column(heading, justify="left" if i == 0 else "right")

    for row in build_rows(statement, date_format):
        if row.kind == RowKind.GROUP:
            table.add_row(f"[bold dim]{row.label}[/bold dim]")
            continue
        label = f"  {row.label}" if row.kind == RowKind.CHILD else row.label
        cells = []
        for value in row_cells(row, statement):
            text = format_value(value, row.value_format, statement.currency, config.output)
            if row.kind == RowKind.RESULT and value is not None and value < 0:
                text = f"[red]{text}[/red]"
            cells.append(text)
        style = "bold" if row.kind in (RowKind.TOTAL, RowKind.RESULT) else None
        table.add_row(label, *cells, style=style)

    console.print(table)


def write_output(path: Path, statement: IncomeStatement, config: Config) -> None:
    """Export the statement, choosing the format from the extension."""
    from rental_finance.output import CSVExporter, ExcelWriter

    with create_progress() as progress:
        if path.suffix.lower() == ".csv":
            task = progress.add_task("Writing CSV...", total=1)
            CSVExporter(config).export(path, statement)
        else:
            task = progress.add_task("Writing Excel output...", total=1)
            ExcelWriter(config).write(path, statement)
        progress.update(task, advance=1)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = get_log_level(args.verbose)
    setup_logging(level=log_level, console_output=args.verbose > 0)

    if args.validate_only:
        return validate_inputs(args)

    if args.bookings is None and args.expenses is None:
        console.print("[red]Error: --bookings or --expenses is required[/red]")
        parser.print_usage()
        return 1

    try:
        config = load_config(settings_path=args.config, config_dir=args.config_dir)
    except (ConfigError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("Run with --validate-only to check configuration files.")
        return 1

    if config.logging.file != DEFAULT_LOG_FILE:
        setup_logging(level=log_level, log_file=config.logging.file, console_output=args.verbose > 0)

    output_path = None
    if args.output is not None:
        try:
            output_path = validate_output_path(args.output)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            return 1

    from rental_finance.parsers import ParseError
    from rental_finance.processing import generate_income_statement

    try:
        bookings, expenses, properties = load_inputs(args)
    except ParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"[bold]Rental Finance v{__version__}[/bold]\n")
    console.print(
        f"{len(bookings)} bookings, {len(expenses)} expenses, {len(properties)} properties"
    )

    with console.status("[bold green]Computing income statement..."):
        statement = generate_income_statement(
            bookings,
            expenses,
            properties,
            args.year,
            period_type=args.period,
            comparison_type=args.compare,
            property_id=args.property_id,
            selected_period_indices=args.periods,
            as_of=args.as_of,
            settings=config,
            currency=args.currency,
        )

    display_statement(statement, config)

    if output_path is not None:
        write_output(output_path, statement, config)
        console.print(f"\n[green]Output written to {output_path}[/green]")

    return 0
