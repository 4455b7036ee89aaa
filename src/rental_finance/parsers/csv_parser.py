"""CSV loaders for booking, expense and property exports."""

import csv
import re
from pathlib import Path
from typing import Callable, Optional

from rental_finance.models.booking import Booking, BookingStatus
from rental_finance.models.expense import Expense
from rental_finance.models.property import Property
from rental_finance.parsers.base import BaseParser, ParseError, RecordT
from rental_finance.utils.decimal_utils import parse_amount, safe_decimal
from rental_finance.utils.logging_config import get_logger

logger = get_logger(__name__)

# Maximum CSV file size to prevent memory exhaustion (50 MB)
MAX_CSV_FILE_SIZE = 50 * 1024 * 1024


def normalize_header(header: str) -> str:
    """Normalize a column header: "Check-In", "checkIn" and "check_in" are equal."""
    header = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", header.strip())
    return re.sub(r"[^a-z0-9]+", "_", header.lower()).strip("_")


BOOKING_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "booking_id", "booking_number"),
    "property_id": ("property_id", "property"),
    "check_in": ("check_in", "arrival", "start_date"),
    "check_out": ("check_out", "departure", "end_date"),
    "total_price_eur": ("total_price_eur", "price_eur", "total_eur"),
    "total_price_fcfa": ("total_price_fcfa", "total_price_xaf", "price_fcfa", "total_fcfa"),
    "status": ("status",),
    "guest_name": ("guest_name", "guest", "customer_name"),
}

EXPENSE_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "expense_id"),
    "date": ("date", "expense_date"),
    "category": ("category",),
    "amount_eur": ("amount_eur",),
    "amount_fcfa": ("amount_fcfa", "amount_xaf", "amount"),
    "vendor": ("vendor", "supplier"),
    "description": ("description", "notes"),
    "property_id": ("property_id", "property"),
}

PROPERTY_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "property_id"),
    "name": ("name",),
    "status": ("status",),
    "units": ("units", "unit_count"),
}


class RecordCSVParser(BaseParser[RecordT]):
    """Reads a CSV export into records, matching headers through aliases.

    Attributes:
        aliases: Record field to accepted (normalized) header names.
        required: Fields whose column must be present.
        amount_fields: Fields parsed as money; unparseable values become 0.
    """

    aliases: dict[str, tuple[str, ...]] = {}
    required: tuple[str, ...] = ()
    amount_fields: tuple[str, ...] = ()

    def __init__(self, factory: Callable[[dict[str, object]], RecordT]):
        self.factory = factory

    def parse(self, file_path: Path) -> list[RecordT]:
        self.validate_file(file_path)
        if file_path.stat().st_size > MAX_CSV_FILE_SIZE:
            raise ParseError(f"File too large: {file_path}", file_path)

        try:
            with open(file_path, encoding="utf-8-sig", newline="") as f:
                sample = f.read(4096)
                f.seek(0)
                delimiter = self._detect_delimiter(sample)
                reader = csv.DictReader(f, delimiter=delimiter)
                columns = self._map_columns(reader.fieldnames or [], file_path)
                records = [
                    self.factory(self._row_to_data(row, columns))
                    for row in reader
                    if any((value or "").strip() for value in row.values() if isinstance(value, str))
                ]
        except UnicodeDecodeError as e:
            raise ParseError(f"Cannot decode {file_path}: {e}", file_path) from e
        except csv.Error as e:
            raise ParseError(f"Malformed CSV {file_path}: {e}", file_path) from e

        logger.info(f"{self.name}: loaded {len(records)} records from {file_path.name}")
        return records

    @staticmethod
    def _detect_delimiter(sample: str) -> str:
        try:
            return csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
        except csv.Error:
            return ","

    def _map_columns(self, fieldnames: list[str], file_path: Path) -> dict[str, str]:
        """Map record fields to the actual column names of the file."""
        by_normalized = {normalize_header(name): name for name in fieldnames if name}
        columns: dict[str, str] = {}
        for field_name, names in self.aliases.items():
            for alias in names:
                if alias in by_normalized:
                    columns[field_name] = by_normalized[alias]
                    break

        missing = [f for f in self.required if f not in columns]
        if missing:
            raise ParseError(
                f"Missing required column(s) {', '.join(missing)} in {file_path.name}",
                file_path,
            )
        return columns

    def _row_to_data(self, row: dict[str, Optional[str]], columns: dict[str, str]) -> dict[str, object]:
        data: dict[str, object] = {}
        for field_name, column in columns.items():
            value = (row.get(column) or "").strip()
            if field_name in self.amount_fields:
                data[field_name] = self._amount(value)
            else:
                data[field_name] = value
        return data

    def _amount(self, value: str) -> object:
        if not value:
            return safe_decimal(None)
        try:
            return parse_amount(value)
        except ValueError:
            logger.debug(f"{self.name}: unparseable amount '{value}', using 0")
            return safe_decimal(None)


class BookingCSVParser(RecordCSVParser[Booking]):
    aliases = BOOKING_ALIASES
    required = ("check_in", "check_out")
    amount_fields = ("total_price_eur", "total_price_fcfa")

    def __init__(self) -> None:
        super().__init__(Booking.from_dict)


class ExpenseCSVParser(RecordCSVParser[Expense]):
    aliases = EXPENSE_ALIASES
    required = ("date", "category")
    amount_fields = ("amount_eur", "amount_fcfa")

    def __init__(self) -> None:
        super().__init__(Expense.from_dict)


class PropertyCSVParser(RecordCSVParser[Property]):
    aliases = PROPERTY_ALIASES
    required = ("id",)

    def __init__(self) -> None:
        super().__init__(Property.from_dict)


def load_bookings(path: Path) -> list[Booking]:
    """Load bookings from a CSV export.

    Rows with unparseable dates are kept with the date missing.
    """
    bookings = BookingCSVParser().parse(path)
    undated = sum(1 for b in bookings if b.check_in is None or b.check_out is None)
    if undated:
        logger.warning(f"{undated} booking(s) in {path.name} have missing or invalid dates")
    cancelled = sum(1 for b in bookings if b.status == BookingStatus.CANCELLED)
    if cancelled:
        logger.debug(f"{cancelled} cancelled booking(s) in {path.name} will not count")
    return bookings


def load_expenses(path: Path) -> list[Expense]:
    """Load expenses from a CSV export."""
    expenses = ExpenseCSVParser().parse(path)
    undated = sum(1 for e in expenses if e.date is None)
    if undated:
        logger.warning(f"{undated} expense(s) in {path.name} have missing or invalid dates")
    return expenses


def load_properties(path: Path) -> list[Property]:
    """Load properties from a CSV export."""
    return PropertyCSVParser().parse(path)
