"""Sanitization for exported spreadsheet cells."""

# Leading characters that make spreadsheet applications evaluate a cell
# as a formula or DDE command
_FORMULA_CHARS = ("=", "+", "-", "@", "\t", "\r", "\n", "|")


def sanitize_cell(value: object) -> object:
    """Neutralize text cells that would be evaluated as a formula.

    Text starting with a formula character is prefixed with a single quote.
    Numbers pass through unchanged so negative amounts stay numeric.

    Args:
        value: Cell value (text, number or None).

    Returns:
        The value, quoted if it is unsafe text.
    """
    if not isinstance(value, str) or not value:
        return value
    if value.startswith(_FORMULA_CHARS):
        return "'" + value
    return value
