"""Currencies a statement can be computed in."""

from enum import Enum


class Currency(Enum):
    """Reporting currency.

    Every booking and expense carries its amount in both currencies; the
    statement picks one of them.
    """

    EUR = "EUR"
    XAF = "XAF"

    @classmethod
    def parse(cls, value: "str | Currency") -> "Currency":
        """Convert a currency code, accepting FCFA/CFA as aliases of XAF.

        Raises:
            ValueError: If the code is not a supported currency.
        """
        if isinstance(value, cls):
            return value
        code = str(value).strip().upper()
        if code in ("FCFA", "CFA"):
            return cls.XAF
        return cls(code)
