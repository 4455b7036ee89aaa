"""Configuration loading and validation for income statement generation."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import yaml

from rental_finance.models.currency import Currency
from rental_finance.utils.logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


DEFAULT_TOLERANCE = Decimal("1")
DEFAULT_INTERNET_KEYWORD = "Internet"
DEFAULT_ELECTRICITY_KEYWORD = "ENEO"
DEFAULT_WATER_KEYWORD = "camwater"


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    """Return a mapping section of a settings document, or an empty dict."""
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


@dataclass
class UtilityKeywords:
    """Vendor/description keywords splitting the utilities category.

    Attributes:
        internet: Marks the internet share, reported as a fixed cost.
        electricity: Marks electricity bills.
        water: Marks water bills.
    """

    internet: str = DEFAULT_INTERNET_KEYWORD
    electricity: str = DEFAULT_ELECTRICITY_KEYWORD
    water: str = DEFAULT_WATER_KEYWORD

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "UtilityKeywords":
        """Create from dictionary."""
        keywords = cls(
            internet=str(data.get("internet", DEFAULT_INTERNET_KEYWORD)),
            electricity=str(data.get("electricity", DEFAULT_ELECTRICITY_KEYWORD)),
            water=str(data.get("water", DEFAULT_WATER_KEYWORD)),
        )
        for name in ("internet", "electricity", "water"):
            if not getattr(keywords, name).strip():
                raise ConfigError(f"Utility keyword '{name}' must not be empty")
        return keywords


@dataclass
class ReportConfig:
    """Settings for statement computation.

    Attributes:
        currency: Currency the statement is computed in.
        reconciliation_tolerance: Largest gap between categorized and
            authoritative expense totals left unadjusted.
        label_locale: Language of month labels ("en" or "fr").
        utility_keywords: Keywords splitting the utilities category.
    """

    currency: Currency = Currency.XAF
    reconciliation_tolerance: Decimal = field(default_factory=lambda: DEFAULT_TOLERANCE)
    label_locale: str = "en"
    utility_keywords: UtilityKeywords = field(default_factory=UtilityKeywords)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ReportConfig":
        """Create from dictionary."""
        try:
            currency = Currency.parse(str(data.get("currency", "XAF")))
        except ValueError as e:
            raise ConfigError(f"Unsupported currency: {data.get('currency')}") from e

        try:
            tolerance = Decimal(str(data.get("reconciliation_tolerance", DEFAULT_TOLERANCE)))
        except InvalidOperation as e:
            raise ConfigError(
                f"Invalid reconciliation_tolerance: {data.get('reconciliation_tolerance')}"
            ) from e
        if not tolerance.is_finite() or tolerance < 0:
            raise ConfigError(f"reconciliation_tolerance must be non-negative, got {tolerance}")

        return cls(
            currency=currency,
            reconciliation_tolerance=tolerance,
            label_locale=str(data.get("label_locale", "en")),
            utility_keywords=UtilityKeywords.from_dict(_section(data, "utility_keywords")),
        )


@dataclass
class OutputConfig:
    """Configuration for exported statements.

    Attributes:
        date_format: Date format for output.
        xaf_rounding: XAF amounts are displayed rounded to this step.
        decimal_places: Decimal places for EUR amounts.
    """

    date_format: str = "%d/%m/%Y"
    xaf_rounding: int = 500
    decimal_places: int = 2

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "OutputConfig":
        """Create from dictionary."""
        return cls(
            date_format=str(data.get("date_format", "%d/%m/%Y")),
            xaf_rounding=int(data.get("xaf_rounding", 500)),  # type: ignore[call-overload]
            decimal_places=int(data.get("decimal_places", 2)),  # type: ignore[call-overload]
        )


@dataclass
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Path to log file.
    """

    level: str = "INFO"
    file: str = "rental_finance.log"

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LoggingConfig":
        """Create from dictionary."""
        return cls(
            level=str(data.get("level", "INFO")),
            file=str(data.get("file", "rental_finance.log")),
        )


@dataclass
class Config:
    """Main configuration container."""

    report: ReportConfig = field(default_factory=ReportConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ConfigError: If the document is not a mapping.
        yaml.YAMLError: If file is invalid YAML.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if not content:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(content).__name__}")
    return content


def load_settings(path: Path) -> Config:
    """Load settings from settings.yaml.

    Missing sections keep their defaults.
    """
    data = load_yaml_file(path)

    try:
        return Config(
            report=ReportConfig.from_dict(_section(data, "report")),
            output=OutputConfig.from_dict(_section(data, "output")),
            logging=LoggingConfig.from_dict(_section(data, "logging")),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def load_config(
    settings_path: Optional[Path] = None,
    config_dir: Optional[Path] = None,
) -> Config:
    """Load configuration, falling back to defaults when no settings file exists.

    Args:
        settings_path: Path to settings.yaml (or None to use default).
        config_dir: Base config directory (default: ./config).

    Returns:
        Complete Config object.
    """
    if config_dir is None:
        config_dir = Path("config")
    if settings_path is None:
        settings_path = config_dir / "settings.yaml"

    if not settings_path.exists():
        logger.warning(f"Settings file not found: {settings_path}, using defaults")
        return Config()

    config = load_settings(settings_path)
    logger.info(f"Loaded settings from {settings_path}")
    return config
