"""
Stat parsing for mod listings.
Turns a label/value pair such as ("Critical Chance", "+8.5%") into a Stat.
"""
import re

from modrank.errors import ParseError
from modrank.models.mod import PERCENT_MARKER, Stat
from modrank.utils.logger import LayerLogger

logger = LayerLogger("stat_parser")

# ASCII digits only: no exponents, underscores or other numerals
DECIMAL_PATTERN = re.compile(r"[-+]?[0-9]+(\.[0-9]+)?")


def parse_stat(label: str, raw_value: str) -> Stat:
    """
    Parse a raw stat value.

    A leading "+" is dropped. A trailing "%" is dropped and marks the stat
    type, so percent and flat values of the same label are separate
    populations.

    Raises:
        ParseError: If the remaining text is not a plain decimal number
    """
    stat_type = label.strip()
    value_str = raw_value.strip()
    if value_str.startswith("+"):
        value_str = value_str[1:]

    if value_str.endswith("%"):
        stat_type = f"{stat_type}{PERCENT_MARKER}"
        value_str = value_str[:-1]

    if not DECIMAL_PATTERN.fullmatch(value_str):
        raise ParseError(label, raw_value)

    return Stat(type=stat_type, value=float(value_str))


def parse_stat_lenient(label: str, raw_value: str) -> Stat:
    """
    Parse a stat, substituting the zero-value Stat on failure.

    The zero value has an empty type. It never lands in the population of a
    real stat type and the aggregator gives it no range, so it scores 0.
    """
    try:
        return parse_stat(label, raw_value)
    except ParseError as e:
        logger.log_recovered(
            str(e),
            error_type="parse_error",
            fallback="zero_value_stat",
            label=label,
            raw_value=raw_value,
        )
        return Stat(type="", value=0.0)
