"""Parameter sets that control how a CSV document is read, labelled and converted."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

PLATFORM_HAS_CR = sys.platform == "win32"
"""Whether newly created documents end lines with CR/LF on this platform."""


@dataclass(slots=True)
class LabelParams:
    """Which row holds column labels and which column holds row labels.

    ``column_name_index`` is the zero-based row index of the column labels;
    -1 means there are no column labels and every row is data.
    ``row_name_index`` is the zero-based column index of the row labels;
    -1 means there are no row labels and every column is data.
    """

    column_name_index: int = 0
    row_name_index: int = -1

    def __post_init__(self) -> None:
        if self.column_name_index < -1:
            raise ValueError(
                f"invalid column name index {self.column_name_index} < -1"
            )
        if self.row_name_index < -1:
            raise ValueError(f"invalid row name index {self.row_name_index} < -1")


@dataclass(slots=True)
class SeparatorParams:
    """How fields are separated, quoted and trimmed.

    ``has_cr`` decides the line ending of documents that were not read from
    existing data; a document that is read detects it from its content.
    """

    separator: str = ","
    trim: bool = False
    has_cr: bool = PLATFORM_HAS_CR
    quoted_linebreaks: bool = False
    auto_quote: bool = True
    quote_char: str = '"'


@dataclass(slots=True)
class ConverterParams:
    """How text that is not a valid number is handled during conversion.

    With ``has_default_converter`` unset, an invalid number raises an error;
    otherwise ``default_float`` or ``default_integer`` is returned instead.
    ``numeric_locale`` selects whether the current LC_NUMERIC locale is
    honoured when parsing floating-point numbers.
    """

    has_default_converter: bool = False
    default_float: float = math.nan
    default_integer: int = 0
    numeric_locale: bool = True


@dataclass(slots=True)
class LineReaderParams:
    """How comment lines and empty lines are treated while reading."""

    skip_comment_lines: bool = False
    comment_prefix: str = "#"
    skip_empty_lines: bool = False