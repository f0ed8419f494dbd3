"""Reading CSV text into rows of cells and writing rows back out as text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .params import LineReaderParams, SeparatorParams

__all__ = [
    "Encoding",
    "ParseResult",
    "decode_bytes",
    "encode_text",
    "trim",
    "unquote",
    "parse_text",
    "format_rows",
]

_UTF8_BOM = b"\xef\xbb\xbf"
_UTF16_LE_BOM = b"\xff\xfe"
_UTF16_BE_BOM = b"\xfe\xff"

# The characters that the C locale treats as white space.
_WHITESPACE = " \t\n\v\f\r"


class Encoding(Enum):
    """The byte encoding a document was read in, kept so it can be written back."""

    UTF8 = "utf-8"
    UTF8_BOM = "utf-8-sig"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"


@dataclass
class ParseResult:
    """Rows of cells read from CSV text, and whether lines ended with CR/LF."""

    rows: list[list[str]] = field(default_factory=list)
    has_cr: bool = False


def decode_bytes(data: bytes) -> tuple[str, Encoding]:
    """Decode raw CSV bytes, detecting and removing a byte order mark.

    A UTF-16 byte order mark selects UTF-16 in the marked byte order; a UTF-8
    byte order mark is skipped. Bytes that are not valid UTF-8 are kept as
    surrogate escapes so that they survive being written back unchanged.
    """
    if data[:2] == _UTF16_LE_BOM:
        return data[2:].decode("utf-16-le"), Encoding.UTF16_LE
    if data[:2] == _UTF16_BE_BOM:
        return data[2:].decode("utf-16-be"), Encoding.UTF16_BE
    if data[:3] == _UTF8_BOM:
        return data[3:].decode("utf-8", "surrogateescape"), Encoding.UTF8_BOM
    return data.decode("utf-8", "surrogateescape"), Encoding.UTF8


def encode_text(text: str, encoding: Encoding = Encoding.UTF8) -> bytes:
    """Encode CSV text, adding the byte order mark that ``encoding`` calls for."""
    if encoding is Encoding.UTF16_LE:
        return _UTF16_LE_BOM + text.encode("utf-16-le")
    if encoding is Encoding.UTF16_BE:
        return _UTF16_BE_BOM + text.encode("utf-16-be")
    body = text.encode("utf-8", "surrogateescape")
    if encoding is Encoding.UTF8_BOM:
        return _UTF8_BOM + body
    return body


def trim(text: str, separator_params: SeparatorParams) -> str:
    """Strip leading and trailing white space when trimming is enabled."""
    if separator_params.trim:
        return text.strip(_WHITESPACE)
    return text


def unquote(text: str, separator_params: SeparatorParams) -> str:
    """Remove enclosing quotes and unescape doubled quotes when auto-quoting."""
    quote = separator_params.quote_char
    if (
        separator_params.auto_quote
        and len(text) >= 2
        and text[0] == quote
        and text[-1] == quote
    ):
        return text[1:-1].replace(quote + quote, quote)
    return text


def _opens_or_closes_quote(cell: list[str], separator_params: SeparatorParams) -> bool:
    quote = separator_params.quote_char
    if not cell or cell[0] == quote:
        return True
    if separator_params.trim:
        content = "".join(cell)
        first = content.find(quote)
        prefix = content if first < 0 else content[:first]
        return all(ch in _WHITESPACE for ch in prefix)
    return False


def parse_text(
    text: str,
    separator_params: SeparatorParams | None = None,
    line_reader_params: LineReaderParams | None = None,
) -> ParseResult:
    """Split CSV text into rows of cells.

    Cells are trimmed and unquoted according to ``separator_params``; comment
    and empty lines are skipped according to ``line_reader_params``. Line
    endings are taken to be CR/LF when more than half the line feeds had a
    carriage return.
    """
    sep = separator_params if separator_params is not None else SeparatorParams()
    lines = line_reader_params if line_reader_params is not None else LineReaderParams()

    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    quoted = False
    cr = 0
    lf = 0

    def finish_cell() -> None:
        row.append(unquote(trim("".join(cell), sep), sep))
        cell.clear()

    def finish_row() -> None:
        finish_cell()
        first = row[0]
        is_comment = lines.skip_comment_lines and first[:1] == lines.comment_prefix
        if not is_comment:
            rows.append(list(row))
        row.clear()

    for ch in text:
        if ch == sep.quote_char:
            if _opens_or_closes_quote(cell, sep):
                quoted = not quoted
            cell.append(ch)
        elif ch == sep.separator:
            if quoted:
                cell.append(ch)
            else:
                finish_cell()
        elif ch == "\r":
            if sep.quoted_linebreaks and quoted:
                cell.append(ch)
            else:
                cr += 1
        elif ch == "\n":
            if sep.quoted_linebreaks and quoted:
                cell.append(ch)
            else:
                lf += 1
                if lines.skip_empty_lines and not row and not cell:
                    continue
                finish_row()
                quoted = False
        else:
            cell.append(ch)

    if row or cell:
        finish_row()

    return ParseResult(rows=rows, has_cr=cr > lf // 2)


def _format_cell(cell: str, separator_params: SeparatorParams) -> str:
    if separator_params.auto_quote and (
        separator_params.separator in cell or " " in cell or "\n" in cell
    ):
        quote = separator_params.quote_char
        return quote + cell.replace(quote, quote + quote) + quote
    return cell


def format_rows(rows: list[list[str]], separator_params: SeparatorParams | None = None) -> str:
    """Join rows of cells into CSV text, quoting cells where needed."""
    sep = separator_params if separator_params is not None else SeparatorParams()
    line_end = "\r\n" if sep.has_cr else "\n"
    return "".join(
        sep.separator.join(_format_cell(cell, sep) for cell in row) + line_end
        for row in rows
    )