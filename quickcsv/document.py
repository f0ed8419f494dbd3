"""A CSV document with typed access to its cells, rows and columns."""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import IO, Any, Union

from .converter import Converter, KindLike, ValueKind
from .grid import Grid
from .params import ConverterParams, LabelParams, LineReaderParams, SeparatorParams
from .parser import Encoding, decode_bytes, encode_text, format_rows, parse_text

__all__ = ["Document"]

Source = Union[str, "os.PathLike[str]", IO[Any]]
CellConverter = Callable[[str], Any]


def _resize(row: list[str], size: int) -> None:
    del row[size:]
    row.extend([""] * (size - len(row)))


class Document(Grid):
    """A CSV document read from a file or stream, or built up from scratch.

    Rows and columns are addressed either by zero-based data index or by
    label. Values are converted according to a ``kind``, which is a
    :class:`ValueKind` or one of ``str``, ``int`` and ``float``; getters also
    accept a ``converter`` callable that turns cell text into a value.
    """

    def __init__(
        self,
        source: Source | None = None,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        super().__init__(label_params)
        self.separator_params = replace(separator_params or SeparatorParams())
        self.converter_params = converter_params or ConverterParams()
        self.line_reader_params = line_reader_params or LineReaderParams()
        self.path = ""
        self._encoding = Encoding.UTF8
        if source is not None and source != "":
            self._read(source)

    # Reading and writing.

    def load(
        self,
        source: Source,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        """Replace the document's content with CSV data from a path or stream."""
        self.label_params = label_params or LabelParams()
        self.separator_params = replace(separator_params or SeparatorParams())
        self.converter_params = converter_params or ConverterParams()
        self.line_reader_params = line_reader_params or LineReaderParams()
        self._read(source)

    def save(self, target: Source | None = None) -> None:
        """Write the document to a path or stream.

        Without a target the path the document was read from or last saved
        to is used; a file keeps the byte order mark it was read with.
        """
        text = format_rows(self.rows, self.separator_params)
        if target is not None and not isinstance(target, (str, os.PathLike)):
            if isinstance(target, io.TextIOBase):
                target.write(text)
            else:
                target.write(encode_text(text, Encoding.UTF8))
            return
        if target is not None and target != "":
            self.path = os.fspath(target)
        if not self.path:
            raise ValueError("no path to save the document to")
        with open(self.path, "wb") as handle:
            handle.write(encode_text(text, self._encoding))

    def clear(self) -> None:
        """Remove all data, labels and the remembered encoding."""
        super().clear()
        self._encoding = Encoding.UTF8

    def _read(self, source: Source) -> None:
        self.clear()
        if isinstance(source, (str, os.PathLike)):
            self.path = os.fspath(source)
            with open(self.path, "rb") as handle:
                data: Any = handle.read()
        else:
            self.path = ""
            if getattr(source, "seekable", lambda: False)():
                source.seek(0)
            data = source.read()
        if isinstance(data, str):
            if data.startswith("\ufeff"):
                text, encoding = data[1:], Encoding.UTF8_BOM
            else:
                text, encoding = data, Encoding.UTF8
        else:
            text, encoding = decode_bytes(bytes(data))
        self._encoding = encoding
        result = parse_text(text, self.separator_params, self.line_reader_params)
        self.separator_params.has_cr = result.has_cr
        self.rows = result.rows

    # Conversion helpers.

    def _reader(self, kind: KindLike, converter: CellConverter | None) -> CellConverter:
        if converter is not None:
            return converter
        conv = Converter(self.converter_params)
        return lambda text: conv.to_value(text, kind)

    def _to_text(self, value: Any, kind: KindLike | None) -> str:
        return Converter(self.converter_params).to_str(
            value, kind if kind is not None else type(value)
        )

    # Columns.

    def get_column(
        self,
        column: int | str,
        kind: KindLike = ValueKind.STR,
        converter: CellConverter | None = None,
    ) -> list[Any]:
        """Return the values of a data column."""
        index = self._resolve_column(column)
        data_column = self._data_column_index(index)
        header = self.label_params.column_name_index
        read = self._reader(kind, converter)
        values = []
        for position, row in enumerate(self.rows):
            if position <= header:
                continue
            if data_column >= len(row):
                raise IndexError(
                    f"requested column index {index} >= "
                    f"{len(row) - self._data_column_index(0)} "
                    f"(number of columns on row index {position - (header + 1)})"
                )
            values.append(read(row[data_column]))
        return values

    def set_column(
        self, column: int | str, values: Sequence[Any], kind: KindLike | None = None
    ) -> None:
        """Overwrite a data column, growing the table as needed."""
        index = self._resolve_column(column)
        data_column = self._data_column_index(index)
        header = self.label_params.column_name_index
        while self._data_row_index(len(values)) > len(self.rows):
            self.rows.append([""] * self._data_column_count())
        if data_column + 1 > self._data_column_count():
            size = self._data_column_index(data_column + 1)
            for position, row in enumerate(self.rows):
                if position >= header:
                    _resize(row, size)
        for offset, value in enumerate(values):
            self.rows[offset + header + 1][data_column] = self._to_text(value, kind)

    def insert_column(
        self,
        index: int,
        values: Sequence[Any] | None = None,
        name: str = "",
        kind: KindLike | None = None,
    ) -> None:
        """Insert a data column before ``index``, optionally with values and a label."""
        data_column = self._data_column_index(index)
        header = self.label_params.column_name_index
        if not values:
            cells = [""] * len(self.rows)
        else:
            cells = [""] * self._data_row_index(len(values))
            for offset, value in enumerate(values):
                cells[offset + header + 1] = self._to_text(value, kind)
        while len(cells) > len(self.rows):
            self.rows.append([""] * max(header + 1, self._data_column_count()))
        for position, row in enumerate(self.rows):
            if position < header:
                continue
            if data_column > len(row):
                raise IndexError(f"column out of range: {index} (on row {position})")
            row.insert(data_column, cells[position])
        if name:
            self.set_column_name(index, name)
        self._update_column_names()

    # Rows.

    def get_row(
        self,
        row: int | str,
        kind: KindLike = ValueKind.STR,
        converter: CellConverter | None = None,
    ) -> list[Any]:
        """Return the values of a data row."""
        data_row = self._data_row_index(self._resolve_row(row))
        label = self.label_params.row_name_index
        read = self._reader(kind, converter)
        return [
            read(cell)
            for position, cell in enumerate(self.rows[data_row])
            if position > label
        ]

    def set_row(
        self, row: int | str, values: Sequence[Any], kind: KindLike | None = None
    ) -> None:
        """Overwrite a data row, growing the table as needed."""
        data_row = self._data_row_index(self._resolve_row(row))
        header = self.label_params.column_name_index
        first_column = self.label_params.row_name_index + 1
        while data_row + 1 > len(self.rows):
            self.rows.append([""] * self._data_column_count())
        if len(values) > self._data_column_count():
            size = self._data_column_index(len(values))
            for position, cells in enumerate(self.rows):
                if position >= header:
                    _resize(cells, size)
        target = self.rows[data_row]
        for offset, value in enumerate(values):
            target[offset + first_column] = self._to_text(value, kind)

    def insert_row(
        self,
        index: int,
        values: Sequence[Any] | None = None,
        name: str = "",
        kind: KindLike | None = None,
    ) -> None:
        """Insert a data row before ``index``, optionally with values and a label."""
        data_row = self._data_row_index(index)
        first_column = self.label_params.row_name_index + 1
        if not values:
            cells = [""] * self._data_column_count()
        else:
            cells = [""] * self._data_column_index(len(values))
            for offset, value in enumerate(values):
                cells[offset + first_column] = self._to_text(value, kind)
        while data_row > len(self.rows):
            self.rows.append([""] * self._data_column_count())
        self.rows.insert(data_row, cells)
        if name:
            self.set_row_name(index, name)
        self._update_row_names()

    # Cells.

    def get_cell(
        self,
        column: int | str,
        row: int | str,
        kind: KindLike = ValueKind.STR,
        converter: CellConverter | None = None,
    ) -> Any:
        """Return the value of one cell."""
        column_index = self._resolve_column(column)
        row_index = self._resolve_row(row)
        data_column = self._data_column_index(column_index)
        data_row = self._data_row_index(row_index)
        return self._reader(kind, converter)(self.rows[data_row][data_column])

    def set_cell(
        self, column: int | str, row: int | str, value: Any, kind: KindLike | None = None
    ) -> None:
        """Overwrite one cell, growing the table as needed."""
        column_index = self._resolve_column(column)
        row_index = self._resolve_row(row)
        data_column = self._data_column_index(column_index)
        data_row = self._data_row_index(row_index)
        header = self.label_params.column_name_index
        while data_row + 1 > len(self.rows):
            self.rows.append([""] * self._data_column_count())
        if data_column + 1 > self._data_column_count():
            for position, cells in enumerate(self.rows):
                if position >= header:
                    _resize(cells, data_column + 1)
        self.rows[data_row][data_column] = self._to_text(value, kind)