"""A table of cell text with optional row and column labels."""

from __future__ import annotations

from collections.abc import Iterable

from .params import LabelParams

__all__ = ["Grid"]


class Grid:
    """Rows of cell text, where one row may hold column labels and one column row labels.

    Indexes given to the public methods count data rows and data columns only:
    the label row and the label column, and anything before them, are skipped.
    """

    def __init__(self, label_params: LabelParams | None = None) -> None:
        self.label_params = label_params if label_params is not None else LabelParams()
        self._rows: list[list[str]] = []
        self._column_names: dict[str, int] = {}
        self._row_names: dict[str, int] = {}

    @property
    def rows(self) -> list[list[str]]:
        """All rows of the table, label row and label column included."""
        return self._rows

    @rows.setter
    def rows(self, rows: Iterable[Iterable[str]]) -> None:
        self._rows = [list(row) for row in rows]
        self._update_column_names()
        self._update_row_names()

    def clear(self) -> None:
        """Remove all rows and labels."""
        self._rows = []
        self._column_names.clear()
        self._row_names.clear()

    # Index arithmetic shared with subclasses.

    @staticmethod
    def _check_index(index: int) -> None:
        if index < 0:
            raise IndexError(f"index out of range: {index}")

    def _data_row_index(self, index: int) -> int:
        self._check_index(index)
        return index + self.label_params.column_name_index + 1

    def _data_column_index(self, index: int) -> int:
        self._check_index(index)
        return index + self.label_params.row_name_index + 1

    def _data_column_count(self) -> int:
        first = max(self.label_params.column_name_index, 0)
        return len(self._rows[first]) if len(self._rows) > first else 0

    def _update_column_names(self) -> None:
        self._column_names.clear()
        header = self.label_params.column_name_index
        if 0 <= header < len(self._rows):
            for position, name in enumerate(self._rows[header]):
                self._column_names[name] = position

    def _update_row_names(self) -> None:
        self._row_names.clear()
        label = self.label_params.row_name_index
        if label >= 0 and len(self._rows) > self.label_params.column_name_index + 1:
            position = 0
            for row in self._rows:
                if len(row) > label:
                    self._row_names[row[label]] = position
                    position += 1

    def _resolve_column(self, column: int | str) -> int:
        if isinstance(column, str):
            index = self.column_index(column)
            if index < 0:
                raise IndexError(f"column not found: {column}")
            return index
        return column

    def _resolve_row(self, row: int | str) -> int:
        if isinstance(row, str):
            index = self.row_index(row)
            if index < 0:
                raise IndexError(f"row not found: {row}")
            return index
        return row

    # Labels and sizes.

    def column_index(self, name: str) -> int:
        """Return the data column index labelled ``name``, or -1 if there is none."""
        if self.label_params.column_name_index >= 0 and name in self._column_names:
            return self._column_names[name] - (self.label_params.row_name_index + 1)
        return -1

    def row_index(self, name: str) -> int:
        """Return the data row index labelled ``name``, or -1 if there is none."""
        if self.label_params.row_name_index >= 0 and name in self._row_names:
            return self._row_names[name] - (self.label_params.column_name_index + 1)
        return -1

    def column_count(self) -> int:
        """Return the number of data columns, label column excluded."""
        count = self._data_column_count() - (self.label_params.row_name_index + 1)
        return max(count, 0)

    def row_count(self) -> int:
        """Return the number of data rows, label row excluded."""
        count = len(self._rows) - (self.label_params.column_name_index + 1)
        return max(count, 0)

    def column_names(self) -> list[str]:
        """Return the labels of the data columns."""
        header = self.label_params.column_name_index
        if header < 0:
            return []
        return self._rows[header][self.label_params.row_name_index + 1:]

    def row_names(self) -> list[str]:
        """Return the labels of the data rows."""
        label = self.label_params.row_name_index
        if label < 0:
            return []
        header = self.label_params.column_name_index
        return [row[label] for position, row in enumerate(self._rows) if position > header]

    def get_column_name(self, index: int) -> str:
        """Return the label of the data column at ``index``."""
        data_column = self._data_column_index(index)
        header = self.label_params.column_name_index
        if header < 0:
            raise IndexError(f"column name row index < 0: {header}")
        return self._rows[header][data_column]

    def set_column_name(self, index: int, name: str) -> None:
        """Label the data column at ``index``, growing the table if needed."""
        header = self.label_params.column_name_index
        if header < 0:
            raise IndexError(f"column name row index < 0: {header}")
        data_column = self._data_column_index(index)
        self._column_names[name] = data_column
        while len(self._rows) <= header:
            self._rows.append([])
        row = self._rows[header]
        if data_column >= len(row):
            row.extend([""] * (data_column + 1 - len(row)))
        row[data_column] = name

    def get_row_name(self, index: int) -> str:
        """Return the label of the data row at ``index``."""
        data_row = self._data_row_index(index)
        label = self.label_params.row_name_index
        if label < 0:
            raise IndexError(f"row name column index < 0: {label}")
        return self._rows[data_row][label]

    def set_row_name(self, index: int, name: str) -> None:
        """Label the data row at ``index``, growing the table if needed."""
        data_row = self._data_row_index(index)
        label = self.label_params.row_name_index
        if label < 0:
            raise IndexError(f"row name column index < 0: {label}")
        self._row_names[name] = data_row
        while len(self._rows) <= data_row:
            self._rows.append([])
        row = self._rows[data_row]
        if label >= len(row):
            row.extend([""] * (label + 1 - len(row)))
        row[label] = name

    # Removal.

    def remove_column(self, column: int | str) -> None:
        """Remove a data column given by index or by label."""
        index = self._resolve_column(column)
        data_column = self._data_column_index(index)
        header = self.label_params.column_name_index
        for position, row in enumerate(self._rows):
            if position < header:
                continue
            if data_column >= len(row):
                raise IndexError(f"column out of range: {index} (on row {position})")
            del row[data_column]
        self._update_column_names()

    def remove_row(self, row: int | str) -> None:
        """Remove a data row given by index or by label."""
        index = self._resolve_row(row)
        data_row = self._data_row_index(index)
        if data_row >= len(self._rows):
            raise IndexError(f"row out of range: {index}")
        del self._rows[data_row]
        self._update_row_names()