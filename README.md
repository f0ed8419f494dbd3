# quickcsv

`quickcsv` reads a CSV document into memory. You can then reach its
cells, rows and columns by index or by label, and each value is
converted to the kind you ask for. The document can be changed and
written back out.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Reading a document

```python
import io
from quickcsv.document import Document
from quickcsv.params import LabelParams
from quickcsv.converter import ValueKind

csv_text = (
    "Date,Open,Close,Volume\n"
    "2017-02-24,64.53,64.62,21705200\n"
    "2017-02-23,64.42,64.62,20235200\n"
)

doc = Document(io.StringIO(csv_text), LabelParams(0, 0))

close = doc.get_column("Close", ValueKind.FLOAT)
volume = doc.get_cell("Volume", "2017-02-23", ValueKind.INT)
```

The source can take three forms:

- a file path, which is read as bytes;
- a binary stream;
- a text stream.

With no source, or an empty string, the document starts out empty.
`Document.load()` replaces the content with new data and new parameters.

`LabelParams(column_name_index, row_name_index)` chooses which row holds
the column labels and which column holds the row labels. Use `-1` for
either one to treat it as plain data. A value below `-1` raises
`ValueError`.

Indexes passed to the document count only data rows and data columns.
The label row and the label column are not counted. A few methods help
with this:

- `column_index()` and `row_index()` return `-1` for an unknown label.
- `column_names()` and `row_names()` list the labels.
- `column_count()` and `row_count()` give the size.

## Value kinds and custom conversion

`ValueKind` lists the kinds a cell can be converted to and from:

- `STR`, for plain text;
- the signed and unsigned integer kinds, from `INT` to `UNSIGNED_LONG_LONG`;
- `FLOAT`, `DOUBLE` and `LONG_DOUBLE`;
- `CHAR`, for a single character.

You can also pass the Python types `str`, `int` and `float`. Any other
type raises `NoConverterError`.

When conversion fails, the error depends on the cause:

- Invalid numbers raise `ValueError`.
- Numbers outside the range of their kind raise `OverflowError`.

`ConverterParams(has_default_converter=True, default_float=..., default_integer=...)`
returns the default value instead of raising. Its `numeric_locale`
setting works like this:

- When set, which is the default, floating-point text uses the decimal
  point of the current locale.
- When not set, the text must be a plain number with a `.` decimal point.

`Converter.to_value()` and `Converter.to_str()` can be used on their
own. `FLOAT` is written with 9 significant digits and `DOUBLE` with 17,
so values read back unchanged.

Every getter also accepts a `converter` callable. It receives the raw
cell text and returns the value:

```python
fixed_point = doc.get_cell("Close", "2017-02-24", converter=lambda s: round(100 * float(s)))
```

## Changing and saving

```python
doc.set_cell("Volume", "2017-02-24", 22000000, ValueKind.INT)
doc.insert_column(0, [1, 2], "Id", ValueKind.INT)
doc.insert_row(0, [0, 0.0, 0.0, 0], "2017-02-25")
doc.save("out.csv")
```

The setters grow the table when they need to. When no `kind` is given,
it is taken from the type of the value.

Removing data works by index or by label. Use `remove_column()` and
`remove_row()` for this. Use `set_column_name()` and `set_row_name()` to
label data.

Errors use `IndexError` in these cases:

- a label that does not exist;
- an index out of range;
- a row that is too short for the requested column.

How `save()` writes depends on its target:

- With no argument, it writes back to the path the document was read
  from or last saved to. It raises `ValueError` if there is none.
- A file keeps the encoding it was read with. This covers a UTF-8 byte
  order mark, and UTF-16 in either byte order.
- A stream gets UTF-8 with no byte order mark.

Line endings are CR/LF when most lines of the input had them. For a new
document, `SeparatorParams.has_cr` decides.

## Parameters

`SeparatorParams` covers the following settings:

- the separator and the quote character;
- trimming of white space around cells;
- line breaks inside quoted cells;
- automatic quoting: cells are unquoted on reading, and cells that hold
  the separator, a space or a line break are quoted on writing.

`LineReaderParams` decides whether comment lines (by prefix) and empty
lines are skipped.

## Lower-level pieces

`quickcsv.parser` holds the text handling that `Document` uses:

- `parse_text()` splits text into rows and reports CR/LF use.
- `format_rows()` joins rows back into text.
- `trim()` and `unquote()` work on single cells.
- `decode_bytes()` and `encode_text()` deal with byte order marks.

`quickcsv.grid.Grid` is the labelled table that `Document` extends. It
has no typed access.

## What it does not do

`quickcsv` is a library only. It has no command-line tool. It holds the
whole document in memory and does not stream rows.