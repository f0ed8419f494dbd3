import io

import pytest

from quickcsv.converter import ValueKind
from quickcsv.document import Document
from quickcsv.params import LabelParams, SeparatorParams

CSV = "-,A,B,C\n1,3,9,81\n2,4,16,256\n"

PRICES = (
    "Date,Open,High,Low,Close,Volume,Adj Close\n"
    "2017-02-24,64.529999,64.800003,64.139999,64.620003,21705200,64.620003\n"
    "2017-02-23,64.419998,64.730003,64.190002,64.620003,20235200,64.620003\n"
    "2017-02-22,64.330002,64.389999,64.050003,64.360001,19259700,64.360001\n"
    "2017-02-21,64.610001,64.949997,64.449997,64.489998,19384900,64.489998\n"
    "2017-02-17,64.470001,64.690002,64.300003,64.620003,21234600,64.620003\n"
)


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "data.csv"
    path.write_bytes(CSV.encode())
    return path


def _check_basic(doc):
    assert doc.get_cell(0, 0, ValueKind.INT) == 3
    assert doc.get_cell(1, 0, ValueKind.INT) == 9
    assert doc.get_cell(2, 0, ValueKind.INT) == 81
    assert doc.get_cell("A", "2") == "4"
    assert doc.get_cell("B", "2") == "16"
    assert doc.get_cell("C", "2") == "256"


def test_read_from_binary_file_stream_positioned_at_end(csv_path):
    with open(csv_path, "rb") as handle:
        handle.seek(0, io.SEEK_END)
        doc = Document(handle, LabelParams(0, 0))
    _check_basic(doc)


def test_read_from_string_stream():
    doc = Document(io.StringIO(CSV), LabelParams(0, 0))
    _check_basic(doc)


def test_load_from_streams(csv_path):
    doc1 = Document()
    with open(csv_path, "rb") as handle:
        doc1.load(handle, LabelParams(0, 0))
    _check_basic(doc1)

    doc2 = Document("")
    doc2.load(io.StringIO(CSV), LabelParams(0, 0))
    _check_basic(doc2)


def test_write_cells_containing_separator(tmp_path):
    csv = '-,A,B,C\n1,"3,8",9,81\n2,4,16,"256,8"\n'
    path = tmp_path / "in.csv"
    path.write_bytes(csv.encode())
    out = tmp_path / "out.csv"
    doc = Document(path, LabelParams(0, 0))
    doc.set_cell("C", "2", "256,8")
    doc.save(out)
    assert out.read_bytes().decode() == csv


def test_mixed_name_and_index(csv_path):
    doc = Document(csv_path, LabelParams(0, 0))
    assert doc.get_cell("A", 0, ValueKind.INT) == 3
    assert doc.get_cell("B", 0, ValueKind.INT) == 9
    assert doc.get_cell("C", 0, ValueKind.INT) == 81
    assert doc.get_cell(0, "2") == "4"
    assert doc.get_cell(1, "2") == "16"
    assert doc.get_cell(2, "2") == "256"


def test_generate_document_by_row_labels(tmp_path):
    path = tmp_path / "out.csv"
    doc = Document("", LabelParams(0, 0), SeparatorParams(",", False, False))
    for index in range(4):
        doc.set_row_name(index, str(index))
    doc.set_row(0, [2, 4])
    doc.set_row(1, [3, 9, 81, 6561])
    doc.set_row(2, [4, 16, 256, 65536])
    doc.set_row(3, [5, 25, 625, 390625])
    doc.set_cell(2, 0, 16)
    doc.set_cell(3, 0, 256)
    for index, name in enumerate("ABCD"):
        doc.set_column_name(index, name)
    doc.save(path)
    assert path.read_bytes().decode() == (
        ",A,B,C,D\n"
        "0,2,4,16,256\n"
        "1,3,9,81,6561\n"
        "2,4,16,256,65536\n"
        "3,5,25,625,390625\n"
    )


def test_all_accessors(csv_path):
    doc = Document(csv_path, LabelParams(0, 0))
    assert doc.get_column(0, ValueKind.INT)[0] == 3
    assert doc.get_column("A", ValueKind.INT)[0] == 3

    doc.set_column(0, [4, 5])
    assert doc.get_column(0, ValueKind.INT)[0] == 4
    doc.set_column("A", [5, 6])
    assert doc.get_column("A", ValueKind.INT)[0] == 5

    doc.insert_column(0, [7, 8], "A2")
    assert doc.get_column("A2", ValueKind.INT)[0] == 7

    assert doc.get_row(0, ValueKind.INT)[0] == 7
    assert doc.get_row("1", ValueKind.INT)[0] == 7

    doc.set_row(0, [9, 3, 9, 81])
    assert doc.get_row(0, ValueKind.INT)[0] == 9
    doc.set_row("1", [9, 3, 9, 81])
    assert doc.get_row("1", ValueKind.INT)[0] == 9

    doc.insert_row(0, [1, 2, 3, 4], "1B")
    assert doc.get_row("1B", ValueKind.INT)[0] == 1

    assert doc.get_cell(0, 0, ValueKind.INT) == 1
    assert doc.get_cell("A2", "1B", ValueKind.INT) == 1
    assert doc.get_cell(0, "1B", ValueKind.INT) == 1
    assert doc.get_cell("A2", 0, ValueKind.INT) == 1

    doc.set_cell(1, 1, 111)
    assert doc.get_cell(1, 1, ValueKind.INT) == 111
    doc.set_cell("A", "2", 222)
    assert doc.get_cell("A", "2", ValueKind.INT) == 222


def test_generate_document_with_insert_row(tmp_path):
    path = tmp_path / "out.csv"
    doc = Document("", LabelParams(0, 0), SeparatorParams(",", False, False))
    doc.insert_row(0, [3, 9, 81, 6561], "1")
    doc.insert_row(0, [2, 4, 16, 256], "0")
    doc.insert_row(2)
    doc.set_row(2, [4, 16, 256, 65536])
    doc.set_row_name(2, "2")
    doc.insert_row(3, [5, 25, 625, 390625], "3")

    ints = doc.get_row("1", ValueKind.INT)
    assert len(ints) == 4
    assert ints[:2] == [3, 9]

    for index, name in enumerate("ABCD"):
        doc.set_column_name(index, name)
    doc.save(path)
    assert path.read_bytes().decode() == (
        ",A,B,C,D\n"
        "0,2,4,16,256\n"
        "1,3,9,81,6561\n"
        "2,4,16,256,65536\n"
        "3,5,25,625,390625\n"
    )


def test_out_of_range_column_message(tmp_path):
    path = tmp_path / "short.csv"
    path.write_bytes(b"-,A,B,C\n1,3,9,81\n2,4,16\n")
    doc = Document(path, LabelParams(0, 0))
    assert doc.get_column_name(0) == "A"
    assert doc.get_column_name(1) == "B"
    assert doc.get_column_name(2) == "C"
    with pytest.raises(IndexError) as info:
        doc.get_column(2, ValueKind.INT)
    assert str(info.value) == "requested column index 2 >= 2 (number of columns on row index 1)"
    with pytest.raises(IndexError) as info:
        doc.get_column("C", ValueKind.INT)
    assert str(info.value) == "requested column index 2 >= 2 (number of columns on row index 1)"
    with pytest.raises(IndexError) as info:
        doc.get_column(3, ValueKind.INT)
    assert str(info.value) == "requested column index 3 >= 3 (number of columns on row index 0)"


def test_large_file(tmp_path):
    path = tmp_path / "large.csv"
    with open(path, "w") as handle:
        handle.write("Foo,Bar,Baz\n")
        for i in range(5000):
            handle.write(f"{i},{i * 2},{i * 3}\n")
    assert Document(path).row_count() == 5000
    with open(path) as handle:
        doc = Document(handle)
    assert doc.row_count() == 5000
    assert doc.get_column("Baz", ValueKind.LONG_LONG)[-1] == 4999 * 3


@pytest.mark.parametrize("column, value", [(0, 4), (1, 16), (2, 256)])
def test_set_cell_with_offset_column_labels(tmp_path, column, value):
    csv = "# Comment line\nA,B,C\n3,9,81\n4,16,256\n"
    path = tmp_path / "comment.csv"
    path.write_bytes(csv.encode())
    doc = Document(
        path,
        LabelParams(column_name_index=1, row_name_index=-1),
        SeparatorParams(auto_quote=False),
    )
    doc.set_cell(column, 1, value)
    doc.save()
    assert path.read_bytes().decode() == csv


def test_insert_column_out_of_range(tmp_path):
    path = tmp_path / "insert.csv"
    path.write_bytes(b"A,B,C\n1,3,9\n2,4,16\n")
    doc = Document(path)
    doc.insert_column(3, [1, 2], "D")
    doc.insert_column(4, [3, 4], "E")
    assert doc.column_names() == ["A", "B", "C", "D", "E"]
    with pytest.raises(IndexError) as info:
        doc.insert_column(6, [5, 6], "F")
    assert str(info.value) == "column out of range: 6 (on row 0)"


def test_price_table_from_stream():
    doc = Document(io.StringIO(PRICES), LabelParams(0, 0))
    assert len(doc.get_column("Close", ValueKind.FLOAT)) == 5
    assert doc.get_cell("Volume", "2017-02-22", ValueKind.LONG_LONG) == 19259700


def test_custom_converter_callable():
    doc = Document(io.StringIO(PRICES), LabelParams(0, 0))
    assert doc.get_cell("Close", "2017-02-21", ValueKind.INT) == 64

    def fix_point(text):
        return round(100 * float(text))

    assert doc.get_cell("Close", "2017-02-21", converter=fix_point) == 6449
    assert doc.get_column("Close", converter=fix_point)[:2] == [6462, 6462]
    assert doc.get_row("2017-02-17", converter=lambda text: text[:2])[0] == "64"


def test_missing_labels_raise():
    doc = Document(io.StringIO(CSV), LabelParams(0, 0))
    with pytest.raises(IndexError, match="column not found: X"):
        doc.get_cell("X", 0)
    with pytest.raises(IndexError, match="row not found: zz"):
        doc.get_row("zz")


def test_save_to_text_stream_uses_detected_line_endings():
    doc = Document(io.StringIO("a,b\r\nc,d\r\n"), LabelParams(-1, -1))
    out = io.StringIO()
    doc.save(out)
    assert out.getvalue() == "a,b\r\nc,d\r\n"


def test_save_without_path_raises():
    doc = Document()
    doc.set_cell(0, 0, "x")
    with pytest.raises(ValueError):
        doc.save()


def test_utf8_bom_preserved_on_save(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfID\n1\n")
    doc = Document(path)
    assert doc.get_column("ID") == ["1"]
    doc.set_cell(0, 0, 2)
    doc.save()
    assert path.read_bytes() == b"\xef\xbb\xbfID\n2\n"


def test_utf16_be_written_back(tmp_path):
    source = "-,A,B,C\n1,0,0,0\n2,0,0,0\n"
    expected = "-,A,B,C\n1,3,9,81\n2,4,16,256\n"
    path = tmp_path / "u16.csv"
    path.write_bytes(b"\xfe\xff" + source.encode("utf-16-be"))
    doc = Document(path, LabelParams(0, 0))
    doc.set_cell(0, 0, 3)
    doc.set_cell(1, 0, 9)
    doc.set_cell(2, 0, 81)
    doc.set_cell("A", "2", "4")
    doc.set_cell("B", "2", "16")
    doc.set_cell("C", "2", "256")
    doc.save()
    assert path.read_bytes() == b"\xfe\xff" + expected.encode("utf-16-be")


def test_double_round_trip(tmp_path):
    path = tmp_path / "prec.csv"
    path.write_bytes(b"-,A\nd,0\n")
    doc = Document(path, LabelParams(0, 0))
    doc.set_cell("A", "d", 3.141592653589793, ValueKind.DOUBLE)
    doc.save()
    again = Document(path, LabelParams(0, 0))
    assert again.get_cell("A", "d", ValueKind.DOUBLE) == 3.141592653589793