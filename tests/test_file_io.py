import pytest

from brainrot.errors import BrainrotError
from brainrot.file_io import read_source_file, safe_file_write


def test_round_trip_keeps_line_endings(tmp_path):
    path = tmp_path / "win.py"
    path.write_bytes(b"a = 1\r\nb = 2\r\n")

    content, encoding = read_source_file(str(path))
    assert content == "a = 1\r\nb = 2\r\n"
    assert encoding == "utf-8"

    safe_file_write(str(path), "# x" + content, encoding)
    assert path.read_bytes() == b"# xa = 1\r\nb = 2\r\n"
    assert not (tmp_path / "win.py.tmp").exists()


def test_non_utf8_file_falls_back(tmp_path):
    path = tmp_path / "legacy.sql"
    path.write_bytes("SELECT 'café';\n".encode("cp1252"))

    content, encoding = read_source_file(str(path))

    assert content == "SELECT 'café';\n"
    assert encoding == "cp1252"


def test_missing_file(tmp_path):
    with pytest.raises(BrainrotError):
        read_source_file(str(tmp_path / "nope.py"))


def test_unencodable_content_written_as_utf8(tmp_path):
    path = tmp_path / "legacy.sql"
    path.write_bytes("SELECT 'café';\n".encode("cp1252"))
    content, encoding = read_source_file(str(path))

    written = safe_file_write(str(path), "-- bussin 💀 " + content, encoding)

    assert written == "utf-8"
    assert path.read_bytes().decode("utf-8") == "-- bussin 💀 SELECT 'café';\n"
    assert not (tmp_path / "legacy.sql.tmp").exists()


def test_encodable_content_keeps_encoding(tmp_path):
    path = tmp_path / "legacy.sql"

    assert safe_file_write(str(path), "-- mid café\n", "cp1252") == "cp1252"
    assert path.read_bytes() == "-- mid café\n".encode("cp1252")


def test_failed_write_leaves_no_temp_file(tmp_path):
    target = tmp_path / "taken"
    target.mkdir()

    with pytest.raises(BrainrotError):
        safe_file_write(str(target), "x = 1\n")
    assert not (tmp_path / "taken.tmp").exists()
