import io
import logging
import pytest
from csim.errors import MalformedTraceError
from csim.trace.reader import parse_trace_line, read_trace, open_trace, UnknownOperation
from csim.trace.record import AccessKind, AccessRecord


def test_parse_load_and_store():
    assert parse_trace_line("l 0x1fffff50 1") == AccessRecord(AccessKind.LOAD, 0x1fffff50, 1)
    assert parse_trace_line("s 0x30031f10 3\n") == AccessRecord(AccessKind.STORE, 0x30031f10, 3)


def test_parse_accepts_bare_hex_and_extra_whitespace():
    assert parse_trace_line("  l\tdeadbeef   4 ") == AccessRecord(AccessKind.LOAD, 0xDEADBEEF, 4)


def test_parse_blank_line():
    assert parse_trace_line("") is None
    assert parse_trace_line("   \n") is None


def test_parse_unknown_operation():
    with pytest.raises(UnknownOperation, match="unknown operation 'x'"):
        parse_trace_line("x 0x10 1", line_number=3)


@pytest.mark.parametrize("line", [
    "l 0x10",
    "l 0x10 1 extra",
    "l zz 1",
    "l 0x10 q",
    "l 0x100000000 1",
    "l -0x10 1",
])
def test_parse_malformed(line):
    with pytest.raises(MalformedTraceError):
        parse_trace_line(line)


def test_malformed_error_carries_line_number():
    with pytest.raises(MalformedTraceError) as excinfo:
        parse_trace_line("l nothex 1", line_number=7)
    assert excinfo.value.line_number == 7
    assert "line 7" in str(excinfo.value)


def test_read_trace_yields_records_in_order():
    stream = io.StringIO("l 0x0 1\n\ns 0x4 2\nl 0x8 3\n")
    records = list(read_trace(stream))
    assert [r.kind for r in records] == [AccessKind.LOAD, AccessKind.STORE, AccessKind.LOAD]
    assert [r.address for r in records] == [0x0, 0x4, 0x8]


def test_read_trace_skips_unknown_operations():
    stream = io.StringIO("l 0x0 1\nm 0x4 1\ns 0x8 1\n")
    records = list(read_trace(stream))
    assert [r.address for r in records] == [0x0, 0x8]


def test_read_trace_stops_at_malformed_line(caplog):
    stream = io.StringIO("l 0x0 1\nl 0x4\ns 0x8 1\n")
    with caplog.at_level(logging.WARNING):
        records = list(read_trace(stream))
    assert [r.address for r in records] == [0x0]
    assert "line 2" in caplog.text


def test_read_trace_strict_rejects_unknown_operation():
    stream = io.StringIO("l 0x0 1\nm 0x4 1\n")
    with pytest.raises(UnknownOperation):
        list(read_trace(stream, strict=True))


def test_read_trace_strict_rejects_malformed_line():
    stream = io.StringIO("l 0x0 1\nl 0x4\n")
    with pytest.raises(MalformedTraceError) as excinfo:
        list(read_trace(stream, strict=True))
    assert excinfo.value.line_number == 2


def test_open_trace_file(tmp_path):
    path = tmp_path / "t.trace"
    path.write_text("s 0x10 1\n")
    with open_trace(str(path)) as stream:
        assert list(read_trace(stream)) == [AccessRecord(AccessKind.STORE, 0x10, 1)]


def test_open_trace_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("l 0x20 1\n"))
    with open_trace("-") as stream:
        assert list(read_trace(stream)) == [AccessRecord(AccessKind.LOAD, 0x20, 1)]


def test_parse_rejects_undecodable_bytes():
    with pytest.raises(MalformedTraceError, match="undecodable"):
        parse_trace_line("\ufffd\ufffd 0x4 1", line_number=2)


def test_open_trace_replaces_undecodable_bytes(tmp_path, caplog):
    path = tmp_path / "binary.trace"
    path.write_bytes(b"l 0x0 1\n\xff\xfe 0x4 1\ns 0x8 1\n")
    with open_trace(str(path)) as stream, caplog.at_level(logging.WARNING):
        records = list(read_trace(stream))
    assert records == [AccessRecord(AccessKind.LOAD, 0x0, 1)]
    assert "line 2: undecodable bytes" in caplog.text
