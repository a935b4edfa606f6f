from __future__ import annotations
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from ..errors import MalformedTraceError
from ..utils.logging import get_logger
from .record import AccessKind, AccessRecord

logger = get_logger(__name__)

ADDRESS_LIMIT = 1 << 32
UNDECODABLE = "\ufffd"  # Replacement character left by errors="replace"
_KINDS = {kind.value: kind for kind in AccessKind}


class UnknownOperation(MalformedTraceError):
    """A well-formed trace line whose op code is neither load nor store."""


def _parse_hex(token: str, what: str, line_number: int | None) -> int:
    try:
        value = int(token, 16)
    except ValueError:
        raise MalformedTraceError(f"invalid {what} '{token}'", line_number) from None
    if value < 0:
        raise MalformedTraceError(f"negative {what} '{token}'", line_number)
    return value


def parse_trace_line(line: str, line_number: int | None = None) -> AccessRecord | None:
    """
    Parses one '<op> <hex-address> <size>' trace line.

    Returns None for a blank line. Raises UnknownOperation for an op code
    other than 'l' or 's', and MalformedTraceError for anything else that
    does not fit the format.
    """
    if UNDECODABLE in line:
        raise MalformedTraceError("undecodable bytes", line_number)
    fields = line.split()
    if not fields:
        return None
    if len(fields) != 3:
        raise MalformedTraceError(f"expected 3 fields, got {len(fields)}", line_number)

    op, address_token, size_token = fields
    address = _parse_hex(address_token, "address", line_number)
    if address >= ADDRESS_LIMIT:
        raise MalformedTraceError(f"address {address_token} does not fit in 32 bits", line_number)
    size = _parse_hex(size_token, "size", line_number)

    kind = _KINDS.get(op)
    if kind is None:
        raise UnknownOperation(f"unknown operation '{op}'", line_number)
    return AccessRecord(kind=kind, address=address, size=size)


def read_trace(stream: TextIO, strict: bool = False) -> Iterator[AccessRecord]:
    """
    Yields access records from a text stream, one line at a time.

    In the default mode unknown op codes are skipped and the first malformed
    line ends the trace. With strict=True both raise MalformedTraceError.
    """
    for line_number, line in enumerate(stream, start=1):
        try:
            record = parse_trace_line(line, line_number)
        except UnknownOperation as e:
            if strict:
                raise
            logger.debug("Skipping trace entry: %s", e)
            continue
        except MalformedTraceError as e:
            if strict:
                raise
            logger.warning("Stopping trace at malformed entry: %s", e)
            return
        if record is not None:
            yield record


@contextmanager
def open_trace(path: str = "-"):
    """Opens a trace file for reading; '-' means standard input."""
    if path == "-":
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors="replace")
        yield sys.stdin
        return
    with open(path, "r", errors="replace") as f:
        yield f
