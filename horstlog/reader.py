"""Line tokenizing, file reading, and tail for horst output."""

import csv
import glob
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Generator, Iterable, Iterator

from horstlog.decoder import DecodeError, decode_fields
from horstlog.models import CapturedFrameRecord

logger = logging.getLogger(__name__)

HEADER_FIELDS = (
    "TIME", "WLAN TYPE", "MAC SRC", "MAC DST", "BSSID", "PACKET TYPES",
    "SIGNAL", "LENGTH", "PHY RATE", "FREQUENCY", "TSF", "ESSID", "MODE",
    "CHANNEL", "WEP", "WPA1", "RSN (WPA2)", "IP SRC", "IP DST",
)

STDIN = "-"

# ESSIDs are raw bytes; undecodable ones become U+FFFD instead of aborting the read
DECODE_ERRORS = "replace"


@dataclass(frozen=True)
class DecodeResult:
    line_number: int
    source: str
    record: CapturedFrameRecord | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def split_line(line: str) -> list[str]:
    """CSV-tokenize one line. Leading separator spaces are kept on each field.

    Raises DecodeError if the csv module cannot tokenize the line.
    """
    try:
        rows = list(csv.reader([line.rstrip("\r\n")]))
    except csv.Error as exc:
        raise DecodeError(f"tokenizing line: {exc}") from exc
    return rows[0] if rows else []


def is_header(fields: list[str]) -> bool:
    return tuple(f.strip() for f in fields) == HEADER_FIELDS


def iter_results(lines: Iterable[str], source: str = "") -> Iterator[DecodeResult]:
    """Decode each data line, yielding a DecodeResult per line.

    Blank lines and the horst header line are skipped.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            fields = split_line(line)
            if is_header(fields):
                continue
            record = decode_fields(fields)
        except DecodeError as exc:
            yield DecodeResult(line_number, source, error=exc)
        else:
            yield DecodeResult(line_number, source, record=record)


def read_records(
    lines: Iterable[str], source: str = "", skip_invalid: bool = False
) -> Generator[CapturedFrameRecord, None, None]:
    """Yield decoded records.

    Raises the first DecodeError unless skip_invalid is set, in which case
    bad lines are logged and dropped.
    """
    for result in iter_results(lines, source):
        if result.ok:
            yield result.record
        elif skip_invalid:
            logger.warning("%s:%d: skipped: %s", source or "<input>", result.line_number, result.error)
        else:
            raise result.error


def read_lines(filepath: str) -> Generator[str, None, None]:
    """Yield each line of a file, or of stdin for '-'."""
    if filepath == STDIN:
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors=DECODE_ERRORS)
        yield from sys.stdin
        return
    with open(filepath, "r", encoding="utf-8", errors=DECODE_ERRORS, newline="") as f:
        yield from f


def read_file(filepath: str) -> Iterator[DecodeResult]:
    return iter_results(read_lines(filepath), source=filepath)


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, deduplicate, and validate that files exist.

    Raises FileNotFoundError if a non-glob path doesn't exist, or if
    expansion produces zero files.
    """
    expanded = []
    seen = set()

    for raw in raw_paths:
        if raw == STDIN:
            candidates = [raw]
        elif any(c in raw for c in ("*", "?", "[")):
            candidates = sorted(glob.glob(raw))
        else:
            if not os.path.isfile(raw):
                raise FileNotFoundError(f"File not found: {raw}")
            candidates = [raw]
        for path in candidates:
            if path not in seen:
                seen.add(path)
                expanded.append(path)

    if not expanded:
        raise FileNotFoundError("No horst log files found matching the given paths")

    return expanded


def tail_file(filepath: str, poll_interval: float = 0.5) -> Generator[str, None, None]:
    """Seek to end of file and yield new complete lines as horst appends them.

    Polls with time.sleep(poll_interval). Runs until interrupted.
    """
    with open(filepath, "r", encoding="utf-8", errors=DECODE_ERRORS, newline="") as f:
        f.seek(0, os.SEEK_END)
        buffer = ""
        while True:
            chunk = f.read()
            if chunk:
                buffer += chunk
                while "\n" in buffer:
                    line, buffer = buffer.split("\n", 1)
                    yield line + "\n"
            else:
                time.sleep(poll_interval)
