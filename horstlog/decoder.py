"""Record decoder — turns the 19 fields of a horst line into a CapturedFrameRecord.

Field order (fixed, positional):
    Time, WLANType, MACSRC, MACDST, BSSID, PacketTypes, Signal, Length,
    PhyRate, Frequency, TSF, ESSID, Mode, Channel, WEP, WPA1, WPA2,
    IPSrc, IPDst

Raw fields come straight from the CSV tokenizer: every field after the first
still carries the single separator space horst writes after each comma.
decode_fields() drops exactly that one character; decode_trimmed_fields()
expects fields the tokenizer has already trimmed.
"""

from __future__ import annotations

import re
from datetime import datetime
from ipaddress import ip_address
from typing import Sequence

from horstlog.models import CapturedFrameRecord, HardwareAddr

FIELD_NAMES = (
    "Time", "WLANType", "MACSRC", "MACDST", "BSSID", "PacketTypes",
    "Signal", "Length", "PhyRate", "Frequency", "TSF", "ESSID",
    "Mode", "Channel", "WEP", "WPA1", "WPA2", "IPSrc", "IPDst",
)
FIELD_COUNT = len(FIELD_NAMES)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f %z"

# strptime alone accepts 1-6 fraction digits and "+00:00"/"Z" offsets
_TIME_RE = re.compile(
    r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{6} [+-]\d{4}", re.ASCII
)
_MAC_RE = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"(?:[0-9A-Fa-f]{2})*")

_BOOLS = {0: False, 1: True}


class DecodeError(Exception):
    """Raised when a field sequence cannot be decoded into a record."""

    def __init__(self, message: str, field: str | None = None, value: str | None = None):
        super().__init__(message)
        self.field = field
        self.value = value


class MalformedFieldError(DecodeError):
    """A field's text does not match the grammar of that field."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"parsing {field}: {value!r}: {reason}", field=field, value=value)
        self.reason = reason


class StructuralMismatchError(DecodeError):
    """The field sequence does not have the expected number of fields."""

    def __init__(self, actual: int, expected: int = FIELD_COUNT):
        super().__init__(f"expected {expected} fields, got {actual}")
        self.expected = expected
        self.actual = actual


# ---------------------------------------------------------------------------
# Per-field parsers; each raises ValueError, _field() wraps it
# ---------------------------------------------------------------------------


def parse_time(text: str) -> datetime:
    if not _TIME_RE.fullmatch(text):
        raise ValueError("expected 'YYYY-MM-DD HH:MM:SS.ffffff +HHMM'")
    return datetime.strptime(text, TIME_FORMAT)


def parse_mac(text: str) -> HardwareAddr:
    if not _MAC_RE.fullmatch(text):
        raise ValueError("expected six colon-separated hex octets")
    return HardwareAddr(bytes.fromhex(text.replace(":", "")))


def parse_int(text: str) -> int:
    # int() would also take whitespace, underscores and non-ASCII digits
    if not _INT_RE.fullmatch(text):
        raise ValueError("invalid base-10 integer")
    return int(text)


def parse_count(text: str) -> int:
    value = parse_int(text)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def parse_hex(text: str) -> bytes:
    if len(text) % 2:
        raise ValueError("odd length hex string")
    if not _HEX_RE.fullmatch(text):
        raise ValueError("invalid hex digit")
    return bytes.fromhex(text)


def parse_flag(text: str) -> bool:
    value = parse_int(text)
    if value not in _BOOLS:
        raise ValueError('can only convert "0" or "1"')
    return _BOOLS[value]


def parse_ip(text: str):
    return ip_address(text)


def _field(fields: Sequence[str], index: int, parse):
    name = FIELD_NAMES[index]
    text = fields[index]
    try:
        return parse(text)
    except ValueError as exc:
        raise MalformedFieldError(name, text, str(exc)) from exc


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def strip_separators(fields: Sequence[str]) -> list[str]:
    """Drop the one leading separator character from every field but the first."""
    if len(fields) != FIELD_COUNT:
        raise StructuralMismatchError(len(fields))

    stripped = [fields[0]]
    for index in range(1, FIELD_COUNT):
        raw = fields[index]
        if not raw:
            raise MalformedFieldError(FIELD_NAMES[index], raw, "missing separator character")
        stripped.append(raw[1:])
    return stripped


def decode_trimmed_fields(fields: Sequence[str]) -> CapturedFrameRecord:
    """Decode 19 already-trimmed fields into a CapturedFrameRecord.

    Fields are checked in positional order and the first failure aborts
    the decode.

    Raises:
        StructuralMismatchError: If ``fields`` does not hold exactly 19 items.
        MalformedFieldError: If any field fails its grammar; ``__cause__``
            carries the underlying parser error.
    """
    if len(fields) != FIELD_COUNT:
        raise StructuralMismatchError(len(fields))

    return CapturedFrameRecord(
        time=_field(fields, 0, parse_time),
        wlan_type=fields[1],
        mac_src=_field(fields, 2, parse_mac),
        mac_dst=_field(fields, 3, parse_mac),
        bssid=_field(fields, 4, parse_mac),
        packet_types=fields[5],
        signal=_field(fields, 6, parse_int),
        length=_field(fields, 7, parse_count),
        phy_rate=_field(fields, 8, parse_count),
        frequency=_field(fields, 9, parse_count),
        tsf=_field(fields, 10, parse_hex),
        essid=fields[11],
        mode=_field(fields, 12, parse_int),
        channel=_field(fields, 13, parse_int),
        wep=_field(fields, 14, parse_flag),
        wpa1=_field(fields, 15, parse_flag),
        wpa2=_field(fields, 16, parse_flag),
        ip_src=_field(fields, 17, parse_ip),
        ip_dst=_field(fields, 18, parse_ip),
    )


def decode_fields(fields: Sequence[str]) -> CapturedFrameRecord:
    """Decode 19 raw tokenizer fields (separator still attached) into a record."""
    return decode_trimmed_fields(strip_separators(fields))


def decode_line(line: str) -> CapturedFrameRecord:
    """Tokenize one horst output line and decode it."""
    from horstlog.reader import split_line
    return decode_fields(split_line(line))
