"""Encode a CapturedFrameRecord back into horst's 19-field text form."""

import csv
import io

from horstlog.decoder import TIME_FORMAT
from horstlog.models import CapturedFrameRecord

SEPARATOR = " "


def _flag(value: bool) -> str:
    return "1" if value else "0"


def encode_record(record: CapturedFrameRecord) -> list[str]:
    """Return the 19 raw fields, each after the first prefixed with the separator.

    decode_fields(encode_record(r)) == r for any decoded record r.
    """
    values = [
        record.wlan_type,
        str(record.mac_src),
        str(record.mac_dst),
        str(record.bssid),
        record.packet_types,
        str(record.signal),
        str(record.length),
        str(record.phy_rate),
        str(record.frequency),
        record.tsf.hex(),
        record.essid,
        str(record.mode),
        str(record.channel),
        _flag(record.wep),
        _flag(record.wpa1),
        _flag(record.wpa2),
        str(record.ip_src),
        str(record.ip_dst),
    ]
    return [record.time.strftime(TIME_FORMAT)] + [SEPARATOR + v for v in values]


def format_line(record: CapturedFrameRecord) -> str:
    """Render a record as one horst output line (no trailing newline)."""
    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(encode_record(record))
    return buf.getvalue()
