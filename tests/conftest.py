"""Shared pytest fixtures for the horst-log-decoder test suite."""

from __future__ import annotations

import pytest

from horstlog.decoder import decode_fields

SAMPLE_LINE = (
    "2025-02-11 08:10:39.505813 +0000, BEACON, 8c:3b:ad:f0:94:6e, "
    "ff:ff:ff:ff:ff:ff, 8c:3b:ad:f0:94:6e, 0, -49, 194, 60, 2412, "
    "000002ad9e7e6061, EXHO2, 1, 1, 1, 0, 1, 0.0.0.0, 0.0.0.0"
)

HEADER_LINE = (
    "TIME, WLAN TYPE, MAC SRC, MAC DST, BSSID, PACKET TYPES, SIGNAL, LENGTH, "
    "PHY RATE, FREQUENCY, TSF, ESSID, MODE, CHANNEL, WEP, WPA1, RSN (WPA2), "
    "IP SRC, IP DST"
)


def raw_sample_fields() -> list[str]:
    return [
        "2025-02-11 08:10:39.505813 +0000", " BEACON", " 8c:3b:ad:f0:94:6e",
        " ff:ff:ff:ff:ff:ff", " 8c:3b:ad:f0:94:6e", " 0", " -49", " 194",
        " 60", " 2412", " 000002ad9e7e6061", " EXHO2", " 1", " 1", " 1",
        " 0", " 1", " 0.0.0.0", " 0.0.0.0",
    ]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep HORST_* settings from the outer environment out of the tests."""
    for name in ("HORST_CONFIG", "HORST_OUTPUT", "HORST_SKIP_INVALID",
                 "HORST_POLL_INTERVAL", "HORST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def raw_fields() -> list[str]:
    """The 19 fields of SAMPLE_LINE as the CSV tokenizer emits them."""
    return raw_sample_fields()


@pytest.fixture()
def trimmed_fields() -> list[str]:
    """The same fields with the separator space already removed."""
    fields = raw_sample_fields()
    return [fields[0]] + [f[1:] for f in fields[1:]]


@pytest.fixture()
def sample_record():
    return decode_fields(raw_sample_fields())


@pytest.fixture()
def horst_file(tmp_path):
    """A horst output file: header, two good lines, one bad line, a blank line."""
    bad = SAMPLE_LINE.replace(", 1, 0, 1, 0.0.0.0", ", 5, 0, 1, 0.0.0.0")
    second = SAMPLE_LINE.replace("EXHO2", "CAFE").replace("-49", "-71")
    path = tmp_path / "capture.log"
    path.write_text("\n".join([HEADER_LINE, SAMPLE_LINE, bad, "", second]) + "\n")
    return path
