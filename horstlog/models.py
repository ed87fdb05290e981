"""Captured frame record — one decoded line of horst output."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntFlag
from ipaddress import IPv4Address, IPv6Address
from typing import Any

BROADCAST = b"\xff" * 6


class HardwareAddr(bytes):
    """6-byte MAC address that prints as lowercase colon-hex."""

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self)

    def __repr__(self) -> str:
        return f"HardwareAddr('{self}')"

    @property
    def is_broadcast(self) -> bool:
        return bytes(self) == BROADCAST


class PacketType(IntFlag):
    """horst packet-type bits, lowest bit first."""

    CTRL = 1 << 0
    MGMT = 1 << 1
    DATA = 1 << 2
    BADFCS = 1 << 3
    BEACON = 1 << 4
    PROBE = 1 << 5
    ASSOC = 1 << 6
    AUTH = 1 << 7
    RTSCTS = 1 << 8
    ACK = 1 << 9
    NULL = 1 << 10
    QDATA = 1 << 11
    ARP = 1 << 12
    IP = 1 << 13
    ICMP = 1 << 14
    UDP = 1 << 15
    TCP = 1 << 16
    OLSR = 1 << 17
    BATMAN = 1 << 18
    MESHZ = 1 << 19


class OperatingMode(IntFlag):
    AP = 1 << 0
    ADH = 1 << 1
    STA = 1 << 2
    PRB = 1 << 3
    WDS = 1 << 4
    UNKNOWN = 1 << 5


@dataclass(frozen=True)
class CapturedFrameRecord:
    time: datetime
    wlan_type: str
    mac_src: HardwareAddr
    mac_dst: HardwareAddr
    bssid: HardwareAddr
    packet_types: str
    signal: int
    length: int
    phy_rate: int
    frequency: int
    tsf: bytes
    essid: str
    mode: int
    channel: int
    wep: bool
    wpa1: bool
    wpa2: bool
    ip_src: IPv4Address | IPv6Address
    ip_dst: IPv4Address | IPv6Address

    @property
    def packet_flags(self) -> PacketType | None:
        """Packet-type bitmask, or None when PacketTypes is not a plain integer."""
        if not (self.packet_types.isascii() and self.packet_types.isdigit()):
            return None
        return PacketType(int(self.packet_types))

    @property
    def mode_flags(self) -> OperatingMode:
        return OperatingMode(self.mode)


def record_to_dict(record: CapturedFrameRecord) -> dict[str, Any]:
    """Convert a record to a JSON-serializable dict."""
    return {
        "time": record.time.isoformat(),
        "wlan_type": record.wlan_type,
        "mac_src": str(record.mac_src),
        "mac_dst": str(record.mac_dst),
        "bssid": str(record.bssid),
        "packet_types": record.packet_types,
        "signal": record.signal,
        "length": record.length,
        "phy_rate": record.phy_rate,
        "frequency": record.frequency,
        "tsf": record.tsf.hex(),
        "essid": record.essid,
        "mode": record.mode,
        "channel": record.channel,
        "wep": record.wep,
        "wpa1": record.wpa1,
        "wpa2": record.wpa2,
        "ip_src": str(record.ip_src),
        "ip_dst": str(record.ip_dst),
    }
