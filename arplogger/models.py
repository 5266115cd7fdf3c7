from __future__ import annotations

import ipaddress
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

ARP_REQUEST = 1
ARP_REPLY = 2

MAC_LEN = 6
IPV4_LEN = 4


class ConfigurationError(ValueError):
    """Raised when a logger is built without a usable mode or destination."""


def format_mac(value: bytes) -> str:
    return ":".join(f"{octet:02x}" for octet in value)


def format_ip(value: bytes) -> str:
    if len(value) != IPV4_LEN:
        return value.hex()
    return str(ipaddress.IPv4Address(value))


def operation_name(op: int) -> str:
    if op == ARP_REQUEST:
        return "Request"
    if op == ARP_REPLY:
        return "Reply"
    return f"Unknown({op})"


class Announcement(BaseModel):
    """One decoded ARP message.

    ``hw_len`` and ``proto_len`` are the length fields from the header; when
    omitted they are taken from the sender addresses.
    """

    model_config = ConfigDict(frozen=True)

    op: int = ARP_REQUEST
    src_hw: bytes
    src_ip: bytes
    dst_hw: bytes = b"\x00" * MAC_LEN
    dst_ip: bytes = b"\x00" * IPV4_LEN
    hw_len: Optional[int] = None
    proto_len: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _default_lengths(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if data.get("hw_len") is None and data.get("src_hw") is not None:
                data["hw_len"] = len(data["src_hw"])
            if data.get("proto_len") is None and data.get("src_ip") is not None:
                data["proto_len"] = len(data["src_ip"])
        return data

    def describe(self) -> str:
        return (
            f"Operation: {operation_name(self.op)}"
            f", Source MAC: {format_mac(self.src_hw)}"
            f", Source IP: {format_ip(self.src_ip)}"
            f", Destination MAC: {format_mac(self.dst_hw)}"
            f", Destination IP: {format_ip(self.dst_ip)}"
        )


class Mode(BaseModel):
    model_config = ConfigDict(frozen=True)

    dump_all: bool = False
    report_changes: bool = False

    @property
    def enabled(self) -> bool:
        return self.dump_all or self.report_changes


class Destinations(BaseModel):
    model_config = ConfigDict(frozen=True)

    console: bool = False
    log_file: bool = False

    @property
    def enabled(self) -> bool:
        return self.console or self.log_file
