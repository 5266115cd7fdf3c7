from __future__ import annotations

import ipaddress

import pytest

from arplogger.classifier import Classifier
from arplogger.models import ARP_REPLY, Announcement, Mode
from arplogger.sink import MemorySink

FIXED_TIME = 1_700_000_000.0


def ip(text: str) -> bytes:
    return ipaddress.IPv4Address(text).packed


def mac(text: str) -> bytes:
    return bytes.fromhex(text.replace(":", ""))


def body(line: str) -> str:
    """Strip the ``YYYY/MM/DD HH:MM:SS`` prefix added by sinks."""
    return line.split(" ", 2)[2]


def announce(src_ip: str, src_hw: str, **kwargs) -> Announcement:
    kwargs.setdefault("op", ARP_REPLY)
    return Announcement(src_ip=ip(src_ip), src_hw=mac(src_hw), **kwargs)


@pytest.fixture
def sink():
    return MemorySink(clock=lambda: FIXED_TIME)


@pytest.fixture
def reporter(sink):
    """Classifier reporting binding changes only."""
    return Classifier(Mode(report_changes=True), sink)


@pytest.fixture
def dumper(sink):
    """Classifier dumping every packet without reporting changes."""
    return Classifier(Mode(dump_all=True), sink)
