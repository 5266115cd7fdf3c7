from __future__ import annotations

import enum
from typing import List, Optional

from arplogger.binding import BindingTable
from arplogger.log import get_logger
from arplogger.models import (
    IPV4_LEN,
    MAC_LEN,
    Announcement,
    ConfigurationError,
    Mode,
    format_ip,
    format_mac,
)
from arplogger.sink import Sink

logger = get_logger("classifier")

WARNING_PREFIX = "[WARNING] "
CHANGE_MAPPING_PREFIX = "[CHANGE MAPPING] "
NEW_MAPPING_PREFIX = "[NEW MAPPING] "


class Outcome(str, enum.Enum):
    MALFORMED = "malformed"
    DUPLICATE = "duplicate"
    NEW = "new"
    CHANGED = "changed"
    REASSIGNED = "reassigned"


def _pair(ip: bytes, hwaddr: bytes) -> str:
    return f"{format_ip(ip)} <-> {format_mac(hwaddr)}"


def change_line(old_ip: bytes, old_hw: bytes, new_ip: bytes, new_hw: bytes) -> str:
    return (
        f"{CHANGE_MAPPING_PREFIX}Previous mapping: {_pair(old_ip, old_hw)}"
        f", new mapping: {_pair(new_ip, new_hw)}"
    )


def new_line(ip: bytes, hwaddr: bytes) -> str:
    return f"{NEW_MAPPING_PREFIX}{_pair(ip, hwaddr)}"


def validation_warning(announcement: Announcement) -> Optional[str]:
    if announcement.hw_len != MAC_LEN:
        return (
            f"{WARNING_PREFIX}Packet MAC address size is not correct: "
            f"{announcement.hw_len}, but should be {MAC_LEN} bytes"
        )
    if announcement.proto_len != IPV4_LEN:
        return (
            f"{WARNING_PREFIX}Packet IPv4 address size is not correct: "
            f"{announcement.proto_len}, but should be {IPV4_LEN} bytes"
        )
    return None


class Classifier:
    """Track IP <-> MAC bindings and report what each announcement changed.

    The table is updated before any line reaches the sink, so a sink failure
    never leaves the table half-updated. Calls must be serialized.
    """

    def __init__(self, mode: Mode, sink: Sink, table: Optional[BindingTable] = None) -> None:
        if not mode.enabled:
            raise ConfigurationError("no logging mode selected")
        self.mode = mode
        self.sink = sink
        self.table = table if table is not None else BindingTable()

    def classify(self, announcement: Announcement) -> Outcome:
        warning = validation_warning(announcement)
        if warning:
            logger.debug("discarding malformed announcement")
            self.sink.write(warning)
            return Outcome.MALFORMED

        lines: List[str] = []
        if self.mode.dump_all:
            lines.append(announcement.describe())
        outcome, event = self._update(announcement.src_ip, announcement.src_hw)
        if event and self.mode.report_changes:
            lines.append(event)
        for line in lines:
            self.sink.write(line)
        return outcome

    def _update(self, ip: bytes, hwaddr: bytes) -> tuple[Outcome, Optional[str]]:
        table = self.table
        current = table.lookup(ip)
        if current == hwaddr:
            return Outcome.DUPLICATE, None

        if current is not None:
            stale = table.find_by_hwaddr(hwaddr, exclude=ip)
            if stale is not None:
                table.remove(stale)
                logger.debug("dropped stale binding %s", _pair(stale, hwaddr))
            table.set(ip, hwaddr)
            logger.debug("rebound %s (was %s)", _pair(ip, hwaddr), format_mac(current))
            return Outcome.CHANGED, change_line(ip, current, ip, hwaddr)

        previous = table.find_by_hwaddr(hwaddr)
        table.set(ip, hwaddr)
        if previous is not None:
            table.remove(previous)
            logger.debug("moved %s from %s", format_mac(hwaddr), format_ip(previous))
            return Outcome.REASSIGNED, change_line(previous, hwaddr, ip, hwaddr)
        logger.debug("learned %s", _pair(ip, hwaddr))
        return Outcome.NEW, new_line(ip, hwaddr)

    def close(self) -> None:
        self.sink.close()
