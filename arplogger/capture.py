from __future__ import annotations

import ipaddress
from threading import Event
from typing import Optional, Union

from scapy.all import ARP, sniff  # type: ignore
from scapy.utils import mac2str  # type: ignore

from arplogger.classifier import Classifier
from arplogger.log import get_logger
from arplogger.models import Announcement
from arplogger.sink import SinkError

logger = get_logger("capture")

BPF_FILTER = "arp"


def _hw_bytes(value: Union[str, bytes, None]) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return value
    return mac2str(value)


def _ip_bytes(value: Union[str, bytes, None]) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return value
    try:
        return ipaddress.ip_address(value).packed
    except ValueError:
        return value.encode("ascii", errors="replace")


def announcement_from_packet(pkt) -> Optional[Announcement]:
    if not pkt.haslayer(ARP):
        return None
    arp = pkt.getlayer(ARP)
    src_hw = _hw_bytes(arp.hwsrc)
    src_ip = _ip_bytes(arp.psrc)
    return Announcement(
        op=arp.op,
        src_hw=src_hw,
        src_ip=src_ip,
        dst_hw=_hw_bytes(arp.hwdst),
        dst_ip=_ip_bytes(arp.pdst),
        hw_len=arp.hwlen if arp.hwlen is not None else len(src_hw),
        proto_len=arp.plen if arp.plen is not None else len(src_ip),
    )


def run_capture(
    classifier: Classifier,
    iface: Optional[str] = None,
    offline: Optional[str] = None,
    duration: Optional[int] = None,
    stop_event: Optional[Event] = None,
) -> int:
    """Feed ARP packets from ``iface`` (or the ``offline`` pcap) to ``classifier``.

    Returns the number of announcements processed. Sink failures are logged
    and capture goes on.
    """
    processed = 0

    def handler(pkt) -> None:
        nonlocal processed
        announcement = announcement_from_packet(pkt)
        if announcement is None:
            return
        processed += 1
        try:
            classifier.classify(announcement)
        except SinkError as exc:
            logger.error("failed to record ARP event: %s", exc)

    if offline:
        kwargs = {"offline": offline}
    else:
        kwargs = {"iface": iface, "filter": BPF_FILTER}
    logger.info("capturing ARP on %s", offline or iface or "default interface")
    sniff(
        prn=handler,
        store=False,
        timeout=duration,
        stop_filter=lambda x: stop_event.is_set() if stop_event else False,
        **kwargs,
    )
    logger.info("capture stopped after %d announcements", processed)
    return processed
