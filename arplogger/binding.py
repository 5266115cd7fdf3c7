from __future__ import annotations

from typing import Dict, Optional


class BindingIntegrityError(RuntimeError):
    """The table holds one hardware address under more than one IP."""


class BindingTable:
    """IPv4 -> hardware address map.

    Keys are 4-byte IPv4 addresses, values are raw hardware addresses. The
    table itself does not stop two IPs from sharing a hardware address; the
    classifier keeps it that way and :meth:`find_by_hwaddr` reports any
    violation it runs into.
    """

    def __init__(self) -> None:
        self._entries: Dict[bytes, bytes] = {}

    def lookup(self, ip: bytes) -> Optional[bytes]:
        return self._entries.get(ip)

    def set(self, ip: bytes, hwaddr: bytes) -> None:
        self._entries[ip] = hwaddr

    def remove(self, ip: bytes) -> None:
        self._entries.pop(ip, None)

    def find_by_hwaddr(self, hwaddr: bytes, exclude: Optional[bytes] = None) -> Optional[bytes]:
        """Return the IP currently bound to ``hwaddr``, skipping ``exclude``.

        Linear in the table size, which is bounded by the hosts on one
        broadcast domain.
        """
        matches = [ip for ip, hw in self._entries.items() if hw == hwaddr and ip != exclude]
        if len(matches) > 1:
            raise BindingIntegrityError(
                f"hardware address {hwaddr.hex(':')} bound to {len(matches)} addresses"
            )
        return matches[0] if matches else None

    def snapshot(self) -> Dict[bytes, bytes]:
        return dict(self._entries)

    def __contains__(self, ip: object) -> bool:
        return ip in self._entries

    def __len__(self) -> int:
        return len(self._entries)
