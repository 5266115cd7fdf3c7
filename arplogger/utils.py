import os
import platform
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

from scapy.all import get_if_list  # type: ignore

from arplogger.log import get_logger

logger = get_logger("utils")

LOG_NAME = "arplogger"


def require_root() -> None:
    if hasattr(os, "geteuid") and os.geteuid() != 0:
        logger.warning("live capture typically requires root privileges")


def validate_iface(iface: Optional[str]) -> Optional[str]:
    if not iface:
        return None
    if iface not in get_if_list():
        raise SystemExit(f"unknown interface: {iface}")
    return iface


def default_log_dir() -> Path:
    system = platform.system().lower()
    if system == "darwin":
        root = Path.home() / "Library" / "Logs"
    elif system == "linux":
        root = Path("/var/log")
    else:
        root = Path(tempfile.gettempdir())
    return root / LOG_NAME


def generate_log_filename(root: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """Create the log directory and return a fresh timestamped file path in it."""
    directory = Path(root) if root else default_log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H.%M.%S.%f")
    return str(directory / f"{LOG_NAME}_{stamp}.log")
