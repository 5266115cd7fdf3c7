from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from arplogger import __version__
from arplogger.capture import run_capture
from arplogger.classifier import Classifier
from arplogger.config import apply_config, load_config
from arplogger.log import setup_logging
from arplogger.models import Destinations, Mode
from arplogger.sink import build_sink
from arplogger.utils import generate_log_filename, require_root, validate_iface

EXAMPLES = """\
examples:
  print new IP <-> MAC pairs seen on en0:
    arplogger --interface en0 --console --new

  print and store new pairs:
    arplogger --interface en0 --console --log --new

  print and store every ARP packet, and report new pairs as well:
    arplogger --interface en0 --console --log --all --new
"""


def _resolve_log_file(args: argparse.Namespace) -> Optional[str]:
    if not args.log:
        return None
    try:
        return generate_log_filename(args.log_dir)
    except OSError as exc:
        print(f"can't create log file due to error {exc}. Default printing to console.")
        args.log = False
        args.console = True
        return None


def _validate(args: argparse.Namespace) -> None:
    if not args.console and not args.log:
        raise SystemExit("No output is defined. Please, specify --console and/or --log.")
    if not args.all and not args.new:
        raise SystemExit("No logging mode is defined. Please, specify --all and/or --new.")
    if not args.interface and not args.read:
        raise SystemExit(
            "No network interface is specified. "
            "Please, use --interface to specify source interface to read network packets."
        )


def cmd_capture(args: argparse.Namespace) -> int:
    _validate(args)
    filename = _resolve_log_file(args)
    mode = Mode(dump_all=args.all, report_changes=args.new)
    destinations = Destinations(console=args.console, log_file=args.log)
    try:
        sink = build_sink(destinations, filename)
    except OSError as exc:
        raise SystemExit(f"can't open log file: {exc}") from exc
    classifier = Classifier(mode, sink)
    try:
        if not args.read:
            require_root()
            validate_iface(args.interface)
        if filename:
            print(f"Saving to log file: {filename}")
        print("Waiting for incoming ARP packets...")
        try:
            run_capture(
                classifier,
                iface=args.interface,
                offline=args.read,
                duration=args.duration,
            )
        except KeyboardInterrupt:
            pass
    finally:
        classifier.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arplogger",
        description=(
            "Intercept ARP packets on a network interface and log all of them "
            "or only new mappings of IP <-> MAC."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--interface", help="Network interface to listen for ARP packets")
    parser.add_argument("--read", help="Read packets from a pcap file instead of an interface")
    parser.add_argument("--log", action="store_true", help="Store ARP activity to a log file")
    parser.add_argument("--console", action="store_true", help="Print to console")
    parser.add_argument("--all", action="store_true", help="Log all ARP packets")
    parser.add_argument("--new", action="store_true", help="Log only new pairs of IP <-> MAC")
    parser.add_argument("--log-dir", help="Directory for log files (default: system log dir)")
    parser.add_argument("--duration", type=int, help="Seconds to capture (default: run until Ctrl+C)")
    parser.add_argument("--verbose", action="store_true", help="Print debug diagnostics to stderr")
    parser.add_argument("--version", action="version", version=f"arplogger {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    apply_config(parser, load_config())
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    return cmd_capture(args)


if __name__ == "__main__":
    sys.exit(main())
