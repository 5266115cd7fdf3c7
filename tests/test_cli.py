"""Tests for arplogger.cli."""
from __future__ import annotations

from unittest.mock import patch

import pytest
from scapy.all import ARP, Ether, wrpcap  # type: ignore

from arplogger import cli


@pytest.fixture(autouse=True)
def _no_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")


@pytest.fixture
def pcap(tmp_path):
    path = tmp_path / "arp.pcap"
    pkt = Ether(src="aa:bb:cc:dd:ee:01") / ARP(op=2, hwsrc="aa:bb:cc:dd:ee:01", psrc="10.0.0.5")
    wrpcap(str(path), [Ether(bytes(pkt))])
    return str(path)


class TestValidation:
    def test_no_flags_prints_usage(self, capsys):
        assert cli.main([]) == 0
        assert "usage: arplogger" in capsys.readouterr().out

    def test_no_output(self):
        with pytest.raises(SystemExit, match="No output is defined"):
            cli.main(["--interface", "eth0", "--new"])

    def test_no_mode(self):
        with pytest.raises(SystemExit, match="No logging mode is defined"):
            cli.main(["--interface", "eth0", "--console"])

    def test_no_interface(self):
        with pytest.raises(SystemExit, match="No network interface is specified"):
            cli.main(["--console", "--all"])


class TestCapture:
    def test_console_new_from_pcap(self, capsys, pcap):
        assert cli.main(["--read", pcap, "--console", "--new"]) == 0
        out = capsys.readouterr().out
        assert "Waiting for incoming ARP packets..." in out
        assert "[NEW MAPPING] 10.0.0.5 <-> aa:bb:cc:dd:ee:01" in out

    def test_log_file(self, capsys, pcap, tmp_path):
        log_dir = tmp_path / "logs"
        assert cli.main(["--read", pcap, "--log", "--log-dir", str(log_dir), "--all"]) == 0
        files = list(log_dir.glob("arplogger_*.log"))
        assert len(files) == 1
        assert f"Saving to log file: {files[0]}" in capsys.readouterr().out
        assert "Operation: Reply, Source MAC: aa:bb:cc:dd:ee:01" in files[0].read_text()

    def test_log_dir_failure_falls_back_to_console(self, capsys, pcap):
        with patch("arplogger.cli.generate_log_filename", side_effect=PermissionError("denied")):
            assert cli.main(["--read", pcap, "--log", "--new"]) == 0
        out = capsys.readouterr().out
        assert "Default printing to console" in out
        assert "[NEW MAPPING]" in out

    def test_unwritable_log_file(self, pcap, tmp_path):
        """Failing to open the log file is a clean user error."""
        with patch("arplogger.sink.FileSink.__init__", side_effect=PermissionError("denied")):
            with pytest.raises(SystemExit, match="can't open log file: denied"):
                cli.main(["--read", pcap, "--log", "--log-dir", str(tmp_path), "--new"])

    def test_interrupt_closes_sink(self, capsys):
        with patch("arplogger.cli.validate_iface"), patch(
            "arplogger.cli.run_capture", side_effect=KeyboardInterrupt
        ), patch("arplogger.cli.Classifier.close") as close:
            assert cli.main(["--interface", "eth0", "--console", "--new"]) == 0
        close.assert_called_once()

    def test_config_defaults(self, tmp_path, capsys, pcap):
        (tmp_path / "arplogger.toml").write_text('[output]\nconsole = true\nnew = true\n')
        assert cli.main(["--read", pcap]) == 0
        assert "[NEW MAPPING]" in capsys.readouterr().out
