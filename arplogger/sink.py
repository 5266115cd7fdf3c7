from __future__ import annotations

import os
import sys
import time
from typing import Callable, List, Optional, Protocol, Sequence, TextIO, runtime_checkable

from arplogger.models import ConfigurationError, Destinations

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

Clock = Callable[[], float]


@runtime_checkable
class Sink(Protocol):
    def write(self, line: str) -> None: ...

    def close(self) -> None: ...


class SinkError(OSError):
    """One or more sinks failed to record a line."""

    def __init__(self, errors: Sequence[BaseException]) -> None:
        self.errors = list(errors)
        details = "; ".join(str(err) for err in self.errors)
        super().__init__(f"{len(self.errors)} sink write(s) failed: {details}")


def timestamp(clock: Clock = time.time) -> str:
    return time.strftime(TIME_FORMAT, time.localtime(clock()))


class StreamSink:
    def __init__(self, stream: TextIO, clock: Clock = time.time) -> None:
        self._stream = stream
        self._clock = clock

    def write(self, line: str) -> None:
        self._stream.write(f"{timestamp(self._clock)} {line}\n")
        self._stream.flush()

    def close(self) -> None:
        pass


class ConsoleSink(StreamSink):
    def __init__(self, stream: Optional[TextIO] = None, clock: Clock = time.time) -> None:
        super().__init__(stream or sys.stdout, clock)


class FileSink(StreamSink):
    def __init__(self, path: str, clock: Clock = time.time) -> None:
        self.path = path
        super().__init__(open(path, "a", encoding="utf-8"), clock)

    def close(self) -> None:
        if self._stream.closed:
            return
        self._stream.flush()
        os.fsync(self._stream.fileno())
        self._stream.close()


class MemorySink:
    """Keeps formatted lines in memory."""

    def __init__(self, clock: Clock = time.time) -> None:
        self.lines: List[str] = []
        self._clock = clock

    def write(self, line: str) -> None:
        self.lines.append(f"{timestamp(self._clock)} {line}")

    def close(self) -> None:
        pass


class CompositeSink:
    """Forward each line to every child sink, in order.

    A failing child does not stop the others; all failures are raised
    together as a single :class:`SinkError`.
    """

    def __init__(self, sinks: Sequence[Sink]) -> None:
        self.sinks = list(sinks)

    def write(self, line: str) -> None:
        errors = []
        for sink in self.sinks:
            try:
                sink.write(line)
            except OSError as exc:
                errors.append(exc)
        if errors:
            raise SinkError(errors)

    def close(self) -> None:
        errors = []
        for sink in self.sinks:
            try:
                sink.close()
            except OSError as exc:
                errors.append(exc)
        if errors:
            raise SinkError(errors)


def build_sink(
    destinations: Destinations,
    filename: Optional[str] = None,
    stream: Optional[TextIO] = None,
    clock: Clock = time.time,
) -> CompositeSink:
    if not destinations.enabled:
        raise ConfigurationError("no output destination selected")
    sinks: List[Sink] = []
    if destinations.log_file:
        if not filename:
            raise ConfigurationError("log file output requested without a file name")
        sinks.append(FileSink(filename, clock=clock))
    if destinations.console:
        sinks.append(ConsoleSink(stream, clock=clock))
    return CompositeSink(sinks)
