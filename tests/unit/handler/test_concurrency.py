"""Tests for concurrent use of handlers sharing a sink."""

import json
import threading
import time

from slogkit.handler import Handler
from slogkit.level import INFO
from slogkit.record import Record
from slogkit.value import Attr

THREADS = 8
RECORDS_PER_THREAD = 100


class OverlapDetectingWriter:
    """Collects writes and flags any two that overlap in time."""

    def __init__(self):
        self.lines: list[bytes] = []
        self.overlapped = False
        self._busy = False

    def write(self, data: bytes) -> int:
        if self._busy:
            self.overlapped = True
        self._busy = True
        time.sleep(0)
        self.lines.append(data)
        self._busy = False
        return len(data)


class TestConcurrentEmit:
    """Tests for emitting from several threads."""

    def test_writes_are_serialized(self) -> None:
        """Should never interleave records from derived handlers."""
        writer = OverlapDetectingWriter()
        base = Handler.json(writer)

        def worker(n: int) -> None:
            handler = base.with_attrs([Attr.of("worker", n)]).with_group("g")
            for i in range(RECORDS_PER_THREAD):
                handler.emit(Record(None, INFO, "tick", (Attr.of("i", i),)))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not writer.overlapped
        assert len(writer.lines) == THREADS * RECORDS_PER_THREAD
        for line in writer.lines:
            assert line.endswith(b"\n")
            parsed = json.loads(line)
            assert parsed["msg"] == "tick"
            assert set(parsed["g"]) == {"i"}

        per_worker = {}
        for line in writer.lines:
            parsed = json.loads(line)
            per_worker.setdefault(parsed["worker"], []).append(parsed["g"]["i"])
        assert sorted(per_worker) == list(range(THREADS))
        for values in per_worker.values():
            assert values == list(range(RECORDS_PER_THREAD))
