"""Unit tests for the reader/writer lock."""

from __future__ import annotations

import threading
import time

import pytest

from vectorgate.utils.concurrency import ReadWriteLock


class TestReadWriteLock:
    def test_multiple_readers_share_the_lock(self) -> None:
        lock = ReadWriteLock()
        lock.acquire_read()
        lock.acquire_read()
        assert lock.readers == 2
        lock.release_read()
        lock.release_read()
        assert lock.readers == 0

    def test_write_locked_marks_writer_active(self) -> None:
        lock = ReadWriteLock()
        with lock.write_locked():
            assert lock.writer_active is True
        assert lock.writer_active is False

    def test_unmatched_release_read_raises(self) -> None:
        with pytest.raises(RuntimeError):
            ReadWriteLock().release_read()

    def test_unmatched_release_write_raises(self) -> None:
        with pytest.raises(RuntimeError):
            ReadWriteLock().release_write()

    def test_writer_waits_for_reader(self) -> None:
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                acquired.set()

        lock.acquire_read()
        thread = threading.Thread(target=writer)
        thread.start()
        time.sleep(0.05)
        assert not acquired.is_set()

        lock.release_read()
        thread.join(timeout=2)
        assert acquired.is_set()

    def test_reader_waits_for_writer(self) -> None:
        lock = ReadWriteLock()
        acquired = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                acquired.set()

        lock.acquire_write()
        thread = threading.Thread(target=reader)
        thread.start()
        time.sleep(0.05)
        assert not acquired.is_set()

        lock.release_write()
        thread.join(timeout=2)
        assert acquired.is_set()

    def test_lock_released_when_block_raises(self) -> None:
        lock = ReadWriteLock()
        with pytest.raises(ValueError):
            with lock.read_locked():
                raise ValueError("boom")
        assert lock.readers == 0
