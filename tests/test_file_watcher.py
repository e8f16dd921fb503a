import pytest

from application.events import FileChanged
from infrastructure.file_watcher import FileWatcher, WatcherError


class FakeSignature:
    def __init__(self):
        self.value = (1, 1)

    def __call__(self, path):
        return self.value


def test_poll_emits_only_on_signature_change(tmp_path):
    events = []
    signature = FakeSignature()
    watcher = FileWatcher(tmp_path / "todo.txt", events.append, signature=signature)

    assert watcher.poll() is False
    signature.value = (2, 5)
    assert watcher.poll() is True
    assert watcher.poll() is False

    assert events == [FileChanged()]


def test_poll_detects_real_file_writes(tmp_path):
    path = tmp_path / "todo.txt"
    path.write_text("a\n")
    events = []
    watcher = FileWatcher(path, events.append)

    path.write_text("a\nb and more\n")

    assert watcher.poll()
    assert events == [FileChanged()]


def test_missing_directory_is_rejected(tmp_path):
    with pytest.raises(WatcherError):
        FileWatcher(tmp_path / "missing" / "todo.txt", lambda event: None)


def test_non_positive_interval_is_rejected(tmp_path):
    with pytest.raises(WatcherError):
        FileWatcher(tmp_path / "todo.txt", lambda event: None, interval=0)


def test_start_and_stop_thread(tmp_path):
    watcher = FileWatcher(tmp_path / "todo.txt", lambda event: None, interval=0.01)

    watcher.start()
    assert watcher.running
    watcher.stop()
    assert not watcher.running
