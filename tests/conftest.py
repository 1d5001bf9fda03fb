import tkinter

import pytest


class ScriptedBytes:
    """Random-bytes source that replays a fixed list of 32-bit words."""

    def __init__(self, words):
        self.words = list(words)
        self.calls = 0

    def __call__(self, n):
        assert n == 4
        self.calls += 1
        return self.words.pop(0).to_bytes(4, "big")


class FakeClipboardWidget:
    """Just enough of a Tk widget for ClipboardManager."""

    def __init__(self, fail=False):
        self.content = None
        self.fail = fail
        self.jobs = {}
        self.cancelled = []
        self._next_job = 0

    def clipboard_clear(self):
        if self.fail:
            raise tkinter.TclError("clipboard unavailable")
        self.content = ""

    def clipboard_append(self, text):
        self.content += text

    def update(self):
        pass

    def after(self, ms, callback):
        self._next_job += 1
        job = f"after#{self._next_job}"
        self.jobs[job] = (ms, callback)
        return job

    def after_cancel(self, job):
        self.cancelled.append(job)
        self.jobs.pop(job, None)

    def fire(self, job):
        _, callback = self.jobs.pop(job)
        callback()


@pytest.fixture
def scripted_bytes():
    return ScriptedBytes


@pytest.fixture
def clipboard_widget():
    return FakeClipboardWidget()


@pytest.fixture
def failing_clipboard_widget():
    return FakeClipboardWidget(fail=True)
