import io

import pytest


class NonSeekableStream(io.StringIO):
    def seekable(self):
        return False


class FailingStream(io.StringIO):
    """Accepts ``limit`` writes, then raises OSError."""

    def __init__(self, limit):
        super().__init__()
        self.limit = limit

    def write(self, text):
        if self.limit <= 0:
            raise OSError("disk full")
        self.limit -= 1
        return super().write(text)


@pytest.fixture
def non_seekable():
    return NonSeekableStream


@pytest.fixture
def failing_stream():
    return FailingStream


class FailingFlushStream(io.StringIO):
    def flush(self):
        raise OSError("flush failed")


@pytest.fixture
def failing_flush_stream():
    return FailingFlushStream
