import pytest

from asyncseq import AsyncSequence, Cursor


class _RecordingCursor(Cursor):
    def __init__(self, owner, token):
        super().__init__(token)
        self.owner = owner
        self.position = 0

    async def _move_next(self):
        self.owner.advances += 1
        if self.owner.fail_at is not None and self.position == self.owner.fail_at:
            raise RuntimeError("upstream failure")
        if self.position >= len(self.owner.items):
            return False
        self._current = self.owner.items[self.position]
        self.position += 1
        return True

    async def _cleanup(self):
        self.owner.disposals += 1


class RecordingSequence(AsyncSequence):
    """Upstream stub that counts cursors, advances and disposals."""

    def __init__(self, items, fail_at=None):
        self.items = list(items)
        self.fail_at = fail_at
        self.cursors = 0
        self.advances = 0
        self.disposals = 0

    def _create_cursor(self, token):
        self.cursors += 1
        return _RecordingCursor(self, token)


@pytest.fixture
def recording():
    """Factory for upstream sequences that record how they are driven."""
    return RecordingSequence
