"""Write-ahead buffer of rendered messages awaiting a file write."""

from collections import deque


class MessageQueue:
    """FIFO queue of rendered messages.

    The queue has no capacity of its own. The owning logger compares
    ``len()`` against its maximum queue length after each push and
    flushes when the limit is reached. Not thread safe; the owning logger
    serialises access.
    """

    def __init__(self) -> None:
        """Initialize an empty queue."""
        self._messages: deque[str] = deque()

    def push(self, message: str) -> int:
        """Append a message.

        Args:
            message: Rendered message

        Returns:
            Queue length after insertion

        """
        self._messages.append(message)
        return len(self._messages)

    def drain_all(self) -> list[str]:
        """Remove and return all messages in insertion order."""
        drained = list(self._messages)
        self._messages.clear()
        return drained

    def __len__(self) -> int:
        return len(self._messages)
