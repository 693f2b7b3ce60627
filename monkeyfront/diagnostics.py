"""
Diagnostic accumulation for a parsing session.

A parse never stops at the first problem: each mismatch is formatted into a
message and appended to the session's DiagnosticSink, in arrival order, for
the caller to inspect or write out once parsing is over.
"""
from typing import Iterable, Iterator, List, Tuple


def write_lines(writer, messages: Iterable[str]) -> None:
    """Write each message followed by a newline."""
    for message in messages:
        writer.write(message)
        writer.write("\n")


class DiagnosticSink:
    """Ordered, append-only log of formatted diagnostic messages."""

    def __init__(self):
        self._messages: List[str] = []
        self._released = False

    def append(self, message: str) -> None:
        if self._released:
            raise RuntimeError("diagnostic sink used after release")
        self._messages.append(message)

    def report(self, fmt: str, *args) -> None:
        """Format a message with str.format and append it."""
        self.append(fmt.format(*args))

    def drain_into(self, writer) -> None:
        """
        Write every message, one per line, to `writer`.

        The messages stay in the sink, so draining twice writes them twice.
        `writer` is anything with a write(str) method.
        """
        write_lines(writer, self._messages)

    def release(self) -> None:
        """Drop all messages at the end of the session."""
        if self._released:
            return
        self._messages.clear()
        self._released = True

    @property
    def released(self) -> bool:
        return self._released

    @property
    def messages(self) -> Tuple[str, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._messages))


class ParseError(Exception):
    """Parse failure carrying every diagnostic of the session."""

    def __init__(self, messages: List[str]):
        super().__init__(messages[0] if messages else "parse failed")
        self.messages = list(messages)

    def __str__(self) -> str:
        more = ""
        if len(self.messages) > 1:
            more = f" (and {len(self.messages) - 1} more)"
        return f"{self.args[0]}{more}"
