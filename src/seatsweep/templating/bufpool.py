"""A bounded pool of byte buffers for staging rendered pages.

Rendering into a buffer before anything reaches the client keeps partial
output off the wire: if a template fails halfway, the handler can still
answer with a clean 500. Pooling the buffers keeps allocation flat
under load.

The pool never blocks. ``get()`` hands out a fresh buffer when the pool
is empty, and ``put()`` drops buffers that would overflow the pool or
that grew past ``max_buffer_size``, so the memory held by idle buffers
is bounded by ``max_buffers * max_buffer_size``.
"""

import contextlib
import io
import queue
from collections.abc import Iterator

DEFAULT_MAX_BUFFERS = 256
DEFAULT_MAX_BUFFER_SIZE = 2000


class SizedBufferPool:
    """Thread-safe free list of ``io.BytesIO`` buffers.

    Usage::

        pool = SizedBufferPool()
        with pool.buffer() as buf:
            buf.write(b"<html>...")
            body = buf.getvalue()
    """

    __slots__ = ("_free", "max_buffer_size", "max_buffers")

    def __init__(
        self,
        max_buffers: int = DEFAULT_MAX_BUFFERS,
        max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
    ) -> None:
        if max_buffers < 0 or max_buffer_size < 0:
            msg = "max_buffers and max_buffer_size must not be negative"
            raise ValueError(msg)
        self.max_buffers = max_buffers
        self.max_buffer_size = max_buffer_size
        self._free: queue.Queue[io.BytesIO] = queue.Queue(maxsize=max_buffers or 1)

    def get(self) -> io.BytesIO:
        """Take an empty buffer from the pool, or allocate one."""
        try:
            return self._free.get_nowait()
        except queue.Empty:
            return io.BytesIO()

    def put(self, buf: io.BytesIO) -> None:
        """Return *buf* to the pool, unless it is oversized or the pool is full."""
        if self.max_buffers == 0:
            return
        # seek() to the end reports the size without copying the contents
        size = buf.seek(0, io.SEEK_END)
        if size > self.max_buffer_size:
            return
        buf.seek(0)
        buf.truncate()
        with contextlib.suppress(queue.Full):
            self._free.put_nowait(buf)

    @contextlib.contextmanager
    def buffer(self) -> Iterator[io.BytesIO]:
        """Borrow a buffer for the duration of a ``with`` block."""
        buf = self.get()
        try:
            yield buf
        finally:
            self.put(buf)

    def __len__(self) -> int:
        """Number of idle buffers currently held."""
        return self._free.qsize()
