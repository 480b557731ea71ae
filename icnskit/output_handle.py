"""
Output Handles

Process-wide standard output and standard error, with scoped redirection.

Redirecting a file descriptor affects the whole process, so every redirection
goes through one lock and is undone before the lock is released. The lock is
reentrant: a redirection nested on the same thread restores the outer one when
it ends.
"""

import os
import sys
import threading
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Callable, Iterator, TypeVar

T = TypeVar('T')

_redirect_lock = threading.RLock()


class OutputHandle:
    """A location for process output, identified by its file descriptor"""

    def __init__(self, file_descriptor: int, stream_name: str):
        self.file_descriptor = file_descriptor
        self.stream_name = stream_name

    def __repr__(self) -> str:
        return f"OutputHandle({self.stream_name}, fd={self.file_descriptor})"

    @property
    def is_terminal(self) -> bool:
        return os.isatty(self.file_descriptor)

    def _python_stream(self):
        return getattr(sys, self.stream_name)

    @contextmanager
    def redirected(self, target: str = os.devnull) -> Iterator[None]:
        """
        Send everything written to this handle to `target` for the duration
        of the block, at both the file descriptor and the `sys` stream level.
        """
        with _redirect_lock:
            stream = self._python_stream()
            if stream is not None:
                stream.flush()

            saved_fd = os.dup(self.file_descriptor)
            try:
                with open(target, 'w', encoding='utf-8') as sink:
                    os.dup2(sink.fileno(), self.file_descriptor)
                    try:
                        swap = redirect_stdout if self.stream_name == 'stdout' else redirect_stderr
                        with swap(sink):
                            yield
                    finally:
                        sink.flush()
                        os.dup2(saved_fd, self.file_descriptor)
            finally:
                os.close(saved_fd)

    def redirect(self, body: Callable[[], T], target: str = os.devnull) -> T:
        """Run `body` with this handle redirected, returning its result"""
        with self.redirected(target):
            return body()


STANDARD_OUTPUT = OutputHandle(1, 'stdout')
STANDARD_ERROR = OutputHandle(2, 'stderr')
