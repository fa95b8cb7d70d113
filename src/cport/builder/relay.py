import codecs
import logging
import sys
from typing import Iterable, Optional, TextIO

logger = logging.getLogger(__name__)


class OutputRelay:
    """
    Forwards the output of a remote command to the caller as it arrives.

    stdout and stderr of the command arrive merged. Chunks are decoded as
    UTF-8 with replacement, keeping a character split across two chunks
    intact, and flushed one by one.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        # None means whatever sys.stdout is at relay time
        self.stream = stream

    def relay(self, chunks: Iterable[bytes]) -> int:
        """
        Drain ``chunks`` into the output stream.

        Returns:
            Number of bytes received
        """
        out = self.stream or sys.stdout
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        received = 0
        for chunk in chunks:
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            received += len(chunk)
            text = decoder.decode(chunk)
            if text:
                out.write(text)
                out.flush()
        tail = decoder.decode(b"", final=True)
        if tail:
            out.write(tail)
            out.flush()
        logger.debug(f"[Relay] Relayed {received} bytes")
        return received
