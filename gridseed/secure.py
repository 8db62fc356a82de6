# Copyright (c) 2026 Signer — MIT License

"""Best-effort wiping of sensitive buffers.

Intermediate secrets (entropy, seeds, private scalars) are held in
bytearrays and zeroed on every exit path. Python ``bytes`` and ``int``
objects are immutable and cannot be wiped; values returned to callers
are therefore outside our control.
"""

from contextlib import contextmanager


def wipe(*buffers):
    """Overwrite each bytearray with zeros in place."""
    for buf in buffers:
        if isinstance(buf, bytearray):
            for i in range(len(buf)):
                buf[i] = 0


@contextmanager
def wiping(*initial):
    """Yield a list of bytearrays that is zeroed when the block exits.

    Usage:
        with wiping(bytearray(secret)) as bufs:
            key = bufs[0]
            bufs.append(bytearray(more))
    """
    bufs = [bytearray(b) if not isinstance(b, bytearray) else b for b in initial]
    try:
        yield bufs
    finally:
        wipe(*bufs)
