"""Time-ordered item identifiers (UUID version 7, RFC 9562).

Layout: 48-bit unix epoch milliseconds, 4-bit version, 12-bit sequence,
2-bit variant, 62 random bits. The sequence is reseeded every millisecond and
incremented within one, so identifiers issued by this process sort in issue
order both as integers and in their canonical text form.
"""

import os
import threading
import time
import uuid

_SEQ_MASK = 0xFFF
_lock = threading.Lock()
_last_ms = 0
_last_seq = 0


def _next_timestamp() -> tuple[int, int]:
    global _last_ms, _last_seq
    now_ms = time.time_ns() // 1_000_000
    with _lock:
        if now_ms > _last_ms:
            _last_ms = now_ms
            # leave headroom so a burst within one millisecond rarely spills over
            _last_seq = int.from_bytes(os.urandom(2), "big") & 0x7FF
        else:
            # same millisecond, or the clock stepped back: stay on the last tick
            _last_seq += 1
            if _last_seq > _SEQ_MASK:
                _last_ms += 1
                _last_seq = 0
        return _last_ms, _last_seq


def new_item_id() -> uuid.UUID:
    unix_ms, seq = _next_timestamp()
    rand_b = int.from_bytes(os.urandom(8), "big") & ((1 << 62) - 1)

    value = (unix_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= seq << 64
    value |= 0b10 << 62
    value |= rand_b
    return uuid.UUID(int=value)
