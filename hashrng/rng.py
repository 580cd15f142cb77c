from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .constants import (
    COUNTER_BYTEORDER,
    COUNTER_LIMIT,
    COUNTER_SIZE,
    DEFAULT_DIGEST,
    INT_BYTEORDER,
)
from .digests import HashAlgorithm, as_digest
from .encoding import encode_seed
from .errors import DigestError, PeriodExhaustedError


log = logging.getLogger(__name__)


def encode_counter(counter: int) -> bytes:
    return counter.to_bytes(COUNTER_SIZE, COUNTER_BYTEORDER)


@dataclass(frozen=True)
class RngState:
    seed_bytes: bytes
    counter: int
    buffer: bytes
    cursor: int


class HashRng:
    """Deterministic byte stream derived from a seed of arbitrary length.

    The stream is ``block(0) || block(1) || ...`` with
    ``block(i) = H(encode_counter(i) || seed_bytes)``. ``counter`` is the number
    of blocks generated so far, the buffer holds ``block(counter - 1)`` and the
    cursor counts how many of its bytes were already handed out. Blocks are
    generated lazily, on the first read that needs them.

    The period is ``2**64`` blocks. A read that would run past it raises
    :class:`PeriodExhaustedError` (``try_fill_bytes`` returns False) without
    consuming anything; the counter never wraps.

    Instances are not thread-safe. Use :meth:`copy` to fork a stream.
    """

    def __init__(self, digest, seed_bytes: bytes):
        if not isinstance(seed_bytes, (bytes, bytearray, memoryview)):
            raise TypeError("seed_bytes must be bytes-like")
        self._digest: HashAlgorithm = as_digest(digest)
        self._seed = bytes(seed_bytes)
        self._counter = 0
        self._buffer = b""
        self._cursor = 0

    @classmethod
    def from_seed(
        cls, seed: Any, digest=DEFAULT_DIGEST, *, encoder: Callable[[Any], bytes] = encode_seed
    ) -> "HashRng":
        """Encode ``seed`` once with ``encoder`` and build a generator over it.

        ``encoder`` must be injective over the seeds the caller uses; two
        seeds that encode to the same bytes yield the same stream.
        """
        seed_bytes = encoder(seed)
        if not isinstance(seed_bytes, (bytes, bytearray, memoryview)):
            raise TypeError("seed encoder must return bytes")
        return cls(digest, seed_bytes)

    @classmethod
    def from_seed_bytes(cls, seed_bytes: bytes, digest=DEFAULT_DIGEST) -> "HashRng":
        return cls(digest, seed_bytes)

    @classmethod
    def from_state(cls, state: RngState, digest=DEFAULT_DIGEST) -> "HashRng":
        rng = cls(digest, state.seed_bytes)
        if not 0 <= state.counter <= COUNTER_LIMIT:
            raise ValueError(f"counter out of range: {state.counter}")
        if state.counter == 0:
            if state.buffer or state.cursor:
                raise ValueError("state with counter 0 cannot hold a buffered block")
        else:
            if not 0 <= state.cursor <= len(state.buffer):
                raise ValueError(f"cursor out of range: {state.cursor}")
            if bytes(state.buffer) != rng.block(state.counter - 1):
                raise ValueError("buffer does not match block(counter - 1)")
        rng._counter = state.counter
        rng._buffer = bytes(state.buffer)
        rng._cursor = state.cursor
        return rng

    def export_state(self) -> RngState:
        return RngState(seed_bytes=self._seed, counter=self._counter, buffer=self._buffer, cursor=self._cursor)

    @property
    def digest(self) -> HashAlgorithm:
        return self._digest

    @property
    def digest_size(self) -> int:
        return self._digest.digest_size

    @property
    def seed_bytes(self) -> bytes:
        return self._seed

    @property
    def counter(self) -> int:
        return self._counter

    def block(self, index: int) -> bytes:
        if not 0 <= index < COUNTER_LIMIT:
            raise ValueError(f"block index out of range: {index}")
        out = self._digest.hash(encode_counter(index) + self._seed)
        if len(out) != self._digest.digest_size:
            raise DigestError(f"digest {self._digest.name!r} returned {len(out)} bytes, expected {self._digest.digest_size}")
        return out

    def bytes_remaining(self) -> int:
        buffered = len(self._buffer) - self._cursor
        return buffered + (COUNTER_LIMIT - self._counter) * self._digest.digest_size

    def _refill(self) -> None:
        self._buffer = self.block(self._counter)
        self._counter += 1
        self._cursor = 0

    def _fill(self, out: memoryview) -> None:
        n = len(out)
        written = 0
        while written < n:
            if self._cursor == len(self._buffer):
                self._refill()
            take = min(len(self._buffer) - self._cursor, n - written)
            out[written : written + take] = self._buffer[self._cursor : self._cursor + take]
            self._cursor += take
            written += take

    def fill_bytes(self, dest) -> None:
        """Overwrite all of ``dest`` (a writable bytes-like) with the next stream bytes."""
        with memoryview(dest) as view:
            if view.readonly:
                raise TypeError("destination buffer is read-only")
            with view.cast("B") as out:
                if not len(out):
                    return
                remaining = self.bytes_remaining()
                if len(out) > remaining:
                    log.warning("hashrng: refusing %d byte read, %d bytes left in period", len(out), remaining)
                    raise PeriodExhaustedError(len(out), remaining)
                self._fill(out)

    def try_fill_bytes(self, dest) -> bool:
        try:
            self.fill_bytes(dest)
        except PeriodExhaustedError:
            return False
        return True

    def random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        buf = bytearray(n)
        self.fill_bytes(buf)
        return bytes(buf)

    def next_u32(self) -> int:
        buf = bytearray(4)
        self.fill_bytes(buf)
        return int.from_bytes(buf, INT_BYTEORDER)

    def next_u64(self) -> int:
        buf = bytearray(8)
        self.fill_bytes(buf)
        return int.from_bytes(buf, INT_BYTEORDER)

    def copy(self) -> "HashRng":
        # All fields are immutable values; the digest object is stateless
        return copy.copy(self)

    def __deepcopy__(self, memo) -> "HashRng":
        return self.copy()

    def __repr__(self) -> str:
        return f"HashRng(digest={self._digest.name!r}, counter={self._counter}, cursor={self._cursor})"


__all__ = ["HashRng", "RngState", "encode_counter"]
