"""
hashrng: deterministic random byte streams from seeds of any size.

The generator hashes a 64-bit counter together with the canonically encoded
seed, ``block(i) = H(u64_be(i) || encode(seed))``, and serves the
concatenation of those blocks through buffered reads:

- Any fixed-size hash: hashlib algorithms, PyCryptodomex ``Cryptodome.Hash``
  modules, or a custom object with ``name``, ``digest_size`` and ``hash()``.
- Injective, self-delimiting seed encoding for structured seeds (strings,
  bytes, ints, lists, dicts, dataclasses and inline structs).
- Reads of any size compose: N bytes in one call equal the same N bytes read
  in pieces.
- No reseeding; the stream refuses reads past its 2**64 block period.

The counter framing (8-byte big-endian prefix) and the little-endian
``next_u32``/``next_u64`` decoding are fixed; see hashrng.constants.
"""

__version__ = "0.1"

from .builder import with_digest, with_seed
from .digests import (
    CryptodomeDigest,
    HashAlgorithm,
    HashlibDigest,
    as_digest,
    available_digests,
    get_digest,
    register_digest,
)
from .encoding import Struct, encode_seed, inline_struct
from .errors import DigestError, HashRngError, PeriodExhaustedError, SeedEncodingError
from .rng import HashRng, RngState

__all__ = [
    "HashRng",
    "RngState",
    "HashAlgorithm",
    "HashlibDigest",
    "CryptodomeDigest",
    "as_digest",
    "available_digests",
    "get_digest",
    "register_digest",
    "Struct",
    "encode_seed",
    "inline_struct",
    "with_seed",
    "with_digest",
    "HashRngError",
    "PeriodExhaustedError",
    "SeedEncodingError",
    "DigestError",
]
