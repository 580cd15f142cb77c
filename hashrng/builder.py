from __future__ import annotations

"""Two-step construction of :class:`HashRng`.

    rng = builder.with_seed("foobar").with_digest("sha256")
    rng = builder.with_digest(hashlib.sha3_256).with_seed({"nonce": 7})

A ``WithDigest`` resolves its digest once and can produce any number of
generators.
"""

from typing import Any, Callable

from .digests import HashAlgorithm, as_digest
from .encoding import encode_seed
from .rng import HashRng


class WithSeed:
    def __init__(self, seed: Any, encoder: Callable[[Any], bytes] = encode_seed):
        self.seed = seed
        self.encoder = encoder

    def with_digest(self, digest) -> HashRng:
        return HashRng.from_seed(self.seed, digest, encoder=self.encoder)


class WithDigest:
    def __init__(self, digest):
        self.digest: HashAlgorithm = as_digest(digest)

    def with_seed(self, seed: Any, *, encoder: Callable[[Any], bytes] = encode_seed) -> HashRng:
        return HashRng.from_seed(seed, self.digest, encoder=encoder)


def with_seed(seed: Any, *, encoder: Callable[[Any], bytes] = encode_seed) -> WithSeed:
    return WithSeed(seed, encoder)


def with_digest(digest) -> WithDigest:
    return WithDigest(digest)


__all__ = ["WithSeed", "WithDigest", "with_seed", "with_digest"]
