from __future__ import annotations

"""Fixed-output-size hash primitives for HashRng.

A digest is any object exposing ``name``, ``digest_size`` and
``hash(data) -> bytes``. This module ships adapters for ``hashlib`` and for
``Cryptodome.Hash`` (PyCryptodomex), plus a small registry so callers can pick
an algorithm by name.
"""

import hashlib
import types
from typing import Callable, Dict, List, Protocol

try:  # pragma: no cover - optional dependency at runtime
    from Cryptodome.Hash import keccak, SHA512  # type: ignore
    _HAS_CRYPTODOME = True
except ImportError:  # pragma: no cover - fallback
    keccak = None  # type: ignore
    SHA512 = None  # type: ignore
    _HAS_CRYPTODOME = False

from .errors import DigestError


class HashAlgorithm(Protocol):
    name: str
    digest_size: int

    def hash(self, data: bytes) -> bytes:
        ...


def _ensure_backend() -> None:
    if not _HAS_CRYPTODOME:
        raise RuntimeError("PyCryptodomex is required for Cryptodome.Hash digests")


class FactoryDigest:
    """Digest backed by a zero-argument factory returning a fresh hash object.

    The hash object must offer ``update``, ``digest`` and a non-zero
    ``digest_size``; extendable-output functions are rejected.
    """

    def __init__(self, name: str, factory: Callable[[], object]):
        try:
            probe = factory()
        except (TypeError, ValueError) as e:
            raise DigestError(f"cannot instantiate digest {name!r}: {e}") from e
        digest_size = getattr(probe, "digest_size", 0)
        if not isinstance(digest_size, int) or digest_size <= 0:
            raise DigestError(f"digest {name!r} has no fixed output size")
        if not (hasattr(probe, "update") and hasattr(probe, "digest")):
            raise DigestError(f"digest {name!r} does not look like a hash object")
        self.name = name
        self.digest_size = digest_size
        self._factory = factory

    def hash(self, data: bytes) -> bytes:
        h = self._factory()
        h.update(data)
        out = h.digest()
        if len(out) != self.digest_size:
            raise DigestError(f"digest {self.name!r} returned {len(out)} bytes, expected {self.digest_size}")
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, digest_size={self.digest_size})"


class HashlibDigest(FactoryDigest):
    """``hashlib.new(name, **params)``, e.g. ``HashlibDigest("blake2b", digest_size=32)``."""

    def __init__(self, name: str, **params):
        self.params = dict(params)
        super().__init__(_param_name(name, params), lambda: hashlib.new(name, **params))


class CryptodomeDigest(FactoryDigest):
    """A ``Cryptodome.Hash`` module, e.g. ``CryptodomeDigest(SHA512, truncate="256")``."""

    def __init__(self, module: types.ModuleType, **params):
        _ensure_backend()
        if not callable(getattr(module, "new", None)):
            raise DigestError(f"{module!r} is not a Cryptodome.Hash module")
        self.module = module
        self.params = dict(params)
        base = module.__name__.rsplit(".", 1)[-1].lower()
        super().__init__(_param_name(base, params), lambda: module.new(**params))


def _param_name(base: str, params: Dict[str, object]) -> str:
    if not params:
        return base
    extra = ",".join(f"{k}={params[k]}" for k in sorted(params))
    return f"{base}({extra})"


_REGISTRY: Dict[str, Callable[[], HashAlgorithm]] = {
    "sha224": lambda: HashlibDigest("sha224"),
    "sha256": lambda: HashlibDigest("sha256"),
    "sha384": lambda: HashlibDigest("sha384"),
    "sha512": lambda: HashlibDigest("sha512"),
    "sha3_224": lambda: HashlibDigest("sha3_224"),
    "sha3_256": lambda: HashlibDigest("sha3_256"),
    "sha3_384": lambda: HashlibDigest("sha3_384"),
    "sha3_512": lambda: HashlibDigest("sha3_512"),
    "blake2b": lambda: HashlibDigest("blake2b"),
    "blake2b_256": lambda: HashlibDigest("blake2b", digest_size=32),
    "blake2s": lambda: HashlibDigest("blake2s"),
    # Not guaranteed by every OpenSSL build, so served by PyCryptodomex
    "sha512_224": lambda: CryptodomeDigest(SHA512, truncate="224"),
    "sha512_256": lambda: CryptodomeDigest(SHA512, truncate="256"),
    "keccak256": lambda: CryptodomeDigest(keccak, digest_bits=256),
    "keccak512": lambda: CryptodomeDigest(keccak, digest_bits=512),
}


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def register_digest(name: str, factory: Callable[[], HashAlgorithm], *, replace: bool = False) -> None:
    key = _normalize(name)
    if key in _REGISTRY and not replace:
        raise DigestError(f"digest {name!r} is already registered")
    _REGISTRY[key] = factory


def available_digests() -> List[str]:
    return sorted(_REGISTRY)


def get_digest(name: str) -> HashAlgorithm:
    factory = _REGISTRY.get(_normalize(name))
    if factory is None:
        raise DigestError(f"unknown digest {name!r}")
    return factory()


def as_digest(obj) -> HashAlgorithm:
    """Coerce ``obj`` into a digest.

    Accepts a registry name, an object already satisfying :class:`HashAlgorithm`,
    a hashlib-style constructor such as ``hashlib.sha256``, or a
    ``Cryptodome.Hash`` module such as ``Cryptodome.Hash.SHA3_256``.
    """
    if isinstance(obj, str):
        return get_digest(obj)
    if isinstance(obj, types.ModuleType):
        return CryptodomeDigest(obj)
    if (
        not isinstance(obj, type)
        and callable(getattr(obj, "hash", None))
        and isinstance(getattr(obj, "digest_size", None), int)
    ):
        if obj.digest_size <= 0:
            raise DigestError(f"digest {obj!r} has no fixed output size")
        return obj
    if callable(obj):
        name = getattr(obj, "__name__", None) or repr(obj)
        if name.startswith("openssl_"):
            name = name[len("openssl_"):]
        return FactoryDigest(name, obj)
    raise DigestError(f"cannot use {obj!r} as a digest")


__all__ = [
    "HashAlgorithm",
    "FactoryDigest",
    "HashlibDigest",
    "CryptodomeDigest",
    "register_digest",
    "available_digests",
    "get_digest",
    "as_digest",
    "_HAS_CRYPTODOME",
]
