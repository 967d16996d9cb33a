"""Digest dispatch for canonical strings."""
from __future__ import annotations

import hashlib
from enum import Enum
from typing import Callable, Dict, Union

import mmh3

from domhash.errors import EnvironmentUnavailable, InvalidInput, UnsupportedAlgorithm

SHINGLE_SIZE = 4
_BITS = 32


class HashAlgorithm(str, Enum):
    SHA256 = "sha256"
    MURMUR3 = "murmur3"
    BLAKE = "blake"
    SIMHASH = "simhash"
    MINHASH = "minhash"

    @classmethod
    def parse(cls, name: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            supported = ", ".join(item.value for item in cls)
            raise UnsupportedAlgorithm(f"Unsupported hash algorithm '{name}'. Choose from: {supported}") from exc


_ALIASES = {
    "blake2b": "blake",
    "murmur": "murmur3",
    "sha-256": "sha256",
}


def murmur3_32(text: str) -> int:
    """Unsigned 32-bit MurmurHash3 (x86, seed 0) of the UTF-8 encoding."""

    return mmh3.hash(text, 0, signed=False)


def simhash(text: str) -> int:
    """32-bit simhash: per-character murmur3 with per-bit voting."""

    tallies = [0] * _BITS
    for char in text:
        value = murmur3_32(char)
        for bit in range(_BITS):
            tallies[bit] += 1 if (value >> bit) & 1 else -1
    return sum(1 << bit for bit, tally in enumerate(tallies) if tally > 0)


def minhash(text: str, k: int = SHINGLE_SIZE) -> int:
    """Minimum murmur3 value over every length-``k`` shingle of ``text``."""

    if len(text) < k:
        raise InvalidInput(f"minhash needs at least {k} characters, got {len(text)}")
    return min(murmur3_32(text[i : i + k]) for i in range(len(text) - k + 1))


def _hashlib_hexdigest(name: str, text: str, **params: int) -> str:
    constructor = getattr(hashlib, name, None)
    if constructor is None:
        raise EnvironmentUnavailable(f"{name} hashing is not available in this environment")
    try:
        return constructor(text.encode("utf-8"), **params).hexdigest()
    except ValueError as exc:  # FIPS builds can refuse some digests
        raise EnvironmentUnavailable(f"{name} hashing is not available in this environment: {exc}") from exc


_DISPATCH: Dict[HashAlgorithm, Callable[[str], str]] = {
    HashAlgorithm.SHA256: lambda text: _hashlib_hexdigest("sha256", text),
    HashAlgorithm.BLAKE: lambda text: _hashlib_hexdigest("blake2b", text, digest_size=32),
    HashAlgorithm.MURMUR3: lambda text: f"{murmur3_32(text):08x}",
    HashAlgorithm.SIMHASH: lambda text: f"{simhash(text):x}",
    HashAlgorithm.MINHASH: lambda text: f"{minhash(text):x}",
}


def digest(text: str, algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA256) -> str:
    """Return the hex digest of ``text`` for ``algorithm``."""

    return _DISPATCH[HashAlgorithm.parse(algorithm)](text)


__all__ = ["HashAlgorithm", "SHINGLE_SIZE", "digest", "minhash", "murmur3_32", "simhash"]
