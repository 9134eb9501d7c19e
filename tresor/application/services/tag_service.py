"""Tag derivation: fixed-width, salted lookup keys for (path, key) pairs."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

from tresor.core.constants import PATH_SEP, TAG_LENGTH


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hex digest of input string."""
        ...


class SHA1Algorithm(HashAlgorithm):
    """SHA-1 implementation (format of all tags stored so far)."""

    def hash(self, data: str) -> str:
        return hashlib.sha1(data.encode()).hexdigest()


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


def derive_tag(
    path: str,
    key: str,
    salt: str,
    algorithm: HashAlgorithm | None = None,
    length: int = TAG_LENGTH,
) -> str:
    """Return the tag for (path, key): hex digest prefix of path + '/' + key + salt.

    Pure; empty path or key are valid. path must already be resolved
    (no list values) and, for writes and single reads, stripped.
    """
    algorithm = algorithm or SHA1Algorithm()
    return algorithm.hash(f"{path}{PATH_SEP}{key}{salt}")[:length]


class TagService:
    """Derives entry tags and user email hashes with one process-wide salt."""

    def __init__(
        self,
        salt: str,
        algorithm: HashAlgorithm | None = None,
        length: int = TAG_LENGTH,
    ) -> None:
        self._salt = salt
        self.algorithm = algorithm or SHA1Algorithm()
        self.length = length

    def derive_tag(self, path: str, key: str) -> str:
        return derive_tag(path, key, self._salt, self.algorithm, self.length)

    def hash_email(self, email: str) -> str:
        """Opaque user identity; raw emails are never persisted."""
        return self.algorithm.hash(email + self._salt)[: self.length]
