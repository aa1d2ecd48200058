# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""GNTP authentication and body encryption.

A password is never sent or used as a cipher key directly.  A random salt is
appended to it and digested; the digest is the key, and the hex digest of the
key is the hash the server checks.  The same key (truncated to the cipher's
key size) encrypts the header block and every resource of a packet.
"""

import hashlib
from dataclasses import dataclass

from Crypto.Cipher import AES, DES, DES3
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad, unpad

from .constants import SALT_BYTES
from .errors import UnsupportedCipher, UnsupportedHashAlgorithm

HASH_ALGORITHMS = {
    "MD5": hashlib.md5,
    "SHA1": hashlib.sha1,
    "SHA256": hashlib.sha256,
    "SHA512": hashlib.sha512,
}

# mode -> (cipher module, key size in bytes)
ENCRYPTION_ALGORITHMS = {
    "DES": (DES, 8),
    "3DES": (DES3, 24),
    "AES": (AES, 24),  # AES-192
}


def random_salt() -> bytes:
    """Generate a salt for key derivation."""
    return get_random_bytes(SALT_BYTES)


@dataclass(frozen=True)
class KeyInfo:
    """Derived key material for one packet."""

    algorithm: str
    key: bytes
    key_hash: str
    salt: bytes

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.key_hash}.{self.salt.hex()}"


def key_hash(password: str, algorithm: str = "SHA512", salt: bytes | None = None) -> KeyInfo:
    """Derive the key and authentication hash for a password.

    Args:
        password: Shared secret
        algorithm: One of MD5, SHA1, SHA256 or SHA512
        salt: Salt to use; a random one is generated if omitted

    Returns:
        KeyInfo whose string form is the info line's key token
    """
    try:
        digest = HASH_ALGORITHMS[algorithm]
    except KeyError:
        raise UnsupportedHashAlgorithm(algorithm) from None

    if salt is None:
        salt = random_salt()

    key = digest(password.encode("utf-8") + salt).digest()
    return KeyInfo(algorithm=algorithm, key=key, key_hash=digest(key).hexdigest(), salt=salt)


class Cipher:
    """CBC cipher with a fixed key and IV.

    Every call to encrypt or decrypt starts a fresh CBC chain from the same
    IV, so identical plaintexts give identical ciphertexts.
    """

    def __init__(self, mode: str, key: bytes, iv: bytes | None = None):
        """Initialize cipher.

        Args:
            mode: DES, 3DES or AES
            key: Key material, at least the algorithm's key size; truncated to it
            iv: Initialization vector; random if omitted

        Raises:
            UnsupportedCipher: If mode is unknown or key is shorter than its key size
        """
        try:
            self._algorithm, key_size = ENCRYPTION_ALGORITHMS[mode]
        except KeyError:
            raise UnsupportedCipher(mode) from None

        if len(key) < key_size:
            raise UnsupportedCipher(mode, f"{mode} needs a {key_size}-byte key, got {len(key)} bytes")

        self.mode = mode
        self.key = key[:key_size]
        self.iv = iv if iv is not None else get_random_bytes(self._algorithm.block_size)

    def _new(self):
        return self._algorithm.new(self.key, self._algorithm.MODE_CBC, iv=self.iv)

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt data with PKCS#7 padding."""
        return self._new().encrypt(pad(data, self._algorithm.block_size))

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data and strip PKCS#7 padding."""
        return unpad(self._new().decrypt(data), self._algorithm.block_size)

    @property
    def spec(self) -> str:
        """Encryption token for the info line."""
        return f"{self.mode}:{self.iv.hex()}"
