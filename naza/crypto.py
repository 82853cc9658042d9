"""AES-CBC encryption and PKCS#5/PKCS#7 padding."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

COMMON_IV = bytes(range(16))


class PaddingError(ValueError):
    """Raised when PKCS padding cannot be removed."""


def encrypt_aes_cbc(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt block-aligned ``data``; a 16, 24 or 32 byte key picks AES-128/192/256."""
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(bytes(data)) + encryptor.finalize()


def decrypt_aes_cbc(data: bytes, key: bytes, iv: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    return decryptor.update(bytes(data)) + decryptor.finalize()


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """Pad to a multiple of ``block_size`` (1 to 255); 16 for AES."""
    if not 0 < block_size <= 255:
        raise ValueError("block size must be in [1, 255]")
    padding = block_size - len(data) % block_size
    return bytes(data) + bytes([padding]) * padding


def pkcs7_unpad(data: bytes) -> bytes:
    if not data:
        raise PaddingError("no data to unpad")
    padding = data[-1]
    if len(data) < padding:
        raise PaddingError("padding longer than data")
    return bytes(data[: len(data) - padding])


def pkcs5_pad(data: bytes) -> bytes:
    return pkcs7_pad(data, 8)


def pkcs5_unpad(data: bytes) -> bytes:
    return pkcs7_unpad(data)