"""
Password-based authenticated encryption for stored credentials.

Uses AES-256-GCM from the cryptography library with a key derived from the
user's password via PBKDF2-HMAC-SHA512 (100,000 iterations).

Serialized format: hex(iv):hex(ciphertext):hex(tag)
The salt (hex) is returned and stored separately from the blob.

decrypt() fails closed: any malformed input or authentication failure yields
None, without revealing which check failed.
"""
import logging
import os
import re
from typing import Optional, Union
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from story_drafter.models.credentials import EncryptedCredentials

logger = logging.getLogger(__name__)

KEY_LENGTH = 32  # 256 bits
IV_LENGTH = 16
SALT_LENGTH = 16
TAG_LENGTH = 16
ITERATIONS = 100_000
SEPARATOR = ":"

# encrypt() emits lowercase hex; anything else is treated as tampering
LOWER_HEX_PATTERN = re.compile(r"[0-9a-f]*")


class CipherError(ValueError):
    """Raised when the cipher is called with invalid arguments (caller bug)."""
    pass


def derive_key(password: str, salt: bytes) -> bytes:
    """
    Derive a 256-bit key from a password and salt.

    Deliberately slow; callers in an event loop should run this in a worker thread.

    Args:
        password: User-chosen password
        salt: Raw salt bytes

    Returns:
        32-byte key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=ITERATIONS,
    )
    return kdf.derive(password.encode("utf-8"))


def _coerce_salt(salt: Union[bytes, str, None]) -> bytes:
    if salt is None:
        return os.urandom(SALT_LENGTH)
    if isinstance(salt, (bytes, bytearray)):
        salt_bytes = bytes(salt)
    elif isinstance(salt, str):
        try:
            salt_bytes = bytes.fromhex(salt)
        except ValueError as e:
            raise CipherError(f"Salt must be a hex string: {str(e)}") from e
    else:
        raise CipherError(f"Salt must be bytes or a hex string, got {type(salt).__name__}")
    if not salt_bytes:
        raise CipherError("Salt cannot be empty")
    return salt_bytes


def encrypt(plaintext: str, password: str, salt: Union[bytes, str, None] = None) -> EncryptedCredentials:
    """
    Encrypt plaintext under a password.

    A fresh random IV is used on every call, even when a salt is reused, so two
    encryptions of the same plaintext never produce the same blob.

    Args:
        plaintext: Text to encrypt (may be empty)
        password: User password
        salt: Optional salt (bytes or hex string); random 16 bytes if omitted

    Returns:
        EncryptedCredentials with the serialized blob and hex salt

    Raises:
        CipherError: If a supplied salt is malformed
    """
    salt_bytes = _coerce_salt(salt)
    key = derive_key(password, salt_bytes)
    iv = os.urandom(IV_LENGTH)

    # AESGCM appends the tag to the ciphertext
    sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

    encrypted_data = SEPARATOR.join([iv.hex(), ciphertext.hex(), tag.hex()])
    return EncryptedCredentials(encrypted_data=encrypted_data, salt=salt_bytes.hex())


def decrypt(encrypted_data: str, password: str, salt_hex: str) -> Optional[str]:
    """
    Decrypt a blob produced by encrypt().

    Args:
        encrypted_data: hex(iv):hex(ciphertext):hex(tag)
        password: User password
        salt_hex: Hex salt returned by encrypt()

    Returns:
        Decrypted plaintext, or None on any failure (wrong password, tampering,
        malformed input)
    """
    try:
        parts = encrypted_data.split(SEPARATOR)
        if len(parts) != 3:
            raise ValueError("unexpected segment count")

        iv_hex, ciphertext_hex, tag_hex = parts
        if not all(LOWER_HEX_PATTERN.fullmatch(part) for part in parts):
            raise ValueError("segments must be lowercase hex")
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ciphertext_hex)
        tag = bytes.fromhex(tag_hex)
        salt = bytes.fromhex(salt_hex)
        if len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH or not salt:
            raise ValueError("unexpected segment length")

        key = derive_key(password, salt)
        plaintext = AESGCM(key).decrypt(iv, ciphertext + tag, None)
        return plaintext.decode("utf-8")
    except (InvalidTag, ValueError, TypeError, AttributeError):
        # Single outcome for every failure mode
        logger.warning("Credential decryption failed")
        return None


def validate_password(encrypted_data: str, password: str, salt_hex: str) -> bool:
    """Return True if password decrypts the blob (an empty plaintext counts)."""
    return decrypt(encrypted_data, password, salt_hex) is not None
