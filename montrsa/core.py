"""RSA keys and raw encryption and decryption over big integers."""

from __future__ import annotations

import logging
import string

from montrsa.context import MAX_WORDS, WORD_BITS, MontgomeryContext, MontgomeryError
from montrsa.montgomery import mont_exp

logger = logging.getLogger(__name__)

MAX_BITS = MAX_WORDS * WORD_BITS
"""Largest value, in bits, that a key component or message may hold."""

MONTGOMERY_MIN_BITS = 512
"""Moduli shorter than this use plain square-and-multiply."""

_HEX_DIGITS = frozenset(string.hexdigits)


class RsaError(ValueError):
    """Raised when a key or message is invalid or an RSA operation fails."""

    def __init__(self, message: str, code: int = -1) -> None:
        super().__init__(message)
        self.code = code


def _check_width(value: int, what: str) -> int:
    if value.bit_length() > MAX_BITS:
        raise RsaError(f"{what} exceeds {MAX_BITS} bits", -2)
    return value


def _parse_decimal(text: str, what: str) -> int:
    if not text or not text.isascii() or not text.isdigit():
        raise RsaError(f"failed to parse {what}: not a decimal number", -2)
    return _check_width(int(text), what)


def _parse_hex(text: str, what: str) -> int:
    if not text or not all(ch in _HEX_DIGITS for ch in text):
        raise RsaError(f"failed to parse {what}: not a hexadecimal number", -2)
    return _check_width(int(text, 16), what)


def _parse_binary(data: bytes, what: str) -> int:
    return _check_width(int.from_bytes(data, "big"), what)


def _to_bytes(value: int) -> bytes:
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")


def hybrid_mod_exp(
    base: int, exponent: int, modulus: int, ctx: MontgomeryContext | None = None
) -> int:
    """Return base^exponent mod modulus.

    Montgomery exponentiation is used when the context is active for this
    modulus and the modulus is at least 512 bits; otherwise plain modular
    exponentiation is used.
    """
    if base < 0 or exponent < 0 or modulus < 0:
        raise ValueError("operands must be non-negative")
    if modulus == 0:
        raise RsaError("modulus cannot be zero", -2)

    use_montgomery = (
        ctx is not None
        and ctx.is_active
        and ctx.n == modulus
        and modulus & 1 == 1
        and modulus.bit_length() >= MONTGOMERY_MIN_BITS
    )
    if use_montgomery:
        try:
            return mont_exp(base % modulus, exponent, ctx) % modulus
        except MontgomeryError as exc:
            logger.info("Montgomery exponentiation failed (%d), using fallback", exc.code)
    return pow(base, exponent, modulus)


class RsaKey:
    """A modulus and an exponent, public or private, with its Montgomery context."""

    def __init__(self, n: int, exponent: int, is_private: bool = False) -> None:
        if n < 0 or exponent < 0:
            raise ValueError("key components must be non-negative")
        _check_width(n, "modulus")
        _check_width(exponent, "exponent")
        if n == 0:
            raise RsaError("modulus cannot be zero", -3)
        if exponent == 0:
            raise RsaError("exponent cannot be zero", -4)

        self.n = n
        self.exponent = exponent
        self.is_private = bool(is_private)
        self.context: MontgomeryContext | None = None

        if n & 1 == 0:
            logger.info("even modulus, traditional exponentiation will be used")
            return
        try:
            self.context = MontgomeryContext(n)
        except MontgomeryError as exc:
            logger.info("Montgomery initialisation failed (%d), using fallback", exc.code)

    def __repr__(self) -> str:
        kind = "private" if self.is_private else "public"
        return f"RsaKey(bits={self.n.bit_length()}, {kind})"

    @classmethod
    def from_decimal(cls, n_decimal: str, e_decimal: str, is_private: bool = False) -> RsaKey:
        """Build a key from decimal strings."""
        n = _parse_decimal(n_decimal, "modulus")
        exponent = _parse_decimal(e_decimal, "exponent")
        return cls(n, exponent, is_private)

    @classmethod
    def from_binary(cls, n_data: bytes, e_data: bytes, is_private: bool = False) -> RsaKey:
        """Build a key from big-endian byte strings."""
        if not n_data or not e_data:
            raise RsaError("data size cannot be zero", -2)
        n = _parse_binary(n_data, "modulus")
        exponent = _parse_binary(e_data, "exponent")
        return cls(n, exponent, is_private)

    def _power(self, value: int) -> int:
        return hybrid_mod_exp(value, self.exponent, self.n, self.context)

    def encrypt(self, message_decimal: str) -> str:
        """Encrypt a decimal message and return the ciphertext as lower-case hex."""
        message = _parse_decimal(message_decimal, "message")
        if message >= self.n:
            raise RsaError("message must be less than modulus", -3)
        if message == 0:
            return "0"
        return format(self._power(message), "x")

    def decrypt(self, encrypted_hex: str) -> str:
        """Decrypt a hex ciphertext and return the message in decimal."""
        if not self.is_private:
            raise RsaError("decryption requires private key", -2)
        encrypted = _parse_hex(encrypted_hex, "encrypted message")
        if encrypted >= self.n:
            raise RsaError("encrypted message must be less than modulus", -4)
        if encrypted == 0:
            return "0"
        return str(self._power(encrypted))

    def encrypt_binary(self, message: bytes) -> bytes:
        """Encrypt big-endian message bytes and return the ciphertext bytes.

        With a modulus of 8 bits or fewer only the first byte is encrypted.
        """
        if not message:
            raise RsaError("message size cannot be zero", -2)
        if self.n.bit_length() <= 8 and len(message) > 1:
            logger.warning(
                "message too large (%d bytes), encrypting first byte only", len(message)
            )
            message = message[:1]
        value = _parse_binary(message, "message")
        if value >= self.n:
            raise RsaError("message must be less than modulus", -4)
        return _to_bytes(self._power(value))

    def decrypt_binary(self, encrypted: bytes) -> bytes:
        """Decrypt ciphertext bytes and return the message bytes."""
        if not self.is_private:
            raise RsaError("decryption requires private key", -2)
        if not encrypted:
            raise RsaError("encrypted size cannot be zero", -3)
        value = _parse_binary(encrypted, "encrypted message")
        if value >= self.n:
            raise RsaError("encrypted message must be less than modulus", -5)
        return _to_bytes(self._power(value))