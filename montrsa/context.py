"""Montgomery parameters: word inverses, modular inverse and the reduction context."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1
MAX_WORDS = 128
"""Largest modulus, in 32-bit words, that a context accepts (4096 bits)."""

_R_HEADROOM = 10
_SMALL_MODULUS_LIMIT = 10000
_MAX_GCD_ITERATIONS = 3


class MontgomeryError(ValueError):
    """Raised when Montgomery parameters cannot be computed or used."""

    def __init__(self, message: str, code: int = -1) -> None:
        super().__init__(message)
        self.code = code


def _word_count(value: int) -> int:
    return max(1, (value.bit_length() + WORD_BITS - 1) // WORD_BITS)


def _check_word(n: int) -> None:
    if not 0 <= n <= WORD_MASK:
        raise ValueError(f"{n} does not fit in a 32-bit word")


def word_inverse(n: int) -> int:
    """Return n^-1 mod 2^32 for an odd 32-bit word, by Newton iteration."""
    _check_word(n)
    if n & 1 == 0:
        raise MontgomeryError("word is even, no inverse exists", -1)
    x = n
    for _ in range(5):
        x = (x * (2 - n * x)) & WORD_MASK
    if (n * x) & WORD_MASK != 1:
        raise MontgomeryError("word inverse verification failed", -1)
    return x


def montgomery_nprime(n: int) -> int:
    """Return n' = -n^-1 mod 2^32, so that n * n' is 0xFFFFFFFF modulo 2^32."""
    n_prime = (-word_inverse(n)) & WORD_MASK
    if (n * n_prime) & WORD_MASK != WORD_MASK:
        raise MontgomeryError("n' verification failed", -1)
    return n_prime


def extended_gcd_full(a: int, m: int) -> int:
    """Return a^-1 mod m.

    Moduli up to 10000 are solved by trial; larger ones by the extended
    Euclidean algorithm, which gives up after a small fixed number of steps.
    """
    if a < 0 or m < 0:
        raise ValueError("operands must be non-negative")
    if a == 0 or m == 0:
        raise MontgomeryError("invalid input: a or m is zero", -2)

    a_reduced = a % m

    if m <= _SMALL_MODULUS_LIMIT:
        if a_reduced == 0:
            raise MontgomeryError("no inverse exists for 0", -3)
        if a_reduced == 1:
            return 1
        for candidate in range(1, m):
            if (a_reduced * candidate) % m == 1:
                return candidate
        raise MontgomeryError("no inverse found by trial method", -3)

    old_r, r = m, a_reduced
    old_t, t = 0, 1
    iteration = 0
    while r != 0 and iteration < _MAX_GCD_ITERATIONS:
        iteration += 1
        quotient, remainder = divmod(old_r, r)
        old_r, r = r, remainder
        old_t, t = t, (old_t - quotient * t) % m
        if iteration >= _MAX_GCD_ITERATIONS:
            raise MontgomeryError(
                "extended GCD exceeded practical iterations - numbers too large", -4
            )

    if old_r != 1:
        raise MontgomeryError("gcd(a, m) != 1, no inverse exists", -5)
    if old_t >= m:
        return old_t % m
    if old_t == 0:
        raise MontgomeryError("result is zero - invalid inverse", -6)
    return old_t


class MontgomeryContext:
    """Precomputed values for Montgomery reduction modulo an odd n.

    A context whose R would not fit the working width is built inactive;
    ``is_active`` tells whether it can be used for reduction.
    """

    def __init__(self, modulus: int) -> None:
        if modulus < 0:
            raise ValueError("modulus must be non-negative")
        if modulus == 0:
            raise MontgomeryError("modulus cannot be zero", -2)
        if modulus & 1 == 0:
            raise MontgomeryError("Montgomery requires odd modulus", -3)

        self.n = modulus
        self.n_words = _word_count(modulus)
        if self.n_words > MAX_WORDS:
            raise MontgomeryError(f"invalid modulus word count: {self.n_words}", -4)

        self.r_words = self.n_words
        self.r = 0
        self.r_inv = 0
        self.r_squared = 0
        self.n_prime = 0
        self.is_active = False

        if self.r_words >= MAX_WORDS - _R_HEADROOM:
            logger.info("R would overflow, Montgomery disabled")
            return

        self.r = 1 << (WORD_BITS * self.r_words)
        if self.r <= self.n:
            raise MontgomeryError("R must be > n", -4)

        try:
            self.n_prime = montgomery_nprime(modulus & WORD_MASK)
        except MontgomeryError as exc:
            raise MontgomeryError("failed to compute Montgomery n'", -5) from exc

        try:
            self.r_inv = extended_gcd_full(self.r, self.n)
        except MontgomeryError as exc:
            logger.warning("R^-1 mod n not available (%d)", exc.code)
            self.r_inv = 0

        r_mod_n = self.r % self.n
        self.r_squared = (r_mod_n * r_mod_n) % self.n
        self.is_active = True

    def __repr__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"MontgomeryContext(bits={self.n.bit_length()}, {state})"

    def describe(self) -> str:
        """Summarise the context's parameters as multi-line text."""
        lines = ["=== Montgomery REDC Context ==="]
        if self.is_active and self.n_words > 0:
            lines += [
                "Status: ACTIVE",
                f"Modulus bits: {self.n.bit_length()}",
                f"R bits: {self.r.bit_length()}",
                f"n_words: {self.n_words}, r_words: {self.r_words}",
                f"n' = 0x{self.n_prime:08x}",
            ]
        lines.append("=" * 30)
        return "\n".join(lines)