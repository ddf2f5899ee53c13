"""Montgomery reduction and the arithmetic built on it."""

from __future__ import annotations

import logging

from montrsa.context import MAX_WORDS, WORD_BITS, WORD_MASK, MontgomeryContext, MontgomeryError

logger = logging.getLogger(__name__)

_WORD_HEADROOM = 10


def _require_active(ctx: MontgomeryContext, code: int) -> None:
    if not ctx.is_active or ctx.n_words == 0:
        raise MontgomeryError("Montgomery context is disabled", code)


def _check_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def redc(t: int, ctx: MontgomeryContext) -> int:
    """Return T * R^-1 mod n for T < n * R, with one final subtraction of n.

    Additions are carried out within a working width of 2 * n_words + 10
    words (at most 128), as in a fixed-size word buffer.
    """
    _check_non_negative(t, "T")
    _require_active(ctx, -2)
    if ctx.n == 0 or ctx.n_prime == 0:
        raise MontgomeryError("invalid Montgomery context parameters", -3)

    if t.bit_length() > WORD_BITS * (ctx.n_words * 2 + 5):
        logger.warning("REDC input has %d bits for a %d-word modulus", t.bit_length(), ctx.n_words)

    max_words = min(ctx.n_words * 2 + _WORD_HEADROOM, MAX_WORDS)
    width_mask = (1 << (WORD_BITS * max_words)) - 1

    a = t
    for i in range(ctx.n_words):
        shift = WORD_BITS * i
        m = (((a >> shift) & WORD_MASK) * ctx.n_prime) & WORD_MASK
        low = a & width_mask
        high = a - low
        a = high | ((low + ((m * ctx.n) << shift)) & width_mask)

    result = a >> (WORD_BITS * ctx.n_words)
    if result >= ctx.n:
        result -= ctx.n
    if result >= ctx.n:
        logger.debug("REDC output still exceeds the modulus")
    return result


def to_form(a: int, ctx: MontgomeryContext) -> int:
    """Convert a to Montgomery form, a * R mod n; inputs >= n are reduced first."""
    _check_non_negative(a, "value")
    _require_active(ctx, -2)
    if a >= ctx.n:
        logger.warning("input >= modulus in to_form, reducing")
        a %= ctx.n

    result = redc(a * ctx.r_squared, ctx)
    if result >= ctx.n:
        raise MontgomeryError("to_form produced invalid result >= modulus", -97)
    if result == 0 and a != 0:
        logger.warning("non-zero input produced zero Montgomery form")

    if ctx.n_words == 1 and from_form(result, ctx) != a:
        raise MontgomeryError("round-trip validation failed in to_form", -96)
    return result


def from_form(a: int, ctx: MontgomeryContext) -> int:
    """Convert a out of Montgomery form, a * R^-1 mod n; inputs >= n are reduced first."""
    _check_non_negative(a, "value")
    _require_active(ctx, -2)
    if a >= ctx.n:
        logger.warning("Montgomery input >= modulus in from_form, reducing")
        a %= ctx.n

    result = redc(a, ctx)
    if result >= ctx.n:
        raise MontgomeryError("from_form produced invalid result >= modulus", -95)
    if result == 0 and a != 0:
        logger.warning("non-zero Montgomery input produced zero normal form")
    return result


def mont_mul(a: int, b: int, ctx: MontgomeryContext) -> int:
    """Return a * b * R^-1 mod n."""
    _check_non_negative(a, "a")
    _check_non_negative(b, "b")
    _require_active(ctx, -1)
    return redc(a * b, ctx)


def mont_square(a: int, ctx: MontgomeryContext) -> int:
    """Return a * a * R^-1 mod n."""
    return mont_mul(a, a, ctx)


def mont_exp(base: int, exponent: int, ctx: MontgomeryContext) -> int:
    """Return base^exponent mod n by left-to-right square-and-multiply.

    An exponent of zero gives 1 and a base of zero gives 0.
    """
    _check_non_negative(base, "base")
    _check_non_negative(exponent, "exponent")
    _require_active(ctx, -1)

    if exponent == 0:
        return 1
    if base == 0:
        return 0

    mont_base = to_form(base, ctx)
    mont_result = to_form(1, ctx)
    bits = exponent.bit_length()
    for i in reversed(range(bits)):
        if i < bits - 1:
            mont_result = mont_square(mont_result, ctx)
        if (exponent >> i) & 1:
            mont_result = mont_mul(mont_result, mont_base, ctx)
    return from_form(mont_result, ctx)