"""Textbook RSA over Montgomery REDC arithmetic with a plain modular-exponentiation fallback."""

__version__ = "0.1.0"
__all__ = ["context", "montgomery", "core"]