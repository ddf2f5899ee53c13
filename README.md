# montrsa

This package does raw ("textbook") RSA encryption and decryption. The
arithmetic is Montgomery REDC over 32-bit words. Where Montgomery
reduction is not used, for example with an even or short modulus, the
package falls back to ordinary modular exponentiation.

## What it does not do

- It has no padding scheme.
- It has no key generation. Keys are supplied as integers, decimal strings
  or big-endian bytes.
- It has no command-line program. It is a library only.

Use it to learn from, or to check other implementations against. Do not
use it to protect real data.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Keys and encryption

```python
from montrsa.core import RsaKey

public = RsaKey.from_decimal("35", "5", False)
private = RsaKey.from_decimal("35", "5", True)

ciphertext = public.encrypt("2")         # lower-case hex string: "20" (= 32)
plaintext = private.decrypt(ciphertext)  # "2"
```

`RsaKey(n, exponent, is_private)` takes integers directly. Key components
and messages may hold at most 4096 bits. A zero modulus or a zero exponent
is rejected.

To load a key from big-endian bytes, use `RsaKey.from_binary`.
`encrypt_binary` and `decrypt_binary` work on `bytes`:

```python
public = RsaKey.from_binary(b"\x23", b"\x05", False)
private = RsaKey.from_binary(b"\x23", b"\x05", True)

private.decrypt_binary(public.encrypt_binary(b"\x02"))  # b"\x02"
```

The following rules apply to messages and keys:

- A message or ciphertext must be smaller than the modulus.
- A message of zero encrypts to `"0"`, and a ciphertext of zero decrypts to `"0"`.
- Decryption needs a key loaded with `is_private=True`.
- If the modulus has 8 bits or fewer, `encrypt_binary` encrypts only the first byte of the message.

Failures raise `montrsa.core.RsaError`, which is a subclass of
`ValueError` and carries a numeric `code`.

## Montgomery arithmetic

`montrsa.context.MontgomeryContext(modulus)` precomputes the values REDC
needs for an odd modulus:

- R
- n'
- R² mod n
- R⁻¹ mod n, where it can be found; otherwise it is left as 0

`is_active` tells whether the context can be used. It is `False` when R
would not fit the 4096-bit working width. `describe()` returns a text
summary of the context.

An even or zero modulus raises `montrsa.context.MontgomeryError` when a
context is built. A negative modulus raises `ValueError`.

The helpers `word_inverse`, `montgomery_nprime` and `extended_gcd_full`
are also in `montrsa.context`.

`montrsa.montgomery` provides `redc`, `to_form`, `from_form`, `mont_mul`,
`mont_square` and `mont_exp`:

```python
from montrsa.context import MontgomeryContext
from montrsa.montgomery import mont_exp, to_form, from_form

ctx = MontgomeryContext(35)
mont_exp(7, 11, ctx)             # 7**11 % 35
from_form(to_form(4, ctx), ctx)  # 4
```

`montrsa.core.hybrid_mod_exp(base, exponent, modulus, ctx)` returns
`base ** exponent % modulus`. It uses Montgomery exponentiation only when
all of these hold:

- `ctx` is active.
- `ctx` belongs to this modulus.
- The modulus is odd.
- The modulus is at least 512 bits.

In every other case, it uses ordinary modular exponentiation. `ctx` may
be `None`.