import pytest

from montrsa.context import MontgomeryContext
from montrsa.core import RsaError, RsaKey, hybrid_mod_exp

LARGE_MOD_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74020BBEA63B139B22"
    "514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245E485B576625E7EC6"
    "F44C42E9A637ED6B0BFF5CB6F406B7EDEE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
    "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3BE39E772C180E8603"
    "9B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF6955817183560A25A75A5A93B3"
)

N_1024 = (
    "179769313486231570814527423731704356798070567525844996598917476803157260780028538"
    "760589558632766878171540458953514382464234321326889464182768467546703537516986049"
    "910576551282076245490090389328944075868508455133942304583236903222948165808559332"
    "123348274797826204144723168738177180919299881250404026184124858368"
)


@pytest.fixture
def keys_35():
    return RsaKey.from_decimal("35", "5", False), RsaKey.from_decimal("35", "5", True)


@pytest.mark.parametrize("message,expected", [("2", 32), ("3", 33), ("4", 9)])
def test_verification_vectors(keys_35, message, expected):
    pub, priv = keys_35
    encrypted = pub.encrypt(message)
    assert int(encrypted, 16) == expected
    assert priv.decrypt(encrypted) == message


@pytest.mark.parametrize("message", ["2", "3", "4", "10", "15", "30"])
def test_round_trip_small_modulus(keys_35, message):
    pub, priv = keys_35
    assert priv.decrypt(pub.encrypt(message)) == message


def test_large_key_round_trip():
    pub = RsaKey.from_decimal("143", "7", False)
    priv = RsaKey.from_decimal("143", "103", True)
    encrypted = pub.encrypt("42")
    assert priv.decrypt(encrypted) == "42"


def test_binary_round_trip(keys_35):
    pub, priv = keys_35
    encrypted = pub.encrypt_binary(b"\x02")
    assert encrypted == b"\x20"
    assert priv.decrypt_binary(encrypted) == b"\x02"


def test_binary_truncates_for_tiny_modulus(keys_35):
    pub, _ = keys_35
    assert pub.encrypt_binary(b"\x02\x05") == b"\x20"


def test_from_binary_matches_decimal():
    key = RsaKey.from_binary(b"\x23", b"\x05", True)
    assert key.n == 35 and key.exponent == 5 and key.is_private
    assert key.decrypt("20") == "2"


def test_from_binary_rejects_empty():
    with pytest.raises(RsaError) as info:
        RsaKey.from_binary(b"", b"\x05")
    assert info.value.code == -2


def test_zero_message_and_ciphertext(keys_35):
    pub, priv = keys_35
    assert pub.encrypt("0") == "0"
    assert priv.decrypt("0") == "0"


def test_message_not_below_modulus(keys_35):
    pub, priv = keys_35
    with pytest.raises(RsaError) as info:
        pub.encrypt("35")
    assert info.value.code == -3
    with pytest.raises(RsaError) as info:
        priv.decrypt("23")
    assert info.value.code == -4


def test_decrypt_requires_private_key(keys_35):
    pub, _ = keys_35
    with pytest.raises(RsaError) as info:
        pub.decrypt("20")
    assert info.value.code == -2
    with pytest.raises(RsaError) as info:
        pub.decrypt_binary(b"\x20")
    assert info.value.code == -2


def test_zero_components_rejected():
    with pytest.raises(RsaError) as info:
        RsaKey.from_decimal("0", "5")
    assert info.value.code == -3
    with pytest.raises(RsaError) as info:
        RsaKey.from_decimal("35", "0")
    assert info.value.code == -4


@pytest.mark.parametrize("text", ["", "12a", "-5", " 7"])
def test_bad_decimal_rejected(text):
    with pytest.raises(RsaError):
        RsaKey.from_decimal(text, "5")


def test_bad_hex_rejected(keys_35):
    _, priv = keys_35
    with pytest.raises(RsaError):
        priv.decrypt("xyz")


def test_rsa_1024_even_modulus_loads_without_montgomery():
    pub = RsaKey.from_decimal(N_1024, "65537", False)
    assert pub.context is None
    encrypted = int(pub.encrypt("12345"), 16)
    assert 0 < encrypted < pub.n


def test_odd_key_has_active_context(keys_35):
    pub, _ = keys_35
    assert pub.context is not None and pub.context.is_active


def test_hybrid_small_modulus():
    ctx = MontgomeryContext(143)
    assert hybrid_mod_exp(5, 7, 143, ctx) == 47


def test_hybrid_large_modulus_inactive_context():
    large_mod = int(LARGE_MOD_HEX, 16)
    assert hybrid_mod_exp(2, 17, large_mod, None) == 131072


def test_hybrid_large_modulus_montgomery_path():
    large_mod = int(LARGE_MOD_HEX, 16)
    ctx = MontgomeryContext(large_mod)
    assert ctx.is_active
    assert hybrid_mod_exp(2, 17, large_mod, ctx) == 131072
    assert hybrid_mod_exp(3, 5, large_mod, ctx) == 243


def test_hybrid_even_modulus():
    assert hybrid_mod_exp(3, 5, 1024, None) == 243


def test_hybrid_null_context():
    assert hybrid_mod_exp(5, 7, 143, None) == 47


def test_algorithms_consistent():
    ctx = MontgomeryContext(35)
    assert hybrid_mod_exp(7, 11, 35, ctx) == 28
    assert hybrid_mod_exp(7, 11, 35, None) == 28


@pytest.mark.parametrize(
    "base,exponent,modulus,expected",
    [
        (0, 1, 35, 0),
        (7, 0, 35, 1),
        (5, 0, 35, 1),
        (1, 999999, 35, 1),
        (5, 1, 1, 0),
        (34, 1, 35, 34),
        (34, 2, 35, 1),
        (0, 0, 35, 1),
        (1, 100, 35, 1),
    ],
)
def test_edge_cases(base, exponent, modulus, expected):
    assert hybrid_mod_exp(base, exponent, modulus, None) == expected


def test_large_exponent_result_in_range():
    result = hybrid_mod_exp(2, 1000000, 35, MontgomeryContext(35))
    assert 0 <= result < 35
    assert hybrid_mod_exp(result, 1, 35, None) == result


def test_zero_modulus_rejected():
    with pytest.raises(RsaError):
        hybrid_mod_exp(5, 5, 0, None)