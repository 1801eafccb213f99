"""
We test SLIP-0010 derivation, Sui addresses and the KeyPair class
"""
import re

import pytest
from eth_account.hdaccount import seed_from_mnemonic

from wallet import (
    KeyPair,
    derive_path,
    generate_seed_phrase,
    is_valid_hardened_path,
    is_valid_seed_phrase,
    to_sui_address,
)
from wallet.crypto import normalize_seed_phrase

SLIP10_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")


def test_slip10_master_vector():
    key, chain_code = derive_path("m", SLIP10_SEED)
    assert key.hex() == "2b4be7f19ee27bbf30c667b642d5f4aa69fd169872f8fc3059c08ebae2eb19e7"
    assert chain_code.hex() == "90046a93de5380a72b5e45010748567d5ea02bbf6522f979e05c0d8d8ca9fffb"

    keypair = KeyPair.from_seed(key)
    assert keypair.public_key_bytes().hex() == \
        "a4b2856bfec510abab89753fac1ac0e1112364e7d250545963f135f2a33188ed"


def test_slip10_hardened_child_vector():
    key, chain_code = derive_path("m/0'", SLIP10_SEED)
    assert key.hex() == "68e0fe46dfb67e368c75379acec591dad19df3cde26e63b93a8e704f1dade7a3"
    assert chain_code.hex() == "8b59aa11380b624e81507a27fedda59fea6d0b779a778918a2fd3590e16e9c69"


def test_non_hardened_segment_rejected():
    with pytest.raises(ValueError):
        derive_path("m/0'/1", SLIP10_SEED)


@pytest.mark.parametrize("path", ["", "m/", "m/abc'", "44'/784'"])
def test_malformed_path_rejected(path):
    with pytest.raises(ValueError, match="Invalid derivation path"):
        derive_path(path, SLIP10_SEED)


def test_sui_path_matches_keypair(phrase):
    key, chain_code = derive_path("m/44'/784'/0'/0'/0'", seed_from_mnemonic(phrase, passphrase=""))
    assert len(key) == 32
    assert len(chain_code) == 32
    assert KeyPair.from_seed(key).address() == KeyPair.derive(phrase).address()


def test_address_format(phrase):
    keypair = KeyPair.derive(phrase)
    address = keypair.address()
    assert re.fullmatch(r"0x[0-9a-f]{40}", address)
    assert address == to_sui_address(keypair.public_key_bytes())
    assert keypair.public_key_hex().startswith("0x")
    assert len(keypair.private_key_bytes()) == 32


def test_derivation_is_deterministic(phrase):
    first = KeyPair.derive(phrase, "m/44'/784'/0'/0'/0'")
    second = KeyPair.derive(phrase)
    other = KeyPair.derive(phrase, "m/44'/784'/1'/0'/0'")
    assert first.address() == second.address()
    assert first.address() != other.address()


def test_seed_phrase_is_normalized(phrase):
    messy = "  " + phrase.upper().replace(" ", "   ") + "\n"
    assert normalize_seed_phrase(messy) == phrase
    assert KeyPair.derive(messy).address() == KeyPair.derive(phrase).address()


def test_invalid_seed_phrase(phrase):
    bad_checksum = phrase.replace("about", "abandon")
    assert not is_valid_seed_phrase(bad_checksum)
    with pytest.raises(ValueError, match="Invalid seed phrase"):
        KeyPair.derive(bad_checksum)


@pytest.mark.parametrize("path, valid", [
    ("m/44'/784'/0'/0'/0'", True),
    ("m/44'/784'/19'/0'/0'", True),
    ("m/44'/784'/0'/0/0", False),
    ("m/44'/60'/0'/0'/0'", False),
    ("44'/784'/0'/0'/0'", False),
])
def test_hardened_path_validation(path, valid):
    assert is_valid_hardened_path(path) is valid


def test_invalid_path_rejected(phrase):
    with pytest.raises(ValueError, match="Invalid derivation path"):
        KeyPair.derive(phrase, "m/44'/784'/0'/0/0")


def test_from_private_key_roundtrip(phrase):
    keypair = KeyPair.derive(phrase)
    restored = KeyPair.from_private_key(keypair.private_key_bytes() + keypair.public_key_bytes())
    assert restored.address() == keypair.address()


def test_sign_verifies(phrase):
    keypair = KeyPair.derive(phrase)
    signature = keypair.sign(b"tx bytes")
    assert len(signature) == 64
    # raises InvalidSignature on mismatch
    keypair._private_key.public_key().verify(signature, b"tx bytes")


def test_generate_seed_phrase():
    words = generate_seed_phrase().split()
    assert len(words) == 12
    assert is_valid_seed_phrase(" ".join(words))
    assert len(generate_seed_phrase(24).split()) == 24
    with pytest.raises(ValueError):
        generate_seed_phrase(15)
