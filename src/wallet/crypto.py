"""
Wallet Crypto - Deterministic key derivation for Sui accounts.

- BIP-39 seed phrases
- SLIP-0010 Ed25519 HD derivation (hardened children only)
- Sui addresses: SHA3-256(scheme flag || public key), first 20 bytes

Keys are derived on demand from the seed phrase and never persisted.
"""

import hashlib
import re
from typing import Optional

# Cryptography
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

# BIP-39
from mnemonic import Mnemonic
from eth_account.hdaccount import generate_mnemonic, seed_from_mnemonic

# SLIP-0010
from bip_utils import Bip32KeyError, Bip32PathError, Bip32Slip10Ed25519

from utils import ensure_hex_prefix


# ============================================
# Constants
# ============================================

# SLIP-0044 coin type for Sui
COIN_TYPE = 784

# Sui derivation path; only the account segment varies
SUI_DERIVATION_PATH = "m/44'/784'/{}'/0'/0'"

# Signature scheme flag prepended to the public key before hashing
ED25519_FLAG = 0x00
SUI_ADDRESS_LENGTH = 20

_SLIP10_PATH_RE = re.compile(r"^m(/[0-9]+')*$")
_SUI_HARDENED_PATH_RE = re.compile(r"^m/44'/784'/[0-9]+'/[0-9]+'/[0-9]+'+$")


# ============================================
# Seed Phrases
# ============================================

def normalize_seed_phrase(seed_phrase: str) -> str:
    """Lowercase and collapse whitespace."""
    return " ".join(part.lower() for part in seed_phrase.strip().split())


def is_valid_seed_phrase(seed_phrase: str) -> bool:
    """Check a seed phrase against the English BIP-39 wordlist and checksum."""
    return Mnemonic("english").check(normalize_seed_phrase(seed_phrase))


def generate_seed_phrase(word_count: int = 12) -> str:
    """
    Generate a fresh seed phrase.

    Args:
        word_count: 12 (128-bit) or 24 (256-bit) word seed
    """
    if word_count not in (12, 24):
        raise ValueError("word_count must be 12 or 24")
    return generate_mnemonic(num_words=word_count, lang="english")


# ============================================
# SLIP-0010 Derivation
# ============================================

def is_valid_hardened_path(path: str) -> bool:
    """Check that path has the Sui shape m/44'/784'/a'/b'/c'."""
    return bool(_SUI_HARDENED_PATH_RE.match(path))


def derive_path(path: str, seed: bytes) -> tuple[bytes, bytes]:
    """
    SLIP-0010 Ed25519 derivation.

    Ed25519 only supports hardened children, so every segment after `m`
    must end with an apostrophe.

    Returns: (key, chain_code)
    """
    if not _SLIP10_PATH_RE.match(path):
        raise ValueError(f"Invalid derivation path: {path} (Ed25519 supports hardened segments only)")

    try:
        ctx = Bip32Slip10Ed25519.FromSeedAndPath(seed, path)
    except (Bip32KeyError, Bip32PathError) as e:
        raise ValueError(f"Invalid derivation path: {path}") from e

    key = ctx.PrivateKey().Raw().ToBytes()
    chain_code = ctx.ChainCode().ToBytes()
    return key, chain_code


# ============================================
# Addresses
# ============================================

def to_sui_address(public_key: bytes) -> str:
    """Derive the 0x-prefixed Sui address of an Ed25519 public key."""
    digest = hashlib.sha3_256(bytes([ED25519_FLAG]) + public_key).hexdigest()
    return ensure_hex_prefix(digest[:SUI_ADDRESS_LENGTH * 2])


# ============================================
# Key Pair
# ============================================

class KeyPair:
    """
    Ed25519 key pair for one Sui account.

    Usage:
        keypair = KeyPair.derive(seed_phrase, "m/44'/784'/0'/0'/0'")
        address = keypair.address()
        signature = keypair.sign(tx_bytes)
    """

    SIGNATURE_SCHEME = "ED25519"

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key

    @classmethod
    def from_seed(cls, seed: bytes) -> 'KeyPair':
        """Build a key pair from a 32-byte secret seed."""
        if len(seed) != 32:
            raise ValueError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls(Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def from_private_key(cls, private_key: bytes) -> 'KeyPair':
        """Build a key pair from a private key (first 32 bytes are the seed)."""
        return cls.from_seed(private_key[:32])

    @classmethod
    def derive(cls, seed_phrase: str, path: Optional[str] = None) -> 'KeyPair':
        """
        Derive the key pair at `path` from a BIP-39 seed phrase.

        Args:
            seed_phrase: 12 or 24 word BIP-39 seed phrase
            path: Sui derivation path, defaults to account 0

        Raises:
            ValueError: invalid seed phrase or derivation path
        """
        path = path or SUI_DERIVATION_PATH.format(0)
        if not is_valid_hardened_path(path):
            raise ValueError(f"Invalid derivation path: {path}")

        seed_phrase = normalize_seed_phrase(seed_phrase)
        if not Mnemonic("english").check(seed_phrase):
            raise ValueError("Invalid seed phrase")

        seed = seed_from_mnemonic(seed_phrase, passphrase="")
        key, _ = derive_path(path, seed)
        return cls.from_seed(key)

    def public_key_bytes(self) -> bytes:
        """32-byte raw public key."""
        return self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def public_key_hex(self) -> str:
        """0x-prefixed hex public key."""
        return ensure_hex_prefix(self.public_key_bytes().hex())

    def private_key_bytes(self) -> bytes:
        """
        32-byte private seed.

        WARNING: Handle with extreme care!
        """
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def address(self) -> str:
        """The account's Sui address."""
        return to_sui_address(self.public_key_bytes())

    def sign(self, data: bytes) -> bytes:
        """Sign bytes. Returns a 64-byte Ed25519 signature."""
        return self._private_key.sign(bytes(data))
