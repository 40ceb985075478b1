"""Ed25519 identity derivation and detached signatures.

Secret material comes in the two shapes Solana tooling produces: a 32-byte seed,
or a 64-byte secret key made of the seed followed by its public key. Wallet ids
are the base58 encoding of the 32-byte public key.
"""

from __future__ import annotations

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

SEED_LENGTH = 32
SECRET_KEY_LENGTH = 64
VALID_SECRET_LENGTHS = frozenset({SEED_LENGTH, SECRET_KEY_LENGTH})


class KeyMismatchError(ValueError):
    """Raised when a 64-byte secret key embeds a public key its seed does not produce."""


def b58encode(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def b58decode(text: str) -> bytes:
    return base58.b58decode(text)


def _signing_key(secret_material: bytes) -> SigningKey:
    if len(secret_material) not in VALID_SECRET_LENGTHS:
        raise ValueError(
            f"Secret material must be {SEED_LENGTH} or {SECRET_KEY_LENGTH} bytes, "
            f"got {len(secret_material)}"
        )
    return SigningKey(bytes(secret_material[:SEED_LENGTH]))


def derive_public_identity(secret_material: bytes) -> tuple[bytes, str]:
    """Return ``(public_key, wallet_id)`` for ``secret_material``.

    A 64-byte key pair is used as-is: its embedded public half becomes the
    identity, after checking that the seed half actually produces it.
    """

    derived = bytes(_signing_key(secret_material).verify_key)
    if len(secret_material) == SECRET_KEY_LENGTH:
        embedded = bytes(secret_material[SEED_LENGTH:])
        if embedded != derived:
            raise KeyMismatchError("Embedded public key does not match the secret seed")
    return derived, b58encode(derived)


def sign_detached(message: bytes, secret_material: bytes) -> bytes:
    return _signing_key(secret_material).sign(message).signature


def verify_detached(message: bytes, signature: bytes, public_key: bytes) -> bool:
    try:
        VerifyKey(public_key).verify(message, signature)
    except BadSignatureError:
        return False
    return True
