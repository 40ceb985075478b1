"""Load signing identities from configured secret material."""

from __future__ import annotations

import re
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from missionclaim.config.errors import InvalidSecretKeyError, NoIdentitiesError

from .signing import VALID_SECRET_LENGTHS, KeyMismatchError, b58decode, derive_public_identity
from .types import Identity

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def load_secret_entries(source: str) -> list[str]:
    """Return encoded secret entries from ``source``.

    ``source`` is either a path to a file with one entry per line, or a single
    encoded secret. Blank lines and ``#`` comments are dropped.
    """

    value = source.strip()
    path = Path(value)
    if value and path.is_file():
        log.debug("Reading secret keys from %s", path)
        raw = path.read_text(encoding="utf-8")
        lines = (line.strip() for line in _LINE_SPLIT.split(raw))
        return [line for line in lines if line and not line.startswith("#")]
    return [value] if value else []


def decode_secret(entry: str, *, ordinal: int) -> bytes:
    try:
        decoded = b58decode(entry)
    except ValueError as exc:
        raise InvalidSecretKeyError("not valid base58", ordinal=ordinal) from exc
    if len(decoded) not in VALID_SECRET_LENGTHS:
        raise InvalidSecretKeyError(
            f"must decode to 32 or 64 bytes, got {len(decoded)}",
            ordinal=ordinal,
        )
    return decoded


def build_identity(secret_material: bytes, *, ordinal: int) -> Identity:
    try:
        public_key, wallet_id = derive_public_identity(secret_material)
    except KeyMismatchError as exc:
        raise InvalidSecretKeyError(str(exc), ordinal=ordinal) from exc
    return Identity(
        secret_material=secret_material,
        public_key=public_key,
        wallet_id=wallet_id,
        ordinal=ordinal,
    )


def identities_from_entries(entries: Sequence[str]) -> list[Identity]:
    """Decode every entry in order, keeping each identity's 1-based entry ordinal.

    Malformed entries are logged as configuration errors and left out; the load
    only fails when no entry survives.
    """

    identities: list[Identity] = []
    for index, entry in enumerate(entries, start=1):
        try:
            identities.append(build_identity(decode_secret(entry, ordinal=index), ordinal=index))
        except InvalidSecretKeyError as exc:
            log.error("Configuration error, skipping account #%d: %s", index, exc)  # noqa: TRY400
    if not identities:
        raise NoIdentitiesError("No valid secret keys configured")
    return identities


def load_identities(source: str) -> list[Identity]:
    identities = identities_from_entries(load_secret_entries(source))
    log.info("Loaded %d account(s)", len(identities))
    return identities
