"""Key scheme: owner-scoped storage keys and the inverse ownership check.

Keys look like ``images/<owner>/<millis>-<suffix>.png``. Uniqueness rests on
the millisecond timestamp plus a random base36 suffix; nothing checks for
collisions, and a collision would only overwrite the same owner's object.
"""

import re
import secrets
import string
from collections.abc import Callable
from datetime import UTC, datetime
from urllib.parse import urlsplit

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.model.value import KEY_ROOT, AssetKey, owner_prefix

BASE36_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 10
EXTENSION = "png"

_URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def utcnow() -> datetime:
    return datetime.now(UTC)


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def make_key(
    owner: OwnerId,
    clock: Callable[[], datetime] = utcnow,
    suffix: Callable[[], str] = random_suffix,
) -> AssetKey:
    millis = int(clock().timestamp() * 1000)
    return AssetKey(f"{owner_prefix(owner)}{millis}-{suffix()}.{EXTENSION}")


def extract_key(key_or_url: str) -> AssetKey | None:
    """Normalize a raw key or a full retrieval URL to a storage key.

    For URLs only the path is considered. The candidate is everything from
    the first ``images/`` on. Returns None when there is no such substring or
    the candidate has empty, ``.`` or ``..`` segments or backslashes.
    """
    candidate = key_or_url.strip()
    if _URL_SCHEME.match(candidate):
        candidate = urlsplit(candidate).path

    start = candidate.find(KEY_ROOT)
    if start < 0:
        return None
    candidate = candidate[start:]

    if "\\" in candidate:
        return None
    if any(segment in ("", ".", "..") for segment in candidate.split("/")):
        return None
    return AssetKey(candidate)


def owns(key_or_url: str, owner: OwnerId) -> bool:
    key = extract_key(key_or_url)
    return key is not None and key.is_owned_by(owner)
