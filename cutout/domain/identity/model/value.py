"""Value objects for anonymous caller identity."""

import re
from dataclasses import dataclass
from uuid import uuid4

from pydantic import field_validator

from cutout.domain.shared.model.value import RootValueObject

OWNER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class OwnerId(RootValueObject[str]):
    """Opaque token naming one anonymous caller.

    It has no server-side record; its only meaning is the storage namespace
    ``images/<owner>/``. The charset excludes ``/`` and ``.`` so a token can
    never reach outside its own prefix.
    """

    @field_validator("root")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not OWNER_ID_PATTERN.match(v):
            raise ValueError(f"Invalid owner id: {v!r}")
        return v

    @classmethod
    def generate(cls) -> "OwnerId":
        return cls(str(uuid4()))

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(OWNER_ID_PATTERN.match(value))


@dataclass(frozen=True)
class IdentityDirective:
    """Instruction for the client to persist a freshly issued identity."""

    cookie_name: str
    value: str
    max_age: int
    same_site: str = "lax"
    secure: bool = True
    http_only: bool = True
    path: str = "/"

    def header_value(self) -> str:
        """Render as the value of a Set-Cookie header."""
        parts = [f"{self.cookie_name}={self.value}", f"Path={self.path}"]
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        parts.append(f"SameSite={self.same_site.capitalize()}")
        parts.append(f"Max-Age={self.max_age}")
        return "; ".join(parts)


@dataclass(frozen=True)
class ResolvedIdentity:
    """Identity of the current request, plus the directive if it was just issued."""

    owner_id: OwnerId
    directive: IdentityDirective | None = None

    @property
    def is_new(self) -> bool:
        return self.directive is not None
