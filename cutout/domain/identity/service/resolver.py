"""Anonymous identity resolution from request cookies."""

import logging
from collections.abc import Mapping

from cutout.config import IdentityConfig
from cutout.domain.identity.model.value import IdentityDirective, OwnerId, ResolvedIdentity
from cutout.domain.shared.service import Service

logger = logging.getLogger(__name__)


def read_parsed_cookies(cookies: Mapping[str, str] | None, name: str) -> OwnerId | None:
    """Look the identity up in a cookie map a framework already parsed."""
    if not cookies:
        return None
    value = cookies.get(name)
    if not isinstance(value, str) or not OwnerId.is_valid(value):
        return None
    return OwnerId(value)


def parse_cookie_header(header: str | None, name: str) -> OwnerId | None:
    """Look the identity up by splitting a raw Cookie header by hand."""
    if not header:
        return None
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key.strip() == name:
            value = value.strip().strip('"')
            if OwnerId.is_valid(value):
                return OwnerId(value)
            return None
    return None


class IdentityResolver(Service):
    """Derives the caller's identity, issuing a new one on first contact.

    Lookup strategies are tried in order: the pre-parsed cookie map, then the
    raw header. Neither raises; a malformed cookie counts as no identity.
    """

    config: IdentityConfig

    def resolve(
        self,
        parsed_cookies: Mapping[str, str] | None,
        raw_header: str | None,
    ) -> ResolvedIdentity:
        name = self.config.cookie_name
        owner = read_parsed_cookies(parsed_cookies, name) or parse_cookie_header(raw_header, name)
        if owner is not None:
            return ResolvedIdentity(owner_id=owner)

        owner = OwnerId.generate()
        logger.debug("Issued new anonymous identity %s", owner)
        return ResolvedIdentity(
            owner_id=owner,
            directive=IdentityDirective(
                cookie_name=name,
                value=str(owner),
                max_age=self.config.max_age,
                same_site=self.config.same_site,
                secure=self.config.secure,
                http_only=self.config.http_only,
            ),
        )
