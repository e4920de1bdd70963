"""Credential handling for remote URLs."""

import re
from typing import Iterable, List, Optional
from urllib.parse import urlsplit, urlunsplit

from git_workspace_keeper.exceptions import InvalidEndpointError

_USERINFO_PATTERN = re.compile(r"(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*://)[^/@\s]+@")
_NETWORK_SCHEMES = ("http", "https", "ssh", "git", "ftp", "ftps")


def strip_credentials(url: str) -> str:
    """Remove a ``user@`` or ``token@`` segment from an https URL.

    Other schemes are returned untouched, so ``git@host:org/repo.git`` keeps
    its user part.
    """
    if "@" not in url or not url.lower().startswith("https://"):
        return url
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))


def embed_token(endpoint: str, token: Optional[str]) -> str:
    """Return ``endpoint`` with ``token`` embedded as https userinfo.

    The token is only embedded into https endpoints; anything else (ssh,
    file paths, empty tokens) comes back unchanged.
    """
    if not token or not token.strip() or not endpoint.lower().startswith("https://"):
        return endpoint
    return f"https://{token.strip()}@{endpoint[len('https://'):]}"


def redact_credentials(text: str) -> str:
    """Replace the userinfo part of every URL in ``text`` with ``***``."""
    return _USERINFO_PATTERN.sub(r"\g<scheme>***@", text)


def redact_args(args: Iterable[str]) -> List[str]:
    """Redact every argument of a command line."""
    return [redact_credentials(str(arg)) for arg in args]


def validate_endpoint(endpoint: str) -> str:
    """Check that ``endpoint`` can name a repository and return it.

    Accepted: ``scheme://`` URLs (network schemes need a host), scp-like
    ``user@host:path`` addresses and filesystem paths.

    Raises:
        InvalidEndpointError: for blank endpoints, endpoints containing
            whitespace and URLs missing their host or path
    """
    if not isinstance(endpoint, str) or not endpoint or any(ch.isspace() for ch in endpoint):
        raise InvalidEndpointError(redact_credentials(str(endpoint)))

    if "://" in endpoint:
        try:
            parts = urlsplit(endpoint)
        except ValueError:
            raise InvalidEndpointError(redact_credentials(endpoint)) from None
        has_host = bool(parts.netloc.rpartition("@")[2])
        if not parts.scheme or (parts.scheme.lower() in _NETWORK_SCHEMES and not has_host):
            raise InvalidEndpointError(redact_credentials(endpoint))
        if not has_host and not parts.path:
            raise InvalidEndpointError(redact_credentials(endpoint))
    return endpoint
