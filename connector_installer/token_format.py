from __future__ import annotations

import re

# Enrollment URLs are only issued from these domains.
TOKEN_DOMAINS = ("fyde.com", "access.barracuda.com")

_TOKEN_RE = re.compile(
    r"https://[a-zA-Z0-9.-]+\.(?:"
    + "|".join(re.escape(d) for d in TOKEN_DOMAINS)
    + r")/connectors/v[0-9]+/[0-9]+"
    r"\?auth_token=[0-9a-zA-Z]+"
    r"&tenant_id=[0-9a-fA-F]{8}-(?:[0-9a-fA-F]{4}-){3}[0-9a-fA-F]{12}"
)

_AUTH_TOKEN_VALUE_RE = re.compile(r"(auth_token=)[0-9a-zA-Z]+")


def validate_token(token: str) -> bool:
    """Return True if ``token`` is a well-formed connector enrollment URL.

    Purely syntactic; nothing is contacted.
    """
    if not token:
        return False
    return _TOKEN_RE.fullmatch(token) is not None


def redact_token(text: str) -> str:
    return _AUTH_TOKEN_VALUE_RE.sub(r"\1***", text)
