"""
httpdebug.redaction
~~~~~~~~~~~~~~~~~~~
Redaction policy and helpers that keep secrets out of rendered commands.

Design principles
-----------------
* **Case-insensitive matching** - header and query parameter names are
  compared with :meth:`str.casefold`, so ``Authorization`` and
  ``AUTHORIZATION`` are treated alike.
* **Immutable policy** - :class:`RedactionPolicy` is a frozen pydantic
  model; "adding" a secret returns a new policy.
* **Duplicates are harmless** - entries are kept as given, never
  deduplicated.
* **Canonical re-encoding** - a URL whose query had a value redacted is
  re-encoded with parameters stably sorted by key.  URLs with nothing to
  redact are returned untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

import httpx
from pydantic import BaseModel, ConfigDict, Field

# Placeholder written in place of a secret query parameter value.
REDACTED_PARAM = "REDACTED"

# Placeholder written in place of a secret header value.
REDACTED_HEADER = "<REDACTED>"

DEFAULT_SECRET_HEADERS: tuple[str, ...] = ("authorization",)
DEFAULT_SECRET_PARAMS: tuple[str, ...] = ("client_secret",)


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


class RedactionPolicy(BaseModel):
    """Names of headers and query parameters whose values must never be shown.

    Example::

        policy = RedactionPolicy().with_secret_header("X-Api-Key")
        policy.is_secret_header("x-api-key")  # True
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    secret_headers: tuple[str, ...] = Field(
        default=DEFAULT_SECRET_HEADERS,
        description="Header names (case-insensitive) rendered as <REDACTED>.",
    )
    secret_params: tuple[str, ...] = Field(
        default=DEFAULT_SECRET_PARAMS,
        description="Query parameter names (case-insensitive) rendered as REDACTED.",
    )

    @classmethod
    def empty(cls) -> RedactionPolicy:
        """Return a policy that redacts nothing, not even the defaults."""
        return cls(secret_headers=(), secret_params=())

    def with_secret_header(self, name: str) -> RedactionPolicy:
        """Return a copy with *name* appended; blank names are ignored."""
        if not name.strip():
            return self
        return type(self)(
            secret_headers=(*self.secret_headers, name),
            secret_params=self.secret_params,
        )

    def with_secret_param(self, name: str) -> RedactionPolicy:
        """Return a copy with *name* appended; blank names are ignored."""
        if not name.strip():
            return self
        return type(self)(
            secret_headers=self.secret_headers,
            secret_params=(*self.secret_params, name),
        )

    def is_secret_header(self, key: str) -> bool:
        return _matches(key, self.secret_headers)

    def is_secret_param(self, key: str) -> bool:
        return _matches(key, self.secret_params)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _matches(key: str, names: Iterable[str]) -> bool:
    folded = key.casefold()
    return any(folded == name.casefold() for name in names)


def escape_single_quote(text: str) -> str:
    """Prefix every single quote in *text* with a backslash.

    Example::

        >>> escape_single_quote("I'd")
        "I\\\\'d"
    """
    return text.replace("'", "\\'")


def sanitize_url(url: httpx.URL | None, policy: RedactionPolicy) -> str:
    """Render *url* with the values of secret query parameters replaced.

    A parameter is redacted when *policy* marks its name as secret and at
    least one of its values is non-empty.  All of its values collapse
    into a single ``REDACTED``.  When anything was redacted the query is
    re-encoded in canonical order (stable sort by key); otherwise the URL
    is rendered exactly as given.

    Args:
        url: The request URL, or ``None``.
        policy: Supplies the secret parameter names.

    Returns:
        The URL as a string, or ``""`` when *url* is ``None``.
    """
    if url is None:
        return ""

    params = url.params
    redact = {
        key
        for key in params.keys()
        if policy.is_secret_param(key) and any(params.get_list(key))
    }
    if not redact:
        return str(url)

    canonical: list[tuple[str, str]] = []
    for key in sorted(params.keys()):
        if key in redact:
            canonical.append((key, REDACTED_PARAM))
        else:
            canonical.extend((key, value) for value in params.get_list(key))
    return str(url.copy_with(params=canonical))
