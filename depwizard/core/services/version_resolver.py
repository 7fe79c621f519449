"""
Version resolver — latest published version of an npm package.

One GET per package against ``{registry}/{name}/latest``. No batching,
no retry, no caching: every call goes to the network.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from depwizard import __version__
from depwizard.core.config.loader import DEFAULT_REGISTRY_URL
from depwizard.core.errors import VersionLookupError

logger = logging.getLogger(__name__)

_USER_AGENT = f"depwizard/{__version__}"


def latest_url(name: str, registry_url: str = DEFAULT_REGISTRY_URL) -> str:
    """Registry URL of the ``latest`` dist-tag document for ``name``.

    Scoped names keep their ``@scope/`` prefix unescaped.
    """
    return f"{registry_url.rstrip('/')}/{urllib.parse.quote(name, safe='@/')}/latest"


def resolve_latest_version(
    name: str,
    *,
    registry_url: str = DEFAULT_REGISTRY_URL,
    timeout: float | None = None,
) -> str:
    """Return the latest version string published for ``name``.

    Raises:
        VersionLookupError: non-200 status, network failure, or a body
            without a string ``version`` field.
    """
    url = latest_url(name, registry_url)
    logger.debug("GET %s", url)

    req = urllib.request.Request(
        url,
        headers={
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        },
    )
    try:
        if timeout is None:
            resp = urllib.request.urlopen(req)
        else:
            resp = urllib.request.urlopen(req, timeout=timeout)
        with resp:
            status = resp.getcode()
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise VersionLookupError(name, f"HTTP {e.code}") from e
    except (urllib.error.URLError, OSError) as e:
        raise VersionLookupError(name, e) from e

    if status != 200:
        raise VersionLookupError(name, f"HTTP {status}")

    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise VersionLookupError(name, f"malformed response body: {e}") from e

    version = payload.get("version") if isinstance(payload, dict) else None
    if not isinstance(version, str) or not version:
        raise VersionLookupError(name, "response has no 'version' field")

    logger.info("Resolved %s → %s", name, version)
    return version


class VersionResolver:
    """Callable wrapper carrying registry settings through a run."""

    def __init__(self, registry_url: str = DEFAULT_REGISTRY_URL, timeout: float | None = None):
        self.registry_url = registry_url
        self.timeout = timeout

    def __call__(self, name: str) -> str:
        return resolve_latest_version(
            name,
            registry_url=self.registry_url,
            timeout=self.timeout,
        )
