"""
AppStream presentation helpers.

Builds the ``<branding>`` metadata snippet and resolves Flathub application
ids from user input.
"""
import re
from typing import Optional
from urllib.parse import quote

APPSTREAM_API = "https://flathub.org/api/v2/appstream/"

_FLATHUB_URL_RE = re.compile(r"https?://[^/]*flathub\.org/(?:[^/]+/)?apps/(.+)$", re.IGNORECASE)
_FLATHUB_PATH_RE = re.compile(r"flathub\.org/.+/apps/(.+)$", re.IGNORECASE)


def build_branding_snippet(light_hex: str, dark_hex: str) -> str:
    """AppStream branding block with the light and dark scheme colors."""
    return (
        "<branding>\n"
        f"  <color type=\"primary\" scheme_preference=\"light\">{light_hex}</color>\n"
        f"  <color type=\"primary\" scheme_preference=\"dark\">{dark_hex}</color>\n"
        "</branding>"
    )


def extract_app_id(text: Optional[str]) -> Optional[str]:
    """
    Resolve an application id from a Flathub URL or a bare id.

    Accepts ``https://flathub.org/[<lang>/]apps/<id>``, scheme-less
    ``flathub.org/.../apps/<id>`` or the id itself. Trailing slashes are
    dropped. Returns None for empty input.
    """
    if not text:
        return None
    text = text.strip()
    if not text:
        return None

    for pattern in (_FLATHUB_URL_RE, _FLATHUB_PATH_RE):
        match = pattern.search(text)
        if match:
            return match.group(1).rstrip('/') or None
    return text


def appstream_api_url(app_id: str) -> str:
    """Flathub AppStream JSON endpoint for an application id."""
    return APPSTREAM_API + quote(app_id, safe='')
