"""Supported reading platforms and preference handling."""
import re
from dataclasses import dataclass
from typing import Optional, List, Any
from urllib.parse import urlparse


@dataclass(frozen=True)
class Platform:
    """A site where series can be read."""
    id: str
    name: str
    url: str
    url_pattern: re.Pattern


SUPPORTED_PLATFORMS: List[Platform] = [
    Platform(
        id="mangadex",
        name="MangaDex",
        url="https://mangadex.org",
        url_pattern=re.compile(r"^https?://(?:www\.)?mangadex\.org/", re.IGNORECASE),
    ),
    Platform(
        id="webtoon",
        name="Webtoon",
        url="https://www.webtoons.com",
        url_pattern=re.compile(r"^https?://(?:www\.|m\.)?webtoons\.com/", re.IGNORECASE),
    ),
    Platform(
        id="manganelo",
        name="MangaNelo",
        url="https://manganelo.com",
        url_pattern=re.compile(r"^https?://(?:www\.)?manganelo\.com/", re.IGNORECASE),
    ),
    Platform(
        id="mangakakalot",
        name="MangaKakalot",
        url="https://mangakakalot.com",
        url_pattern=re.compile(r"^https?://(?:www\.)?mangakakalot\.com/", re.IGNORECASE),
    ),
]

DEFAULT_PREFERRED_PLATFORMS = ["mangadex"]

# Display names keyed by lower-cased identifier, including legacy host-style ids
DISPLAY_NAMES = {
    "mangadex": "MangaDex",
    "webtoon": "Webtoon",
    "webtoons": "Webtoon",
    "www.webtoons.com": "Webtoon",
    "webtoons.com": "Webtoon",
    "manganelo": "MangaNelo",
    "mangakakalot": "MangaKakalot",
    "unknown": "Unknown Platform",
}


def get_platform_by_id(platform_id: str) -> Optional[Platform]:
    """Look up a catalog entry."""
    for platform in SUPPORTED_PLATFORMS:
        if platform.id == platform_id:
            return platform
    return None


def get_platform_name(platform_id: str) -> str:
    """Catalog name for an id, or the id itself when unknown."""
    platform = get_platform_by_id(platform_id)
    return platform.name if platform else platform_id


def is_supported_platform(platform_id: str) -> bool:
    return get_platform_by_id(platform_id) is not None


def validate_preferences(preferences: Any) -> bool:
    """True for a non-empty list made only of catalog ids."""
    if not isinstance(preferences, list):
        return False
    if not preferences:
        return False
    return all(isinstance(p, str) and is_supported_platform(p) for p in preferences)


def normalize_preferences(
    preferences: List[str],
    default: Optional[List[str]] = None,
) -> List[str]:
    """Drop unknown ids and repeats, keeping order.

    Falls back to the default list when nothing usable remains.
    """
    seen = set()
    valid = []
    for platform_id in preferences:
        if not isinstance(platform_id, str) or platform_id in seen:
            continue
        if is_supported_platform(platform_id):
            seen.add(platform_id)
            valid.append(platform_id)

    if valid:
        return valid
    return list(default if default is not None else DEFAULT_PREFERRED_PLATFORMS)


def detect_platform(url: str) -> Optional[str]:
    """Catalog id whose URL pattern matches an absolute http(s) URL."""
    if not url:
        return None

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    for platform in SUPPORTED_PLATFORMS:
        if platform.url_pattern.match(url):
            return platform.id
    return None


def normalize_platform(platform: str) -> str:
    """
    Normalize a platform identifier that may be a name, host or URL.

    - "WEBTOON", "www.webtoons.com" -> "webtoon"
    - "MangaDex", "https://mangadex.org" -> "mangadex"
    - anything else is lower-cased and trimmed
    """
    normalized = (platform or "").lower().strip()

    if "webtoon" in normalized:
        return "webtoon"

    if "mangadex" in normalized:
        return "mangadex"

    return normalized


def get_platform_display_name(platform: str) -> str:
    """User-facing platform label."""
    return DISPLAY_NAMES.get(platform.lower(), platform)
