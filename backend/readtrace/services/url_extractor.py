"""Series detection from reading-site URLs and page titles."""
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse, parse_qs

MANGADEX_TITLE_PATTERN = re.compile(
    r"^https?://(?:www\.)?mangadex\.org/title/([0-9a-f-]+)(?:/([^/?#\s]+))?",
    re.IGNORECASE,
)
MANGADEX_CHAPTER_PATTERN = re.compile(
    r"^https?://(?:www\.)?mangadex\.org/chapter/([0-9a-f-]+)",
    re.IGNORECASE,
)
WEBTOON_PATTERN = re.compile(
    r"^https?://(?:www\.|m\.)?webtoons\.com/[a-z]{2}(?:-[a-z]+)?/([^/?#]+)/([^/?#]+)/(?:[^/?#]+/)?(list|viewer)",
    re.IGNORECASE,
)

# "Chapter 12", "Ch. 12.5", "Ep. 3", "Episode 40"
CHAPTER_MARKER = re.compile(r"\b(?:ch(?:apter)?|ep(?:isode)?)\.?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
SITE_NAMES = {"mangadex", "webtoon", "webtoons", "line webtoon"}
TITLE_SEPARATORS = re.compile(r"\s+[-|–]\s+")

MAX_TITLE_LENGTH = 200


@dataclass
class ExtractedSeries:
    """Best-effort series information recovered from a URL."""
    title: str
    platform: str
    chapter: Optional[float] = None


def _title_from_slug(slug: str) -> str:
    words = [w for w in re.split(r"[-_]+", slug) if w]
    return " ".join(w.capitalize() for w in words)


def title_from_page_title(page_title: Optional[str]) -> Optional[str]:
    """Series name from a browser tab title like "Ch. 5 - One Piece - MangaDex"."""
    if not page_title:
        return None

    for part in TITLE_SEPARATORS.split(page_title.strip()):
        part = part.strip()
        if not part or part.lower() in SITE_NAMES:
            continue
        if CHAPTER_MARKER.fullmatch(part) or part.isdigit():
            continue
        return part[:MAX_TITLE_LENGTH]
    return None


def chapter_from_text(text: Optional[str]) -> Optional[float]:
    if not text:
        return None
    match = CHAPTER_MARKER.search(text)
    if match:
        return float(match.group(1))
    return None


def _episode_number(url: str) -> Optional[float]:
    values = parse_qs(urlparse(url).query).get("episode_no")
    if values and values[0].isdigit() and int(values[0]) > 0:
        return float(values[0])
    return None


def extract_series_from_url(url: str, page_title: Optional[str] = None) -> Optional[ExtractedSeries]:
    """
    Recognize a supported reading URL.

    Returns None for anything that is not a MangaDex or Webtoon series,
    chapter or episode page. A chapter page is only usable when the page
    title names the series.
    """
    if not url:
        return None

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    page_series = title_from_page_title(page_title)
    page_chapter = chapter_from_text(page_title)

    match = MANGADEX_TITLE_PATTERN.match(url)
    if match:
        series_id, slug = match.groups()
        title = page_series or (_title_from_slug(slug) if slug else series_id)
        return ExtractedSeries(title=title, platform="mangadex", chapter=page_chapter)

    if MANGADEX_CHAPTER_PATTERN.match(url):
        if not page_series:
            return None
        return ExtractedSeries(title=page_series, platform="mangadex", chapter=page_chapter)

    match = WEBTOON_PATTERN.match(url)
    if match:
        _genre, slug, _page = match.groups()
        title = page_series or _title_from_slug(slug)
        chapter = _episode_number(url) or page_chapter
        return ExtractedSeries(title=title, platform="webtoon", chapter=chapter)

    return None
