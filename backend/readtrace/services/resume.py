"""Resume URL selection across platforms.

Priority order:
1. Manual override (explicit one-time choice)
2. Preferred platforms, in the user's order
3. Last manually selected platform
4. Most recent platform
5. First alternative with a resume URL
"""
from dataclasses import dataclass, field
from typing import Optional, List

from readtrace.services.progress import UnifiedProgress


@dataclass
class PlatformPreferences:
    """A user's ordered platform preferences."""
    preferred_platforms: List[str] = field(default_factory=list)
    last_selected_platform: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "PlatformPreferences":
        return cls(
            preferred_platforms=list(user.preferred_platforms or []),
            last_selected_platform=user.last_selected_platform,
        )


def _resume_url_for(unified: UnifiedProgress, platform: str) -> Optional[str]:
    """Resume URL recorded for a platform, checking the most recent one first."""
    if unified.platform == platform and unified.resume_url:
        return unified.resume_url

    for alt in unified.alternatives:
        if alt.platform == platform and alt.resume_url:
            return alt.resume_url

    return None


def select_resume_url(
    unified: Optional[UnifiedProgress],
    preferences: PlatformPreferences,
    manual_override: Optional[str] = None,
) -> Optional[str]:
    """Pick the URL a "continue reading" action should open.

    Platform ids are compared exactly; normalize them beforehand.
    Returns None when no platform has a usable URL.
    """
    if unified is None:
        return None

    if manual_override:
        for alt in unified.alternatives:
            if alt.platform == manual_override and alt.resume_url:
                return alt.resume_url
        if unified.platform == manual_override and unified.resume_url:
            return unified.resume_url

    for preferred in preferences.preferred_platforms or []:
        url = _resume_url_for(unified, preferred)
        if url:
            return url

    if preferences.last_selected_platform:
        url = _resume_url_for(unified, preferences.last_selected_platform)
        if url:
            return url

    if unified.resume_url:
        return unified.resume_url

    for alt in unified.alternatives:
        if alt.resume_url:
            return alt.resume_url

    return None


def get_available_platforms(unified: Optional[UnifiedProgress]) -> List[str]:
    """Platforms with progress, most recent first, without repeats."""
    if unified is None:
        return []

    platforms = [unified.platform]
    for alt in unified.alternatives:
        if alt.platform not in platforms:
            platforms.append(alt.platform)
    return platforms


def is_valid_platform(platform: str, unified: Optional[UnifiedProgress]) -> bool:
    """Whether the series has progress on the given platform."""
    if unified is None:
        return False

    if unified.platform == platform:
        return True

    return any(alt.platform == platform for alt in unified.alternatives)
