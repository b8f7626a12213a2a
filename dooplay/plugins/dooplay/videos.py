"""
DooPlay Videos - Orders video variants by the preferred quality.
"""

from typing import List

from dooplay.core.models import Video


PREF_QUALITY_KEY = "preferred_quality"


def sort_videos(videos: List[Video], preferred_quality: str) -> List[Video]:
    """
    Move variants whose quality mentions ``preferred_quality`` to the front.

    Matching is a case-insensitive substring test. Matches and non-matches
    each keep their original relative order.
    """
    wanted = preferred_quality.lower()
    return sorted(videos, key=lambda video: wanted not in video.quality.lower())


__all__ = ["PREF_QUALITY_KEY", "sort_videos"]
