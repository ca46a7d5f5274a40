# culinary/services/ids.py
import re
from typing import Optional

from culinary.services.types import VideoSource

VIDEO_HOSTS = ("youtube.com", "youtu.be", "vimeo.com", "tiktok.com")

# Same path shapes the embed player accepts; ids are always 11 chars
_YT_ID_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def looks_like_video(uri: str, title: str) -> bool:
    """True for links on a known video host or whose title mentions a video."""
    if any(host in uri for host in VIDEO_HOSTS):
        return True
    return "video" in title.lower()


def video_source(uri: str) -> VideoSource:
    return "YouTube" if "youtube" in uri else "Web"


def youtube_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id of a YouTube URL, or None."""
    match = _YT_ID_RE.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None
