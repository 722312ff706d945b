"""
Filename generation for rendered images.
Names are sortable by time and carry a short random id to avoid collisions.
"""

import random
import re
import uuid
from datetime import datetime
from typing import Optional


IMAGE_EXTENSION = ".png"

FILENAME_PATTERN = re.compile(
    r"^ai-(?P<style>[\w-]*)-(?P<date>\d{4}-\d{2}-\d{2})-(?P<time>\d{2}-\d{2}-\d{2})"
    r"-(?P<prompt>[\w-]*)-(?P<id>[0-9a-f]{6})\.png$"
)

_UNSAFE_CHARS = re.compile(r"[^\w-]+")

# Keeps the whole name under the 255-byte filesystem limit even for 4-byte characters
MAX_STYLE_CHARS = 20
MAX_PROMPT_CHARS = 32


def _slug(text: str) -> str:
    """Lowercase and strip everything except word characters and hyphens."""
    return _UNSAFE_CHARS.sub("", text.lower())


def make_random_id(rng: Optional[random.Random] = None, length: int = 6) -> str:
    """
    Build a short random id from a UUID4.

    Args:
        rng: Optional seeded random source; the module RNG is used otherwise
        length: Number of hex characters to keep

    Returns:
        Lowercase hex string
    """
    if rng is None:
        return uuid.uuid4().hex[:length]
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex[:length]


def make_filename(
    prompt: str,
    style: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Derive a unique, sortable filename for a generated image.

    Format: ai-{style}-{YYYY-MM-DD}-{HH-MM-SS}-{first-three-words}-{id}.png

    Args:
        prompt: Text prompt the image was rendered from
        style: Requested style keyword
        now: Timestamp to embed (defaults to the current local time)
        rng: Optional seeded random source for the id suffix

    Returns:
        Filename with no path components
    """
    if now is None:
        now = datetime.now()

    prompt_short = "-".join(_slug(word) for word in prompt.split()[:3])[:MAX_PROMPT_CHARS]
    style_short = _slug(style)[:MAX_STYLE_CHARS]
    date_str = now.strftime("%Y-%m-%d")
    time_str = now.strftime("%H-%M-%S")
    random_id = make_random_id(rng)

    return f"ai-{style_short}-{date_str}-{time_str}-{prompt_short}-{random_id}{IMAGE_EXTENSION}"
