"""Markdown image handling for entry content.

Attached images are stored inside the entry body as markdown image lines,
so a thread document stays a single self-contained text file.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")
_IMAGE_LINE_RE = re.compile(r"!\[[^\]]*\]\([^)]+\)\n?")


def extract_images(content: str) -> tuple[str, list[str]]:
    """Split content into its text and the sources of any markdown images.

    Returns:
        (text_without_image_markup, image_sources) in document order.
    """
    if not content:
        return "", []
    images = _IMAGE_RE.findall(content)
    text = _IMAGE_LINE_RE.sub("", content).strip()
    return text, images


def attach_images(text: str, images: Sequence[str] | None) -> str:
    """Append images to text as ``![image-N](src)`` lines after a blank line."""
    if not images:
        return text
    markup = "\n".join(f"![image-{idx}]({src})" for idx, src in enumerate(images, start=1))
    return f"{text}\n\n{markup}" if text else markup
