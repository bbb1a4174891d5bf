from __future__ import annotations

import base64
import binascii
import os
import re
from dataclasses import dataclass
from urllib.parse import unquote, unquote_to_bytes, urlparse

from bs4 import BeautifulSoup

from data.client import BackendError


IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "avif", "bmp", "svg"}

# Elements that start a new line of visible text
_BLOCK_TAGS = [
    "p", "div", "br", "li", "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "pre", "tr", "section", "article", "figure", "figcaption",
]


@dataclass(frozen=True)
class ImageRef:
    src: str
    alt: str = ""


@dataclass(frozen=True)
class ImageDownload:
    url: str
    filename: str


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def html_to_text(html: str) -> str:
    """
    Visible text of a story body with every tag removed.

    Inline markup joins without extra spaces (`<p>Hello <b>world</b></p>` ->
    `Hello world`); block elements end up on separate lines.
    """
    soup = _soup(html)
    for tag in soup(["script", "style", "template"]):
        tag.decompose()

    lines: list[str] = []
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")

    for raw in soup.get_text().split("\n"):
        line = re.sub(r"[ \t\r\f\v\xa0]+", " ", raw).strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


def find_images(html: str) -> list[ImageRef]:
    """Every `<img>` with a src, in document order."""
    refs = []
    for img in _soup(html).find_all("img"):
        src = (img.get("src") or "").strip()
        if src:
            refs.append(ImageRef(src=src, alt=(img.get("alt") or "").strip()))
    return refs


def _extension(url: str) -> str:
    if is_data_url(url):
        mime = url[5:].split(",", 1)[0].split(";", 1)[0]
        ext = mime.rsplit("/", 1)[-1].split("+", 1)[0].lower()
    else:
        ext = os.path.splitext(urlparse(url).path)[1].lstrip(".").lower()
    if ext == "jpeg":
        return "jpg"
    return ext if ext in IMAGE_EXTENSIONS else "jpg"


def image_downloads(html: str) -> list[ImageDownload]:
    return [
        ImageDownload(url=ref.src, filename=f"image-{i}.{_extension(ref.src)}")
        for i, ref in enumerate(find_images(html), start=1)
    ]


def is_data_url(url: str) -> bool:
    return url[:5].lower() == "data:"


def decode_data_url(url: str) -> bytes:
    """
    Payload of an inline `data:` image, base64 or percent-encoded.
    Malformed payloads raise BackendError like any other failed download.
    """
    header, sep, payload = url[5:].partition(",")
    if not is_data_url(url) or not sep:
        raise BackendError("Could not download inline image: malformed data URL")
    try:
        if header.lower().endswith(";base64"):
            return base64.b64decode("".join(unquote(payload).split()), validate=True)
        return unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as e:
        raise BackendError("Could not download inline image: invalid encoding") from e
