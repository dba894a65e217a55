"""Records yielded by the image and text searches."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True, slots=True)
class ImageResult:
    """Single image hit; URL fields are already normalised."""

    title: str
    image: str
    thumbnail: str
    url: str
    height: int
    width: int
    source: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TextResult:
    """Single web result with markup stripped from title and body."""

    title: str
    href: str
    body: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


__all__ = ["ImageResult", "TextResult"]
