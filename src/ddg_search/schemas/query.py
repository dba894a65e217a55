"""Pydantic models describing a search and the parameters sent per endpoint."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ddg_search.utils.errors import InvalidQuery, MissingKeywords


class SafeSearch(str, Enum):
    """Safe-search levels understood by both verticals."""

    ON = "on"
    MODERATE = "moderate"
    OFF = "off"


IMAGES_SAFESEARCH: Dict[SafeSearch, int] = {
    SafeSearch.ON: 1,
    SafeSearch.MODERATE: 1,
    SafeSearch.OFF: -1,
}
"""Value of the ``p`` parameter sent to the images endpoint."""


class SearchQuery(BaseModel):
    """Immutable description of a single search call."""

    model_config = ConfigDict(frozen=True)

    keywords: str = Field(..., min_length=1, description="Search terms, mandatory.")
    region: str = Field("wt-wt", description="Backend region code, e.g. ``us-en``.")
    safesearch: SafeSearch = Field(SafeSearch.MODERATE)
    timelimit: Optional[str] = Field(None, description="Time filter (d, w, m, y).")
    size: Optional[str] = None
    color: Optional[str] = None
    type_image: Optional[str] = None
    layout: Optional[str] = None
    license_image: Optional[str] = None

    @field_validator("safesearch", mode="before")
    @classmethod
    def lower_safesearch(cls, value: object) -> object:
        """Accept ``"Moderate"`` and friends by lower-casing plain strings."""
        if isinstance(value, str) and not isinstance(value, SafeSearch):
            return value.strip().lower()
        return value

    @classmethod
    def create(cls, keywords: str | None, **options: object) -> "SearchQuery":
        """Validate the inputs, raising client errors instead of ``ValidationError``."""
        if not keywords:
            raise MissingKeywords("Keywords are mandatory")
        try:
            return cls(keywords=keywords, **options)
        except ValidationError as exc:
            fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
            raise InvalidQuery(
                f"Invalid search query: {', '.join(fields)}",
                details={"fields": list(fields)},
            ) from exc

    def image_filters(self) -> str:
        """Return the comma-joined filter field of the images endpoint."""
        values = (
            self.timelimit,
            self.size,
            self.color,
            self.type_image,
            self.layout,
            self.license_image,
        )
        return ",".join(value or "" for value in values)


class ProbeParams(BaseModel):
    """Query string of the root page request used to obtain the vqd token."""

    q: str

    def to_query(self) -> Dict[str, str]:
        return {"q": self.q}


class ImagesParams(BaseModel):
    """Query string of the images JSON endpoint."""

    l: str  # noqa: E741
    q: str
    vqd: str
    f: str
    p: int
    s: str = "0"
    o: str = "json"

    @classmethod
    def from_query(cls, query: SearchQuery, vqd: str) -> "ImagesParams":
        return cls(
            l=query.region,
            q=query.keywords,
            vqd=vqd,
            f=query.image_filters(),
            p=IMAGES_SAFESEARCH[query.safesearch],
        )

    def to_query(self) -> Dict[str, str]:
        return {
            "l": self.l,
            "o": self.o,
            "s": self.s,
            "q": self.q,
            "vqd": self.vqd,
            "f": self.f,
            "p": str(self.p),
        }


class TextParams(BaseModel):
    """Query string of the text (links) JSON endpoint.

    Safe search maps onto two mutually exclusive fields: ``ex`` carries the
    exclusion flag for ``moderate``/``off`` while ``p`` is only sent for ``on``.
    """

    q: str
    kl: str
    l: str  # noqa: E741
    vqd: str
    df: Optional[str] = None
    s: str = "0"
    o: str = "json"
    sp: str = "0"
    ex: Optional[str] = None
    p: Optional[str] = None

    @classmethod
    def from_query(cls, query: SearchQuery, vqd: str) -> "TextParams":
        ex: Optional[str] = None
        p: Optional[str] = None
        if query.safesearch is SafeSearch.MODERATE:
            ex = "-1"
        elif query.safesearch is SafeSearch.OFF:
            ex = "-2"
        else:
            p = "1"
        return cls(
            q=query.keywords,
            kl=query.region,
            l=query.region,
            vqd=vqd,
            df=query.timelimit,
            ex=ex,
            p=p,
        )

    def to_query(self) -> Dict[str, str]:
        params: Dict[str, str] = {
            "q": self.q,
            "kl": self.kl,
            "l": self.l,
            "s": self.s,
            "vqd": self.vqd,
            "o": self.o,
            "sp": self.sp,
        }
        if self.df:
            params["df"] = self.df
        if self.ex is not None:
            params["ex"] = self.ex
        if self.p is not None:
            params["p"] = self.p
        return params


__all__ = [
    "IMAGES_SAFESEARCH",
    "ImagesParams",
    "ProbeParams",
    "SafeSearch",
    "SearchQuery",
    "TextParams",
]
