# strapi_catalog/models/product.py

"""Product data model mapped from the CMS ``products`` collection."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

JSONValue = Union[
    str, int, float, bool, None, list["JSONValue"], dict[str, "JSONValue"]
]


class Category(str, Enum):
    """Product categories known to this package; the CMS may add more."""

    HUEVOS = "huevos"
    GALLINAS = "gallinas"
    POLLOS = "pollos"
    CERDOS = "cerdos"
    ALIMENTOS = "alimentos"
    ACCESORIOS = "accesorios"


CATEGORY_LABELS: dict[str, str] = {
    "huevos": "Huevos",
    "gallinas": "Gallinas",
    "pollos": "Pollos",
    "cerdos": "Cerdos",
    "alimentos": "Alimentos",
    "accesorios": "Accesorios",
}


def category_label(category: Category | str) -> str:
    """Return the display label for *category*, or the raw value if unknown."""
    value = category.value if isinstance(category, Category) else category
    return CATEGORY_LABELS.get(value, value)


@dataclass(frozen=True)
class RichText:
    """Opaque rich-text blocks, passed through to rendering untouched."""

    content: JSONValue


def _parse_datetime(value: Any) -> datetime:
    """Parse a CMS ISO-8601 timestamp (``Z`` suffix included)."""
    if not isinstance(value, str):
        raise ValueError(f"expected ISO timestamp, got {value!r}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _rich_text(value: Any) -> RichText | None:
    return None if value is None else RichText(value)


def _expect_object(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"expected {what} object, got {type(raw).__name__}")
    return raw


def _optional_int(value: Any) -> int | None:
    # SVGs and non-image uploads carry null dimensions
    return None if value is None else int(value)


def _parse_category(value: Any) -> Category | str | None:
    """Map known values onto the enum; keep newer CMS values as plain strings."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected category string, got {type(value).__name__}")
    try:
        return Category(value)
    except ValueError:
        return value


@dataclass
class MediaFormat:
    """A derived size of an uploaded image (e.g. ``thumbnail``)."""

    url: str
    width: int | None
    height: int | None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "MediaFormat":
        raw = _expect_object(raw, "media format")
        return cls(
            url=raw["url"],
            width=_optional_int(raw.get("width")),
            height=_optional_int(raw.get("height")),
        )


@dataclass
class MediaImage:
    """An uploaded media file as returned by ``populate=*``."""

    id: int
    document_id: str
    name: str
    url: str
    width: int | None = None
    height: int | None = None
    alternative_text: str | None = None
    formats: dict[str, MediaFormat] = field(default_factory=dict)

    @property
    def thumbnail(self) -> MediaFormat | None:
        return self.formats.get("thumbnail")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "MediaImage":
        raw = _expect_object(raw, "media")
        formats = _expect_object(raw.get("formats") or {}, "media formats")
        return cls(
            id=int(raw["id"]),
            document_id=raw["documentId"],
            name=raw["name"],
            url=raw["url"],
            width=_optional_int(raw.get("width")),
            height=_optional_int(raw.get("height")),
            alternative_text=raw.get("alternativeText"),
            formats={
                key: MediaFormat.from_dict(value)
                for key, value in formats.items()
                if value is not None
            },
        )

    @classmethod
    def from_optional(cls, raw: dict[str, Any] | None) -> "MediaImage | None":
        return None if raw is None else cls.from_dict(raw)

    @classmethod
    def list_from(cls, raw: Any) -> list["MediaImage"]:
        """Map a multiple-media field; ``null`` means no images."""
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise TypeError(f"expected media list, got {type(raw).__name__}")
        return [cls.from_dict(item) for item in raw]


@dataclass
class Product:
    """Represents a single product entry published in the CMS.

    ``document_id`` is the stable key across content revisions; the
    numeric ``id`` may change when an entry is re-published. Callers look
    products up by ``slug``. A category the enum does not know yet is
    kept as its raw string.
    """

    id: int
    document_id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime
    featured: bool = False
    available: bool = False
    category: Category | str | None = None
    price: str | None = None
    unit: str | None = None
    short_description: str | None = None
    description: RichText | None = None
    technical_info: RichText | None = None
    usage_instructions: RichText | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: MediaImage | None = None
    image: MediaImage | None = None
    images: list[MediaImage] = field(default_factory=list)
    published_at: datetime | None = None

    @property
    def category_value(self) -> str | None:
        if isinstance(self.category, Category):
            return self.category.value
        return self.category

    @property
    def category_label(self) -> str | None:
        return None if self.category is None else category_label(self.category)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Product":
        """Build a Product from one entry of the CMS ``data`` array.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when a
        required field is missing or malformed.
        """
        raw = _expect_object(raw, "product")
        published_at = raw.get("publishedAt")

        return cls(
            id=int(raw["id"]),
            document_id=raw["documentId"],
            name=raw["name"],
            slug=raw["slug"],
            created_at=_parse_datetime(raw["createdAt"]),
            updated_at=_parse_datetime(raw["updatedAt"]),
            featured=bool(raw.get("featured", False)),
            available=bool(raw.get("available", False)),
            category=_parse_category(raw.get("category")),
            price=raw.get("price"),
            unit=raw.get("unit"),
            short_description=raw.get("short_description"),
            description=_rich_text(raw.get("description")),
            technical_info=_rich_text(raw.get("technical_info")),
            usage_instructions=_rich_text(raw.get("usage_instructions")),
            seo_title=raw.get("seo_title"),
            seo_description=raw.get("seo_description"),
            seo_keywords=raw.get("seo_keywords"),
            og_title=raw.get("og_title"),
            og_description=raw.get("og_description"),
            og_image=MediaImage.from_optional(raw.get("og_image")),
            image=MediaImage.from_optional(raw.get("image")),
            images=MediaImage.list_from(raw.get("images")),
            published_at=(
                None if published_at is None
                else _parse_datetime(published_at)
            ),
        )
