"""
PATH: artworks/services/catalog.py

CATALOG READS

- GalleryQuery: the active search/filter/sort predicates of a gallery view,
  parsed once and applied through ArtworkFilter. Shared by the REST gallery
  and the 3D scene builder.
- filter_options: distinct values that feed the category/year/advanced filters.
- related_artworks: same category OR same artist, excluding self.
- record_view: atomic view counter bump.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from django.db.models import F, Max, Q

from artworks.filters import SORT_NEWEST, SORT_ORDERING, ArtworkFilter
from artworks.models import Artwork, Tag
from artworks.services.exceptions import InvalidGalleryQuery

RELATED_LIMIT = 10

GALLERY_PARAMS = (
    "q",
    "category",
    "year",
    "medium",
    "min_price",
    "max_price",
    "tags",
    "artist",
    "for_sale",
    "sort",
)


def base_queryset():
    return Artwork.objects.select_related("artist").prefetch_related("tags")


@dataclass(frozen=True)
class GalleryQuery:
    params: dict = field(default_factory=dict)

    @classmethod
    def from_params(cls, query_params) -> "GalleryQuery":
        picked = {}
        for key in GALLERY_PARAMS:
            value = query_params.get(key)
            if value is None:
                continue
            value = str(value).strip()
            if value:
                picked[key] = value
        return cls(params=picked)

    @property
    def sort(self) -> str:
        key = self.params.get("sort", SORT_NEWEST).lower()
        return key if key in SORT_ORDERING else SORT_NEWEST

    @property
    def is_filtered(self) -> bool:
        return any(k != "sort" for k in self.params)

    def apply(self, queryset=None):
        qs = base_queryset() if queryset is None else queryset
        params = dict(self.params)
        params.setdefault("sort", SORT_NEWEST)

        fs = ArtworkFilter(params, queryset=qs)
        if not fs.is_valid():
            raise InvalidGalleryQuery(fs.errors)
        return fs.qs

    def as_dict(self) -> dict:
        return {**self.params, "sort": self.sort}


def filter_options(queryset=None) -> dict:
    qs = Artwork.objects.all() if queryset is None else queryset

    categories = (
        qs.exclude(category="").order_by("category").values_list("category", flat=True).distinct()
    )
    mediums = qs.exclude(medium="").order_by("medium").values_list("medium", flat=True).distinct()
    years = qs.order_by("-year").values_list("year", flat=True).distinct()
    tags = Tag.objects.filter(artworks__in=qs).order_by("name").values_list("name", flat=True).distinct()
    max_price = qs.aggregate(m=Max("price"))["m"]

    return {
        "categories": list(categories),
        "mediums": list(mediums),
        "years": list(years),
        "tags": list(tags),
        "max_price": max_price,
    }


def related_artworks(artwork: Artwork, limit: int = RELATED_LIMIT):
    return (
        base_queryset()
        .filter(Q(category=artwork.category) | Q(artist_id=artwork.artist_id))
        .exclude(pk=artwork.pk)
        .order_by("-created_at")[:limit]
    )


def record_view(artwork: Artwork) -> int:
    Artwork.objects.filter(pk=artwork.pk).update(views=F("views") + 1)
    artwork.refresh_from_db(fields=["views"])
    return artwork.views
