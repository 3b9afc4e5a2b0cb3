"""
PATH: artworks/filters.py

GALLERY FILTERS (django-filter)

Query params:
- q          case-insensitive substring of title, description or any tag
- category   exact
- year       exact
- medium     exact
- min_price  price >= value
- max_price  price <= value
- tags       comma separated; artwork must carry EVERY listed tag
- artist     artist profile id
- for_sale   true/false
- sort       newest (default) | oldest | popular

Unknown sort values fall back to newest.
"""

from __future__ import annotations

import django_filters
from django.db.models import Q

from artworks.models import Artwork, Tag

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_POPULAR = "popular"

SORT_ORDERING = {
    SORT_NEWEST: ("-created_at",),
    SORT_OLDEST: ("created_at",),
    SORT_POPULAR: ("-likes", "-created_at"),
}


def split_tags(value) -> list[str]:
    if not value:
        return []
    names = [Tag.normalize(part) for part in str(value).split(",")]
    return [n for n in names if n]


class ArtworkFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method="filter_q")
    category = django_filters.CharFilter(field_name="category")
    year = django_filters.NumberFilter(field_name="year")
    medium = django_filters.CharFilter(field_name="medium")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    tags = django_filters.CharFilter(method="filter_tags")
    artist = django_filters.UUIDFilter(field_name="artist_id")
    for_sale = django_filters.BooleanFilter(field_name="is_for_sale")
    sort = django_filters.CharFilter(method="filter_sort")

    class Meta:
        model = Artwork
        fields = []

    def filter_q(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(title__icontains=term)
            | Q(description__icontains=term)
            | Q(tags__name__icontains=term)
        ).distinct()

    def filter_tags(self, queryset, name, value):
        for tag in split_tags(value):
            queryset = queryset.filter(tags__name=tag)
        return queryset.distinct()

    def filter_sort(self, queryset, name, value):
        key = (value or "").strip().lower()
        return queryset.order_by(*SORT_ORDERING.get(key, SORT_ORDERING[SORT_NEWEST]))
