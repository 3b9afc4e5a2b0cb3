from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from artworks.models import Artwork

User = get_user_model()


def _ids(response):
    return {row["id"] for row in response.data["results"]}


class GalleryQueryTests(TestCase):
    """
    GUARANTEES:
    - q matches title, description or tag (case-insensitive)
    - category / year / medium / price / artist / for_sale filters
    - tags filter requires every listed tag
    - sort newest (default), oldest, popular
    """

    def setUp(self):
        self.client = APIClient()
        self.artist = User.objects.create_user(email="a@example.com", username="ana", password="pass", role="artist")
        self.other = User.objects.create_user(email="b@example.com", username="ben", password="pass", role="artist")

        self.blue = Artwork.objects.create(
            artist=self.artist,
            title="Harmony in Blue",
            category="Painting",
            medium="Oil on Canvas",
            year=2022,
            price=Decimal("1200.00"),
            is_for_sale=True,
            likes=3,
        )
        self.blue.set_tags(["abstract", "blue"])

        self.city = Artwork.objects.create(
            artist=self.other,
            title="Urban Reflections",
            description="City water at night",
            category="Photography",
            medium="Digital Photography",
            year=2021,
            price=Decimal("450.00"),
            likes=10,
        )
        self.city.set_tags(["urban", "abstract"])

        self.forest = Artwork.objects.create(
            artist=self.artist,
            title="Whispering Forest",
            category="Painting",
            medium="Acrylic on Canvas",
            year=2020,
            likes=0,
        )
        self.forest.set_tags(["Nature"])

        # deterministic creation order
        base = timezone.now()
        for offset, art in enumerate([self.forest, self.city, self.blue]):
            Artwork.objects.filter(pk=art.pk).update(created_at=base + timedelta(minutes=offset))

    def _get(self, **params):
        response = self.client.get("/api/artworks/", params)
        self.assertEqual(response.status_code, 200)
        return response

    def test_search_matches_title_description_and_tag(self):
        self.assertEqual(_ids(self._get(q="harmony")), {str(self.blue.id)})
        self.assertEqual(_ids(self._get(q="WATER")), {str(self.city.id)})
        self.assertEqual(_ids(self._get(q="natu")), {str(self.forest.id)})

    def test_category_year_medium(self):
        self.assertEqual(_ids(self._get(category="Painting")), {str(self.blue.id), str(self.forest.id)})
        self.assertEqual(_ids(self._get(year=2021)), {str(self.city.id)})
        self.assertEqual(_ids(self._get(medium="Acrylic on Canvas")), {str(self.forest.id)})

    def test_price_range_and_for_sale(self):
        self.assertEqual(_ids(self._get(min_price=500)), {str(self.blue.id)})
        self.assertEqual(_ids(self._get(max_price=500)), {str(self.city.id)})
        self.assertEqual(_ids(self._get(for_sale="true")), {str(self.blue.id)})

    def test_tags_require_all(self):
        self.assertEqual(_ids(self._get(tags="abstract")), {str(self.blue.id), str(self.city.id)})
        self.assertEqual(_ids(self._get(tags="abstract,blue")), {str(self.blue.id)})
        self.assertEqual(_ids(self._get(tags="abstract,nature")), set())

    def test_artist_filter(self):
        self.assertEqual(_ids(self._get(artist=str(self.other.id))), {str(self.city.id)})

    def test_sorting(self):
        newest = [r["id"] for r in self._get().data["results"]]
        self.assertEqual(newest, [str(self.blue.id), str(self.city.id), str(self.forest.id)])

        oldest = [r["id"] for r in self._get(sort="oldest").data["results"]]
        self.assertEqual(oldest, list(reversed(newest)))

        popular = [r["id"] for r in self._get(sort="popular").data["results"]]
        self.assertEqual(popular, [str(self.city.id), str(self.blue.id), str(self.forest.id)])

    def test_unknown_sort_falls_back_to_newest(self):
        rows = [r["id"] for r in self._get(sort="sideways").data["results"]]
        self.assertEqual(rows[0], str(self.blue.id))

    def test_invalid_year_is_rejected(self):
        response = self.client.get("/api/artworks/", {"year": "not-a-year"})
        self.assertEqual(response.status_code, 400)

    def test_filter_options(self):
        response = self.client.get("/api/artworks/filter-options/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["categories"], ["Painting", "Photography"])
        self.assertEqual(response.data["years"], [2022, 2021, 2020])
        self.assertIn("nature", response.data["tags"])
        self.assertEqual(Decimal(str(response.data["max_price"])), Decimal("1200.00"))
