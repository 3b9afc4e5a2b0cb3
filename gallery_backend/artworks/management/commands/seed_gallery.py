# artworks/management/commands/seed_gallery.py

"""
Seed a demo gallery: artists, a visitor, artworks with tags and a few
exhibitions (one upcoming, one ongoing, one past).

Idempotent: users are matched by email, artworks by (artist, title),
exhibitions by title.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from artworks.models import Artwork
from exhibitions.models import Exhibition
from permissions.roles import ROLE_ARTIST, ROLE_VISITOR

UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&w=800&q=80"


@dataclass(frozen=True)
class SeedUserSpec:
    username: str
    email: str
    role: str
    bio: str = ""


@dataclass(frozen=True)
class SeedArtworkSpec:
    artist: str
    title: str
    photo: str
    category: str
    medium: str
    year: int
    price: Decimal | None = None
    tags: list[str] = field(default_factory=list)


USERS = [
    SeedUserSpec("sophia_art", "sophia@example.com", ROLE_ARTIST, "Abstract painter working in oils."),
    SeedUserSpec("marcus_visual", "marcus@example.com", ROLE_ARTIST, "Street and urban photographer."),
    SeedUserSpec("elena_creates", "elena@example.com", ROLE_ARTIST, "Sculptor and mixed media artist."),
    SeedUserSpec("art_enthusiast", "enthusiast@example.com", ROLE_VISITOR),
]

ARTWORKS = [
    SeedArtworkSpec("sophia_art", "Harmony in Blue", "photo-1549490349-8643362247b5", "Painting",
                    "Oil on Canvas", 2022, Decimal("1200.00"), ["abstract", "blue", "landscape", "modern"]),
    SeedArtworkSpec("marcus_visual", "Urban Reflections", "photo-1579783902614-a3fb3927b6a5", "Photography",
                    "Digital Photography", 2021, Decimal("450.00"), ["urban", "reflection", "city", "water"]),
    SeedArtworkSpec("sophia_art", "Whispering Forest", "photo-1552083375-1447ce886485", "Painting",
                    "Acrylic on Canvas", 2020, None, ["forest", "nature", "mystical", "dawn"]),
    SeedArtworkSpec("elena_creates", "Geometric Abstraction #7", "photo-1574182245530-967d9b3831af",
                    "Digital Art", "Digital Rendering", 2023, Decimal("300.00"),
                    ["geometric", "abstract", "digital", "contemporary"]),
    SeedArtworkSpec("elena_creates", "Serenity", "photo-1605721911519-3dfeb3be25e7", "Sculpture",
                    "Marble", 2019, Decimal("5400.00"), ["sculpture", "marble", "peace", "minimalist"]),
    SeedArtworkSpec("sophia_art", "Chaos and Order", "photo-1515405295579-ba7b45403062", "Mixed Media",
                    "Mixed Media on Canvas", 2021, None, ["abstract", "chaos", "order", "universe"]),
    SeedArtworkSpec("marcus_visual", "Golden Horizon", "photo-1500462918059-b1a0cb512f1d", "Painting",
                    "Oil on Canvas", 2023, Decimal("980.00"), ["landscape", "sunset", "golden", "horizon"]),
    SeedArtworkSpec("marcus_visual", "Fragmented Identity", "photo-1501472312651-726afe119ff1",
                    "Photography", "Digital Photography", 2022, None,
                    ["portrait", "identity", "fragmented", "conceptual"]),
]


class Command(BaseCommand):
    help = "Seed demo artists, artworks and exhibitions (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default="gallery-demo-123",
            help="Password set on newly created demo users.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        password = options["password"]

        users = {}
        for spec in USERS:
            user = User.objects.filter(email__iexact=spec.email).first()
            created = user is None
            if created:
                user = User.objects.create_user(
                    email=spec.email,
                    username=spec.username,
                    password=password,
                    role=spec.role,
                    bio=spec.bio,
                )
            users[spec.username] = user
            self.stdout.write(f"{'created' if created else 'exists '} user {spec.username}")

        artworks = []
        for spec in ARTWORKS:
            artwork, created = Artwork.objects.get_or_create(
                artist=users[spec.artist],
                title=spec.title,
                defaults={
                    "image_url": UNSPLASH.format(spec.photo),
                    "category": spec.category,
                    "medium": spec.medium,
                    "year": spec.year,
                    "price": spec.price,
                    "is_for_sale": spec.price is not None,
                },
            )
            if created:
                artwork.set_tags(spec.tags)
            artworks.append(artwork)

        now = timezone.now()
        exhibitions = [
            ("Digital Frontiers", now - timedelta(days=3), now + timedelta(days=20), True, True),
            ("Nature's Canvas", now + timedelta(days=14), now + timedelta(days=45), False, False),
            ("Urban Perspectives", now - timedelta(days=60), now - timedelta(days=30), False, False),
        ]
        for title, start, end, is_virtual, featured in exhibitions:
            exhibition, created = Exhibition.objects.get_or_create(
                title=title,
                defaults={
                    "start": start,
                    "end": end,
                    "is_virtual": is_virtual,
                    "featured": featured,
                    "organizer": "Gallery Team",
                    "location": "Online" if is_virtual else "Main Hall",
                },
            )
            if created:
                exhibition.featured_artists.set(u for u in users.values() if u.role == ROLE_ARTIST)
                exhibition.artworks.set(artworks[:4])

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(users)} users, {len(artworks)} artworks, {len(exhibitions)} exhibitions."
            )
        )
