# artworks/serializers/artwork.py

from __future__ import annotations

from rest_framework import serializers

from artworks.models import DEFAULT_CATEGORY, DEFAULT_TITLE, Artwork
from artworks.models.artwork import current_year
from artworks.services.engagement import has_favorited, has_liked


class ArtistSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    username = serializers.CharField(read_only=True)
    avatar = serializers.CharField(read_only=True)


class ArtworkSerializer(serializers.ModelSerializer):
    """
    Read/write artwork representation.

    Write rules:
    - artist is always the requester (set by the view)
    - blank title -> "Untitled"; blank category -> "Other"
    - missing year -> current year
    - tags are a list of strings
    """

    artist = ArtistSummarySerializer(read_only=True)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50, allow_blank=True),
        required=False,
        write_only=True,
    )
    tag_names = serializers.SerializerMethodField()

    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    year = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    class Meta:
        model = Artwork
        fields = [
            "id",
            "artist",
            "title",
            "description",
            "image_url",
            "category",
            "medium",
            "dimensions",
            "year",
            "price",
            "is_for_sale",
            "likes",
            "views",
            "tags",
            "tag_names",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "artist", "likes", "views", "created_at", "updated_at"]

    def get_tag_names(self, obj) -> list[str]:
        return obj.tag_names

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # clients read `tags`; the write-only field is replaced by names
        data["tags"] = data.pop("tag_names")
        return data

    def validate_title(self, value):
        return (value or "").strip() or DEFAULT_TITLE

    def validate_category(self, value):
        return (value or "").strip() or DEFAULT_CATEGORY

    def validate_year(self, value):
        return value if value else current_year()

    def validate(self, attrs):
        price = attrs.get("price", getattr(self.instance, "price", None))
        for_sale = attrs.get("is_for_sale", getattr(self.instance, "is_for_sale", False))
        if for_sale and (price is None or price <= 0):
            raise serializers.ValidationError(
                {"price": "An artwork listed for sale needs a price above zero."}
            )
        return attrs

    def create(self, validated_data):
        tags = validated_data.pop("tags", None)
        validated_data.setdefault("title", DEFAULT_TITLE)
        validated_data.setdefault("category", DEFAULT_CATEGORY)
        validated_data.setdefault("year", current_year())
        artwork = Artwork.objects.create(**validated_data)
        if tags is not None:
            artwork.set_tags(tags)
        return artwork

    def update(self, instance, validated_data):
        tags = validated_data.pop("tags", None)
        artwork = super().update(instance, validated_data)
        if tags is not None:
            artwork.set_tags(tags)
        return artwork


class ArtworkDetailSerializer(ArtworkSerializer):
    """
    Detail view adds the requester's engagement state.
    """

    has_liked = serializers.SerializerMethodField()
    has_favorited = serializers.SerializerMethodField()
    comments_count = serializers.SerializerMethodField()

    class Meta(ArtworkSerializer.Meta):
        fields = ArtworkSerializer.Meta.fields + [
            "has_liked",
            "has_favorited",
            "comments_count",
        ]

    def _user(self):
        request = self.context.get("request")
        return getattr(request, "user", None)

    def get_has_liked(self, obj) -> bool:
        return has_liked(self._user(), obj)

    def get_has_favorited(self, obj) -> bool:
        return has_favorited(self._user(), obj)

    def get_comments_count(self, obj) -> int:
        return obj.comments.count()


class LikeResultSerializer(serializers.Serializer):
    liked = serializers.BooleanField()
    likes = serializers.IntegerField()


class FavoriteResultSerializer(serializers.Serializer):
    favorited = serializers.BooleanField()
