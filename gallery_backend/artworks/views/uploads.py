"""
PATH: artworks/views/uploads.py

ARTWORK IMAGE UPLOAD

POST /artworks/uploads/  (multipart, field "file")

Rules:
- requires artwork.upload
- image content types only (UPLOAD_ALLOWED_CONTENT_TYPES)
- size <= UPLOAD_MAX_BYTES
- stored through Django default storage under artworks/<user id>/
- returns the public URL to put into Artwork.image_url
"""

from __future__ import annotations

import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from permissions.roles import CAP_ARTWORK_UPLOAD, HasCapability

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class ArtworkImageUploadView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ARTWORK_UPLOAD
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        request={"multipart/form-data": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}},
        responses={
            201: OpenApiResponse(description='{"url": str, "path": str}'),
            400: OpenApiResponse(description="Missing file, wrong type or too large"),
        },
        tags=["Artworks"],
    )
    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            return Response({"detail": "file is required"}, status=status.HTTP_400_BAD_REQUEST)

        content_type = (getattr(upload, "content_type", "") or "").lower()
        if content_type not in settings.UPLOAD_ALLOWED_CONTENT_TYPES:
            return Response(
                {"detail": f"Unsupported file type: {content_type or 'unknown'}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if upload.size > settings.UPLOAD_MAX_BYTES:
            return Response(
                {"detail": f"File too large (max {settings.UPLOAD_MAX_BYTES} bytes)"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        ext = EXTENSIONS.get(content_type) or os.path.splitext(upload.name)[1].lower()
        path = default_storage.save(f"artworks/{request.user.pk}/{uuid.uuid4().hex}{ext}", upload)
        url = request.build_absolute_uri(default_storage.url(path))

        logger.info(
            "Artwork image uploaded",
            extra={"user_id": str(request.user.pk), "path": path, "size": upload.size},
        )
        return Response({"url": url, "path": path}, status=status.HTTP_201_CREATED)
