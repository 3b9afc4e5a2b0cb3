"""
PATH: gallery3d/views.py

3D WALKTHROUGH API (AllowAny)

- GET  /gallery3d/scene/   room, lights, camera start, artwork placements;
                           accepts the gallery query params
- POST /gallery3d/pick/    {camera, ndc_x, ndc_y, aspect, query} -> {hit}
- POST /gallery3d/step/    {camera, keys, dt, mouse_dx, mouse_dy} -> {camera}
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from artworks.services.catalog import GalleryQuery
from artworks.services.exceptions import InvalidGalleryQuery
from artworks.views.artwork import GALLERY_QUERY_PARAMETERS, PublicCatalogThrottle
from gallery3d.serializers import PickRequestSerializer, StepRequestSerializer
from gallery3d.services.navigation import CameraState, step_camera
from gallery3d.services.picking import pick
from gallery3d.services.room import MAX_ARTWORKS, build_scene


def _scene_for(query: GalleryQuery):
    return build_scene(query.apply()[:MAX_ARTWORKS])


class SceneView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        parameters=GALLERY_QUERY_PARAMETERS,
        responses={200: OpenApiResponse(description="Scene description")},
        tags=["Gallery 3D"],
    )
    def get(self, request):
        query = GalleryQuery.from_params(request.query_params)
        try:
            scene = _scene_for(query)
        except InvalidGalleryQuery as exc:
            return Response({"detail": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        return Response({**scene.as_dict(), "query": query.as_dict()})


class PickView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        request=PickRequestSerializer,
        responses={200: OpenApiResponse(description='{"hit": {...} | null}')},
        tags=["Gallery 3D"],
    )
    def post(self, request):
        s = PickRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        query = GalleryQuery.from_params(data.get("query") or {})
        try:
            scene = _scene_for(query)
        except InvalidGalleryQuery as exc:
            return Response({"detail": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        camera = CameraState.from_dict(data.get("camera"))
        hit = pick(scene, camera, data["ndc_x"], data["ndc_y"], data["aspect"])
        return Response({"hit": hit.as_dict() if hit else None})


class StepView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=StepRequestSerializer,
        responses={200: OpenApiResponse(description='{"camera": {...}}')},
        tags=["Gallery 3D"],
    )
    def post(self, request):
        s = StepRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        camera = step_camera(
            CameraState.from_dict(data.get("camera")),
            data.get("keys"),
            data["dt"],
            data.get("mouse_dx", 0.0),
            data.get("mouse_dy", 0.0),
        )
        return Response({"camera": camera.as_dict()})
