# users/views/profile.py

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import PublicProfileSerializer

User = get_user_model()


class PublicProfileView(APIView):
    permission_classes = [AllowAny]
    serializer_class = PublicProfileSerializer

    @extend_schema(
        responses={200: PublicProfileSerializer},
        description="Public profile of any active user",
        tags=["Auth"],
    )
    def get(self, request, user_id):
        user = get_object_or_404(User, id=user_id, is_active=True)
        return Response(PublicProfileSerializer(user).data)
