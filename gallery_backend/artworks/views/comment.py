# artworks/views/comment.py

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from artworks.models import Comment
from artworks.services.engagement import delete_comment
from artworks.services.exceptions import EngagementPermissionError


class CommentDetailView(APIView):
    """
    DELETE /artworks/comments/<id>/  (author or admin)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={
            204: OpenApiResponse(description="Deleted"),
            403: OpenApiResponse(description="Not the author"),
        },
        tags=["Artworks"],
    )
    def delete(self, request, comment_id):
        comment = get_object_or_404(Comment, id=comment_id)
        try:
            delete_comment(user=request.user, comment=comment)
        except EngagementPermissionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
