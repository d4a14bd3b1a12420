from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from apps.core.authorization import ResourceKind
from apps.core.permissions import IsResourceOwner
from apps.core.routing import UUID_PATTERN

from .models import Comment
from .serializers import (
    CommentSerializer,
    CommentCreateSerializer,
    CommentUpdateSerializer,
    CommentFilterSerializer,
)
from .services import create_comment, update_comment, delete_comment


class CommentPagination(PageNumberPagination):
    """Custom pagination for comments."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class CommentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Comment CRUD operations.

    list: Get comments (optionally ?post=<uuid>)
    create: Comment on a post as the current user
    retrieve: Get a specific comment
    update: Update a comment (author only)
    partial_update: Partially update a comment (author only)
    destroy: Delete a comment (author only)
    """

    queryset = Comment.objects.select_related('author')
    serializer_class = CommentSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = CommentPagination
    lookup_value_regex = UUID_PATTERN
    ownership_kind = ResourceKind.COMMENT

    def get_queryset(self):
        queryset = super().get_queryset()

        filter_serializer = CommentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        post_id = filter_serializer.validated_data.get('post')
        if post_id:
            queryset = queryset.filter(post_id=post_id)

        return queryset

    def get_permissions(self):
        """Mutating an existing comment requires authorship."""
        if self.action in ['update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsResourceOwner()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = create_comment(
            author_id=request.user.id,
            post_id=serializer.validated_data['post_id'],
            content=serializer.validated_data['content'],
        )

        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = update_comment(
            comment_id=self.kwargs['pk'],
            content=serializer.validated_data['content'],
        )
        return Response(CommentSerializer(comment).data)

    def destroy(self, request, *args, **kwargs):
        delete_comment(comment_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
