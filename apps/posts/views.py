from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from apps.core.authorization import ResourceKind
from apps.core.permissions import IsResourceOwner
from apps.core.routing import UUID_PATTERN

from .models import Post
from .serializers import (
    PostSerializer,
    PostCreateSerializer,
    PostUpdateSerializer,
    PostFilterSerializer,
)
from .services import create_post, update_post, delete_post


class PostPagination(PageNumberPagination):
    """Custom pagination for posts."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PostViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Post CRUD operations.

    list: Get all posts (optionally ?author=<uuid>)
    create: Create a post as the current user
    retrieve: Get a specific post
    update: Update a post (author only)
    partial_update: Partially update a post (author only)
    destroy: Delete a post (author only)
    """

    queryset = Post.objects.select_related('author')
    serializer_class = PostSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = PostPagination
    lookup_value_regex = UUID_PATTERN
    ownership_kind = ResourceKind.POST

    def get_queryset(self):
        queryset = super().get_queryset()

        filter_serializer = PostFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        author_id = filter_serializer.validated_data.get('author')
        if author_id:
            queryset = queryset.filter(author_id=author_id)

        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return PostCreateSerializer
        return PostSerializer

    def get_permissions(self):
        """Mutating an existing post requires authorship."""
        if self.action in ['update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsResourceOwner()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post = create_post(
            author_id=request.user.id,
            title=serializer.validated_data['title'],
            content=serializer.validated_data['content'],
        )

        return Response(PostSerializer(post).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = PostUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post = update_post(post_id=self.kwargs['pk'], **serializer.validated_data)
        return Response(PostSerializer(post).data)

    def destroy(self, request, *args, **kwargs):
        delete_post(post_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def mine(self, request):
        """Get the current user's posts."""
        queryset = self.get_queryset().filter(author=request.user)
        page = self.paginate_queryset(queryset)
        serializer = PostSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)
