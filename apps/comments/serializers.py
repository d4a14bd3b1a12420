from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import Comment


class CommentSerializer(serializers.ModelSerializer):
    """Main serializer for comments."""

    author = UserPublicSerializer(read_only=True)

    class Meta:
        model = Comment
        fields = [
            'id',
            'author',
            'post',
            'content',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    """Serializer for creating comments. The author is the authenticated user."""

    post_id = serializers.UUIDField()
    content = serializers.CharField()


class CommentUpdateSerializer(serializers.Serializer):
    """Serializer for updating comments."""

    content = serializers.CharField()


class CommentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for comment listing.

    Query Parameters:
        post (UUID): Filter by post ID
    """

    post = serializers.UUIDField(required=False)
