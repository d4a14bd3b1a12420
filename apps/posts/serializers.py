from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import Post


class PostSerializer(serializers.ModelSerializer):
    """Main serializer for posts."""

    author = UserPublicSerializer(read_only=True)

    class Meta:
        model = Post
        fields = [
            'id',
            'author',
            'title',
            'content',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'author', 'created_at', 'updated_at']


class PostCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating posts. The author is the authenticated user."""

    class Meta:
        model = Post
        fields = ['title', 'content']


class PostUpdateSerializer(serializers.Serializer):
    """Serializer for updating posts."""

    title = serializers.CharField(max_length=200, required=False)
    content = serializers.CharField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide a title or content to update')
        return attrs


class PostFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for post listing.

    Query Parameters:
        author (UUID): Filter by author ID
    """

    author = serializers.UUIDField(required=False)
