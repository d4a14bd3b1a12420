from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import Group, GroupMembership


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    owner = UserPublicSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'owner',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of members in the group."""
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the group."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


# Plain serializers: name uniqueness is decided by the service and the
# database constraint, which report it as a 409.
class GroupCreateSerializer(serializers.Serializer):
    """Serializer for creating groups."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class GroupUpdateSerializer(serializers.Serializer):
    """Serializer for renaming a group or changing its description."""

    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide a name or description to update')
        return attrs


class GroupMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'group', 'user', 'role', 'joined_at']
        read_only_fields = fields


class TransferOwnershipSerializer(serializers.Serializer):
    """Serializer for handing ownership to another member."""

    user_id = serializers.UUIDField(required=True)
