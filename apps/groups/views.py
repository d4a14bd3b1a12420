from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.core.authorization import ResourceKind
from apps.core.permissions import IsResourceOwner
from apps.core.routing import UUID_PATTERN

from .models import Group
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    GroupListSerializer,
    GroupMemberSerializer,
    TransferOwnershipSerializer,
)

from apps.groups.services import (
    create_group,
    rename_group,
    delete_group,
    get_user_groups,
    join_group,
    leave_group,
    remove_member,
    get_group_members,
    transfer_ownership,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only; domain errors propagate and are
    rendered by DRF with their own status code.

    list: Get groups the user is a member of
    create: Create a new group (creator becomes owner)
    retrieve: Get a specific group
    update: Rename a group (owner only)
    partial_update: Rename a group (owner only)
    destroy: Delete a group (owner only)
    """

    queryset = Group.objects.select_related('owner').prefetch_related('memberships')
    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_value_regex = UUID_PATTERN
    ownership_kind = ResourceKind.GROUP

    owner_actions = ['update', 'partial_update', 'destroy', 'remove_member', 'transfer_ownership']

    def get_queryset(self):
        """List only groups where user is a member."""
        if self.action == 'list':
            return get_user_groups(user_id=self.request.user.id)
        return super().get_queryset()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return GroupListSerializer
        elif self.action == 'create':
            return GroupCreateSerializer
        return GroupSerializer

    def get_permissions(self):
        """Owner-protected actions resolve the owner from storage."""
        if self.action in self.owner_actions:
            return [IsAuthenticated(), IsResourceOwner()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            creator_id=request.user.id,
            name=serializer.validated_data['name'],
            description=serializer.validated_data.get('description', ''),
        )

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=GroupUpdateSerializer, responses={200: GroupSerializer})
    def update(self, request, *args, **kwargs):
        """Rename a group and/or change its description."""
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = rename_group(group_id=self.kwargs['pk'], **serializer.validated_data)

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data)

    def destroy(self, request, *args, **kwargs):
        """Delete a group."""
        delete_group(group_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: GroupMemberSerializer(many=True)}, tags=['groups'])
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the group."""
        memberships = get_group_members(group_id=pk)
        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @extend_schema(request=None, responses={201: GroupMemberSerializer}, tags=['groups'])
    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join a group as a member."""
        membership = join_group(group_id=pk, user_id=request.user.id)

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None}, tags=['groups'])
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group."""
        leave_group(group_id=pk, user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={204: None}, tags=['groups'])
    @action(
        detail=True,
        methods=['delete'],
        url_path=f'members/(?P<user_id>{UUID_PATTERN})',
        url_name='remove-member',
    )
    def remove_member(self, request, pk=None, user_id=None):
        """Remove a member from the group (owner only)."""
        remove_member(group_id=pk, user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=TransferOwnershipSerializer, responses={200: GroupMemberSerializer}, tags=['groups'])
    @action(detail=True, methods=['post'])
    def transfer_ownership(self, request, pk=None):
        """Hand ownership to another member (owner only)."""
        serializer = TransferOwnershipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = transfer_ownership(
            group_id=pk,
            new_owner_id=serializer.validated_data['user_id'],
        )

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data)
