import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.core.authorization import NOT_A_MEMBER, OWNER_ONLY
from apps.groups.models import Group, GroupMembership, GroupRole


# =============================================================================
# Group CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupList:
    """Tests for GET /api/groups/"""

    def test_list_groups_returns_user_groups(self, authenticated_client, group):
        """List returns only groups where user is a member."""
        url = reverse('groups:group-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert 'results' in response.data
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['name'] == group.name
        assert response.data['results'][0]['member_count'] == 1

    def test_list_groups_excludes_non_member_groups(self, other_client, group):
        """Non-members don't see group in list."""
        url = reverse('groups:group-list')
        response = other_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 0

    def test_list_groups_unauthenticated(self, api_client):
        """Unauthenticated users cannot list groups."""
        url = reverse('groups:group-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestGroupCreate:
    """Tests for POST /api/groups/"""

    def test_create_group(self, authenticated_client, group_owner):
        """Create a new group; creator becomes owner."""
        url = reverse('groups:group-list')
        data = {
            'name': 'Rust',
            'description': 'Systems programming',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Rust'
        assert response.data['user_role'] == GroupRole.OWNER
        assert response.data['owner']['id'] == str(group_owner.id)
        assert response.data['member_count'] == 1

        group = Group.objects.get(name='Rust')
        assert group.owner == group_owner
        assert group.get_user_role(group_owner) == GroupRole.OWNER

    def test_create_group_duplicate_name(self, member_client, group):
        """Taken names are a conflict."""
        url = reverse('groups:group-list')
        response = member_client.post(url, {'name': group.name}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert Group.objects.filter(name=group.name).count() == 1

    def test_create_group_missing_name(self, authenticated_client):
        """Name is required."""
        url = reverse('groups:group-list')
        response = authenticated_client.post(url, {'description': 'No name'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'name' in response.data

    def test_create_group_unauthenticated(self, api_client):
        """Unauthenticated users cannot create groups."""
        url = reverse('groups:group-list')
        response = api_client.post(url, {'name': 'Unauthorized Group'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not Group.objects.filter(name='Unauthorized Group').exists()


@pytest.mark.django_db
class TestGroupRetrieve:
    """Tests for GET /api/groups/{id}/"""

    def test_retrieve_group_as_member(self, member_client, group_with_member, group_owner):
        """Members see their role and the owner."""
        url = reverse('groups:group-detail', args=[group_with_member.id])
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == group_with_member.name
        assert response.data['user_role'] == GroupRole.MEMBER
        assert response.data['owner']['display_name'] == 'Group Owner'
        assert response.data['member_count'] == 2

    def test_retrieve_group_as_non_member(self, other_client, group):
        """Non-members can view a group before joining."""
        url = reverse('groups:group-detail', args=[group.id])
        response = other_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_role'] is None

    def test_retrieve_missing_group(self, authenticated_client):
        url = reverse('groups:group-detail', args=[uuid4()])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestGroupUpdate:
    """Tests for PUT/PATCH /api/groups/{id}/"""

    def test_update_group_as_owner(self, authenticated_client, group):
        """Owner can rename group."""
        url = reverse('groups:group-detail', args=[group.id])
        response = authenticated_client.patch(url, {'name': 'Updated Group Name'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Updated Group Name'
        group.refresh_from_db()
        assert group.name == 'Updated Group Name'

    def test_update_description_only(self, authenticated_client, group):
        url = reverse('groups:group-detail', args=[group.id])
        response = authenticated_client.patch(url, {'description': 'Changed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        group.refresh_from_db()
        assert group.name == 'Test Group'
        assert group.description == 'Changed'

    def test_update_group_empty_payload(self, authenticated_client, group):
        """At least one field is required."""
        url = reverse('groups:group-detail', args=[group.id])
        response = authenticated_client.patch(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_group_duplicate_name(self, authenticated_client, group, group_owner):
        """Renaming onto a taken name is a conflict."""
        Group.objects.create(name='Taken', owner=group_owner)
        url = reverse('groups:group-detail', args=[group.id])
        response = authenticated_client.patch(url, {'name': 'Taken'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_group_as_member(self, member_client, group_with_member):
        """Regular members cannot rename the group."""
        url = reverse('groups:group-detail', args=[group_with_member.id])
        response = member_client.patch(url, {'name': 'Hacked Name'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == OWNER_ONLY
        group_with_member.refresh_from_db()
        assert group_with_member.name == 'Test Group'

    def test_update_group_as_non_member(self, other_client, group):
        """Non-members are told they are not members."""
        url = reverse('groups:group-detail', args=[group.id])
        response = other_client.patch(url, {'name': 'Hacked Name'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == NOT_A_MEMBER


@pytest.mark.django_db
class TestGroupDelete:
    """Tests for DELETE /api/groups/{id}/"""

    def test_delete_group_as_owner(self, authenticated_client, group_with_member):
        """Owner can delete group; memberships go with it."""
        group_id = group_with_member.id
        url = reverse('groups:group-detail', args=[group_id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Group.objects.filter(id=group_id).exists()
        assert not GroupMembership.objects.filter(group_id=group_id).exists()

    def test_delete_group_as_member(self, member_client, group_with_member):
        """Members cannot delete group."""
        url = reverse('groups:group-detail', args=[group_with_member.id])
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Group.objects.filter(id=group_with_member.id).exists()


# =============================================================================
# Membership Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupMembers:
    """Tests for GET /api/groups/{id}/members/"""

    def test_list_members_owner_first(self, member_client, group_with_member, group_owner, member_user):
        url = reverse('groups:group-members', args=[group_with_member.id])
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['user']['id'] for m in response.data] == [str(group_owner.id), str(member_user.id)]
        assert response.data[0]['role'] == GroupRole.OWNER

    def test_list_members_missing_group(self, authenticated_client):
        url = reverse('groups:group-members', args=[uuid4()])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestJoinGroup:
    """Tests for POST /api/groups/{id}/join/"""

    def test_join_group(self, other_client, group, group_other_user):
        url = reverse('groups:group-join', args=[group.id])
        response = other_client.post(url)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == GroupRole.MEMBER
        assert response.data['user']['id'] == str(group_other_user.id)
        assert group.has_member(group_other_user)

    def test_join_group_twice(self, other_client, group, group_other_user):
        """Second join is a conflict."""
        url = reverse('groups:group-join', args=[group.id])
        other_client.post(url)
        response = other_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert GroupMembership.objects.filter(group=group, user=group_other_user).count() == 1

    def test_join_missing_group(self, other_client):
        url = reverse('groups:group-join', args=[uuid4()])
        response = other_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_join_malformed_group_id(self, other_client, group_other_user):
        response = other_client.post(f'/api/groups/{"-" * 36}/join/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not GroupMembership.objects.filter(user=group_other_user).exists()


@pytest.mark.django_db
class TestLeaveGroup:
    """Tests for POST /api/groups/{id}/leave/"""

    def test_member_can_leave(self, member_client, group_with_member, member_user):
        url = reverse('groups:group-leave', args=[group_with_member.id])
        response = member_client.post(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not group_with_member.has_member(member_user)

    def test_owner_cannot_leave(self, authenticated_client, group, group_owner):
        url = reverse('groups:group-leave', args=[group.id])
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'Transfer ownership' in str(response.data['detail'])
        assert group.get_user_role(group_owner) == GroupRole.OWNER

    def test_non_member_cannot_leave(self, other_client, group):
        url = reverse('groups:group-leave', args=[group.id])
        response = other_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestRemoveMember:
    """Tests for DELETE /api/groups/{id}/members/{user_id}/"""

    def _url(self, group, user_id):
        return reverse('groups:group-remove-member', kwargs={'pk': group.id, 'user_id': user_id})

    def test_owner_removes_member(self, authenticated_client, group_with_member, member_user):
        response = authenticated_client.delete(self._url(group_with_member, member_user.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not group_with_member.has_member(member_user)

    def test_owner_cannot_remove_self(self, authenticated_client, group, group_owner):
        response = authenticated_client.delete(self._url(group, group_owner.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert group.get_user_role(group_owner) == GroupRole.OWNER

    def test_remove_non_member(self, authenticated_client, group, group_other_user):
        response = authenticated_client.delete(self._url(group, group_other_user.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_remove_malformed_user_id(self, authenticated_client, group_with_member, member_user):
        response = authenticated_client.delete(f'/api/groups/{group_with_member.id}/members/{"-" * 36}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert group_with_member.has_member(member_user)

    def test_member_cannot_remove_others(self, member_client, group_with_member, group_owner):
        response = member_client.delete(self._url(group_with_member, group_owner.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == OWNER_ONLY


@pytest.mark.django_db
class TestTransferOwnership:
    """Tests for POST /api/groups/{id}/transfer_ownership/"""

    def test_owner_transfers_to_member(self, authenticated_client, group_with_member, group_owner, member_user):
        url = reverse('groups:group-transfer-ownership', args=[group_with_member.id])
        response = authenticated_client.post(url, {'user_id': str(member_user.id)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['role'] == GroupRole.OWNER
        group_with_member.refresh_from_db()
        assert group_with_member.owner == member_user
        assert group_with_member.get_user_role(group_owner) == GroupRole.MEMBER

    def test_transfer_to_non_member(self, authenticated_client, group, group_other_user):
        url = reverse('groups:group-transfer-ownership', args=[group.id])
        response = authenticated_client.post(url, {'user_id': str(group_other_user.id)}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_transfer_to_self(self, authenticated_client, group, group_owner):
        url = reverse('groups:group-transfer-ownership', args=[group.id])
        response = authenticated_client.post(url, {'user_id': str(group_owner.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_member_cannot_transfer(self, member_client, group_with_member, member_user):
        url = reverse('groups:group-transfer-ownership', args=[group_with_member.id])
        response = member_client.post(url, {'user_id': str(member_user.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert group_with_member.get_user_role(member_user) == GroupRole.MEMBER
