# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
from django.db.models import Q
import uuid


class GroupRole(models.TextChoices):
    OWNER = 'owner', 'Owner'
    MEMBER = 'member', 'Member'


class Group(models.Model):
    """
    Community group.

    The owner membership row and `owner` always name the same user; the group
    services change them together. Deleting the owning user deletes the group.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_groups')
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        constraints = [
            models.UniqueConstraint(fields=['name'], name='groups_name_unique'),
        ]
        indexes = [
            models.Index(fields=['created_at'], name='groups_created_at_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except GroupMembership.DoesNotExist:
            return None


class GroupMembership(models.Model):
    """User membership in a group with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=GroupRole.choices, default=GroupRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_memberships'
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'user'],
                name='group_memberships_group_user_unique',
            ),
            # Exactly one owner per group, enforced by storage
            models.UniqueConstraint(
                fields=['group'],
                condition=Q(role='owner'),
                name='group_memberships_one_owner',
            ),
        ]
        indexes = [
            models.Index(fields=['group', 'role'], name='gm_group_role_idx'),
            models.Index(fields=['user', 'joined_at'], name='gm_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.group.name} ({self.role})"
