# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
from django.utils import timezone
import secrets
import string
import uuid

INVITE_CODE_LENGTH = 6
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code():
    """Return a random invite code such as ``AB12CD``."""
    return ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class Group(models.Model):
    """A set of users pooling card purchases, joined through an invite code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    invite_code = models.CharField(max_length=6, unique=True, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='owned_groups')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='groups_owner_i_4c1e2a_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.invite_code:
            self.invite_code = generate_invite_code()
        super().save(*args, **kwargs)

    def is_owner(self, user):
        return user is not None and self.owner_id == user.pk

    def has_member(self, user):
        if user is None or user.pk is None:
            return False
        if self.is_owner(user):
            return True
        return self.memberships.filter(user_id=user.pk).exists()


class GroupMembership(models.Model):
    """
    One member of a group.

    Each join inserts its own row, so concurrent joins never overwrite
    each other. ``name`` is the member's display name at join time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    name = models.CharField(max_length=200)
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'group_memberships'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['group', 'joined_at'], name='group_membe_group_i_8d0f31_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.name} in {self.group.name}"

    @property
    def email(self):
        return self.user.email
