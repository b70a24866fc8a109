from rest_framework import serializers
from .models import Group, GroupMembership, INVITE_CODE_LENGTH


class GroupMemberSerializer(serializers.ModelSerializer):
    """One entry of a group's member list."""

    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['email', 'name', 'joined_at']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    owner_email = serializers.EmailField(source='owner.email', read_only=True)
    members = GroupMemberSerializer(source='memberships', many=True, read_only=True)
    member_count = serializers.SerializerMethodField()
    is_owner = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'invite_code',
            'owner_email',
            'members',
            'member_count',
            'is_owner',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of members in the group."""
        return len(obj.memberships.all())

    def get_is_owner(self, obj):
        """Whether the requesting user owns the group."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.is_owner(request.user)
        return False


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    name = serializers.CharField(max_length=200, required=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')

    class Meta:
        model = Group
        fields = ['name', 'description']


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    owner_email = serializers.EmailField(source='owner.email', read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'owner_email',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.memberships.all())


class JoinGroupSerializer(serializers.Serializer):
    """Serializer for joining a group with invite code."""

    invite_code = serializers.CharField(max_length=INVITE_CODE_LENGTH, required=True)
