from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Current user profile as exposed to clients."""

    name = serializers.CharField(source='get_display_name', read_only=True)
    needs_display_name = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'full_name',
            'display_name',
            'name',
            'needs_display_name',
            'created_at',
        ]
        read_only_fields = fields


class DisplayNameUpdateSerializer(serializers.Serializer):
    """Input for setting the display name."""

    display_name = serializers.CharField(max_length=100, required=True)
