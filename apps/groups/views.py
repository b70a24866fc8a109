from rest_framework import mixins, viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Group
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupListSerializer,
    GroupMemberSerializer,
    JoinGroupSerializer,
)
from .permissions import IsGroupMember

from apps.groups.services import (
    create_group,
    delete_group,
    join_group,
    get_group_by_id,
    get_group_members,
    get_user_groups,
    # Exceptions
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    NotMemberError,
    InsufficientPermissionsError,
    CascadeDeleteError,
)


UUID_PATTERN = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'


class CascadeErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    failed_phase = serializers.CharField()
    completed_phases = serializers.ListField(child=serializers.CharField())


class GroupViewSet(mixins.ListModelMixin,
                   mixins.CreateModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.DestroyModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for groups.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Groups the user belongs to
    create: Create a new group (caller becomes owner)
    retrieve: Group details with members and invite code (members only)
    destroy: Delete the group and everything in it (owner only)
    """

    serializer_class = GroupSerializer
    lookup_value_regex = UUID_PATTERN
    permission_classes = [IsAuthenticated, IsGroupMember]
    pagination_class = None

    def get_queryset(self):
        """Return only groups where user is a member."""
        return get_user_groups(user=self.request.user)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return GroupListSerializer
        elif self.action == 'create':
            return GroupCreateSerializer
        elif self.action == 'join':
            return JoinGroupSerializer
        return GroupSerializer

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data.get('description', ''),
        )

        group = get_group_by_id(group_id=group.id)
        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None, 500: CascadeErrorResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a group with its orders, cards and chat."""
        try:
            delete_group(group_id=self.kwargs['pk'], user=request.user)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except CascadeDeleteError as e:
            return Response({
                'error': str(e),
                'failed_phase': e.failed_phase,
                'completed_phases': e.completed_phases,
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: GroupMemberSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the group."""
        try:
            memberships = get_group_members(group_id=pk, user=request.user)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @extend_schema(request=JoinGroupSerializer, responses={201: GroupSerializer})
    @action(detail=False, methods=['post'])
    def join(self, request):
        """Join a group using its invite code."""
        serializer = JoinGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = join_group(
                invite_code=serializer.validated_data['invite_code'],
                user=request.user,
            )
        except InvalidInviteCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        group = get_group_by_id(group_id=membership.group_id)
        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)
