from rest_framework import permissions


class IsOrderGroupMember(permissions.BasePermission):
    """
    Permission: User must be a member of the order's group.
    """

    message = 'You must be a member of this group.'

    def has_object_permission(self, request, view, obj):
        # obj is an Order instance
        return obj.group.has_member(request.user)
