from rest_framework import permissions


class IsManager(permissions.BasePermission):
    """
    Allow access only to users with the manager role
    """
    message = 'Only managers can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'role', None) == 'manager')


class IsManagerOrReadOnly(IsManager):
    """
    Read access for any authenticated user, writes for managers
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
