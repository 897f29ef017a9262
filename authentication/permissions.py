from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission to only allow signed-in back-office admins
    """
    message = 'Admin access required.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_admin
