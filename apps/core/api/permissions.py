from django.utils.translation import gettext as _
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission


class RoleBasedPermission(BasePermission):
    """
    Check that the user holds ``<view.permission_prefix>.<view.action>``
    through their role.

    Views without ``permission_prefix`` are not restricted by this class.
    """

    def has_permission(self, request, view):
        permission_code = None

        if getattr(view, "permission_prefix", None) and getattr(view, "action", None):
            permission_code = f"{view.permission_prefix}.{view.action}"

        if not permission_code:
            return True

        if not request.user or not request.user.is_authenticated:
            raise PermissionDenied(_("You need to login to perform this action"))

        if request.user.is_superuser:
            return True

        if request.user.has_permission(permission_code):
            return True

        raise PermissionDenied(_("You do not have permission to perform this action"))
