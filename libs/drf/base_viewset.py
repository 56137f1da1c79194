"""
Base ViewSets with automatic permission registration.

Every project viewset inherits one of these so that its actions are exposed
as ``<permission_prefix>.<action>`` permission codes.
"""

from rest_framework import viewsets

from libs.drf.mixin.permission import PermissionRegistrationMixin


class BaseModelViewSet(PermissionRegistrationMixin, viewsets.ModelViewSet):
    """
    Base ModelViewSet with automatic permission registration.

    Example:
        class BonusRuleViewSet(BaseModelViewSet):
            queryset = BonusRule.objects.all()
            serializer_class = BonusRuleSerializer
            module = "Payroll"
            submodule = "Bonus Rules"
            permission_prefix = "bonus_rule"

        This will automatically generate permissions:
            - bonus_rule.list
            - bonus_rule.retrieve
            - bonus_rule.create
            - bonus_rule.update
            - bonus_rule.destroy
    """

    pass


class BaseReadOnlyModelViewSet(PermissionRegistrationMixin, viewsets.ReadOnlyModelViewSet):
    """Base ReadOnlyModelViewSet with automatic permission registration."""


class BaseGenericViewSet(PermissionRegistrationMixin, viewsets.GenericViewSet):
    pass
