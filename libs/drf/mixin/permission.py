from typing import Any

from django.utils.translation import gettext_lazy as _


class PermissionRegistrationMixin:
    """
    Mixin for ViewSets with automatic permission registration.

    Permission codes are ``<permission_prefix>.<action>`` and are checked by
    ``apps.core.api.permissions.RoleBasedPermission``.

    Class Attributes:
        module (str): Module the permissions belong to (e.g., "Payroll")
        submodule (str): Sub-module within the main module (e.g., "Bonus Rules")
        permission_prefix (str): Prefix for permission codes (e.g., "bonus_rule")
        PERMISSION_REGISTERED_ACTIONS (dict): Metadata for custom ``@action`` endpoints
    """

    module: Any = ""
    submodule: Any = ""
    permission_prefix = ""

    # action -> (name template, description template)
    STANDARD_ACTIONS = {
        "list": (_("List {model_name}"), _("View list of {model_name}")),
        "retrieve": (_("View {model_name}"), _("View detail of {model_name}")),
        "create": (_("Create {model_name}"), _("Create a new {model_name}")),
        "update": (_("Update {model_name}"), _("Update {model_name}")),
        "partial_update": (_("Partially update {model_name}"), _("Partially update {model_name}")),
        "destroy": (_("Delete {model_name}"), _("Delete {model_name}")),
    }

    PERMISSION_REGISTERED_ACTIONS: dict[str, dict] = {}

    @classmethod
    def get_model_name(cls):
        if getattr(cls, "queryset", None) is not None:
            return cls.queryset.model._meta.verbose_name
        return cls.__name__.replace("ViewSet", "")

    @classmethod
    def get_model_name_plural(cls):
        if getattr(cls, "queryset", None) is not None:
            return cls.queryset.model._meta.verbose_name_plural
        return cls.__name__.replace("ViewSet", "") + "s"

    @classmethod
    def get_custom_actions(cls):
        """Names of ``@action`` endpoints defined on the viewset."""
        return [
            attr_name
            for attr_name in dir(cls)
            if not attr_name.startswith("_")
            and callable(getattr(cls, attr_name))
            and hasattr(getattr(cls, attr_name), "mapping")
        ]

    @classmethod
    def get_registered_permissions(cls):
        """
        Get all permission metadata for this viewset.

        Returns:
            list: Dicts with ``code``, ``name``, ``description``, ``module`` and ``submodule``
        """
        if not cls.permission_prefix:
            return []

        permissions = []
        model_name = cls.get_model_name()
        for action_name, templates in cls.STANDARD_ACTIONS.items():
            if not hasattr(cls, action_name):
                continue
            display_name = cls.get_model_name_plural() if action_name == "list" else model_name
            permissions.append(cls._permission_entry(action_name, templates, display_name))

        for action_name in cls.get_custom_actions():
            action_meta = cls.PERMISSION_REGISTERED_ACTIONS.get(action_name)
            if action_meta is None:
                title = action_name.replace("_", " ").title()
                templates = (f"{title} {{model_name}}", f"{title} {{model_name}}")
            else:
                templates = (action_meta["name_template"], action_meta["description_template"])
            permissions.append(cls._permission_entry(action_name, templates, model_name))

        return permissions

    @classmethod
    def _permission_entry(cls, action_name, templates, display_name):
        name_template, description_template = templates
        return {
            "code": f"{cls.permission_prefix}.{action_name}",
            "name": str(name_template).format(model_name=display_name),
            "description": str(description_template).format(model_name=display_name),
            "module": str(cls.module),
            "submodule": str(cls.submodule),
        }
