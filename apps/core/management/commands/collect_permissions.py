from importlib import import_module

from django.apps import apps
from django.core.management.base import BaseCommand

from apps.core.models import Permission
from libs.drf.mixin.permission import PermissionRegistrationMixin


class Command(BaseCommand):
    help = "Collect all registered permissions from viewsets and sync to database"

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Collecting permissions from viewsets..."))

        unique_permissions = {}
        for perm in self._collect_from_viewsets():
            unique_permissions.setdefault(perm["code"], perm)

        created_count = 0
        updated_count = 0
        for code, perm_data in unique_permissions.items():
            _, created = Permission.objects.update_or_create(
                code=code,
                defaults={
                    "name": f"[{perm_data['module']}] [{perm_data['submodule']}] {perm_data['name']}",
                    "description": perm_data["description"],
                    "module": perm_data["module"],
                    "submodule": perm_data["submodule"],
                },
            )
            if created:
                created_count += 1
            else:
                updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully collected {len(unique_permissions)} permissions "
                f"({created_count} created, {updated_count} updated)"
            )
        )

    def _collect_from_viewsets(self):
        """Yield permission metadata from every PermissionRegistrationMixin subclass in ``apps.*.api.views``"""
        for app_config in apps.get_app_configs():
            if not app_config.name.startswith("apps."):
                continue

            try:
                views_module = import_module(f"{app_config.name}.api.views")
            except ModuleNotFoundError:
                continue

            for attr_name in dir(views_module):
                attr = getattr(views_module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, PermissionRegistrationMixin)
                    and attr is not PermissionRegistrationMixin
                ):
                    yield from attr.get_registered_permissions()
