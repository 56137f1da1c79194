from django.contrib import admin

from .models import JobTitle, Permission, Role, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["username", "email", "job_title", "balance", "is_active"]
    list_filter = ["is_active", "job_title"]
    search_fields = ["username", "email"]
    # Balance moves only through payroll payment and manual adjustment entries
    readonly_fields = ["balance", "last_login", "date_joined"]
    exclude = ["password"]


@admin.register(JobTitle)
class JobTitleAdmin(admin.ModelAdmin):
    list_display = ["name", "description"]
    search_fields = ["name"]


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ["code", "name"]
    filter_horizontal = ["permissions"]


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "module", "submodule"]
    list_filter = ["module"]
    search_fields = ["code", "name"]
