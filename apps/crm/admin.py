from django.contrib import admin

from .models import Client, Project, ProjectRenewal, Task, Transaction


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["name", "manager", "is_active"]
    search_fields = ["name"]


class ProjectRenewalInline(admin.TabularInline):
    model = ProjectRenewal
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["name", "client", "start_date", "end_date"]
    filter_horizontal = ["team"]
    inlines = [ProjectRenewalInline]


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ["title", "task_type", "status", "assignee", "completed_at"]
    list_filter = ["status", "task_type"]
    search_fields = ["title"]


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ["client", "type", "amount", "date", "is_verified"]
    list_filter = ["type", "is_verified"]
