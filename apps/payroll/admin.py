from django.contrib import admin

from .models import BalanceTransaction, BonusRule, ManualMetricValue, PayrollRecord, SalaryScheme


@admin.register(BonusRule)
class BonusRuleAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "owner_type",
        "owner_id",
        "metric_source",
        "condition_type",
        "reward_type",
        "reward_value",
        "calculation_period",
        "is_active",
    ]
    list_filter = ["owner_type", "metric_source", "condition_type", "is_active"]
    search_fields = ["name"]


@admin.register(SalaryScheme)
class SalarySchemeAdmin(admin.ModelAdmin):
    list_display = ["owner_type", "owner_id", "base_salary", "is_active", "updated_at"]
    list_filter = ["owner_type", "is_active"]


@admin.register(PayrollRecord)
class PayrollRecordAdmin(admin.ModelAdmin):
    """Admin configuration for PayrollRecord model.

    Records are changed through the payroll ledger only; the admin is read-only.
    """

    list_display = ["user", "month", "status", "fix_salary", "calculated_kpi", "net_amount", "paid_at"]
    list_filter = ["status", "month"]
    search_fields = ["user__username", "user__email"]
    readonly_fields = [field.name for field in PayrollRecord._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        """Prevent deletion through admin to maintain history."""
        return False


@admin.register(BalanceTransaction)
class BalanceTransactionAdmin(admin.ModelAdmin):
    list_display = ["user", "amount", "source", "balance_after", "payroll_record", "created_at"]
    list_filter = ["source"]
    search_fields = ["user__username", "note"]
    readonly_fields = [field.name for field in BalanceTransaction._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ManualMetricValue)
class ManualMetricValueAdmin(admin.ModelAdmin):
    list_display = ["user", "month", "metric_source", "value"]
    list_filter = ["metric_source", "month"]
