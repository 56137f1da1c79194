from django.contrib import admin

from .models import (
    AffiliateConfig,
    Organization,
    OrganizationPayment,
    PromoCode,
    ReferralPayout,
    ReferralRegistration,
    ReferralTransaction,
)


@admin.register(AffiliateConfig)
class AffiliateConfigAdmin(admin.ModelAdmin):
    """Admin configuration for AffiliateConfig model.

    Version field is read-only and auto-incremented.
    """

    list_display = ["version", "updated_at", "created_at"]
    readonly_fields = ["version", "created_at", "updated_at"]
    fieldsets = [
        (
            None,
            {
                "fields": ["version", "config"],
                "description": "Edit the affiliate tier table and payout settings. Version is auto-incremented on save.",
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"], "classes": ["collapse"]}),
    ]

    def has_delete_permission(self, request, obj=None):
        """Prevent deletion through admin to maintain history."""
        return False


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "balance", "referred_by_promo_code"]
    search_fields = ["name"]


@admin.register(OrganizationPayment)
class OrganizationPaymentAdmin(admin.ModelAdmin):
    list_display = ["organization", "amount", "paid_at"]


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ["code", "organization", "user", "registrations_count", "payments_count", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["code"]


@admin.register(ReferralRegistration)
class ReferralRegistrationAdmin(admin.ModelAdmin):
    list_display = ["referred_organization", "referrer_organization", "level", "is_active", "created_at"]
    list_filter = ["level", "is_active"]


@admin.register(ReferralTransaction)
class ReferralTransactionAdmin(admin.ModelAdmin):
    list_display = ["referrer_user", "referred_organization", "level", "commission_amount", "status", "ready_at"]
    list_filter = ["status", "level"]


@admin.register(ReferralPayout)
class ReferralPayoutAdmin(admin.ModelAdmin):
    list_display = ["user", "amount", "status", "requested_at", "processed_at"]
