"""Celery tasks for affiliate app."""

from celery import shared_task


@shared_task
def mature_referral_transactions():
    """Move pending referral commissions past their maturation window to ready.

    Returns:
        str: Result message
    """
    from apps.affiliate.services.commission_ledger import mature_pending_transactions

    matured = mature_pending_transactions()
    return f"Matured {matured} referral transactions"
