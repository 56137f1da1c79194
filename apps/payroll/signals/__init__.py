"""Signals package for payroll app.

Signals are automatically registered when the app is initialized.
"""

from apps.payroll.signals import payroll_recalculation

__all__ = ["payroll_recalculation"]
