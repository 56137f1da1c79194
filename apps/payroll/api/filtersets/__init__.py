from .bonus_rule import BonusRuleFilterSet
from .payroll_record import PayrollRecordFilterSet

__all__ = ["BonusRuleFilterSet", "PayrollRecordFilterSet"]
