from .bonus_rule import BonusRuleViewSet
from .manual_metric_value import ManualMetricValueViewSet
from .payroll_record import BalanceTransactionViewSet, PayrollRecordViewSet
from .salary_scheme import SalarySchemeViewSet

__all__ = [
    "BalanceTransactionViewSet",
    "BonusRuleViewSet",
    "ManualMetricValueViewSet",
    "PayrollRecordViewSet",
    "SalarySchemeViewSet",
]
