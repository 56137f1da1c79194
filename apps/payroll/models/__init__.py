from .balance_transaction import BalanceTransaction
from .bonus_rule import BonusRule
from .manual_metric_value import ManualMetricValue
from .payroll_record import PayrollRecord
from .salary_scheme import SalaryScheme

__all__ = [
    "BalanceTransaction",
    "BonusRule",
    "ManualMetricValue",
    "PayrollRecord",
    "SalaryScheme",
]
