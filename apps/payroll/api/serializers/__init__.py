from .bonus_rule import BonusRuleSerializer, TieredBandSerializer
from .manual_metric_value import ManualMetricValueSerializer
from .payroll_record import (
    BalanceAdjustmentSerializer,
    BalanceTransactionSerializer,
    CopyPreviousMonthResultSerializer,
    LedgerResultSerializer,
    PayrollComputeSerializer,
    PayrollManualFieldsSerializer,
    PayrollMonthSerializer,
    PayrollRecordSerializer,
)
from .salary_scheme import KPIRuleSerializer, SalarySchemeSerializer, SalarySchemeUpsertSerializer

__all__ = [
    "BalanceAdjustmentSerializer",
    "BalanceTransactionSerializer",
    "BonusRuleSerializer",
    "CopyPreviousMonthResultSerializer",
    "KPIRuleSerializer",
    "LedgerResultSerializer",
    "ManualMetricValueSerializer",
    "PayrollComputeSerializer",
    "PayrollManualFieldsSerializer",
    "PayrollMonthSerializer",
    "PayrollRecordSerializer",
    "SalarySchemeSerializer",
    "SalarySchemeUpsertSerializer",
    "TieredBandSerializer",
]
