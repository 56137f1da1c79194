from rest_framework.routers import DefaultRouter

from apps.payroll.api.views import (
    BalanceTransactionViewSet,
    BonusRuleViewSet,
    ManualMetricValueViewSet,
    PayrollRecordViewSet,
    SalarySchemeViewSet,
)

app_name = "payroll"

router = DefaultRouter()
router.register(r"bonus-rules", BonusRuleViewSet, basename="bonus-rule")
router.register(r"salary-schemes", SalarySchemeViewSet, basename="salary-scheme")
router.register(r"payroll-records", PayrollRecordViewSet, basename="payroll-record")
router.register(r"manual-metrics", ManualMetricValueViewSet, basename="manual-metric")
router.register(r"balance-transactions", BalanceTransactionViewSet, basename="balance-transaction")

urlpatterns = router.urls
