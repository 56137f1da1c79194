from .base import config

# Periodic recomputation of DRAFT payroll records for the current month
PAYROLL_AUTO_SYNC_ENABLED = config("PAYROLL_AUTO_SYNC_ENABLED", default=True, cast=bool)
PAYROLL_AUTO_SYNC_INTERVAL_SECONDS = config("PAYROLL_AUTO_SYNC_INTERVAL_SECONDS", default=15 * 60, cast=int)
PAYROLL_AUTO_SYNC_TASK_NAME = "payroll_resync_records"
