"""
Management command to turn the periodic payroll resync job on or off.
"""

from django.core.management.base import BaseCommand

from apps.payroll.tasks import cancel_payroll_resync, resync_payroll_records, schedule_payroll_resync


class Command(BaseCommand):
    help = "Schedule, cancel or run the payroll resync job"

    def add_arguments(self, parser):
        parser.add_argument("action", choices=["schedule", "cancel", "run"])
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Interval in seconds (defaults to PAYROLL_AUTO_SYNC_INTERVAL_SECONDS)",
        )
        parser.add_argument("--month", default=None, help="Month to resync (YYYY-MM), used with 'run'")

    def handle(self, *args, **options):
        action = options["action"]

        if action == "schedule":
            task = schedule_payroll_resync(options["interval"])
            self.stdout.write(self.style.SUCCESS(f"Scheduled {task.name} every {task.interval.every} seconds"))
        elif action == "cancel":
            if cancel_payroll_resync():
                self.stdout.write(self.style.SUCCESS("Cancelled payroll resync job"))
            else:
                self.stdout.write(self.style.WARNING("Payroll resync job was not scheduled"))
        else:
            self.stdout.write(resync_payroll_records(options["month"]))
