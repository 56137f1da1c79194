from django.core.management.base import BaseCommand

from apps.affiliate.constants import DEFAULT_AFFILIATE_CONFIG
from apps.affiliate.models import AffiliateConfig


class Command(BaseCommand):
    help = "Initialize affiliate program configuration with the default tier table"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all existing configurations before creating new one",
        )

    def handle(self, *args, **options):
        if options.get("reset", False):
            count = AffiliateConfig.objects.count()
            if count > 0:
                AffiliateConfig.objects.all().delete()
                self.stdout.write(self.style.WARNING(f"Deleted {count} existing affiliate configuration(s)"))

        config = AffiliateConfig.objects.create(config=DEFAULT_AFFILIATE_CONFIG)

        self.stdout.write(self.style.SUCCESS(f"Successfully created affiliate configuration v{config.version}"))
        self.stdout.write("\nConfiguration summary:")
        self.stdout.write(f"  - Tiers: {len(DEFAULT_AFFILIATE_CONFIG['tiers'])}")
        self.stdout.write(f"  - First payment percent: {DEFAULT_AFFILIATE_CONFIG['first_payment_percent']}")
        self.stdout.write(f"  - Maturation days: {DEFAULT_AFFILIATE_CONFIG['maturation_days']}")
        self.stdout.write(f"  - Minimum payout: {DEFAULT_AFFILIATE_CONFIG['min_payout']}")
