from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from roadtrip.routing.models import RouteCache


class Command(BaseCommand):
    help = "Delete cached routes older than the cache TTL (curated routes are kept)"  # noqa: A003

    def add_arguments(self, parser):
        parser.add_argument(
            "--ttl-days",
            type=int,
            default=None,
            help="Override ROUTE_CACHE_TTL_DAYS",
        )
        parser.add_argument("--dry-run", action="store_true")

    def handle(self, *args, **opts):
        ttl_days = opts["ttl_days"] if opts["ttl_days"] is not None else settings.ROUTE_CACHE_TTL_DAYS
        cutoff = timezone.now() - timedelta(days=ttl_days)

        expired = RouteCache.objects.filter(is_curated=False, created_at__lte=cutoff)
        count = expired.count()

        if opts["dry_run"]:
            self.stdout.write(self.style.WARNING(f"{count} expired route(s) would be deleted"))
            return

        deleted = expired.delete()[0]
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} expired route(s) older than {ttl_days} days"))
