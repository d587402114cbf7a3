# routing/management/commands/populate_curated_routes.py

from time import sleep

from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError

from roadtrip.planner.service import restaurants_near_route
from roadtrip.routing.directions import DirectionsClient
from roadtrip.routing.errors import RoadTripError
from roadtrip.routing.models import RouteCache
from roadtrip.routing.service import RoutingService

CURATED_ROUTES = [
    {
        "slug": "sf-to-la",
        "from": "San Francisco, CA",
        "to": "Los Angeles, CA",
        "description": (
            "Cruise down the Pacific Coast from San Francisco to Los Angeles, from Bay Area burger "
            "joints to LA taco stands and everything in between."
        ),
    },
    {
        "slug": "nyc-to-boston",
        "from": "New York, NY",
        "to": "Boston, MA",
        "description": (
            "Journey through the Northeast corridor from New York City to Boston, with New Haven "
            "pizza, Connecticut diners and Boston seafood shacks along the way."
        ),
    },
    {
        "slug": "chicago-to-indianapolis",
        "from": "Chicago, IL",
        "to": "Indianapolis, IN",
        "description": (
            "The heartland food tour from Chicago to Indianapolis: deep-dish pizza, Italian beef "
            "sandwiches and Indiana comfort food classics."
        ),
    },
    {
        "slug": "austin-to-san-antonio",
        "from": "Austin, TX",
        "to": "San Antonio, TX",
        "description": (
            "A Texas BBQ and Tex-Mex pilgrimage from Austin to San Antonio, serving brisket, "
            "breakfast tacos and Mexican cuisine."
        ),
    },
    {
        "slug": "nashville-to-cincinnati",
        "from": "Nashville, TN",
        "to": "Cincinnati, OH",
        "description": (
            "From Music City to the Queen City: Nashville hot chicken and Southern BBQ, then "
            "Cincinnati chili parlors and German-inspired comfort food."
        ),
    },
    {
        "slug": "la-to-las-vegas",
        "from": "Los Angeles, CA",
        "to": "Las Vegas, NV",
        "description": (
            "The desert road trip from Los Angeles to Las Vegas, from LA taco trucks and burger "
            "joints to Vegas steakhouses and off-Strip gems."
        ),
    },
]


def curated_title(origin: str, destination: str) -> str:
    return f"{origin.split(',')[0]} to {destination.split(',')[0]}"


class Command(BaseCommand):
    help = "Fetch the editorial road trip routes and mark them as curated"  # noqa: A003

    def add_arguments(self, parser):
        parser.add_argument("--slug", type=str, help="Only populate the route with this slug")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without calling the directions API or writing",
        )
        parser.add_argument(
            "--radius",
            type=float,
            default=10.0,
            help="Radius in miles used for the restaurant count check (default: 10)",
        )
        parser.add_argument(
            "--delay",
            type=float,
            default=1.0,
            help="Seconds to wait between directions API calls (default: 1)",
        )

    def handle(self, *args, **options):
        slug_filter = options["slug"]
        dry_run = options["dry_run"]
        radius = options["radius"]
        delay = options["delay"]

        routes = [r for r in CURATED_ROUTES if not slug_filter or r["slug"] == slug_filter]
        if not routes:
            raise CommandError(f"No curated route matches slug: {slug_filter}")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN - no changes will be made"))

        service = None if dry_run else RoutingService(DirectionsClient.from_settings())

        success_count = 0
        error_count = 0

        for idx, entry in enumerate(routes):
            self.stdout.write(f"\n{entry['from']} → {entry['to']} ({entry['slug']})")
            try:
                self._populate(entry, service, dry_run, radius)
                success_count += 1
            except (RoadTripError, IntegrityError) as e:
                error_count += 1
                self.stdout.write(self.style.ERROR(f"  ✗ {entry['slug']}: {e}"))

            if service is not None and delay and idx < len(routes) - 1:
                sleep(delay)

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS(f"✓ Success: {success_count}"))
        if error_count:
            self.stdout.write(self.style.ERROR(f"✗ Errors: {error_count}"))
            raise CommandError(f"{error_count} curated route(s) failed")

    def _populate(self, entry, service, dry_run, radius):
        existing = RouteCache.objects.filter(slug=entry["slug"]).first()
        if existing:
            self.stdout.write(f"  Route already exists (id={existing.pk}, views={existing.view_count})")
            if not dry_run and not existing.is_curated:
                self._apply_metadata(existing, entry)
                self.stdout.write(self.style.SUCCESS("  ✓ Metadata updated"))
            return

        if dry_run:
            self.stdout.write("  Would fetch and save this route")
            return

        lookup = service.get_route(entry["from"], entry["to"])
        route = lookup.route
        source = "cache" if lookup.cache_hit else "directions API"
        self.stdout.write(
            f"  Route from {source}: {route.distance_miles:.0f} miles, {route.duration_hours:.1f} hours"
        )

        self._apply_metadata(route, entry)

        count = len(restaurants_near_route(route, radius))
        if count == 0:
            self.stdout.write(self.style.WARNING(f"  ⚠ No restaurants within {radius:g} miles"))
        else:
            self.stdout.write(self.style.SUCCESS(f"  ✓ {count} restaurants within {radius:g} miles"))

    def _apply_metadata(self, route, entry):
        route.slug = entry["slug"]
        route.is_curated = True
        route.title = curated_title(entry["from"], entry["to"])
        route.description = entry["description"]
        route.save(update_fields=["slug", "is_curated", "title", "description"])
