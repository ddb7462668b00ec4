import random
import string
from datetime import timedelta, date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from faker import Faker

from manager.models import ChickStock, FeedStock, ChickAllocation, FeedAllocation
from manager.services import chick_ledger, feed_ledger, chick_requests, feed_requests
from sales.models import Farmer, ChickRequest, FeedRequest
from sales.services import submit_chick_request, submit_feed_request, FEED_PRICES

fake = Faker("en_US")

CHICK_BREEDS = [
    ("broiler", "Broiler - Local"),
    ("broiler", "Broiler - Exotic"),
    ("layer", "Layer - Local"),
    ("layer", "Layer - Exotic"),
]
FEED_TYPES = list(FEED_PRICES)
URGENCIES = ["normal", "normal", "normal", "urgent", "emergency"]


def rand_phone():
    return "07" + str(random.randint(10000000, 99999999))


def rand_nin(gender: str) -> str:
    """Return a 14-character NIN. Males start with CM..., females with CF...; mix letters+digits."""
    prefix = "CM" if gender == "M" else "CF"
    tail = "".join(random.choice(string.ascii_uppercase + string.digits) for _ in range(12))
    return prefix + tail


def rand_dob_18_to_30():
    """Random DOB such that age is between 18 and 30 (approx; 365-day years)."""
    today = date.today()
    years = random.randint(18, 30)
    extra_days = random.randint(0, 364)
    return today - timedelta(days=years * 365 + extra_days)


class Command(BaseCommand):
    help = "Seed demo data: farmers, chick & feed stock, chick & feed requests, manager decisions."

    def add_arguments(self, parser):
        parser.add_argument("--farmers", type=int, default=40, help="How many farmers to create")
        parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
        parser.add_argument("--wipe", action="store_true", help="Delete existing demo data before seeding")

    @transaction.atomic
    def handle(self, *args, **opts):
        random.seed(opts["seed"])
        fake.seed_instance(opts["seed"])

        self.stdout.write(self.style.MIGRATE_HEADING("Seeding demo data…"))

        if opts["wipe"]:
            self._wipe()

        manager = self._ensure_manager()
        farmers = self._ensure_farmers(opts["farmers"])
        self._receive_stock(manager)

        chick_reqs = self._create_chick_requests(farmers)
        feed_reqs = self._create_feed_requests(farmers)
        self._decide(chick_requests, chick_reqs, manager)
        self._decide(feed_requests, feed_reqs, manager)

        self.stdout.write(self.style.SUCCESS("Done. Happy testing!"))

    # -------------------- helpers --------------------

    def _wipe(self):
        self.stdout.write("Wiping existing demo rows…")
        # allocations first, stock rows are PROTECTed by them
        for model in [ChickAllocation, FeedAllocation, FeedRequest, ChickRequest, Farmer, ChickStock, FeedStock]:
            model.objects.all().delete()

    def _ensure_manager(self):
        User = get_user_model()
        manager, created = User.objects.get_or_create(
            username="demo_manager",
            defaults={"role": User.BROODER_MANAGER, "first_name": fake.first_name(), "last_name": fake.last_name()},
        )
        if created:
            manager.set_password("demo12345")
            manager.save(update_fields=["password"])
        return manager

    def _ensure_farmers(self, target):
        farmers = list(Farmer.objects.all())
        for _ in range(max(0, target - len(farmers))):
            gender = random.choice(["M", "F"])
            nin = rand_nin(gender)
            while Farmer.objects.filter(nin=nin).exists():
                nin = rand_nin(gender)

            farmers.append(Farmer.objects.create(
                name=fake.name_male() if gender == "M" else fake.name_female(),
                dob=rand_dob_18_to_30(),
                gender=gender,
                nin=nin,
                recommender=fake.name(),
                recommender_nin=rand_nin(random.choice(["M", "F"])),
                contact=rand_phone(),
                farmer_type=random.choice(["starter", "starter", "returning"]),
            ))
        self.stdout.write(f"Farmers: {len(farmers)}")
        return farmers

    def _receive_stock(self, manager):
        for category, chick_type in CHICK_BREEDS:
            # two batches per breed so approvals exercise the FIFO draw
            for weeks_back in (3, 1):
                chick_ledger.receive(
                    chick_type, random.randint(400, 1500),
                    category=category,
                    age_days=random.randint(0, 7),
                    received_on=timezone.localdate() - timedelta(weeks=weeks_back),
                    recorded_by=manager,
                )
        for feed_type in FEED_TYPES:
            feed_ledger.receive(
                feed_type, random.randint(10, 40),
                unit_price=FEED_PRICES[feed_type] - Decimal(random.choice([3000, 5000, 8000])),
                expiry_date=timezone.localdate() + timedelta(days=random.randint(60, 180)),
                recorded_by=manager,
            )
        self.stdout.write(f"ChickStock: {chick_ledger.total_across_all()} chicks | "
                          f"FeedStock: {feed_ledger.total_across_all()} bags")

    def _create_chick_requests(self, farmers):
        self.stdout.write("Creating chick requests…")
        created = []
        for farmer in farmers:
            _, chick_type = random.choice(CHICK_BREEDS)
            low, high = (1, 100) if farmer.farmer_type == "starter" else (300, 500)
            try:
                created.append(submit_chick_request(
                    farmer, chick_type, random.randint(low, high), notes="Auto-seeded",
                ))
            except ValidationError:
                # farmer already asked within the last four months
                continue
        self.stdout.write(f"ChickRequests: {len(created)}")
        return created

    def _create_feed_requests(self, farmers):
        self.stdout.write("Creating feed requests…")
        created = []
        for farmer in random.sample(farmers, k=len(farmers) // 2):
            try:
                created.append(submit_feed_request(
                    farmer,
                    feed_types=random.sample(FEED_TYPES, k=random.randint(1, 2)),
                    quantity_bags=random.randint(1, 2),
                    urgency=random.choice(URGENCIES),
                ))
            except ValidationError:
                # open request already on file
                continue
        self.stdout.write(f"FeedRequests: {len(created)}")
        return created

    def _decide(self, lifecycle, requests, manager):
        tally = {}
        for req in requests:
            roll = random.random()
            if roll < 0.2:
                continue
            elif roll < 0.35:
                result = lifecycle.reject(req.pk, manager, "Auto-seeded")
            else:
                result = lifecycle.approve(req.pk, manager)
                if result.success and roll > 0.75:
                    result = lifecycle.dispatch(req.pk, manager)
                elif result.success and roll > 0.7:
                    result = lifecycle.cancel(req.pk, manager, "Farmer no longer needs the order")
            tally[result.code] = tally.get(result.code, 0) + 1
        summary = ", ".join(f"{code}={count}" for code, count in sorted(tally.items())) or "none"
        self.stdout.write(f"Decisions: {summary}")
