"""Request submission and call logging for sales reps (and farmers)."""
import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from sales.models import (
    ChickRequest, FeedRequest, FeedRequestLine, CallLog,
    PENDING, APPROVED,
)

logger = logging.getLogger(__name__)

# ---- chick request rules ----
FOUR_MONTHS = timedelta(days=120)
QUANTITY_LIMITS = {
    'starter': (1, 100),
    'returning': (300, 500),
}

# ---- feed request rules ----
FEED_PRICES = {
    'starter': Decimal('45000'),  # UGX per bag
    'grower': Decimal('42000'),
    'layer': Decimal('40000'),
    'broiler': Decimal('43000'),
}
MAX_FEED_BAGS = 2
PAYMENT_TERMS = timedelta(days=60)
URGENCY_PRIORITY = {'normal': 1, 'urgent': 2, 'emergency': 3}


def submit_chick_request(farmer, chick_type, quantity, unit_price=None, requested_by=None, notes=''):
    chick_type = (chick_type or '').strip()
    if not chick_type:
        raise ValidationError({'chick_type': "Chick type is required."})

    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        raise ValidationError({'quantity': "Quantity must be a whole number."})

    low, high = QUANTITY_LIMITS[farmer.farmer_type]
    if not low <= quantity <= high:
        raise ValidationError({
            'quantity': f"{farmer.get_farmer_type_display()} farmers can request between {low} and {high} chicks."
        })

    # ---- 4-month rule ----
    last_req = (ChickRequest.objects
                .filter(farmer=farmer)
                .order_by('-submitted_on', '-id')
                .first())
    if last_req:
        cutoff = last_req.submitted_on + FOUR_MONTHS
        if timezone.now() < cutoff:
            raise ValidationError(
                f"{farmer.name} last requested on {last_req.submitted_on:%b %d, %Y}. "
                f"Next eligible date is {cutoff:%b %d, %Y}."
            )

    unit_price = Decimal(unit_price) if unit_price else Decimal(settings.CHICK_UNIT_PRICE)
    req = ChickRequest.objects.create(
        farmer=farmer,
        chick_type=chick_type,
        quantity=quantity,
        unit_price=unit_price,
        total_cost=unit_price * quantity,
        requested_by=requested_by,
        notes=(notes or '').strip(),
    )
    logger.info("ChickRequest #%s submitted: %s x %s for farmer #%s", req.pk, quantity, chick_type, farmer.pk)
    return req


def split_feed_bags(feed_types, quantity_bags):
    """
    Spread ``quantity_bags`` evenly over ``feed_types``; the first types take
    the remainder. Types that end up with no bags are dropped.
    """
    base, extra = divmod(quantity_bags, len(feed_types))
    lines = []
    for index, feed_type in enumerate(feed_types):
        bags = base + (1 if index < extra else 0)
        if bags:
            unit_price = FEED_PRICES[feed_type]
            lines.append((feed_type, bags, unit_price, unit_price * bags))
    return lines


def _next_request_code(today):
    prefix = f"FD{today:%y%m%d}"
    todays = FeedRequest.objects.filter(request_code__startswith=prefix).count()
    return f"{prefix}{todays + 1:03d}"


@transaction.atomic
def submit_feed_request(farmer, feed_types, quantity_bags, urgency='normal', requested_by=None,
                        special_requirements=''):
    errors = {}

    # keep order, drop duplicates
    feed_types = list(dict.fromkeys(feed_types or []))
    if not feed_types:
        errors['feed_types'] = "Please select at least one feed type."
    elif any(ft not in FEED_PRICES for ft in feed_types):
        errors['feed_types'] = "Invalid feed type(s) selected."

    try:
        quantity_bags = int(quantity_bags)
    except (TypeError, ValueError):
        quantity_bags = 0
    if not 1 <= quantity_bags <= MAX_FEED_BAGS:
        errors['quantity_bags'] = f"Feed quantity must be between 1 and {MAX_FEED_BAGS} bags."

    if urgency not in URGENCY_PRIORITY:
        errors['urgency'] = "Invalid urgency level."

    if errors:
        raise ValidationError(errors)

    open_req = (FeedRequest.objects
                .filter(farmer=farmer, status__in=[PENDING, APPROVED])
                .first())
    if open_req:
        raise ValidationError(
            f"{farmer.name} already has an open feeds request ({open_req.request_code}). "
            f"Please wait for it to be processed before submitting a new request."
        )

    lines = split_feed_bags(feed_types, quantity_bags)
    today = timezone.localdate()
    req = FeedRequest.objects.create(
        farmer=farmer,
        request_code=_next_request_code(today),
        quantity_bags=quantity_bags,
        total_cost=sum(total for *_, total in lines),
        urgency=urgency,
        priority=URGENCY_PRIORITY[urgency],
        special_requirements=(special_requirements or '').strip(),
        payment_due_date=today + PAYMENT_TERMS,
        requested_by=requested_by,
    )
    FeedRequestLine.objects.bulk_create([
        FeedRequestLine(request=req, feed_type=feed_type, quantity_bags=bags,
                        unit_price=unit_price, total_price=total)
        for feed_type, bags, unit_price, total in lines
    ])
    logger.info("FeedRequest %s submitted: %s bag(s) for farmer #%s", req.request_code, quantity_bags, farmer.pk)
    return req


def log_call(sales_rep, farmer_name, phone, call_date=None, status='attempted', notes=''):
    valid = {choice for choice, _ in CallLog.STATUS_CHOICES}
    if status not in valid:
        raise ValidationError({'status': "Invalid call status."})
    if not (farmer_name or '').strip() or not (phone or '').strip():
        raise ValidationError("Farmer name and phone are required.")

    return CallLog.objects.create(
        sales_rep=sales_rep,
        farmer_name=farmer_name.strip(),
        phone=phone.strip(),
        call_date=call_date or timezone.now(),
        status=status,
        notes=(notes or '').strip(),
    )
