"""Read-only dashboard projection over requests and stock, computed per call."""
from decimal import Decimal

from django.db.models import Count, Sum

from sales.models import ChickRequest, FeedRequest, SOLD_STATUSES, STATUS_CHOICES
from manager.services.ledger import chick_ledger, feed_ledger


def _status_counts(model):
    counts = {status: 0 for status, _ in STATUS_CHOICES}
    rows = model.objects.values('status').annotate(n=Count('id')).order_by('status')
    for row in rows:
        counts[row['status']] = row['n']
    counts['total'] = sum(counts.values())
    return counts


def dashboard_stats():
    chick_sales = (ChickRequest.objects
                   .filter(status__in=SOLD_STATUSES)
                   .aggregate(chicks=Sum('quantity'), value=Sum('total_cost')))
    feed_sales = (FeedRequest.objects
                  .filter(status__in=SOLD_STATUSES)
                  .aggregate(bags=Sum('quantity_bags'), value=Sum('total_cost')))

    return {
        'chick_requests': _status_counts(ChickRequest),
        'feed_requests': _status_counts(FeedRequest),
        'chick_stock': {
            'total': chick_ledger.total_across_all(),
            'by_type': chick_ledger.totals_by_type(),
        },
        'feed_stock': {
            'total_bags': feed_ledger.total_across_all(),
            'by_type': feed_ledger.totals_by_type(),
        },
        'chicks_sold': chick_sales['chicks'] or 0,
        'chick_sales': chick_sales['value'] or Decimal('0'),
        'feed_bags_sold': feed_sales['bags'] or 0,
        'feed_sales': feed_sales['value'] or Decimal('0'),
    }
