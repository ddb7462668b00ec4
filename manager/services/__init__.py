from manager.services.ledger import StockLedger, chick_ledger, feed_ledger
from manager.services.lifecycle import TransitionResult, chick_requests, feed_requests
from manager.services.stats import dashboard_stats

__all__ = [
    'StockLedger', 'chick_ledger', 'feed_ledger',
    'TransitionResult', 'chick_requests', 'feed_requests',
    'dashboard_stats',
]
