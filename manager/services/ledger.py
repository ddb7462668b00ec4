"""
Stock ledger: per item-type inventory counts backed by stock batches.

Every decrement is a single guarded UPDATE (``qty >= n``) so two managers
approving against the same batch can never drive it below zero. Increments
carry no precondition.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from django.db import transaction
from django.db.models import F, Sum

from manager.exceptions import InsufficientStock, StockNotFound
from manager.models import ChickStock, FeedStock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draw:
    """Quantity taken from (or returned to) one stock batch."""
    stock_id: int
    quantity: int


@dataclass(frozen=True)
class LedgerEntry:
    item_type: str
    quantity: int
    remaining: int
    draws: Tuple[Draw, ...] = ()


class StockLedger:

    def __init__(self, model, type_field, quantity_field, received_field='received_on'):
        self.model = model
        self.type_field = type_field
        self.quantity_field = quantity_field
        self.received_field = received_field

    def __repr__(self):
        return f"<StockLedger {self.model.__name__}>"

    # ---------------------- reads ----------------------

    def batches(self, item_type):
        return (self.model.objects
                .filter(**{self.type_field: item_type})
                .order_by(self.received_field, 'id'))

    def available(self, item_type) -> int:
        return self.batches(item_type).aggregate(total=Sum(self.quantity_field))['total'] or 0

    def totals_by_type(self) -> Dict[str, int]:
        rows = (self.model.objects
                .values(self.type_field)
                .annotate(total=Sum(self.quantity_field))
                .order_by(self.type_field))
        return {row[self.type_field]: row['total'] or 0 for row in rows}

    def total_across_all(self) -> int:
        return self.model.objects.aggregate(total=Sum(self.quantity_field))['total'] or 0

    def _on_hand(self, stock_id) -> int:
        return (self.model.objects
                .filter(pk=stock_id)
                .values_list(self.quantity_field, flat=True)
                .first()) or 0

    # ---------------------- writes ----------------------

    def _take(self, stock_id, quantity) -> bool:
        """Decrement one batch only if it still holds ``quantity``."""
        qf = self.quantity_field
        updated = (self.model.objects
                   .filter(pk=stock_id, **{f'{qf}__gte': quantity})
                   .update(**{qf: F(qf) - quantity}))
        return updated == 1

    def _give(self, stock_id, quantity) -> bool:
        qf = self.quantity_field
        return self.model.objects.filter(pk=stock_id).update(**{qf: F(qf) + quantity}) == 1

    def receive(self, item_type, quantity, **fields):
        """Record a newly delivered batch."""
        if quantity < 0:
            raise ValueError("quantity must not be negative")
        batch = self.model.objects.create(
            **{self.type_field: item_type, self.quantity_field: quantity},
            **fields,
        )
        logger.info("Received %s x %s into %s #%s", quantity, item_type, self.model.__name__, batch.pk)
        return batch

    def reserve(self, item_type, quantity) -> LedgerEntry:
        """
        Draw ``quantity`` units of ``item_type`` from its batches, oldest first.

        Raises InsufficientStock (with nothing drawn) when the batches cannot
        cover the request. An unknown item type reports 0 available.
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        with transaction.atomic():
            draws = []
            remaining = quantity
            candidates = (self.batches(item_type)
                          .filter(**{f'{self.quantity_field}__gt': 0})
                          .values_list('pk', flat=True))
            for stock_id in list(candidates):
                while remaining:
                    take = min(self._on_hand(stock_id), remaining)
                    if take <= 0:
                        break
                    if self._take(stock_id, take):
                        draws.append(Draw(stock_id, take))
                        remaining -= take
                        break
                    # lost a race on this batch; re-read and try again
                if not remaining:
                    break

            if remaining:
                # leaving the atomic block via the exception undoes the partial draws
                raise InsufficientStock(item_type, available=quantity - remaining, requested=quantity)

        left = self.available(item_type)
        logger.info("Reserved %s x %s (%s left)", quantity, item_type, left)
        return LedgerEntry(item_type, quantity, left, tuple(draws))

    def release(self, item_type, quantity, draws: Optional[Iterable[Draw]] = None) -> LedgerEntry:
        """
        Put ``quantity`` units of ``item_type`` back on hand.

        With ``draws`` each batch gets back exactly what was taken from it;
        without, the newest batch of the type receives the whole quantity.
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        with transaction.atomic():
            if draws is None:
                newest = self.batches(item_type).order_by(f'-{self.received_field}', '-id').first()
                if newest is None:
                    raise StockNotFound(item_type)
                draws = (Draw(newest.pk, quantity),)
            else:
                draws = tuple(draws)
                if sum(d.quantity for d in draws) != quantity:
                    raise ValueError("draws do not add up to the released quantity")

            for draw in draws:
                if not self._give(draw.stock_id, draw.quantity):
                    raise StockNotFound(item_type)

        left = self.available(item_type)
        logger.info("Released %s x %s (%s on hand)", quantity, item_type, left)
        return LedgerEntry(item_type, quantity, left, draws)


chick_ledger = StockLedger(ChickStock, 'chick_type', 'quantity')
feed_ledger = StockLedger(FeedStock, 'feed_type', 'quantity_bags')
