"""
Request lifecycle: the manager-side state machine for chick and feed requests.

    pending  --approve-->  approved  --dispatch-->  dispatched
    pending  --reject--->  rejected
    approved --cancel--->  canceled   (stock released)

Each transition runs in one atomic block together with its stock side
effect, so a request is never approved without its reservation, nor canceled
without its release. Failures come back as a ``TransitionResult`` rather than
an exception.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from manager.exceptions import (
    IllegalTransition, InvalidRequest, LifecycleError, PermissionDenied,
    PersistenceUnavailable, RequestNotFound,
)
from manager.models import ChickAllocation, FeedAllocation
from manager.services.ledger import Draw, chick_ledger, feed_ledger
from manager.services.stats import dashboard_stats
from sales.models import (
    ChickRequest, FeedRequest,
    PENDING, APPROVED, DISPATCHED, REJECTED, CANCELED,
)

logger = logging.getLogger(__name__)

# action -> (required status, resulting status)
TRANSITIONS = {
    'approve': (PENDING, APPROVED),
    'reject': (PENDING, REJECTED),
    'dispatch': (APPROVED, DISPATCHED),
    'cancel': (APPROVED, CANCELED),
}

DEFAULT_REJECTION_REASON = "No reason provided"
DEFAULT_CANCELLATION_REASON = "Canceled by manager"


@dataclass
class TransitionResult:
    success: bool
    message: str
    code: str = 'ok'
    request: Any = None
    stats: Optional[Dict[str, Any]] = None
    details: Dict[str, Any] = field(default_factory=dict)
    entity: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, message, request, stats, entity=None):
        return cls(success=True, message=message, request=request, stats=stats, entity=entity)

    @classmethod
    def failure(cls, error: LifecycleError):
        return cls(success=False, message=error.message, code=error.code, details=error.details)

    def as_dict(self):
        data = {
            'success': self.success,
            'message': self.message,
            'code': self.code,
        }
        if self.stats is not None:
            data['updatedStats'] = self.stats
        if self.entity is not None:
            data['mutatedEntity'] = self.entity
        if self.details:
            data['details'] = self.details
        return data


class RequestLifecycle:
    request_model = None
    allocation_model = None
    ledger = None

    def stock_lines(self, req):
        """Return ``[(item_type, quantity), ...]`` the request reserves."""
        raise NotImplementedError

    def requested_quantity(self, req):
        raise NotImplementedError

    def describe(self, req):
        return {
            'id': req.pk,
            'farmer': req.farmer_id,
            'status': req.status,
            'total_cost': req.total_cost,
            'submitted_on': req.submitted_on,
            'approved_by': req.approved_by_id,
            'approved_at': req.approved_at,
            'rejection_reason': req.rejection_reason,
            'rejected_by': req.rejected_by_id,
            'rejected_at': req.rejected_at,
            'dispatched_by': req.dispatched_by_id,
            'dispatched_at': req.dispatched_at,
            'canceled_by': req.canceled_by_id,
            'canceled_at': req.canceled_at,
            'cancellation_reason': req.cancellation_reason,
            'lines': [
                {'item_type': item_type, 'quantity': quantity}
                for item_type, quantity in self.stock_lines(req)
            ],
        }

    # ---------------------- public operations ----------------------

    def approve(self, request_id, actor):
        return self._run('approve', request_id, actor, self._approve)

    def reject(self, request_id, actor, reason=None):
        return self._run('reject', request_id, actor, self._reject, reason)

    def dispatch(self, request_id, actor):
        return self._run('dispatch', request_id, actor, self._dispatch)

    def cancel(self, request_id, actor, reason=None):
        return self._run('cancel', request_id, actor, self._cancel, reason)

    # ---------------------- plumbing ----------------------

    def _run(self, action, request_id, actor, apply, *args):
        label = self.request_model.__name__
        try:
            if actor is None or not getattr(actor, 'is_brooder_manager', False):
                raise PermissionDenied(action)
            try:
                with transaction.atomic():
                    req = self._lock(request_id)
                    message = apply(req, actor, *args)
                    entity = self.describe(req)
            except DatabaseError as exc:
                logger.exception("%s #%s: %s failed in the database", label, request_id, action)
                raise PersistenceUnavailable() from exc
        except LifecycleError as exc:
            logger.warning("%s #%s: %s refused (%s): %s", label, request_id, action, exc.code, exc.message)
            return TransitionResult.failure(exc)

        logger.info("%s #%s: %s by %s", label, request_id, action, getattr(actor, 'pk', None))
        return TransitionResult.ok(message, req, self._stats(), entity)

    def _stats(self):
        # the transition is committed by now; a failed read only drops the stats
        try:
            with transaction.atomic():
                return dashboard_stats()
        except DatabaseError:
            logger.exception("Dashboard stats unavailable after %s update", self.request_model.__name__)
            return None

    def _lock(self, request_id):
        req = self.request_model.objects.select_for_update().filter(pk=request_id).first()
        if req is None:
            raise RequestNotFound(request_id)
        return req

    def _checked_lines(self, req):
        lines = self.stock_lines(req)
        if not lines:
            raise InvalidRequest(req.pk, "has no stock lines")
        if any(quantity <= 0 for _, quantity in lines):
            raise InvalidRequest(req.pk, "has a line without a positive quantity")
        total = sum(quantity for _, quantity in lines)
        expected = self.requested_quantity(req)
        if total != expected:
            raise InvalidRequest(req.pk, f"lines add up to {total}, expected {expected}")
        return lines

    def _require(self, req, action):
        source, _ = TRANSITIONS[action]
        if req.status != source:
            raise IllegalTransition(action, req.status)

    def _advance(self, req, action, **stamps):
        source, target = TRANSITIONS[action]
        updated = (self.request_model.objects
                   .filter(pk=req.pk, status=source)
                   .update(status=target, updated_at=timezone.now(), **stamps))
        if not updated:
            req.refresh_from_db(fields=['status'])
            raise IllegalTransition(action, req.status)
        req.refresh_from_db()

    # ---------------------- transitions ----------------------

    def _approve(self, req, actor):
        self._require(req, 'approve')
        # fixed type order keeps concurrent multi-line approvals from deadlocking
        for item_type, quantity in sorted(self._checked_lines(req)):
            entry = self.ledger.reserve(item_type, quantity)
            self.allocation_model.objects.bulk_create([
                self.allocation_model(request=req, stock_id=draw.stock_id, quantity=draw.quantity)
                for draw in entry.draws
            ])
        self._advance(req, 'approve', approved_by=actor, approved_at=timezone.now(), rejection_reason=None)
        return f"Request #{req.pk} approved"

    def _reject(self, req, actor, reason):
        self._require(req, 'reject')
        reason = (reason or '').strip() or DEFAULT_REJECTION_REASON
        self._advance(req, 'reject', rejection_reason=reason, rejected_by=actor, rejected_at=timezone.now())
        return f"Request #{req.pk} rejected: {reason}"

    def _dispatch(self, req, actor):
        self._require(req, 'dispatch')
        self._advance(req, 'dispatch', dispatched_by=actor, dispatched_at=timezone.now())
        return f"Request #{req.pk} dispatched"

    def _cancel(self, req, actor, reason):
        self._require(req, 'cancel')
        now = timezone.now()

        live = list(req.allocations.filter(released_on__isnull=True).select_related('stock'))
        draws_by_type = defaultdict(list)
        for allocation in live:
            item_type = getattr(allocation.stock, self.ledger.type_field)
            draws_by_type[item_type].append(Draw(allocation.stock_id, allocation.quantity))
        for item_type, draws in draws_by_type.items():
            self.ledger.release(item_type, sum(d.quantity for d in draws), draws)
        self.allocation_model.objects.filter(pk__in=[a.pk for a in live]).update(released_on=now)

        reason = (reason or '').strip() or DEFAULT_CANCELLATION_REASON
        self._advance(req, 'cancel', canceled_by=actor, canceled_at=now, cancellation_reason=reason)
        return f"Request #{req.pk} canceled, stock returned"


class ChickRequestLifecycle(RequestLifecycle):
    request_model = ChickRequest
    allocation_model = ChickAllocation
    ledger = chick_ledger

    def stock_lines(self, req):
        return [(req.chick_type, req.quantity)]

    def requested_quantity(self, req):
        return req.quantity

    def describe(self, req):
        data = super().describe(req)
        data.update(kind='chicks', chick_type=req.chick_type, quantity=req.quantity, unit_price=req.unit_price)
        return data


class FeedRequestLifecycle(RequestLifecycle):
    request_model = FeedRequest
    allocation_model = FeedAllocation
    ledger = feed_ledger

    def stock_lines(self, req):
        return [(line.feed_type, line.quantity_bags) for line in req.lines.all()]

    def requested_quantity(self, req):
        return req.quantity_bags

    def describe(self, req):
        data = super().describe(req)
        data.update(
            kind='feeds',
            request_code=req.request_code,
            quantity_bags=req.quantity_bags,
            payment_status=req.payment_status,
            payment_due_date=req.payment_due_date,
        )
        return data


chick_requests = ChickRequestLifecycle()
feed_requests = FeedRequestLifecycle()
