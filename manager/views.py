# Standard library
from datetime import date
from decimal import Decimal, InvalidOperation

# Django core
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST
from django.contrib.auth.decorators import login_required, user_passes_test

# Local apps
from manager.models import ChickStock, FeedStock
from manager.services import chick_ledger, feed_ledger, chick_requests, feed_requests, dashboard_stats


HTTP_STATUS = {
    'ok': 200,
    'not_found': 404,
    'illegal_transition': 409,
    'insufficient_stock': 409,
    'invalid_request': 422,
    'permission_denied': 403,
    'persistence_unavailable': 503,
}


def is_brooder_manager(user):
    return getattr(user, 'is_brooder_manager', False)


manager_required = user_passes_test(is_brooder_manager)


def _transition(lifecycle, request, request_id):
    action = request.POST.get('action')
    reason = (request.POST.get('rejection_reason')
              or request.POST.get('decision_note')
              or '').strip()

    if action == 'approve':
        result = lifecycle.approve(request_id, request.user)
    elif action == 'reject':
        result = lifecycle.reject(request_id, request.user, reason)
    elif action == 'dispatch':
        result = lifecycle.dispatch(request_id, request.user)
    elif action == 'cancel':
        result = lifecycle.cancel(request_id, request.user, reason)
    else:
        return JsonResponse({'success': False, 'message': 'Invalid action.', 'code': 'invalid_action'}, status=400)

    return JsonResponse(result.as_dict(), status=HTTP_STATUS.get(result.code, 400))


#============================
# 1) DASHBOARD
#============================

@login_required
@manager_required
@require_GET
def dashboard_view(request):
    return JsonResponse(dashboard_stats())


#======================================
# 2) CHICK STOCK & CHICK REQUESTS
#======================================

@login_required
@manager_required
@require_POST
def chick_stock_view(request):
    chick_type = (request.POST.get('chick_type') or '').strip()
    category = request.POST.get('category')
    quantity = request.POST.get('quantity')
    age_days = request.POST.get('age_days')
    notes = request.POST.get('notes')

    # Basic Validations
    if not chick_type or not category or not quantity or age_days in (None, ''):
        return JsonResponse({'success': False, 'message': "Please fill in all required fields."}, status=400)
    if category not in dict(ChickStock.CATEGORY_CHOICES):
        return JsonResponse({'success': False, 'message': f"Unknown chick category {category}."}, status=400)
    try:
        quantity = int(quantity)
        age_days = int(age_days)
    except ValueError:
        return JsonResponse({'success': False, 'message': "Quantity and age must be whole numbers."}, status=400)
    if quantity <= 0 or age_days < 0:
        return JsonResponse({'success': False, 'message': "Quantity must be positive and age not negative."}, status=400)

    batch = chick_ledger.receive(
        chick_type, quantity,
        category=category,
        age_days=age_days,
        notes=notes,
        recorded_by=request.user,
    )
    return JsonResponse({
        'success': True,
        'message': f"{quantity} {chick_type} added to the stock successfully!",
        'stock_id': batch.pk,
        'available': chick_ledger.available(chick_type),
    }, status=201)


@login_required
@manager_required
@require_POST
def approve_reject_request(request, request_id):
    """Approve, reject, dispatch or cancel a chick request (``action`` in POST)."""
    return _transition(chick_requests, request, request_id)


#=================================================
# 3) FEEDS (STOCK & FEED REQUESTS)
#=================================================

@login_required
@manager_required
@require_POST
def add_feed_stock(request):
    feed_type = request.POST.get('feed_type')
    quantity_bags = request.POST.get('quantity_bags')
    unit_price = request.POST.get('unit_price')
    expiry_date = request.POST.get('expiry_date') or None
    notes = request.POST.get('notes', '')

    # Validation check
    if not all([feed_type, quantity_bags, unit_price]):
        return JsonResponse({'success': False, 'message': "Please fill in all required fields."}, status=400)
    if feed_type not in dict(FeedStock.FEED_TYPE_CHOICES):
        return JsonResponse({'success': False, 'message': f"Unknown feed type {feed_type}."}, status=400)
    try:
        quantity_bags = int(quantity_bags)
        unit_price = Decimal(unit_price)
        expiry_date = date.fromisoformat(expiry_date) if expiry_date else None
    except (ValueError, InvalidOperation):
        return JsonResponse({'success': False, 'message': "Invalid bag count, price or expiry date."}, status=400)
    if quantity_bags <= 0:
        return JsonResponse({'success': False, 'message': "Bag count must be positive."}, status=400)

    batch = feed_ledger.receive(
        feed_type, quantity_bags,
        unit_price=unit_price,
        expiry_date=expiry_date,
        notes=notes,
        recorded_by=request.user,
    )
    return JsonResponse({
        'success': True,
        'message': f"{quantity_bags} bags of {feed_type} feed added to stock successfully.",
        'stock_id': batch.pk,
        'available': feed_ledger.available(feed_type),
    }, status=201)


@login_required
@manager_required
@require_POST
def approve_reject_feed_request(request, request_id):
    return _transition(feed_requests, request, request_id)
