# Standard library
from datetime import datetime

# Django
from django.shortcuts import get_object_or_404
from django.http import JsonResponse
from django.core.exceptions import ValidationError
from django.contrib.auth.decorators import login_required
from django.utils import timezone
from django.views.decorators.http import require_POST

# Local apps
from sales.models import Farmer
from sales.services import submit_chick_request, submit_feed_request, log_call


def _errors(exc):
    if hasattr(exc, 'message_dict'):
        return {field: ' '.join(msgs) for field, msgs in exc.message_dict.items()}
    return {'__all__': ' '.join(exc.messages)}


@login_required
@require_POST
def submit_request(request):
    """Sales reps submit chick and feed requests on behalf of a farmer."""
    form_type = request.POST.get('form_type')
    try:
        farmer_id = int(request.POST.get('farmer', ''))
    except ValueError:
        return JsonResponse({'success': False, 'message': "Please select a farmer."}, status=400)
    farmer = get_object_or_404(Farmer, id=farmer_id)

    try:
        if form_type == 'chick_request':
            req = submit_chick_request(
                farmer,
                chick_type=request.POST.get('chick_type'),
                quantity=request.POST.get('quantity'),
                unit_price=request.POST.get('unit_price') or None,
                requested_by=request.user,
                notes=request.POST.get('notes'),
            )
            message = f"Request for {req.quantity} {req.chick_type} chicks submitted successfully."
        elif form_type == 'feed_request':
            req = submit_feed_request(
                farmer,
                feed_types=request.POST.getlist('feed_types'),
                quantity_bags=request.POST.get('quantity_bags'),
                urgency=request.POST.get('urgency', 'normal'),
                requested_by=request.user,
                special_requirements=request.POST.get('special_requirements'),
            )
            message = (f"Feeds request {req.request_code} submitted: {req.quantity_bags} bag(s), "
                       f"total UGX {int(req.total_cost):,}.")
        else:
            return JsonResponse({'success': False, 'message': "Unknown form type."}, status=400)
    except ValidationError as exc:
        return JsonResponse({'success': False, 'message': ' '.join(exc.messages), 'errors': _errors(exc)},
                            status=400)

    return JsonResponse({'success': True, 'message': message, 'request_id': req.pk}, status=201)


@login_required
@require_POST
def log_call_view(request):
    call_date = request.POST.get('call_date')
    try:
        if call_date:
            call_date = datetime.fromisoformat(call_date)
            if timezone.is_naive(call_date):
                call_date = timezone.make_aware(call_date)
        entry = log_call(
            request.user,
            farmer_name=request.POST.get('farmer_name'),
            phone=request.POST.get('phone'),
            call_date=call_date or None,
            status=request.POST.get('status', 'attempted'),
            notes=request.POST.get('notes'),
        )
    except ValueError:
        return JsonResponse({'success': False, 'message': "Invalid call date."}, status=400)
    except ValidationError as exc:
        return JsonResponse({'success': False, 'message': ' '.join(exc.messages)}, status=400)

    return JsonResponse({'success': True, 'call_log': entry.pk}, status=201)
