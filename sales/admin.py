from django.contrib import admin, messages
from manager.services import chick_requests, feed_requests
from sales.models import Farmer, ChickRequest, FeedRequest, FeedRequestLine, CallLog

# Register your models here.
@admin.register(Farmer)
class FarmerAdmin(admin.ModelAdmin):
    list_display = ('name', 'nin', 'contact', 'gender', 'dob', 'farmer_type')
    search_fields = ('name', 'nin', 'recommender', 'contact')
    list_filter = ('gender', 'farmer_type')


# Status and stamps are written only by the manager lifecycle
LIFECYCLE_FIELDS = (
    'status', 'total_cost',
    'approved_by', 'approved_at', 'rejection_reason', 'rejected_by', 'rejected_at',
    'dispatched_by', 'dispatched_at', 'canceled_by', 'canceled_at', 'cancellation_reason',
)


def lifecycle_actions(lifecycle):
    """Admin actions that push the selected requests through ``lifecycle``."""
    def make(action):
        def run(modeladmin, request, queryset):
            for req in queryset:
                result = getattr(lifecycle, action)(req.pk, request.user)
                modeladmin.message_user(request, result.message, messages.SUCCESS if result.success else messages.ERROR)
        run.__name__ = f"{action}_selected"
        return admin.action(description=f"{action.capitalize()} selected requests")(run)
    return [make(action) for action in ('approve', 'reject', 'dispatch', 'cancel')]


@admin.register(ChickRequest)
class ChickRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'farmer', 'chick_type', 'quantity', 'total_cost', 'status', 'submitted_on')
    list_filter = ('status', 'chick_type')
    search_fields = ('farmer__name', 'farmer__nin')
    readonly_fields = LIFECYCLE_FIELDS
    actions = lifecycle_actions(chick_requests)


class FeedRequestLineInline(admin.TabularInline):
    model = FeedRequestLine
    extra = 0
    readonly_fields = ('feed_type', 'quantity_bags', 'unit_price', 'total_price')
    can_delete = False


@admin.register(FeedRequest)
class FeedRequestAdmin(admin.ModelAdmin):
    list_display = ('request_code', 'farmer', 'quantity_bags', 'total_cost', 'urgency', 'status', 'payment_status')
    list_filter = ('status', 'urgency', 'payment_status')
    search_fields = ('request_code', 'farmer__name', 'farmer__nin')
    readonly_fields = LIFECYCLE_FIELDS + ('request_code',)
    inlines = [FeedRequestLineInline]
    actions = lifecycle_actions(feed_requests)


@admin.register(CallLog)
class CallLogAdmin(admin.ModelAdmin):
    list_display = ('farmer_name', 'phone', 'sales_rep', 'call_date', 'status')
    list_filter = ('status',)
    search_fields = ('farmer_name', 'phone')
