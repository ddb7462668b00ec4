from django.contrib import admin
from manager.models import ChickStock, FeedStock, ChickAllocation, FeedAllocation


@admin.register(ChickStock)
class ChickStockAdmin(admin.ModelAdmin):
    list_display = ('id', 'chick_type', 'category', 'quantity', 'age_days', 'received_on')
    list_filter = ('category', 'chick_type')
    ordering = ('-received_on',)

    # quantity moves only through the stock ledger once recorded
    def get_readonly_fields(self, request, obj=None):
        return ('quantity',) if obj else ()


@admin.register(FeedStock)
class FeedStockAdmin(admin.ModelAdmin):
    list_display = ('id', 'feed_type', 'quantity_bags', 'unit_price', 'received_on', 'expiry_date')
    list_filter = ('feed_type',)
    ordering = ('-received_on',)

    def get_readonly_fields(self, request, obj=None):
        return ('quantity_bags',) if obj else ()


@admin.register(ChickAllocation)
class ChickAllocationAdmin(admin.ModelAdmin):
    list_display = ('request', 'stock', 'quantity', 'allocated_on', 'released_on')
    list_filter = ('released_on',)


@admin.register(FeedAllocation)
class FeedAllocationAdmin(admin.ModelAdmin):
    list_display = ('request', 'stock', 'quantity', 'allocated_on', 'released_on')
    list_filter = ('released_on',)
