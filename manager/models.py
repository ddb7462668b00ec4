from django.db import models
from django.conf import settings
from django.utils import timezone


class ChickStock(models.Model):
    CATEGORY_CHOICES = (
        ('broiler', 'Broiler'),
        ('layer', 'Layer'),
    )

    category = models.CharField(max_length=10, choices=CATEGORY_CHOICES)
    chick_type = models.CharField(max_length=50, db_index=True)
    quantity = models.PositiveIntegerField()
    age_days = models.PositiveIntegerField(default=0, help_text="Age of chicks in days")
    received_on = models.DateField(default=timezone.localdate)
    notes = models.TextField(blank=True, null=True)
    recorded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)

    class Meta:
        ordering = ['received_on', 'id']
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=0), name='chickstock_quantity_non_negative'),
        ]

    def __str__(self):
        return f"{self.chick_type} ({self.get_category_display()}) - {self.quantity} chicks"


class FeedStock(models.Model):
    FEED_TYPE_CHOICES = (
        ('starter', 'Starter'),
        ('grower', 'Grower'),
        ('layer', 'Layer'),
        ('broiler', 'Broiler'),
    )

    feed_type = models.CharField(max_length=10, choices=FEED_TYPE_CHOICES, db_index=True)
    quantity_bags = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    received_on = models.DateField(default=timezone.localdate)
    expiry_date = models.DateField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    recorded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)

    class Meta:
        ordering = ['received_on', 'id']
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity_bags__gte=0), name='feedstock_quantity_non_negative'),
        ]

    def __str__(self):
        return f"{self.get_feed_type_display()} - {self.quantity_bags} bags"


class ChickAllocation(models.Model):
    request = models.ForeignKey('sales.ChickRequest', on_delete=models.CASCADE, related_name='allocations')
    stock   = models.ForeignKey('ChickStock', on_delete=models.PROTECT, related_name='allocations')
    quantity = models.PositiveIntegerField()

    allocated_on = models.DateTimeField(auto_now_add=True)
    released_on = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"REQ{self.request_id} ← {self.quantity} from stock #{self.stock_id}"


class FeedAllocation(models.Model):
    request = models.ForeignKey('sales.FeedRequest', on_delete=models.CASCADE, related_name='allocations')
    stock   = models.ForeignKey('FeedStock', on_delete=models.PROTECT, related_name='allocations')
    quantity = models.PositiveIntegerField()

    allocated_on = models.DateTimeField(auto_now_add=True)
    released_on = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.request_id} ← {self.quantity} bags from stock #{self.stock_id}"
