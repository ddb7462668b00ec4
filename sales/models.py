from django.db import models
from datetime import date
from decimal import Decimal
from django.conf import settings


# Request statuses shared by chick and feed requests
PENDING = 'pending'
APPROVED = 'approved'
DISPATCHED = 'dispatched'
REJECTED = 'rejected'
CANCELED = 'canceled'

STATUS_CHOICES = (
    (PENDING, 'Pending'),
    (APPROVED, 'Approved'),
    (DISPATCHED, 'Dispatched'),
    (REJECTED, 'Rejected'),
    (CANCELED, 'Canceled'),
)
TERMINAL_STATUSES = (DISPATCHED, REJECTED, CANCELED)

# Statuses that hold a stock reservation or have consumed one
SOLD_STATUSES = (APPROVED, DISPATCHED)


# Farmer Model
class Farmer(models.Model):
    GENDER_CHOICES = (
        ('M', 'Male'),
        ('F', 'Female'),
    )
    FARMER_TYPE_CHOICES = (
        ('starter', 'Starter'),
        ('returning', 'Returning'),
    )

    name = models.CharField(max_length=100)
    dob = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=1, choices=GENDER_CHOICES, blank=True)
    nin = models.CharField(max_length=20, unique=True)
    recommender = models.CharField(max_length=100, blank=True)
    recommender_nin = models.CharField(max_length=20, blank=True)
    contact = models.CharField(max_length=15)
    farmer_type = models.CharField(max_length=10, choices=FARMER_TYPE_CHOICES, default='starter')
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='farmer_profile',
    )

    @property
    def age(self):
        if self.dob is None:
            return None
        today = date.today()
        return (
            today.year - self.dob.year - ((today.month, today.day) < (self.dob.month, self.dob.day))
        )

    def __str__(self):
        return self.name


class OrderRequest(models.Model):
    """
    Lifecycle fields shared by chick and feed requests.

    Only the manager lifecycle in ``manager.services.lifecycle`` writes
    ``status`` and the audit stamps below.
    """
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING, db_index=True)
    submitted_on = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_submitted',
    )

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_approved',
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    rejection_reason = models.TextField(null=True, blank=True)
    rejected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_rejected',
    )
    rejected_at = models.DateTimeField(null=True, blank=True)

    dispatched_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_dispatched',
    )
    dispatched_at = models.DateTimeField(null=True, blank=True)

    cancellation_reason = models.TextField(null=True, blank=True)
    canceled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_canceled',
    )
    canceled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES


# Chick request model
class ChickRequest(OrderRequest):
    farmer = models.ForeignKey(Farmer, on_delete=models.CASCADE, related_name='chick_requests')
    chick_type = models.CharField(max_length=50)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('1650'))
    total_cost = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-submitted_on', '-id']
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name='chickrequest_quantity_positive'),
        ]

    def __str__(self):
        return f"Request #{self.id} - {self.farmer.name}"


class FeedRequest(OrderRequest):
    URGENCY_CHOICES = (
        ('normal', 'Normal'),
        ('urgent', 'Urgent'),
        ('emergency', 'Emergency'),
    )
    PAYMENT_STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('partial', 'Partial'),
        ('paid', 'Paid'),
        ('overdue', 'Overdue'),
    )

    farmer = models.ForeignKey(Farmer, on_delete=models.CASCADE, related_name='feed_requests')
    request_code = models.CharField(max_length=20, unique=True)
    quantity_bags = models.PositiveIntegerField()
    total_cost = models.DecimalField(max_digits=12, decimal_places=2)
    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='normal')
    priority = models.PositiveSmallIntegerField(default=1)
    special_requirements = models.TextField(blank=True, default='')

    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='pending')
    payment_due_date = models.DateField()

    class Meta:
        ordering = ['-submitted_on', '-id']
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity_bags__gte=1), name='feedrequest_quantity_positive'),
        ]

    @property
    def feed_types(self):
        return [line.feed_type for line in self.lines.all()]

    def __str__(self):
        return f"{self.request_code} - {self.farmer.name} ({self.quantity_bags} bags)"


class FeedRequestLine(models.Model):
    FEED_TYPE_CHOICES = (
        ('starter', 'Starter'),
        ('grower', 'Grower'),
        ('layer', 'Layer'),
        ('broiler', 'Broiler'),
    )

    request = models.ForeignKey(FeedRequest, on_delete=models.CASCADE, related_name='lines')
    feed_type = models.CharField(max_length=10, choices=FEED_TYPE_CHOICES)
    quantity_bags = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ['id']
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity_bags__gte=1), name='feedrequestline_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.quantity_bags} x {self.get_feed_type_display()}"


class CallLog(models.Model):
    STATUS_CHOICES = (
        ('attempted', 'Attempted'),
        ('success', 'Success'),
        ('no_answer', 'No Answer'),
    )

    sales_rep = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='call_logs')
    farmer_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=15)
    call_date = models.DateTimeField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='attempted')
    notes = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-call_date']

    def __str__(self):
        return f"{self.farmer_name} - {self.get_status_display()} ({self.call_date:%Y-%m-%d})"
