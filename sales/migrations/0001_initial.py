import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [
    ('pending', 'Pending'),
    ('approved', 'Approved'),
    ('dispatched', 'Dispatched'),
    ('rejected', 'Rejected'),
    ('canceled', 'Canceled'),
]


def lifecycle_fields(model_name):
    def user_fk(suffix):
        return models.ForeignKey(
            blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
            related_name=f'{model_name}_{suffix}', to=settings.AUTH_USER_MODEL,
        )

    return [
        ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='pending', max_length=10)),
        ('submitted_on', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('approved_at', models.DateTimeField(blank=True, null=True)),
        ('rejection_reason', models.TextField(blank=True, null=True)),
        ('rejected_at', models.DateTimeField(blank=True, null=True)),
        ('dispatched_at', models.DateTimeField(blank=True, null=True)),
        ('cancellation_reason', models.TextField(blank=True, null=True)),
        ('canceled_at', models.DateTimeField(blank=True, null=True)),
        ('requested_by', user_fk('submitted')),
        ('approved_by', user_fk('approved')),
        ('rejected_by', user_fk('rejected')),
        ('dispatched_by', user_fk('dispatched')),
        ('canceled_by', user_fk('canceled')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Farmer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('dob', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(blank=True, choices=[('M', 'Male'), ('F', 'Female')], max_length=1)),
                ('nin', models.CharField(max_length=20, unique=True)),
                ('recommender', models.CharField(blank=True, max_length=100)),
                ('recommender_nin', models.CharField(blank=True, max_length=20)),
                ('contact', models.CharField(max_length=15)),
                ('farmer_type', models.CharField(choices=[('starter', 'Starter'), ('returning', 'Returning')], default='starter', max_length=10)),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='farmer_profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='ChickRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *lifecycle_fields('chickrequest'),
                ('chick_type', models.CharField(max_length=50)),
                ('quantity', models.PositiveIntegerField()),
                ('unit_price', models.DecimalField(decimal_places=2, default=Decimal('1650'), max_digits=10)),
                ('total_cost', models.DecimalField(decimal_places=2, max_digits=12)),
                ('notes', models.TextField(blank=True, null=True)),
                ('farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='chick_requests', to='sales.farmer')),
            ],
            options={
                'ordering': ['-submitted_on', '-id'],
            },
        ),
        migrations.CreateModel(
            name='FeedRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *lifecycle_fields('feedrequest'),
                ('request_code', models.CharField(max_length=20, unique=True)),
                ('quantity_bags', models.PositiveIntegerField()),
                ('total_cost', models.DecimalField(decimal_places=2, max_digits=12)),
                ('urgency', models.CharField(choices=[('normal', 'Normal'), ('urgent', 'Urgent'), ('emergency', 'Emergency')], default='normal', max_length=10)),
                ('priority', models.PositiveSmallIntegerField(default=1)),
                ('special_requirements', models.TextField(blank=True, default='')),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('partial', 'Partial'), ('paid', 'Paid'), ('overdue', 'Overdue')], default='pending', max_length=10)),
                ('payment_due_date', models.DateField()),
                ('farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feed_requests', to='sales.farmer')),
            ],
            options={
                'ordering': ['-submitted_on', '-id'],
            },
        ),
        migrations.CreateModel(
            name='FeedRequestLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('feed_type', models.CharField(choices=[('starter', 'Starter'), ('grower', 'Grower'), ('layer', 'Layer'), ('broiler', 'Broiler')], max_length=10)),
                ('quantity_bags', models.PositiveIntegerField()),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='sales.feedrequest')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='CallLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('farmer_name', models.CharField(max_length=100)),
                ('phone', models.CharField(max_length=15)),
                ('call_date', models.DateTimeField()),
                ('status', models.CharField(choices=[('attempted', 'Attempted'), ('success', 'Success'), ('no_answer', 'No Answer')], default='attempted', max_length=10)),
                ('notes', models.TextField(blank=True, default='')),
                ('sales_rep', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='call_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-call_date'],
            },
        ),
    ]
