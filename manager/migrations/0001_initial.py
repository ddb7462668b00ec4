import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('sales', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ChickStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(choices=[('broiler', 'Broiler'), ('layer', 'Layer')], max_length=10)),
                ('chick_type', models.CharField(db_index=True, max_length=50)),
                ('quantity', models.PositiveIntegerField()),
                ('age_days', models.PositiveIntegerField(default=0, help_text='Age of chicks in days')),
                ('received_on', models.DateField(default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True, null=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['received_on', 'id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(quantity__gte=0), name='chickstock_quantity_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FeedStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('feed_type', models.CharField(choices=[('starter', 'Starter'), ('grower', 'Grower'), ('layer', 'Layer'), ('broiler', 'Broiler')], db_index=True, max_length=10)),
                ('quantity_bags', models.PositiveIntegerField()),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('received_on', models.DateField(default=django.utils.timezone.localdate)),
                ('expiry_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['received_on', 'id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(quantity_bags__gte=0), name='feedstock_quantity_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ChickAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField()),
                ('allocated_on', models.DateTimeField(auto_now_add=True)),
                ('released_on', models.DateTimeField(blank=True, null=True)),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='sales.chickrequest')),
                ('stock', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allocations', to='manager.chickstock')),
            ],
        ),
        migrations.CreateModel(
            name='FeedAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField()),
                ('allocated_on', models.DateTimeField(auto_now_add=True)),
                ('released_on', models.DateTimeField(blank=True, null=True)),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='sales.feedrequest')),
                ('stock', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allocations', to='manager.feedstock')),
            ],
        ),
    ]
