from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('sales', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='chickrequest',
            constraint=models.CheckConstraint(condition=models.Q(quantity__gte=1), name='chickrequest_quantity_positive'),
        ),
        migrations.AddConstraint(
            model_name='feedrequest',
            constraint=models.CheckConstraint(condition=models.Q(quantity_bags__gte=1), name='feedrequest_quantity_positive'),
        ),
        migrations.AddConstraint(
            model_name='feedrequestline',
            constraint=models.CheckConstraint(condition=models.Q(quantity_bags__gte=1), name='feedrequestline_quantity_positive'),
        ),
    ]
