from django.db import models
from django.contrib.auth.models import AbstractUser

# Create your models here.
class User(AbstractUser):
    FARMER = 'farmer'
    SALES_REP = 'sales_rep'
    BROODER_MANAGER = 'brooder_manager'

    ROLE_CHOICES = (
        (FARMER, 'Farmer'),
        (SALES_REP, 'Sales Representative'),
        (BROODER_MANAGER, 'Brooder Manager'),
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=FARMER)
    phone_number = models.CharField(max_length=15, blank=True)
    dob = models.DateField(null=True, blank=True) # Date of Birth

    @property
    def is_brooder_manager(self):
        return self.role == self.BROODER_MANAGER

    @property
    def is_sales_rep(self):
        return self.role == self.SALES_REP
