from django.db import models
from django.contrib.auth.models import AbstractUser


def default_user_settings():
    return {
        'email_notifications': True,
        'sms_notifications': False,
        'language': 'en',
        'timezone': 'UTC',
        'two_factor_auth': False,
    }


class User(AbstractUser):
    ROLE_CHOICES = [
        ('customer', 'Customer'),
        ('manager', 'Manager'),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='customer')
    company_name = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    position = models.CharField(max_length=100, blank=True)
    settings = models.JSONField(default=default_user_settings, blank=True)

    class Meta:
        db_table = 'users'

    @property
    def is_manager(self):
        return self.role == 'manager'

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    def __str__(self):
        return f"{self.username} ({self.role})"
