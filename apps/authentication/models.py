from django.contrib.auth.models import AbstractUser
from django.db import models

class User(AbstractUser):
    ROLE_CHOICES = [
        ('user', 'User'),
        ('manager', 'Manager'),
        ('admin', 'Admin'),
    ]
    ACCOUNT_TYPE_CHOICES = [
        ('person', 'Person'),
        ('shop', 'Shop'),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=50, choices=ROLE_CHOICES, default='user')
    account_type = models.CharField(max_length=20, choices=ACCOUNT_TYPE_CHOICES, default='person')
    shop_name = models.CharField(max_length=120, blank=True, default='')
    city = models.CharField(max_length=80, blank=True, default='')
    is_blocked = models.BooleanField(default=False)
    can_manage_boosts = models.BooleanField(default=False)

    # Shop boost projection, written by apps.boosts.reconciliation only
    shop_boosted = models.BooleanField(default=False, db_index=True)
    shop_boost_score = models.BigIntegerField(default=0)
    shop_boost_start_date = models.DateTimeField(null=True, blank=True)
    shop_boost_end_date = models.DateTimeField(null=True, blank=True)
    shop_boosted_at = models.DateTimeField(null=True, blank=True)

    # Fix reverse accessor conflicts
    groups = models.ManyToManyField(
        'auth.Group',
        related_name='custom_user_set',
        blank=True
    )
    user_permissions = models.ManyToManyField(
        'auth.Permission',
        related_name='custom_user_set',
        blank=True
    )
    
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    @property
    def display_name(self):
        return self.shop_name or self.get_full_name() or self.username

    @property
    def is_boost_admin(self):
        return self.role == 'admin' or self.is_superuser

    @property
    def is_boost_manager(self):
        return self.is_boost_admin or self.can_manage_boosts
