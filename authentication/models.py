from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
import uuid


class CustomUserManager(BaseUserManager):
    """Accounts are keyed by email; back-office access comes from the admin role"""

    def get_by_natural_key(self, email):
        # sign-in matches the address regardless of how it was typed
        return self.get(email__iexact=email)

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('An email address is required')
        user = self.model(email=self.normalize_email(email).strip(), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_admin(self, email, password=None, **extra_fields):
        extra_fields['role'] = CustomUser.ROLE_ADMIN
        return self.create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if not (extra_fields['is_staff'] and extra_fields['is_superuser']):
            raise ValueError('A superuser needs is_staff and is_superuser set')
        return self.create_admin(email, password, **extra_fields)


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class AuditedModel(TimeStampedModel):
    """Timestamps plus the admin user behind the first and the latest write"""
    created_by = models.ForeignKey(
        'authentication.CustomUser', on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+', editable=False
    )
    updated_by = models.ForeignKey(
        'authentication.CustomUser', on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+', editable=False
    )

    class Meta:
        abstract = True


class CustomUser(AbstractUser):
    """Back-office account, identified by email"""
    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'
    ROLES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_USER, 'User'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLES, default=ROLE_USER)

    # Remove username requirement
    username = None
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    objects = CustomUserManager()

    class Meta:
        db_table = 'users'

    def __str__(self):
        return self.email

    @property
    def is_admin(self):
        return self.is_active and (self.role == self.ROLE_ADMIN or self.is_superuser)
