"""
User Account Models
Handles user authentication; page access is handled by core.permissions.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models
from django.core.exceptions import PermissionDenied


class UserType(models.Model):
    """
    User type: 'user', 'admin' or 'super_admin'.

    Admins and super admins pass every permission check; plain users rely on roles.
    """
    type_name = models.CharField(max_length=50, unique=True, db_index=True)
    description = models.TextField(blank=True, default='')

    class Meta:
        db_table = 'user_types'
        verbose_name = 'User Type'
        verbose_name_plural = 'User Types'

    def __str__(self):
        return self.type_name


class CustomUserManager(BaseUserManager):
    """Creates users of any user type."""

    USER_TYPE_DESCRIPTIONS = {
        'user': 'Regular user with basic permissions',
        'admin': 'Administrator with elevated permissions',
        'super_admin': 'Super administrator with full system access'
    }

    def create_user(self, email, name, password=None, phone_number='', user_type_name='user', **extra_fields):
        """
        Create and save a user.

        Args:
            email: User's email address (used for authentication)
            name: User's display name, also used in profile labels
            password: User's password (will be hashed)
            phone_number: Optional phone number
            user_type_name: 'user', 'admin' or 'super_admin'

        Returns:
            CustomUser: The created user instance
        """
        if not email:
            raise ValueError('Email is required')
        if not name:
            raise ValueError('Name is required')

        email = self.normalize_email(email)

        user_type, _ = UserType.objects.get_or_create(
            type_name=user_type_name,
            defaults={'description': self.USER_TYPE_DESCRIPTIONS.get(user_type_name, '')}
        )

        user = self.model(
            email=email,
            name=name,
            phone_number=phone_number or '',
            user_type=user_type,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, name, password=None, **extra_fields):
        """Required by Django for the createsuperuser management command."""
        return self.create_user(
            email=email,
            name=name,
            password=password,
            user_type_name='super_admin',
            **extra_fields
        )


class CustomUser(AbstractBaseUser):
    """Custom user model with email authentication"""
    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=15, blank=True, default='')
    is_active = models.BooleanField(default=True)

    user_type = models.ForeignKey(
        UserType,
        on_delete=models.PROTECT,
        related_name='users'
    )

    date_joined = models.DateTimeField(auto_now_add=True)

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'custom_users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.email})"

    def get_display_name(self):
        return self.name or self.email

    def is_super_admin(self):
        return self.user_type.type_name == 'super_admin'

    def is_admin(self):
        """True for admins and super admins."""
        return self.user_type.type_name in ['admin', 'super_admin']

    def delete(self, *args, **kwargs):
        """Super admins cannot be deleted."""
        if self.is_super_admin():
            raise PermissionDenied(
                "Cannot delete super admin user. Super admin is protected from deletion."
            )
        return super().delete(*args, **kwargs)
