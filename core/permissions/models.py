"""
Roles and Permissions Models
Role-based access control keyed by permission codes such as
'administer profile types' or 'edit own personal profile'.
"""
from django.conf import settings
from django.db import models
from django.core.exceptions import ValidationError


class Permission(models.Model):
    """
    A named capability. Codes are human-readable strings and unique.

    Modules register their codes through services.ensure_permissions();
    profile types register one set of codes per type.
    """
    code = models.CharField(
        max_length=150,
        unique=True,
        db_index=True,
        help_text="Permission code (e.g., 'administer profile types')"
    )
    description = models.TextField(blank=True, default='')
    module = models.CharField(
        max_length=50,
        blank=True,
        default='',
        help_text="Module that owns this permission (e.g., 'profiles')"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'permissions'
        ordering = ['module', 'code']

    def __str__(self):
        return self.code


class Role(models.Model):
    """
    A set of permissions that can be given to users.
    """
    name = models.CharField(max_length=100, unique=True, db_index=True)
    description = models.TextField(blank=True, default='')
    permissions = models.ManyToManyField(
        Permission,
        through='RolePermission',
        related_name='roles',
        blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'roles'
        ordering = ['name']

    def __str__(self):
        return self.name

    def delete(self, *args, **kwargs):
        """Roles still assigned to users cannot be deleted."""
        if self.user_roles.exists():
            raise ValidationError(
                f"Cannot delete role '{self.name}' because it is assigned to "
                f"{self.user_roles.count()} user(s)"
            )
        return super().delete(*args, **kwargs)


class RolePermission(models.Model):
    """Junction table linking roles to permissions."""
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name='role_permissions'
    )
    permission = models.ForeignKey(
        Permission,
        on_delete=models.CASCADE,
        related_name='role_permissions'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'role_permissions'
        unique_together = ('role', 'permission')

    def __str__(self):
        return f"{self.role.name} - {self.permission.code}"


class UserRole(models.Model):
    """Junction table linking users to roles."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='user_roles'
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name='user_roles'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_roles'
        unique_together = ('user', 'role')
        indexes = [
            models.Index(fields=['user', 'role']),
        ]

    def __str__(self):
        return f"{self.user} - {self.role.name}"
