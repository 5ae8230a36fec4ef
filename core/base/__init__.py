"""
Core Base Module

Shared base classes for all profile project apps.

Exports:
    - AuditMixin: Adds created_at, updated_at, created_by, updated_by
    - BaseQuerySet: QuerySet with filter_by_search_params

Usage:
    from core.base import AuditMixin
    from core.base.managers import BaseQuerySet

    class ProfileType(AuditMixin, models.Model):
        code = models.CharField(max_length=32)
        label = models.CharField(max_length=128)
        objects = BaseQuerySet.as_manager()
"""

from core.base.models import AuditMixin
from core.base.managers import BaseQuerySet

__all__ = [
    'AuditMixin',
    'BaseQuerySet',
]
