"""
Core Base Managers Module

Provides a QuerySet with the standard search filters used by list endpoints.

Usage:
    from core.base.managers import BaseQuerySet

    class ProfileType(models.Model):
        objects = BaseQuerySet.as_manager()

    ProfileType.objects.filter_by_search_params(request.query_params)
"""

from django.db import models
from django.db.models import Q


class BaseQuerySet(models.QuerySet):
    """
    Base QuerySet with common filtering methods.

    Subclasses can change which columns are searched by overriding
    ``code_field`` and ``label_field``.
    """
    code_field = 'code'
    label_field = 'label'

    def filter_by_search_params(self, query_params):
        """
        Apply standard code/label/search filters from query parameters.

        Args:
            query_params: QueryDict or dict with optional keys:
                - code: Exact match (case-insensitive)
                - label: Contains match (case-insensitive)
                - search: Contains match across code and label

        Returns:
            Filtered QuerySet
        """
        queryset = self

        code = query_params.get('code')
        if code:
            queryset = queryset.filter(**{f'{self.code_field}__iexact': code})

        label = query_params.get('label')
        if label:
            queryset = queryset.filter(**{f'{self.label_field}__icontains': label})

        search = query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(**{f'{self.code_field}__icontains': search}) |
                Q(**{f'{self.label_field}__icontains': search})
            )

        return queryset
