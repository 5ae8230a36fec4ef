from django.apps import AppConfig
from django.db.models.signals import post_migrate


def _sync_permissions(sender, **kwargs):
    from core.permissions.services import sync_app_permissions
    sync_app_permissions()


class PermissionsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core.permissions'
    label = 'permissions'
    verbose_name = 'Roles and Permissions'

    def ready(self):
        post_migrate.connect(_sync_permissions, sender=self, dispatch_uid='core.permissions.sync')
