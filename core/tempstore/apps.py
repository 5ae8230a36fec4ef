from django.apps import AppConfig


class TempStoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core.tempstore'
    label = 'tempstore'
    verbose_name = 'Temporary Storage'
