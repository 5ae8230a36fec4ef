from django.core.management.base import BaseCommand

from core.permissions.services import sync_app_permissions


class Command(BaseCommand):
    help = 'Register the permission codes declared by installed apps'

    def handle(self, *args, **options):
        total = sync_app_permissions()
        if options.get('verbosity', 1) > 0:
            self.stdout.write(self.style.SUCCESS(f'Synced {total} permission codes'))
