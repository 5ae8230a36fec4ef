from django.core.management.base import BaseCommand

from core.tempstore.services import purge_expired


class Command(BaseCommand):
    help = 'Delete expired temporary storage entries'

    def handle(self, *args, **options):
        deleted = purge_expired()
        if options.get('verbosity', 1) > 0:
            self.stdout.write(self.style.SUCCESS(f'Purged {deleted} expired entries'))
