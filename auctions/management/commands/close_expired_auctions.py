from django.core.management.base import BaseCommand
from auctions.services import close_expired_items


class Command(BaseCommand):
    help = 'Marks active auctions whose end time has passed as ended'

    def handle(self, *args, **options):
        count = close_expired_items()

        if count:
            self.stdout.write(
                self.style.SUCCESS(f'Closed {count} expired auctions')
            )
        else:
            self.stdout.write("No expired auctions found")
