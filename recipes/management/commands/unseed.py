from django.core.management.base import BaseCommand
from django.db import transaction

from recipes.models import Recipe, User


class Command(BaseCommand):
    """
    Management command to remove (unseed) sample data from the database.

    Deletes every recipe (engagement rows cascade with it) and all non-staff
    users, preserving administrative accounts.
    """

    help = "Removes seeded sample data"

    def handle(self, *args, **options):
        with transaction.atomic():
            recipes_deleted, _ = Recipe.objects.all().delete()
            users_deleted, _ = User.objects.filter(is_staff=False).delete()

        self.stdout.write(self.style.SUCCESS(
            f"Deleted {recipes_deleted} recipe rows and {users_deleted} non-staff user rows."
        ))
