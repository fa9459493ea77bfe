from django.core.management.base import BaseCommand

from recipes.services.workflow import RecipeWorkflow


class Command(BaseCommand):
    """
    Run automated content checks over every recipe waiting in `processing`.

    Each recipe moves to `pending_review` when its content passes, or back to
    `draft` with the list of problems as the reason. Intended to be scheduled
    (cron or similar) as the background checker.
    """

    help = "Runs automated checks over recipes in processing"

    def handle(self, *args, **options):
        results = RecipeWorkflow().process_pending()
        for result in results:
            line = f"Recipe {result.recipe_id}: {result.from_status} -> {result.status}"
            if result.reason:
                line += f" ({result.reason})"
            self.stdout.write(line)
        self.stdout.write(self.style.SUCCESS(f"Processed {len(results)} recipes"))
