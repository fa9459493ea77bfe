"""Management command to seed the database with sample users, recipes and engagement."""

from datetime import timedelta
from decimal import Decimal
from random import choice, randint, random, sample
from typing import List

from django.core.management.base import BaseCommand
from django.db import IntegrityError, transaction
from django.utils import timezone
from faker import Faker

from recipes.models import Comment, Favorite, Like, Recipe, RecipeView, User

user_fixtures = [
    {"username": "@johndoe", "email": "john.doe@example.org", "first_name": "John", "last_name": "Doe", "role": User.ROLE_ADMIN},
    {"username": "@janedoe", "email": "jane.doe@example.org", "first_name": "Jane", "last_name": "Doe"},
    {"username": "@charlie", "email": "charlie.johnson@example.org", "first_name": "Charlie", "last_name": "Johnson"},
]

comment_phrases = [
    "Made this last night, the whole family loved it.",
    "Could I swap the butter for olive oil?",
    "Great macros for a weeknight dinner.",
    "Added extra garlic, highly recommend.",
    "How long does this keep in the fridge?",
]


def create_username(first_name, last_name):
    """Build a simple lowercase username from a name."""
    return "@" + first_name.lower() + last_name.lower()


def create_email(first_name, last_name):
    """Build a deterministic email for seeded users."""
    return first_name + "." + last_name + "@example.org"


class Command(BaseCommand):
    """Management command to seed the database with sample users/recipes/engagement."""
    USER_COUNT = 50
    DEFAULT_PASSWORD = "Password123"
    help = "Seeds the database with sample data"

    def __init__(self, *args, **kwargs):
        """Set up faker instance for generating seed content."""
        super().__init__(*args, **kwargs)
        self.faker = Faker("en_GB")

    def add_arguments(self, parser):
        parser.add_argument("--users", type=int, default=self.USER_COUNT, help="Total users to reach.")
        parser.add_argument("--recipes-per-user", type=int, default=2)

    def handle(self, *args, **options):
        """Run the full seeding sequence."""
        self.create_users(options["users"])
        self.seed_recipes(per_user=options["recipes_per_user"])
        self.seed_toggles(Like, max_per_recipe=20)
        self.seed_toggles(Favorite, max_per_recipe=8)
        self.seed_views(max_per_recipe=30)
        self.seed_comments(max_comments_per_recipe=5)
        self.stdout.write(self.style.SUCCESS("Seeding complete"))

    def create_users(self, target):
        """Create fixture users, then random ones until `target` is reached."""
        for data in user_fixtures:
            self.try_create_user(data)
        attempts = 0
        while User.objects.count() < target and attempts < target * 3:
            attempts += 1
            first_name = self.faker.first_name()
            last_name = self.faker.last_name()
            self.try_create_user({
                "username": create_username(first_name, last_name),
                "email": create_email(first_name, last_name),
                "first_name": first_name,
                "last_name": last_name,
            })
        self.stdout.write(f"users: {User.objects.count()}")

    def try_create_user(self, data):
        """Create a user, skipping usernames that already exist."""
        try:
            with transaction.atomic():
                User.objects.create_user(
                    username=data["username"],
                    email=data["email"],
                    password=self.DEFAULT_PASSWORD,
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    display_name=f"{data['first_name']} {data['last_name']}",
                    role=data.get("role", User.ROLE_USER),
                )
        except IntegrityError:
            pass

    def _build_recipe(self, owner_id) -> Recipe:
        """Construct an unsaved Recipe with randomized fields, mostly published."""
        return Recipe(
            owner_id=owner_id,
            title=self.faker.sentence(nb_words=4).rstrip(".")[:255],
            servings=choice([1, 2, 4, 6]),
            calories=randint(250, 800),
            protein_g=Decimal(randint(50, 400)) / 10,
            carbs_g=Decimal(randint(100, 900)) / 10,
            fat_g=Decimal(randint(20, 400)) / 10,
            notes=self.faker.paragraph(nb_sentences=2),
            status=Recipe.STATUS_PUBLISHED if random() < 0.8 else choice(
                [Recipe.STATUS_DRAFT, Recipe.STATUS_PENDING_REVIEW]
            ),
        )

    def seed_recipes(self, *, per_user: int = 2) -> None:
        user_ids = list(User.objects.values_list("id", flat=True))
        rows: List[Recipe] = [self._build_recipe(uid) for uid in user_ids for _ in range(per_user)]
        with transaction.atomic():
            Recipe.objects.bulk_create(rows, batch_size=500)
        self.stdout.write(f"recipes created: {len(rows)}")

    def _published(self):
        return list(Recipe.objects.filter(status=Recipe.STATUS_PUBLISHED).values_list("id", flat=True))

    def seed_toggles(self, model, max_per_recipe: int) -> None:
        """Random likes or favorites on published recipes."""
        users = list(User.objects.values_list("id", flat=True))
        rows = []
        for recipe_id in self._published():
            for user_id in sample(users, min(len(users), randint(0, max_per_recipe))):
                rows.append(model(recipe_id=recipe_id, user_id=user_id))
        with transaction.atomic():
            model.objects.bulk_create(rows, ignore_conflicts=True, batch_size=1000)
        self.stdout.write(f"{model._meta.verbose_name_plural} created: {len(rows)}")

    def seed_views(self, max_per_recipe: int) -> None:
        """Anonymous views spread over the last week; each address counts once."""
        now = timezone.now()
        rows = []
        for recipe_id in self._published():
            for _ in range(randint(0, max_per_recipe)):
                rows.append(RecipeView(
                    recipe_id=recipe_id,
                    ip_address=self.faker.ipv4_public(),
                    viewed_at=now - timedelta(minutes=randint(0, 7 * 24 * 60)),
                    counted=True,
                ))
        with transaction.atomic():
            RecipeView.objects.bulk_create(rows, batch_size=1000)
        self.stdout.write(f"views created: {len(rows)}")

    def seed_comments(self, max_comments_per_recipe: int = 5) -> None:
        """Top-level comments plus one reply under some of them."""
        users = list(User.objects.values_list("id", flat=True))
        created = 0
        for recipe_id in self._published():
            for user_id in sample(users, min(len(users), randint(0, max_comments_per_recipe))):
                comment = Comment.objects.create(recipe_id=recipe_id, author_id=user_id, content=choice(comment_phrases))
                created += 1
                if random() < 0.3:
                    Comment.objects.create(
                        recipe_id=recipe_id,
                        author_id=choice(users),
                        parent=comment,
                        content=self.faker.sentence(nb_words=10),
                    )
                    created += 1
        self.stdout.write(f"comments created: {created}")
