from datetime import timedelta
from unittest.mock import patch

from django.db import OperationalError
from django.test import TestCase, override_settings
from django.utils import timezone

from recipes.errors import NotFound, StorageUnavailable, Unauthenticated
from recipes.identity import ANONYMOUS
from recipes.models import Like, Recipe, RecipeView
from recipes.services.engagement import EngagementService
from recipes.services.recipes import RecipeService
from recipes.tests.helpers import identity, make_admin, make_recipe, make_user


class ToggleTests(TestCase):
    def setUp(self):
        self.svc = EngagementService()
        self.user = make_user(username="@fan")
        self.other = make_user(username="@other")
        self.recipe = make_recipe()

    def test_like_toggle_alternates(self):
        first = self.svc.toggle_like(self.recipe.id, identity(self.user))
        second = self.svc.toggle_like(self.recipe.id, identity(self.user))
        third = self.svc.toggle_like(self.recipe.id, identity(self.user))

        self.assertEqual(first, {"liked": True, "total_likes": 1})
        self.assertEqual(second, {"liked": False, "total_likes": 0})
        self.assertEqual(third, {"liked": True, "total_likes": 1})

    def test_total_counts_every_user(self):
        self.svc.toggle_like(self.recipe.id, identity(self.user))
        result = self.svc.toggle_like(self.recipe.id, identity(self.other))
        self.assertEqual(result["total_likes"], 2)

    def test_favorite_independent_of_like(self):
        self.svc.toggle_like(self.recipe.id, identity(self.user))
        result = self.svc.toggle_favorite(self.recipe.id, identity(self.user))
        self.assertEqual(result, {"favorited": True, "total_favorites": 1})
        self.assertEqual(self.svc.toggle_favorite(self.recipe.id, identity(self.user))["favorited"], False)

    def test_anonymous_cannot_toggle(self):
        with self.assertRaises(Unauthenticated):
            self.svc.toggle_like(self.recipe.id, ANONYMOUS)
        with self.assertRaises(Unauthenticated):
            self.svc.toggle_favorite(self.recipe.id, ANONYMOUS)

    def test_missing_or_unpublished_recipe_not_found(self):
        draft = make_recipe(status=Recipe.STATUS_DRAFT)
        with self.assertRaises(NotFound):
            self.svc.toggle_like(999999, identity(self.user))
        with self.assertRaises(NotFound):
            self.svc.toggle_like(draft.id, identity(self.user))

    def test_persistent_storage_conflict_leaves_no_row(self):
        with patch.object(self.svc.likes, "add", side_effect=OperationalError("database is locked")) as add:
            with self.assertRaises(StorageUnavailable):
                self.svc.toggle_like(self.recipe.id, identity(self.user))
        self.assertEqual(add.call_count, 2)
        self.assertEqual(Like.objects.count(), 0)


class RecordViewTests(TestCase):
    def setUp(self):
        self.svc = EngagementService()
        self.user = make_user(username="@viewer")
        self.recipe = make_recipe()

    def test_ten_views_in_window_count_once(self):
        results = [self.svc.record_view(self.recipe.id, identity(self.user), "10.0.0.1") for _ in range(10)]

        self.assertEqual([r["counted_toward_popularity"] for r in results], [True] + [False] * 9)
        self.assertEqual(RecipeView.objects.filter(recipe=self.recipe).count(), 10)
        self.assertEqual(RecipeView.objects.filter(recipe=self.recipe, counted=True).count(), 1)

    def test_anonymous_views_keyed_by_ip(self):
        self.assertTrue(self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.1")["counted_toward_popularity"])
        self.assertFalse(self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.1")["counted_toward_popularity"])
        self.assertTrue(self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.2")["counted_toward_popularity"])

    def test_anonymous_view_without_ip_is_logged_not_counted(self):
        result = self.svc.record_view(self.recipe.id, ANONYMOUS, "not-an-ip")
        self.assertFalse(result["counted_toward_popularity"])
        view = RecipeView.objects.get()
        self.assertIsNone(view.ip_address)

    @override_settings(RECIPES_VIEW_COOLDOWN_SECONDS=60)
    def test_view_counts_again_after_cooldown(self):
        RecipeView.objects.create(
            recipe=self.recipe,
            user=self.user,
            viewed_at=timezone.now() - timedelta(seconds=120),
            counted=True,
        )
        result = self.svc.record_view(self.recipe.id, identity(self.user), None)
        self.assertTrue(result["counted_toward_popularity"])

    def test_view_of_unpublished_recipe_not_found(self):
        draft = make_recipe(status=Recipe.STATUS_DRAFT)
        with self.assertRaises(NotFound):
            self.svc.record_view(draft.id, ANONYMOUS, "10.0.0.1")
        self.assertEqual(RecipeView.objects.count(), 0)


class StatsAndPopularityTests(TestCase):
    def setUp(self):
        self.svc = EngagementService()
        self.users = [make_user(username=f"@u{i}") for i in range(3)]
        self.recipe = make_recipe(title="Famous")
        self.other = make_recipe(title="Obscure")

    def test_recipe_stats_reflects_committed_rows(self):
        for user in self.users:
            self.svc.toggle_like(self.recipe.id, identity(user))
        self.svc.toggle_favorite(self.recipe.id, identity(self.users[0]))
        self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.1")
        self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.1")

        stats = self.svc.recipe_stats(self.recipe.id, ANONYMOUS)

        self.assertEqual(stats, {"likes": 3, "favorites": 1, "views": 2, "counted_views": 1})

    def test_stats_follow_visibility(self):
        draft = make_recipe(owner=self.users[0], status=Recipe.STATUS_DRAFT)
        with self.assertRaises(NotFound):
            self.svc.recipe_stats(draft.id, ANONYMOUS)
        self.assertEqual(self.svc.recipe_stats(draft.id, identity(make_admin()))["likes"], 0)

    def test_engagement_feeds_popular_listing(self):
        self.svc.toggle_like(self.recipe.id, identity(self.users[0]))
        self.svc.record_view(self.recipe.id, ANONYMOUS, "10.0.0.9")
        make_recipe(title="Hidden draft", status=Recipe.STATUS_DRAFT)

        ranked = RecipeService().list_visible(ANONYMOUS, sort="popular", limit=5)

        self.assertEqual([r.title for r in ranked], ["Famous", "Obscure"])
        self.assertEqual(ranked[0].popularity, 2)
