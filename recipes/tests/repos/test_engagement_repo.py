from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from recipes.repos.engagement_repo import LikeRepo, ViewRepo
from recipes.tests.helpers import make_recipe, make_user


class LikeRepoTests(TestCase):
    def setUp(self):
        self.repo = LikeRepo()
        self.user = make_user()
        self.recipe = make_recipe()

    def test_add_has_remove(self):
        self.assertFalse(self.repo.has(self.recipe.id, self.user.id))
        self.repo.add(self.recipe.id, self.user.id)
        self.assertTrue(self.repo.has(self.recipe.id, self.user.id))
        self.assertEqual(self.repo.total_for(self.recipe.id), 1)
        self.assertEqual(self.repo.remove(self.recipe.id, self.user.id), 1)
        self.assertEqual(self.repo.total_for(self.recipe.id), 0)


class ViewRepoTests(TestCase):
    def setUp(self):
        self.repo = ViewRepo()
        self.user = make_user()
        self.recipe = make_recipe()
        self.now = timezone.now()

    def test_seen_since_keys_users_by_id(self):
        self.repo.log(self.recipe.id, user_id=self.user.id, ip="10.0.0.1", viewed_at=self.now, counted=True)
        since = self.now - timedelta(hours=1)
        self.assertTrue(self.repo.seen_since(self.recipe.id, user_id=self.user.id, ip=None, since=since))
        # same address, but anonymous views are tracked separately
        self.assertFalse(self.repo.seen_since(self.recipe.id, user_id=None, ip="10.0.0.1", since=since))

    def test_seen_since_ignores_views_before_window(self):
        old = self.now - timedelta(hours=2)
        self.repo.log(self.recipe.id, user_id=None, ip="10.0.0.2", viewed_at=old, counted=True)
        since = self.now - timedelta(hours=1)
        self.assertFalse(self.repo.seen_since(self.recipe.id, user_id=None, ip="10.0.0.2", since=since))

    def test_totals_for(self):
        self.repo.log(self.recipe.id, user_id=None, ip="10.0.0.3", viewed_at=self.now, counted=True)
        self.repo.log(self.recipe.id, user_id=None, ip="10.0.0.3", viewed_at=self.now, counted=False)
        self.assertEqual(self.repo.totals_for(self.recipe.id), (2, 1))
