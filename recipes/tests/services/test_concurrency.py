import threading

from django.db import connection, connections
from django.test import TransactionTestCase

from recipes.errors import InvalidTransition, StorageUnavailable
from recipes.models import Like, Recipe
from recipes.services.engagement import EngagementService
from recipes.services.workflow import RecipeWorkflow
from recipes.tests.helpers import identity, make_recipe, make_user


def run_concurrently(calls, timeout=10):
    """Start every call on its own thread at the same moment; return (result, error) pairs in call order."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def worker(index, call):
        try:
            barrier.wait(timeout=timeout)
            outcomes[index] = (call(), None)
        except Exception as exc:
            outcomes[index] = (None, exc)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout * 2)
    return outcomes


class ConcurrentToggleTests(TransactionTestCase):
    """Parallel toggles never lose an update; on backends without row locks a
    conflict that survives the retry surfaces as StorageUnavailable."""

    def setUp(self):
        self.svc = EngagementService()
        self.recipe = make_recipe()
        self.users = [make_user(username=f"@fan{i}") for i in range(5)]

    def test_parallel_likes_by_different_users(self):
        outcomes = run_concurrently([
            lambda user=user: self.svc.toggle_like(self.recipe.id, identity(user))
            for user in self.users
        ])

        liked = [result for result, error in outcomes if error is None]
        errors = [error for _, error in outcomes if error is not None]
        for error in errors:
            self.assertIsInstance(error, StorageUnavailable)
        self.assertTrue(all(result["liked"] for result in liked))
        self.assertEqual(Like.objects.filter(recipe=self.recipe).count(), len(liked))
        if connection.features.has_select_for_update:
            self.assertEqual(len(liked), len(self.users))
            self.assertEqual(max(result["total_likes"] for result in liked), len(self.users))


class ConcurrentTransitionTests(TransactionTestCase):
    """Two submits racing on one draft: at most one wins and the recipe moves once."""

    def setUp(self):
        self.workflow = RecipeWorkflow()
        self.owner = make_user(username="@cook")
        self.recipe = make_recipe(owner=self.owner, status=Recipe.STATUS_DRAFT)

    def test_racing_submits(self):
        actor = identity(self.owner)
        outcomes = run_concurrently([
            lambda: self.workflow.submit(self.recipe.id, actor),
            lambda: self.workflow.submit(self.recipe.id, actor),
        ])

        results = [result for result, error in outcomes if error is None]
        errors = [error for _, error in outcomes if error is not None]
        self.assertLessEqual(len(results), 1)
        for error in errors:
            self.assertIsInstance(error, (InvalidTransition, StorageUnavailable))

        self.recipe.refresh_from_db()
        if results:
            self.assertEqual(results[0].from_status, Recipe.STATUS_DRAFT)
            self.assertEqual(self.recipe.status, Recipe.STATUS_PROCESSING)
        else:
            self.assertEqual(self.recipe.status, Recipe.STATUS_DRAFT)
        if connection.features.has_select_for_update:
            self.assertEqual(len(results), 1)
            self.assertIsInstance(errors[0], InvalidTransition)
