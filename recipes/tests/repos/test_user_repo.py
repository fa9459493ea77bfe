from django.test import TestCase

from recipes.models import UserBlock
from recipes.repos.user_repo import UserRepo
from recipes.tests.helpers import make_admin, make_user


class UserRepoTests(TestCase):
    def setUp(self):
        self.repo = UserRepo()
        self.u1 = make_user(username="@alpha")
        self.u2 = make_user(username="@bravo")
        self.admin = make_admin()

    def test_get_by_id_fetches_user(self):
        user = self.repo.get_by_id(self.u1.id)
        self.assertEqual(user.username, self.u1.username)
        self.assertIsNone(self.repo.get_by_id(999999))

    def test_is_blocked(self):
        self.assertFalse(self.repo.is_blocked(self.u1.id))
        UserBlock.objects.create(blocker=self.admin, blocked_user=self.u1)
        self.assertTrue(self.repo.is_blocked(self.u1.id))
        self.assertFalse(self.repo.is_blocked(self.u2.id))

    def test_blocks_issued_by_newest_first(self):
        first = UserBlock.objects.create(blocker=self.admin, blocked_user=self.u1)
        second = UserBlock.objects.create(blocker=self.admin, blocked_user=self.u2)
        self.assertEqual(list(self.repo.blocks_issued_by(self.admin.id)), [second, first])
