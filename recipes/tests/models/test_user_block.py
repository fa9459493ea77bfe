from django.db import IntegrityError
from django.db.models import CheckConstraint
from django.test import TestCase

from recipes.models import Comment, Recipe, UserBlock
from recipes.tests.helpers import make_admin, make_user


class UserBlockModelTestCase(TestCase):
    def setUp(self):
        self.admin = make_admin()

    def test_admin_cannot_block_themselves(self):
        with self.assertRaises(IntegrityError):
            UserBlock.objects.create(blocker=self.admin, blocked_user=self.admin)

    def test_pair_is_unique(self):
        user = make_user(username="@troll")
        UserBlock.objects.create(blocker=self.admin, blocked_user=user)
        with self.assertRaises(IntegrityError):
            UserBlock.objects.create(blocker=self.admin, blocked_user=user)


class CheckConstraintDeclarationTestCase(TestCase):
    def test_check_constraints_use_condition(self):
        checks = [
            constraint
            for model in (Recipe, Comment, UserBlock)
            for constraint in model._meta.constraints
            if isinstance(constraint, CheckConstraint)
        ]
        self.assertEqual(len(checks), 3)
        for constraint in checks:
            self.assertIsNotNone(constraint.condition)
