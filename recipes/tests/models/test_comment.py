from django.db import IntegrityError
from django.db.models import RestrictedError
from django.test import TestCase

from recipes.models import Comment
from recipes.tests.helpers import make_comment, make_recipe, make_user


class CommentModelTestCase(TestCase):
    def setUp(self):
        self.user = make_user(username="@commenter")
        self.recipe = make_recipe()

    def test_comment_is_visible_by_default(self):
        comment = make_comment(recipe=self.recipe, author=self.user)
        self.assertTrue(comment.is_visible)
        self.assertIsNone(comment.parent)

    def test_tombstoned_or_hidden_comment_is_not_visible(self):
        deleted = make_comment(recipe=self.recipe, author=self.user, is_deleted=True)
        hidden = make_comment(recipe=self.recipe, author=self.user, is_hidden=True)
        self.assertFalse(deleted.is_visible)
        self.assertFalse(hidden.is_visible)

    def test_reply_links_back_to_parent(self):
        root = make_comment(recipe=self.recipe, author=self.user)
        reply = make_comment(recipe=self.recipe, author=self.user, parent=root)
        self.assertEqual(list(root.replies.all()), [reply])

    def test_default_ordering_is_oldest_first(self):
        first = make_comment(recipe=self.recipe, author=self.user, content="first")
        second = make_comment(recipe=self.recipe, author=self.user, content="second")
        self.assertEqual(list(Comment.objects.filter(recipe=self.recipe)), [first, second])

    def test_comment_cannot_be_its_own_parent(self):
        comment = make_comment(recipe=self.recipe, author=self.user)
        comment.parent_id = comment.id
        with self.assertRaises(IntegrityError):
            comment.save()

    def test_parent_with_replies_cannot_be_hard_deleted(self):
        root = make_comment(recipe=self.recipe, author=self.user)
        make_comment(recipe=self.recipe, author=self.user, parent=root)
        with self.assertRaises(RestrictedError):
            root.delete()

    def test_deleting_author_keeps_their_comments_in_the_thread(self):
        replier = make_user(username="@replier")
        root = make_comment(recipe=self.recipe, author=self.user)
        reply = make_comment(recipe=self.recipe, author=replier, parent=root)

        self.user.delete()

        root.refresh_from_db()
        self.assertIsNone(root.author_id)
        self.assertEqual(list(root.replies.all()), [reply])
