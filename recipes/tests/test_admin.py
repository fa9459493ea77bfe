from django.contrib.admin.sites import AdminSite
from django.test import RequestFactory, TestCase

from recipes.admin import ReportAdmin, ReportInline
from recipes.models import Comment, Report
from recipes.services.moderation import ModerationService
from recipes.tests.helpers import identity, make_admin, make_comment, make_recipe, make_user


class ReportAdminTestCase(TestCase):
    def setUp(self):
        self.site = AdminSite()
        self.admin = make_admin(is_staff=True, is_superuser=True)
        self.request = RequestFactory().get("/admin/")
        self.request.user = self.admin
        author = make_user(username="@author")
        comment = make_comment(recipe=make_recipe(), author=author)
        svc = ModerationService()
        self.open = svc.report(identity(make_user(username="@a")), "comment", comment.id, "spam")
        closed = svc.report(identity(make_user(username="@b")), "comment", comment.id, "spam")
        self.closed = svc.review_report(identity(self.admin), closed.id, status=Report.STATUS_DISMISSED)

    def test_inline_lists_only_open_reports(self):
        inline = ReportInline(Comment, self.site)
        self.assertEqual(list(inline.get_queryset(self.request)), [self.open])

    def test_pending_status_highlighted(self):
        model_admin = ReportAdmin(Report, self.site)
        self.assertIn("color:red", model_admin.status_display(self.open))
        self.assertEqual(model_admin.status_display(self.closed), "Dismissed")
