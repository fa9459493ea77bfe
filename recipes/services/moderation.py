"""Admin moderation: hiding comments, blocking users and the report queue."""

import logging
import math

from django.utils import timezone

from recipes.db_accessor import run_atomic
from recipes.errors import Conflict, Forbidden, InvalidContent, NotFound
from recipes.identity import Identity
from recipes.models import Report, UserBlock
from recipes.permissions import require_user
from recipes.repos.comment_repo import CommentRepo
from recipes.repos.recipe_repo import RecipeRepo
from recipes.repos.report_repo import ReportRepo
from recipes.repos.user_repo import UserRepo
from recipes.services.recipes import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

ACTION_HIDE = "hide"
ACTION_APPROVE = "approve"
ACTIONS = (ACTION_HIDE, ACTION_APPROVE)

REPORT_ACTION_BAN = "ban_user"
BAN_REASON = "Banned due to reported behavior"
REVIEW_STATUSES = (Report.STATUS_INVESTIGATING, Report.STATUS_RESOLVED, Report.STATUS_DISMISSED)


def _require_admin(actor: Identity) -> None:
    require_user(actor)
    if not actor.is_admin:
        raise Forbidden("Admin privileges required.")


class ModerationService:
    """Encapsulate admin-only moderation actions."""

    def __init__(self, comment_repo=None, user_repo=None, recipe_repo=None, report_repo=None):
        self.comments = comment_repo or CommentRepo()
        self.users = user_repo or UserRepo()
        self.recipes = recipe_repo or RecipeRepo()
        self.reports = report_repo or ReportRepo()

    def moderate_comment(self, comment_id, actor: Identity, action: str):
        """Hide a comment from readers, or approve (unhide) it again."""
        _require_admin(actor)
        if action not in ACTIONS:
            raise InvalidContent(f"Unknown moderation action '{action}'.")

        def _moderate():
            comment = self.comments.get_for_update(id=comment_id)
            if comment is None or comment.is_deleted:
                raise NotFound("Comment not found.")
            if action == ACTION_HIDE:
                comment.is_hidden = True
                comment.hidden_by_id = actor.user_id
                comment.hidden_at = timezone.now()
            else:
                comment.is_hidden = False
                comment.hidden_by_id = None
                comment.hidden_at = None
            comment.save(update_fields=["is_hidden", "hidden_by", "hidden_at"])
            return comment

        comment = run_atomic(_moderate, label="moderate_comment", retries=1)
        logger.info("Comment %s %s by admin %s", comment.id, "hidden" if comment.is_hidden else "approved", actor.user_id)
        return comment

    def block_user(self, actor: Identity, blocked_user_id, reason="") -> UserBlock:
        _require_admin(actor)
        if blocked_user_id == actor.user_id:
            raise InvalidContent("You cannot block yourself.")

        def _block():
            if self.users.get_by_id(blocked_user_id) is None:
                raise NotFound("User not found.")
            if UserBlock.objects.filter(blocker_id=actor.user_id, blocked_user_id=blocked_user_id).exists():
                raise Conflict("User is already blocked.")
            return UserBlock.objects.create(
                blocker_id=actor.user_id,
                blocked_user_id=blocked_user_id,
                reason=(reason or "").strip(),
            )

        block = run_atomic(_block, label="block_user", retries=0)
        logger.info("User %s blocked by admin %s", blocked_user_id, actor.user_id)
        return block

    def unblock_user(self, actor: Identity, blocked_user_id) -> None:
        _require_admin(actor)

        def _unblock():
            deleted, _ = UserBlock.objects.filter(
                blocker_id=actor.user_id, blocked_user_id=blocked_user_id
            ).delete()
            if not deleted:
                raise NotFound("Block not found.")

        run_atomic(_unblock, label="unblock_user", retries=0)
        logger.info("User %s unblocked by admin %s", blocked_user_id, actor.user_id)

    def list_blocks(self, actor: Identity):
        _require_admin(actor)
        return list(self.users.blocks_issued_by(actor.user_id))

    # reports

    def _report_target(self, reporter: Identity, content_type, content_id) -> dict:
        """Resolve the reported content to the user behind it."""
        if content_type == Report.CONTENT_RECIPE:
            recipe = self.recipes.get_visible(content_id, reporter)
            if recipe is None:
                raise NotFound("Content not found.")
            return {"recipe": recipe, "reported_user_id": recipe.owner_id}
        if content_type == Report.CONTENT_COMMENT:
            comment = self.comments.find(id=content_id)
            if (
                comment is None
                or not comment.is_visible
                or comment.author_id is None
                or self.recipes.get_visible(comment.recipe_id, reporter) is None
            ):
                raise NotFound("Content not found.")
            return {"comment": comment, "reported_user_id": comment.author_id}
        user = self.users.get_by_id(content_id)
        if user is None:
            raise NotFound("Content not found.")
        return {"reported_user_id": user.id}

    def report(self, reporter: Identity, content_type, content_id, reason, description="") -> Report:
        """File a report against a recipe, a comment or a user profile; once per reporter and content."""
        require_user(reporter)
        if content_type not in dict(Report.CONTENT_TYPES):
            raise InvalidContent(f"Unknown content type '{content_type}'.")
        if reason not in dict(Report.REPORT_REASONS):
            raise InvalidContent(f"Unknown report reason '{reason}'.")

        def _report():
            target = self._report_target(reporter, content_type, content_id)
            if target["reported_user_id"] == reporter.user_id:
                raise InvalidContent("You cannot report your own content.")
            if self.reports.already_reported(reporter.user_id, content_type, content_id):
                raise Conflict("You have already reported this content.")
            return self.reports.create(
                reporter_id=reporter.user_id,
                content_type=content_type,
                content_id=content_id,
                reason=reason,
                description=(description or "").strip(),
                **target,
            )

        # a concurrent duplicate trips the unique constraint; the retry then sees it
        report = run_atomic(_report, label="report", retries=1)
        logger.info("Report %s on %s %s filed by %s", report.id, content_type, content_id, reporter.user_id)
        return report

    def list_reports(self, actor: Identity, status=Report.STATUS_PENDING, page=1, limit=DEFAULT_PAGE_SIZE) -> dict:
        """One page of the review queue, newest first; status "all" lists every report."""
        _require_admin(actor)
        if status == "all":
            status = None
        elif status not in dict(Report.STATUS_CHOICES):
            raise InvalidContent(f"Unknown report status '{status}'.")
        try:
            page = max(1, int(page or 1))
            limit = min(MAX_PAGE_SIZE, max(1, int(limit or DEFAULT_PAGE_SIZE)))
        except (TypeError, ValueError):
            raise InvalidContent("page and limit must be whole numbers.")

        def _read():
            total = self.reports.in_status(status).count()
            results = list(self.reports.page(status, limit=limit, offset=(page - 1) * limit))
            return total, results

        total, results = run_atomic(_read, label="list_reports", retries=0)
        return {
            "results": results,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        }

    def review_report(self, actor: Identity, report_id, status=Report.STATUS_RESOLVED, action=None, action_taken="") -> Report:
        """Close (or start investigating) an open report; `ban_user` also blocks the reported user."""
        _require_admin(actor)
        if status not in REVIEW_STATUSES:
            raise InvalidContent(f"Unknown review status '{status}'.")
        if action not in (None, "", REPORT_ACTION_BAN):
            raise InvalidContent(f"Unknown report action '{action}'.")

        def _review():
            report = self.reports.get_for_update(id=report_id)
            if report is None or not report.is_open:
                raise NotFound("Report not found or already reviewed.")
            if action == REPORT_ACTION_BAN:
                try:
                    self.block_user(actor, report.reported_user_id, BAN_REASON)
                except Conflict:
                    logger.debug("User %s was already blocked by admin %s", report.reported_user_id, actor.user_id)
            report.status = status
            report.reviewed_by_id = actor.user_id
            report.reviewed_at = timezone.now()
            report.action_taken = (action_taken or "").strip()
            report.save(update_fields=["status", "reviewed_by", "reviewed_at", "action_taken", "updated_at"])
            return report

        report = run_atomic(_review, label="review_report", retries=0)
        logger.info("Report %s marked %s by admin %s", report.id, report.status, actor.user_id)
        return report
