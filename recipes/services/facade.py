"""Single entry point the API views call into.

The facade owns one instance of each service so a request never wires
repositories itself; every method takes the caller's Identity explicitly.
"""

from recipes.errors import InvalidTransition
from recipes.services.comments import CommentService
from recipes.services.engagement import EngagementService
from recipes.services.moderation import ModerationService
from recipes.services.recipes import RecipeService
from recipes.services.workflow import EVENTS, RecipeWorkflow


class EngagementFacade:
    def __init__(self, comments=None, engagement=None, workflow=None, recipes=None, moderation=None):
        self.comments = comments or CommentService()
        self.engagement = engagement or EngagementService()
        self.workflow = workflow or RecipeWorkflow()
        self.recipes = recipes or RecipeService()
        self.moderation = moderation or ModerationService()

    # comments
    def post_comment(self, recipe_id, actor, content, parent_id=None):
        comment = self.comments.post_comment(recipe_id, actor, content, parent_id=parent_id)
        return self.comments.comments.get_with_author(comment.id)

    def list_thread(self, recipe_id, viewer):
        return self.comments.list_thread(recipe_id, viewer)

    def edit_comment(self, comment_id, actor, content):
        comment = self.comments.edit_comment(comment_id, actor, content)
        return self.comments.comments.get_with_author(comment.id)

    def delete_comment(self, comment_id, actor):
        self.comments.delete_comment(comment_id, actor)

    # engagement
    def toggle_like(self, recipe_id, actor):
        return self.engagement.toggle_like(recipe_id, actor)

    def toggle_favorite(self, recipe_id, actor):
        return self.engagement.toggle_favorite(recipe_id, actor)

    def record_view(self, recipe_id, viewer, ip=None):
        return self.engagement.record_view(recipe_id, viewer, ip)

    def recipe_stats(self, recipe_id, viewer):
        return self.engagement.recipe_stats(recipe_id, viewer)

    # workflow
    def transition(self, recipe_id, event, actor, reason=None):
        if event not in EVENTS:
            raise InvalidTransition(f"Unknown workflow event '{event}'.")
        return self.workflow.fire(recipe_id, event, actor, reason=reason)

    def report_checks(self, recipe_id, passed, actor, reason=None):
        return self.workflow.report_checks(recipe_id, passed, actor, reason=reason)

    # recipes
    def create_recipe(self, owner, data):
        return self.recipes.create_recipe(owner, data)

    def update_recipe(self, recipe_id, actor, data):
        return self.recipes.update_recipe(recipe_id, actor, data)

    def delete_recipe(self, recipe_id, actor):
        self.recipes.delete_recipe(recipe_id, actor)

    def get_recipe(self, recipe_id, viewer):
        return self.recipes.get_visible(recipe_id, viewer)

    def list_recipes(self, viewer, **filters):
        return self.recipes.list_visible(viewer, **filters)

    # moderation
    def moderate_comment(self, comment_id, actor, action):
        return self.moderation.moderate_comment(comment_id, actor, action)

    def block_user(self, actor, blocked_user_id, reason=""):
        return self.moderation.block_user(actor, blocked_user_id, reason)

    def unblock_user(self, actor, blocked_user_id):
        self.moderation.unblock_user(actor, blocked_user_id)

    def list_blocks(self, actor):
        return self.moderation.list_blocks(actor)

    def report(self, actor, content_type, content_id, reason, description=""):
        return self.moderation.report(actor, content_type, content_id, reason, description)

    def list_reports(self, actor, **filters):
        return self.moderation.list_reports(actor, **filters)

    def review_report(self, actor, report_id, status, action=None, action_taken=""):
        return self.moderation.review_report(actor, report_id, status=status, action=action, action_taken=action_taken)
