"""Comment tree manager: posting, editing, tombstoning and thread assembly."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.utils import timezone

from recipes import conf
from recipes.db_accessor import run_atomic
from recipes.errors import CrossRecipeParent, Forbidden, InvalidContent, NotFound
from recipes.identity import Identity
from recipes.models import Comment
from recipes.permissions import can_moderate, require_user
from recipes.repos.comment_repo import CommentRepo
from recipes.repos.recipe_repo import RecipeRepo
from recipes.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)

DELETED_AUTHOR = "[deleted]"


def author_label(comment: Comment) -> str:
    """Display name of the author, or a placeholder once the account is gone."""
    return DELETED_AUTHOR if comment.author_id is None else str(comment.author)


@dataclass
class CommentNode:
    """One node of an assembled thread; tombstoned/hidden nodes carry no content."""
    id: int
    recipe_id: int
    parent_id: Optional[int]
    author_id: Optional[int]
    author_name: str
    content: str
    created_at: datetime
    updated_at: datetime
    is_deleted: bool = False
    is_hidden: bool = False
    reply_count: int = 0
    replies: List["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentNode":
        return cls(
            id=comment.id,
            recipe_id=comment.recipe_id,
            parent_id=comment.parent_id,
            author_id=comment.author_id,
            author_name=author_label(comment),
            content=comment.content if comment.is_visible else "",
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            is_deleted=comment.is_deleted,
            is_hidden=comment.is_hidden,
        )


def build_thread(comments: List[Comment]) -> List[CommentNode]:
    """Assemble a nested thread from a flat, oldest-first list of comments.

    Nodes live in an arena keyed by id; each comment is appended under its
    parent's node in input order, so every level stays oldest-first.
    """
    arena: Dict[int, CommentNode] = {}
    roots: List[CommentNode] = []
    for comment in comments:
        arena[comment.id] = CommentNode.from_comment(comment)
    for comment in comments:
        node = arena[comment.id]
        if comment.parent_id is None:
            roots.append(node)
            continue
        parent = arena.get(comment.parent_id)
        if parent is None:
            # parent always shares the recipe; unreachable unless rows were edited by hand
            logger.warning("Comment %s references missing parent %s", comment.id, comment.parent_id)
            continue
        parent.replies.append(node)
        parent.reply_count += 1
    return roots


class CommentService:
    """Encapsulate comment rules for recipes."""

    def __init__(self, comment_repo=None, recipe_repo=None, user_repo=None):
        self.comments = comment_repo or CommentRepo()
        self.recipes = recipe_repo or RecipeRepo()
        self.users = user_repo or UserRepo()

    def _clean_content(self, content) -> str:
        text = content.strip() if isinstance(content, str) else ""
        if not text:
            raise InvalidContent("Comment content is required.")
        max_length = conf.comment_max_length()
        if len(text) > max_length:
            raise InvalidContent(f"Comment content is too long (max {max_length} characters).")
        return text

    def post_comment(self, recipe_id, author: Identity, content, parent_id=None) -> Comment:
        """Create a top-level comment or a reply; the parent is fixed forever."""
        require_user(author)
        text = self._clean_content(content)

        def _post():
            recipe = self.recipes.get_visible(recipe_id, author)
            if recipe is None:
                raise NotFound("Recipe not found.")
            if self.users.is_blocked(author.user_id):
                raise Forbidden("You are blocked from commenting.")

            parent = None
            if parent_id is not None:
                parent = self.comments.find(id=parent_id)
                if parent is None or not parent.is_visible:
                    raise NotFound("Parent comment not found.")
                if parent.recipe_id != recipe.id:
                    raise CrossRecipeParent()
                max_depth = conf.comment_max_depth()
                if self.comments.depth_of(parent, max_depth) >= max_depth:
                    raise InvalidContent(f"Replies cannot be nested more than {max_depth} levels deep.")

            return self.comments.create(
                recipe=recipe,
                author_id=author.user_id,
                parent=parent,
                content=text,
            )

        comment = run_atomic(_post, label="post_comment", retries=0)
        logger.debug("Comment %s posted on recipe %s by %s", comment.id, comment.recipe_id, author.user_id)
        return comment

    def _load_for_change(self, comment_id, actor: Identity) -> Comment:
        comment = self.comments.get_for_update(id=comment_id)
        if comment is None or not comment.is_visible:
            raise NotFound("Comment not found.")
        if not can_moderate(actor, comment):
            raise Forbidden("Only the author or an admin can change this comment.")
        return comment

    def edit_comment(self, comment_id, actor: Identity, new_content) -> Comment:
        """Replace the content of a live comment; created_at and parent are untouched."""
        require_user(actor)
        text = self._clean_content(new_content)

        def _edit():
            comment = self._load_for_change(comment_id, actor)
            comment.content = text
            comment.save(update_fields=["content", "updated_at"])
            return comment

        return run_atomic(_edit, label="edit_comment", retries=0)

    def delete_comment(self, comment_id, actor: Identity) -> None:
        """Tombstone the comment so its replies stay attached."""
        require_user(actor)

        def _delete():
            comment = self._load_for_change(comment_id, actor)
            comment.is_deleted = True
            comment.deleted_at = timezone.now()
            comment.save(update_fields=["is_deleted", "deleted_at"])
            return comment

        comment = run_atomic(_delete, label="delete_comment", retries=0)
        if actor.user_id != comment.author_id:
            logger.info("Comment %s removed by admin %s", comment.id, actor.user_id)

    def list_thread(self, recipe_id, viewer: Identity) -> List[CommentNode]:
        """Nested thread for a recipe the viewer may see (anonymous allowed)."""

        def _load():
            recipe = self.recipes.get_visible(recipe_id, viewer)
            if recipe is None:
                raise NotFound("Recipe not found.")
            return self.comments.for_recipe(recipe.id)

        return build_thread(run_atomic(_load, label="list_thread", retries=0))
