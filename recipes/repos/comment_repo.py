"""Repository helpers for comment threads."""

from typing import List, Optional

from recipes.db_accessor import DB_Accessor
from recipes.models.comment import Comment


class CommentRepo(DB_Accessor):
    """Repository for Comment queries."""
    def __init__(self) -> None:
        super().__init__(Comment)

    def for_recipe(self, recipe_id) -> List[Comment]:
        """All comments of a recipe (tombstones included), oldest first."""
        return list(
            self.model.objects.filter(recipe_id=recipe_id)
            .select_related("author")
            .order_by("created_at", "id")
        )

    def get_with_author(self, comment_id) -> Optional[Comment]:
        return self.model.objects.select_related("author").filter(id=comment_id).first()

    def depth_of(self, comment: Comment, limit: int) -> int:
        """Nesting level of `comment` (top-level = 1), stopping once past `limit`."""
        depth = 1
        parent_id = comment.parent_id
        while parent_id is not None and depth <= limit:
            depth += 1
            parent_id = (
                self.model.objects.filter(id=parent_id)
                .values_list("parent_id", flat=True)
                .first()
            )
        return depth
