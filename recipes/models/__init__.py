from .user import User
from .recipe import Recipe
from .comment import Comment
from .like import Like
from .favorite import Favorite
from .view import RecipeView
from .user_block import UserBlock
from .report import Report

__all__ = [
    "User",
    "Recipe",
    "Comment",
    "Like",
    "Favorite",
    "RecipeView",
    "UserBlock",
    "Report",
]
