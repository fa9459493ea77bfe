"""Service helpers for recipe creation, edits and visible listings."""

import logging
from decimal import Decimal, InvalidOperation

from recipes.db_accessor import run_atomic
from recipes.errors import Forbidden, InvalidContent, NotFound
from recipes.identity import Identity
from recipes.models import Recipe
from recipes.permissions import can_moderate, require_user
from recipes.repos.recipe_repo import POPULARITY_ORDER, RecipeRepo

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

SORT_ORDERS = {
    "newest": ("-created_at", "-id"),
    "oldest": ("created_at", "id"),
    "title": ("title", "id"),
    "popular": POPULARITY_ORDER,
}

INT_FIELDS = ("servings", "calories")
DECIMAL_FIELDS = ("protein_g", "carbs_g", "fat_g")
EDITABLE_FIELDS = ("title", "notes") + INT_FIELDS + DECIMAL_FIELDS


def clean_recipe_data(data, *, partial=False) -> dict:
    """Validate editable recipe fields; status is never accepted here."""
    cleaned = {}
    for name in EDITABLE_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if name == "title":
            value = value.strip() if isinstance(value, str) else ""
            if not value:
                raise InvalidContent("Recipe title is required.")
            if len(value) > 255:
                raise InvalidContent("Recipe title is too long (max 255 characters).")
        elif name == "notes":
            value = value or ""
        elif name in INT_FIELDS:
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise InvalidContent(f"{name} must be a whole number.")
            if value < 0 or (name == "servings" and value < 1):
                raise InvalidContent(f"{name} is out of range.")
        else:
            try:
                value = Decimal(str(value)).quantize(Decimal("0.1"))
            except (InvalidOperation, ValueError):
                raise InvalidContent(f"{name} must be a number.")
            if value < 0 or value >= 10000:
                raise InvalidContent(f"{name} is out of range.")
        cleaned[name] = value
    if not partial and "title" not in cleaned:
        raise InvalidContent("Recipe title is required.")
    return cleaned


class RecipeService:
    """Encapsulate recipe lifecycle outside of the publication workflow."""

    def __init__(self, recipe_repo=None):
        self.recipes = recipe_repo or RecipeRepo()

    def create_recipe(self, owner: Identity, data) -> Recipe:
        """Create a draft recipe owned by the caller."""
        require_user(owner)
        cleaned = clean_recipe_data(data)
        recipe = run_atomic(
            lambda: self.recipes.create(owner_id=owner.user_id, status=Recipe.STATUS_DRAFT, **cleaned),
            label="create_recipe",
            retries=0,
        )
        logger.debug("Recipe %s created by %s", recipe.id, owner.user_id)
        return recipe

    def _load_for_change(self, recipe_id, actor: Identity) -> Recipe:
        recipe = self.recipes.get_for_update(id=recipe_id)
        if recipe is None:
            raise NotFound("Recipe not found.")
        if not can_moderate(actor, recipe):
            if not recipe.is_published:
                raise NotFound("Recipe not found.")
            raise Forbidden("Only the owner or an admin can change this recipe.")
        return recipe

    def update_recipe(self, recipe_id, actor: Identity, data) -> Recipe:
        require_user(actor)
        cleaned = clean_recipe_data(data, partial=True)

        def _update():
            recipe = self._load_for_change(recipe_id, actor)
            for name, value in cleaned.items():
                setattr(recipe, name, value)
            recipe.save(update_fields=list(cleaned) + ["updated_at"])
            return recipe

        return run_atomic(_update, label="update_recipe", retries=1)

    def delete_recipe(self, recipe_id, actor: Identity) -> None:
        """Delete the recipe together with its comments and engagement rows."""
        require_user(actor)

        def _delete():
            recipe = self._load_for_change(recipe_id, actor)
            recipe.delete()

        run_atomic(_delete, label="delete_recipe", retries=1)
        logger.info("Recipe %s deleted by %s", recipe_id, actor.user_id)

    def get_visible(self, recipe_id, viewer: Identity) -> Recipe:
        recipe = self.recipes.get_visible(recipe_id, viewer)
        if recipe is None:
            raise NotFound("Recipe not found.")
        return recipe

    def list_visible(self, viewer: Identity, *, status=None, owner_id=None, search=None,
                     sort="newest", page=1, limit=DEFAULT_PAGE_SIZE):
        """One page of recipes the viewer may see."""
        if status and status not in dict(Recipe.STATUS_CHOICES):
            raise InvalidContent(f"Unknown status '{status}'.")
        try:
            page = max(1, int(page or 1))
            limit = min(MAX_PAGE_SIZE, max(1, int(limit or DEFAULT_PAGE_SIZE)))
        except (TypeError, ValueError):
            raise InvalidContent("page and limit must be whole numbers.")
        offset = (page - 1) * limit
        order_by = SORT_ORDERS.get(sort or "newest")
        if order_by is None:
            raise InvalidContent(f"Unknown sort '{sort}'.")
        return list(
            self.recipes.list_visible(
                viewer,
                status=status,
                owner_id=owner_id,
                search=search,
                order_by=order_by,
                limit=limit,
                offset=offset,
                popularity=sort == "popular",
            )
        )
