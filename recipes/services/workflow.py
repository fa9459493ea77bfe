"""
Recipe publication workflow.

    draft -> processing -> pending_review -> published

Every other transition in the table leads back to draft.

Rejection is a transition back to draft carrying a reason. The reason is
returned and logged, not stored on the recipe.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from recipes.db_accessor import run_atomic
from recipes.errors import Forbidden, InvalidTransition, NotFound
from recipes.identity import SYSTEM, Identity
from recipes.models import Recipe
from recipes.permissions import can_moderate, require_user
from recipes.repos.recipe_repo import RecipeRepo

logger = logging.getLogger(__name__)

SUBMIT = "submit"
CHECKS_PASSED = "automated_checks_passed"
CHECKS_FAILED = "automated_checks_failed"
APPROVE = "approve"
REJECT = "reject"
UNPUBLISH = "unpublish"

EVENTS = (SUBMIT, CHECKS_PASSED, CHECKS_FAILED, APPROVE, REJECT, UNPUBLISH)


def _is_owner(actor: Identity, recipe) -> bool:
    return actor.is_authenticated and recipe.owner_id == actor.user_id


def _is_admin(actor: Identity, recipe) -> bool:
    return actor.is_admin


def _is_checker(actor: Identity, recipe) -> bool:
    return actor.is_system or actor.is_admin


class Transition(NamedTuple):
    target: str
    allowed: Callable[[Identity, Recipe], bool]


TRANSITIONS: Dict[Tuple[str, str], Transition] = {
    (Recipe.STATUS_DRAFT, SUBMIT): Transition(Recipe.STATUS_PROCESSING, _is_owner),
    (Recipe.STATUS_PROCESSING, CHECKS_PASSED): Transition(Recipe.STATUS_PENDING_REVIEW, _is_checker),
    (Recipe.STATUS_PROCESSING, CHECKS_FAILED): Transition(Recipe.STATUS_DRAFT, _is_checker),
    (Recipe.STATUS_PENDING_REVIEW, APPROVE): Transition(Recipe.STATUS_PUBLISHED, _is_admin),
    (Recipe.STATUS_PENDING_REVIEW, REJECT): Transition(Recipe.STATUS_DRAFT, _is_admin),
    (Recipe.STATUS_PUBLISHED, UNPUBLISH): Transition(Recipe.STATUS_DRAFT, can_moderate),
}


@dataclass(frozen=True)
class TransitionResult:
    recipe_id: int
    event: str
    from_status: str
    status: str
    reason: Optional[str] = None


def check_recipe_content(recipe: Recipe) -> List[str]:
    """Return the problems found in a recipe's content (empty when it passes)."""
    problems = []
    if not (recipe.title or "").strip():
        problems.append("title is blank")
    if not recipe.servings or recipe.servings < 1:
        problems.append("servings must be positive")
    for field in ("calories", "protein_g", "carbs_g", "fat_g"):
        value = getattr(recipe, field)
        if value is not None and value < 0:
            problems.append(f"{field} is negative")
    return problems


class RecipeWorkflow:
    """Drive recipes through the publication state machine."""

    def __init__(self, recipe_repo=None):
        self.recipes = recipe_repo or RecipeRepo()

    def fire(self, recipe_id, event: str, actor: Identity, reason: Optional[str] = None) -> TransitionResult:
        """Apply `event` to the recipe; the record is untouched if anything fails."""
        if not actor.is_system:
            require_user(actor)
        if reason is not None:
            reason = str(reason).strip() or None

        def _apply():
            recipe = self.recipes.get_for_update(id=recipe_id)
            if recipe is None:
                raise NotFound("Recipe not found.")
            transition = TRANSITIONS.get((recipe.status, event))
            if transition is None:
                raise InvalidTransition(f"Cannot {event} a recipe in status '{recipe.status}'.")
            if not transition.allowed(actor, recipe):
                raise Forbidden(f"You are not allowed to {event} this recipe.")
            from_status = recipe.status
            recipe.status = transition.target
            recipe.save(update_fields=["status", "updated_at"])
            return TransitionResult(
                recipe_id=recipe.id,
                event=event,
                from_status=from_status,
                status=recipe.status,
                reason=reason,
            )

        result = run_atomic(_apply, label=event, retries=1)
        logger.info(
            "Recipe %s: %s -> %s (%s by %s)",
            result.recipe_id, result.from_status, result.status, event, actor.user_id or actor.role,
        )
        if event in (REJECT, CHECKS_FAILED) and reason:
            logger.info("Recipe %s sent back to draft: %s", result.recipe_id, reason)
        return result

    def submit(self, recipe_id, actor: Identity) -> TransitionResult:
        return self.fire(recipe_id, SUBMIT, actor)

    def approve(self, recipe_id, actor: Identity) -> TransitionResult:
        return self.fire(recipe_id, APPROVE, actor)

    def reject(self, recipe_id, actor: Identity, reason: Optional[str] = None) -> TransitionResult:
        return self.fire(recipe_id, REJECT, actor, reason=reason)

    def unpublish(self, recipe_id, actor: Identity) -> TransitionResult:
        return self.fire(recipe_id, UNPUBLISH, actor)

    def report_checks(self, recipe_id, passed: bool, actor: Identity = SYSTEM, reason=None) -> TransitionResult:
        """Record the outcome of automated checks for a recipe in processing."""
        event = CHECKS_PASSED if passed else CHECKS_FAILED
        return self.fire(recipe_id, event, actor, reason=reason)

    def run_automated_checks(self, recipe: Recipe) -> TransitionResult:
        """Evaluate a processing recipe and fire the matching checks event."""
        problems = check_recipe_content(recipe)
        reason = "; ".join(problems) or None
        return self.report_checks(recipe.id, not problems, SYSTEM, reason=reason)

    def process_pending(self) -> List[TransitionResult]:
        """Run automated checks over every recipe currently in processing."""
        results = []
        for recipe in self.recipes.list_in_status(Recipe.STATUS_PROCESSING):
            try:
                results.append(self.run_automated_checks(recipe))
            except (InvalidTransition, NotFound):
                # moved on or deleted since the listing was read
                logger.info("Recipe %s left processing before checks ran", recipe.id)
        return results
