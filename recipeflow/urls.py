"""
URL configuration for recipeflow project.

Everything the engine exposes lives under /api/; the Django admin is kept
for operators.
"""
from django.contrib import admin
from django.urls import include, path

from recipes.services.workflow import APPROVE, REJECT, SUBMIT, UNPUBLISH
from recipes.views import api_views

api_patterns = [
    path("health", api_views.health, name="health"),
    path("recipes", api_views.recipe_collection, name="recipe_collection"),
    path("recipes/<int:recipe_id>", api_views.recipe_detail, name="recipe_detail"),
    path("recipes/<int:recipe_id>/comments", api_views.recipe_comments, name="recipe_comments"),
    path("recipes/<int:recipe_id>/like", api_views.toggle_like, name="recipe_like"),
    path("recipes/<int:recipe_id>/favorite", api_views.toggle_favorite, name="recipe_favorite"),
    path("recipes/<int:recipe_id>/view", api_views.record_view, name="recipe_view"),
    path("recipes/<int:recipe_id>/stats", api_views.recipe_stats, name="recipe_stats"),
    path("recipes/<int:recipe_id>/checks", api_views.recipe_checks, name="recipe_checks"),
    path("comments/<int:comment_id>", api_views.comment_detail, name="comment_detail"),
    path("moderate/comments/<int:comment_id>", api_views.moderate_comment, name="moderate_comment"),
    path("blocks", api_views.user_blocks, name="user_blocks"),
    path("blocks/<int:user_id>", api_views.user_block_detail, name="user_block_detail"),
    path("reports", api_views.reports, name="reports"),
    path("reports/<int:report_id>", api_views.report_detail, name="report_detail"),
]

api_patterns += [
    path(f"recipes/<int:recipe_id>/{event}", api_views.recipe_transition, {"event": event}, name=f"recipe_{event}")
    for event in (SUBMIT, APPROVE, REJECT, UNPUBLISH)
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include(api_patterns)),
]
