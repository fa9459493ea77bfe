from django.db import connection
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from recipes import conf
from recipes.authentication import identity_for
from recipes.errors import InvalidContent
from recipes.serializers import (
    ChecksSerializer,
    CommentNodeSerializer,
    CommentSerializer,
    CommentWriteSerializer,
    ModerationSerializer,
    PopularRecipeSerializer,
    RecipeSerializer,
    RecipeWriteSerializer,
    ReportReviewSerializer,
    ReportSerializer,
    ReportWriteSerializer,
    TransitionSerializer,
    UserBlockSerializer,
    UserBlockWriteSerializer,
    stats_payload,
    transition_payload,
)
from recipes.services.facade import EngagementFacade

facade = EngagementFacade()


def _validated(serializer_cls, request, **kwargs):
    serializer = serializer_cls(data=request.data, **kwargs)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def client_ip(request):
    """Socket peer, or the first X-Forwarded-For hop when the peer is a trusted proxy."""
    peer = request.META.get("REMOTE_ADDR")
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded and peer in conf.trusted_proxies():
        return forwarded.split(",")[0].strip()
    return peer


@api_view(["GET"])
def health(request):
    """Liveness check; also confirms the database answers."""
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
    return Response({"status": "ok"})


@api_view(["GET", "POST"])
def recipe_collection(request):
    """List recipes visible to the caller, or create a draft."""
    actor = identity_for(request)
    if request.method == "POST":
        data = _validated(RecipeWriteSerializer, request)
        recipe = facade.create_recipe(actor, data)
        return Response(RecipeSerializer(recipe).data, status=status.HTTP_201_CREATED)

    params = request.query_params
    owner = params.get("owner")
    try:
        owner_id = int(owner) if owner else None
    except ValueError:
        raise InvalidContent("owner must be a user id.")
    sort = params.get("sort") or "newest"
    recipes = facade.list_recipes(
        actor,
        status=params.get("status") or None,
        owner_id=owner_id,
        search=params.get("search") or None,
        sort=sort,
        page=params.get("page") or 1,
        limit=params.get("limit") or None,
    )
    serializer_cls = PopularRecipeSerializer if sort == "popular" else RecipeSerializer
    return Response({"results": serializer_cls(recipes, many=True).data})


@api_view(["GET", "PATCH", "DELETE"])
def recipe_detail(request, recipe_id):
    actor = identity_for(request)
    if request.method == "PATCH":
        data = _validated(RecipeWriteSerializer, request, partial=True)
        recipe = facade.update_recipe(recipe_id, actor, data)
        return Response(RecipeSerializer(recipe).data)
    if request.method == "DELETE":
        facade.delete_recipe(recipe_id, actor)
        return Response(status=status.HTTP_204_NO_CONTENT)
    return Response(RecipeSerializer(facade.get_recipe(recipe_id, actor)).data)


@api_view(["GET", "POST"])
def recipe_comments(request, recipe_id):
    """Nested thread for a recipe, or post a comment/reply to it."""
    actor = identity_for(request)
    if request.method == "POST":
        data = _validated(CommentWriteSerializer, request)
        comment = facade.post_comment(recipe_id, actor, data["content"], parent_id=data["parentId"])
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)
    thread = facade.list_thread(recipe_id, actor)
    return Response({"comments": CommentNodeSerializer(thread, many=True).data})


@api_view(["PATCH", "DELETE"])
def comment_detail(request, comment_id):
    actor = identity_for(request)
    if request.method == "DELETE":
        facade.delete_comment(comment_id, actor)
        return Response(status=status.HTTP_204_NO_CONTENT)
    data = _validated(CommentWriteSerializer, request)
    comment = facade.edit_comment(comment_id, actor, data["content"])
    return Response(CommentSerializer(comment).data)


@api_view(["POST"])
def toggle_like(request, recipe_id):
    result = facade.toggle_like(recipe_id, identity_for(request))
    return Response({"liked": result["liked"], "totalLikes": result["total_likes"]})


@api_view(["POST"])
def toggle_favorite(request, recipe_id):
    result = facade.toggle_favorite(recipe_id, identity_for(request))
    return Response({"favorited": result["favorited"], "totalFavorites": result["total_favorites"]})


@api_view(["POST"])
def record_view(request, recipe_id):
    result = facade.record_view(recipe_id, identity_for(request), client_ip(request))
    return Response({"countedTowardPopularity": result["counted_toward_popularity"]})


@api_view(["GET"])
def recipe_stats(request, recipe_id):
    return Response(stats_payload(facade.recipe_stats(recipe_id, identity_for(request))))


@api_view(["POST"])
def recipe_transition(request, recipe_id, event):
    """submit / approve / reject / unpublish."""
    data = _validated(TransitionSerializer, request)
    result = facade.transition(recipe_id, event, identity_for(request), reason=data["reason"])
    return Response(transition_payload(result))


@api_view(["POST"])
def recipe_checks(request, recipe_id):
    """Callback for the automated checker reporting a verdict."""
    data = _validated(ChecksSerializer, request)
    result = facade.report_checks(recipe_id, data["passed"], identity_for(request), reason=data["reason"])
    return Response(transition_payload(result))


@api_view(["PUT"])
def moderate_comment(request, comment_id):
    data = _validated(ModerationSerializer, request)
    comment = facade.moderate_comment(comment_id, identity_for(request), data["action"])
    return Response(CommentSerializer(comment).data)


@api_view(["GET", "POST"])
def user_blocks(request):
    actor = identity_for(request)
    if request.method == "POST":
        data = _validated(UserBlockWriteSerializer, request)
        block = facade.block_user(actor, data["userId"], data["reason"])
        return Response(UserBlockSerializer(block).data, status=status.HTTP_201_CREATED)
    return Response({"results": UserBlockSerializer(facade.list_blocks(actor), many=True).data})


@api_view(["DELETE"])
def user_block_detail(request, user_id):
    facade.unblock_user(identity_for(request), user_id)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(["GET", "POST"])
def reports(request):
    """Report content (any user), or read the review queue (admins)."""
    actor = identity_for(request)
    if request.method == "POST":
        data = _validated(ReportWriteSerializer, request)
        report = facade.report(actor, data["contentType"], data["contentId"], data["reason"], data["description"])
        return Response(ReportSerializer(report).data, status=status.HTTP_201_CREATED)

    params = request.query_params
    listing = facade.list_reports(
        actor,
        status=params.get("status") or "pending",
        page=params.get("page") or 1,
        limit=params.get("limit") or None,
    )
    return Response({
        "results": ReportSerializer(listing["results"], many=True).data,
        "total": listing["total"],
        "page": listing["page"],
        "limit": listing["limit"],
        "totalPages": listing["total_pages"],
    })


@api_view(["PUT"])
def report_detail(request, report_id):
    data = _validated(ReportReviewSerializer, request)
    report = facade.review_report(identity_for(request), report_id, data["status"], data["action"], data["actionTaken"])
    return Response(ReportSerializer(report).data)
