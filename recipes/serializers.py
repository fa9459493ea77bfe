from rest_framework import serializers

from recipes.models import Comment, Recipe, Report, UserBlock
from recipes.services.comments import author_label


class RecipeSerializer(serializers.ModelSerializer):
    """Recipe as returned by the API (camelCase keys)."""
    ownerId = serializers.IntegerField(source="owner_id", read_only=True)
    ownerName = serializers.CharField(source="owner", read_only=True)
    proteinG = serializers.DecimalField(source="protein_g", max_digits=5, decimal_places=1, read_only=True)
    carbsG = serializers.DecimalField(source="carbs_g", max_digits=5, decimal_places=1, read_only=True)
    fatG = serializers.DecimalField(source="fat_g", max_digits=5, decimal_places=1, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Recipe
        fields = [
            "id",
            "ownerId",
            "ownerName",
            "title",
            "servings",
            "calories",
            "proteinG",
            "carbsG",
            "fatG",
            "notes",
            "status",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class PopularRecipeSerializer(RecipeSerializer):
    """Recipe plus the counters it was ranked by."""
    likes = serializers.IntegerField(source="likes_total", read_only=True)
    favorites = serializers.IntegerField(source="favorites_total", read_only=True)
    countedViews = serializers.IntegerField(source="counted_views_total", read_only=True)
    popularity = serializers.IntegerField(read_only=True)

    class Meta(RecipeSerializer.Meta):
        fields = RecipeSerializer.Meta.fields + ["likes", "favorites", "countedViews", "popularity"]
        read_only_fields = fields


class RecipeWriteSerializer(serializers.Serializer):
    """Editable recipe fields; anything else in the body is ignored."""
    title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    servings = serializers.IntegerField(required=False)
    calories = serializers.IntegerField(required=False)
    proteinG = serializers.DecimalField(required=False, max_digits=5, decimal_places=1, source="protein_g")
    carbsG = serializers.DecimalField(required=False, max_digits=5, decimal_places=1, source="carbs_g")
    fatG = serializers.DecimalField(required=False, max_digits=5, decimal_places=1, source="fat_g")
    notes = serializers.CharField(required=False, allow_blank=True)


class CommentSerializer(serializers.ModelSerializer):
    """A single comment; tombstoned or hidden comments carry no content."""
    recipeId = serializers.IntegerField(source="recipe_id", read_only=True)
    parentId = serializers.IntegerField(source="parent_id", read_only=True, allow_null=True)
    authorId = serializers.IntegerField(source="author_id", read_only=True, allow_null=True)
    authorName = serializers.SerializerMethodField()
    content = serializers.SerializerMethodField()
    isDeleted = serializers.BooleanField(source="is_deleted", read_only=True)
    isHidden = serializers.BooleanField(source="is_hidden", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Comment
        fields = [
            "id",
            "recipeId",
            "parentId",
            "authorId",
            "authorName",
            "content",
            "isDeleted",
            "isHidden",
            "createdAt",
            "updatedAt",
        ]

    def get_authorName(self, obj):
        return author_label(obj)

    def get_content(self, obj):
        return obj.content if obj.is_visible else ""


class CommentNodeSerializer(serializers.Serializer):
    """One node of an assembled thread, replies nested."""
    id = serializers.IntegerField()
    recipeId = serializers.IntegerField(source="recipe_id")
    parentId = serializers.IntegerField(source="parent_id", allow_null=True)
    authorId = serializers.IntegerField(source="author_id", allow_null=True)
    authorName = serializers.CharField(source="author_name")
    content = serializers.CharField()
    isDeleted = serializers.BooleanField(source="is_deleted")
    isHidden = serializers.BooleanField(source="is_hidden")
    replyCount = serializers.IntegerField(source="reply_count")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    replies = serializers.SerializerMethodField()

    def get_replies(self, obj):
        return CommentNodeSerializer(obj.replies, many=True).data


class CommentWriteSerializer(serializers.Serializer):
    content = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False, default="")
    parentId = serializers.IntegerField(required=False, allow_null=True, default=None)


class TransitionSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class ChecksSerializer(serializers.Serializer):
    passed = serializers.BooleanField()
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class ModerationSerializer(serializers.Serializer):
    action = serializers.CharField()


class UserBlockSerializer(serializers.ModelSerializer):
    blockerId = serializers.IntegerField(source="blocker_id", read_only=True)
    userId = serializers.IntegerField(source="blocked_user_id", read_only=True)
    userName = serializers.CharField(source="blocked_user", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserBlock
        fields = ["id", "blockerId", "userId", "userName", "reason", "createdAt"]
        read_only_fields = fields


class UserBlockWriteSerializer(serializers.Serializer):
    userId = serializers.IntegerField()
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class ReportSerializer(serializers.ModelSerializer):
    """A report as seen in the admin review queue."""
    reporterId = serializers.IntegerField(source="reporter_id", read_only=True)
    reporterName = serializers.CharField(source="reporter", read_only=True)
    reportedUserId = serializers.IntegerField(source="reported_user_id", read_only=True)
    reportedUserName = serializers.CharField(source="reported_user", read_only=True)
    contentType = serializers.CharField(source="content_type", read_only=True)
    contentId = serializers.IntegerField(source="content_id", read_only=True)
    reviewedBy = serializers.IntegerField(source="reviewed_by_id", read_only=True, allow_null=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", read_only=True)
    actionTaken = serializers.CharField(source="action_taken", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Report
        fields = [
            "id",
            "reporterId",
            "reporterName",
            "reportedUserId",
            "reportedUserName",
            "contentType",
            "contentId",
            "reason",
            "description",
            "status",
            "reviewedBy",
            "reviewedAt",
            "actionTaken",
            "createdAt",
        ]
        read_only_fields = fields


class ReportWriteSerializer(serializers.Serializer):
    contentType = serializers.CharField()
    contentId = serializers.IntegerField(min_value=1)
    reason = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True, default="")


class ReportReviewSerializer(serializers.Serializer):
    status = serializers.CharField(required=False, default=Report.STATUS_RESOLVED)
    action = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    actionTaken = serializers.CharField(required=False, allow_blank=True, default="")


def transition_payload(result):
    return {
        "id": result.recipe_id,
        "status": result.status,
        "previousStatus": result.from_status,
        "reason": result.reason,
    }


def stats_payload(stats):
    return {
        "likes": stats["likes"],
        "favorites": stats["favorites"],
        "views": stats["views"],
        "countedViews": stats["counted_views"],
    }
