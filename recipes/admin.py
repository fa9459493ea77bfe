from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from recipes.models.comment import Comment
from recipes.models.recipe import Recipe
from recipes.models.report import Report
from recipes.models.user import User
from recipes.models.user_block import UserBlock


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("username", "display_name", "role", "is_active")
    list_filter = ("role", "is_active")
    search_fields = ("username", "display_name", "email")


class CommentInline(admin.TabularInline):
    """Show the newest comments directly on the Recipe page in Admin."""
    model = Comment
    extra = 0
    fields = ["author", "parent", "content", "is_deleted", "is_hidden", "created_at"]
    readonly_fields = fields
    show_change_link = True


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    """Admin configuration for recipes.

    Status is read-only here; publication goes through the workflow API so
    every transition is checked and logged.
    """
    list_display = ("title", "owner", "status_display", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("title", "owner__username")
    readonly_fields = ("status", "created_at", "updated_at")
    inlines = [CommentInline]

    def status_display(self, obj):
        """Highlight recipes waiting for review."""
        if obj.status == Recipe.STATUS_PENDING_REVIEW:
            return format_html('<span style="color:orange; font-weight:bold;">{}</span>', obj.get_status_display())
        return obj.get_status_display()
    status_display.short_description = "Status"


class ReportInline(admin.StackedInline):
    """Show open reports directly on the Comment page in Admin."""
    model = Report
    fk_name = "comment"
    extra = 0
    fields = ["reporter", "reason", "description", "status", "created_at"]
    readonly_fields = fields

    def get_queryset(self, request):
        """Only show reports still waiting for a decision."""
        return super().get_queryset(request).filter(status__in=Report.OPEN_STATUSES)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin configuration for comments with moderation actions."""
    list_display = ("short_text", "author", "recipe", "is_deleted", "is_hidden", "created_at")
    list_filter = ("is_hidden", "is_deleted", "created_at")
    search_fields = ("content", "author__username")
    readonly_fields = ("parent", "recipe", "hidden_by", "hidden_at", "deleted_at", "created_at", "updated_at")
    actions = ["hide_content", "approve_content"]
    inlines = [ReportInline]

    def short_text(self, obj):
        """Shorten comment text for list display."""
        return obj.content[:50] + "..." if len(obj.content) > 50 else obj.content

    @admin.action(description="Hide selected comments")
    def hide_content(self, request, queryset):
        """Mark selected comments as hidden."""
        queryset.update(is_hidden=True, hidden_by=request.user, hidden_at=timezone.now())

    @admin.action(description="Approve/Unhide comments")
    def approve_content(self, request, queryset):
        """Unhide selected comments."""
        queryset.update(is_hidden=False, hidden_by=None, hidden_at=None)


@admin.register(UserBlock)
class UserBlockAdmin(admin.ModelAdmin):
    list_display = ("blocked_user", "blocker", "reason", "created_at")
    search_fields = ("blocked_user__username", "reason")


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Review queue; decisions made here skip the ban_user action of the API."""
    list_display = ("__str__", "reported_user", "reason", "status_display", "created_at")
    list_filter = ("status", "reason", "content_type")
    search_fields = ("reporter__username", "reported_user__username", "description")
    readonly_fields = ("reporter", "reported_user", "content_type", "content_id", "recipe", "comment",
                       "reviewed_by", "reviewed_at", "created_at", "updated_at")

    def status_display(self, obj):
        """Highlight reports nobody has picked up yet."""
        if obj.status == Report.STATUS_PENDING:
            return format_html('<span style="color:red; font-weight:bold;">{}</span>', obj.get_status_display())
        return obj.get_status_display()
    status_display.short_description = "Status"
