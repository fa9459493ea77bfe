import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("username", models.CharField(error_messages={"unique": "A user with that username already exists."}, help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.", max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name="username")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("role", models.CharField(choices=[("user", "User"), ("admin", "Admin")], default="user", max_length=20)),
                ("display_name", models.CharField(blank=True, max_length=100)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "db_table": "user",
                "ordering": ["id"],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Recipe",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("servings", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("calories", models.PositiveIntegerField(default=0)),
                ("protein_g", models.DecimalField(decimal_places=1, default=0, max_digits=5, validators=[django.core.validators.MinValueValidator(0)])),
                ("carbs_g", models.DecimalField(decimal_places=1, default=0, max_digits=5, validators=[django.core.validators.MinValueValidator(0)])),
                ("fat_g", models.DecimalField(decimal_places=1, default=0, max_digits=5, validators=[django.core.validators.MinValueValidator(0)])),
                ("notes", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("processing", "Processing"), ("pending_review", "Pending review"), ("published", "Published")], db_index=True, default="draft", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(db_column="owner_id", on_delete=django.db.models.deletion.CASCADE, related_name="recipes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "recipe",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["owner"], name="recipe_owner_i_2b1c3e_idx"),
                    models.Index(fields=["title"], name="recipe_title_9f0d4a_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("status__in", ["draft", "processing", "pending_review", "published"])), name="chk_recipe_status_known"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("is_deleted", models.BooleanField(default=False, help_text="Tombstone: content hidden, node kept")),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("is_hidden", models.BooleanField(default=False, help_text="Hidden by an admin")),
                ("hidden_at", models.DateTimeField(blank=True, null=True)),
                ("author", models.ForeignKey(db_column="author_id", on_delete=django.db.models.deletion.CASCADE, related_name="comments", to=settings.AUTH_USER_MODEL)),
                ("hidden_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="hidden_comments", to=settings.AUTH_USER_MODEL)),
                ("parent", models.ForeignKey(blank=True, db_column="parent_id", null=True, on_delete=django.db.models.deletion.RESTRICT, related_name="replies", to="recipes.comment")),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="recipes.recipe")),
            ],
            options={
                "db_table": "comment",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["recipe", "created_at"], name="comment_recipe__5e8a11_idx"),
                    models.Index(fields=["parent"], name="comment_parent__c4d2f7_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("parent", models.F("id")), _negated=True), name="chk_comment_not_own_parent"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Like",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="recipes.recipe")),
                ("user", models.ForeignKey(db_column="user_id", on_delete=django.db.models.deletion.CASCADE, related_name="likes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "recipe_like",
                "indexes": [
                    models.Index(fields=["user"], name="recipe_like_user_id_6a7b9c_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("recipe", "user"), name="uniq_like_recipe_user"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Favorite",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="favorites", to="recipes.recipe")),
                ("user", models.ForeignKey(db_column="user_id", on_delete=django.db.models.deletion.CASCADE, related_name="favorites", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "recipe_favorite",
                "indexes": [
                    models.Index(fields=["user"], name="recipe_favo_user_id_3d5e8f_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("recipe", "user"), name="uniq_favorite_recipe_user"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RecipeView",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("viewed_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("counted", models.BooleanField(default=False)),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="views", to="recipes.recipe")),
                ("user", models.ForeignKey(blank=True, db_column="user_id", null=True, on_delete=django.db.models.deletion.CASCADE, related_name="recipe_views", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "recipe_view",
                "indexes": [
                    models.Index(fields=["recipe", "user", "viewed_at"], name="recipe_view_recipe__1a2b3c_idx"),
                    models.Index(fields=["recipe", "ip_address", "viewed_at"], name="recipe_view_recipe__4d5e6f_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="UserBlock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reason", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("blocked_user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="blocks_received", to=settings.AUTH_USER_MODEL)),
                ("blocker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="blocks_issued", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "user_block",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("blocker", "blocked_user"), name="uniq_user_block_pair"),
                    models.CheckConstraint(condition=models.Q(("blocker", models.F("blocked_user")), _negated=True), name="chk_user_block_not_self"),
                ],
            },
        ),
    ]
