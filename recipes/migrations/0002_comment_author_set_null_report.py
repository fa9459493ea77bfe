import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("recipes", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="comment",
            name="author",
            field=models.ForeignKey(blank=True, db_column="author_id", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="comments", to=settings.AUTH_USER_MODEL),
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content_type", models.CharField(choices=[("recipe", "Recipe"), ("comment", "Comment"), ("profile", "Profile")], max_length=20)),
                ("content_id", models.PositiveBigIntegerField()),
                ("reason", models.CharField(choices=[("spam", "Spam"), ("harassment", "Harassment"), ("inappropriate", "Inappropriate Content"), ("offensive", "Offensive"), ("other", "Other")], max_length=50)),
                ("description", models.TextField(blank=True, help_text="Additional details from the user")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("investigating", "Investigating"), ("resolved", "Resolved"), ("dismissed", "Dismissed")], db_index=True, default="pending", max_length=20)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("action_taken", models.TextField(blank=True, help_text="Admin's notes on the decision")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("comment", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reports", to="recipes.comment")),
                ("recipe", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reports", to="recipes.recipe")),
                ("reported_user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reports_received", to=settings.AUTH_USER_MODEL)),
                ("reporter", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submitted_reports", to=settings.AUTH_USER_MODEL)),
                ("reviewed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_reports", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "report",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("reporter", "content_type", "content_id"), name="uniq_report_reporter_content"),
                ],
            },
        ),
    ]
