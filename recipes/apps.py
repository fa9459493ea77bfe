from django.apps import AppConfig

class RecipesConfig(AppConfig):
    """Django app config for the recipe workflow and engagement engine."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'recipes'
