import uuid

from recipes.identity import Identity
from recipes.models import Comment, Recipe, User


def make_user(**kwargs):
    username = kwargs.pop("username", "@johndoe")
    if not username.startswith("@"):
        username = "@" + username

    email = kwargs.pop(
        "email",
        f"{username[1:]}_{uuid.uuid4().hex[:6]}@example.org"
    )

    password = kwargs.pop("password", "Password123")

    user = User.objects.create_user(
        username=username,
        email=email,
        password=password,
        first_name=kwargs.pop("first_name", "John"),
        last_name=kwargs.pop("last_name", "Doe"),
        **kwargs,
    )
    return user


def make_admin(**kwargs):
    kwargs.setdefault("username", "@admin")
    kwargs.setdefault("role", User.ROLE_ADMIN)
    return make_user(**kwargs)


def identity(user):
    """Identity for a saved user, admin role included when applicable."""
    return Identity.from_user(user)


def make_recipe(*, owner=None, title="Lentil soup", status=Recipe.STATUS_PUBLISHED, **extra):
    """
    creates and returns a recipe. Published by default so it is publicly visible.
    """
    if owner is None:
        owner = make_user(username=f"@owner{uuid.uuid4().hex[:6]}")

    extra.setdefault("servings", 2)
    extra.setdefault("calories", 420)
    return Recipe.objects.create(owner=owner, title=title, status=status, **extra)


def make_comment(*, recipe, author, content="Looks tasty", parent=None, **extra):
    return Comment.objects.create(recipe=recipe, author=author, content=content, parent=parent, **extra)
