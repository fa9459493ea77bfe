from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from recipes.models import Recipe
from recipes.tests.helpers import make_admin, make_recipe, make_user


class RecipeApiViewTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user(username="@johndoe")
        self.other = make_user(username="@other")
        self.admin = make_admin()
        self.list_url = reverse("recipe_collection")

    def test_anonymous_cannot_create(self):
        response = self.client.post(self.list_url, {"title": "Soup"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Unauthenticated")

    def test_user_can_create_draft(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(
            self.list_url,
            {"title": "Simple pasta", "servings": 2, "proteinG": "14.5"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["status"], "draft")
        self.assertEqual(body["ownerId"], self.user.id)
        self.assertEqual(body["proteinG"], "14.5")

    def test_create_with_blank_title_is_invalid_content(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.list_url, {"title": " "}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "InvalidContent")

    def test_list_hides_unpublished_from_strangers(self):
        make_recipe(owner=self.user, title="Public")
        make_recipe(owner=self.user, title="Private", status=Recipe.STATUS_DRAFT)

        anonymous = self.client.get(self.list_url)
        self.assertEqual([r["title"] for r in anonymous.json()["results"]], ["Public"])

        self.client.force_authenticate(user=self.user)
        mine = self.client.get(self.list_url, {"owner": self.user.id})
        self.assertEqual(len(mine.json()["results"]), 2)

    def test_list_search_and_popular_sort(self):
        make_recipe(owner=self.user, title="Garlic butter pasta")
        make_recipe(owner=self.user, title="Tomato soup")

        response = self.client.get(self.list_url, {"search": "garlic"})
        self.assertEqual([r["title"] for r in response.json()["results"]], ["Garlic butter pasta"])

        popular = self.client.get(self.list_url, {"sort": "popular"})
        self.assertIn("popularity", popular.json()["results"][0])

    def test_detail_follows_visibility(self):
        draft = make_recipe(owner=self.user, status=Recipe.STATUS_DRAFT)
        url = reverse("recipe_detail", args=[draft.id])

        response = self.client.get(url)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "NotFound", "message": "Recipe not found."})

        self.client.force_authenticate(user=self.admin)
        self.assertEqual(self.client.get(url).status_code, 200)

    def test_patch_and_delete_owner_only(self):
        recipe = make_recipe(owner=self.user)
        url = reverse("recipe_detail", args=[recipe.id])

        self.client.force_authenticate(user=self.other)
        self.assertEqual(self.client.patch(url, {"title": "Stolen"}, format="json").status_code, 403)
        self.assertEqual(self.client.delete(url).status_code, 403)

        self.client.force_authenticate(user=self.user)
        response = self.client.patch(url, {"title": "Renamed"}, format="json")
        self.assertEqual(response.json()["title"], "Renamed")
        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertFalse(Recipe.objects.filter(id=recipe.id).exists())


class WorkflowApiViewTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = make_user(username="@owner")
        self.other = make_user(username="@other")
        self.admin = make_admin()
        self.recipe = make_recipe(owner=self.owner, status=Recipe.STATUS_DRAFT)
        self.detail_url = reverse("recipe_detail", args=[self.recipe.id])

    def _post(self, name, user=None, data=None, **headers):
        self.client.force_authenticate(user=user)
        return self.client.post(reverse(name, args=[self.recipe.id]), data or {}, format="json", **headers)

    def test_publication_scenario(self):
        response = self._post("recipe_submit", self.owner)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "id": self.recipe.id, "status": "processing", "previousStatus": "draft", "reason": None,
        })
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(self.detail_url).status_code, 404)

        response = self._post("recipe_checks", None, {"passed": True}, HTTP_X_USER_ROLE="system")
        self.assertEqual(response.json()["status"], "pending_review")
        self.assertEqual(self.client.get(self.detail_url).status_code, 404)

        self.assertEqual(self._post("recipe_approve", self.other).status_code, 403)
        self.assertEqual(self._post("recipe_approve", self.admin).json()["status"], "published")

        self.client.force_authenticate(user=None)
        response = self.client.get(self.detail_url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], self.recipe.id)

    def test_invalid_transition_is_conflict(self):
        response = self._post("recipe_approve", self.admin)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "InvalidTransition")

    def test_reject_with_reason(self):
        self.recipe.status = Recipe.STATUS_PENDING_REVIEW
        self.recipe.save()
        response = self._post("recipe_reject", self.admin, {"reason": "Too salty"})
        self.assertEqual(response.json()["status"], "draft")
        self.assertEqual(response.json()["reason"], "Too salty")

    def test_anonymous_transition_unauthenticated(self):
        self.assertEqual(self._post("recipe_submit").status_code, 401)

    def test_missing_recipe_not_found(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.post(reverse("recipe_submit", args=[999999]), {}, format="json")
        self.assertEqual(response.status_code, 404)
