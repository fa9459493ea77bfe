from django.http import Http404
from django.test import SimpleTestCase
from rest_framework import exceptions

from recipes.errors import CrossRecipeParent, StorageUnavailable
from recipes.views.exception_handler import engagement_exception_handler


class EngagementExceptionHandlerTests(SimpleTestCase):
    def test_engagement_error_maps_to_status_and_body(self):
        response = engagement_exception_handler(CrossRecipeParent(), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "CrossRecipeParent")

    def test_storage_unavailable_is_503(self):
        response = engagement_exception_handler(StorageUnavailable("db down"), {})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data, {"error": "StorageUnavailable", "message": "db down"})

    def test_drf_validation_error_becomes_invalid_content(self):
        exc = exceptions.ValidationError({"passed": ["This field is required."]})
        response = engagement_exception_handler(exc, {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "InvalidContent")
        self.assertIn("passed", response.data["message"])

    def test_authentication_failed_becomes_unauthenticated(self):
        response = engagement_exception_handler(exceptions.AuthenticationFailed("User not found"), {})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data, {"error": "Unauthenticated", "message": "User not found"})

    def test_http404_becomes_not_found(self):
        response = engagement_exception_handler(Http404(), {})
        self.assertEqual((response.status_code, response.data["error"]), (404, "NotFound"))

    def test_other_drf_errors_keep_their_status(self):
        response = engagement_exception_handler(exceptions.MethodNotAllowed("PUT"), {"view": None, "request": None})
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.data["error"], "MethodNotAllowed")

    def test_unknown_exceptions_are_left_to_django(self):
        self.assertIsNone(engagement_exception_handler(ValueError("boom"), {}))
