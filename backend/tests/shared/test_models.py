"""Tests for shared/models.py."""

from shared.models import ApiResponse


class TestApiResponse:
    def test_ok(self):
        response = ApiResponse.ok({"id": 1})
        assert response.success is True
        assert response.data == {"id": 1}
        assert response.message is None

    def test_fail(self):
        response = ApiResponse.fail("Nope")
        assert response.model_dump(exclude_none=True) == {"success": False, "message": "Nope"}

    def test_parameterized(self):
        response = ApiResponse[list[int]].ok([1, 2])
        assert response.data == [1, 2]
