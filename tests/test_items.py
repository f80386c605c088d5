"""Tests for item CRUD operations"""

import httpx
import pytest

from conftest import body_of


class TestGetItems:
    def test_whole_collection(self, sdk, api):
        api.add("GET", "/items/posts", 200, {"data": [{"id": 1}, {"id": 2}]})

        result = sdk.get_items("posts")

        assert api.requests[0].url.path == "/items/posts"
        assert result["data"] == [{"id": 1}, {"id": 2}]

    @pytest.mark.parametrize("item_id", [7, "7"])
    def test_single_item(self, sdk, api, item_id):
        api.add("GET", "/items/posts/7", 200, {"data": {"id": 7}})

        result = sdk.get_items("posts", item_id)

        assert api.requests[0].url.path == "/items/posts/7"
        assert result["data"] == {"id": 7}

    def test_uuid_item(self, sdk, api):
        uuid = "5c0d4b3e-8f64-4f2a-9f59-7d2b5c6a1e10"
        api.add("GET", f"/items/articles/{uuid}", 200, {"data": {"id": uuid}})

        assert sdk.get_items("articles", uuid)["data"] == {"id": uuid}

    def test_filter_sent_as_query(self, sdk, api):
        """The filter mapping itself travels as query parameters"""
        api.add("GET", "/items/posts", 200, {"data": []})

        sdk.get_items(
            "posts",
            {"filter": {"status": {"_eq": "published"}}, "sort": ["-date_created"]},
        )

        request = api.requests[0]
        assert request.url.path == "/items/posts"
        assert request.url.params["filter[status][_eq]"] == "published"
        assert request.url.params["sort[0]"] == "-date_created"
        assert request.content == b""

    def test_false_means_whole_collection(self, sdk, api):
        api.add("GET", "/items/posts", 200, {"data": []})

        sdk.get_items("posts", False)

        assert api.requests[0].url.path == "/items/posts"


class TestWriteItems:
    def test_create_items(self, sdk, api):
        api.add("POST", "/items/posts", 200, {"data": {"id": 3, "title": "Hi"}})

        result = sdk.create_items("posts", {"title": "Hi"})

        assert body_of(api.requests[0]) == {"title": "Hi"}
        assert result["data"]["id"] == 3

    def test_create_many_items(self, sdk, api):
        api.add("POST", "/items/posts", 200, {"data": [{"id": 3}, {"id": 4}]})

        sdk.create_items("posts", [{"title": "a"}, {"title": "b"}])

        assert body_of(api.requests[0]) == [{"title": "a"}, {"title": "b"}]

    def test_update_single_item(self, sdk, api):
        api.add("PATCH", "/items/posts/3", 200, {"data": {"id": 3}})

        sdk.update_items("posts", {"title": "New"}, 3)

        request = api.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/items/posts/3"
        assert body_of(request) == {"title": "New"}

    def test_bulk_update(self, sdk, api):
        api.add("PATCH", "/items/posts", 200, {"data": []})
        fields = {"keys": [1, 2], "data": {"status": "archived"}}

        sdk.update_items("posts", fields)

        assert api.requests[0].url.path == "/items/posts"
        assert body_of(api.requests[0]) == fields

    def test_bulk_delete(self, sdk, api):
        api.add("DELETE", "/items/posts", 204)

        sdk.delete_items("posts", [1, 2, 3])

        assert len(api.requests) == 1
        request = api.requests[0]
        assert request.method == "DELETE"
        assert request.url.path == "/items/posts"
        assert body_of(request) == [1, 2, 3]

    def test_bulk_delete_from_tuple(self, sdk, api):
        api.add("DELETE", "/items/posts", 204)

        sdk.delete_items("posts", (4, 5))

        assert body_of(api.requests[0]) == [4, 5]

    def test_single_delete(self, sdk, api):
        api.add("DELETE", "/items/posts/5", 204)

        result = sdk.delete_items("posts", 5)

        request = api.requests[0]
        assert request.url.path == "/items/posts/5"
        assert request.content == b""
        assert result["headers"]["http_code"] == 204


class TestHeaderStripping:
    """strip_headers applies to every item operation"""

    OPERATIONS = [
        ("GET", "/items/posts", lambda sdk: sdk.get_items("posts")),
        ("GET", "/items/posts/1", lambda sdk: sdk.get_items("posts", 1)),
        ("GET", "/items/posts", lambda sdk: sdk.get_items("posts", {"limit": 1})),
        ("POST", "/items/posts", lambda sdk: sdk.create_items("posts", {"a": 1})),
        ("PATCH", "/items/posts/1", lambda sdk: sdk.update_items("posts", {"a": 1}, 1)),
        ("PATCH", "/items/posts", lambda sdk: sdk.update_items("posts", {"a": 1})),
        ("DELETE", "/items/posts/1", lambda sdk: sdk.delete_items("posts", 1)),
        ("DELETE", "/items/posts", lambda sdk: sdk.delete_items("posts", [1, 2])),
    ]

    @pytest.mark.parametrize("method,path,operation", OPERATIONS)
    def test_headers_stripped(self, make_sdk, api, method, path, operation):
        api.add(method, path, 200, {"data": {"ok": True}})

        result = operation(make_sdk(strip_headers=True))

        assert "headers" not in result
        assert result["data"] == {"ok": True}

    @pytest.mark.parametrize("method,path,operation", OPERATIONS)
    def test_headers_kept(self, make_sdk, api, method, path, operation):
        api.add(method, path, 200, {"data": {"ok": True}})

        result = operation(make_sdk(strip_headers=False))

        assert result["headers"]["http_code"] == 200

    def test_transport_error_never_raises(self, make_sdk, api):
        api.fail("GET", "/items/posts", httpx.ConnectError("Connection refused"))

        result = make_sdk(strip_headers=True).get_items("posts")

        assert result == {"errors": "ConnectError"}
