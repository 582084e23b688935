import httpx
import pytest

from authoring_core.errors import TransportError
from authoring_core.http_client import ContentApiClient
from authoring_core.settings import Settings


async def test_custom_methods_and_headers_are_sent(api, server):
    server.on("LINK", "/content-api/articles/1/en", status=201)

    response = await api.send("LINK", "/articles/1/en", headers={"link": '</x; rel="topic">'})

    assert response.status_code == 201
    (request,) = server.requests
    assert request.method == "LINK"
    assert request.headers["link"] == '</x; rel="topic">'


async def test_non_success_status_raises_with_raw_text_payload(api, server):
    server.on("GET", "/content-api/articles/1/en", status=500, text="Server error")

    with pytest.raises(TransportError) as excinfo:
        await api.get_json("/articles/1/en")

    assert excinfo.value.payload == "Server error"
    assert excinfo.value.status_code == 500
    assert excinfo.value.method == "GET"
    assert not excinfo.value.is_network_error


async def test_json_error_payload_is_decoded_not_interpreted(api, server):
    server.on("UNLINK", "/content-api/articles/1/en", status=409, json={"errors": [{"code": 409}]})

    with pytest.raises(TransportError) as excinfo:
        await api.send("UNLINK", "/articles/1/en")

    assert excinfo.value.payload == {"errors": [{"code": 409}]}


async def test_network_failure_becomes_transport_error(settings):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with ContentApiClient.from_settings(settings, transport=httpx.MockTransport(refuse)) as api:
        with pytest.raises(TransportError) as excinfo:
            await api.get_json("/articles/1/en")

    assert excinfo.value.is_network_error
    assert "connection refused" in excinfo.value.payload


async def test_no_content_means_zero_items(api, server):
    server.on("GET", "/content-api/articles/77/pl/images", status=204)

    page = await api.get_items("/articles/77/pl/images")

    assert page.items == []
    assert page.pagination is None


async def test_items_and_pagination_are_parsed(api, server):
    server.on(
        "GET",
        "/content-api/search/images",
        json={
            "items": [{"id": 1}],
            "pagination": {"itemsPerPage": 50, "currentPage": 2, "itemsCount": 162, "nextPageLink": "x"},
        },
    )

    page = await api.get_items("/search/images", params={"page": 2})

    assert page.items == [{"id": 1}]
    assert page.pagination.current_page == 2
    assert page.pagination.last_page == 4
    assert not page.pagination.is_last_page


async def test_relation_uri_uses_api_root_path(api):
    assert api.relation_uri("/authors/22") == "/content-api/authors/22"


async def test_bearer_token_is_sent(server):
    server.on("GET", "/content-api/authors/types", json={"items": []})
    settings = Settings(base_url="http://newscoop.test/content-api", token="s3cret")

    async with ContentApiClient.from_settings(settings, transport=httpx.MockTransport(server)) as api:
        await api.get_items("/authors/types")

    assert server.requests[0].headers["Authorization"] == "Bearer s3cret"
