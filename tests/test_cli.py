import httpx
import pytest
from typer.testing import CliRunner

from authoring_core import cli, settings as settings_module
from authoring_core.http_client import ContentApiClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_api(monkeypatch, settings, server):
    monkeypatch.setattr(settings_module, "_settings", settings)
    monkeypatch.setattr(
        cli,
        "make_api",
        lambda: ContentApiClient.from_settings(settings, transport=httpx.MockTransport(server)),
    )


def test_authors_list(server):
    server.on(
        "GET",
        "/content-api/articles/64/de/authors",
        json={
            "items": [
                {"author": {"id": 22, "firstName": "John", "lastName": "Doe"}, "type": {"id": 1, "type": "Writer"}, "order": 1}
            ]
        },
    )

    result = runner.invoke(cli.app, ["authors", "list", "64", "de"])

    assert result.exit_code == 0, result.output
    assert "John Doe" in result.output
    assert "Writer" in result.output


def test_authors_add_sends_link(server):
    server.on("LINK", "/content-api/articles/64/de", status=201)

    result = runner.invoke(cli.app, ["authors", "add", "64", "de", "22", "1"])

    assert result.exit_code == 0, result.output
    assert server.requests[0].headers["link"] == (
        '</content-api/authors/22; rel="author">,</content-api/authors/types/1; rel="author-type">'
    )


def test_authors_reorder(server):
    server.on("POST", "/content-api/articles/64/de/authors/order", status=200)

    result = runner.invoke(cli.app, ["authors", "reorder", "64", "de", "162-4", "22-1"])

    assert result.exit_code == 0, result.output
    assert server.body(server.requests[0]) == {"order": "162-4,22-1"}


def test_authors_reorder_rejects_malformed_token(server):
    result = runner.invoke(cli.app, ["authors", "reorder", "64", "de", "22"])

    assert result.exit_code != 0
    assert server.requests == []


def test_server_error_exits_with_code_1(server):
    server.on("UNLINK", "/content-api/articles/18/it", status=500, text="Server error")

    result = runner.invoke(cli.app, ["topics", "remove", "18", "it", "6"])

    assert result.exit_code == 1
    assert "Server error" in result.output


def test_empty_topic_list_exits_with_code_2(server):
    result = runner.invoke(cli.app, ["topics", "add", "18", "it"])

    assert result.exit_code == 2
    assert server.requests == []


def test_commenting_set(server):
    server.on("GET", "/content-api/articles/64/de", json={"comments_enabled": "1", "comments_locked": "0"})
    server.on("PATCH", "/content-api/articles/64/de", status=200, json={})

    result = runner.invoke(cli.app, ["commenting", "set", "64", "de", "locked"])

    assert result.exit_code == 0, result.output
    assert "Locked" in result.output
    assert server.body(server.sent("PATCH")[0]) == {"comments_enabled": 1, "comments_locked": 1}


def test_commenting_set_failure_keeps_previous_value(server):
    server.on("GET", "/content-api/articles/64/de", json={"comments_enabled": "0", "comments_locked": "0"})
    server.on("PATCH", "/content-api/articles/64/de", status=403, text="Forbidden")

    result = runner.invoke(cli.app, ["commenting", "set", "64", "de", "enabled"])

    assert result.exit_code == 1
    assert "Kept previous value: Disabled" in result.output


def test_images_upload(server, tmp_path):
    server.on(
        "POST",
        "/content-api/images",
        handler=lambda request: httpx.Response(201, headers={"X-Location": "http://newscoop.test/content-api/images/77"}),
    )
    picture = tmp_path / "pixel.gif"
    picture.write_bytes(b"GIF89a")

    result = runner.invoke(cli.app, ["images", "upload", str(picture), "--photographer", "John Doe"])

    assert result.exit_code == 0, result.output
    assert "Uploaded image 77" in result.output
    assert b'filename="pixel.gif"' in server.requests[0].content


def test_images_describe(server):
    server.on("POST", "/content-api/images/5", json={})

    result = runner.invoke(cli.app, ["images", "describe", "5", "new caption"])

    assert result.exit_code == 0, result.output
    assert server.requests[0].url.params["_method"] == "PATCH"
