from urllib.parse import urljoin

import pytest

from smoke.core.config import load_settings
from smoke.core.nav import app_path
from smoke.core.playwright_factory import context_base_url


@pytest.mark.parametrize(
    "base_url",
    ["https://shop.example.com/reseller", "https://shop.example.com/reseller/"],
    ids=["bare", "trailing-slash"],
)
def test_base_path_survives_relative_navigation(tmp_path, monkeypatch, base_url):
    monkeypatch.setenv("SMOKE_BASE_URL", base_url)
    settings = load_settings(tmp_path)

    base = context_base_url(settings.base_url)

    assert base == "https://shop.example.com/reseller/"
    assert urljoin(base, app_path("/dashboard")) == "https://shop.example.com/reseller/dashboard"
    assert urljoin(base, app_path(settings.login_path)).startswith("https://shop.example.com/reseller/")


def test_context_base_url_without_base():
    assert context_base_url("") is None


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/customers", "customers"),
        ("customers/42", "customers/42"),
        ("https://status.example.com/health", "https://status.example.com/health"),
        ("//cdn.example.com/app.js", "//cdn.example.com/app.js"),
    ],
)
def test_app_path(path, expected):
    assert app_path(path) == expected
