"""
Tests for the profile page fetch and the debug dump script
"""

import asyncio
import json

import httpx

from conftest import FakeFetch
from valueproxy.config import Settings
from valueproxy.providers import rolimons

import debug_dump


def _patch_transport(monkeypatch, handler):
    real = httpx.AsyncClient

    def factory(**kw):
        return real(transport=httpx.MockTransport(handler), **kw)

    monkeypatch.setattr(rolimons.httpx, "AsyncClient", factory)


def test_fetch_returns_any_status(monkeypatch):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(503, text="busy")

    _patch_transport(monkeypatch, handler)
    cfg = Settings(user_agent="test-agent", profile_url_template="https://example.test/p/{user_id}")
    page = asyncio.run(rolimons.fetch_player_page("12", cfg))
    assert page.status == 503
    assert page.html == "busy"
    assert page.url == "https://example.test/p/12"
    assert seen == {"url": "https://example.test/p/12", "ua": "test-agent"}


def test_debug_dump_writes_files(tmp_path, profile_html):
    base, report = asyncio.run(debug_dump.dump("9", fetch=FakeFetch(), out_dir=tmp_path))
    assert report["totalValue"] == 2800
    assert (tmp_path / f"{base.name}.html").read_text("utf-8") == profile_html
    saved = json.loads((tmp_path / f"{base.name}_records.json").read_text("utf-8"))
    assert [r["value"] for r in saved["records"]] == [2500, 300]
