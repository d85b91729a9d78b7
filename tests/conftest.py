import pytest

from valueproxy.models import PlayerPage

PROFILE_HTML = """<html><body>
<div id="inventorylimiteds">
  <div class="card"><span class="item-name">Dominus</span><span class="text-light text-truncate">2,500</span></div>
</div>
<script id="__NEXT_DATA__" type="application/json">{"items":[{"name":"X","robuxValue":300}]}</script>
</body></html>"""


class FakeFetch:
    """Async stand-in for the profile fetch that counts calls."""

    def __init__(self, status=200, html=PROFILE_HTML, exc=None):
        self.status = status
        self.html = html
        self.exc = exc
        self.calls = []

    async def __call__(self, user_id):
        self.calls.append(user_id)
        if self.exc is not None:
            raise self.exc
        return PlayerPage(status=self.status, url=f"https://example.test/player/{user_id}", html=self.html)


@pytest.fixture
def profile_html():
    return PROFILE_HTML


@pytest.fixture
def fake_fetch():
    return FakeFetch()
