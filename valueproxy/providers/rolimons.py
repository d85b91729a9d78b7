from __future__ import annotations

import logging

import httpx

from ..config import Settings, settings as default_settings
from ..models import PlayerPage
from ..utils.logging import setup_logging

setup_logging()
log = logging.getLogger("valueproxy.providers.rolimons")


async def fetch_player_page(user_id: str, cfg: Settings | None = None) -> PlayerPage:
    """
    GET the public profile page. Any HTTP status is returned as-is;
    transport errors and timeouts raise httpx.HTTPError.
    """
    cfg = cfg or default_settings
    url = cfg.profile_url_template.format(user_id=user_id)
    log.info("fetch profile: %s", url)
    async with httpx.AsyncClient(
        timeout=cfg.http_timeout,
        follow_redirects=True,
        headers={"User-Agent": cfg.user_agent},
    ) as client:
        r = await client.get(url)
    return PlayerPage(status=r.status_code, url=url, html=r.text, headers=dict(r.headers))
