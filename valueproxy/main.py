# valueproxy/main.py
from __future__ import annotations
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .providers.rolimons import fetch_player_page
from .service import Fetch, UpstreamError, estimate_value
from .state.cache import ValueCache, cache_key
from .utils.logging import setup_logging

setup_logging()
log = logging.getLogger("valueproxy.main")

def _flag(v: Optional[str]) -> bool:
    return v in ("1", "true")

def create_app(settings: Settings | None = None, fetch: Fetch | None = None,
               store: ValueCache | None = None) -> FastAPI:
    cfg = settings or default_settings
    app = FastAPI(title="avatar value proxy")
    app.state.settings = cfg
    app.state.store = store if store is not None else ValueCache(ttl=cfg.cache_ttl)
    if fetch is None:
        async def fetch(user_id: str):
            return await fetch_player_page(user_id, cfg)
    app.state.fetch = fetch

    @app.get("/")
    async def alive():
        return {"ok": True, "msg": "avatar value proxy alive"}

    @app.get("/clearCache")
    async def clear_cache(request: Request, user_id: Optional[str] = Query(None, alias="userId")):
        if not user_id:
            return JSONResponse({"error": "Missing userId"}, status_code=400)
        key = cache_key(user_id)
        if request.app.state.store.delete(key):
            log.info("cleared %s", key)
        return {"ok": True, "cleared": key}

    @app.get("/avatarValue")
    async def avatar_value(
        request: Request,
        user_id: Optional[str] = Query(None, alias="userId"),
        nocache: Optional[str] = None,
        debug: Optional[str] = None,
    ):
        if not user_id:
            return JSONResponse({"error": "Missing userId"}, status_code=400)
        state = request.app.state
        try:
            res = await estimate_value(
                user_id,
                fetch=state.fetch,
                store=state.store,
                nocache=_flag(nocache),
                debug_items_limit=state.settings.debug_items_limit,
            )
        except UpstreamError as e:
            return JSONResponse(e.to_dict(), status_code=502)

        out = {"totalValue": res.total, "source": res.source}
        if _flag(debug) and res.diagnostics is not None:
            out["debug"] = res.diagnostics
        return out

    return app

app = create_app()

def main():
    log.info("avatar value proxy listening on %s:%s", default_settings.host, default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_config=None)

if __name__ == "__main__":
    main()
