from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from globetrekker.api.deps import AppContext, get_context
from globetrekker.core.database import ping

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def index():
    return "🔥 GlobeTrekker Backend Running Successfully!"


@router.get("/health")
def health(ctx: AppContext = Depends(get_context)):
    if not ping(ctx.engine):
        return JSONResponse(status_code=503, content={"ok": False, "database": "down"})
    return {"ok": True, "database": "up"}
