"""Root page and health check. Included after the /api routers."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse, JSONResponse

from app.config import Settings
from app.infrastructure.database import Database
from app.interfaces.deps import get_app_settings, get_database

PROJECT_ROOT = Path(__file__).resolve().parents[3]

router = APIRouter(tags=["Frontend"])


def resolve_static_dir(settings: Settings) -> Path:
    static_dir = Path(settings.STATIC_DIR)
    if not static_dir.is_absolute():
        static_dir = PROJECT_ROOT / static_dir
    return static_dir


@router.get("/", include_in_schema=False)
async def index(settings: Settings = Depends(get_app_settings)):
    page = resolve_static_dir(settings) / "index.html"
    if not page.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Página principal no disponible.")
    return FileResponse(page, media_type="text/html")


@router.get("/health")
async def health(database: Database = Depends(get_database)):
    if await database.ping():
        return {"status": "healthy"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "unreachable"},
    )
