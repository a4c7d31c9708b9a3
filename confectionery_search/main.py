# confectionery_search/main.py
import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.store import CatalogViewModel, Fetcher
from .config import CatalogSettings, configure_logging


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[CatalogSettings] = None,
    fetcher: Optional[Fetcher] = None,
    fetch_on_startup: bool = True,
) -> FastAPI:
    """Build the service with its own screen state.

    The first catalogue fetch is started in the background as soon as
    the application is up, like a screen loading on appear.
    """
    configure_logging()
    view_model = CatalogViewModel(fetcher=fetcher, settings=settings)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if fetch_on_startup:
            logger.info("Starting initial catalogue fetch")
            task = asyncio.create_task(view_model.start_fetch())
        yield
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    app = FastAPI(
        title="Confectionery Search",
        description=(
            "Recherche dans le catalogue public de confiseries Toriko : "
            "liste filtrable et ouverture de la page de détail."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.view_model = view_model
    app.include_router(catalog_router)

    # 🔹 Vérification rapide que le service répond
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Confectionery Search live 🍬"}

    return app


app = create_app()
