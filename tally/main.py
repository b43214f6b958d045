# tally/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tally.core.config import settings
from tally.core.init_db import init_db
from tally.core.logging_config import configure_logging
from tally.api import imports, materials, orders, products
from tally.api.errors import register_exception_handlers
import tally.models  # Implicitly registers models

logger = logging.getLogger(__name__)

app = FastAPI(title="Tally Fulfillment API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
async def startup():
    configure_logging()
    await init_db()
    logger.info("Tally API started")


app.include_router(materials.router)
app.include_router(products.router)
app.include_router(orders.router)
app.include_router(imports.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
