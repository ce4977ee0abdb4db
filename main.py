import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from routes.gallery import router as gallery_router
from routes.health import router as health_router
from routes.products import router as products_router
from services.gallery import GalleryService
from services.json_store import JsonStore
from services.products import ProductService

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"),
                    format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"


@asynccontextmanager
async def lifespan(app: FastAPI):
    data_dir = Path(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))

    # Initialize stores, creating empty collections on first run
    gallery_store = JsonStore(data_dir / "gallery.json")
    products_store = JsonStore(data_dir / "products.json")

    app.state.gallery_service = GalleryService(gallery_store)
    app.state.product_service = ProductService(products_store)

    logger.info("Data stored in %s", data_dir.resolve())
    yield


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Dados incompletos"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Erro interno do servidor", "message": str(exc)})


# Include routers
app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(gallery_router, prefix="/api/gallery", tags=["gallery"])
app.include_router(products_router, prefix="/api/products", tags=["products"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3001")),
    )
