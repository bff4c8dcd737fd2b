import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from storefront.config import Config
from storefront.db.database import db
from storefront.routers import auth, health, products, users
from storefront.exceptions import AppException, app_exception_handler, generic_exception_handler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.connect()
    if Config.DB_SYNC:
        await db.create_all()
    yield
    await db.disconnect()


app = FastAPI(
    title="Storefront API",
    version="1.0.0",
    description="Users, product catalog, product images and likes",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(products.router)
