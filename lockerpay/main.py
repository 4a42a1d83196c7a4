import logging

import yaml
from fastapi import FastAPI
from lockerpay.infrastructure.config import settings
from lockerpay.infrastructure.database import Base, engine
from lockerpay.presentation.routers import router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("lockerpay")

app = FastAPI()


# Use the contractual schema
def custom_openapi():
    with open(settings.openapi_path) as f:
        return yaml.safe_load(f)


@app.on_event("startup")
def _check_provider_settings() -> None:
    """
    Without a callback secret every provider callback is rejected with 401
    """
    if not settings.xendit_secret_api_key:
        logger.warning("XENDIT_SECRET_API_KEY is not set; payment callbacks will be rejected")


app.openapi = custom_openapi
Base.metadata.create_all(bind=engine)
app.include_router(router)
