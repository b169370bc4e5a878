import uvicorn

from shortlink_app.app_factory import create_app
from shortlink_app.config import get_settings
from shortlink_app.logging_config import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    log_file=settings.log_file,
    json_format=settings.log_json,
)

# Create FastAPI app
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
