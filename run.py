import uvicorn

from docchat.core.config import load_settings

if __name__ == "__main__":
    # Fails fast (exit code 1) when required configuration is missing
    settings = load_settings()

    uvicorn.run(
        "docchat.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info" if settings.environment == "development" else "warning",
    )
