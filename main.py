from fastapi import FastAPI, HTTPException

from supermarkdown import __version__
from supermarkdown.api import create_app

try:
    app = create_app(require_enabled=True)
except RuntimeError:
    app = FastAPI(title="supermarkdown", version=__version__)

    @app.get("/")
    async def api_disabled() -> dict[str, str]:
        raise HTTPException(
            status_code=503,
            detail="Local API disabled. Enable by setting enable_local_api = true under [api] in config.toml",
        )
