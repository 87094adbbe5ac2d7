# run_dev.py
"""
Local development launcher for FastAPI.
Host, port and reload come from Settings (HOST, PORT, RELOAD in .env.dev).
"""

import uvicorn

from zenpath.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "zenpath.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
