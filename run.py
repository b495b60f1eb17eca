"""
Development server runner
"""

import uvicorn
from impostor.core.config import settings

if __name__ == "__main__":
    # reload and workers cannot be combined
    if settings.DEBUG:
        uvicorn.run(
            "impostor.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=True,
            access_log=True,
            log_level=settings.LOG_LEVEL.lower()
        )
    else:
        uvicorn.run(
            "impostor.main:app",
            host=settings.HOST,
            port=settings.PORT,
            workers=settings.WORKERS,
            access_log=True,
            log_level=settings.LOG_LEVEL.lower()
        )
