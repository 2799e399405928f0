import uvicorn

from ethwatch.config import settings

uvicorn.run("ethwatch.main:app", host=settings.host, port=settings.port)
