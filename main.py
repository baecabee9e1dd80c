"""
Entry point to run the web app.
"""
import uvicorn

from core import config


if __name__ == "__main__":
    host, port = config.server_bind()
    uvicorn.run("app.api:app", host=host, port=port)
