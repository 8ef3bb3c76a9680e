"""
Gateway API entrypoint.

Serves:
- /llm-endpoint: chat invocation
- /test-endpoint: model connectivity test

Can be run as a module:
  python -m llm_gateway.api.app --port 8000
"""

import argparse
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI

from llm_gateway.api.routes import router
from llm_gateway.config.settings import settings


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="LLM Gateway",
        description="Routes workflow LLM requests to OpenAI or Ollama backends",
        version="1.0.0",
    )
    app.include_router(router)
    return app


app = create_app()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the LLM gateway HTTP server")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    args = parser.parse_args(argv)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
