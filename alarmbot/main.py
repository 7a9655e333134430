"""alarmbot - forwards matching channel posts to Telegram chats."""

import argparse
import asyncio
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI
from loguru import logger

from alarmbot.config import Settings, SourceConfig, load_sources, settings
from alarmbot.engine import AlarmEngine
from alarmbot.errors import ConfigError


def create_app(engine: AlarmEngine) -> FastAPI:
    """Status API around a running engine."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Start engine in background
        task = asyncio.create_task(engine.run())
        yield
        # Shutdown
        await engine.stop()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    app = FastAPI(
        title="alarmbot",
        description="Watches public Telegram channels and forwards matching posts",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/api/status")
    async def get_status():
        """Get per-consumer status."""
        return {
            "status": "running" if engine.running else "stopped",
            "consumers": [s.model_dump(mode="json") for s in engine.status()],
        }

    @app.get("/api/sources")
    async def get_sources():
        """Get configured sources."""
        return [s.model_dump() for s in engine.sources]

    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="alarmbot")
    parser.add_argument("-t", "--token", default=None, help="token for access to telegram bot")
    parser.add_argument("--config", default=None, help="path to the sources JSON file")
    parser.add_argument("--headless", action="store_true", help="run without the status API")
    return parser.parse_args(argv)


def load_runtime(args: argparse.Namespace, base: Settings = settings) -> tuple[Settings, List[SourceConfig]]:
    """Apply command line overrides and load the sources. Raises ConfigError."""
    telegram = base.telegram
    if args.token:
        telegram = telegram.model_copy(update={"bot_token": args.token})
    if not telegram.bot_token:
        raise ConfigError("token is not specified")

    sources_path = Path(args.config) if args.config else base.sources_path
    runtime = base.model_copy(update={"telegram": telegram, "sources_path": sources_path})
    return runtime, load_sources(sources_path)


def main(argv: Optional[List[str]] = None) -> None:
    """Run the service."""
    args = parse_args(argv)
    try:
        runtime, sources = load_runtime(args)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    engine = AlarmEngine(runtime, sources)
    logger.info(f"service started with {len(sources)} sources")

    if args.headless or not runtime.server.enabled:
        asyncio.run(engine.run())
        return

    import uvicorn

    logger.info(f"Status API available at http://{runtime.server.host}:{runtime.server.port}/api/status")
    uvicorn.run(create_app(engine), host=runtime.server.host, port=runtime.server.port)


if __name__ == "__main__":
    main()
