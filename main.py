"""
Canvas Scenery Main Application

This is the entry point for the Canvas Scenery service.
It wires together the scene generator and the API routes.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes_scene import setup_scene_routes
from config import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_PORT, HOST, PRODUCTION_PORT, SCENE_CONFIG_PATH
from scene_engine import SceneConfig, SceneGenerator

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def load_scene_config(path: str = SCENE_CONFIG_PATH) -> SceneConfig:
    """Load the scene config from YAML if configured, else use defaults"""
    if path and os.path.exists(path):
        logging.info(f"Loading scene config from {path}")
        config = SceneConfig.from_yaml(path)
    else:
        if path:
            logging.warning(f"Scene config not found: {path}, using defaults")
        config = SceneConfig(width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT)
    return config


def create_app(config: SceneConfig = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Scene configuration. If None, loads it from SCENERY_CONFIG.
    """
    generator = SceneGenerator(config or load_scene_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.info("Starting Canvas Scenery application...")
        logging.info(f"Default canvas {generator.config.width}x{generator.config.height}, "
                     f"family={generator.config.family}")
        yield
        logging.info("Canvas Scenery application shut down")

    app = FastAPI(
        title="Canvas Scenery",
        description="Procedural background scenery generation",
        version="1.0.0",
        lifespan=lifespan
    )
    app.include_router(setup_scene_routes(generator))
    return app


app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Canvas Scenery - Procedural background server')
    parser.add_argument('--production', action='store_true',
                        help='Run in production mode (port 80)')
    parser.add_argument('--port', type=int, default=None,
                        help='Custom port (overrides --production)')
    args = parser.parse_args()

    # Determine port
    if args.port:
        port = args.port
    elif args.production:
        port = PRODUCTION_PORT
    else:
        port = DEFAULT_PORT

    uvicorn.run(
        "main:app",
        host=HOST,
        port=port,
        log_level="info",
        reload=False
    )
