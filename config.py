"""
Canvas Scenery Configuration

Central configuration file for server constants and scene defaults.
"""
import os

# Server Configuration
HOST = os.getenv("SCENERY_HOST", "0.0.0.0")
DEFAULT_PORT = 8000
PRODUCTION_PORT = 80

# Canvas defaults
DEFAULT_CANVAS_WIDTH = int(os.getenv("SCENERY_WIDTH", "1920"))
DEFAULT_CANVAS_HEIGHT = int(os.getenv("SCENERY_HEIGHT", "1080"))
MAX_CANVAS_SIDE = 7680  # 8K

# Optional YAML file with SceneConfig fields
SCENE_CONFIG_PATH = os.getenv("SCENERY_CONFIG", "")
