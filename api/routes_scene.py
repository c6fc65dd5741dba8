"""
Scene Routes

Generates scene geometry and rendered backgrounds on request.
"""
import io
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Response

from models.request_models import SceneRequest
from scene_engine import SCENE_FAMILIES, SceneRenderer
from scene_engine.generators import moon_phase
from utils.route_helpers import config_for_request, scene_operation

if TYPE_CHECKING:
    from scene_engine import Scene, SceneGenerator


def scene_payload(scene: 'Scene') -> dict:
    """JSON-ready description of a built scene"""
    return {
        "family": scene.family,
        "seed": scene.seed,
        "width": scene.width,
        "height": scene.height,
        "dark": scene.dark,
        "background": asdict(scene.background),
        "overlay": asdict(scene.overlay) if scene.overlay else None,
        "reservation": None if scene.reservation.is_empty else asdict(scene.reservation.rect),
        "layers": [asdict(layer) for layer in scene.layers],
    }


def setup_scene_routes(generator: 'SceneGenerator') -> APIRouter:
    """
    Setup scene routes with dependency injection

    Args:
        generator: SceneGenerator instance holding the configured defaults

    Returns:
        Configured APIRouter
    """
    router = APIRouter()
    renderer = SceneRenderer()

    def build(request: SceneRequest) -> 'Scene':
        config = config_for_request(generator.config, request)
        return generator.build(request.width, request.height, family=request.family,
                               seed=request.seed, config_override=config)

    @router.get("/scene/families")
    async def list_families():
        """List the available scene families"""
        return {"families": list(SCENE_FAMILIES) + ["random"]}

    @router.post("/scene/generate")
    async def generate_scene(request: SceneRequest):
        """Build a scene and return its geometry"""
        logging.info(f"POST /scene/generate: {request.family} {request.width}x{request.height}")
        scene = scene_operation(lambda: build(request), "generate scene")
        return scene_payload(scene)

    @router.post("/scene/render")
    async def render_scene(request: SceneRequest):
        """Build a scene and return it as a PNG image"""
        logging.info(f"POST /scene/render: {request.family} {request.width}x{request.height}")

        def render() -> bytes:
            scene = build(request)
            image = renderer.render(scene, config_for_request(generator.config, request))
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            return buffer.getvalue()

        png = scene_operation(render, "render scene")
        return Response(content=png, media_type="image/png")

    @router.get("/scene/moon")
    async def get_moon_phase():
        """Current moon phase as drawn by the clouds family"""
        position, illumination = moon_phase()
        return {"phase": position, "illumination": illumination}

    @router.get("/scene/layout")
    async def get_layout_info():
        """Overlay placement and reservation for the configured canvas"""
        return scene_operation(generator.get_layout_info, "compute layout")

    return router
