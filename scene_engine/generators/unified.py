"""
Unified Scene Generator

High-level generator that runs one scene build: reserve space for the motto
or logo, generate the requested family of layers and hand the result to the
renderer.
"""

from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
from dataclasses import dataclass, field
from datetime import datetime
from PIL import Image
import logging
import random

from ..config import MAX_SCATTER_ELEMENTS, SCENE_FAMILIES, ConfigPresets, SceneConfig
from ..components import LogoComponent, MottoComponent
from ..geometry import validate_canvas
from ..layers import ColorSample, SceneLayer
from ..layout import OverlayComponent, OverlayPlacement
from ..palette import Palette
from ..reservation import TextReservation
from ..sampler import Sampler
from .clouds import clouds
from .scatter import blobs, ovals
from .trees import trees
from .waves import waves

if TYPE_CHECKING:
    from ..renderer import SceneRenderer


@dataclass
class Scene:
    """Everything one scene build produced"""
    width: float
    height: float
    family: str
    seed: int
    dark: bool
    background: ColorSample
    foreground: ColorSample
    layers: List[SceneLayer] = field(default_factory=list)
    overlay: Optional[OverlayPlacement] = None
    reservation: TextReservation = field(default_factory=TextReservation)


@dataclass
class GenerationContext:
    """Per-build state threaded through the family generators"""
    width: float
    height: float
    sampler: Sampler
    palette: Palette
    reservation: TextReservation
    dark: bool = True
    scatter_limit: int = MAX_SCATTER_ELEMENTS
    when: Optional[datetime] = None


def _waves(ctx: GenerationContext) -> List[SceneLayer]:
    return [waves(ctx.width, ctx.height, ctx.sampler, ctx.palette, ctx.dark)]


def _blobs(ctx: GenerationContext) -> List[SceneLayer]:
    return blobs(ctx.width, ctx.height, ctx.sampler, ctx.palette, ctx.reservation,
                 ctx.dark, ctx.scatter_limit)


def _ovals(ctx: GenerationContext) -> List[SceneLayer]:
    return ovals(ctx.width, ctx.height, ctx.sampler, ctx.palette, ctx.reservation,
                 ctx.dark, ctx.scatter_limit)


def _clouds(ctx: GenerationContext) -> List[SceneLayer]:
    moon_layer, cloud_layers = clouds(ctx.width, ctx.height, ctx.sampler, ctx.palette,
                                      ctx.dark, ctx.when)
    return [moon_layer] + cloud_layers


def _trees(ctx: GenerationContext) -> List[SceneLayer]:
    return trees(ctx.width, ctx.height, ctx.sampler, ctx.palette, ctx.dark)


FAMILY_GENERATORS: Dict[str, Callable[[GenerationContext], List[SceneLayer]]] = {
    'waves': _waves,
    'blobs': _blobs,
    'ovals': _ovals,
    'clouds': _clouds,
    'trees': _trees,
}


def generate_layers(family: str, ctx: GenerationContext) -> List[SceneLayer]:
    """
    Generate the layers of one scene family.

    Raises:
        ValueError: If the family is unknown
    """
    generator = FAMILY_GENERATORS.get(family)
    if generator is None:
        raise ValueError(f"Unknown scene family {family!r}, expected one of {SCENE_FAMILIES}")
    return generator(ctx)


class SceneGenerator:
    """
    Unified generator for building scenes and rendering them to images.
    """

    def __init__(self, config: Optional[SceneConfig] = None, palette: Optional[Palette] = None):
        """
        Initialize the scene generator.

        Args:
            config: Scene configuration. If None, uses default config.
            palette: Color provider. If None, uses the built-in named colors.
        """
        self.config = config or SceneConfig()
        self.palette = palette or Palette()

        # Validate configuration
        issues = self.config.validate()
        if issues:
            logging.warning(f"Scene configuration issues: {issues}")

    def _overlay_component(self, config: SceneConfig) -> Optional[OverlayComponent]:
        if config.motto_text.strip():
            return MottoComponent()
        if config.logo_path:
            return LogoComponent()
        return None

    def _reserve_overlay(self, width: float, height: float, config: SceneConfig,
                         reservation: TextReservation) -> Optional[OverlayPlacement]:
        """Place the overlay and install the reservation; failures omit the overlay"""
        component = self._overlay_component(config)
        if component is None:
            return None
        try:
            placement = component.place(width, height, config)
        except Exception as e:
            logging.error(f"Failed to place overlay {component.component_id}: {e}")
            return None
        if placement is None:
            logging.warning(f"Overlay {component.component_id} omitted from scene")
            return None
        reservation.reserve(placement.rect)
        return placement

    def build(self, width: Optional[float] = None, height: Optional[float] = None,
              family: Optional[str] = None, seed: Optional[int] = None,
              when: Optional[datetime] = None,
              config_override: Optional[SceneConfig] = None) -> Scene:
        """
        Run one scene build.

        Args:
            width: Canvas width in pixels (config default if None)
            height: Canvas height in pixels (config default if None)
            family: Scene family or "random" (config default if None)
            seed: Seed for this build; a fresh one is drawn if neither this
                nor the config sets one
            when: Moment used for the moon phase (now if None)
            config_override: Optional config override for this build

        Returns:
            Scene with its layers and overlay placement

        Raises:
            ValueError: If the canvas size or family is invalid
        """
        config = config_override or self.config
        width = config.width if width is None else width
        height = config.height if height is None else height
        validate_canvas(width, height)

        family = family or config.family
        if family != "random" and family not in FAMILY_GENERATORS:
            raise ValueError(f"Unknown scene family {family!r}, expected one of {SCENE_FAMILIES}")

        if seed is None:
            seed = config.seed if config.seed is not None else random.getrandbits(32)
        sampler = Sampler(seed)
        if family == "random":
            family = sampler.choice(list(SCENE_FAMILIES))

        dark = config.dark_background
        reservation = TextReservation()
        overlay = self._reserve_overlay(width, height, config, reservation)

        ctx = GenerationContext(width=width, height=height, sampler=sampler, palette=self.palette,
                                reservation=reservation, dark=dark,
                                scatter_limit=min(config.scatter_limit, MAX_SCATTER_ELEMENTS), when=when)
        try:
            layers = generate_layers(family, ctx)
        except Exception as e:
            logging.error(f"Failed to generate {family} layers: {e}")
            layers = []

        logging.info(f"Built {family} scene {width}x{height} (seed={seed}): "
                     f"{len(layers)} layers, reservation={reservation}")

        return Scene(
            width=width,
            height=height,
            family=family,
            seed=seed,
            dark=dark,
            background=self.palette.background(dark),
            foreground=self.palette.foreground(dark),
            layers=layers,
            overlay=overlay,
            reservation=reservation
        )

    def create_background(self, width: Optional[int] = None, height: Optional[int] = None,
                          family: Optional[str] = None, seed: Optional[int] = None,
                          renderer: Optional['SceneRenderer'] = None) -> Image.Image:
        """
        Build and render a scene in one go.

        Returns:
            PIL Image with the rendered scene, or a plain background if the
            build fails
        """
        from ..renderer import SceneRenderer

        renderer = renderer or SceneRenderer()
        width = width or self.config.width
        height = height or self.config.height
        try:
            scene = self.build(width, height, family=family, seed=seed)
            return renderer.render(scene, self.config)
        except Exception as e:
            logging.error(f"Failed to render scene: {e}")
            return self._create_fallback_background(width, height)

    def _create_fallback_background(self, width: int, height: int) -> Image.Image:
        """Create a plain background when building fails"""
        validate_canvas(width, height)
        color = self.palette.background(self.config.dark_background)
        return Image.new('RGBA', (int(width), int(height)), color.rgba255())

    def get_layout_info(self, width: Optional[int] = None, height: Optional[int] = None) -> Dict[str, Any]:
        """
        Get overlay placement and reservation details for debugging.
        """
        width = width or self.config.width
        height = height or self.config.height
        validate_canvas(width, height)
        reservation = TextReservation()
        overlay = self._reserve_overlay(width, height, self.config, reservation)

        return {
            'canvas_size': (width, height),
            'overlay': None if overlay is None else {
                'id': overlay.component_id,
                'position': (overlay.x, overlay.y),
                'size': (overlay.width, overlay.height),
            },
            'reservation': None if reservation.is_empty else reservation.rect.as_tuple(),
            'families': list(SCENE_FAMILIES),
            'config': self.config.to_dict(),
        }

    def update_config(self, **kwargs) -> None:
        """
        Update configuration with new values.

        Args:
            **kwargs: Configuration parameters to update
        """
        config_dict = self.config.to_dict()
        config_dict.update(kwargs)
        self.config = SceneConfig.from_dict(config_dict)

        # Validate updated configuration
        issues = self.config.validate()
        if issues:
            logging.warning(f"Updated scene configuration issues: {issues}")

    def reset_config(self, preset: str = "default") -> None:
        """
        Reset configuration to a preset.

        Args:
            preset: Preset name ("default", "light", "motto", "minimal")
        """
        self.config = ConfigPresets.get(preset)
