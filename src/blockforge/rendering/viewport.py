"""
Viewport Adapter

Turns the scene store contents and editor session into drawables for the
renderer backend, and reports pointer picks back to the tool controller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from pyrr import Matrix44

from ..config.settings import (
    ACTOR_ARM_COLOR,
    ACTOR_BODY_COLOR,
    ACTOR_HEAD_COLOR,
    ACTOR_LEG_COLOR,
    SELECTION_EMISSIVE,
    SELECTION_EMISSIVE_INTENSITY,
    SPAWN_EMISSIVE,
    SPAWN_EMISSIVE_INTENSITY,
    SPAWN_OPACITY,
    WINDOW_SIZE,
)
from ..core.scene import SceneObject, hex_to_rgb
from ..input.object_selector import ObjectSelector

if TYPE_CHECKING:
    from ..core.camera import Camera
    from ..core.editor_session import EditorSession
    from ..tools.scene_store import SceneStore


logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]

CUBE = "cube"
SPHERE = "sphere"

# Actor parts: (shape, local offset, size, colour). Spheres use size[0] as radius.
ACTOR_PARTS = (
    (CUBE, (0.0, 0.0, 0.0), (1.0, 2.0, 1.0), ACTOR_BODY_COLOR),
    (SPHERE, (0.0, 1.25, 0.0), (0.5, 0.5, 0.5), ACTOR_HEAD_COLOR),
    (CUBE, (-0.3, 0.0, 0.0), (0.3, 1.5, 0.3), ACTOR_ARM_COLOR),
    (CUBE, (0.3, 0.0, 0.0), (0.3, 1.5, 0.3), ACTOR_ARM_COLOR),
    (CUBE, (-0.25, -0.75, 0.0), (0.3, 1.0, 0.3), ACTOR_LEG_COLOR),
    (CUBE, (0.25, -0.75, 0.0), (0.3, 1.0, 0.3), ACTOR_LEG_COLOR),
)


@dataclass(eq=False)
class Drawable:
    """
    One primitive handed to the renderer.

    Attributes:
        shape: "cube" (unit cube) or "sphere" (unit radius)
        model_matrix: World transform
        color: Base RGB colour in [0, 1]
        opacity: 1.0 = opaque
        emissive: Emissive RGB tint
        emissive_intensity: Strength of the emissive tint
        selected: Draw the selection outline
        object_id: Scene object id, None for actor parts
    """

    shape: str
    model_matrix: Matrix44
    color: Color
    opacity: float = 1.0
    emissive: Color = (0.0, 0.0, 0.0)
    emissive_intensity: float = 0.0
    selected: bool = False
    object_id: Optional[int] = None


def object_drawable(obj: SceneObject, selected: bool) -> Drawable:
    """Drawable for one scene object with its selected/spawn treatment."""
    drawable = Drawable(
        shape=CUBE,
        model_matrix=obj.get_model_matrix(),
        color=hex_to_rgb(obj.color),
        selected=selected,
        object_id=obj.id,
    )
    if obj.is_spawn_point:
        drawable.opacity = SPAWN_OPACITY
        drawable.emissive = SPAWN_EMISSIVE
        drawable.emissive_intensity = SPAWN_EMISSIVE_INTENSITY
    if selected:
        drawable.emissive = SELECTION_EMISSIVE
        drawable.emissive_intensity = SELECTION_EMISSIVE_INTENSITY
    return drawable


def actor_drawables(position: Sequence[float]) -> List[Drawable]:
    """Composite actor (body, head, arms, legs) centred at ``position``."""
    drawables = []
    for shape, offset, size, color in ACTOR_PARTS:
        translation = Matrix44.from_translation([p + o for p, o in zip(position, offset)])
        model = translation * Matrix44.from_scale(size)
        drawables.append(Drawable(shape=shape, model_matrix=model, color=hex_to_rgb(color)))
    return drawables


class ViewportAdapter:
    """
    Bridges the editor core and the renderer.

    Does not decide selection semantics: picks are forwarded to ``on_pick``
    as an object id or None.
    """

    def __init__(
        self,
        camera: "Camera",
        on_pick: Optional[Callable[[Optional[int]], None]] = None,
        selector: Optional[ObjectSelector] = None,
        viewport_size: Tuple[int, int] = WINDOW_SIZE,
    ):
        """
        Initialize viewport adapter.

        Args:
            camera: Camera used for pick rays
            on_pick: Receives the picked id (or None) for every pick
            selector: Raycaster (default: new ObjectSelector)
            viewport_size: Viewport width and height in pixels
        """
        self.camera = camera
        self.on_pick = on_pick
        self.selector = selector or ObjectSelector()
        self.viewport_size = viewport_size

        # Objects from the last build, used as pick targets
        self._pick_targets: Tuple[SceneObject, ...] = ()
        self._picking_enabled = True

    def resize(self, width: int, height: int):
        self.viewport_size = (max(1, width), max(1, height))

    def build_drawables(
        self,
        session: "EditorSession",
        store: "SceneStore",
        actor_position: Optional[Sequence[float]] = None,
    ) -> List[Drawable]:
        """
        Build this frame's drawables.

        Args:
            session: Current editor session
            store: Scene store with the live objects
            actor_position: Actor centre while playing (None when not running)

        Returns:
            One drawable per scene object, plus the actor parts while playing
        """
        objects = store.objects
        self._pick_targets = objects
        self._picking_enabled = not session.is_playing

        selection = None if session.is_playing else session.selection
        drawables = [object_drawable(obj, obj.id == selection) for obj in objects]

        if session.is_playing and actor_position is not None:
            drawables.extend(actor_drawables(actor_position))

        return drawables

    def report_pick(self, screen_x: float, screen_y: float) -> Optional[int]:
        """
        Raycast a pointer position and forward the result to ``on_pick``.

        Args:
            screen_x: Pointer x in pixels (0 = left)
            screen_y: Pointer y in pixels (0 = top)

        Returns:
            Picked object id or None
        """
        if not self._picking_enabled:
            return None

        width, height = self.viewport_size
        picked = self.selector.pick(self.camera, self._pick_targets, screen_x, screen_y, width, height)
        logger.debug("Pick at (%.0f, %.0f) -> %s", screen_x, screen_y, picked)

        if self.on_pick is not None:
            self.on_pick(picked)
        return picked
