"""
Scene Renderer

Draws viewport drawables with moderngl: lit unit cubes and spheres, translucent
spawn points, and a wireframe outline around the selected object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import moderngl
import numpy as np
from moderngl_window import geometry
from pyrr import Matrix44

from ..config.settings import CLEAR_COLOR, SELECTION_OUTLINE_COLOR, SELECTION_OUTLINE_SCALE
from .viewport import CUBE, SPHERE

if TYPE_CHECKING:
    from ..core.camera import Camera
    from .viewport import Drawable


class SceneRenderer:
    """Forward renderer for viewport drawables."""

    VERTEX_SHADER = """
    #version 410

    in vec3 in_position;
    in vec3 in_normal;

    uniform mat4 model;
    uniform mat4 view;
    uniform mat4 projection;

    out vec3 v_normal;

    void main() {
        v_normal = mat3(transpose(inverse(model))) * in_normal;
        gl_Position = projection * view * model * vec4(in_position, 1.0);
    }
    """

    FRAGMENT_SHADER = """
    #version 410

    in vec3 v_normal;

    uniform vec3 color;
    uniform float opacity;
    uniform vec3 emissive;
    uniform float emissive_intensity;
    uniform vec3 light_dir;
    uniform bool unlit;

    out vec4 out_color;

    void main() {
        if (unlit) {
            out_color = vec4(color, opacity);
            return;
        }
        float diffuse = max(dot(normalize(v_normal), -light_dir), 0.0);
        vec3 lit = color * (0.35 + 0.65 * diffuse) + emissive * emissive_intensity;
        out_color = vec4(lit, opacity);
    }
    """

    def __init__(self, ctx: moderngl.Context):
        """
        Initialize scene renderer.

        Args:
            ctx: ModernGL context
        """
        self.ctx = ctx
        self.program = self.ctx.program(
            vertex_shader=self.VERTEX_SHADER,
            fragment_shader=self.FRAGMENT_SHADER,
        )

        self._geometry = {
            CUBE: geometry.cube(size=(1.0, 1.0, 1.0), uvs=False, name="unit_cube"),
            SPHERE: geometry.sphere(radius=1.0, sectors=16, rings=16, uvs=False, name="unit_sphere"),
        }

        light_dir = np.array([-0.5, -1.0, -0.3], dtype="f4")
        self.light_dir = light_dir / np.linalg.norm(light_dir)
        self.outline_scale = Matrix44.from_scale([SELECTION_OUTLINE_SCALE] * 3)

    def render(
        self,
        camera: "Camera",
        drawables: Iterable["Drawable"],
        viewport: Tuple[int, int, int, int],
    ) -> None:
        """
        Render one frame.

        Args:
            camera: Camera providing view and projection
            drawables: Drawables from the viewport adapter
            viewport: (x, y, width, height)
        """
        _, _, width, height = viewport
        aspect_ratio = width / height if height > 0 else 1.0

        self.ctx.screen.use()
        self.ctx.viewport = viewport
        self.ctx.clear(*CLEAR_COLOR)
        self.ctx.enable(moderngl.DEPTH_TEST)

        self.program["view"].write(camera.get_view_matrix().astype("f4").tobytes())
        self.program["projection"].write(camera.get_projection_matrix(aspect_ratio).astype("f4").tobytes())
        self.program["light_dir"].write(self.light_dir.tobytes())

        drawables = list(drawables)
        opaque = [d for d in drawables if d.opacity >= 1.0]
        translucent = [d for d in drawables if d.opacity < 1.0]

        self.ctx.disable(moderngl.BLEND)
        self.ctx.depth_mask = True
        for drawable in opaque:
            self._draw(drawable)

        # Translucent pass: blend over opaque geometry without writing depth
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        self.ctx.depth_mask = False
        for drawable in translucent:
            self._draw(drawable)
        self.ctx.depth_mask = True
        self.ctx.disable(moderngl.BLEND)

        for drawable in drawables:
            if drawable.selected:
                self._draw_outline(drawable)

    def _draw(self, drawable: "Drawable") -> None:
        self.program["unlit"].value = False
        self.program["model"].write(np.asarray(drawable.model_matrix, dtype="f4").tobytes())
        self.program["color"].value = tuple(drawable.color)
        self.program["opacity"].value = drawable.opacity
        self.program["emissive"].value = tuple(drawable.emissive)
        self.program["emissive_intensity"].value = drawable.emissive_intensity
        self._geometry[drawable.shape].render(self.program)

    def _draw_outline(self, drawable: "Drawable") -> None:
        model = drawable.model_matrix * self.outline_scale
        self.program["unlit"].value = True
        self.program["model"].write(np.asarray(model, dtype="f4").tobytes())
        self.program["color"].value = SELECTION_OUTLINE_COLOR
        self.program["opacity"].value = 1.0

        previous_wireframe = getattr(self.ctx, "wireframe", False)
        self.ctx.wireframe = True
        self._geometry[drawable.shape].render(self.program)
        self.ctx.wireframe = previous_wireframe

    def release(self) -> None:
        for vao in self._geometry.values():
            vao.release()
        self.program.release()
