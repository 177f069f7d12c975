"""
PNG Renderer module for state machine diagrams.

Draws a LayoutResult as a preview image: state circles with their index,
an inner ring on accept states, a chevron in front of the initial state and
every transition as a smoothed spline with an arrowhead and symbol label.
"""

import math
import os
from typing import List, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, STATE_SIZE
from .edge_routing import edge_detail
from .models import LayoutResult, StateMachine

Point = Tuple[float, float]


class PNGRenderer:
    """Renders state machine layouts as PNG images."""

    def __init__(
        self,
        canvas_width: int = CANVAS_WIDTH,
        canvas_height: int = CANVAS_HEIGHT,
        state_size: int = STATE_SIZE,
        font_size: int = 12,
        font_path: str | None = None,  # Custom font path
        scale: int = 2,  # For high-resolution output
        samples_per_segment: int = 12,
    ):
        if scale < 1:
            raise ValueError("scale must be at least 1")
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.state_size = state_size
        self.font_size = font_size
        self.font_path = font_path
        self.scale = scale
        self.samples_per_segment = samples_per_segment

        # Colors
        self.bg_color = (255, 255, 255)
        self.state_fill = (255, 255, 255)
        self.initial_fill = (255, 244, 214)
        self.outline = (0, 0, 0)
        self.line_color = (60, 60, 60)
        self.text_color = (0, 0, 0)

        self.font = None

    def _get_font(self) -> ImageFont.FreeTypeFont:
        """Get a font for rendering labels."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale

        if self.font_path and os.path.exists(self.font_path):
            try:
                self.font = ImageFont.truetype(self.font_path, font_size)
                return self.font
            except OSError:
                pass  # Fall through to default fonts

        font_options = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
            "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        ]
        for path in font_options:
            if os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        self.font = ImageFont.load_default()
        return self.font

    def draw(self, machine: StateMachine, result: LayoutResult) -> Image.Image:
        """
        Draw the diagram into a new image.

        Args:
            machine: The machine that was laid out
            result: Its layout (positions and offsets)

        Returns:
            RGB image of the canvas size times ``scale``
        """
        s = self.scale
        img = Image.new(
            "RGB", (self.canvas_width * s, self.canvas_height * s), self.bg_color
        )
        draw = ImageDraw.Draw(img)

        # States first so that arrowheads stay visible on top of the circles
        for state in machine.states:
            self._draw_state(draw, machine, result, state)

        for state in machine.states:
            for symbol in machine.alphabet:
                dst = machine.destination(state, symbol)
                detail = edge_detail(
                    result.positions[state],
                    result.positions[dst],
                    result.offsets[state][symbol],
                    self.state_size,
                    is_loop=dst == state,
                )
                points = [self._px(p) for p in detail.spline]
                self._draw_spline(draw, points)
                self._draw_label(draw, self._px(detail.control_point), symbol)

        return img

    def render(
        self,
        machine: StateMachine,
        result: LayoutResult,
        output_path: str = "diagram.png",
    ) -> str:
        """
        Render the diagram as a PNG image.

        Returns:
            Path to the saved PNG file
        """
        img = self.draw(machine, result)
        img.save(output_path, "PNG", dpi=(300, 300))
        return output_path

    def _px(self, point: Sequence[float]) -> Point:
        return point[0] * self.scale, point[1] * self.scale

    def _draw_state(
        self,
        draw: ImageDraw.ImageDraw,
        machine: StateMachine,
        result: LayoutResult,
        state: int,
    ):
        x, y = self._px(result.positions[state])
        r = self.state_size / 2 * self.scale
        line_width = max(1, self.scale)
        is_initial = state == machine.initial_state

        draw.ellipse(
            [x - r, y - r, x + r, y + r],
            fill=self.initial_fill if is_initial else self.state_fill,
            outline=self.outline,
            width=line_width,
        )
        if state in machine.accept_states:
            inner = r * 0.7
            draw.ellipse(
                [x - inner, y - inner, x + inner, y + inner],
                outline=self.outline,
                width=line_width,
            )
        if is_initial:
            tip = r / 2.5
            draw.line(
                [(x - r - tip, y - tip), (x - r, y), (x - r - tip, y + tip)],
                fill=self.outline,
                width=line_width,
            )

        self._draw_label(draw, (x, y), str(state))

    def _draw_label(self, draw: ImageDraw.ImageDraw, center: Point, text: str):
        font = self._get_font()
        bbox = draw.textbbox((0, 0), text, font=font)
        w, h = bbox[2] - bbox[0], bbox[3] - bbox[1]
        draw.text(
            (center[0] - w / 2, center[1] - h / 2),
            text,
            fill=self.text_color,
            font=font,
        )

    def _draw_spline(self, draw: ImageDraw.ImageDraw, points: List[Point]):
        curve = catmull_rom(points, self.samples_per_segment)
        draw.line(curve, fill=self.line_color, width=max(1, self.scale))
        if len(curve) >= 2:
            self._draw_arrowhead(draw, curve[-2], curve[-1])

    def _draw_arrowhead(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Point,
        to_point: Point,
    ):
        """Draw an arrowhead at the end of a line."""
        x1, y1 = from_point
        x2, y2 = to_point

        arrow_size = 8 * self.scale

        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8

        ax1 = x2 + arrow_size * math.cos(angle1)
        ay1 = y2 + arrow_size * math.sin(angle1)
        ax2 = x2 + arrow_size * math.cos(angle2)
        ay2 = y2 + arrow_size * math.sin(angle2)

        draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=self.line_color)


def catmull_rom(points: List[Point], samples: int) -> List[Point]:
    """
    Sample a Catmull-Rom spline passing through every point.

    The end points are duplicated so the curve starts and ends on them.
    """
    if len(points) < 3 or samples < 1:
        return list(points)

    padded = [points[0]] + list(points) + [points[-1]]
    curve: List[Point] = []
    for i in range(1, len(padded) - 2):
        p0, p1, p2, p3 = padded[i - 1], padded[i], padded[i + 1], padded[i + 2]
        for step in range(samples):
            t = step / samples
            curve.append(
                tuple(
                    0.5
                    * (
                        2 * p1[k]
                        + (p2[k] - p0[k]) * t
                        + (2 * p0[k] - 5 * p1[k] + 4 * p2[k] - p3[k]) * t * t
                        + (3 * p1[k] - p0[k] - 3 * p2[k] + p3[k]) * t * t * t
                    )
                    for k in (0, 1)
                )
            )
    curve.append(points[-1])
    return curve


def render_to_png(
    machine: StateMachine,
    result: LayoutResult,
    output_path: str = "diagram.png",
    **kwargs,
) -> str:
    """
    Convenience function to render a diagram to PNG.

    Args:
        machine: StateMachine that was laid out
        result: LayoutResult of the machine
        output_path: Path to save the PNG file
        **kwargs: Additional parameters for PNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(machine, result, output_path)
