"""
Procedural Image Composer.
Renders placeholder "AI-generated" artwork from a text prompt using CPU-only drawing.
No ML/GPU required - a gradient, random shapes and the prompt text, drawn with Pillow.
"""

import io
import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from config import BOLD_FONT_PATH, FONT_PATH
from services.style_service import StyleCatalog, get_style_catalog

logger = logging.getLogger(__name__)


CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
NUM_SHAPES = 20
SHAPE_KINDS = ("circle", "rectangle", "triangle", "line")

TEXT_FONT_SIZE = 32
TEXT_MAX_WIDTH = 700
TEXT_LINE_HEIGHT = 40
TEXT_SHADOW_OFFSET = 2
TEXT_SHADOW_COLOR = (0, 0, 0, 102)
TEXT_COLOR = (255, 255, 255, 255)

SIGNATURE_FONT_SIZE = 16
SIGNATURE_Y = 580
SIGNATURE_COLOR = (255, 255, 255, 204)

# Common system fonts, tried in order after any configured path
BOLD_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "C:\\Windows\\Fonts\\arialbd.ttf",
]
REGULAR_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
]


@dataclass(frozen=True)
class ShapePrimitive:
    """One randomly placed shape. Never persisted."""
    kind: str
    x: float
    y: float
    size: float
    color: str
    opacity: float
    stroke_width: float = 0.0
    delta_y: float = 0.0

    def rgba(self) -> Tuple[int, int, int, int]:
        red, green, blue = ImageColor.getrgb(self.color)[:3]
        return red, green, blue, int(round(self.opacity * 255))


def load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    """
    Load a TrueType font, falling back to Pillow's scalable default font.

    Args:
        size: Font size in pixels
        bold: Prefer a bold face

    Returns:
        Font usable with ImageDraw
    """
    configured = BOLD_FONT_PATH if bold else FONT_PATH
    candidates = BOLD_FONT_CANDIDATES if bold else REGULAR_FONT_CANDIDATES
    if configured:
        candidates = [configured] + candidates

    for font_path in candidates:
        try:
            return ImageFont.truetype(font_path, size)
        except (OSError, IOError):
            continue

    logger.debug("No TrueType font found, using Pillow default at %spx", size)
    return ImageFont.load_default(size=size)


def linear_gradient(size: Tuple[int, int], start: str, end: str) -> Image.Image:
    """
    Build a diagonal gradient from the top-left corner to the bottom-right corner.

    The gradient parameter at (x, y) is (x*W + y*H) / (W^2 + H^2), which splits into
    a horizontal ramp weighted W^2 and a vertical ramp weighted H^2.

    Args:
        size: (width, height) of the canvas
        start: Color at the top-left corner
        end: Color at the bottom-right corner

    Returns:
        RGB image filled with the gradient
    """
    width, height = size
    vertical = Image.linear_gradient("L").resize(size, Image.BILINEAR)
    horizontal = Image.linear_gradient("L").rotate(90).resize(size, Image.BILINEAR)
    horizontal_weight = (width * width) / float(width * width + height * height)
    mask = Image.blend(vertical, horizontal, horizontal_weight)

    start_image = Image.new("RGB", size, ImageColor.getrgb(start)[:3])
    end_image = Image.new("RGB", size, ImageColor.getrgb(end)[:3])
    return Image.composite(end_image, start_image, mask)


def wrap_text(text: str, font: ImageFont.ImageFont, max_width: float = TEXT_MAX_WIDTH) -> List[str]:
    """
    Greedily fill lines word by word while the rendered width stays under max_width.

    A word wider than max_width on its own is kept whole on its own line.

    Args:
        text: Text to wrap
        font: Font used for measuring
        max_width: Width threshold in pixels

    Returns:
        Wrapped lines, empty for blank text
    """
    words = text.split()
    if not words:
        return []

    lines = []
    current_line = words[0]
    for word in words[1:]:
        candidate = f"{current_line} {word}"
        if font.getlength(candidate) < max_width:
            current_line = candidate
        else:
            lines.append(current_line)
            current_line = word
    lines.append(current_line)
    return lines


def to_png_bytes(image: Image.Image) -> bytes:
    """Encode an image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


class ImageComposer:
    """
    Composes the gradient, shapes, prompt text and signature into one image.
    Holds no drawing state between calls; every call renders on a new surface.
    """

    def __init__(
        self,
        catalog: Optional[StyleCatalog] = None,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        num_shapes: int = NUM_SHAPES,
    ):
        """
        Initialize the composer.

        Args:
            catalog: Style palette table (defaults to the built-in catalog)
            width: Canvas width in pixels
            height: Canvas height in pixels
            num_shapes: Number of random primitives per image
        """
        self.catalog = catalog or get_style_catalog()
        self.width = width
        self.height = height
        self.num_shapes = num_shapes
        self.text_font = load_font(TEXT_FONT_SIZE, bold=True)
        self.signature_font = load_font(SIGNATURE_FONT_SIZE)

    def sample_shapes(self, colors: Sequence[str], rng: random.Random) -> List[ShapePrimitive]:
        """
        Sample the random primitives for one image.

        Args:
            colors: Palette to pick shape colors from
            rng: Random source

        Returns:
            List of num_shapes primitives
        """
        shapes = []
        for _ in range(self.num_shapes):
            kind = SHAPE_KINDS[rng.randrange(len(SHAPE_KINDS))]
            x = rng.random() * self.width
            y = rng.random() * self.height
            size = 10 + rng.random() * 100
            color = colors[rng.randrange(len(colors))]
            opacity = 0.2 + rng.random() * 0.5

            stroke_width = 0.0
            delta_y = 0.0
            if kind == "line":
                stroke_width = 2 + rng.random() * 8
                delta_y = (rng.random() - 0.5) * 100

            shapes.append(ShapePrimitive(
                kind=kind,
                x=x,
                y=y,
                size=size,
                color=color,
                opacity=opacity,
                stroke_width=stroke_width,
                delta_y=delta_y,
            ))
        return shapes

    def _draw_shape(self, draw: ImageDraw.ImageDraw, shape: ShapePrimitive):
        """Draw a single primitive with its own color and opacity."""
        fill = shape.rgba()
        x, y, size = shape.x, shape.y, shape.size

        if shape.kind == "circle":
            radius = size / 2
            draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill)

        elif shape.kind == "rectangle":
            draw.rectangle([x, y, x + size, y + size * 0.6], fill=fill)

        elif shape.kind == "triangle":
            half = size / 2
            points = [
                (x, y - half),          # apex
                (x - half, y + half),   # base left
                (x + half, y + half),   # base right
            ]
            draw.polygon(points, fill=fill)

        elif shape.kind == "line":
            draw.line(
                [(x, y), (x + size, y + shape.delta_y)],
                fill=fill,
                width=max(1, int(round(shape.stroke_width))),
            )

        else:
            raise ValueError(f"Unknown shape kind: {shape.kind}")

    def _draw_prompt(self, draw: ImageDraw.ImageDraw, prompt: str):
        lines = wrap_text(prompt, self.text_font, TEXT_MAX_WIDTH)
        center_x = self.width / 2
        start_y = self.height / 2 - (len(lines) * TEXT_LINE_HEIGHT) / 2

        for index, line in enumerate(lines):
            line_y = start_y + index * TEXT_LINE_HEIGHT
            # Shadow first, main copy on top
            draw.text(
                (center_x + TEXT_SHADOW_OFFSET, line_y + TEXT_SHADOW_OFFSET),
                line,
                font=self.text_font,
                fill=TEXT_SHADOW_COLOR,
                anchor="mm",
            )
            draw.text((center_x, line_y), line, font=self.text_font, fill=TEXT_COLOR, anchor="mm")

    def _draw_signature(self, draw: ImageDraw.ImageDraw, today: date):
        date_str = f"{today.month}/{today.day}/{today.year}"
        draw.text(
            (self.width / 2, SIGNATURE_Y),
            f"AI Generated \u2022 {date_str} \u2022 Dynamic Art",
            font=self.signature_font,
            fill=SIGNATURE_COLOR,
            anchor="mm",
        )

    def compose(
        self,
        prompt: str,
        style: Optional[str] = None,
        rng: Optional[random.Random] = None,
        today: Optional[date] = None,
    ) -> Image.Image:
        """
        Render an image for a prompt.

        Args:
            prompt: Text to draw in the middle of the image
            style: Style keyword; unknown styles use the default palette
            rng: Random source for shape sampling (a fresh unseeded one if omitted)
            today: Date stamped in the signature (defaults to today)

        Returns:
            Opaque RGB image of width x height
        """
        if rng is None:
            rng = random.Random()
        if today is None:
            today = date.today()

        colors = self.catalog.get_colors(style)

        image = linear_gradient((self.width, self.height), colors[0], colors[1])
        # RGBA draw mode blends each fill's alpha onto the RGB canvas
        draw = ImageDraw.Draw(image, "RGBA")

        for shape in self.sample_shapes(colors, rng):
            self._draw_shape(draw, shape)

        self._draw_prompt(draw, prompt)
        self._draw_signature(draw, today)

        return image

    def render_png(
        self,
        prompt: str,
        style: Optional[str] = None,
        rng: Optional[random.Random] = None,
        today: Optional[date] = None,
    ) -> bytes:
        """Render an image and return it PNG-encoded."""
        return to_png_bytes(self.compose(prompt, style, rng=rng, today=today))

