"""
Off-screen drawing of a render graph with Pillow.

The layout module decides where nodes go; this module only scales those
coordinates into an image and paints edges, nodes and labels.  It is used by
the command-line driver to export PNG frames.
"""

import logging

from PIL import Image, ImageDraw, ImageFont

from treeviz.layout import render_bounds
from treeviz.node import RED

logger = logging.getLogger(__name__)

_FONT_CANDIDATES = [
    "DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",  # Debian/Ubuntu
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",              # Arch
    "consola.ttf",                                          # Windows
    "/System/Library/Fonts/Menlo.ttc",                      # macOS
]


def _load_fonts():
    """
    Monospace fonts for labels: (normal 14pt, small 11pt, title 16pt).
    Falls back to Pillow's built-in bitmap font.
    """
    for path in _FONT_CANDIDATES:
        try:
            return (ImageFont.truetype(path, 14),
                    ImageFont.truetype(path, 11),
                    ImageFont.truetype(path, 16))
        except OSError:
            continue
    logger.debug("no TrueType monospace font found, using Pillow default")
    default = ImageFont.load_default()
    return default, default, default


def step_highlight(step):
    """Values a step wants highlighted: its affected nodes, else its path."""
    if step is None:
        return set()
    if step.affected_nodes:
        return set(step.affected_nodes)
    if step.path:
        return set(step.path)
    return {step.value} if step.value is not None else set()


class TreeImageRenderer:
    """
    Render ``RenderNode`` lists to Pillow images.

    Args:
        settings (Settings) : Colour lookups.
        width    (int)      : Image width in pixels.
        height   (int)      : Image height in pixels.
    """

    def __init__(self, settings, width=800, height=500):
        self.settings    = settings
        self.width       = width
        self.height      = height
        self.node_radius = 22
        self.padding     = 50

    def render(self, nodes, highlight=None, title="", caption=""):
        """
        Draw a render graph.

        Args:
            nodes     (list[RenderNode]) : Snapshot from the layout.
            highlight (Iterable|None)    : Values ringed in HIGHLIGHT.
            title     (str)              : Text at the top.
            caption   (str)              : Up to three lines in a box at
                                           the bottom.

        Returns:
            PIL.Image.Image
        """
        s = self.settings
        highlight = set(highlight or ())

        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_s, font_t = _load_fonts()

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)

        bottom = self.height - 20
        if caption:
            y0 = self.height - 80
            draw.rectangle([5, y0, self.width - 5, self.height - 5],
                           fill=s.get("CASE_BG"))
            for i, line in enumerate(caption.split("\n")[:3]):
                draw.text((10, y0 + 5 + i * 16), line[:90],
                          fill=s.get("FG"), font=font_s)
            bottom = y0 - 10

        if not nodes:
            draw.text((self.width // 2 - 40, self.height // 2),
                      "Empty Tree", fill=s.get("FG"), font=font)
            return img

        # ── Layout coordinates → pixel coordinates ──
        min_x, min_y, max_x, max_y = render_bounds(nodes)
        pad, r = self.padding, self.node_radius
        top = 40 + r
        span_x = (max_x - min_x) or 1.0
        span_y = (max_y - min_y) or 1.0

        def px(node):
            if max_x == min_x:
                x = self.width / 2
            else:
                x = pad + (node.x - min_x) / span_x * (self.width - 2 * pad)
            if max_y == min_y:
                y = top
            else:
                y = top + (node.y - min_y) / span_y * (bottom - r - top)
            return int(x), int(y)

        pos = {n.id: px(n) for n in nodes}

        # ── Edges first, nodes on top ──
        for n in nodes:
            for child in (n.left, n.right):
                if child is not None:
                    draw.line([pos[n.id], pos[child.id]],
                              fill=s.get("EDGE"), width=2)

        for n in nodes:
            x, y = pos[n.id]
            if n.color is None:
                fill = s.get("NODE_AVL_FILL")
            elif n.color == RED:
                fill = s.get("NODE_RED_FILL")
            else:
                fill = s.get("NODE_BLACK_FILL")
            hot = n.value in highlight
            draw.ellipse([x - r, y - r, x + r, y + r], fill=fill,
                         outline=s.get("HIGHLIGHT") if hot else "white",
                         width=3 if hot else 1)

            txt = str(n.value)
            bb  = draw.textbbox((0, 0), txt, font=font)
            tw, th = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((x - tw // 2, y - th // 2), txt,
                      fill=s.get("NODE_TEXT"), font=font)

            if n.balance_factor is not None:
                draw.text((x + r + 2, y - r), f"{n.balance_factor:+d}",
                          fill=s.get("BF_TEXT"), font=font_s)
        return img

    def save_png(self, nodes, path, step=None, title=""):
        """
        Render *nodes* and write a PNG to *path*.

        When *step* is given its message becomes the caption and its
        affected nodes (or path) are highlighted.
        """
        img = self.render(nodes,
                          highlight=step_highlight(step),
                          title=title,
                          caption=step.message if step is not None else "")
        img.save(path, format="PNG")
        logger.info("wrote %s (%d nodes)", path, len(nodes))
        return path
