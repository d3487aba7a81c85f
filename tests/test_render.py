import pytest
from PIL import Image

from treeviz.render import TreeImageRenderer, step_highlight
from treeviz.settings import Settings
from treeviz.steps import Step, StepKind

from tests.helpers import build


@pytest.fixture
def renderer():
    return TreeImageRenderer(Settings(load=False), width=400, height=300)


def test_render_size_and_background(renderer):
    img = renderer.render([])
    assert img.size == (400, 300)
    assert img.mode == "RGB"
    # corner pixel is the canvas colour
    bg = renderer.settings.get("CANVAS_BG")
    assert img.getpixel((0, 0)) == tuple(int(bg[i:i + 2], 16)
                                         for i in (1, 3, 5))


def test_render_draws_nodes(renderer, kind):
    nodes = build(kind, [5, 3, 8, 1]).snapshot_for_rendering()
    empty = renderer.render([])
    img = renderer.render(nodes, highlight={3}, title="t", caption="a\nb")
    assert img.tobytes() != empty.tobytes()


def test_single_node_is_centred(renderer):
    (node,) = build("avl", [1]).snapshot_for_rendering()
    img = renderer.render([node])
    fill = renderer.settings.get("NODE_AVL_FILL")
    # sample just inside the left rim of the circle, clear of the label
    x = renderer.width // 2 - renderer.node_radius + 4
    assert img.getpixel((x, 40 + renderer.node_radius)) == tuple(
        int(fill[i:i + 2], 16) for i in (1, 3, 5))


def test_save_png(renderer, tmp_path):
    tree = build("redblack", [10, 20])
    step = tree.insert(30, trace=True).steps[-1]
    out = tmp_path / "tree.png"
    assert renderer.save_png(tree.snapshot_for_rendering(), str(out),
                             step=step, title="redblack") == str(out)
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.size == (400, 300)


def test_step_highlight_prefers_affected_nodes():
    assert step_highlight(None) == set()
    assert step_highlight(Step(StepKind.UPDATE, 1, "m",
                               affected_nodes=(1, 2), path=(9,))) == {1, 2}
    assert step_highlight(Step(StepKind.HIGHLIGHT, 3, "m",
                               path=(5, 3))) == {5, 3}
    assert step_highlight(Step(StepKind.COMPARISON, 4, "m")) == {4}
