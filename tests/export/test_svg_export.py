"""SVG export（`etchcard.export.svg`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from PIL import Image

from etchcard.core.assets import AssetBundle
from etchcard.core.sketch_config import load_sketch_config
from etchcard.core.surface import FillStyle, Glow, GradientStop, StrokeStyle
from etchcard.export.svg import SvgSurface, export_svg

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


def _parse_svg(text: str) -> ET.Element:
    root = ET.fromstring(text)
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def test_svg_surface_writes_paths_and_ellipses() -> None:
    surface = SvgSurface((100, 50))
    surface.fill_background([GradientStop(0.0, (0, 0, 0, 255)), GradientStop(1.0, (255, 255, 255, 255))])
    surface.set_stroke_style(StrokeStyle(color=(255, 0, 0, 255), width=2.5))
    surface.move_to(0.0, 0.0)
    surface.line_to(10.0, -0.0001)
    surface.line_to(10.0, 20.0)
    surface.stroke()
    surface.set_fill_style(FillStyle(color=(255, 255, 255, 128), glow=Glow(radius=30.0, color=(255, 255, 255, 255))))
    surface.fill_ellipse(5.0, 6.0, 6.0, 9.0)
    surface.fill_ellipse(7.0, 8.0, 6.0, 9.0)

    root = _parse_svg(surface.to_svg())
    assert root.attrib["viewBox"] == "0 0 100 50"

    (path,) = root.findall("svg:path", _NS)
    assert path.attrib["d"] == "M 0.000 0.000 L 10.000 0.000 L 10.000 20.000"
    assert path.attrib["stroke"] == "#FF0000"
    assert path.attrib["stroke-width"] == "2.500"
    assert path.attrib["stroke-linecap"] == "round"

    ellipses = root.findall("svg:ellipse", _NS)
    # 光彩 + 本体 が 2 個ずつ。
    assert len(ellipses) == 4
    assert ellipses[1].attrib["fill-opacity"] == "0.502"
    assert ellipses[1].attrib["rx"] == "6.000"
    assert ellipses[1].attrib["ry"] == "9.000"
    # blur フィルタは半径ごとに 1 つだけ定義する。
    filters = root.findall("svg:defs/svg:filter", _NS)
    assert len(filters) == 1
    assert ellipses[0].attrib["filter"] == f"url(#{filters[0].attrib['id']})"
    assert root.findall("svg:defs/svg:linearGradient/svg:stop", _NS)[1].attrib["stop-color"] == "#FFFFFF"


def test_svg_surface_escapes_text_and_embeds_images() -> None:
    surface = SvgSurface((10, 10))
    surface.draw_text("A & <B>", 1.0, 2.0, size=12.0, color=(237, 237, 237, 255), font="Arial Bold")
    surface.draw_image(Image.new("RGBA", (3, 2)), 4.0, 5.0)

    root = _parse_svg(surface.to_svg())
    (text,) = root.findall("svg:text", _NS)
    assert text.text == "A & <B>"
    assert text.attrib["font-family"] == "Arial Bold"
    assert text.attrib["fill"] == "#EDEDED"
    (image,) = root.findall("svg:image", _NS)
    assert image.attrib["width"] == "3"
    assert image.attrib["href"].startswith("data:image/png;base64,")


def test_export_svg_writes_whole_card(tmp_path: Path) -> None:
    cfg = load_sketch_config()
    out = tmp_path / "nested" / "card.svg"
    logo = Image.new("RGBA", (4, 4))

    path = export_svg(cfg, out, frame_index=10, assets=AssetBundle(logo=logo, ready=True))

    assert path == out
    root = _parse_svg(out.read_text(encoding="utf-8"))
    assert root.attrib["width"] == "1200"
    assert len(root.findall("svg:path", _NS)) > 100
    assert len(root.findall("svg:text", _NS)) == 3
    assert len(root.findall("svg:image", _NS)) == 1
    assert root.findall("svg:rect", _NS)[0].attrib["fill"].startswith("url(#")


def test_export_svg_is_deterministic(tmp_path: Path) -> None:
    cfg = load_sketch_config()
    a = export_svg(cfg, tmp_path / "a.svg", frame_index=3).read_text(encoding="utf-8")
    b = export_svg(cfg, tmp_path / "b.svg", frame_index=3).read_text(encoding="utf-8")
    assert a == b
