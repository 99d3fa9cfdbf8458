from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from rasterplot import ShapeStyle, figure
from rasterplot.colors import BLACK, BLUE, CYAN, GREEN, MAGENTA, RED, YELLOW


def _sine_figure(out_dir: Path, *, show: bool) -> Path:
    t = np.arange(200, dtype=np.float64) * 0.05
    fig = figure(800, 600)
    fig.plot(t, np.sin(t), BLUE, 2.0, "sin(t)")
    fig.plot(t, 0.5 * np.sin(t + 0.5), CYAN, 2.0, "0.5*sin(t+0.5)")
    fig.scatter([np.pi / 2], [1.0], RED, 6.0)
    fig.text(np.pi / 2, 1.05, "peak", BLACK, halign="center", valign="bottom")
    fig.grid()
    fig.axis_tight()
    fig.legend(True, "northEast")
    fig.title("Two sine waves")
    fig.xlabel("x-axis")
    fig.ylabel("y-axis")
    if show:
        fig.show("Demo Figure 1")
    path = out_dir / "demo1_sine.png"
    fig.save(path)
    return path


def _path_figure(out_dir: Path, *, show: bool) -> Path:
    xs = [0, 1, 2, 3, 4, 5, 6]
    ys = [0, 0.5, 1.5, 1.0, 0.5, 0.0, -0.5]
    fig = figure(600, 600)
    fig.plot(xs, ys, BLUE, 2.0)
    fig.scatter(xs[:1], ys[:1], GREEN, 6.0, "start")
    fig.scatter(xs[-1:], ys[-1:], RED, 6.0, "end")
    fig.text(xs[0], ys[0] + 0.1, "Start")
    fig.text(xs[-1], ys[-1] - 0.1, "End", valign="top")
    fig.equal_scale()
    fig.grid()
    fig.legend(True, "lower left")
    fig.title("2D Object Path")
    fig.xlabel("X Position")
    fig.ylabel("Y Position")
    if show:
        fig.show("Demo Figure 2")
    path = out_dir / "demo2_path.png"
    fig.save(path)
    return path


def _shapes_figure(out_dir: Path, *, show: bool) -> Path:
    fig = figure(800, 600)
    fig.circle(2, 1, 0.5, ShapeStyle(BLACK, 2.0, RED, 0.5), "circle")
    fig.rect_xywh(2, 0.5, 1.0, 1.5, ShapeStyle(BLUE, 2.0, CYAN, 0.6), "rect xywh")
    fig.rect_ltrb(4.0, 0.5, 5.0, 2.0, ShapeStyle(GREEN, 2.0, YELLOW, 0.4), "rect ltrb")
    fig.rotated_rect(6.5, 1.25, 1.2, 0.8, 30.0, ShapeStyle(MAGENTA, 2.0, GREEN, 0.4), "rotated")
    fig.polygon([1.5, 2.0, 2.5, 2.0], [3.0, 3.5, 3.0, 2.5], ShapeStyle(BLACK, 1.5, MAGENTA, 0.5), "polygon")
    fig.ellipse(4.5, 2.0, 2.0, 1.0, 45.0, ShapeStyle(BLUE, 2.0, RED, 0.3), "ellipse")
    fig.equal_scale()
    fig.grid()
    fig.legend(True, "northWest")
    fig.title("Shape Rendering Test")
    fig.xlabel("X")
    fig.ylabel("Y")
    if show:
        fig.show("Demo Figure 3")
    path = out_dir / "demo3_shapes.png"
    fig.save(path)
    return path


def main() -> None:
    parser = argparse.ArgumentParser(description="Render the rasterplot demo figures.")
    parser.add_argument("--out-dir", type=Path, default=Path.cwd(), help="directory for the PNG files")
    parser.add_argument("--show", action="store_true", help="also open each figure in the image viewer")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    out_dir: Path = args.out_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    for build in (_sine_figure, _path_figure, _shapes_figure):
        print(f"wrote {build(out_dir, show=args.show)}")


if __name__ == "__main__":
    main()
