import sys
import time
from argparse import ArgumentParser
from pathlib import Path

import PIL.Image

from escapetime import (
    DEFAULT_STRIPS_PER_WORKER,
    DEFAULT_VERTICES,
    PaletteBuilt,
    RegionDefinition,
    StripCompleted,
    calc_region_parallel,
    parse_vertices,
    render_image,
    vertices_from_colormap,
)

_VERBOSE_FLAGS = {"--verbose", "-v"}
VERBOSE = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def log_event(event):
    if isinstance(event, StripCompleted):
        log("strip {0} done ({1}/{2}, {3} rows)".format(event.index, event.completed, event.total, event.height_px))
    elif isinstance(event, PaletteBuilt):
        log("(min_iter, max_iter) = ({0}, {1}), palette of {2} colours".format(event.min_iter, event.max_iter, event.size))


def build_parser():
    parser = ArgumentParser(description='Render the Mandelbrot set with oversampling and a piecewise-linear palette.')

    parser.add_argument('--min-real', type=float,
                        dest='min_real', help='left edge of the region in the complex plane',
                        metavar='MIN_REAL', default=-0.77)

    parser.add_argument('--max-real', type=float,
                        dest='max_real', help='right edge of the region in the complex plane',
                        metavar='MAX_REAL', default=-0.74)

    parser.add_argument('--min-imag', type=float,
                        dest='min_imag', help='bottom edge of the region in the complex plane',
                        metavar='MIN_IMAG', default=0.07)

    parser.add_argument('--max-imag', type=float,
                        dest='max_imag', help='top edge of the region in the complex plane',
                        metavar='MAX_IMAG', default=0.11)

    parser.add_argument('--width', type=int,
                        dest='width', help='image width in pixels; the height follows from the region so pixels are square',
                        metavar='WIDTH', default=1200)

    parser.add_argument('--oversampling', type=int,
                        dest='oversampling', help='samples per pixel along each axis',
                        metavar='OVERSAMPLING', default=2)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iterations after which a point is considered inside the set',
                        metavar='MAX_ITERATIONS', default=400)

    parser.add_argument('--escape-radius', type=float,
                        dest='escape_radius', help='magnitude beyond which a point has escaped',
                        metavar='ESCAPE_RADIUS', default=10.0)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='size of the worker pool',
                        metavar='WORKERS', default=8)

    parser.add_argument('--strips-per-worker', type=int,
                        dest='strips_per_worker', help='strips queued per worker so slow strips do not leave workers idle',
                        metavar='STRIPS', default=DEFAULT_STRIPS_PER_WORKER)

    parser.add_argument('--executor', choices=['process', 'thread'], default='process',
                        help='kind of worker pool.')

    palette_group = parser.add_mutually_exclusive_group()
    palette_group.add_argument('--palette', type=str, dest='palette', metavar='HEX,HEX,...',
                               help='comma separated palette vertices, e.g. "010d62,63b8ec,ffffff".')
    palette_group.add_argument('--colormap', type=str, dest='colormap', metavar='COLORMAP',
                               help='matplotlib colormap to take the palette vertices from (e.g. "inferno").')

    parser.add_argument('--colormap-stops', type=int, dest='colormap_stops', metavar='STOPS', default=5,
                        help='number of vertices sampled from --colormap.')

    parser.add_argument('--output', dest='output', type=str, default='mandelbrot.png',
                        help='destination image file.')

    parser.add_argument('--format', type=str,
                        dest='format', help='image file format. Can be any extension supported by Pillow. Default: the output extension, or "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging of progress and timings.')

    return parser


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)


def resolve_vertices(opt, parser):
    try:
        if opt.palette is not None:
            return parse_vertices(opt.palette)
        if opt.colormap is not None:
            return vertices_from_colormap(opt.colormap, opt.colormap_stops)
    except ValueError as exc:
        parser.error(str(exc))
    return list(DEFAULT_VERTICES)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if opt.workers < 1:
        parser.error("--workers must be at least 1.")
    if opt.strips_per_worker < 1:
        parser.error("--strips-per-worker must be at least 1.")

    try:
        region = RegionDefinition.from_bounds(
            opt.min_real,
            opt.max_real,
            opt.min_imag,
            opt.max_imag,
            opt.width,
            opt.oversampling,
            opt.max_iterations,
            opt.escape_radius,
        )
    except ValueError as exc:
        parser.error(str(exc))

    vertices = resolve_vertices(opt, parser)

    output_path = Path(opt.output).expanduser()
    image_format = (opt.format or output_path.suffix or "png").lower().lstrip(".")
    if not output_path.suffix:
        output_path = output_path.with_suffix(f".{image_format}")

    log("region = %s" % (region,))
    start_time = time.perf_counter()
    samples = calc_region_parallel(
        region,
        opt.workers,
        strips_per_worker=opt.strips_per_worker,
        executor=opt.executor,
        on_event=log_event,
    )
    log("time taken to calculate set {0:.2f}ms".format((time.perf_counter() - start_time) * 1000))
    log("set size = {0}".format(samples.data.size))

    colour_start = time.perf_counter()
    try:
        image = render_image(samples, vertices, on_event=log_event)
    except ValueError as exc:
        parser.error(f"cannot colour the render: {exc}")
    log("time taken to colour image {0:.2f}ms".format((time.perf_counter() - colour_start) * 1000))

    write_single_image(image, output_path, image_format)
    log("wrote {0}x{1} image to {2}".format(image.width, image.height, output_path))


if __name__ == '__main__':
    main()
