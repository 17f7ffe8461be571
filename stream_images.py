# stream_images.py
import argparse
import logging
import sys

import rp2040
from errors import NoAssetsError, ScreenError
from frames import enumerate_assets
from player import SlideshowPlayer
from settings import LOG_ENV_VAR, ScreenConfig, setup_logging

logger = logging.getLogger("usb_screen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usb-screen",
        description="Stream a folder of PNG images to an RP2040 serial display as RGB565 frames.",
    )
    parser.add_argument("--images", help="image directory (default: ./images)")
    parser.add_argument("--fps", type=int, help="target frame rate (default: 24)")
    parser.add_argument("--width", type=int, help="display width in pixels (default: 320)")
    parser.add_argument("--height", type=int, help="display height in pixels (default: 240)")
    parser.add_argument("--baud", type=int, help="serial baud rate (default: 115200)")
    parser.add_argument("--port", help="open this serial device instead of searching by USB id")
    parser.add_argument("--list-ports", action="store_true", help="list serial ports and exit")
    parser.add_argument("--preload", action="store_true",
                        help="decode and pack every image once before streaming")
    parser.add_argument("--preview", action="store_true",
                        help="show frames in a window instead of sending them")
    parser.add_argument("--log-level", help=f"logging level (default: ${LOG_ENV_VAR} or INFO)")
    return parser


def open_target(args, config: ScreenConfig):
    if args.preview:
        from gui import VirtualScreen

        return VirtualScreen(config.width, config.height)
    if args.port:
        return rp2040.open_named(args.port, config)
    return rp2040.locate_and_open(config)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    target = None
    try:
        config = ScreenConfig().with_overrides(
            image_dir=args.images,
            fps=args.fps,
            width=args.width,
            height=args.height,
            baud=args.baud,
        )

        if args.list_ports:
            for line in rp2040.describe_ports(config):
                print(line)
            return 0

        logger.info("Starting USB screen")
        target = open_target(args, config)
        logger.info("Display connected")

        assets = enumerate_assets(config.image_dir, config.extension)
        if not assets:
            raise NoAssetsError(f"No .{config.extension} images found in {config.image_dir}")
        logger.info("Selected %d images", len(assets))

        player = SlideshowPlayer(target, assets, config, preload=args.preload)
        player.run()
    except ScreenError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping")
        return 130
    finally:
        if target is not None:
            target.close()
    # run() only ever leaves by raising
    return 1


if __name__ == "__main__":
    sys.exit(main())
