from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import TextIO

from .config import DEFAULT_CONFIG_PATH, load_config
from .errors import ConfigError
from .renderers import FORMATS, preamble_for, render_with
from .widgets.base import Widget
from .widgets.jenkins import JenkinsWidget

log = logging.getLogger(__name__)

def run(
    widget: Widget,
    fmt: str,
    out: TextIO,
    interval: int,
    once: bool = False,
    sleep=time.sleep,
) -> None:
    for line in preamble_for(fmt):
        print(line, file=out, flush=True)

    first = True
    while True:
        update = widget.update()
        if update is not None:
            print(render_with(fmt, update, first), file=out, flush=True)
            first = False
            interval = update.refresh_interval
        if once:
            return
        sleep(interval)

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="jenkinsbar")
    ap.add_argument("--config", "--jenkins-config", dest="config", default=DEFAULT_CONFIG_PATH,
                    help="Path to the Jenkins widget config (YAML)")
    ap.add_argument("--format", choices=FORMATS, default="i3bar", help="Output protocol of the status bar")
    ap.add_argument("--once", action="store_true", help="Print a single update and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    args = ap.parse_args(argv)

    # stdout belongs to the bar
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        log.error("%s", e)
        return 2

    widget = JenkinsWidget(cfg)
    try:
        run(widget, args.format, sys.stdout, cfg.update_frequency, once=args.once)
    except KeyboardInterrupt:
        pass
    finally:
        widget.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
