import argparse
import logging
import sys

from .config import RunConfig
from .pipeline import run
from .report import Reporter


def build_arg_parser():
    # -h is a tool flag, so help lives on --help only
    ap = argparse.ArgumentParser(
        prog="godecls",
        usage="godecls [flags] [paths]",
        description="godecls lists declarations in files",
        add_help=False,
    )
    ap.add_argument("-l", dest="list_only", action="store_true",
                    help="list the files godecls would process on stderr")
    ap.add_argument("-h", dest="no_header", action="store_true",
                    help="never print filenames with output lines")
    ap.add_argument("-H", dest="header", action="store_true",
                    help="always print filenames with output lines")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="debug logging on stderr")
    ap.add_argument("--help", action="help", help="show this help message and exit")
    ap.add_argument("paths", nargs="*", help="Go files or directories (default: stdin)")
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = RunConfig.from_flags(list_only=args.list_only, no_header=args.no_header,
                                  header=args.header, verbose=args.verbose)
    return int(run(args.paths, config, Reporter()))


if __name__ == "__main__":
    sys.exit(main())
