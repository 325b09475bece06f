# Release calendar server runner
import sys

from relcal_lib.main import create_app, Config
from relcal_lib.setup import get_parser, parse_args, render_template


def main(argv=None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.help:
        get_parser().print_help()
        return 0
    if args.print_template:
        print(render_template(), end="")
        return 0

    app = create_app(Config(
        data_dir=args.data_dir,
        static_dir=args.static_dir,
        log_file=args.log_file or None,
    ))

    import uvicorn
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
