"""CLI entry point for media_inspector."""

import argparse
import json
import sys
from pathlib import Path

from media_inspector.config import (
    _find_config_path,
    generate_secret_token,
    load_config,
    save_config,
    validate_config,
)
from media_inspector.logging_setup import configure_logging
from media_inspector.parsers import extract_media_info, scan_supported_containers


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def _cmd_parse(args) -> int:
    sources = args.paths or ["-"]
    for source in sources:
        text = _read_text(source)
        if args.formats_listing:
            result = {"containers": [c.ffmpeg_name for c in scan_supported_containers(text)]}
        else:
            result = extract_media_info(None if source == "-" else source, text).to_dict()
        print(json.dumps(result))
    return 0


def _load_ffmpeg(config: dict):
    from media_inspector.probers.ffmpeg import FFmpeg

    ffmpeg = FFmpeg(config["ffmpeg"]["binary"], timeout=config["ffmpeg"]["timeout"])
    if not ffmpeg.load():
        print(f"ERROR: could not load ffmpeg: {config['ffmpeg']['binary']}", file=sys.stderr)
        return None
    return ffmpeg


def _cmd_probe(args, config: dict) -> int:
    from media_inspector.jobs.probe_job import probe_files

    if not args.paths:
        print("ERROR: probe needs at least one file", file=sys.stderr)
        return 2
    ffmpeg = _load_ffmpeg(config)
    if ffmpeg is None:
        return 1

    def on_result(path, info):
        print(json.dumps(info.to_dict()))

    summary = probe_files(args.paths, on_result, ffmpeg, workers=config["probe"]["workers"])
    for path in summary.failed:
        print(f"ERROR: could not probe {path}", file=sys.stderr)
    return 0 if not summary.failed else 1


def _cmd_formats(config: dict) -> int:
    ffmpeg = _load_ffmpeg(config)
    if ffmpeg is None:
        return 1
    containers = ffmpeg.get_supported_containers()
    if containers is None:
        return 1
    for container in containers:
        print(container.ffmpeg_name)
    return 0


def _cmd_serve(config: dict) -> int:
    from media_inspector.server.app import create_app

    app = create_app(config)
    print(
        f"Starting Media Inspector on http://{config['server']['host']}:{config['server']['port']}"
    )
    app.run(
        host=config["server"]["host"],
        port=config["server"]["port"],
        debug=False,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="media_inspector",
        description="Media Inspector - read media metadata from ffmpeg output",
    )
    parser.add_argument(
        "command",
        choices=["parse", "probe", "formats", "serve"],
        help="Command to execute",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Media files (probe) or saved ffmpeg output, '-' for stdin (parse)",
    )
    parser.add_argument(
        "--formats-listing",
        action="store_true",
        help="parse: treat input as 'ffmpeg -formats' output",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Override bind host",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Override bind port",
    )

    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else _find_config_path()
    config = load_config(config_path)
    config["_config_path"] = str(config_path)
    configure_logging(config)

    if args.command == "parse":
        return _cmd_parse(args)

    # Auto-generate Flask secret key on first run
    if args.command == "serve" and not config.get("_flask_secret"):
        config["_flask_secret"] = generate_secret_token()
        save_config(config, config_path)

    # Apply CLI overrides
    if args.host:
        config["server"]["host"] = args.host
    if args.port:
        config["server"]["port"] = args.port

    # Validate and warn
    for w in validate_config(config):
        print(f"WARNING: {w}", file=sys.stderr)

    if args.command == "probe":
        return _cmd_probe(args, config)
    if args.command == "formats":
        return _cmd_formats(config)
    return _cmd_serve(config)


if __name__ == "__main__":
    sys.exit(main())
