"""REST API endpoints."""

import os

from flask import Blueprint, current_app, jsonify, request

from media_inspector import __version__
from media_inspector.config import normalize_allowed_dirs
from media_inspector.exceptions import (
    FFmpegAlreadyRunningError,
    FFmpegError,
    FFmpegNotLoadedError,
)
from media_inspector.media import MediaInfo
from media_inspector.parsers import extract_media_info, scan_supported_containers

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _get_ffmpeg():
    return current_app.config["FFMPEG"]


def _get_config():
    return current_app.config["MEDIA_INSPECTOR"]


def _ffmpeg_error_response(error: FFmpegError):
    if isinstance(error, FFmpegNotLoadedError):
        return jsonify({"error": "ffmpeg is not available"}), 503
    if isinstance(error, FFmpegAlreadyRunningError):
        return jsonify({"error": "ffmpeg is already running"}), 409
    return jsonify({"error": str(error)}), 502


def _text_from_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get("text"), str):
        return None, body
    return body["text"], body


@api_bp.route("/parse", methods=["POST"])
def parse_media_info():
    text, body = _text_from_body()
    if text is None:
        return jsonify({"error": "JSON body with a 'text' string is required"}), 400
    info = extract_media_info(body.get("source"), text)
    return jsonify(info.to_dict())


@api_bp.route("/parse/formats", methods=["POST"])
def parse_formats():
    text, _body = _text_from_body()
    if text is None:
        return jsonify({"error": "JSON body with a 'text' string is required"}), 400
    containers = scan_supported_containers(text)
    return jsonify({"containers": [c.ffmpeg_name for c in containers]})


def _is_allowed(path: str, allowed_dirs: list[str]) -> bool:
    real = os.path.realpath(path)
    for d in allowed_dirs:
        root = os.path.realpath(d)
        if real == root or real.startswith(root.rstrip(os.sep) + os.sep):
            return True
    return False


@api_bp.route("/probe", methods=["POST"])
def probe_file():
    body = request.get_json(silent=True)
    path = body.get("path") if isinstance(body, dict) else None
    if not isinstance(path, str) or not path:
        return jsonify({"error": "JSON body with a 'path' string is required"}), 400
    if not os.path.isabs(path):
        return jsonify({"error": "Path must be absolute"}), 400

    allowed_dirs = normalize_allowed_dirs(_get_config().get("probe", {}).get("allowed_dirs")) or []
    if not _is_allowed(path, allowed_dirs):
        return jsonify({"error": "Path is not inside an allowed directory"}), 403
    if not os.path.isfile(path):
        return jsonify({"error": "File not found"}), 404

    try:
        info = _get_ffmpeg().probe(path)
    except FFmpegError as e:
        return _ffmpeg_error_response(e)
    if info == MediaInfo(info.source_file):
        return jsonify({"error": "ffmpeg reported no media information"}), 502
    return jsonify(info.to_dict())


@api_bp.route("/formats")
def supported_formats():
    try:
        containers = _get_ffmpeg().supported_containers()
    except FFmpegError as e:
        return _ffmpeg_error_response(e)
    return jsonify({"containers": [c.ffmpeg_name for c in containers]})


@api_bp.route("/config", methods=["GET"])
def get_config():
    config = _get_config()
    # Don't expose secrets
    safe_config = {
        "server": config.get("server", {}),
        "ffmpeg": config.get("ffmpeg", {}),
        "probe": config.get("probe", {}),
        "logging": config.get("logging", {}),
        "has_secret_token": bool(config.get("secret_token")),
        "ffmpeg_loaded": _get_ffmpeg().loaded,
    }
    return jsonify(safe_config)


@api_bp.route("/config", methods=["PUT"])
def update_config():
    from media_inspector.config import (
        save_config,
        valid_timeout,
        validate_config,
    )

    config = _get_config()
    updates = request.get_json(silent=True)
    if not isinstance(updates, dict) or not updates:
        return jsonify({"error": "No JSON body provided"}), 400

    # Check everything before touching the live config
    allowed_dirs = None
    if isinstance(updates.get("probe"), dict) and "allowed_dirs" in updates["probe"]:
        allowed_dirs = normalize_allowed_dirs(updates["probe"]["allowed_dirs"])
        if allowed_dirs is None:
            return jsonify({"error": "probe.allowed_dirs must be a list of paths"}), 400
    timeout = None
    if isinstance(updates.get("ffmpeg"), dict) and "timeout" in updates["ffmpeg"]:
        timeout = updates["ffmpeg"]["timeout"]
        if not valid_timeout(timeout):
            return jsonify({"error": "ffmpeg.timeout must be a positive number"}), 400

    # Apply allowed updates
    if allowed_dirs is not None:
        config["probe"]["allowed_dirs"] = allowed_dirs
    if timeout is not None:
        config["ffmpeg"]["timeout"] = timeout
        _get_ffmpeg().timeout = timeout
    if isinstance(updates.get("server"), dict):
        if "host" in updates["server"]:
            config["server"]["host"] = updates["server"]["host"]
        if "port" in updates["server"]:
            config["server"]["port"] = updates["server"]["port"]

    warnings = validate_config(config)
    config_path = current_app.config.get("MEDIA_INSPECTOR_CONFIG_PATH")
    if config_path:
        from pathlib import Path

        save_config(config, Path(config_path))
    current_app.config["MEDIA_INSPECTOR"] = config

    return jsonify({"status": "updated", "warnings": warnings})


@api_bp.route("/version")
def get_version():
    return jsonify({"version": __version__})
