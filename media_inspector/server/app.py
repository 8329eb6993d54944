"""Flask app factory."""

from flask import Flask

from media_inspector.auth import init_auth
from media_inspector.probers.ffmpeg import FFmpeg
from media_inspector.server.api import api_bp


def create_app(config: dict, ffmpeg: FFmpeg | None = None) -> Flask:
    """Create and configure the Flask application.

    The ffmpeg binary is loaded once here; if it is missing the parse
    endpoints still work and the probe endpoints answer 503.
    """
    app = Flask(__name__)

    if ffmpeg is None:
        ffmpeg_config = config.get("ffmpeg", {})
        ffmpeg = FFmpeg(
            ffmpeg_config.get("binary", "ffmpeg"),
            timeout=ffmpeg_config.get("timeout", 60),
        )
        ffmpeg.load()

    app.config["MEDIA_INSPECTOR"] = config
    app.config["MEDIA_INSPECTOR_CONFIG_PATH"] = config.get("_config_path")
    app.config["FFMPEG"] = ffmpeg

    init_auth(app, config)
    app.register_blueprint(api_bp)

    return app
