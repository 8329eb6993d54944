"""Optional API key middleware for Flask."""

from flask import jsonify, request, session


def init_auth(app, config):
    """Set up Flask secret key and register auth middleware."""
    app.secret_key = config.get("_flask_secret", "dev-secret-change-me")

    secret_token = config.get("secret_token")
    if not secret_token:
        return  # No API key configured, all requests pass through

    @app.before_request
    def check_api_key():
        # Version is public so health checks work without a key
        if request.path == "/api/version":
            return None

        # Check session first (clients that already authenticated)
        if session.get("authenticated"):
            return None

        # Check API key header
        provided = request.headers.get("X-API-Key")
        if provided == secret_token:
            session["authenticated"] = True
            return None

        # Check query param
        provided = request.args.get("token")
        if provided == secret_token:
            session["authenticated"] = True
            return None

        return jsonify({"error": "Unauthorized. Provide X-API-Key header or ?token= param."}), 401
