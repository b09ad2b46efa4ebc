"""CORS for the browser converter that reads the feed from another origin."""

from __future__ import annotations

from flask import Flask, Response, make_response, request

# The converter only ever issues an authenticated GET.
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Authorization",
}


def init_cors(app: Flask) -> None:
    """Enable CORS for CORS_ALLOWED_ORIGINS; a blank setting leaves it off."""

    origins = {item.strip() for item in app.config.get("CORS_ALLOWED_ORIGINS", "").split(",")}
    origins.discard("")
    if not origins:
        return
    max_age = str(app.config.get("CORS_MAX_AGE", 600))

    def allowed_origin() -> str | None:
        origin = request.headers.get("Origin")
        if origin and ("*" in origins or origin in origins):
            return "*" if "*" in origins else origin
        return None

    # Preflights carry no Authorization header, so they are answered before
    # the catch-all rates view can reject them.
    @app.before_request
    def answer_preflight():
        if request.method != "OPTIONS" or "Origin" not in request.headers:
            return None
        if "Access-Control-Request-Method" not in request.headers:
            return None
        origin = allowed_origin()
        if origin is None:
            return make_response("", 403)
        response = make_response("", 204)
        response.headers.update(PREFLIGHT_HEADERS)
        response.headers["Access-Control-Max-Age"] = max_age
        return response

    @app.after_request
    def add_origin_header(response: Response):
        origin = allowed_origin()
        if origin is not None:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.vary.add("Origin")
        return response
