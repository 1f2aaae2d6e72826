from __future__ import annotations

import base64
import logging
from dataclasses import replace

from flask import Flask, jsonify, request

from .config import SETTINGS, configure_logging
from .errors import InvalidParameter, ProcessingFailure
from .infrastructure.cache import CACHE, render_key
from .infrastructure.network import FETCHER
from .infrastructure.responses import png_bytes, send_png
from .infrastructure.scheduler import PreviewScheduler
from .processing.palette import palette_image, select_palette
from .processing.params import OptimizationParams, coerce_bool, coerce_fields
from .processing.payload import build_payload
from .processing.pipeline import optimize_full, optimize_preview
from .processing.resample import decode_image

APP_VERSION = "1.0.0"

_TARGETS = {
    "full": optimize_full,
    "preview": optimize_preview,
}

logger = logging.getLogger(__name__)


class MissingSource(ValueError):
    pass


def load_source():
    """Return ``(raw_bytes, image)`` from an ``image`` upload or ``source_url``."""
    upload = request.files.get("image")
    if upload is not None:
        data = upload.read()
    else:
        url = request.values.get("source_url")
        if not url:
            raise MissingSource("Provide an 'image' upload or a 'source_url'.")
        data = FETCHER.fetch_bytes(url)
    if not data:
        raise MissingSource("The uploaded image is empty.")
    return data, decode_image(data)


def _render_preview(img, params: OptimizationParams) -> bytes:
    return png_bytes(optimize_preview(img, params))


def create_app() -> Flask:
    configure_logging()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = SETTINGS.max_upload_mb * 1024 * 1024
    app.config["OPTIMIZE_DEFAULTS"] = OptimizationParams()
    app.config["PREVIEW_SCHEDULER"] = PreviewScheduler(_render_preview)

    def request_params() -> OptimizationParams:
        return OptimizationParams.from_mapping(
            request.values, base=app.config["OPTIMIZE_DEFAULTS"]
        )

    @app.errorhandler(ProcessingFailure)
    def processing_failure(exc: ProcessingFailure):
        logger.warning("processing failed: %s", exc)
        return jsonify(error=str(exc)), 422

    @app.errorhandler(InvalidParameter)
    def invalid_parameter(exc: InvalidParameter):
        return jsonify(error=str(exc), field=exc.field), 400

    @app.errorhandler(MissingSource)
    def missing_source(exc: MissingSource):
        return jsonify(error=str(exc)), 400

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION)

    @app.route("/settings", methods=["GET", "PATCH"])
    def settings_view():
        defaults: OptimizationParams = app.config["OPTIMIZE_DEFAULTS"]
        if request.method == "GET":
            return jsonify(defaults.to_dict())

        payload = request.get_json(silent=True) or {}
        applied, errors = coerce_fields(payload)
        if applied:
            try:
                app.config["OPTIMIZE_DEFAULTS"] = replace(defaults, **applied)
            except InvalidParameter as exc:
                errors[exc.field] = str(exc)
                applied = {}

        settings = app.config["OPTIMIZE_DEFAULTS"]
        status = 400 if errors else 200
        updated = {key: settings.to_dict()[key] for key in applied}
        return (
            jsonify(updated=updated, errors=errors, settings=settings.to_dict()),
            status,
        )

    @app.route("/optimize", methods=["POST"])
    def optimize_view():
        target = (request.values.get("target", "full") or "full").lower()
        render = _TARGETS.get(target)
        if render is None:
            return jsonify(error=f"Unknown target {target!r}", field="target"), 400

        params = request_params()
        data, img = load_source()
        key = render_key(data, target, params.cache_key())
        cached = CACHE.get(key)
        if cached is None:
            cached = png_bytes(render(img, params))
            CACHE.put(key, cached)
        return send_png(cached)

    @app.route("/payload", methods=["POST"])
    def payload_view():
        _, img = load_source()
        payload = build_payload(img)
        return jsonify(
            orientation=payload.orientation,
            full={
                "width": payload.full_size[0],
                "height": payload.full_size[1],
                "jpeg": base64.b64encode(payload.full_jpeg).decode("ascii"),
            },
            thumbnail={
                "width": payload.thumb_size[0],
                "height": payload.thumb_size[1],
                "jpeg": base64.b64encode(payload.thumb_jpeg).decode("ascii"),
            },
        )

    @app.route("/preview", methods=["GET", "POST"])
    def preview_view():
        scheduler: PreviewScheduler = app.config["PREVIEW_SCHEDULER"]
        if request.method == "POST":
            params = request_params()
            _, img = load_source()
            generation = scheduler.schedule(img, params)
            return jsonify(generation=generation), 202

        wait = request.args.get("wait", type=float)
        result = scheduler.latest() if wait is None else scheduler.wait(wait)
        if result is None:
            return jsonify(error="No preview rendered yet."), 404
        if not result.ok:
            return jsonify(error=str(result.error), generation=result.generation), 422
        response = send_png(result.value)
        response.headers["X-Preview-Generation"] = str(result.generation)
        return response

    @app.route("/palette")
    def palette_view():
        try:
            measured = coerce_bool(request.args.get("measured", "true"))
        except ValueError:
            raise InvalidParameter("measured", "Expected a boolean") from None
        return send_png(png_bytes(palette_image(select_palette(measured))))

    return app


# Module-level application for WSGI servers (``photoframe.app:app``).
app = create_app()
application = app
