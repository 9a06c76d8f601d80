#!/usr/bin/env python3
"""
JSON service and preview page for multilingual GemsAI content.

Every endpoint resolves content for one language, taken from (in order)
the ?lang= parameter, the 'lang' cookie, the Accept-Language header, and
finally the default language (Hebrew).

Usage:
    python viewer.py              # http://127.0.0.1:5001
    python viewer.py --port 8080

Without Supabase credentials the service runs in demo mode: lists are
empty and UI strings resolve to their keys.
"""

import argparse
import logging
from functools import lru_cache
from typing import Callable, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from config.settings import LoggingConfig, config
from src.db import SupabaseError
from src.i18n import I18nQueryBuilder, directional_container, directional_flex, text_direction

console = Console()
logger = logging.getLogger(__name__)

BuilderFactory = Callable[[str], I18nQueryBuilder]

api = Blueprint("api", __name__)

# UI strings shown on the preview page
INDEX_KEYS = ("app.title", "app.tagline", "nav.stories", "nav.products", "nav.jewelers")

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ language }}" dir="{{ direction }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ t['app.title'] }}</title>
    <style>
        body { font-family: -apple-system, "Segoe UI", Arial, sans-serif; margin: 0; background: #faf7f2; color: #2b2b2b; }
        header, main { max-width: 960px; margin: 0 auto; padding: 24px; }
        nav a { color: #8a6d3b; text-decoration: none; }
        .gap-4 { gap: 16px; }
        .flex { display: flex; }
        .items-center { align-items: center; }
        .card { background: #fff; border-radius: 8px; padding: 16px; margin-bottom: 12px; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
        .muted { color: #777; font-size: 0.9em; }
    </style>
</head>
<body>
    <header {{ header_attrs|xmlattr }}>
        <h1>{{ t['app.title'] }}</h1>
        <p class="muted">{{ t['app.tagline'] }}</p>
        <nav {{ nav_attrs|xmlattr }}>
            <a href="/api/stories?lang={{ language }}">{{ t['nav.stories'] }}</a>
            <a href="/api/products?lang={{ language }}">{{ t['nav.products'] }}</a>
            <a href="/api/jewelers?lang={{ language }}">{{ t['nav.jewelers'] }}</a>
            {% for code in languages %}
            <a href="/?lang={{ code }}">{{ code }}</a>
            {% endfor %}
        </nav>
    </header>
    <main>
        {% for product in products %}
        <div class="card">
            <strong>{{ product.name }}</strong>
            {% if product.is_fallback %}<span class="muted">({{ product.language_id }})</span>{% endif %}
            <p>{{ product.short_description or product.description or '' }}</p>
        </div>
        {% else %}
        <p class="muted">{{ language }} / {{ direction }}</p>
        {% endfor %}
    </main>
</body>
</html>
"""


# ============================================
# REQUEST HELPERS
# ============================================


def request_language() -> str:
    """Language for the current request."""
    supported = config.i18n.supported_languages

    for candidate in (request.args.get("lang"), request.cookies.get("lang")):
        if candidate in supported:
            return candidate

    best = request.accept_languages.best_match(supported)
    return best or config.i18n.default_language


def get_builder() -> I18nQueryBuilder:
    factory: BuilderFactory = current_app.config["BUILDER_FACTORY"]
    return factory(request_language())


def int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{name}' must be an integer, got '{value}'") from None


def bool_arg(name: str, default: bool) -> bool:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    return value.lower() not in ("0", "false", "no", "off")


def list_arg(name: str) -> list[str]:
    """Comma-separated values, blanks dropped."""
    raw = request.args.get(name, "")
    return [part.strip() for part in raw.split(",") if part.strip()]


def page_args() -> dict:
    return {
        "limit": int_arg("limit", 10),
        "offset": int_arg("offset", 0),
        "order_by": request.args.get("order_by", "created_at"),
        "order_direction": request.args.get("order_direction", "desc"),
    }


def items_response(language: str, items: list):
    return jsonify(
        {
            "language": language,
            "direction": text_direction(language),
            "items": [item.model_dump(mode="json") for item in items],
        }
    )


def not_found(what: str, item_id: str):
    return jsonify({"error": f"{what} {item_id} not found", "code": "NOT_FOUND"}), 404


# ============================================
# LANGUAGES AND UI STRINGS
# ============================================


@api.route("/api/languages")
def list_languages():
    """Active languages in display order."""
    languages = get_builder().get_languages()
    return jsonify([language.model_dump(mode="json") for language in languages])


@api.route("/api/translations/system")
def system_translations():
    """Cached batch lookup: /api/translations/system?keys=nav.home,nav.shop"""
    builder = get_builder()
    keys = list_arg("keys")
    return jsonify(
        {
            "language": builder.language_id,
            "translations": builder.get_cached_system_translations(keys),
        }
    )


@api.route("/api/translations/system/<key>")
def system_translation(key):
    builder = get_builder()
    text = builder.get_system_translation(key, request.args.get("fallback") or None)
    return jsonify({"language": builder.language_id, "key": key, "text": text})


@api.route("/api/translations/enum/<enum_type>")
def enum_translations(enum_type):
    builder = get_builder()
    return jsonify(
        {
            "language": builder.language_id,
            "enum_type": enum_type,
            "translations": builder.get_enum_translations(enum_type, list_arg("values")),
        }
    )


@api.route("/api/translations/completeness/<entity_type>/<entity_id>")
def translation_completeness(entity_type, entity_id):
    rows = get_builder().get_translation_completeness(entity_type, entity_id)
    return jsonify([row.model_dump(mode="json") for row in rows])


@api.route("/api/translations", methods=["POST"])
def create_translations():
    """Create one translation (JSON object) or many (JSON array)."""
    data = request.get_json(silent=True)
    if not isinstance(data, (dict, list)):
        return jsonify({"error": "Request body must be a JSON object or array"}), 400

    builder = get_builder()
    if isinstance(data, list):
        result = builder.bulk_create_translations(data)
        status = 200 if not result.failed else 207
        return jsonify(result.model_dump(mode="json")), status

    row = builder.create_translation(data)
    return jsonify({"success": True, "translation": row}), 201


@api.route("/api/cache/clear", methods=["POST"])
def clear_cache():
    I18nQueryBuilder.clear_cache()
    logger.info("System translation cache cleared")
    return jsonify({"success": True})


# ============================================
# MULTILINGUAL CONTENT
# ============================================


@api.route("/api/stories")
def list_stories():
    builder = get_builder()
    stories = builder.get_stories(user_id=request.args.get("user_id"), **page_args())
    return items_response(builder.language_id, stories)


@api.route("/api/stories/<story_id>")
def get_story(story_id):
    story = get_builder().get_story_by_id(story_id)
    if story is None:
        return not_found("Story", story_id)
    return jsonify(story.model_dump(mode="json"))


@api.route("/api/products")
def list_products():
    builder = get_builder()
    products = builder.get_products(
        jeweler_id=request.args.get("jeweler_id"),
        category=request.args.get("category"),
        available_only=bool_arg("available_only", True),
        **page_args(),
    )
    return items_response(builder.language_id, products)


@api.route("/api/products/<product_id>")
def get_product(product_id):
    product = get_builder().get_product_by_id(product_id)
    if product is None:
        return not_found("Product", product_id)
    return jsonify(product.model_dump(mode="json"))


@api.route("/api/jewelers")
def list_jewelers():
    builder = get_builder()
    jewelers = builder.get_jewelers(
        verified_only=bool_arg("verified_only", True), **page_args()
    )
    return items_response(builder.language_id, jewelers)


@api.route("/api/jewelers/<jeweler_id>")
def get_jeweler(jeweler_id):
    jeweler = get_builder().get_jeweler_by_id(jeweler_id)
    if jeweler is None:
        return not_found("Jeweler", jeweler_id)
    return jsonify(jeweler.model_dump(mode="json"))


# ============================================
# SEARCH
# ============================================


@api.route("/api/search/stories")
def search_stories():
    builder = get_builder()
    results = builder.search_stories(
        request.args.get("q", ""), limit=int_arg("limit", 10), offset=int_arg("offset", 0)
    )
    return items_response(builder.language_id, results)


@api.route("/api/search/products")
def search_products():
    builder = get_builder()
    results = builder.search_products(
        request.args.get("q", ""),
        limit=int_arg("limit", 10),
        offset=int_arg("offset", 0),
        category=request.args.get("category"),
    )
    return items_response(builder.language_id, results)


# ============================================
# PREVIEW PAGE
# ============================================


@api.route("/")
def index():
    """Serve the preview page in the request language."""
    builder = get_builder()
    language = builder.language_id
    is_rtl = text_direction(language) == "rtl"

    try:
        products = builder.get_products(limit=5)
    except SupabaseError as e:
        logger.warning("Preview could not load products: %s", e)
        products = []

    html = render_template_string(
        HTML_TEMPLATE,
        language=language,
        direction=text_direction(language),
        languages=config.i18n.supported_languages,
        t=builder.get_cached_system_translations(INDEX_KEYS),
        header_attrs=directional_container(is_rtl, align_text=True).attrs,
        nav_attrs=directional_flex(is_rtl, gap="md").attrs,
        products=products,
    )
    response = current_app.make_response(html)
    if request.args.get("lang") == language:
        response.set_cookie("lang", language, max_age=60 * 60 * 24 * 365, samesite="Lax")
    return response


# ============================================
# ERRORS
# ============================================


def handle_supabase_error(error: SupabaseError):
    if error.is_connection_error():
        status = 503
    elif error.is_permission_error():
        status = 403
    else:
        status = 500
    logger.error("Database error [%s]: %s", error.code, error.message)
    return jsonify(error.to_dict()), status


def handle_validation_error(error: ValidationError):
    details = [
        {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
        for err in error.errors()
    ]
    return jsonify({"error": "Invalid request", "code": "VALIDATION_ERROR", "details": details}), 400


def handle_value_error(error: ValueError):
    return jsonify({"error": str(error), "code": "BAD_REQUEST"}), 400


# ============================================
# APP FACTORY
# ============================================


def configure_logging(app: Flask, logging_config: Optional[LoggingConfig] = None) -> None:
    """Send app and request logs through rich, and optionally to a file."""
    logging_config = logging_config or config.logging
    level = logging_config.log_level.upper()

    handlers: list[logging.Handler] = []
    if logging_config.log_to_console:
        handlers.append(RichHandler(console=console, show_path=False, rich_tracebacks=True))
    if logging_config.log_to_file:
        logging_config.ensure_dirs()
        file_handler = logging.FileHandler(logging_config.log_dir / "viewer.log", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    for name in (app.logger.name, __name__, "werkzeug"):
        target = logging.getLogger(name)
        target.handlers = list(handlers)
        target.setLevel(level)
        target.propagate = False


@lru_cache(maxsize=None)
def default_builder(language: str) -> I18nQueryBuilder:
    """One builder (and client) per language for the life of the process."""
    return I18nQueryBuilder(language)


def create_app(
    builder_factory: Optional[BuilderFactory] = None,
    logging_config: Optional[LoggingConfig] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        builder_factory: language -> I18nQueryBuilder (one per request)
        logging_config: Logging settings (defaults to global config)
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.config["BUILDER_FACTORY"] = builder_factory or default_builder

    configure_logging(app, logging_config)
    app.register_blueprint(api)
    app.register_error_handler(SupabaseError, handle_supabase_error)
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(ValueError, handle_value_error)
    return app


app = create_app()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="GemsAI multilingual content service")
    parser.add_argument("--host", default=config.server.host, help="Interface to bind")
    parser.add_argument(
        "--port",
        type=int,
        default=config.server.port,
        help=f"Port to run the server on (default: {config.server.port})",
    )
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    console.print()
    console.print("[bold]GemsAI i18n service[/bold]")
    if config.supabase.is_configured:
        console.print(f"[dim]Database:[/dim]  {config.supabase.url}")
    else:
        console.print("[yellow]Database:  not configured (demo mode)[/yellow]")
    console.print(
        f"[dim]Languages:[/dim] {', '.join(config.i18n.supported_languages)} "
        f"(default: {config.i18n.default_language})"
    )
    console.print(f"\n[bold cyan]http://{args.host}:{args.port}[/bold cyan]")
    console.print("[dim]Press CTRL+C to stop the server[/dim]\n")

    app.run(host=args.host, port=args.port, debug=args.debug or config.server.debug)
