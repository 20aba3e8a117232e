"""
Flask web server for the syllabus topic pipeline.

Routes
──────
GET  /api/ai-status                                  Is AI extraction configured?
POST /api/parse-pdf                                  Upload a PDF → raw text + topics
POST /api/extract                                    Pasted text → topics
POST /api/ai-extract                                 Text → topics via Claude
GET  /api/generate?subject=...                       Template lookup for a subject
GET  /api/templates                                  List persisted templates
POST /api/templates                                  Add a persisted template
GET  /api/users/<uid>/subjects/<sid>/topics          Committed topics
POST /api/users/<uid>/subjects/<sid>/topics          Commit a reviewed topic list
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from core import store
from core.ai_extractor import AIExtractor
from core.extractor import extract_pdf_topics, parse_pasted_text
from core.generator import generate
from core.models import ExtractionSource
from core.pdf_reader import PdfReadError, read_pdf
from core.preview import PreviewEditor

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings()
extractor = AIExtractor(settings)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes

# Initialise the SQLite store and copy predefined templates into it
store.init_db()
store.ensure_seeded()


@app.errorhandler(RequestEntityTooLarge)
def upload_too_large(exc):
    limit_kb = app.config["MAX_CONTENT_LENGTH"] // 1024
    return jsonify({"error": f"File exceeds the {limit_kb} KB upload limit"}), 413


def _json_object() -> dict | None:
    """Return the request's JSON object, {} when there is no body, None if not an object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _is_topic_item(item: object) -> bool:
    if isinstance(item, dict):
        return isinstance(item.get("name"), str)
    return isinstance(item, str)


_NOT_AN_OBJECT = {"error": "JSON body must be an object"}


# ── Extraction API ─────────────────────────────────────────────────────────

@app.route("/api/ai-status")
def ai_status():
    return jsonify({"available": extractor.available})


@app.route("/api/parse-pdf", methods=["POST"])
def parse_pdf():
    """Extract raw text and candidate topics from an uploaded PDF.

    Form fields:
      file  (required) the PDF to parse
    """
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        return jsonify({"error": "No PDF file uploaded"}), 400
    if upload.mimetype != "application/pdf":
        return jsonify({"error": "Only PDF files are allowed"}), 400

    try:
        pdf = read_pdf(upload.read())
    except PdfReadError as exc:
        logger.exception("PDF parse error for file=%r", upload.filename)
        return jsonify({"error": f"Failed to parse PDF: {exc}"}), 500

    return jsonify(
        {
            "success": True,
            "raw_text": pdf.text[: settings.raw_text_preview_chars],
            "topics": extract_pdf_topics(pdf.text),
            "page_count": pdf.page_count,
            "source": ExtractionSource.PDF.value,
        }
    )


@app.route("/api/extract", methods=["POST"])
def extract_text():
    """Parse pasted text with the marker-only rules.

    JSON body: {"text": "...", "source": "manual" | "pdf" | ...}
    """
    body = _json_object()
    if body is None:
        return jsonify(_NOT_AN_OBJECT), 400
    try:
        source = ExtractionSource(body.get("source", ExtractionSource.MANUAL.value))
    except ValueError:
        return jsonify({"error": "Unknown source tag"}), 400

    return jsonify({"topics": parse_pasted_text(body.get("text")), "source": source.value})


@app.route("/api/ai-extract", methods=["POST"])
def ai_extract():
    """Extract topics from syllabus text with Claude.

    JSON body: {"text": "..."}
    """
    if not extractor.available:
        return jsonify(
            {
                "error": "AI extraction not configured. Set ANTHROPIC_API_KEY environment variable.",
                "available": False,
            }
        ), 400

    body = _json_object()
    if body is None:
        return jsonify(_NOT_AN_OBJECT), 400
    try:
        topics = extractor.extract(body.get("text") or "")
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    except Exception as exc:
        logger.exception("AI extraction error")
        return jsonify({"error": f"AI extraction failed: {exc}"}), 500

    return jsonify(
        {
            "success": True,
            "topics": topics,
            "available": True,
            "source": ExtractionSource.AI.value,
        }
    )


@app.route("/api/generate")
def generate_topics():
    """Return template topics for ?subject=..., or source "none"."""
    result = generate(request.args.get("subject", ""))
    return jsonify(result.model_dump(mode="json"))


# ── Templates API ──────────────────────────────────────────────────────────

@app.route("/api/templates")
def list_templates():
    return jsonify([t.model_dump() for t in store.list_templates()])


@app.route("/api/templates", methods=["POST"])
def add_template():
    """Create a persisted template. JSON body: {"name": "...", "topics": [...]}"""
    body = _json_object()
    if body is None:
        return jsonify(_NOT_AN_OBJECT), 400
    name, topics = body.get("name"), body.get("topics")
    if not isinstance(name, str) or not isinstance(topics, list):
        return jsonify({"error": "name (string) and topics (list) are required"}), 400

    try:
        created = store.add_template(name, topics)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    if not created:
        return jsonify({"error": "Template already exists"}), 409
    return jsonify({"created": name.strip()}), 201


# ── Topics API ─────────────────────────────────────────────────────────────

@app.route("/api/users/<user_id>/subjects/<subject_id>/topics")
def list_topics(user_id: str, subject_id: str):
    return jsonify(
        [t.model_dump(mode="json") for t in store.get_topics(user_id, subject_id)]
    )


@app.route("/api/users/<user_id>/subjects/<subject_id>/topics", methods=["POST"])
def commit_topics(user_id: str, subject_id: str):
    """Commit a reviewed topic list.

    JSON body: {"topics": [...], "unit": 1, "source": "template"}
    """
    body = _json_object()
    if body is None:
        return jsonify(_NOT_AN_OBJECT), 400
    topics = body.get("topics")
    if not isinstance(topics, list) or not all(_is_topic_item(t) for t in topics):
        return jsonify(
            {"error": "topics must be a list of names or {\"name\", \"unit\"} objects"}
        ), 400

    try:
        source = ExtractionSource(body.get("source", ExtractionSource.MANUAL.value))
    except ValueError:
        return jsonify({"error": "Unknown source tag"}), 400

    editor = PreviewEditor(topics, source=source)
    created = editor.commit_to(
        store.save_topics, user_id, subject_id, default_unit=body.get("unit", 1)
    )
    return jsonify({"created": created}), 201 if created else 200


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
