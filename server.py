from dataclasses import dataclass, field
import os
import time

from flask import Flask, Response, jsonify, render_template, request
from flask_cors import CORS

import etymology
from debug_tools import DEBUG
from export import generate_table_text
from markup import TAG_STYLES, render_all, to_html, tokenize
from stemmer import stem

# Set DEBUG_REPORT=1 to print a consolidated report after every lookup.
if os.environ.get("DEBUG_REPORT"):
    DEBUG.enable()


def _read_timeout():
    value = os.environ.get("LOOKUP_TIMEOUT")
    return float(value) if value else None


ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

app = Flask(__name__)
app.config["API_KEY"] = os.environ.get("MERRIAM_WEBSTER_API_KEY", "")
app.config["LOOKUP_TIMEOUT"] = _read_timeout()
CORS(app, resources={r"/api/*": {"origins": ALLOWED_ORIGINS}})

MISSING_KEY = "Dictionary API key is not configured"


# ---------------------------------------------------------
# Page state
# ---------------------------------------------------------
@dataclass
class PageState:
    text: str = ""
    results: list = field(default_factory=list)
    error: str = ""
    table_text: str = ""


def result_view(result):
    """
    Everything the page and the JSON API show for one word.
    """
    view = result.to_dict()
    view["stem"] = stem(result.word)
    if isinstance(result, etymology.Found):
        view["html"] = to_html(render_all(result.etymology))
    return view


def check_markup(result):
    """Note tags the renderer doesn't know and braces left unmatched."""
    for token in tokenize(result.etymology):
        if token.kind not in TAG_STYLES:
            DEBUG.add_anomaly("unknown_tags", f"{result.word}: {token.kind}")
        elif token.kind == "text" and ("{" in token.content or "}" in token.content):
            DEBUG.add_anomaly("unmatched_braces", f"{result.word}: {token.content}")


# ---------------------------------------------------------
# Lookup pipeline
# ---------------------------------------------------------
def run_lookups(text):
    DEBUG.reset()
    DEBUG.add_flow("lookup_started")

    start_time = time.time()
    words = etymology.split_words(text)
    print(f"Looking up {len(words)} word(s)")
    DEBUG.set_count("words", len(words))

    results = etymology.lookup_words(
        text, app.config["API_KEY"], app.config["LOOKUP_TIMEOUT"]
    )
    DEBUG.add_flow("lookup_completed")
    print(f"Lookups complete — {time.time() - start_time:.2f}s")

    found = [r for r in results if isinstance(r, etymology.Found)]
    not_found = [r for r in results if isinstance(r, etymology.NotFound)]

    DEBUG.set_count("found", len(found))
    DEBUG.set_count("not_found", len(not_found))
    DEBUG.set_count("expanded", sum(1 for r in found if r.expanded_form))

    for r in found:
        DEBUG.add_sample("results", r)
        check_markup(r)

    for r in not_found:
        print(f"  {r.word}: {r.error}")
        DEBUG.add_sample("errors", r)
        if r.error != etymology.NO_ETYMOLOGY:
            DEBUG.add_anomaly("lookup_errors", f"{r.word}: {r.error}")

    DEBUG.add_flow("response_ready")
    report = DEBUG.emit()
    if report:
        print(report)

    return results


# ---------------------------------------------------------
# Browser UI
# ---------------------------------------------------------
@app.route("/", methods=["GET", "POST"])
def index():
    state = PageState()

    if request.method == "POST":
        print("Received request")
        state.text = request.form.get("text", "")

        if not app.config["API_KEY"]:
            state.error = MISSING_KEY
        else:
            results = run_lookups(state.text)
            state.results = [result_view(r) for r in results]
            state.table_text = generate_table_text(results) if results else ""

    return render_template("index.html", state=state)


# ---------------------------------------------------------
# JSON API
# ---------------------------------------------------------
def _submitted_text():
    data = request.get_json(silent=True) or {}
    text = data.get("text") if isinstance(data, dict) else None
    return text if isinstance(text, str) else None


@app.route("/api/lookup", methods=["POST", "OPTIONS"])
def api_lookup():
    if request.method == "OPTIONS":
        return '', 204

    print("Received request")
    text = _submitted_text()
    if text is None:
        return jsonify({"error": "Expected JSON body with a 'text' string"}), 400
    if not app.config["API_KEY"]:
        return jsonify({"error": MISSING_KEY}), 500

    results = run_lookups(text)
    views = []
    for r in results:
        view = result_view(r)
        if "html" in view:
            view["html"] = str(view["html"])
        views.append(view)

    return jsonify({"results": views})


@app.route("/api/export", methods=["POST", "OPTIONS"])
def api_export():
    if request.method == "OPTIONS":
        return '', 204

    print("Received request")
    text = _submitted_text()
    if text is None:
        return jsonify({"error": "Expected JSON body with a 'text' string"}), 400
    if not app.config["API_KEY"]:
        return jsonify({"error": MISSING_KEY}), 500

    results = run_lookups(text)
    return Response(generate_table_text(results), mimetype="text/plain")


# ---------------------------------------------------------
# Run locally
# ---------------------------------------------------------
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port)
