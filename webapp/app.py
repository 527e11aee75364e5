import json
import threading
from collections.abc import Hashable
from typing import Optional

from flask import Flask, request, render_template_string, redirect, url_for, jsonify

from idx import Collection, Secondary, NOT_FOUND, IdxException, UnknownIndex

DEMO_USERS = [
    {"name": "Bob", "age": 20},
    {"name": "Eve", "age": 27},
    {"name": "John", "age": 45},
]

app = Flask(__name__)
app.config.update(DEMO_PRIMARY="name", DEMO_VALUES=DEMO_USERS)
# IDX_DEMO_PRIMARY / IDX_DEMO_VALUES (JSON) override the demo data
app.config.from_prefixed_env("IDX")

# the current collection is swapped wholesale; writers hold the lock across read-modify-write
_state = {"collection": None}
_lock = threading.RLock()


def current_collection() -> Collection:
    with _lock:
        if _state["collection"] is None:
            field = app.config["DEMO_PRIMARY"]
            _state["collection"] = Collection(lambda v: v.get(field), app.config["DEMO_VALUES"])
        return _state["collection"]


def reset_collection(collection: Optional[Collection] = None):
    with _lock:
        _state["collection"] = collection


def _candidate_keys(raw):
    # the raw string is tried first; a JSON literal ("27", "true") only as a fallback
    if raw is None:
        return [None]
    keys = [raw]
    try:
        decoded = json.loads(raw)
    except ValueError:
        return keys
    if isinstance(decoded, Hashable) and decoded != raw:
        keys.append(decoded)
    return keys


INDEX_HTML = """
<!doctype html>
<html>
<head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
        <title>idx diagnostics</title>
        <style>body { background:#f8f9fa }</style>
</head>
<body>
<div class="container py-4">
        <div class="card mb-4">
            <div class="card-body">
                <h4 class="card-title">Collection</h4>
                <pre>{{ debug }}</pre>
                <p class="mb-0">{{ size }} value(s)</p>
            </div>
        </div>
        <div class="card mb-4">
            <div class="card-body">
                <h4 class="card-title">Lookup</h4>
                <form method="get" action="/fetch" class="row g-2">
                        <div class="col"><input name="key" class="form-control" placeholder="key"></div>
                        <div class="col"><input name="index" class="form-control" placeholder="index (blank = primary)"></div>
                        <div class="col-auto"><button class="btn btn-primary" type="submit">Fetch</button></div>
                </form>
            </div>
        </div>
        <h3>Values</h3>
        <table class="table table-striped">
        <thead><tr>{% for h in headers %}<th>{{h}}</th>{% endfor %}</tr></thead>
        <tbody>
        {% for r in rows %}
        <tr>{% for h in headers %}<td>{{ r.get(h, '') }}</td>{% endfor %}</tr>
        {% endfor %}
        </tbody>
        </table>
        <div class="d-flex justify-content-between align-items-center mb-2">
                <h3>Indices</h3>
        </div>
        <div class="list-group mb-3">
        {% for name, kind in indices.items() %}
                <div class="list-group-item d-flex justify-content-between align-items-center">
                        <div>{{name}} <span class="badge bg-secondary">{{kind}}</span></div>
                        <form method="post" action="{{ url_for('drop_index', name=name) }}" style="display:inline">
                                <button class="btn btn-sm btn-outline-danger" type="submit">Drop</button>
                        </form>
                </div>
        {% endfor %}
        </div>
        <form method="post" action="/index" class="row g-2">
                <div class="col"><input name="name" class="form-control" placeholder="index name"></div>
                <div class="col"><input name="field" class="form-control" placeholder="field"></div>
                <div class="col-auto form-check"><input type="checkbox" name="lazy" class="form-check-input" id="lazy"><label for="lazy" class="form-check-label">lazy</label></div>
                <div class="col-auto"><button class="btn btn-success" type="submit">Create Index</button></div>
        </form>
</div>
</body>
</html>
"""


@app.route("/", methods=["GET"])
def index():
    coll = current_collection()
    rows = coll.to_list()
    headers = []
    for r in rows:
        for k in r:
            if k not in headers:
                headers.append(k)
    return render_template_string(
        INDEX_HTML, debug=repr(coll), size=len(coll), rows=rows, headers=headers, indices=coll.indices
    )


@app.route("/fetch", methods=["GET"])
def fetch():
    name = request.args.get("index") or None
    coll = current_collection()
    for key in _candidate_keys(request.args.get("key")):
        full_key = Secondary(name, key) if name else key
        try:
            found = coll.fetch(full_key)
        except UnknownIndex as e:
            return jsonify({"found": False, "error": str(e)}), 404
        if found is not NOT_FOUND:
            return jsonify({"found": True, "value": found.value})
    return jsonify({"found": False}), 404


@app.route("/index", methods=["POST"])
def create_index():
    name = (request.form.get("name") or "").strip()
    field = (request.form.get("field") or "").strip()
    if not name or not field:
        return "Index name and field required", 400
    lazy = bool(request.form.get("lazy"))
    with _lock:
        try:
            coll = current_collection().create_index(name, lambda v: v.get(field), lazy=lazy)
        except IdxException as e:
            return f"Error creating index: {e}", 400
        reset_collection(coll)
    app.logger.info("created %s index %r on field %r", "lazy" if lazy else "eager", name, field)
    return redirect(url_for("index"))


@app.route("/index/<path:name>/drop", methods=["POST"])
def drop_index(name):
    with _lock:
        try:
            coll = current_collection().drop_index(name)
        except UnknownIndex as e:
            return f"Error dropping index: {e}", 404
        reset_collection(coll)
    app.logger.info("dropped index %r", name)
    return redirect(url_for("index"))


if __name__ == "__main__":
    app.run(port=5000)
