from flask import jsonify


def success(data, status: int = 200):
    """Wrap a payload in the `{"data": ..., "error": null}` envelope."""
    return jsonify({"data": data, "error": None}), status
