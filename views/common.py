from flask import current_app, jsonify

from services.pokemon import FetchResult

SOURCE_EXTENSION = 'pokemon_source'


def get_source():
    """The list/detail source injected into the app by create_app."""
    return current_app.extensions[SOURCE_EXTENSION]


def status_response(result: FetchResult):
    """JSON response for a non-success result, or None when the caller should render data."""
    if result.is_success:
        return None
    if result.is_error:
        return jsonify({"error": result.error or "Failed to fetch."}), 500
    return jsonify({"status": result.status.value}), 202
