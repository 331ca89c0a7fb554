import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from services.links import build_page_controls, detail_href
from services.pagination import coerce_page_index, compute_window
from .common import get_source, status_response

logger = logging.getLogger(__name__)

bp = Blueprint('listing', __name__)


def _load_page():
    page = coerce_page_index(request.args.get('offset'))
    page_size = current_app.config['PAGE_SIZE']
    result = get_source().fetch_list(offset=page * page_size, limit=page_size)
    return page, page_size, result


def _pagination_for(data, page, page_size):
    if data is None or not data.count:
        return None, []
    window = compute_window(data.count, page_size, page)
    return window, build_page_controls(window)


@bp.route('/')
def index():
    page, page_size, result = _load_page()
    if result.is_error:
        logger.info("List page %d failed: %s", page, result.error)
    window, controls = _pagination_for(result.data, page, page_size)
    items = []
    if result.is_success:
        items = [
            {'name': p.name, 'id': p.id, 'href': detail_href(p.id)}
            for p in result.data.results
        ]
    return render_template(
        'pokemon_list.html',
        result=result,
        items=items,
        window=window,
        controls=controls,
    )


@bp.route('/api/pokemon')
def api_list():
    page, page_size, result = _load_page()
    pending = status_response(result)
    if pending is not None:
        return pending
    data = result.data
    window, controls = _pagination_for(data, page, page_size)
    pagination = None
    if window is not None:
        pagination = {**window.to_dict(), 'controls': [c.to_dict() for c in controls]}
    return jsonify({
        'items': [
            {'name': p.name, 'id': p.id, 'href': detail_href(p.id)}
            for p in data.results
        ],
        'count': data.count,
        'pagination': pagination,
    })
