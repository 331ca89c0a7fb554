from flask import Blueprint, jsonify, render_template

from services.core import NO_IMAGE_PATH
from services.links import home_href
from services.text_utils import join_names
from .common import get_source, status_response

bp = Blueprint('detail', __name__)


@bp.route('/pokemon/<pokemon_id>')
def index(pokemon_id):
    result = get_source().fetch_item(pokemon_id)
    pokemon = result.data if result.is_success else None
    return render_template(
        'pokemon_detail.html',
        result=result,
        pokemon=pokemon,
        image=(pokemon.sprite if pokemon and pokemon.sprite else NO_IMAGE_PATH),
        types=join_names(pokemon.types) if pokemon else '',
        home=home_href(),
    )


@bp.route('/api/pokemon/<pokemon_id>')
def api_detail(pokemon_id):
    result = get_source().fetch_item(pokemon_id)
    pending = status_response(result)
    if pending is not None:
        return pending
    return jsonify(result.data.to_dict())
