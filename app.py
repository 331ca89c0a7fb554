import atexit
import logging
import os

from flask import Flask

from services import core
from services.cache import make_cache
from services.pokemon import PokeApiSource
from views.common import SOURCE_EXTENSION
from views.detail import bp as detail_bp
from views.listing import bp as listing_bp


def configure_logging(level: str = core.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )


def create_app(source=None, config=None):
    """Application factory.

    Args:
        source: Optional object offering fetch_list/fetch_item. Defaults to a
            PokeApiSource built from the environment configuration.
        config: Optional mapping of Flask config overrides.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    app.config['PAGE_SIZE'] = core.PAGE_SIZE
    app.config['POKEAPI_BASE'] = core.POKEAPI_BASE
    app.config['CACHE_FILE'] = core.CACHE_FILE
    if config:
        app.config.update(config)

    configure_logging()

    if source is None:
        source = PokeApiSource(
            base_url=app.config['POKEAPI_BASE'],
            cache=make_cache(app.config['CACHE_FILE']),
        )
        # Owned for the life of the process; release the pool and session on exit
        atexit.register(source.close)
    app.extensions[SOURCE_EXTENSION] = source

    app.register_blueprint(listing_bp)
    app.register_blueprint(detail_bp)

    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    create_app().run(host='0.0.0.0', port=port, debug=True)
