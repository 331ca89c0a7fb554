import os

from dotenv import load_dotenv

load_dotenv()

# Upstream API
POKEAPI_BASE = (os.environ.get('POKEAPI_BASE') or 'https://pokeapi.co/api/v2').rstrip('/')
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', 10))

# Listing
PAGE_SIZE = int(os.environ.get('PAGE_SIZE', 20))
WINDOW_HALF_WIDTH = 2  # pages shown on each side of the current one

# How long a render waits on an upstream fetch before showing the loading state
RENDER_WAIT_SECONDS = float(os.environ.get('RENDER_WAIT_SECONDS', 5))

# Worker pool for upstream fetches (bounded to be polite to PokeAPI)
MAX_WORKERS = int(os.environ.get('MAX_WORKERS', 8))

# Optional JSON file backing the response cache; unset keeps it in memory only
CACHE_FILE = os.environ.get('CACHE_FILE') or None

LOG_LEVEL = (os.environ.get('LOG_LEVEL') or 'INFO').upper()

NO_IMAGE_PATH = '/static/no-image.svg'
