import logging
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import requests

from .cache import MemoryCache
from .core import (
    MAX_WORKERS,
    PAGE_SIZE,
    POKEAPI_BASE,
    RENDER_WAIT_SECONDS,
    REQUEST_TIMEOUT,
)
from .errors import LoadingError
from .text_utils import extract_resource_id

logger = logging.getLogger(__name__)


class FetchStatus(Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class FetchResult:
    status: FetchStatus = FetchStatus.IDLE
    data: object = None
    error: Optional[str] = None

    @classmethod
    def loading(cls):
        return cls(FetchStatus.LOADING)

    @classmethod
    def success(cls, data):
        return cls(FetchStatus.SUCCESS, data=data)

    @classmethod
    def failure(cls, message: str):
        return cls(FetchStatus.ERROR, error=message)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self.status is FetchStatus.SUCCESS


@dataclass(frozen=True)
class PokemonListItem:
    name: str
    url: str

    @property
    def id(self) -> str:
        return extract_resource_id(self.url)


@dataclass(frozen=True)
class PokemonPage:
    count: Optional[int]
    results: Tuple[PokemonListItem, ...] = field(default_factory=tuple)
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_json(cls, j):
        if not isinstance(j, dict):
            raise LoadingError("Unexpected list payload")
        results = j.get('results')
        if not isinstance(results, list):
            raise LoadingError("List payload has no results")
        items = []
        for entry in results:
            if not isinstance(entry, dict):
                raise LoadingError("Malformed list entry")
            items.append(PokemonListItem(
                name=str(entry.get('name') or ''),
                url=str(entry.get('url') or ''),
            ))
        count = j.get('count')
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            count = None
        return cls(
            count=count,
            results=tuple(items),
            next=j.get('next'),
            previous=j.get('previous'),
        )


def pick_sprite(sprites) -> Optional[str]:
    """Primary image: front_default, then official artwork, then any other front_default."""
    if not isinstance(sprites, dict):
        return None
    art = sprites.get('front_default')
    if art and isinstance(art, str):
        return art
    other = sprites.get('other') or {}
    if not isinstance(other, dict):
        return None
    artwork = other.get('official-artwork')
    if isinstance(artwork, dict) and isinstance(artwork.get('front_default'), str) and artwork['front_default']:
        return artwork['front_default']
    for k in other.values():
        if isinstance(k, dict) and isinstance(k.get('front_default'), str) and k['front_default']:
            return k['front_default']
    return None


def _ref_name(entry, ref_field):
    """Name of a nested {ref_field: {"name": ...}} resource reference, or None."""
    if not isinstance(entry, dict):
        return None
    ref = entry.get(ref_field)
    if not isinstance(ref, dict):
        return None
    nm = ref.get('name')
    return nm if isinstance(nm, str) else None


@dataclass(frozen=True)
class PokemonDetails:
    name: str
    height: int
    weight: int
    sprite: Optional[str] = None
    types: Tuple[str, ...] = field(default_factory=tuple)
    id: Optional[int] = None
    base_experience: Optional[int] = None
    stats: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def height_cm(self) -> int:
        # PokeAPI reports decimetres
        return self.height * 10

    @property
    def weight_kg(self) -> float:
        # PokeAPI reports hectograms
        return self.weight / 10

    @classmethod
    def from_json(cls, j):
        if not isinstance(j, dict) or not j.get('name'):
            raise LoadingError("Unexpected pokemon payload")
        try:
            height = int(j.get('height') or 0)
            weight = int(j.get('weight') or 0)
        except (TypeError, ValueError):
            raise LoadingError("Pokemon payload has non-numeric height/weight")
        raw_types = j.get('types') or []
        raw_stats = j.get('stats') or []
        if not isinstance(raw_types, list) or not isinstance(raw_stats, list):
            raise LoadingError("Pokemon payload has malformed types/stats")
        types = []
        for t in raw_types:
            nm = _ref_name(t, 'type')
            if nm:
                types.append(nm)
        stats = []
        for s in raw_stats:
            nm = _ref_name(s, 'stat')
            if nm and isinstance(s.get('base_stat'), int):
                stats.append((nm, s['base_stat']))
        return cls(
            name=j['name'],
            height=height,
            weight=weight,
            sprite=pick_sprite(j.get('sprites')),
            types=tuple(types),
            id=j.get('id') if isinstance(j.get('id'), int) else None,
            base_experience=j.get('base_experience') if isinstance(j.get('base_experience'), int) else None,
            stats=tuple(stats),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'height': self.height,
            'weight': self.weight,
            'height_cm': self.height_cm,
            'weight_kg': self.weight_kg,
            'sprite': self.sprite,
            'types': list(self.types),
            'base_experience': self.base_experience,
            'stats': [{'name': n, 'base_stat': v} for n, v in self.stats],
        }


def list_key(offset: int, limit: int) -> str:
    return f"list:offset={offset}:limit={limit}"


def item_key(pokemon_id: str) -> str:
    return f"item:{pokemon_id}"


class PokeApiSource:
    """List and detail source for PokeAPI with response caching and request de-duplication.

    Each key (list offset/limit or pokemon id) has at most one upstream request
    in flight; concurrent callers share its future. Only successful responses
    are cached, so a failed key is retried on the next call. A call waits up to
    `wait` seconds and reports LOADING if the fetch is still running.
    """

    def __init__(self, base_url: str = POKEAPI_BASE, cache=None, session=None,
                 executor=None, timeout: float = REQUEST_TIMEOUT,
                 wait: float = RENDER_WAIT_SECONDS):
        self.base_url = base_url.rstrip('/')
        self.cache = cache if cache is not None else MemoryCache()
        self.session = session or requests.Session()
        self.executor = executor or ThreadPoolExecutor(max_workers=MAX_WORKERS)
        self.timeout = timeout
        self.wait = wait
        self._inflight = {}  # key -> Future
        self._lock = threading.RLock()

    def fetch_list(self, offset: int = 0, limit: int = PAGE_SIZE, wait: Optional[float] = None) -> FetchResult:
        params = {'offset': offset, 'limit': limit}
        return self._query(list_key(offset, limit), '/pokemon', params, PokemonPage.from_json, wait)

    def fetch_item(self, pokemon_id, wait: Optional[float] = None) -> FetchResult:
        pid = '' if pokemon_id is None else str(pokemon_id)
        if not pid:
            return FetchResult()
        return self._query(item_key(pid), f"/pokemon/{pid}", None, PokemonDetails.from_json, wait)

    def close(self) -> None:
        self.executor.shutdown(wait=False)
        self.session.close()

    def _query(self, key, path, params, parse, wait) -> FetchResult:
        cached = self.cache.get(key)
        if cached is not None:
            try:
                return FetchResult.success(parse(cached))
            except LoadingError as e:
                logger.warning("Dropping unusable cache entry %s: %s", key, e)
                self.cache.delete(key)

        with self._lock:
            future = self._inflight.get(key)
            if future is None:
                future = self.executor.submit(self._load, key, path, params, parse)
                self._inflight[key] = future
                future.add_done_callback(lambda f, k=key: self._forget(k, f))

        try:
            data = future.result(timeout=self.wait if wait is None else wait)
        except FutureTimeout:
            return FetchResult.loading()
        except LoadingError as e:
            return FetchResult.failure(str(e))
        return FetchResult.success(data)

    def _forget(self, key, future) -> None:
        with self._lock:
            if self._inflight.get(key) is future:
                del self._inflight[key]

    def _load(self, key, path, params, parse):
        payload = self._get_json(path, params)
        data = parse(payload)
        self.cache.set(key, payload)
        return data

    def _get_json(self, path, params=None):
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.RequestException as e:
            logger.warning("Upstream request failed for %s: %s", url, e)
            raise LoadingError(str(e), url=url) from e
        except ValueError as e:
            logger.warning("Upstream returned invalid JSON for %s: %s", url, e)
            raise LoadingError(f"Invalid JSON from {url}", url=url) from e
