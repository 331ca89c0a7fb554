def extract_resource_id(url: str) -> str:
    """Return the path segment before the last '/' of a resource URL.

    "https://pokeapi.co/api/v2/pokemon/25/" -> "25". Strings with fewer than
    two '/'-delimited segments (and non-strings) give "".
    """
    if not isinstance(url, str):
        return ''
    parts = url.split('/')
    if len(parts) < 2:
        return ''
    return parts[-2]


def join_names(names, sep: str = ', ') -> str:
    return sep.join(n for n in names if n)
