import collections
import re
from collections.abc import Iterable
from collections.abc import Mapping

# https://datatracker.ietf.org/doc/html/rfc7230#section-3.2: Header fields are tokens.
# "!" / "#" / "$" / "%" / "&" / "'" / "*" / "+" / "-" / "." /  "^" / "_" / "`" / "|" / "~" / DIGIT / ALPHA
_valid_header_name = re.compile(r"^[!#$%&'*+\-.^_`|~0-9a-zA-Z]+$")


def read_header_fields(lines: Iterable[str]) -> list[tuple[str, str]]:
    """
    Read a block of header lines into ``(name, value)`` pairs, in order.

    Lines without a colon (or with an empty name) are dropped. The name is
    everything before the first colon, the value everything after it; both are
    stripped of surrounding whitespace. Names keep their case.
    """
    ret: list[tuple[str, str]] = []
    for line in lines:
        name, sep, value = line.partition(":")
        name = name.strip()
        if not sep or not name:
            continue
        ret.append((name, value.strip()))
    return ret


def fields_to_dict(
    fields: Iterable[tuple[str, str]], preserve_case: bool = False
) -> dict[str, str]:
    """
    Collapse header fields into a plain mapping.

    Names are lowercased unless `preserve_case` is set. If a name occurs more
    than once, the last value wins; use the fields themselves to see every value.
    """
    headers: dict[str, str] = {}
    for name, value in fields:
        if not preserve_case:
            name = name.lower()
        headers[name] = value
    return headers


def get_header(headers: Mapping[str, str], name: str, default=None):
    """
    Case-insensitive header lookup on a plain mapping. The last matching entry wins.
    """
    name = name.lower()
    ret = default
    for k, v in headers.items():
        if k.lower() == name:
            ret = v
    return ret


def has_header(headers: Mapping[str, str], name: str) -> bool:
    name = name.lower()
    return any(k.lower() == name for k in headers)


def is_valid_header_name(name: str) -> bool:
    return bool(_valid_header_name.match(name))


def parse_content_type(c: str) -> tuple[str, str, dict[str, str]] | None:
    """
    A simple parser for content-type values. Returns a (type, subtype,
    parameters) tuple, where type and subtype are strings, and parameters
    is a dict. If the string could not be parsed, return None.

    E.g. the following string:

        text/html; charset=UTF-8

    Returns:

        ("text", "html", {"charset": "UTF-8"})
    """
    parts = c.split(";", 1)
    ts = parts[0].split("/", 1)
    if len(ts) != 2:
        return None
    d = collections.OrderedDict()
    if len(parts) == 2:
        for i in parts[1].split(";"):
            clause = i.split("=", 1)
            if len(clause) == 2:
                d[clause[0].strip().lower()] = clause[1].strip()
    return ts[0].strip().lower(), ts[1].strip().lower(), d
