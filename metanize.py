import re
from typing import Iterator, Mapping

from settings import SENTINEL


def _tokens(mask: str, metadata: Mapping[str, str], sentinel: str) -> Iterator[str]:
    lookup = {key.casefold(): value for key, value in metadata.items()}
    pattern = "(" + re.escape(sentinel) + ".+?" + re.escape(sentinel) + ")"

    for tkn in re.split(pattern, mask):
        if not tkn.strip():
            continue
        if (not tkn.startswith(sentinel) or not tkn.endswith(sentinel)
                or len(tkn) <= 2 * len(sentinel)):
            yield tkn
            continue
        key = tkn[len(sentinel):-len(sentinel)]
        yield lookup.get(key.casefold(), key)


def metanize(mask: str, metadata: Mapping[str, str], sentinel: str = SENTINEL) -> str:
    """
    Render an output file name from a mask such as ``%%%client%%%-inv.pdf``.

    Placeholders are replaced by their metadata value (keys match
    case-insensitively) or by the bare key when no value exists. Literal text
    passes through, except whitespace-only segments which are dropped.
    """
    return "".join(_tokens(mask, metadata, sentinel))
