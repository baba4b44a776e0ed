import logging
import re
from collections.abc import Mapping
from typing import Any

from nomad_guide.models.country import CountryRecord

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: Any) -> str:
    if not isinstance(name, str) or not name:
        return ""
    return _NON_ALNUM.sub("-", name.lower())


def normalize_country(raw: Any) -> CountryRecord:
    if not isinstance(raw, Mapping):
        logger.warning("Country entry is not an object: %r", raw)
        raw = {}
    fields = {k: v for k, v in raw.items() if k != "slug"}
    return CountryRecord.model_validate({**fields, "slug": slugify(raw.get("name"))})


def normalize_countries(raw: Mapping[str, Any]) -> tuple[CountryRecord, ...]:
    """Turn the fetched ``{key: entry}`` mapping into records, in source order.

    Keys are ignored. Nothing is dropped and nothing is defaulted here; missing
    fields stay ``None`` and the renderer fills in placeholders.
    """
    return tuple(normalize_country(entry) for entry in raw.values())
