import json

from nomad_guide.config import settings
from nomad_guide.models.country import CountryEntry

_countries: dict[str, CountryEntry] = {}


def _load() -> dict[str, CountryEntry]:
    global _countries
    if not _countries:
        raw = json.loads(settings.data_path.read_text(encoding="utf-8"))
        _countries = {key: CountryEntry(**c) for key, c in raw.items()}
    return _countries


def get_all() -> dict[str, CountryEntry]:
    return _load()

