"""Filter predicates for the country list.

Income requirements are free text, so bracket matching looks for fixed marker
phrases instead of parsing amounts. A record whose text carries none of its
bracket's markers is hidden under that bracket.
"""

from collections.abc import Iterable
from enum import Enum

from nomad_guide.models.country import CountryRecord


class IncomeBracket(str, Enum):
    ANY = ""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


INCOME_MARKERS: dict[str, tuple[str, ...]] = {
    IncomeBracket.LOW.value: ("less than €2,000", "€1,500"),
    IncomeBracket.MEDIUM.value: ("€2,000 to €4,000", "€2,100", "€3,280", "medium"),
    IncomeBracket.HIGH.value: ("more than €4,000", "€5,000", "high"),
}


def matches_text(record: CountryRecord, query: str) -> bool:
    if not query:
        return True
    return any(
        value and query in value.lower()
        for value in (record.name, record.income, record.guide)
    )


def matches_income(income: str | None, bracket: str) -> bool:
    if isinstance(bracket, IncomeBracket):
        bracket = bracket.value
    if not bracket:
        return True
    if not income:
        return False
    income_lower = income.lower()
    markers = INCOME_MARKERS.get(bracket, ())
    return any(marker in income_lower for marker in markers)


def matches(record: CountryRecord, query: str, bracket: str) -> bool:
    """``query`` is expected lowercased and trimmed already."""
    return matches_text(record, query) and matches_income(record.income, bracket)


def filter_records(
    records: Iterable[CountryRecord], query: str, bracket: str
) -> list[CountryRecord]:
    return [r for r in records if matches(r, query, bracket)]
