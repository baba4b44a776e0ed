"""Projection of country records onto a display surface.

``render_cards`` is pure: it turns records into render instructions whose text
is already escaped. A ``DisplaySurface`` applies instructions by replacing
whatever it showed before, so applying the same list twice changes nothing.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, Protocol

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from nomad_guide.models.country import CountryRecord
from nomad_guide.models.directory import UiStrings


@dataclass(frozen=True)
class CardInstruction:
    template: ClassVar[str] = "partials/card.html"

    slug: Markup
    heading: Markup
    income: Markup
    tax: Markup
    cost_of_living: Markup
    family: Markup
    guide: Markup
    href: Markup


@dataclass(frozen=True)
class NoResultsInstruction:
    template: ClassVar[str] = "partials/no_results.html"

    message: Markup


@dataclass(frozen=True)
class ErrorInstruction:
    template: ClassVar[str] = "partials/error.html"

    message: Markup


RenderInstruction = CardInstruction | NoResultsInstruction | ErrorInstruction


class DisplaySurface(Protocol):
    def show(self, instructions: Sequence[RenderInstruction]) -> None: ...

    def set_loading(self, visible: bool) -> None: ...


def _text(value: str | None, fallback: str) -> Markup:
    return escape(value or fallback)


def card_instruction(record: CountryRecord, strings: UiStrings) -> CardInstruction:
    na = strings.not_available
    return CardInstruction(
        slug=escape(record.slug),
        heading=Markup(" ").join(part for part in (record.flag, record.name) if part),
        income=_text(record.income, na),
        tax=_text(record.tax, na),
        cost_of_living=_text(record.cost_of_living, na),
        family=_text(record.family_policy, na),
        guide=_text(record.guide, na),
        href=_text(record.apply_link, "#"),
    )


def render_cards(
    records: Sequence[CountryRecord], strings: UiStrings
) -> list[RenderInstruction]:
    if not records:
        return [NoResultsInstruction(message=escape(strings.no_countries))]
    return [card_instruction(r, strings) for r in records]


def error_instructions(message: str) -> list[RenderInstruction]:
    return [ErrorInstruction(message=escape(message))]


def render_to(
    surface: DisplaySurface, records: Sequence[CountryRecord], strings: UiStrings
) -> None:
    surface.show(render_cards(records, strings))


_env = Environment(
    loader=PackageLoader("nomad_guide", "templates"),
    autoescape=select_autoescape(["html"]),
)


class HtmlSurface:
    """Keeps the markup of the country list container."""

    def __init__(self, loading_text: str = "", env: Environment | None = None):
        self.loading_text = loading_text
        self.loading = False
        self.instructions: list[RenderInstruction] = []
        self._env = env or _env
        self._fragments: list[Markup] = []

    def show(self, instructions: Sequence[RenderInstruction]) -> None:
        self.instructions = list(instructions)
        self._fragments = [
            Markup(self._env.get_template(i.template).render(item=i))
            for i in self.instructions
        ]

    def set_loading(self, visible: bool) -> None:
        self.loading = visible

    @property
    def fragments(self) -> list[str]:
        return [str(f) for f in self._fragments]

    def html(self) -> str:
        return self._env.get_template("partials/country_list.html").render(
            fragments=self._fragments,
            loading=self.loading,
            loading_text=self.loading_text,
        )
