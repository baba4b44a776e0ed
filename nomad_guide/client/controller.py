import logging
from enum import Enum

from nomad_guide.client.errors import DirectoryLoadError
from nomad_guide.client.fetcher import CountryFetcher
from nomad_guide.client.filters import IncomeBracket, filter_records
from nomad_guide.client.normalizer import normalize_countries
from nomad_guide.client.renderer import DisplaySurface, error_instructions, render_to
from nomad_guide.models.country import CountryRecord
from nomad_guide.models.directory import DirectoryConfig

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    LOAD_FAILED = "load_failed"


class DirectoryController:
    """Owns the country list for one view and wires control events to rendering.

    The list is fetched once by ``start()`` and never re-fetched. Search,
    bracket and reset events only filter the list that was loaded.
    """

    def __init__(
        self,
        config: DirectoryConfig,
        surface: DisplaySurface,
        fetcher: CountryFetcher | None = None,
    ):
        self.config = config
        self.surface = surface
        self.fetcher = fetcher or CountryFetcher(config)
        self.state = LoadState.UNINITIALIZED
        self.error: DirectoryLoadError | None = None
        self.search_text = ""
        self.income_bracket = IncomeBracket.ANY
        self._records: tuple[CountryRecord, ...] = ()

    @property
    def records(self) -> tuple[CountryRecord, ...]:
        return self._records

    async def start(self) -> None:
        if self.state is not LoadState.UNINITIALIZED:
            logger.warning("Directory already started (state=%s), not fetching again", self.state.value)
            return

        self.state = LoadState.LOADING
        self.surface.set_loading(True)
        try:
            raw = await self.fetcher.fetch_countries()
            self._records = normalize_countries(raw)
            self.state = LoadState.READY
            logger.info("Loaded %d countries", len(self._records))
            self.apply_filters()
        except DirectoryLoadError as e:
            logger.error("Country list fetch failed: %s", e.message)
            self.error = e
            self.state = LoadState.LOAD_FAILED
            self.surface.show(error_instructions(e.message))
        finally:
            self.surface.set_loading(False)

    def visible_records(self) -> list[CountryRecord]:
        query = self.search_text.lower().strip()
        return filter_records(self._records, query, self.income_bracket.value)

    def apply_filters(self) -> None:
        # Nothing to show until the fetch succeeded; a load error stays on screen
        if self.state is not LoadState.READY:
            return
        render_to(self.surface, self.visible_records(), self.config.strings)

    def on_search_input(self, value: str) -> None:
        self.search_text = value
        self.apply_filters()

    def on_income_change(self, value: str) -> None:
        self.income_bracket = IncomeBracket(value)
        self.apply_filters()

    def reset(self) -> None:
        self.search_text = ""
        self.income_bracket = IncomeBracket.ANY
        self.apply_filters()
