from abc import ABC, abstractmethod
from typing import List, Optional

from rollup_reports.models.domain import (
    ContentAliasMapping,
    GenreMapping,
    NetworkAlias,
    RawContentRow,
)


class RowSourceUnavailable(Exception):
    """The backing store could not be read.

    Raised instead of returning an empty list so callers can tell "no rows
    matched" apart from "no rows could be fetched".
    """

    def __init__(self, message: str, *, source: str = "store"):
        super().__init__(message)
        self.source = source


class RollupStore(ABC):
    @abstractmethod
    def fetch_raw_rows(self, campaign_id: Optional[str] = None) -> List[RawContentRow]:
        """All raw rows, or one campaign's rows. No impression filtering."""
        pass

    @abstractmethod
    def fetch_network_aliases(self) -> List[NetworkAlias]:
        pass

    @abstractmethod
    def fetch_genre_map(self) -> List[GenreMapping]:
        pass

    @abstractmethod
    def fetch_content_alias_map(self) -> List[ContentAliasMapping]:
        pass

    @abstractmethod
    def list_network_names(self, campaign_id: Optional[str] = None) -> List[str]:
        """Distinct raw network names, sorted."""
        pass
