"""In-memory data sources for exercising the scraper without a browser."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union


def make_cells(
    name: str,
    *,
    meet: str = "Spring Open",
    date: str = "2024-03-03",
    age: str = "25",
    body_weight: str = "81.2",
    total: str = "250",
) -> List[str]:
    """Return the 14 cell texts of one results row."""

    return [
        meet,
        date,
        age,
        name,
        body_weight,
        "100",
        "105",
        "-110",
        "130",
        "135",
        "140",
        "105",
        "140",
        total,
    ]


class FakeDocument:
    """Pages of raw rows; ``has_next_page`` is true until the last page.

    With ``endless=True`` the document keeps offering a next page and
    repeats its last page forever.
    """

    def __init__(
        self,
        pages: Sequence[Sequence[object]],
        *,
        ready: bool = True,
        next_page_ready: bool = True,
        endless: bool = False,
        name: Optional[str] = "Fake Meet",
        date: Optional[str] = "2024-03-03",
    ) -> None:
        self.pages = [list(page) for page in pages]
        self.ready = ready
        self.next_page_ready = next_page_ready
        self.endless = endless
        self.name = name
        self.date = date
        self.index = 0
        self.advances = 0
        self.ready_timeouts: List[float] = []

    def await_ready(self, timeout_s: float) -> bool:
        self.ready_timeouts.append(timeout_s)
        if self.index == 0:
            return self.ready
        return self.next_page_ready

    def current_page_rows(self) -> List[object]:
        if not self.pages:
            return []
        return self.pages[min(self.index, len(self.pages) - 1)]

    def has_next_page(self) -> bool:
        if self.endless:
            return True
        return self.index < len(self.pages) - 1

    def advance_page(self, timeout_s: float) -> None:
        self.index += 1
        self.advances += 1

    def read_event_name(self) -> Optional[str]:
        return self.name

    def read_event_date(self) -> Optional[str]:
        return self.date


class FakeDataSource:
    """Maps identifiers to documents or to exceptions raised on resolve.

    Identifiers without an entry resolve to a document that never becomes
    ready. A list of outcomes is consumed one per resolve attempt.
    """

    def __init__(
        self,
        documents: Dict[int, Union[FakeDocument, BaseException, list]],
    ) -> None:
        self.documents = documents
        self.resolved: List[int] = []
        self.entered = False
        self.exited = False

    def __enter__(self) -> "FakeDataSource":
        self.entered = True
        return self

    def __exit__(self, *exc_info) -> None:
        self.exited = True

    def resolve_document(self, identifier: int) -> FakeDocument:
        self.resolved.append(identifier)
        outcome = self.documents.get(identifier)
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if outcome is None:
            return FakeDocument([], ready=False)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def single_page_document(*names: str, **kwargs) -> FakeDocument:
    return FakeDocument([[make_cells(name) for name in names]], **kwargs)
