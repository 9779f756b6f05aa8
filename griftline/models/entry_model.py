import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ScamAmountDetails(BaseModel):
    total: float = 0
    hasScamAmount: bool = False
    preRecoveryAmount: Optional[float] = None
    lowerBound: Optional[float] = None
    upperBound: Optional[float] = None
    recovered: Optional[float] = None
    textOverride: Optional[str] = None

    @property
    def display_amount(self) -> str:
        """Text shown for the amount; an override wins over the number."""
        if self.textOverride:
            return self.textOverride
        return f"${self.total:,.0f}"


class EntryFilters(BaseModel):
    theme: List[str] = []
    tech: List[str] = []
    blockchain: List[str] = []


class EntryImage(BaseModel):
    src: Optional[str] = None
    alt: Optional[str] = None
    caption: Optional[str] = None
    isLogo: bool = False


class EntryLink(BaseModel):
    linkText: str
    href: str
    extraText: Optional[str] = None
    archiveHref: Optional[str] = None


class Entry(BaseModel):
    id: str
    readableId: str
    date: datetime.date
    title: str
    body: str = ""
    filters: EntryFilters = EntryFilters()
    collection: List[str] = []
    starred: bool = False
    scamAmountDetails: Optional[ScamAmountDetails] = None
    image: Optional[EntryImage] = None
    links: List[EntryLink] = []
    key: Optional[str] = Field(default=None, alias="_key")

    class Config:
        populate_by_name = True


class EntryDetail(Entry):
    # glossary terms referenced from the body, keyed by glossary id
    glossary: Dict[str, "GlossaryEntry"] = {}


class Metadata(BaseModel):
    griftTotal: float = 0
    collections: Dict[str, str] = {}


class GlossaryEntry(BaseModel):
    id: str
    term: str
    definition: str


class EntriesPage(BaseModel):
    entries: List[Entry]
    hasNext: bool
    nextCursor: Optional[str] = None


class AllEntriesPage(BaseModel):
    entries: List[Entry]
    hasNext: bool
    hasPrev: bool
    nextCursor: Optional[str] = None
    prevCursor: Optional[str] = None


class LeaderboardPage(BaseModel):
    entries: List[Entry]
    totalCount: int
    scamTotal: float
    page: int
    pageSize: int


EntryDetail.model_rebuild()
