"""Import schemas.

Field names follow the web client's camelCase contract through aliases.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class BrowserHistoryItemSchema(CamelModel):
    url: str
    title: Optional[str] = None
    visit_time: Optional[float] = Field(default=None, alias="visitTime")


class BrowserHistoryRequest(CamelModel):
    history_items: List[BrowserHistoryItemSchema] = Field(min_length=1, alias="historyItems")


class ImportEntryResponse(CamelModel):
    id: str
    title: str
    normalized_title: str = Field(alias="normalizedTitle")
    chapter: Optional[float] = None
    url: Optional[str] = None
    platform: str
    last_read_date: Optional[datetime] = Field(default=None, alias="lastReadDate")
    status: str
    is_duplicate: bool = Field(alias="isDuplicate")
    selected: bool
    errors: List[str] = []


class ImportJobResponse(CamelModel):
    success: bool = True
    import_id: Optional[str] = Field(default=None, alias="importId")
    message: Optional[str] = None
    total_items: int = Field(alias="totalItems")
    valid_items: int = Field(alias="validItems")
    error_items: int = Field(alias="errorItems")
    skipped_items: int = Field(alias="skippedItems")
    entries: List[ImportEntryResponse] = []


class ConfirmEntry(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    chapter: Optional[float] = Field(default=None, ge=0)
    url: Optional[str] = None
    platform: Optional[str] = None
    last_read_date: Optional[str] = Field(default=None, alias="lastReadDate")


class ConfirmRequest(CamelModel):
    import_id: Optional[str] = Field(default=None, alias="importId")
    entries: Optional[List[ConfirmEntry]] = None


class ConfirmResponse(CamelModel):
    success: bool = True
    import_id: Optional[str] = Field(default=None, alias="importId")
    imported_count: int = Field(alias="importedCount")
    skipped_count: int = Field(alias="skippedCount")
    error_count: int = Field(alias="errorCount")
    errors: List[str] = []
