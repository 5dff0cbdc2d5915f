"""Saved document history.

Generated pay stubs and statements are kept in a single JSON file
(documents.json in the data directory), newest first. The calculation
engines never touch this store; the CLI saves their results here.

Usage:
    from buelldocs.sdk.documents import DocumentStore, paystub_record

    store = DocumentStore.default()
    store.save(paystub_record(period, ytd, "Jane Doe"))
    for record in store.list_all():
        print(record.name)
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import get_data_path
from .schemas import PayPeriodResult, StatementSummary, YTDAccumulator

logger = logging.getLogger(__name__)

DOCUMENTS_FILENAME = "documents.json"

DocumentType = Literal["paystub", "bank_statement"]


class DocumentStoreError(Exception):
    """Raised when the documents file cannot be read."""
    pass


class DocumentRecord(BaseModel):
    """One saved document."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Unique document id")
    type: DocumentType = Field(..., description="Document type")
    name: str = Field(..., description="Display name")
    created_at: datetime = Field(..., description="When the document was saved (UTC)")
    status: str = Field(default="completed")
    data: Dict[str, Any] = Field(default_factory=dict, description="Document figures (JSON-safe)")


class DocumentStore:
    """Append/list store backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def default(cls) -> "DocumentStore":
        """Store in the configured data directory."""
        return cls(get_data_path() / DOCUMENTS_FILENAME)

    def _read(self) -> List[dict]:
        if not self.path.exists():
            return []
        with open(self.path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise DocumentStoreError(f"Corrupt documents file {self.path}: {e}")
        if not isinstance(data, list):
            raise DocumentStoreError(f"Expected a list in {self.path}, got {type(data).__name__}")
        return data

    def save(self, record: DocumentRecord) -> DocumentRecord:
        """Add a record at the front of the history."""
        documents = self._read()
        documents.insert(0, record.model_dump(mode="json"))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(documents, f, indent=2)
        logger.debug(f"saved {record.type} {record.id} to {self.path}")
        return record

    def list_all(self, type_filter: Optional[DocumentType] = None) -> List[DocumentRecord]:
        """All saved records, newest first.

        Raises:
            DocumentStoreError: File is unreadable or a record is malformed
        """
        records = []
        for raw in self._read():
            try:
                record = DocumentRecord.model_validate(raw)
            except ValidationError as e:
                raise DocumentStoreError(f"Invalid record in {self.path}: {e}")
            if type_filter is None or record.type == type_filter:
                records.append(record)
        return records


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def paystub_record(
    period: PayPeriodResult,
    ytd: YTDAccumulator,
    employee_name: str = "",
) -> DocumentRecord:
    """Record for one generated pay stub (with its YTD snapshot)."""
    label = employee_name or "Employee"
    return DocumentRecord(
        id=_new_id("paystub"),
        type="paystub",
        name=f"Paystub - {label} ({period.pay_date.isoformat()})",
        created_at=datetime.now(timezone.utc),
        data={
            "period": period.model_dump(mode="json"),
            "ytd": ytd.model_dump(mode="json"),
        },
    )


def statement_record(
    summary: StatementSummary,
    account_holder: str = "",
    bank_name: str = "",
) -> DocumentRecord:
    """Record for one generated bank statement."""
    label = account_holder or "Account Holder"
    suffix = f" ({bank_name})" if bank_name else ""
    return DocumentRecord(
        id=_new_id("statement"),
        type="bank_statement",
        name=f"Bank Statement - {label}{suffix}",
        created_at=datetime.now(timezone.utc),
        data=summary.model_dump(mode="json"),
    )
