"""Journal entry domain service.

Every write is validated completely before the store is touched, in a fixed
order: field presence, line count, account references, per-line amounts and
finally the balance of the whole entry. Callers therefore always see the most
specific error first and a rejected write leaves the store unchanged.
"""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    BALANCE_TOLERANCE,
    JournalEntry as JournalEntryEntity,
    LineInput,
)
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    EntryNotFoundError,
    UnbalancedEntryError,
    ValidationError,
    account_not_found,
    entry_closed,
    entry_not_found,
    unbalanced_entry,
)
from ledgerkit.utils.amount_parser import to_amount
from ledgerkit.utils.date_parser import parse_iso_date, parse_optional_iso_date

logger = logging.getLogger(__name__)

MIN_LINES = 2

LineLike = LineInput | Mapping[str, Any]


def _line_field(line: LineLike, name: str) -> Any:
    if isinstance(line, LineInput):
        return getattr(line, name)
    return line.get(name)


def parse_entry_date(value: date | str | None) -> date:
    """Validate an entry date.

    Raises:
        ValidationError: If the date is missing or not a valid calendar date
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Missing required field: date")
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(str(e))


def parse_filter_date(value: date | str | None, field: str) -> Optional[date]:
    """Validate an optional date used as a query bound."""
    try:
        return parse_optional_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {e}")


class JournalService:
    """Service for recording and maintaining journal entries."""

    def __init__(self, db: Database):
        """Initialize journal service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(
        self, entry_date: date | str | None, description: Optional[str], lines: Any
    ) -> tuple[date, str, list[LineInput]]:
        """Run the full validation sequence and return normalized values.

        Must be called with the store lock held.
        """
        # 1. Field presence
        if description is None or not isinstance(description, str) or not description.strip():
            raise ValidationError("Missing required field: description")
        parsed_date = parse_entry_date(entry_date)
        if lines is None or isinstance(lines, (str, bytes, Mapping)) or not isinstance(lines, Sequence):
            raise ValidationError("Missing required field: lines")

        # 2. Line count and line shape
        if len(lines) < MIN_LINES:
            raise ValidationError("Journal entry must have at least two lines")
        for index, line in enumerate(lines, start=1):
            if not isinstance(line, (LineInput, Mapping)):
                raise ValidationError(f"Line {index} is not a journal line")
            account_id = _line_field(line, "account_id")
            if account_id is None or not str(account_id).strip():
                raise ValidationError(f"Line {index} is missing an account")

        # 3. Account references
        for line in lines:
            account_id = str(_line_field(line, "account_id")).strip()
            if self.db.get_account(account_id) is None:
                raise AccountNotFoundError(account_not_found(account_id))

        # 4. One-sided, non-negative amounts
        normalized: list[LineInput] = []
        for index, line in enumerate(lines, start=1):
            try:
                debit = to_amount(_line_field(line, "debit_amount"))
                credit = to_amount(_line_field(line, "credit_amount"))
            except ValueError as e:
                raise ValidationError(f"Line {index}: {e}")
            if debit < 0 or credit < 0:
                raise ValidationError(f"Line {index}: amounts must not be negative")
            if (debit > 0) == (credit > 0):
                raise ValidationError(
                    f"Line {index} is ambiguous: each line must have either a debit or a credit amount, not both or neither"
                )
            normalized.append(
                LineInput(
                    account_id=str(_line_field(line, "account_id")).strip(),
                    debit_amount=debit,
                    credit_amount=credit,
                )
            )

        # 5. Balanced-entry law
        total_debit = sum((line.debit_amount for line in normalized), Decimal("0"))
        total_credit = sum((line.credit_amount for line in normalized), Decimal("0"))
        if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
            raise UnbalancedEntryError(unbalanced_entry(total_debit, total_credit))

        return parsed_date, description.strip(), normalized

    def create_entry(
        self,
        date: date | str,
        description: str,
        lines: Sequence[LineLike],
    ) -> JournalEntryEntity:
        """Create a balanced journal entry.

        Args:
            date: Entry date (date or YYYY-MM-DD)
            description: Entry description
            lines: At least two LineInput objects or mappings with
                ``account_id``, ``debit_amount`` and ``credit_amount``

        Returns:
            The stored entry

        Raises:
            ValidationError: Missing fields, fewer than two lines, ambiguous line
            AccountNotFoundError: A line references an unknown account
            UnbalancedEntryError: Debits and credits differ by more than 0.01
        """
        with self.db.lock:
            try:
                entry_date, description, normalized = self._validate(date, description, lines)
            except ValidationError as e:
                logger.debug("Rejected journal entry: %s", e)
                raise
            entry_id = self.db.create_journal_entry(
                date=entry_date, description=description, lines=normalized
            )
            entry = self.db.get_journal_entry(entry_id)

        logger.info(
            "Recorded journal entry %s on %s (%d lines, %s)",
            entry.id,
            entry.date.isoformat(),
            len(entry.lines),
            entry.total_debit,
        )
        return entry

    def get_entry(self, entry_id: str) -> JournalEntryEntity:
        """Get journal entry by ID.

        Raises:
            EntryNotFoundError: If no entry has this ID
        """
        with self.db.lock:
            entry = self.db.get_journal_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        account_id: Optional[str] = None,
    ) -> list[JournalEntryEntity]:
        """List journal entries with filters.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            account_id: Optional account ID; only entries posting to it

        Returns:
            List of journal entries in insertion order
        """
        start = parse_filter_date(start_date, "startDate")
        end = parse_filter_date(end_date, "endDate")
        with self.db.lock:
            return self.db.list_journal_entries(
                start_date=start, end_date=end, account_id=account_id or None
            )

    def update_entry(
        self,
        entry_id: str,
        date: date | str | None = None,
        description: Optional[str] = None,
        lines: Optional[Sequence[LineLike]] = None,
    ) -> JournalEntryEntity:
        """Update an open journal entry.

        When ``lines`` is given the complete create-time validation runs
        against the merged entry and the new lines replace the old ones.

        Raises:
            EntryNotFoundError: If entry not found
            ConflictError: If the entry belongs to a closed period
            ValidationError: If the patch is invalid
        """
        with self.db.lock:
            current = self.db.get_journal_entry(entry_id)
            if current is None:
                raise EntryNotFoundError(entry_not_found(entry_id))
            if current.is_closed:
                raise ConflictError(entry_closed(entry_id))

            new_date = current.date if date is None else date
            new_description = current.description if description is None else description
            normalized = None
            if lines is not None:
                new_date, new_description, normalized = self._validate(
                    new_date, new_description, lines
                )
            else:
                if description is not None and (
                    not isinstance(description, str) or not description.strip()
                ):
                    raise ValidationError("Missing required field: description")
                new_date = parse_entry_date(new_date)
                new_description = new_description.strip()

            self.db.update_journal_entry(
                entry_id,
                date=new_date,
                description=new_description,
                lines=normalized,
            )
            entry = self.db.get_journal_entry(entry_id)

        logger.info("Updated journal entry %s", entry_id)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Delete an open journal entry and its lines.

        Raises:
            EntryNotFoundError: If entry not found
            ConflictError: If the entry belongs to a closed period
        """
        with self.db.lock:
            entry = self.db.get_journal_entry(entry_id)
            if entry is None:
                raise EntryNotFoundError(entry_not_found(entry_id))
            if entry.is_closed:
                raise ConflictError(entry_closed(entry_id))
            self.db.delete_journal_entry(entry_id)

        logger.info("Deleted journal entry %s", entry_id)

    def close_period(self, through_date: date | str) -> int:
        """Close every entry dated on or before ``through_date``.

        Closed entries can no longer be updated or deleted.

        Returns:
            Number of entries that were closed by this call
        """
        if through_date is None or (isinstance(through_date, str) and not through_date.strip()):
            raise ValidationError("Missing required field: throughDate")
        try:
            through = parse_iso_date(through_date)
        except ValueError as e:
            raise ValidationError(str(e))

        with self.db.lock:
            closed = self.db.close_journal_entries(through)

        logger.info("Closed %d journal entries through %s", closed, through.isoformat())
        return closed
