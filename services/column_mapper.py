"""
Column Mapper - external file headers <-> Employee field names.

The table is fixed and is the canonical source of header names for both
import and export. Header matching is exact and case-sensitive.
"""

import logging
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

COLUMN_MAP = (
    ('Personnel_Records.Payroll_Number', 'payroll_number'),
    ('Personnel_Records.Forenames', 'forenames'),
    ('Personnel_Records.Surname', 'surname'),
    ('Personnel_Records.Date_of_Birth', 'date_of_birth'),
    ('Personnel_Records.Telephone', 'telephone'),
    ('Personnel_Records.Mobile', 'mobile'),
    ('Personnel_Records.Address', 'address'),
    ('Personnel_Records.Address_2', 'address2'),
    ('Personnel_Records.Postcode', 'postcode'),
    ('Personnel_Records.EMail_Home', 'email_home'),
    ('Personnel_Records.Start_Date', 'start_date'),
)

DATE_FIELDS = frozenset({'date_of_birth', 'start_date'})


class ColumnMapper:
    """Bidirectional lookup over a header/field table."""

    def __init__(self, column_map: Sequence = COLUMN_MAP):
        self._by_header: Dict[str, str] = {}
        self._by_field: Dict[str, str] = {}
        for header, field in column_map:
            self._by_header[header] = field
            self._by_field[field] = header

    def field_for_header(self, header: str) -> Optional[str]:
        return self._by_header.get(header)

    def header_for_field(self, field: str) -> Optional[str]:
        return self._by_field.get(field)

    def headers(self) -> List[str]:
        """External headers in table order."""
        return list(self._by_header)

    def fields(self) -> List[str]:
        """Field names in table order."""
        return list(self._by_field)

    def build_index(self, header_row: Sequence[str]) -> Dict[int, str]:
        """
        Map column positions to field names for a file's header row.

        Unknown headers are skipped. When a header repeats, the first
        occurrence wins.
        """
        index: Dict[int, str] = {}
        seen = set()
        for position, header in enumerate(header_row):
            field = self.field_for_header(header)
            if field is None or field in seen:
                continue
            index[position] = field
            seen.add(field)

        missing = [h for h, f in self._by_header.items() if f not in seen]
        if missing:
            logger.warning(f"Import file is missing columns: {', '.join(missing)}")

        return index


default_mapper = ColumnMapper()
