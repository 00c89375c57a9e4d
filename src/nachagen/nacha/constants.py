"""Fixed-width contract of the NACHA file format."""

from __future__ import annotations

from decimal import ROUND_HALF_UP

RECORD_SIZE = 94
BLOCKING_FACTOR = 10
FILLER_RECORD = "9" * RECORD_SIZE

PRIORITY_CODE = "01"
RECORD_SIZE_FIELD = "094"
BLOCKING_FACTOR_FIELD = "10"
FORMAT_CODE = "1"
ORIGINATOR_STATUS_CODE = "1"
ADDENDA_INDICATOR = "0"

# Dollar-to-cent conversion; 1234.565 -> 123457
CENTS_ROUNDING = ROUND_HALF_UP

FILE_HEADER = "1"
BATCH_HEADER = "5"
ENTRY_DETAIL = "6"
BATCH_CONTROL = "8"
FILE_CONTROL = "9"

# Largest values the numeric fields can hold
MAX_ENTRY_AMOUNT_CENTS = 10**10 - 1
MAX_TOTAL_CENTS = 10**12 - 1
MAX_BATCH_ENTRIES = 10**6 - 1
MAX_BATCH_NUMBER = 10**7 - 1
