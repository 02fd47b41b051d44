from datetime import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, PlainSerializer

from wellness.utils.numbers import to_int_or_none
from wellness.utils.timezone import isoformat_utc, parse_datetime

# Stored values are UTC-naive; responses always carry an explicit "Z"
UTCDateTime = Annotated[datetime, PlainSerializer(isoformat_utc, return_type=str, when_used="json")]

# Request-side timestamps: datetime, "YYYY-MM-DD" or ISO-8601 with offset
FlexibleDateTime = Annotated[Optional[datetime], BeforeValidator(parse_datetime)]

# Form inputs that arrive as "", "42" or 42; garbage degrades to None
LenientInt = Annotated[Optional[int], BeforeValidator(to_int_or_none)]
