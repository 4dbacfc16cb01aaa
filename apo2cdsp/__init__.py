__version__ = "1.0.0"

from apo2cdsp.errors import (
    CountError,
    FileAccessError,
    FormatError,
    InputError,
    ParseError,
    RangeError,
)
from apo2cdsp.parser import (
    REQUIRED_FILTER_COUNT,
    STATIC_VALUES,
    FilterRecord,
    ParsedResult,
    parse_filter_data,
    parse_filters,
    strip_preamp,
    to_json,
)
from apo2cdsp.cli import main
