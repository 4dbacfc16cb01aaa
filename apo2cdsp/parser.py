import json
import logging
import math
import re
import time
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from apo2cdsp.errors import CountError, FormatError, InputError, ParseError, RangeError

logger = logging.getLogger(__name__)

FILTER_PATTERN = re.compile(
    r'Fc\s+([\d.]+)\s+Hz\s+Gain\s+([-\d.]+)\s+dB\s+Q\s+([\d.]+)', re.IGNORECASE
)
PREAMP_PATTERN = re.compile(r'Preamp:\s*([-+]?[\d.]+)\s*dB\s*', re.IGNORECASE)
NUMBER_PREFIX = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)')

EXPECTED_FORMAT = 'Filter <id>: <state> <type> Fc <freq> Hz Gain <gain> dB Q <q>'

REQUIRED_FILTER_COUNT = 10
PRECISION_MULTIPLIER = 100000000000000

GAIN_LIMIT_DB = 100.0
Q_MAX = 100.0

# Fields the cDSP preset needs but EqualizerAPO does not describe.
STATIC_VALUES = MappingProxyType({
    "30": 3,
    "31": 4,
    "32": 4,
    "33": 4,
    "34": 4,
    "35": 4,
    "36": 4,
    "37": 4,
    "38": 4,
    "39": 2,
    "40": 1,
    "41": 1,
    "42": 1,
    "43": 1,
    "44": 1,
    "45": 1,
    "46": 1,
    "47": 1,
    "48": 1,
    "49": 1,
    "1024": 0,
})


@dataclass(frozen=True)
class FilterRecord:
    center_frequency_hz: float
    gain_db: float
    q_factor: float


@dataclass(frozen=True)
class ParsedResult:
    data: dict
    filter_count: int
    processing_time_ms: float
    records: tuple = field(default=(), repr=False)


def _to_float(text):
    """Parse the leading decimal number of ``text``; NaN when there is none."""
    match = NUMBER_PREFIX.match(text.strip())
    if not match:
        return math.nan
    return float(match.group(0))


def _round_half_up(value):
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def _fround(value):
    return float(np.float32(value))


def _format_value(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def strip_preamp(content):
    return PREAMP_PATTERN.sub('', content)


def read_preamp(content):
    match = PREAMP_PATTERN.search(content)
    if match:
        return _to_float(match.group(1))
    return None


def validate_filter(record, line_number):
    fc = record.center_frequency_hz
    gain = record.gain_db
    q = record.q_factor

    if not math.isfinite(fc) or fc <= 0:
        raise RangeError(f"Invalid frequency value: {_format_value(fc)} Hz", line_number)

    if math.isnan(gain) or gain < -GAIN_LIMIT_DB or gain > GAIN_LIMIT_DB:
        raise RangeError(f"Invalid gain value: {_format_value(gain)} dB", line_number)

    if math.isnan(q) or q <= 0 or q > Q_MAX:
        raise RangeError(f"Invalid Q factor: {_format_value(q)}", line_number)


def parse_line(line, line_number):
    """
    Extract one filter from a line of EqualizerAPO text.

    Returns None for blank lines and lines that do not mention a filter.
    A line that mentions a filter but does not carry Fc/Gain/Q raises FormatError.
    """
    stripped = line.strip()
    if not stripped or 'filter' not in stripped.lower():
        return None

    match = FILTER_PATTERN.search(stripped)
    if not match:
        raise FormatError(f'Invalid filter format. Expected: "{EXPECTED_FORMAT}"', line_number)

    fc_text, gain_text, q_text = match.groups()
    record = FilterRecord(
        center_frequency_hz=_to_float(fc_text),
        gain_db=_to_float(gain_text),
        q_factor=_to_float(q_text),
    )
    validate_filter(record, line_number)
    return record


def encode_filters(records):
    """Lay the filters out as gain, frequency and Q bands followed by the static fields."""
    count = len(records)
    bands = {}
    for index, record in enumerate(records):
        bands[index] = _fround(record.gain_db)
        bands[index + count] = int(_round_half_up(record.center_frequency_hz))
        bands[index + count * 2] = (
            _round_half_up(_fround(record.q_factor) * PRECISION_MULTIPLIER) / PRECISION_MULTIPLIER
        )

    merged = {str(key): value for key, value in sorted(bands.items())}
    merged.update(STATIC_VALUES)
    return dict(sorted(merged.items(), key=lambda item: int(item[0])))


def parse_filters(content):
    start = time.perf_counter()

    if not isinstance(content, str) or not content:
        raise InputError("Input must be a non-empty string")
    if not content.strip():
        raise InputError("Input contains only whitespace")

    records = []
    for line_number, line in enumerate(content.split('\n'), start=1):
        try:
            record = parse_line(line, line_number)
        except ParseError as e:
            if e.line_number is None:
                e.line_number = line_number
            raise
        except Exception as e:
            raise ParseError(f"Unexpected error at line {line_number}: {e}", line_number) from e
        if record is not None:
            logger.debug(
                "line %d: Fc %s Hz Gain %s dB Q %s",
                line_number, record.center_frequency_hz, record.gain_db, record.q_factor,
            )
            records.append(record)

    if len(records) != REQUIRED_FILTER_COUNT:
        raise CountError(
            f"Expected {REQUIRED_FILTER_COUNT} filters, but found {len(records)}. "
            "Please check the selected equalizer app is 'EqualizerAPO ParametricEq'."
        )

    data = encode_filters(records)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.debug("parsed %d filters in %.2fms", len(records), elapsed_ms)

    return ParsedResult(
        data=data,
        filter_count=len(records),
        processing_time_ms=elapsed_ms,
        records=tuple(records),
    )


def parse_filter_data(content):
    return parse_filters(content).data


def to_json(data):
    # cDSP writes whole numbers without a fractional part
    normalized = {
        key: int(value) if isinstance(value, float) and value.is_integer() else value
        for key, value in data.items()
    }
    return json.dumps(normalized, indent=2)


def truncate_middle(path, max_length=50):
    if len(path) <= max_length:
        return path
    part_length = (max_length - 3) // 2
    return path[:part_length] + '...' + path[-part_length:]
