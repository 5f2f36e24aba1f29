"""Duration Strings - parse and render check frequencies such as "30s" or "1h30m".

Invariants:
    - render(parse(render(d))) == render(d) for every timedelta d
    - Resolution is one microsecond; finer values ("999ns", "1500ns") are rejected
    - Rendering is canonical: "0s", "500ms", "1.5ms", "250µs", "30s", "1m30s", "1h0m0s"

Design Decisions:
    - timedelta as the in-memory type: pydantic validates and compares it natively
    - Decimal accumulation: fractional inputs ("1.1s") do not pick up float error
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

_MICROS_PER_UNIT: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # U+00B5 micro sign
    "μs": Decimal(1),  # U+03BC greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_component_re = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")

_MICROS_PER_SECOND = 1_000_000


def parse_duration(value: str) -> timedelta:
    """Parse a duration string ("1h2m3.5s", "-90s", "0") into a timedelta.

    Raises ValueError on anything outside the grammar.
    """
    if not isinstance(value, str):
        raise ValueError(f"invalid duration {value!r}: expected a string")
    text = value
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f'invalid duration "{value}"')

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _component_re.match(text, pos)
        if match is None:
            raise ValueError(f'invalid duration "{value}"')
        number, unit = match.groups()
        try:
            total += Decimal(number) * _MICROS_PER_UNIT[unit]
        except InvalidOperation as e:
            raise ValueError(f'invalid duration "{value}"') from e
        pos = match.end()

    if total != total.to_integral_value():
        raise ValueError(
            f'invalid duration "{value}": finer than one microsecond',
        )
    micros = int(total)
    if negative:
        micros = -micros
    try:
        return timedelta(microseconds=micros)
    except OverflowError as e:
        raise ValueError(f'invalid duration "{value}": out of range') from e


def format_duration(value: timedelta) -> str:
    """Render a timedelta in canonical duration form."""
    micros = (value.days * 86_400 + value.seconds) * _MICROS_PER_SECOND + value.microseconds
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < _MICROS_PER_SECOND:
        if micros < 1_000:
            return f"{sign}{micros}µs"
        return f"{sign}{_with_fraction(micros, 1_000)}ms"

    total_seconds, _ = divmod(micros, _MICROS_PER_SECOND)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)

    out = f"{_with_fraction(seconds * _MICROS_PER_SECOND + micros % _MICROS_PER_SECOND, _MICROS_PER_SECOND)}s"
    if total_minutes:
        out = f"{minutes}m{out}"
    if hours:
        out = f"{hours}h{out}"
    return sign + out


def _with_fraction(amount: int, unit: int) -> str:
    """Format amount/unit as a decimal with trailing zeros stripped."""
    whole, rest = divmod(amount, unit)
    if not rest:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{rest:0{digits}d}".rstrip("0")
