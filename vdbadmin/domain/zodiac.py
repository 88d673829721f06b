"""Western zodiac sign for a month/day."""
from datetime import date

from vdbadmin.core.errors import RecordError

# Birthdays carry no year; 2000 is a leap year so 02-29 stays valid.
REFERENCE_YEAR = 2000

# (month, first day, sign) in calendar order. A date belongs to the last
# entry whose start it has reached; dates before Jan 20 wrap to Capricorn.
_SIGN_STARTS = [
    (1, 20, "Aquarius"),
    (2, 19, "Pisces"),
    (3, 21, "Aries"),
    (4, 20, "Taurus"),
    (5, 21, "Gemini"),
    (6, 21, "Cancer"),
    (7, 23, "Leo"),
    (8, 23, "Virgo"),
    (9, 23, "Libra"),
    (10, 23, "Scorpio"),
    (11, 22, "Sagittarius"),
    (12, 22, "Capricorn"),
]


def zodiac_sign(month: int, day: int) -> str:
    sign = "Capricorn"
    for start_month, start_day, name in _SIGN_STARTS:
        if (month, day) >= (start_month, start_day):
            sign = name
    return sign


def parse_birthday(birthday: str) -> date:
    """Parse an `MM-DD` birthday, bound to REFERENCE_YEAR."""
    try:
        month, day = (int(part) for part in birthday.split("-"))
        return date(REFERENCE_YEAR, month, day)
    except (AttributeError, TypeError, ValueError) as e:
        raise RecordError(f"invalid birthday {birthday!r}, expected MM-DD") from e


def zodiac_for_birthday(birthday: str) -> str:
    born = parse_birthday(birthday)
    return zodiac_sign(born.month, born.day)
