"""
Quarter timeline

Fixed calendar: quarters end 03-31, 06-30, 09-30, 12-31 and are filed
about 45 days later. Q4 is filed in February of the following year.
"""
from datetime import datetime, timezone

from .domain import QuarterDef

# (quarter number, report month/day, filing month/day, filed next year)
QUARTER_CALENDAR = (
    (1, (3, 31), (5, 15), False),
    (2, (6, 30), (8, 15), False),
    (3, (9, 30), (11, 15), False),
    (4, (12, 31), (2, 15), True),
)


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def quarters_for_year(year: int) -> list[QuarterDef]:
    """The four quarter definitions whose periods end in year"""
    defs = []
    for number, (rm, rd), (fm, fd), next_year in QUARTER_CALENDAR:
        defs.append(QuarterDef(
            quarter=f"{year}Q{number}",
            report_date=_utc(year, rm, rd),
            filing_date=_utc(year + 1 if next_year else year, fm, fd),
        ))
    return defs


def quarters_between(start: datetime, end: datetime) -> list[QuarterDef]:
    """
    Quarters whose filing date falls in [start, end], oldest filing first.

    Scanning starts a year early so the previous year's Q4, filed in
    February, is included.
    """
    defs = []
    for year in range(start.year - 1, end.year + 1):
        defs.extend(quarters_for_year(year))

    return sorted(
        (d for d in defs if start <= d.filing_date <= end),
        key=lambda d: d.filing_date
    )
