from datetime import date


def month_range(year: int, month: int):
    """Return ``(start, end)`` for a calendar month, end exclusive."""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def previous_month(year: int, month: int):
    if month == 1:
        return year - 1, 12
    return year, month - 1
