from .models import parse_datetime


def format_datetime(value, fmt='%Y-%m-%d %H:%M'):
    value = parse_datetime(value)
    if value is None:
        return ''
    return value.strftime(fmt)
