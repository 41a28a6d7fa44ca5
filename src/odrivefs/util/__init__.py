from .time import normalize_dt, now_utc, parse_http_date, parse_rfc3339, to_epoch_ms

__all__ = [
    "now_utc",
    "parse_rfc3339",
    "parse_http_date",
    "to_epoch_ms",
    "normalize_dt",
]
