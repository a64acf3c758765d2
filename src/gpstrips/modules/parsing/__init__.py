from .validator import RecordValidator, ParseResult, parse_float, parse_timestamp

__all__ = ["RecordValidator", "ParseResult", "parse_float", "parse_timestamp"]
