from __future__ import annotations

__all__ = (
    'PrismaCLIError',
    'SchemaError',
    'SchemaParseError',
)


class PrismaCLIError(Exception):
    pass


class SchemaError(PrismaCLIError):
    pass


class SchemaParseError(SchemaError):
    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f'{message} (line {line})'
        super().__init__(message)
