from __future__ import annotations

from pathlib import Path
from typing import Optional


class BuildError(Exception):
    """Fatal build failure. Aborts the whole run."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


class MissingConfiguration(BuildError):
    pass


class InvalidConfiguration(BuildError):
    pass


class MissingContentDirectory(BuildError):
    pass


class MissingTemplate(BuildError):
    pass


class MalformedDocument(BuildError):
    pass


class MissingRequiredField(BuildError):
    def __init__(self, fields: list[str], path: Optional[Path] = None) -> None:
        super().__init__(f"Front matter requires {' and '.join(fields)}", path)
        self.fields = fields
