# src/seiscat/errors.py
from __future__ import annotations

from typing import Optional


class SeiscatError(Exception):
    """Base class for seiscat errors."""


class SurveyValidationError(SeiscatError, ValueError):
    """
    A survey record failed validation at load time.

    Carries the record id when one could be read, otherwise the position
    of the record in its source file.
    """

    def __init__(
        self,
        reason: str,
        *,
        survey_id: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.survey_id = survey_id
        self.index = index
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.survey_id is not None:
            return f"survey {self.survey_id!r}: {self.reason}"
        if self.index is not None:
            return f"record #{self.index}: {self.reason}"
        return self.reason


class IconNotInitializedError(SeiscatError, RuntimeError):
    """default_icon() was called before initialize_default_icon()."""
