"""
Validation Session
==================

View state behind the result page: which file is loaded, what the
validator said about it, and how the data tree is expanded. Every load
replaces all of it at once.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from character_validator.config import ConfigLoader, SystemConfig
from character_validator.schema import Invalid, Valid, ValidationOutcome, parse_and_validate
from character_validator.schema.errors import FieldError
from character_validator.viewer import JsonTree
from .error_report import ReportEntry, build_report
from .summary import CharacterSummary

logger = logging.getLogger(__name__)

BUNDLED_SAMPLE = Path(__file__).resolve().parent.parent / "assets" / "agent.character.json"


class ValidationInProgress(Exception):
    """A load was started while another one was still running."""
    pass


class ValidationSession:
    """Holds the current file, its validation outcome and the tree state."""

    def __init__(self, config: Optional[SystemConfig] = None, loader: Optional[ConfigLoader] = None):
        self.config = config or SystemConfig()
        self.loader = loader or ConfigLoader()
        self.file_name: Optional[str] = None
        self.outcome: Optional[ValidationOutcome] = None
        self.tree: Optional[JsonTree] = None
        self.is_loading = False

    @contextmanager
    def _loading(self) -> Iterator[None]:
        if self.is_loading:
            raise ValidationInProgress(f"Still validating '{self.file_name}'")
        self.is_loading = True
        try:
            yield
        finally:
            self.is_loading = False

    def load_content(self, file_name: str, content: Union[str, bytes]) -> ValidationOutcome:
        """Validate file content and replace the session state with the result."""
        with self._loading():
            logger.info(f"Validating '{file_name}'")
            outcome = parse_and_validate(content, self.config.validation)

            self.file_name = file_name
            self.outcome = outcome
            if isinstance(outcome, Valid):
                self.tree = JsonTree(outcome.data, initial_expanded=self.config.viewer.initial_expanded)
            else:
                self.tree = None
            return outcome

    def load_file(self, file_path: Path) -> ValidationOutcome:
        """
        Read and validate a character file.

        Raises:
            CharacterFileError: If the file cannot be read
        """
        content = self.loader.read_character_file(file_path)
        return self.load_content(Path(file_path).name, content)

    def load_sample(self) -> ValidationOutcome:
        """Load the configured sample file, or the bundled one."""
        return self.load_file(self.config.sample_path or BUNDLED_SAMPLE)

    @property
    def is_valid(self) -> bool:
        return isinstance(self.outcome, Valid)

    @property
    def errors(self) -> list[FieldError]:
        if isinstance(self.outcome, Invalid):
            return self.outcome.errors
        return []

    @property
    def report(self) -> list[ReportEntry]:
        return build_report(self.errors, group=self.config.viewer.group_errors_by_path)

    @property
    def summary(self) -> Optional[CharacterSummary]:
        if isinstance(self.outcome, Valid):
            return CharacterSummary.from_config(self.outcome.config)
        return None

    def toggle(self, path: str) -> bool:
        """
        Toggle one node of the data tree.

        Raises:
            KeyError: If nothing is loaded or the path does not exist
            ValueError: If the node is not expandable
        """
        if self.tree is None:
            raise KeyError(path)
        return self.tree.toggle(path)
