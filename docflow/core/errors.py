"""Custom exceptions used across DocFlow."""


class DocFlowError(Exception):
    """Base error for the application."""


class ConfigError(DocFlowError):
    """Configuration related error."""


class RecordLookupError(DocFlowError):
    """Raised when the record store cannot supply a required snapshot."""


class NotFoundError(RecordLookupError):
    """Raised when an identifier does not resolve to a record."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class MissingPrerequisiteError(RecordLookupError):
    """Raised when a record lacks an upstream link needed for generation."""

    def __init__(self, message: str, *, link: str | None = None) -> None:
        super().__init__(message)
        self.link = link


class DocumentGenerationError(DocFlowError):
    """Raised when a document or document set cannot be produced."""


class TemplateNotFoundError(DocumentGenerationError):
    """Raised when a template workbook is absent."""


class TemplateUnreadableError(DocumentGenerationError):
    """Raised when a template exists but is not a readable workbook."""


class NoDocumentsGeneratedError(DocumentGenerationError):
    """Raised when a batch run yields no documents at all."""


class UnknownDocumentError(DocumentGenerationError, KeyError):
    """Raised when a document code is not registered."""


class RegistryFrozenError(DocumentGenerationError):
    """Raised when registering into a frozen document registry."""


class SurveyParseError(DocFlowError):
    """Base error for survey upload parsing."""


class UnrecognizedFormatError(SurveyParseError):
    """Raised when the uploaded workbook is not a survey form."""


class MissingCorrelationKeyError(SurveyParseError):
    """Raised when the hidden company id cannot be read."""


class MalformedSurveyError(SurveyParseError):
    """Raised when the upload is not a readable workbook."""


class SurveyMismatchError(SurveyParseError):
    """Raised when the survey belongs to a different company."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"survey belongs to company {actual}, expected {expected}")
        self.expected = expected
        self.actual = actual


class UploadRejectedError(SurveyParseError):
    """Raised when an upload fails size or type checks."""
