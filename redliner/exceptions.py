class RedlinerError(Exception):
    """Base exception for all Redliner errors."""
    pass


class DocumentNotFoundError(RedlinerError):
    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class AnalysisNotFoundError(RedlinerError):
    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"No analysis found for document {document_id}")


class DuplicateDocumentError(RedlinerError):
    def __init__(self, file_hash: str):
        self.file_hash = file_hash
        super().__init__("Document with this file already exists")


class UnsupportedFileTypeError(RedlinerError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(
            f"Unsupported file type: {content_type}. Only PDF, DOCX and plain text are accepted."
        )


class FileTooLargeError(RedlinerError):
    def __init__(self, size_bytes: int, limit_mb: int):
        self.size_bytes = size_bytes
        self.limit_mb = limit_mb
        super().__init__(f"File is {size_bytes} bytes; the limit is {limit_mb} MB")


class EmptyDocumentError(RedlinerError):
    """Raised when no text could be extracted from an uploaded file."""
    pass


class LLMProviderError(RedlinerError):
    """Raised when an LLM API call fails after all retries."""
    pass


class GenerationError(RedlinerError):
    """Raised when the recommendation generator returns unusable data."""
    pass


class ReferenceSetError(RedlinerError):
    """The gold-standard reference set is malformed. This is a configuration defect."""
    pass


class UnreadableDocumentError(RedlinerError):
    """Raised when a PDF or DOCX upload cannot be parsed."""

    def __init__(self, content_type: str, reason: str):
        self.content_type = content_type
        super().__init__(f"Could not read the uploaded {content_type} file: {reason}")
