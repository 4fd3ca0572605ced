import io
from datetime import timedelta
from types import SimpleNamespace

import pytest
from starlette.datastructures import Headers, UploadFile

from conftest import NOW, FakeClauseRepo, FakeDocumentRepo, fixed_clock
from redliner.exceptions import (
    DuplicateDocumentError,
    EmptyDocumentError,
    FileTooLargeError,
    UnreadableDocumentError,
    UnsupportedFileTypeError,
)
from redliner.services.clause_service import ClauseService
from redliner.services.document_service import DocumentService
from redliner.services.extraction_service import DOCX_CONTENT_TYPE, PDF_CONTENT_TYPE

CONTRACT = (
    b"1. TERM\n\nThis Agreement starts on the Effective Date and continues for two years.\n\n"
    b"2. LIABILITY\n\nSupplier's liability shall not exceed the fees paid in the prior month."
)


def _upload(data: bytes = CONTRACT, content_type: str = "text/plain", filename: str = "contract.txt"):
    return UploadFile(io.BytesIO(data), filename=filename, headers=Headers({"content-type": content_type}))


@pytest.fixture
def repos():
    return SimpleNamespace(documents=FakeDocumentRepo(), clauses=FakeClauseRepo())


@pytest.fixture
def service(repos):
    return DocumentService(repos.documents, repos.clauses, ClauseService(), clock=fixed_clock)


async def test_upload_stores_document_and_clauses(service, repos):
    response = await service.upload_document(_upload())

    assert response.filename == "contract.txt"
    assert response.clause_count == 2
    assert response.expires_at == NOW + timedelta(hours=24)

    document = repos.documents.documents[response.id]
    assert document.raw_text == CONTRACT.decode()
    assert document.content_type == "text/plain"
    rows = await repos.clauses.get_by_document_id(response.id)
    assert [row.position for row in rows] == [0, 1]
    assert rows[0].content.startswith("1. TERM")
    assert all(row.clause_type is None for row in rows)


async def test_content_type_parameters_are_ignored(service):
    response = await service.upload_document(_upload(content_type="text/plain; charset=utf-8"))

    assert response.clause_count == 2


async def test_custom_ttl(repos):
    service = DocumentService(repos.documents, repos.clauses, ClauseService(), ttl_hours=1, clock=fixed_clock)

    response = await service.upload_document(_upload())

    assert response.expires_at == NOW + timedelta(hours=1)


async def test_unsupported_type_is_rejected(service, repos):
    with pytest.raises(UnsupportedFileTypeError):
        await service.upload_document(_upload(content_type="image/png", filename="scan.png"))
    assert repos.documents.documents == {}


async def test_oversized_file_is_rejected(repos):
    service = DocumentService(repos.documents, repos.clauses, ClauseService(), max_upload_mb=0, clock=fixed_clock)

    with pytest.raises(FileTooLargeError) as exc_info:
        await service.upload_document(_upload())
    assert exc_info.value.size_bytes == len(CONTRACT)


async def test_empty_text_is_rejected(service):
    with pytest.raises(EmptyDocumentError):
        await service.upload_document(_upload(b"  \n\n  "))


async def test_duplicate_of_live_document_is_rejected(service):
    await service.upload_document(_upload())

    with pytest.raises(DuplicateDocumentError):
        await service.upload_document(_upload(filename="copy.txt"))


async def test_duplicate_of_expired_document_replaces_it(repos):
    first = await DocumentService(
        repos.documents, repos.clauses, ClauseService(), clock=lambda: NOW - timedelta(days=2)
    ).upload_document(_upload())

    second = await DocumentService(
        repos.documents, repos.clauses, ClauseService(), clock=fixed_clock
    ).upload_document(_upload(filename="again.txt"))

    assert second.id != first.id
    assert list(repos.documents.documents) == [second.id]


@pytest.mark.parametrize(
    ("content_type", "filename"),
    [(PDF_CONTENT_TYPE, "contract.pdf"), (DOCX_CONTENT_TYPE, "contract.docx")],
)
async def test_corrupt_binary_upload_is_rejected(service, repos, content_type, filename):
    with pytest.raises(UnreadableDocumentError) as exc_info:
        await service.upload_document(_upload(b"this is not a real file", content_type, filename))

    assert exc_info.value.content_type == content_type
    assert repos.documents.documents == {}
    assert repos.clauses.rows == {}
