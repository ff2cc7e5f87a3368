import pytest
from unittest.mock import AsyncMock

from quotebuilder.pdf.application.services import PDFService
from quotebuilder.pdf.domain.exceptions import PDFGenerationException
from quotebuilder.pdf.domain.generator import AbstractPDFGenerator, OrderDocument, RenderedDocument

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mock_generator() -> AsyncMock:
    generator = AsyncMock(spec=AbstractPDFGenerator)
    generator.generate_order_pdf.return_value = RenderedDocument(
        content=b"%PDF-1.4 test", filename="Smith_Residence_order.pdf", page_count=1
    )
    return generator


async def test_builds_order_document(mock_generator, casement_window, lh_door):
    service = PDFService(pdf_generator=mock_generator)
    document = await service.generate_order_pdf(
        builder_name="Acme Builders",
        job_name="Smith Residence",
        items=(casement_window, lh_door),
        requester_email="builder@example.com",
        quote_number=4,
    )

    assert document.filename == "Smith_Residence_order.pdf"
    order = mock_generator.generate_order_pdf.call_args.args[0]
    assert isinstance(order, OrderDocument)
    assert order.items == [casement_window, lh_door]
    assert order.requester_email == "builder@example.com"
    assert order.quote_number == 4


async def test_generation_error_is_propagated(mock_generator, casement_window):
    mock_generator.generate_order_pdf.side_effect = PDFGenerationException("police absente")
    service = PDFService(pdf_generator=mock_generator)
    with pytest.raises(PDFGenerationException):
        await service.generate_order_pdf("Acme", "Job", [casement_window])


async def test_unexpected_error_is_wrapped(mock_generator, casement_window):
    mock_generator.generate_order_pdf.side_effect = RuntimeError("disk full")
    service = PDFService(pdf_generator=mock_generator)
    with pytest.raises(PDFGenerationException) as exc_info:
        await service.generate_order_pdf("Acme", "Job", [casement_window])
    assert isinstance(exc_info.value.original_exception, RuntimeError)
