from typing import Annotated

from fastapi import Depends

from quotebuilder.pdf.application.services import PDFService
from quotebuilder.pdf.config import PDFSettings, pdf_settings
from quotebuilder.pdf.domain.generator import AbstractPDFGenerator
from quotebuilder.pdf.infrastructure.reportlab_generator import ReportLabPDFGenerator


def get_pdf_settings() -> PDFSettings:
    return pdf_settings

PDFSettingsDep = Annotated[PDFSettings, Depends(get_pdf_settings)]


def get_pdf_generator(settings: PDFSettingsDep) -> AbstractPDFGenerator:
    """Générateur ReportLab configuré (logo, images, police)."""
    return ReportLabPDFGenerator(settings=settings)

PDFGeneratorDep = Annotated[AbstractPDFGenerator, Depends(get_pdf_generator)]


def get_pdf_service(pdf_generator: PDFGeneratorDep) -> PDFService:
    return PDFService(pdf_generator=pdf_generator)

PDFServiceDep = Annotated[PDFService, Depends(get_pdf_service)]
