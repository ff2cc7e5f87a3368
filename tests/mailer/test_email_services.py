import pytest
from unittest.mock import AsyncMock

from quotebuilder.mailer.application.services import InProcessOrderDelivery, OrderEmailService
from quotebuilder.mailer.domain.delivery import OrderEmailPayload
from quotebuilder.mailer.domain.exceptions import EmailConfigurationException, EmailSendingException
from quotebuilder.mailer.domain.sender import AbstractEmailSender

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mock_sender() -> AsyncMock:
    sender = AsyncMock(spec=AbstractEmailSender)
    sender.send_email.return_value = True
    return sender


@pytest.fixture
def payload(casement_window, lh_door) -> OrderEmailPayload:
    return OrderEmailPayload(
        user_id="user-1",
        user_email="builder@example.com",
        builder_name="Acme <Builders>",
        job_name="Smith Residence",
        items=[casement_window, lh_door],
    )


async def test_render_order_html(mock_sender, payload):
    html = OrderEmailService(mock_sender).render_order_html(payload)
    assert "Order Details" in html
    assert "Acme &lt;Builders&gt;" in html
    assert "Casement (left) 36″×48″ bronze aluminum - Measurement Given: DLO" in html
    assert "Left Hand In-Swing" in html
    assert "Threshold to match tile" in html
    assert "<td>-</td>" in html


async def test_send_order_email(mock_sender, payload):
    service = OrderEmailService(mock_sender)
    assert await service.send_order_email(payload) is True
    kwargs = mock_sender.send_email.call_args.kwargs
    assert kwargs["recipient_email"] == "builder@example.com"
    assert kwargs["subject"] == "Order Details - Smith Residence"
    assert "Smith Residence" in kwargs["html_content"]


async def test_send_order_email_reports_refusal(mock_sender, payload):
    mock_sender.send_email.return_value = False
    assert await OrderEmailService(mock_sender).send_order_email(payload) is False


async def test_send_order_email_propagates_smtp_errors(mock_sender, payload):
    mock_sender.send_email.side_effect = EmailSendingException("connexion refusée")
    with pytest.raises(EmailSendingException):
        await OrderEmailService(mock_sender).send_order_email(payload)


async def test_missing_template_is_a_configuration_error(mock_sender):
    with pytest.raises(EmailConfigurationException):
        OrderEmailService(mock_sender)._render_template("absent.html", {})


async def test_in_process_delivery(mock_sender, casement_window):
    delivery = InProcessOrderDelivery(OrderEmailService(mock_sender))
    sent = await delivery.send_order("user-1", "builder@example.com", "Acme", "Job", (casement_window,))
    assert sent is True
    assert mock_sender.send_email.call_args.kwargs["subject"] == "Order Details - Job"
