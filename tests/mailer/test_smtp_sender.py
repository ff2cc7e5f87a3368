import smtplib

import pytest

from quotebuilder.mailer.config import EmailSettings
from quotebuilder.mailer.domain.exceptions import EmailConfigurationException, EmailSendingException
from quotebuilder.mailer.infrastructure.smtp_sender import SmtpEmailSender

pytestmark = pytest.mark.asyncio

SMTP_PATH = "quotebuilder.mailer.infrastructure.smtp_sender.smtplib.SMTP"


@pytest.fixture
def smtp_settings() -> EmailSettings:
    return EmailSettings(
        SMTP_HOST="smtp.test",
        SMTP_PORT=587,
        SMTP_USER="mailer",
        SMTP_PASSWORD="secret",
        SENDER_EMAIL="orders@bradley.build",
        DEFAULT_FROM_NAME="Bradley Orders",
    )


@pytest.fixture
def mock_smtp(mocker):
    return mocker.patch(SMTP_PATH)


def _server(mock_smtp):
    return mock_smtp.return_value.__enter__.return_value


async def test_incomplete_configuration_raises():
    with pytest.raises(EmailConfigurationException):
        SmtpEmailSender(settings=EmailSettings(SMTP_HOST=None, SMTP_USER=None, SMTP_PASSWORD=None))


async def test_send_email_success(smtp_settings, mock_smtp):
    sender = SmtpEmailSender(settings=smtp_settings)
    assert await sender.send_email("builder@example.com", "Order Details - Job", "<p>hi</p>") is True

    mock_smtp.assert_called_once_with("smtp.test", 587)
    server = _server(mock_smtp)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("mailer", "secret")
    from_addr, to_addrs, message = server.sendmail.call_args.args
    assert from_addr == "orders@bradley.build"
    assert to_addrs == ["builder@example.com"]
    assert "From: Bradley Orders <orders@bradley.build>" in message


async def test_refused_recipient_returns_false(smtp_settings, mock_smtp):
    _server(mock_smtp).sendmail.side_effect = smtplib.SMTPRecipientsRefused(
        {"nobody@example.com": (550, b"No such user")}
    )
    sender = SmtpEmailSender(settings=smtp_settings)
    assert await sender.send_email("nobody@example.com", "Subject", "<p>x</p>") is False


async def test_authentication_error_raises(smtp_settings, mock_smtp):
    _server(mock_smtp).login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
    sender = SmtpEmailSender(settings=smtp_settings)
    with pytest.raises(EmailSendingException):
        await sender.send_email("builder@example.com", "Subject", "<p>x</p>")


async def test_connection_error_raises(smtp_settings, mock_smtp):
    mock_smtp.side_effect = ConnectionRefusedError("refused")
    sender = SmtpEmailSender(settings=smtp_settings)
    with pytest.raises(EmailSendingException):
        await sender.send_email("builder@example.com", "Subject", "<p>x</p>")
