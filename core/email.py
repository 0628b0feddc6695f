from pathlib import Path

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
from settings import (
    FRONTEND_BASE_URL,
    MAIL_USERNAME,
    MAIL_PASSWORD,
    MAIL_FROM,
    MAIL_PORT,
    MAIL_SERVER,
    MAIL_FROM_NAME,
    MAIL_TLS,
    MAIL_SSL,
    MAIL_SUPPRESS_SEND,
    USE_CREDENTIALS,
)


conf_static = ConnectionConfig(
    MAIL_USERNAME=MAIL_USERNAME,
    MAIL_PASSWORD=MAIL_PASSWORD,
    MAIL_FROM=MAIL_FROM,
    MAIL_PORT=MAIL_PORT,
    MAIL_SERVER=MAIL_SERVER,
    MAIL_FROM_NAME=MAIL_FROM_NAME,
    MAIL_STARTTLS=MAIL_TLS,
    MAIL_SSL_TLS=MAIL_SSL,
    USE_CREDENTIALS=USE_CREDENTIALS,
    SUPPRESS_SEND=1 if MAIL_SUPPRESS_SEND else 0,
    TEMPLATE_FOLDER=Path(__file__).parent / "mail_templates",
)


async def try_send_email(recipient: str, name: str = "User"):
    """
    Send a test email, used by the cli to check the mail configuration
    """
    fm = FastMail(conf_static)
    await fm.send_message(
        message=MessageSchema(
            subject="Test email",
            recipients=[recipient],
            template_body={"name": name},
            subtype="html",
        ),
        template_name="test_email.html",
    )


async def send_welcome_email(recipient: str, name: str, password: str, role: str):
    fm = FastMail(conf_static)
    await fm.send_message(
        message=MessageSchema(
            subject="Welcome to Volunteer Hub",
            recipients=[recipient],
            template_body={
                "name": name,
                "email": recipient,
                "password": password,
                "role": role,
                "login_link": f"{FRONTEND_BASE_URL}/auth/login",
            },
            subtype="html",
        ),
        template_name="welcome.html",
    )


async def send_reset_password_email(recipient: str, reset_link: str):
    fm = FastMail(conf_static)
    await fm.send_message(
        message=MessageSchema(
            subject="Reset your password",
            recipients=[recipient],
            template_body={"reset_link": reset_link},
            subtype="html",
        ),
        template_name="reset_password.html",
    )


async def send_bulk_email(recipients: list[str], subject: str, body: str):
    """
    Send one message to many recipients, addresses go to bcc so that
    recipients do not see each other
    """
    fm = FastMail(conf_static)
    await fm.send_message(
        message=MessageSchema(
            subject=subject,
            recipients=[MAIL_FROM],
            bcc=recipients,
            template_body={"subject": subject, "body": body},
            subtype="html",
        ),
        template_name="bulk_message.html",
    )
