# send_test_email.py
import sys

from app.core.config import get_settings
from app.core.email_client import send_verification_email


def main():
    settings = get_settings()
    if len(sys.argv) < 2:
        print("Usage: python send_test_email.py <recipient@example.com>")
        sys.exit(1)

    print("Testing email configuration:")
    print(f"  Server:   {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    print(f"  SSL/TLS:  {settings.SMTP_USE_SSL}/{settings.SMTP_USE_TLS}")
    print(f"  Username: {settings.SMTP_USERNAME or 'NOT SET'}")
    print(f"  From:     {settings.SMTP_FROM_EMAIL}")
    print(f"  Password: {'SET' if settings.SMTP_PASSWORD else 'NOT SET'}")

    send_verification_email(sys.argv[1], "123456")

    print("If no errors: email sent! Check your inbox.")


if __name__ == "__main__":
    main()
