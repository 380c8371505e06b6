"""Call page opened from a notification tap."""

import html
import re

from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["call"])

DIALABLE_CHARS = re.compile(r"[^\d+\-()\s]")


@router.get("/call", response_class=HTMLResponse)
async def call_page(to: str | None = None) -> HTMLResponse:
    """Redirect the phone to its dialer for the given number."""
    if not to:
        return HTMLResponse(content=_error_page(), status_code=status.HTTP_400_BAD_REQUEST)

    number = html.escape(clean_phone_number(to))
    return HTMLResponse(content=_call_page(number))


def clean_phone_number(phone_number: str) -> str:
    """Drop everything a tel: link cannot dial."""
    return DIALABLE_CHARS.sub("", phone_number)


def _error_page() -> str:
    return """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Call Error</title>
</head>
<body>
    <h1>❌ Error</h1>
    <p>Missing phone number parameter</p>
    <a href="/">← Back to Home</a>
</body>
</html>"""


def _call_page(number: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Calling {number}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            text-align: center;
            padding: 2rem;
            background: #f5f5f5;
        }}
        .call-container {{
            background: white;
            border-radius: 12px;
            padding: 2rem;
            box-shadow: 0 2px 10px rgba(0,0,0,0.1);
            max-width: 400px;
            margin: 0 auto;
        }}
        .phone-number {{
            font-size: 1.5rem;
            font-weight: bold;
            color: #007AFF;
            margin: 1rem 0;
        }}
        .call-button {{
            display: inline-block;
            background: #007AFF;
            color: white;
            text-decoration: none;
            padding: 1rem 2rem;
            border-radius: 8px;
            font-size: 1.1rem;
        }}
    </style>
</head>
<body>
    <div class="call-container">
        <h1>📞 Calling</h1>
        <div class="phone-number">{number}</div>
        <a href="tel:{number}" class="call-button">📱 Call Now</a>
        <p>If the call doesn't start automatically, tap the button above.</p>
        <a href="/">← Back to Home</a>
    </div>
    <script>
        window.location.href = "tel:{number}";
    </script>
</body>
</html>"""
